"""Registry of candidate components for one program.

Records are keyed by the span of their defining node. Confidence only ever
rises, except that a ban (``BANNED``) is final: once a node is known not to
be a component, later evidence cannot revive it.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from proplint.analysis.nodes import Node, NodeKey, node_key
from proplint.core.errors import InternalError


class Confidence(IntEnum):
    BANNED = 0
    MAYBE = 1
    CONFIRMED = 2


def merge_confidence(current: Confidence, incoming: Confidence) -> Confidence:
    if current == Confidence.BANNED or incoming == Confidence.BANNED:
        return Confidence.BANNED
    return max(current, incoming)


class Role(Enum):
    """Which part of a factory component a usage sits in."""

    RENDER = "render"
    COMPUTED = "computed"
    HANDLERS = "handlers"


@dataclass(frozen=True, slots=True)
class UsedProp:
    """One observed read of a prop.

    ``path`` is the full dotted path (``("a", "b")`` for ``props.a.b``);
    ``name`` its last segment. ``pattern_key`` marks reads that came from a
    destructuring pattern, which stay with the function that destructures.
    """

    name: str
    path: tuple[str, ...]
    site: Node
    role: Role = Role.RENDER
    pattern_key: bool = False


@dataclass(eq=False)
class Component:
    node: Node
    confidence: Confidence
    used_prop_types: list[UsedProp] = field(default_factory=list)
    declared_prop_types: dict[str, Any] | None = None
    ignore_props_validation: bool = False
    computed_props: set[str] = field(default_factory=set)
    handlers_props: set[str] = field(default_factory=set)


_PATCHABLE = frozenset(
    f.name for f in dataclasses.fields(Component) if f.name not in ("node", "confidence")
)


class ComponentRegistry:
    """Candidate components of one program walk."""

    def __init__(self) -> None:
        self._records: dict[NodeKey, Component] = {}

    def add(self, node: Node, confidence: Confidence) -> Component:
        key = node_key(node)
        record = self._records.get(key)
        if record is None:
            record = Component(node=node, confidence=confidence)
            self._records[key] = record
        else:
            record.confidence = merge_confidence(record.confidence, confidence)
        return record

    def get(self, node: Node) -> Component | None:
        """Record of ``node`` unless it was banned."""
        record = self._records.get(node_key(node))
        if record is None or record.confidence == Confidence.BANNED:
            return None
        return record

    def owner(self, node: Node) -> Component | None:
        """Nearest record at or above ``node``, banned records included."""
        current: Node | None = node
        while current is not None:
            record = self._records.get(node_key(current))
            if record is not None:
                return record
            current = current.parent
        return None

    def set(self, node: Node, **patch: Any) -> Component | None:
        """Patch the owning record of ``node``; no-op when nothing owns it."""
        unknown = set(patch) - _PATCHABLE
        if unknown:
            raise InternalError.unexpected(f"Unknown component fields: {sorted(unknown)}")
        record = self.owner(node)
        if record is None:
            return None
        for name, value in patch.items():
            setattr(record, name, value)
        return record

    def list(self) -> dict[NodeKey, Component]:
        """Confirmed components, with the usage of lesser records folded in.

        Usage recorded on a non-confirmed record is credited to the nearest
        confirmed ancestor (not past a decorator), except destructured keys,
        which belong to the function that destructures them.
        """
        confirmed: dict[NodeKey, Component] = {
            key: dataclasses.replace(record, used_prop_types=list(record.used_prop_types))
            for key, record in self._records.items()
            if record.confidence == Confidence.CONFIRMED
        }
        for record in self._records.values():
            if record.confidence == Confidence.CONFIRMED or not record.used_prop_types:
                continue
            target = self._confirmed_ancestor(record.node, confirmed)
            if target is None:
                continue
            target.used_prop_types.extend(u for u in record.used_prop_types if not u.pattern_key)
        return confirmed

    def _confirmed_ancestor(
        self, node: Node, confirmed: dict[NodeKey, Component]
    ) -> Component | None:
        current = node.parent
        while current is not None:
            if current.type == "decorator":
                return None
            record = confirmed.get(node_key(current))
            if record is not None:
                return record
            current = current.parent
        return None

    def length(self) -> int:
        return sum(1 for r in self._records.values() if r.confidence == Confidence.CONFIRMED)

    def records(self) -> list[Component]:
        """All records in registration order, including banned ones."""
        return list(self._records.values())
