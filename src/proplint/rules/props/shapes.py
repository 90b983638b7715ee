"""Declared prop shapes and the coverage check.

A declaration maps each top-level prop name to a ``Shape``:

- ``Leaf``: declared, nothing more is known (``PropTypes.string``).
- ``ShapeOf``: an object with known keys (``PropTypes.shape({...})``).
- ``ObjectOf``: any key, each value of the wildcard shape
  (``arrayOf``/``objectOf``, ``T[]``).
- ``UnionOf``: any branch may cover the rest of a path (``oneOfType``).
- ``Instance``: an opaque class instance; every sub-path is covered.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

ANY_KEY = "__ANY_KEY__"
COMPUTED_PROP = "__COMPUTED_PROP__"
HANDLERS_PROP = "__HANDLERS_PROP__"

OPAQUE_SEGMENTS = frozenset({COMPUTED_PROP, HANDLERS_PROP})


@dataclass(frozen=True, slots=True)
class Leaf:
    pass


@dataclass(slots=True)
class ShapeOf:
    children: dict[str, Shape] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ObjectOf:
    wildcard: Shape


@dataclass(frozen=True, slots=True)
class UnionOf:
    branches: tuple[Shape, ...]


@dataclass(frozen=True, slots=True)
class Instance:
    pass


Shape = Leaf | ShapeOf | ObjectOf | UnionOf | Instance

LEAF = Leaf()
INSTANCE = Instance()


def children_of(shape: Shape) -> dict[str, Shape] | None:
    """Key mapping of a structured shape; None for shapes without keys."""
    if isinstance(shape, ShapeOf):
        return shape.children
    if isinstance(shape, ObjectOf):
        return {ANY_KEY: shape.wildcard}
    return None


def make_union(branches: Iterable[Shape]) -> Shape:
    """Union of alternatives, collapsed to ``Leaf`` when nothing is checkable."""
    collected = list(branches)
    if any(isinstance(b, Instance) for b in collected):
        return LEAF
    if not any(not isinstance(b, Leaf) for b in collected):
        return LEAF
    return UnionOf(tuple(collected))


def is_covered(declared: Mapping[str, Shape], path: Sequence[str]) -> bool:
    """Whether a used access path is covered by a declaration mapping."""
    mapping: Mapping[str, Shape] | None = declared
    for i, key in enumerate(path):
        shape = None
        if mapping is not None:
            shape = mapping.get(key) or mapping.get(ANY_KEY)
        if shape is None:
            # Dynamic keys cannot be checked any further
            return key in OPAQUE_SEGMENTS
        if isinstance(shape, (Leaf, Instance)):
            return True
        if isinstance(shape, UnionOf):
            if i + 1 >= len(path):
                return True
            rest = path[i:]
            return any(is_covered({key: branch}, rest) for branch in shape.branches)
        mapping = children_of(shape)
    return True


def render_path(path: Sequence[str]) -> str:
    """Dotted path for messages, opaque segments shown as ``[]``."""
    text = ".".join(path)
    for segment in OPAQUE_SEGMENTS:
        text = text.replace(f".{segment}", "[]")
    return text
