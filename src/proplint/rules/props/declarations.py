"""Building declared prop shapes from validator calls and type annotations."""

from __future__ import annotations

from collections import ChainMap
from collections.abc import Iterable

from proplint.analysis.nodes import (
    Node,
    call_arguments,
    callee,
    callee_name,
    entry_key,
    entry_value,
    member_property_name,
    named,
    node_text,
    object_entries,
    property_key_name,
    unwrap,
)
from proplint.rules.props.shapes import (
    ANY_KEY,
    INSTANCE,
    LEAF,
    ObjectOf,
    Shape,
    ShapeOf,
    make_union,
)

_ARRAY_GENERICS = frozenset({"Array", "ReadonlyArray", "Set", "ReadonlySet"})
_ANNOTATION_WRAPPERS = frozenset(
    {"type_annotation", "opting_type_annotation", "omitting_type_annotation", "parenthesized_type"}
)


class TypeAliasScope:
    """Type aliases and interfaces visible at the current point of the walk.

    Each block pushes a child frame on entry and pops it on exit.
    """

    def __init__(self) -> None:
        self._types: ChainMap[str, Node] = ChainMap()

    def reset(self) -> None:
        self._types = ChainMap()

    def push(self) -> None:
        self._types = self._types.new_child()

    def pop(self) -> None:
        self._types = self._types.parents

    def define(self, name: str, node: Node) -> None:
        self._types[name] = node

    def lookup(self, name: str) -> Node | None:
        return self._types.get(name)


def unwrap_annotation(node: Node | None) -> Node | None:
    while node is not None and node.type in _ANNOTATION_WRAPPERS:
        children = named(node)
        node = children[-1] if children else None
    return node


class DeclarationBuilder:
    """Turns declaration subtrees into ``Shape`` trees."""

    def __init__(self, custom_validators: Iterable[str], aliases: TypeAliasScope) -> None:
        self.custom_validators = frozenset(custom_validators)
        self.aliases = aliases
        self._resolving: set[str] = set()

    # =========================================================================
    # Validator calls
    # =========================================================================

    def from_validator(self, value: Node | None) -> Shape:
        value = unwrap(value)
        if value is None:
            return LEAF
        if value.type == "call_expression" and self._is_custom_validator(value):
            return LEAF
        if member_property_name(value) == "isRequired":
            value = unwrap(value.child_by_field_name("object"))
            if value is None:
                return LEAF
        if value.type != "call_expression":
            return LEAF

        arguments = call_arguments(value)
        if not arguments:
            return LEAF
        argument = unwrap(arguments[0])
        call_name = callee_name(value)

        if call_name == "shape":
            if argument.type != "object":
                return LEAF
            return ShapeOf(self._object_children(argument))
        if call_name in ("arrayOf", "objectOf"):
            return ObjectOf(self.from_validator(argument))
        if call_name == "oneOfType":
            if argument.type != "array":
                return LEAF
            elements = named(argument)
            if not elements:
                return LEAF
            return make_union(self.from_validator(e) for e in elements)
        if call_name == "instanceOf":
            return INSTANCE
        return LEAF

    def _is_custom_validator(self, call: Node) -> bool:
        fn = unwrap(callee(call))
        if fn is None or fn.type != "member_expression":
            return False
        obj = fn.child_by_field_name("object")
        return obj is not None and obj.type == "identifier" and node_text(obj) in self.custom_validators

    def _object_children(self, obj: Node) -> dict[str, Shape]:
        children: dict[str, Shape] = {}
        for entry in object_entries(obj):
            key = entry_key(entry)
            if key is None:
                # Spread or computed key: the shape cannot be enumerated
                children[ANY_KEY] = LEAF
                continue
            value = entry_value(entry)
            children[key] = self.from_validator(value) if entry.type == "pair" else LEAF
        return children

    # =========================================================================
    # Type annotations
    # =========================================================================

    def from_annotation(self, annotation: Node | None) -> Shape:
        annotation = unwrap_annotation(annotation)
        if annotation is None:
            return LEAF
        kind = annotation.type

        if kind == "type_identifier":
            return self._from_alias(node_text(annotation))
        if kind == "generic_type":
            name = node_text(annotation.child_by_field_name("name"))
            arguments = named(annotation.child_by_field_name("type_arguments"))
            if name in _ARRAY_GENERICS and arguments:
                return ObjectOf(self.from_annotation(arguments[0]))
            if name == "Record" and len(arguments) == 2:
                return ObjectOf(self.from_annotation(arguments[1]))
            return self._from_alias(name)
        if kind in ("object_type", "interface_body"):
            return ShapeOf(self.annotation_members(annotation))
        if kind == "union_type":
            return make_union(self.from_annotation(b) for b in _union_branches(annotation))
        if kind == "array_type":
            return ObjectOf(self.from_annotation(annotation.named_children[0]))
        if kind == "readonly_type":
            return self.from_annotation(annotation.named_children[-1])
        return LEAF

    def annotation_members(self, body: Node) -> dict[str, Shape]:
        """Top-level members of an object type or interface body."""
        members: dict[str, Shape] = {}
        for member in named(body):
            if member.type == "property_signature":
                key = property_key_name(member.child_by_field_name("name"))
                if key is None:
                    members[ANY_KEY] = LEAF
                    continue
                members[key] = self.from_annotation(member.child_by_field_name("type"))
            elif member.type == "index_signature":
                value_type = member.child_by_field_name("type")
                if value_type is None:
                    annotations = [c for c in named(member) if c.type.endswith("type_annotation")]
                    value_type = annotations[-1] if annotations else None
                members[ANY_KEY] = self.from_annotation(value_type)
            elif member.type == "method_signature":
                key = property_key_name(member.child_by_field_name("name"))
                if key is not None:
                    members[key] = LEAF
        return members

    def _from_alias(self, name: str) -> Shape:
        target = self.aliases.lookup(name)
        if target is None or name in self._resolving:
            return LEAF
        self._resolving.add(name)
        try:
            return self.from_annotation(target)
        finally:
            self._resolving.discard(name)

    def resolve_annotation(self, node: Node) -> Node | None:
        """The annotation carried by ``node``, with wrappers and aliases looked through."""
        annotation = node.child_by_field_name("type") if node.type != "type_annotation" else node
        annotation = unwrap_annotation(annotation)
        if annotation is None:
            return None
        name = None
        if annotation.type == "type_identifier":
            name = node_text(annotation)
        elif annotation.type == "generic_type":
            name = node_text(annotation.child_by_field_name("name"))
        if name is not None:
            target = self.aliases.lookup(name)
            if target is not None:
                return unwrap_annotation(target)
        return annotation


def _union_branches(node: Node) -> list[Node]:
    branches: list[Node] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "union_type":
            stack.extend(reversed(named(current)))
        else:
            branches.append(current)
    return branches
