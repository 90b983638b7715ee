"""Extraction of used prop paths.

Turns a usage site (``this.props.a.b``, ``props['x']``, a destructured
parameter, ``const {a} = this.props``) into ``UsedProp`` entries appended to
the component record that owns the site.
"""

from __future__ import annotations

import re

from proplint.analysis.nodes import (
    ACCESS_TYPES,
    FUNCTION_TYPES,
    PATTERN_KEY_TYPES,
    Node,
    access_parent,
    function_params,
    is_computed_entry,
    is_function,
    member_property,
    member_property_name,
    node_text,
    owning_property,
    param_pattern,
    pattern_entries,
    pattern_key_name,
    pattern_value,
    string_value,
    unwrap,
)
from proplint.analysis.traversal import iter_subtree
from proplint.core.errors import InternalError
from proplint.rules.components.detector import ComponentDetector
from proplint.rules.components.registry import Role, UsedProp
from proplint.rules.props.shapes import COMPUTED_PROP, HANDLERS_PROP, OPAQUE_SEGMENTS

DIRECT_PROPS_RE = re.compile(r"^props\s*(\.|\[)")

# Inherited members of every object; reading them says nothing about props
OBJECT_PROTOTYPE_MEMBERS = frozenset(
    {
        "constructor",
        "hasOwnProperty",
        "isPrototypeOf",
        "propertyIsEnumerable",
        "toLocaleString",
        "toString",
        "valueOf",
        "__defineGetter__",
        "__defineSetter__",
        "__lookupGetter__",
        "__lookupSetter__",
        "__proto__",
    }
)

# Framework-provided argument of computed functions
_COMPUTED_RESERVED = "styler"


class UsageExtractor:
    """Records prop reads against the components that own them."""

    def __init__(self, detector: ComponentDetector) -> None:
        self.detector = detector
        self.roles = detector.roles
        self.registry = detector.registry

    # =========================================================================
    # Factory sub-blocks
    # =========================================================================

    def _sub_block_declaration(self, node: Node, key: str) -> bool:
        """``node`` is the object literal of a registered component's ``key`` block."""
        prop = owning_property(node)
        return prop is not None and prop[0] == key and self.registry.get(prop[1]) is not None

    def is_computed_declaration(self, node: Node) -> bool:
        return self._sub_block_declaration(node, "computed")

    def is_handlers_declaration(self, node: Node) -> bool:
        return self._sub_block_declaration(node, "handlers")

    def _sub_block_function(self, fn: Node, key: str) -> bool:
        prop = owning_property(fn)
        if prop is None or not self._sub_block_declaration(prop[1], key):
            return False
        outer = owning_property(prop[1])
        return outer is not None and self.roles.is_factory_component(outer[1])

    def is_computed_function(self, fn: Node) -> bool:
        return self._sub_block_function(fn, "computed")

    def is_handler_function(self, fn: Node) -> bool:
        return self._sub_block_function(fn, "handlers")

    def is_render_function(self, fn: Node) -> bool:
        prop = owning_property(fn)
        return prop is not None and prop[0] == "render" and self.roles.is_factory_component(prop[1])

    def role_of(self, site: Node) -> Role:
        """Sub-block role of the nearest enclosing factory member function."""
        current: Node | None = site
        while current is not None:
            if is_function(current):
                if self.is_handler_function(current):
                    return Role.HANDLERS
                if self.is_computed_function(current):
                    return Role.COMPUTED
                prop = owning_property(current)
                if prop is not None and self.roles.is_factory_component(prop[1]):
                    return Role.RENDER
            current = current.parent
        return Role.RENDER

    # =========================================================================
    # Usage sites
    # =========================================================================

    def is_prop_types_usage(self, node: Node) -> bool:
        """``this.props`` inside a class-style component, or any ``props.x``."""
        obj = unwrap(node.child_by_field_name("object"))
        if obj is None:
            return False
        if obj.type == "this" and member_property_name(node) == "props":
            return (
                self.detector.get_parent_modern_class(node) is not None
                or self.detector.get_parent_legacy(node) is not None
            )
        return obj.type == "identifier" and node_text(obj) == "props"

    def property_name(self, node: Node) -> str | None:
        """Prop name read by a ``props`` access, a sentinel for dynamic keys."""
        is_direct = DIRECT_PROPS_RE.match(node_text(node)) is not None
        class_owner = self.detector.get_parent_modern_class(node) or self.detector.get_parent_legacy(node)
        if class_owner is not None and self.roles.is_factory_component(class_owner):
            class_owner = None
        if is_direct and class_owner is not None and not self.detector.in_constructor(node):
            return None

        access = node if is_direct else access_parent(node)
        if access is None:
            return None
        if access.type == "member_expression":
            return member_property_name(access)

        index = unwrap(access.child_by_field_name("index"))
        if index is None or index.type in ACCESS_TYPES:
            return None
        if index.type == "string":
            return string_value(index)
        if self.role_of(access) == Role.HANDLERS:
            return HANDLERS_PROP
        return COMPUTED_PROP

    def mark_used(self, node: Node, parent_names: tuple[str, ...] = ()) -> None:
        """Record the props read at ``node``.

        Accepts member/subscript accesses, functions (destructured
        parameters) and variable declarators (destructuring assignments).
        """
        kind = node.type
        entries: list[UsedProp] = []

        if kind in ACCESS_TYPES:
            name = self.property_name(node)
            if name:
                all_names = (*parent_names, name)
                parent = access_parent(node)
                if parent is not None:
                    self.mark_used(parent, all_names)
                if name not in OPAQUE_SEGMENTS and name not in OBJECT_PROTOTYPE_MEMBERS:
                    entries.append(self._direct_entry(node, name, all_names))
            else:
                declarator = node.parent
                if declarator is not None and declarator.type == "variable_declarator":
                    properties = pattern_entries(declarator.child_by_field_name("name"))
                    if properties and pattern_key_name(properties[0]):
                        entries = self._destructured_entries(node, properties)
        elif kind in FUNCTION_TYPES:
            entries = self._destructured_entries(node, self._param_properties(node))
        elif kind == "variable_declarator":
            entries = self._destructured_entries(node, self._declarator_properties(node))
        else:
            raise InternalError.unhandled_node(kind, "mark_used")

        if not entries:
            return
        owner = self.registry.owner(node)
        if owner is None:
            return
        self.registry.set(node, used_prop_types=[*owner.used_prop_types, *entries])

    def _direct_entry(self, node: Node, name: str, all_names: tuple[str, ...]) -> UsedProp:
        is_direct = DIRECT_PROPS_RE.match(node_text(node)) is not None
        access = node if is_direct else access_parent(node)
        site = member_property(access) if access is not None else node
        return UsedProp(
            name=name,
            path=all_names,
            site=site or node,
            role=self.role_of(node),
        )

    def _param_properties(self, fn: Node) -> list[Node]:
        index = 1 if self.is_handler_function(fn) else 0
        is_computed = self.is_computed_function(fn)
        params = function_params(fn)
        if len(params) <= index:
            return []
        properties: list[Node] = []
        for entry in pattern_entries(param_pattern(params[index])):
            if entry.type == "rest_pattern":
                spread_name = pattern_key_name(entry)
                if spread_name is None:
                    continue
                properties.extend(
                    iter_subtree(fn, lambda n, s=spread_name: _reads_from(n, s))
                )
            elif is_computed and pattern_key_name(entry) == _COMPUTED_RESERVED:
                continue
            else:
                properties.append(entry)
        return properties

    def _declarator_properties(self, node: Node) -> list[Node]:
        pattern = node.child_by_field_name("name")
        init = unwrap(node.child_by_field_name("value"))
        for entry in pattern_entries(pattern):
            nested = pattern_value(entry)
            if entry.type == "pair_pattern" and pattern_key_name(entry) == "props" and (
                nested is not None and nested.type == "object_pattern"
            ):
                return pattern_entries(nested)
            if init is not None and init.type == "identifier" and node_text(init) == "props" and (
                self.detector.get_parent_stateless(node) is not None or self.detector.in_constructor(node)
            ):
                return pattern_entries(pattern)
        return []

    def _destructured_entries(self, node: Node, properties: list[Node]) -> list[UsedProp]:
        prefix: list[str] = []
        current = node
        while current.type == "member_expression":
            segment = member_property_name(current)
            if segment is None or segment == "props":
                break
            prefix.insert(0, segment)
            current = unwrap(current.child_by_field_name("object"))

        entries = []
        for prop in properties:
            if prop.type == "rest_pattern" or is_computed_entry(prop):
                continue
            if prop.type in ACCESS_TYPES:
                name = self._scanned_name(prop)
            else:
                name = pattern_key_name(prop)
            if not name:
                continue
            entries.append(
                UsedProp(
                    name=name,
                    path=(*prefix, name),
                    site=prop,
                    role=self.role_of(prop),
                    pattern_key=prop.type in PATTERN_KEY_TYPES,
                )
            )
        return entries

    def _scanned_name(self, access: Node) -> str | None:
        if access.type == "member_expression":
            return member_property_name(access)
        index = unwrap(access.child_by_field_name("index"))
        if index is not None and index.type == "string":
            return string_value(index)
        return None


def _reads_from(node: Node, name: str) -> bool:
    """``node`` reads a property off the identifier ``name``."""
    if node.type not in ACCESS_TYPES:
        return False
    obj = unwrap(node.child_by_field_name("object"))
    return obj is not None and obj.type == "identifier" and node_text(obj) == name
