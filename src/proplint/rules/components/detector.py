"""Component detection visitor.

``ComponentDetector.enter`` is called for every node of a program, in
source order, before any rule sees that node. It grows the registry with
candidate components and their confidence, and offers the ownership
queries rules need (``get_parent_component``, ``get_related_component``).
"""

from __future__ import annotations

from collections.abc import Callable

from proplint.analysis.doc import pragma_from_comment
from proplint.analysis.nodes import (
    CLASS_TYPES,
    FIELD_TYPES,
    FUNCTION_TYPES,
    Node,
    access_parent,
    call_arguments,
    entry_key,
    entry_value,
    is_call_operand,
    is_class_method,
    is_concise_arrow,
    is_function,
    is_inline_jsx_callback,
    is_same,
    member_property_name,
    method_name,
    node_text,
    object_entries,
    owning_property,
    unwrap,
)
from proplint.analysis.scope import DefinitionKind, ScopeKind, ScopeManager
from proplint.core.logging import get_logger
from proplint.rules.components.predicates import NodeRoles
from proplint.rules.components.registry import Component, ComponentRegistry, Confidence

log = get_logger(__name__)

_RELATED_DEFINITION_KINDS = (DefinitionKind.CLASS, DefinitionKind.FUNCTION, DefinitionKind.VARIABLE)


class ComponentDetector:
    """Single-pass classifier feeding a ``ComponentRegistry``."""

    def __init__(
        self,
        roles: NodeRoles,
        scopes: ScopeManager,
        registry: ComponentRegistry | None = None,
    ) -> None:
        self.roles = roles
        self.scopes = scopes
        self.registry = registry or ComponentRegistry()
        self._handlers: dict[str, Callable[[Node], None]] = {}
        for kind in CLASS_TYPES:
            self._handlers[kind] = self._on_class
        for kind in FIELD_TYPES:
            self._handlers[kind] = self._on_class_field
        for kind in FUNCTION_TYPES:
            self._handlers[kind] = self._on_function
        self._handlers["object"] = self._on_object
        self._handlers["this"] = self._on_this
        self._handlers["comment"] = self._on_comment
        self._handlers["return_statement"] = self._on_return

    def enter(self, node: Node) -> None:
        handler = self._handlers.get(node.type)
        if handler is not None:
            handler(node)

    # =========================================================================
    # Visitors
    # =========================================================================

    def _on_class(self, node: Node) -> None:
        if self.roles.is_modern_class_component(node):
            self.registry.add(node, Confidence.CONFIRMED)

    def _on_class_field(self, node: Node) -> None:
        component = self.get_parent_component(node)
        if component is not None:
            self.registry.add(component, Confidence.CONFIRMED)

    def _on_object(self, node: Node) -> None:
        if self.roles.is_higher_order_factory(node):
            log.debug("hoc_skipped", line=node.start_point[0] + 1)
            return
        if self.roles.is_legacy_class_component(node) or self.roles.is_factory_component(node):
            self.registry.add(node, Confidence.CONFIRMED)

    def _on_function(self, node: Node) -> None:
        component = self.get_parent_component(node)
        if component is None or is_inline_jsx_callback(component):
            self.registry.add(node, Confidence.BANNED)
            return
        if is_concise_arrow(component) and self.roles.returns_markup(component):
            self.registry.add(component, Confidence.CONFIRMED)
        else:
            self.registry.add(component, Confidence.MAYBE)

    def _on_this(self, node: Node) -> None:
        component = self.get_parent_component(node)
        if component is None or not is_function(component):
            return
        if access_parent(node) is None:
            return
        # Arbitrary this.x reads rule out a plain function component
        self.registry.add(node, Confidence.BANNED)

    def _on_comment(self, node: Node) -> None:
        pragma = pragma_from_comment(node_text(node))
        if pragma is not None and pragma != self.roles.pragma.value:
            log.debug("pragma_changed", pragma=pragma, line=node.start_point[0] + 1)
            self.roles.pragma.value = pragma

    def _on_return(self, node: Node) -> None:
        if not self.roles.returns_markup(node):
            return
        component = self.get_parent_component(node)
        if component is None:
            self.registry.add(self.scopes.scope_of(node).block, Confidence.MAYBE)
        else:
            self.registry.add(component, Confidence.CONFIRMED)

    # =========================================================================
    # Ownership queries
    # =========================================================================

    def get_parent_component(self, node: Node) -> Node | None:
        return (
            self.get_parent_modern_class(node)
            or self.get_parent_legacy(node)
            or self.get_parent_stateless(node)
        )

    def get_parent_modern_class(self, node: Node) -> Node | None:
        scope = self.scopes.scope_of(node)
        while scope is not None and scope.kind != ScopeKind.CLASS:
            scope = scope.upper
        if scope is None or not self.roles.is_modern_class_component(scope.block):
            return None
        return scope.block

    def get_parent_legacy(self, node: Node) -> Node | None:
        """Nearest enclosing createClass or factory object literal."""
        scope = self.scopes.scope_of(node)
        while scope is not None:
            prop = owning_property(scope.block)
            if prop is not None:
                container = prop[1]
                if self.roles.is_legacy_class_component(container) or self.roles.is_factory_component(
                    container
                ):
                    return container
            scope = scope.upper
        return None

    def get_parent_stateless(self, node: Node) -> Node | None:
        scope = self.scopes.scope_of(node)
        while scope is not None:
            block = scope.block
            if block.type in CLASS_TYPES or is_call_operand(block):
                return None
            if is_function(block) and not is_class_method(block):
                factory = self.roles.sub_block_factory(block)
                return factory if factory is not None else block
            scope = scope.upper
        return None

    def in_constructor(self, node: Node) -> bool:
        scope = self.scopes.scope_of(node)
        while scope is not None:
            block = scope.block
            if is_class_method(block) and method_name(block) == "constructor":
                return True
            scope = scope.upper
        return False

    def get_related_component(self, node: Node) -> Component | None:
        """Resolve ``Foo.Bar.propTypes`` back to the node defining ``Foo.Bar``."""
        path: list[str] = []
        current: Node | None = node
        while current is not None and current.type == "member_expression":
            prop_name = member_property_name(current)
            if prop_name is not None:
                path.append(prop_name)
            obj = unwrap(current.child_by_field_name("object"))
            if obj is not None and obj.type == "identifier":
                path.append(node_text(obj))
            current = obj
        if not path:
            return None
        path.reverse()
        component_name = ".".join(path[:-1])
        variable_name = path.pop(0)

        variable = self.scopes.find_variable(node, variable_name)
        if variable is None:
            return None

        component_node: Node | None = None
        for reference in variable.references:
            ref = reference.identifier
            parent = ref.parent
            if parent is not None and parent.type == "member_expression" and is_same(
                parent.child_by_field_name("object"), ref
            ):
                ref = parent
            if node_text(ref) != component_name:
                continue
            outer = ref.parent
            if ref.type == "member_expression":
                if outer is not None and outer.type == "assignment_expression" and is_same(
                    outer.child_by_field_name("left"), ref
                ):
                    component_node = outer.child_by_field_name("right")
            elif outer is not None and outer.type == "variable_declarator":
                component_node = outer.child_by_field_name("value")
            break

        if component_node is None:
            component_node = self._definition_target(variable)
            if component_node is None:
                return None
            for segment in path:
                if component_node.type != "object":
                    continue
                entry = next((e for e in object_entries(component_node) if entry_key(e) == segment), None)
                if entry is None:
                    return None
                component_node = entry_value(entry)
                if component_node is None:
                    return None

        component_node = self._factory_argument(unwrap(component_node))
        return self.registry.add(component_node, Confidence.MAYBE)

    def _definition_target(self, variable) -> Node | None:
        for definition in variable.definitions:
            if definition.kind not in _RELATED_DEFINITION_KINDS:
                continue
            if definition.node.type == "variable_declarator":
                return definition.node.child_by_field_name("value") or definition.node
            return definition.node
        return None

    def _factory_argument(self, node: Node) -> Node:
        """``kind({...})`` resolves to its object literal, which is the component."""
        if node.type != "call_expression":
            return node
        for argument in call_arguments(node):
            if argument.type == "object" and (
                self.roles.is_factory_component(argument) or self.roles.is_legacy_class_component(argument)
            ):
                return argument
        return node
