"""The ``prop-types`` rule: every prop a component reads must be declared.

The rule runs as a visitor over one program. Component detection sees each
node first; the rule then records declarations and usages against the
detected components. When the walk leaves the program, each confirmed
component's usages are checked against its declarations (and those of
enclosing components) and every uncovered path is reported.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from proplint.analysis.nodes import (
    ACCESS_TYPES,
    FIELD_TYPES,
    FUNCTION_TYPES,
    Node,
    assignment_of_target,
    entry_key,
    entry_value,
    field_name,
    find_return_statement,
    function_params,
    is_class_method,
    member_property_name,
    method_name,
    node_text,
    object_entries,
    param_pattern,
    param_type,
    property_key_name,
    return_argument,
    unwrap,
)
from proplint.analysis.scope import ScopeManager
from proplint.analysis.traversal import walk
from proplint.config.models import DetectionConfig, PropTypesConfig
from proplint.core.logging import get_logger
from proplint.rules.components import (
    Component,
    ComponentDetector,
    ComponentRegistry,
    Confidence,
    NodeRoles,
    Role,
    UsedProp,
)
from proplint.rules.props.declarations import DeclarationBuilder, TypeAliasScope
from proplint.rules.props.shapes import LEAF, children_of, is_covered, render_path
from proplint.rules.props.usage import OBJECT_PROTOTYPE_MEMBERS, UsageExtractor

log = get_logger(__name__)

RULE_NAME = "prop-types"
MISSING_MESSAGE = "'{name}' is missing in props validation"


@dataclass(frozen=True, slots=True)
class Violation:
    """One report: the node to point at, the message, and its data."""

    node: Node
    message: str
    data: dict[str, Any] = field(default_factory=dict)


class PropTypesRule:
    """Visitor implementing the prop-types check for one program."""

    def __init__(
        self,
        scopes: ScopeManager,
        options: PropTypesConfig | None = None,
        detection: DetectionConfig | None = None,
        report: Callable[[Violation], None] | None = None,
    ) -> None:
        self.options = options or PropTypesConfig()
        self.scopes = scopes
        self.registry = ComponentRegistry()
        self.detector = ComponentDetector(NodeRoles(detection or DetectionConfig()), scopes, self.registry)
        self.roles = self.detector.roles
        self.usage = UsageExtractor(self.detector)
        self.aliases = TypeAliasScope()
        self.builder = DeclarationBuilder(self.options.custom_validators, self.aliases)
        self.violations: list[Violation] = []
        self._report = report or self.violations.append
        self._handlers: dict[str, Callable[[Node], None]] = {
            "variable_declarator": self._on_variable_declarator,
            "object": self._on_object,
            "type_alias_declaration": self._on_type_alias,
            "interface_declaration": self._on_interface,
            "program": self._on_program,
            "statement_block": self._on_block,
        }
        for kind in FIELD_TYPES:
            self._handlers[kind] = self._on_class_field
        for kind in FUNCTION_TYPES:
            self._handlers[kind] = self._on_function
        for kind in ACCESS_TYPES:
            self._handlers[kind] = self._on_access

    # =========================================================================
    # Walk callbacks
    # =========================================================================

    def enter(self, node: Node) -> None:
        self.detector.enter(node)
        handler = self._handlers.get(node.type)
        if handler is not None:
            handler(node)

    def leave(self, node: Node) -> None:
        if node.type == "statement_block":
            self.aliases.pop()
        elif node.type == "program":
            self._on_program_exit()

    def _on_program(self, node: Node) -> None:
        self.aliases.reset()

    def _on_block(self, node: Node) -> None:
        self.aliases.push()

    def _on_type_alias(self, node: Node) -> None:
        name = node.child_by_field_name("name")
        value = node.child_by_field_name("value")
        if name is not None and value is not None:
            self.aliases.define(node_text(name), value)

    def _on_interface(self, node: Node) -> None:
        name = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        if name is not None and body is not None:
            self.aliases.define(node_text(name), body)

    def _on_class_field(self, node: Node) -> None:
        name = field_name(node)
        if name == "props" and node.child_by_field_name("type") is not None:
            self.mark_declared(node, self.builder.resolve_annotation(node))
        elif name == "propTypes":
            self.mark_declared(node, node.child_by_field_name("value"))

    def _on_variable_declarator(self, node: Node) -> None:
        pattern = node.child_by_field_name("name")
        init = unwrap(node.child_by_field_name("value"))
        if init is None or pattern is None or pattern.type != "object_pattern":
            return
        if init.type == "this":
            self.usage.mark_used(node)
        elif init.type == "identifier" and node_text(init) == "props" and (
            self.detector.get_parent_stateless(node) is not None or self.detector.in_constructor(node)
        ):
            self.usage.mark_used(node)

    def _on_function(self, node: Node) -> None:
        params = function_params(node)
        first = param_pattern(params[0]) if params else None
        destructuring = first is not None and first.type == "object_pattern"
        if (
            self.usage.is_render_function(node)
            or self.usage.is_computed_function(node)
            or self.usage.is_handler_function(node)
            or (destructuring and self.registry.get(node) is not None)
        ):
            self.usage.mark_used(node)

        if params and param_type(params[0]) is not None and first is not None and (
            destructuring or (first.type == "identifier" and node_text(first) == "props")
        ):
            self.mark_declared(node, self.builder.resolve_annotation(params[0]))

        if is_class_method(node) and method_name(node) == "propTypes":
            ret = find_return_statement(node)
            if ret is not None:
                self.mark_declared(node, return_argument(ret))

    def _on_access(self, node: Node) -> None:
        if self.usage.is_prop_types_usage(node):
            self.usage.mark_used(node)
        elif member_property_name(node) == "propTypes":
            component = self.detector.get_related_component(node)
            if component is None:
                return
            assignment = assignment_of_target(node)
            if assignment is not None:
                target = assignment.child_by_field_name("right")
            else:
                target = node.parent
            self.mark_declared(component.node, target)

    def _on_object(self, node: Node) -> None:
        if self.usage.is_computed_declaration(node):
            self._mark_sub_block_names(node, "computed_props")
        elif self.usage.is_handlers_declaration(node):
            self._mark_sub_block_names(node, "handlers_props")

        for entry in object_entries(node):
            if entry_key(entry) != "propTypes" or entry.type == "spread_element":
                continue
            self.mark_declared(node, entry_value(entry))

    def _mark_sub_block_names(self, node: Node, attribute: str) -> None:
        owner = self.registry.owner(node)
        if owner is None:
            return
        names = set(getattr(owner, attribute))
        for entry in object_entries(node):
            if entry.type in ("pair", "method_definition"):
                key = entry.child_by_field_name("key") or entry.child_by_field_name("name")
                if key is not None and key.type in ("property_identifier", "identifier"):
                    names.add(property_key_name(key))
            elif entry.type == "shorthand_property_identifier":
                names.add(node_text(entry))
        self.registry.set(node, **{attribute: names})

    # =========================================================================
    # Declarations
    # =========================================================================

    def mark_declared(self, node: Node, prop_types: Node | None, _seen: frozenset = frozenset()) -> None:
        """Merge the declaration ``prop_types`` into the component owning ``node``."""
        owner = self.registry.owner(node)
        if owner is None:
            return
        declared = owner.declared_prop_types if owner.declared_prop_types is not None else {}
        ignore = False
        prop_types = unwrap(prop_types)
        kind = prop_types.type if prop_types is not None else None

        if kind in ("object_type", "interface_body"):
            declared.update(self.builder.annotation_members(prop_types))
        elif kind == "object":
            for entry in object_entries(prop_types):
                key = entry_key(entry)
                if key is None:
                    # Spreads and computed keys hide what is declared
                    ignore = True
                    continue
                declared[key] = self.builder.from_validator(entry.child_by_field_name("value")) if (
                    entry.type == "pair"
                ) else LEAF
        elif kind == "member_expression":
            ignore = not self._graft_declaration(declared, prop_types)
        elif kind == "identifier":
            name = node_text(prop_types)
            variable = self.scopes.find_variable(owner.node, name)
            init = None
            if variable is not None and variable.definitions and name not in _seen:
                definition = variable.definitions[-1].node
                if definition.type == "variable_declarator":
                    init = definition.child_by_field_name("value")
            if init is not None:
                self.mark_declared(node, init, _seen | {name})
                return
            ignore = True
        elif kind is not None:
            ignore = True

        if ignore:
            log.debug("props_validation_ignored", line=node.start_point[0] + 1, declaration=kind)
        self.registry.set(
            node,
            declared_prop_types=declared,
            ignore_props_validation=owner.ignore_props_validation or ignore,
        )

    def _graft_declaration(self, declared: dict, chain: Node) -> bool:
        """Apply ``X.propTypes.a.b = validator`` onto an existing declaration."""
        level: dict | None = declared
        current: Node | None = chain
        while current is not None and level is not None and assignment_of_target(current) is None:
            segment = member_property_name(current)
            if segment is None or segment not in level:
                return False
            level = children_of(level[segment])
            current = current.parent
            if current is None or current.type != "member_expression":
                return False
        if current is None or level is None:
            return False
        segment = member_property_name(current)
        if segment is None:
            return False
        level[segment] = self.builder.from_validator(assignment_of_target(current).child_by_field_name("right"))
        return True

    # =========================================================================
    # Reconciliation
    # =========================================================================

    def _on_program_exit(self) -> None:
        components = self.registry.list()
        log.debug("components_listed", count=len(components))
        for component in components.values():
            if not self.must_be_validated(component):
                continue
            for used in component.used_prop_types:
                if self.is_covered(component, used):
                    continue
                name = render_path(used.path)
                self._report(Violation(node=used.site, message=MISSING_MESSAGE.format(name=name), data={"name": name}))

    def must_be_validated(self, component: Component) -> bool:
        if not component.used_prop_types or component.ignore_props_validation:
            return False
        return not (self.options.skip_undeclared and component.declared_prop_types is None)

    def is_declared_in_component(self, node: Node, path: tuple[str, ...]) -> bool:
        current: Node | None = node
        while current is not None:
            record = self.registry.get(current)
            if record is not None and record.confidence == Confidence.CONFIRMED and is_covered(
                record.declared_prop_types or {}, path
            ):
                return True
            current = current.parent
        return False

    def is_covered(self, component: Component, used: UsedProp) -> bool:
        top = used.path[0]
        if top in self.options.ignore or top in OBJECT_PROTOTYPE_MEMBERS:
            return True
        if self.is_declared_in_component(component.node, used.path):
            return True
        if used.role == Role.HANDLERS:
            return top in component.computed_props
        if used.role == Role.COMPUTED:
            return False
        return top in component.computed_props or top in component.handlers_props


def run_rule(
    root: Node,
    options: PropTypesConfig | None = None,
    detection: DetectionConfig | None = None,
) -> PropTypesRule:
    """Walk ``root`` with a fresh rule and return it with its violations."""
    rule = PropTypesRule(ScopeManager(root), options=options, detection=detection)
    walk(root, rule)
    return rule

