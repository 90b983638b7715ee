"""Lexical scope analysis for JavaScript/TypeScript syntax trees.

Builds a scope tree for one program and binds every identifier reference to
the variable it resolves to. Only the questions the component detector asks
are answered: which scope encloses a node, which variables are visible from
it, and where a variable was defined and referenced.

Scoping follows the language closely enough for those questions:

* ``var`` declarations hoist to the nearest function (or the program).
* ``let``/``const``/``class`` and block-level functions bind in the
  current block.
* A function body does not open a second scope on top of the function's.
* Type-level syntax and JSX tag names are not references.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from proplint.analysis.nodes import (
    CLASS_TYPES,
    FUNCTION_DECLARATION_TYPES,
    FUNCTION_TYPES,
    PARAMETER_WRAPPERS,
    Node,
    NodeKey,
    function_params,
    named,
    node_key,
    node_text,
)


class ScopeKind(Enum):
    GLOBAL = "global"
    FUNCTION = "function"
    CLASS = "class"
    BLOCK = "block"


class DefinitionKind(Enum):
    VARIABLE = "variable"
    FUNCTION = "function"
    CLASS = "class"
    PARAMETER = "parameter"
    IMPORT = "import"
    CATCH = "catch"


@dataclass(eq=False)
class Definition:
    """Where a name is bound.

    ``node`` is the declaring construct: the ``variable_declarator`` for
    variables, the function or class node, the import statement, etc.
    """

    kind: DefinitionKind
    name: Node
    node: Node


@dataclass(eq=False)
class Reference:
    identifier: Node
    is_write: bool = False


@dataclass(eq=False)
class Variable:
    name: str
    definitions: list[Definition] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)


@dataclass(eq=False)
class Scope:
    kind: ScopeKind
    block: Node
    upper: Scope | None = None
    variables: dict[str, Variable] = field(default_factory=dict)
    children: list[Scope] = field(default_factory=list)

    def define(self, name_node: Node, definition: Definition) -> Variable:
        name = node_text(name_node)
        variable = self.variables.get(name)
        if variable is None:
            variable = Variable(name=name)
            self.variables[name] = variable
        variable.definitions.append(definition)
        return variable

    def lookup(self, name: str) -> Variable | None:
        scope: Scope | None = self
        while scope is not None:
            variable = scope.variables.get(name)
            if variable is not None:
                return variable
            scope = scope.upper
        return None

    def function_scope(self) -> Scope:
        """Nearest scope that receives hoisted ``var`` bindings."""
        scope = self
        while scope.kind not in (ScopeKind.FUNCTION, ScopeKind.GLOBAL) and scope.upper:
            scope = scope.upper
        return scope


# Subtrees that never contain value references
_TYPE_ONLY_TYPES = frozenset(
    {
        "type_annotation",
        "type_alias_declaration",
        "interface_declaration",
        "type_arguments",
        "type_parameters",
        "implements_clause",
        "ambient_declaration",
        "abstract_method_signature",
        "index_signature",
        "enum_declaration",
    }
)

_BLOCK_SCOPE_TYPES = frozenset(
    {"statement_block", "for_statement", "for_in_statement", "switch_statement", "class_static_block"}
)

_REFERENCE_TYPES = frozenset({"identifier", "shorthand_property_identifier"})


class ScopeManager:
    """Scope tree and reference bindings for one parsed program."""

    def __init__(self, root: Node) -> None:
        self._scopes: dict[NodeKey, Scope] = {}
        self._pending: list[tuple[Node, Scope, bool]] = []
        self.global_scope = self._open(ScopeKind.GLOBAL, root, None)
        for child in named(root):
            self._visit(child, self.global_scope)
        self._resolve()

    # =========================================================================
    # Queries
    # =========================================================================

    def scope_of(self, node: Node) -> Scope:
        """Innermost scope whose block is ``node`` or one of its ancestors."""
        current: Node | None = node
        while current is not None:
            scope = self._scopes.get(node_key(current))
            if scope is not None:
                return scope
            current = current.parent
        return self.global_scope

    def variables_in_scope(self, node: Node) -> list[Variable]:
        """Visible variables, innermost scope first."""
        result: list[Variable] = []
        scope: Scope | None = self.scope_of(node)
        while scope is not None:
            result.extend(scope.variables.values())
            scope = scope.upper
        return result

    def find_variable(self, node: Node, name: str) -> Variable | None:
        return self.scope_of(node).lookup(name)

    # =========================================================================
    # Construction
    # =========================================================================

    def _open(self, kind: ScopeKind, block: Node, upper: Scope | None) -> Scope:
        scope = Scope(kind=kind, block=block, upper=upper)
        if upper is not None:
            upper.children.append(scope)
        self._scopes[node_key(block)] = scope
        return scope

    def _reference(self, identifier: Node, scope: Scope, is_write: bool = False) -> None:
        self._pending.append((identifier, scope, is_write))

    def _resolve(self) -> None:
        self._pending.sort(key=lambda item: item[0].start_byte)
        for identifier, scope, is_write in self._pending:
            variable = scope.lookup(node_text(identifier))
            if variable is not None:
                variable.references.append(Reference(identifier, is_write))
        self._pending.clear()

    def _visit_children(self, node: Node, scope: Scope) -> None:
        for child in named(node):
            self._visit(child, scope)

    def _visit(self, node: Node, scope: Scope) -> None:
        kind = node.type
        if kind in FUNCTION_TYPES:
            self._visit_function(node, scope)
        elif kind in CLASS_TYPES:
            self._visit_class(node, scope)
        elif kind in _TYPE_ONLY_TYPES:
            return
        elif kind == "variable_declarator":
            self._visit_declarator(node, scope)
        elif kind == "import_statement":
            self._visit_import(node, scope)
        elif kind == "catch_clause":
            self._visit_catch(node, scope)
        elif kind == "for_in_statement":
            self._visit_for_in(node, scope)
        elif kind in _BLOCK_SCOPE_TYPES:
            self._visit_children(node, self._open(ScopeKind.BLOCK, node, scope))
        elif kind in _REFERENCE_TYPES:
            self._reference(node, scope)
        elif kind == "assignment_expression":
            self._visit_assignment(node, scope)
        elif kind in ("jsx_opening_element", "jsx_self_closing_element"):
            name = node.child_by_field_name("name")
            for child in named(node):
                if name is None or node_key(child) != node_key(name):
                    self._visit(child, scope)
        elif kind == "jsx_closing_element":
            return
        else:
            self._visit_children(node, scope)

    def _visit_function(self, node: Node, scope: Scope) -> None:
        name = node.child_by_field_name("name")
        if node.type in FUNCTION_DECLARATION_TYPES and name is not None:
            scope.define(name, Definition(DefinitionKind.FUNCTION, name, node))
        if node.type == "method_definition" and name is not None:
            if name.type == "computed_property_name":
                self._visit_children(name, scope)
            name = None

        fn_scope = self._open(ScopeKind.FUNCTION, node, scope)
        if name is not None and node.type not in FUNCTION_DECLARATION_TYPES:
            fn_scope.define(name, Definition(DefinitionKind.FUNCTION, name, node))
        for param in function_params(node):
            self._declare(param, fn_scope, DefinitionKind.PARAMETER, node)

        body = node.child_by_field_name("body")
        if body is None:
            return
        if body.type == "statement_block":
            self._visit_children(body, fn_scope)
        else:
            self._visit(body, fn_scope)

    def _visit_class(self, node: Node, scope: Scope) -> None:
        name = node.child_by_field_name("name")
        class_scope = self._open(ScopeKind.CLASS, node, scope)
        if name is not None:
            target = class_scope if node.type == "class" else scope
            target.define(name, Definition(DefinitionKind.CLASS, name, node))
        for child in named(node):
            if name is not None and node_key(child) == node_key(name):
                continue
            self._visit(child, class_scope)

    def _visit_declarator(self, node: Node, scope: Scope) -> None:
        parent = node.parent
        hoisted = parent is not None and parent.type == "variable_declaration"
        target = scope.function_scope() if hoisted else scope
        value = node.child_by_field_name("value")
        pattern = node.child_by_field_name("name")
        if pattern is not None:
            self._declare(
                pattern, target, DefinitionKind.VARIABLE, node, write=value is not None, use_scope=scope
            )
        if value is not None:
            self._visit(value, scope)

    def _visit_import(self, node: Node, scope: Scope) -> None:
        for clause in named(node):
            if clause.type != "import_clause":
                continue
            for part in named(clause):
                if part.type == "identifier":
                    scope.define(part, Definition(DefinitionKind.IMPORT, part, node))
                elif part.type == "namespace_import":
                    for ident in named(part):
                        if ident.type == "identifier":
                            scope.define(ident, Definition(DefinitionKind.IMPORT, ident, node))
                elif part.type == "named_imports":
                    for spec in named(part):
                        local = spec.child_by_field_name("alias") or spec.child_by_field_name("name")
                        if local is not None and local.type == "identifier":
                            scope.define(local, Definition(DefinitionKind.IMPORT, local, node))

    def _visit_catch(self, node: Node, scope: Scope) -> None:
        catch_scope = self._open(ScopeKind.BLOCK, node, scope)
        param = node.child_by_field_name("parameter")
        if param is not None:
            self._declare(param, catch_scope, DefinitionKind.CATCH, node)
        body = node.child_by_field_name("body")
        if body is not None:
            self._visit_children(body, catch_scope)

    def _visit_for_in(self, node: Node, scope: Scope) -> None:
        loop_scope = self._open(ScopeKind.BLOCK, node, scope)
        left = node.child_by_field_name("left")
        declaration = node.child_by_field_name("kind")
        if left is not None:
            if declaration is None:
                self._visit_target(left, loop_scope)
            else:
                target = loop_scope.function_scope() if node_text(declaration) == "var" else loop_scope
                self._declare(left, target, DefinitionKind.VARIABLE, node, write=True, use_scope=loop_scope)
        for name in ("right", "body"):
            child = node.child_by_field_name(name)
            if child is not None:
                self._visit(child, loop_scope)

    def _visit_assignment(self, node: Node, scope: Scope) -> None:
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if left is not None:
            self._visit_target(left, scope)
        if right is not None:
            self._visit(right, scope)

    def _visit_target(self, target: Node, scope: Scope) -> None:
        if target.type == "identifier":
            self._reference(target, scope, is_write=True)
        elif target.type in ("object_pattern", "array_pattern"):
            for ident in self._pattern_bindings(target, scope):
                self._reference(ident, scope, is_write=True)
        else:
            self._visit(target, scope)

    def _declare(
        self,
        pattern: Node,
        scope: Scope,
        kind: DefinitionKind,
        node: Node,
        *,
        write: bool = False,
        use_scope: Scope | None = None,
    ) -> None:
        use_scope = use_scope or scope
        for ident in self._pattern_bindings(pattern, use_scope):
            scope.define(ident, Definition(kind, ident, node))
            if write:
                self._reference(ident, use_scope, is_write=True)

    def _pattern_bindings(self, pattern: Node, scope: Scope) -> list[Node]:
        """Binding identifiers of a pattern; default values are visited as expressions."""
        bindings: list[Node] = []
        stack = [pattern]
        while stack:
            node = stack.pop()
            kind = node.type
            if kind in ("identifier", "shorthand_property_identifier_pattern"):
                bindings.append(node)
            elif kind in PARAMETER_WRAPPERS:
                inner = node.child_by_field_name("pattern")
                if inner is not None:
                    stack.append(inner)
                default = node.child_by_field_name("value")
                if default is not None:
                    self._visit(default, scope)
            elif kind in ("object_assignment_pattern", "assignment_pattern"):
                left = node.child_by_field_name("left")
                right = node.child_by_field_name("right")
                if left is not None:
                    stack.append(left)
                if right is not None:
                    self._visit(right, scope)
            elif kind == "pair_pattern":
                key = node.child_by_field_name("key")
                if key is not None and key.type == "computed_property_name":
                    self._visit_children(key, scope)
                value = node.child_by_field_name("value")
                if value is not None:
                    stack.append(value)
            elif kind in ("object_pattern", "array_pattern", "rest_pattern"):
                stack.extend(reversed(named(node)))
            elif kind not in _TYPE_ONLY_TYPES:
                # Member targets in assignment patterns read their object
                self._visit(node, scope)
        return bindings
