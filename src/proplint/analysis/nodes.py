"""Structural helpers over tree-sitter JavaScript/TypeScript nodes.

The detection and prop-type engines reason about a handful of recurring
shapes: "the object literal passed to a call", "the property a function is
the value of", "the parameters of a function", and so on. Tree-sitter spells
these differently from one node type to the next (and between the JavaScript
and TypeScript grammars); this module is the single place that knows how.

Nodes are compared through ``node_key`` (a span tuple), never by object
identity: tree-sitter hands out a fresh Python wrapper on every access.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

Node = Any  # tree_sitter.Node
NodeKey = tuple[int, int, str]

CLASS_TYPES = frozenset({"class_declaration", "class", "abstract_class_declaration"})

FUNCTION_TYPES = frozenset(
    {
        "function_declaration",
        "function_expression",
        "function",  # older grammars
        "generator_function_declaration",
        "generator_function",
        "arrow_function",
        "method_definition",
    }
)

FUNCTION_DECLARATION_TYPES = frozenset({"function_declaration", "generator_function_declaration"})

FIELD_TYPES = frozenset({"field_definition", "public_field_definition"})

ACCESS_TYPES = frozenset({"member_expression", "subscript_expression"})

MARKUP_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})

PARAMETER_WRAPPERS = frozenset({"required_parameter", "optional_parameter"})

# Destructuring entries that name a key of the destructured object
PATTERN_KEY_TYPES = frozenset(
    {"shorthand_property_identifier_pattern", "pair_pattern", "object_assignment_pattern"}
)

# Expression wrappers that ESTree does not represent
_TRANSPARENT_TYPES = frozenset(
    {"parenthesized_expression", "non_null_expression", "as_expression", "satisfies_expression"}
)


def node_key(node: Node) -> NodeKey:
    """Stable identity of a node within one tree."""
    return (node.start_byte, node.end_byte, node.type)


def is_same(a: Node | None, b: Node | None) -> bool:
    return a is not None and b is not None and node_key(a) == node_key(b)


def node_text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf-8")


def named(node: Node | None) -> list[Node]:
    """Named children, comments excluded."""
    if node is None:
        return []
    return [c for c in node.named_children if c.type != "comment"]


def first_named(node: Node | None) -> Node | None:
    children = named(node)
    return children[0] if children else None


def unwrap(node: Node | None) -> Node | None:
    """Strip parentheses and TypeScript-only expression wrappers."""
    while node is not None and node.type in _TRANSPARENT_TYPES:
        node = first_named(node)
    return node


def ancestors(node: Node) -> Iterator[Node]:
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def line_of(node: Node) -> int:
    return node.start_point[0] + 1


def is_function(node: Node | None) -> bool:
    return node is not None and node.type in FUNCTION_TYPES


def is_class_method(node: Node) -> bool:
    """Method of a class body (object-literal methods are plain functions)."""
    return (
        node.type == "method_definition"
        and node.parent is not None
        and node.parent.type == "class_body"
    )


def is_concise_arrow(node: Node | None) -> bool:
    """Arrow function whose body is a single expression."""
    if node is None or node.type != "arrow_function":
        return False
    body = node.child_by_field_name("body")
    return body is not None and body.type != "statement_block"


def string_value(node: Node) -> str:
    """Value of a string literal node (quotes removed)."""
    text = node_text(node)
    if len(text) >= 2 and text[0] in "'\"`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def property_key_name(key: Node | None) -> str | None:
    """Name of an object/class key; None for computed keys."""
    if key is None:
        return None
    if key.type == "string":
        return string_value(key)
    if key.type == "computed_property_name":
        return None
    return node_text(key) or None


def method_name(node: Node) -> str | None:
    return property_key_name(node.child_by_field_name("name"))


def field_name(node: Node) -> str | None:
    """Name of a class field (``property`` in JavaScript, ``name`` in TypeScript)."""
    key = node.child_by_field_name("property") or node.child_by_field_name("name")
    return property_key_name(key)


def object_entries(obj: Node) -> list[Node]:
    """Pairs, shorthand properties, methods and spreads of an object literal."""
    return named(obj)


def entry_key(entry: Node) -> str | None:
    """Key name of an object literal entry."""
    if entry.type == "pair":
        return property_key_name(entry.child_by_field_name("key"))
    if entry.type == "method_definition":
        return method_name(entry)
    if entry.type == "shorthand_property_identifier":
        return node_text(entry)
    return None


def entry_value(entry: Node) -> Node | None:
    if entry.type == "pair":
        return entry.child_by_field_name("value")
    if entry.type in ("method_definition", "shorthand_property_identifier"):
        return entry
    return None


def owning_property(node: Node) -> tuple[str | None, Node] | None:
    """(key, object literal) when ``node`` is a property value or an object method."""
    parent = node.parent
    if parent is None:
        return None
    if parent.type == "pair" and is_same(parent.child_by_field_name("value"), node):
        container = parent.parent
        if container is not None and container.type == "object":
            return property_key_name(parent.child_by_field_name("key")), container
        return None
    if node.type == "method_definition" and parent.type == "object":
        return method_name(node), parent
    return None


def call_of_argument(node: Node) -> Node | None:
    """The call expression ``node`` is passed to as a direct argument."""
    parent = node.parent
    if parent is None or parent.type != "arguments":
        return None
    call = parent.parent
    if call is None or call.type != "call_expression":
        return None
    return call


def is_call_operand(node: Node) -> bool:
    """True when ``node`` is an argument or the callee of a call."""
    if call_of_argument(node) is not None:
        return True
    parent = node.parent
    return (
        parent is not None
        and parent.type == "call_expression"
        and is_same(parent.child_by_field_name("function"), node)
    )


def call_arguments(call: Node) -> list[Node]:
    return named(call.child_by_field_name("arguments"))


def callee(call: Node) -> Node | None:
    return call.child_by_field_name("function")


def callee_name(call: Node) -> str | None:
    """Final identifier of a callee: ``shape`` for both ``shape()`` and ``PropTypes.shape()``."""
    fn = unwrap(callee(call))
    if fn is None:
        return None
    if fn.type == "identifier":
        return node_text(fn)
    if fn.type == "member_expression":
        return node_text(fn.child_by_field_name("property"))
    return None


def is_inline_jsx_callback(node: Node) -> bool:
    parent = node.parent
    return parent is not None and parent.type == "jsx_expression"


def access_parent(node: Node) -> Node | None:
    """The member/subscript access that reads a property off ``node``."""
    parent = node.parent
    if parent is None or parent.type not in ACCESS_TYPES:
        return None
    if not is_same(parent.child_by_field_name("object"), node):
        return None
    return parent


def member_property(node: Node) -> Node | None:
    """Property node of a member access, index node of a subscript."""
    if node.type == "member_expression":
        return node.child_by_field_name("property")
    if node.type == "subscript_expression":
        return node.child_by_field_name("index")
    return None


def member_property_name(node: Node) -> str | None:
    """Non-computed property name of a ``member_expression``."""
    if node.type != "member_expression":
        return None
    prop = node.child_by_field_name("property")
    if prop is None or prop.type not in ("property_identifier", "private_property_identifier"):
        return None
    return node_text(prop)


def assignment_of_target(node: Node) -> Node | None:
    """The assignment expression whose left-hand side is ``node``."""
    parent = node.parent
    if parent is None or parent.type != "assignment_expression":
        return None
    if not is_same(parent.child_by_field_name("left"), node):
        return None
    return parent


def function_params(fn: Node) -> list[Node]:
    """Parameters as written (TypeScript wrappers included)."""
    if fn.type == "arrow_function":
        single = fn.child_by_field_name("parameter")
        if single is not None:
            return [single]
    return named(fn.child_by_field_name("parameters"))


def param_pattern(param: Node) -> Node | None:
    """Binding pattern of a parameter, looking through TypeScript wrappers."""
    if param.type in PARAMETER_WRAPPERS:
        return param.child_by_field_name("pattern")
    return param


def param_type(param: Node) -> Node | None:
    """Type annotation of a parameter, if any."""
    if param.type in PARAMETER_WRAPPERS:
        return param.child_by_field_name("type")
    return None


def function_body(fn: Node) -> Node | None:
    return fn.child_by_field_name("body")


def return_argument(ret: Node) -> Node | None:
    return first_named(ret)


def find_return_statement(fn: Node) -> Node | None:
    """Last top-level return statement of a function body."""
    body = function_body(fn)
    if body is None or body.type != "statement_block":
        return None
    for statement in reversed(named(body)):
        if statement.type == "return_statement":
            return statement
    return None


def class_superclass(node: Node) -> Node | None:
    """The expression a class extends, in either grammar."""
    for child in named(node):
        if child.type != "class_heritage":
            continue
        for clause in named(child):
            if clause.type == "extends_clause":
                return clause.child_by_field_name("value") or first_named(clause)
            if clause.type != "implements_clause":
                return clause
    return None


def pattern_entries(pattern: Node | None) -> list[Node]:
    if pattern is None or pattern.type != "object_pattern":
        return []
    return named(pattern)


def pattern_key_name(entry: Node) -> str | None:
    """Key read by one destructuring entry (rest entries yield their binding name)."""
    if entry.type == "shorthand_property_identifier_pattern":
        return node_text(entry)
    if entry.type == "pair_pattern":
        return property_key_name(entry.child_by_field_name("key"))
    if entry.type == "object_assignment_pattern":
        left = entry.child_by_field_name("left")
        if left is not None and left.type == "shorthand_property_identifier_pattern":
            return node_text(left)
        return None
    if entry.type == "rest_pattern":
        target = first_named(entry)
        if target is not None and target.type == "identifier":
            return node_text(target)
    return None


def pattern_value(entry: Node) -> Node | None:
    """The nested pattern a destructuring entry binds to."""
    if entry.type != "pair_pattern":
        return None
    value = entry.child_by_field_name("value")
    if value is not None and value.type == "assignment_pattern":
        value = value.child_by_field_name("left")
    return value


def is_computed_entry(entry: Node) -> bool:
    if entry.type == "pair_pattern":
        key = entry.child_by_field_name("key")
        return key is not None and key.type == "computed_property_name"
    return False
