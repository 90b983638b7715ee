"""Tests for structural node helpers."""

from collections.abc import Callable
from typing import Any

import pytest

from proplint.analysis.nodes import (
    call_of_argument,
    callee_name,
    class_superclass,
    entry_key,
    field_name,
    find_return_statement,
    function_params,
    is_class_method,
    is_concise_arrow,
    is_same,
    node_key,
    node_text,
    object_entries,
    owning_property,
    param_pattern,
    param_type,
    pattern_entries,
    pattern_key_name,
    property_key_name,
    return_argument,
    string_value,
    unwrap,
)

Parse = Callable[..., Any]
Find = Callable[..., Any]


class TestIdentity:
    """Span-based node identity tests."""

    def test_given_same_node_twice_when_compared_then_same(self, parse: Parse, find: Find) -> None:
        """Two wrappers of one node compare equal by span."""
        # Given
        root = parse("const a = 1;")
        first = find(root, "identifier", "a")
        second = find(root, "variable_declarator").child_by_field_name("name")

        # Then
        assert node_key(first) == node_key(second)
        assert is_same(first, second)

    def test_given_none_when_compared_then_not_same(self, parse: Parse, find: Find) -> None:
        """None is never the same as anything."""
        root = parse("a;")
        assert not is_same(find(root, "identifier"), None)


class TestLiterals:
    """String and key name tests."""

    @pytest.mark.parametrize(
        ("source", "expected"),
        [("x = 'single';", "single"), ('x = "double";', "double"), ("x = `tpl`;", "tpl")],
    )
    def test_given_string_literal_when_read_then_quotes_removed(
        self, parse: Parse, find: Find, source: str, expected: str
    ) -> None:
        """Quotes and backticks are stripped."""
        root = parse(source)
        node = find(root, "assignment_expression").child_by_field_name("right")
        assert string_value(node) == expected

    def test_given_object_keys_when_named_then_computed_key_is_none(self, parse: Parse, find: Find) -> None:
        """Identifier and string keys have names, computed keys do not."""
        # Given
        root = parse("x = { a: 1, 'b': 2, [c]: 3, d };")

        # When
        keys = [entry_key(e) for e in object_entries(find(root, "object"))]

        # Then
        assert keys == ["a", "b", None, "d"]

    def test_given_no_key_when_named_then_none(self) -> None:
        """A missing key has no name."""
        assert property_key_name(None) is None


class TestUnwrap:
    """Transparent wrapper tests."""

    def test_given_parenthesized_expression_when_unwrapped_then_inner(self, parse: Parse, find: Find) -> None:
        """Parentheses are looked through."""
        root = parse("x = ((a));")
        right = find(root, "assignment_expression").child_by_field_name("right")
        assert node_text(unwrap(right)) == "a"

    def test_given_ts_as_expression_when_unwrapped_then_inner(self, parse: Parse, find: Find) -> None:
        """TypeScript assertions are looked through."""
        root = parse("x = (a as Props)!;", "typescript")
        right = find(root, "assignment_expression").child_by_field_name("right")
        assert node_text(unwrap(right)) == "a"


class TestObjectMembership:
    """Owning property and call argument tests."""

    def test_given_property_value_when_owner_looked_up_then_key_and_object(
        self, parse: Parse, find: Find
    ) -> None:
        """A pair value knows its key and object literal."""
        # Given
        root = parse("x = { render: () => null };")
        arrow = find(root, "arrow_function")

        # When
        prop = owning_property(arrow)

        # Then
        assert prop is not None
        assert prop[0] == "render"
        assert prop[1].type == "object"

    def test_given_object_method_when_owner_looked_up_then_method_name(self, parse: Parse, find: Find) -> None:
        """Shorthand methods own themselves."""
        root = parse("x = { render() { return null; } };")
        method = find(root, "method_definition")
        assert owning_property(method)[0] == "render"
        assert not is_class_method(method)

    def test_given_pair_key_when_owner_looked_up_then_none(self, parse: Parse, find: Find) -> None:
        """Only values own a property, keys do not."""
        root = parse("x = { render: 1 };")
        assert owning_property(find(root, "property_identifier", "render")) is None

    def test_given_object_argument_when_call_looked_up_then_call(self, parse: Parse, find: Find) -> None:
        """An object passed to a call finds the call."""
        # Given
        root = parse("const A = Enact.kind({ name: 'A' });")

        # When
        call = call_of_argument(find(root, "object"))

        # Then
        assert call is not None
        assert callee_name(call) == "kind"

    def test_given_nested_object_when_call_looked_up_then_none(self, parse: Parse, find: Find) -> None:
        """Objects nested deeper than a direct argument are not arguments."""
        root = parse("kind({ computed: { a: 1 } });")
        inner = find(root, "object", "{ a: 1 }")
        assert call_of_argument(inner) is None


class TestFunctions:
    """Function shape tests."""

    def test_given_single_param_arrow_when_params_read_then_one(self, parse: Parse, find: Find) -> None:
        """Parenthesis-free arrow parameters are found."""
        root = parse("f = props => props.a;")
        arrow = find(root, "arrow_function")
        assert [node_text(p) for p in function_params(arrow)] == ["props"]
        assert is_concise_arrow(arrow)

    def test_given_typed_param_when_read_then_pattern_and_type(self, parse: Parse, find: Find) -> None:
        """TypeScript parameter wrappers expose pattern and annotation."""
        # Given
        root = parse("function f({ a, ...rest }: Props) {}", "typescript")
        param = function_params(find(root, "function_declaration"))[0]

        # When
        pattern = param_pattern(param)

        # Then
        assert pattern.type == "object_pattern"
        assert param_type(param) is not None
        assert [pattern_key_name(e) for e in pattern_entries(pattern)] == ["a", "rest"]

    def test_given_several_returns_when_searched_then_last_top_level(self, parse: Parse, find: Find) -> None:
        """The final top-level return statement is used."""
        # Given
        root = parse("function f(a) { if (a) { return 1; } return 2; }")

        # When
        ret = find_return_statement(find(root, "function_declaration"))

        # Then
        assert node_text(return_argument(ret)) == "2"

    def test_given_concise_arrow_when_searched_then_no_return(self, parse: Parse, find: Find) -> None:
        """Expression bodies have no return statement."""
        root = parse("f = () => 1;")
        assert find_return_statement(find(root, "arrow_function")) is None


class TestClasses:
    """Class shape tests."""

    def test_given_js_class_when_superclass_read_then_expression(self, parse: Parse, find: Find) -> None:
        """The JavaScript grammar's heritage yields the extended expression."""
        root = parse("class A extends React.Component {}")
        assert node_text(class_superclass(find(root, "class_declaration"))) == "React.Component"

    def test_given_ts_class_when_superclass_read_then_expression(self, parse: Parse, find: Find) -> None:
        """The TypeScript extends clause yields the extended expression."""
        root = parse("class A extends React.Component<Props> implements I {}", "typescript")
        assert node_text(class_superclass(find(root, "class_declaration"))) == "React.Component"

    def test_given_plain_class_when_superclass_read_then_none(self, parse: Parse, find: Find) -> None:
        """Classes without heritage have no superclass."""
        root = parse("class A {}")
        assert class_superclass(find(root, "class_declaration")) is None

    def test_given_class_method_when_checked_then_class_method(self, parse: Parse, find: Find) -> None:
        """Methods of a class body are class methods."""
        root = parse("class A { render() {} }")
        assert is_class_method(find(root, "method_definition"))

    @pytest.mark.parametrize(
        ("source", "language"),
        [("class A { static propTypes = {}; }", "javascript"), ("class A { props: P; }", "typescript")],
    )
    def test_given_class_field_when_named_then_name_in_either_grammar(
        self, parse: Parse, find: Find, source: str, language: str
    ) -> None:
        """Field names are read from both grammars."""
        root = parse(source, language)
        body = find(root, "class_body")
        assert field_name(body.named_children[0]) in ("propTypes", "props")
