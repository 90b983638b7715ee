"""Tests for building declared shapes from validators and type annotations."""

from collections.abc import Callable
from typing import Any

import pytest

from proplint.rules.props.declarations import DeclarationBuilder, TypeAliasScope
from proplint.rules.props.shapes import ANY_KEY, INSTANCE, LEAF, ObjectOf, ShapeOf, UnionOf

Parse = Callable[..., Any]
Find = Callable[..., Any]


@pytest.fixture
def validator(parse: Parse, find: Find) -> Callable[..., Any]:
    """Shape of the validator expression ``expr`` in ``x = expr;``."""

    def _build(expr: str, custom_validators: tuple[str, ...] = ()) -> Any:
        root = parse(f"x = {expr};")
        value = find(root, "assignment_expression").child_by_field_name("right")
        return DeclarationBuilder(custom_validators, TypeAliasScope()).from_validator(value)

    return _build


@pytest.fixture
def annotation(parse: Parse, find: Find) -> Callable[..., Any]:
    """Shape of the type ``T`` in ``type T = ...``, with earlier aliases visible."""

    def _build(source: str) -> Any:
        root = parse(source, "typescript")
        aliases = TypeAliasScope()
        target = None
        for node in root.named_children:
            if node.type == "type_alias_declaration":
                name = node.child_by_field_name("name").text.decode()
                aliases.define(name, node.child_by_field_name("value"))
                if name == "T":
                    target = node.child_by_field_name("value")
            elif node.type == "interface_declaration":
                aliases.define(node.child_by_field_name("name").text.decode(), node.child_by_field_name("body"))
        return DeclarationBuilder((), aliases).from_annotation(target)

    return _build


class TestFromValidator:
    """Validator call tests."""

    @pytest.mark.parametrize(
        "expr",
        ["PropTypes.string", "PropTypes.string.isRequired", "PropTypes.oneOf(['a', 'b'])", "customCheck"],
    )
    def test_given_simple_validator_when_built_then_leaf(self, validator: Callable[..., Any], expr: str) -> None:
        """Validators without structure are leaves."""
        assert validator(expr) == LEAF

    def test_given_shape_when_built_then_keys(self, validator: Callable[..., Any]) -> None:
        """``shape`` lists its keys, nested shapes recursively."""
        # When
        shape = validator("PropTypes.shape({ a: PropTypes.string, b: PropTypes.shape({ c: PropTypes.number }) })")

        # Then
        assert shape == ShapeOf({"a": LEAF, "b": ShapeOf({"c": LEAF})})

    def test_given_required_shape_when_built_then_keys(self, validator: Callable[..., Any]) -> None:
        """``.isRequired`` is looked through."""
        assert validator("shape({ a: string }).isRequired") == ShapeOf({"a": LEAF})

    def test_given_shape_with_spread_when_built_then_any_key(self, validator: Callable[..., Any]) -> None:
        """A spread hides which keys are declared."""
        assert validator("PropTypes.shape({ ...base, a: PropTypes.string })") == ShapeOf({ANY_KEY: LEAF, "a": LEAF})

    @pytest.mark.parametrize("fn", ["arrayOf", "objectOf"])
    def test_given_collection_when_built_then_wildcard(self, validator: Callable[..., Any], fn: str) -> None:
        """Collections declare their element shape for every key."""
        shape = validator(f"PropTypes.{fn}(PropTypes.shape({{ id: PropTypes.number }}))")
        assert shape == ObjectOf(ShapeOf({"id": LEAF}))

    def test_given_union_of_leaves_when_built_then_leaf(self, validator: Callable[..., Any]) -> None:
        """``oneOfType`` of simple validators collapses."""
        assert validator("PropTypes.oneOfType([PropTypes.string, PropTypes.number])") == LEAF

    def test_given_union_with_shape_when_built_then_union(self, validator: Callable[..., Any]) -> None:
        """``oneOfType`` keeps structured branches."""
        shape = validator("PropTypes.oneOfType([PropTypes.shape({ a: PropTypes.string }), PropTypes.string])")
        assert shape == UnionOf((ShapeOf({"a": LEAF}), LEAF))

    def test_given_instance_of_when_built_then_instance(self, validator: Callable[..., Any]) -> None:
        """``instanceOf`` is opaque."""
        assert validator("PropTypes.instanceOf(Date)") == INSTANCE

    def test_given_custom_validator_when_built_then_leaf(self, validator: Callable[..., Any]) -> None:
        """Trusted namespaces are never inspected."""
        expr = "Validators.shape({ id: PropTypes.number })"
        assert validator(expr) == ShapeOf({"id": LEAF})
        assert validator(expr, ("Validators",)) == LEAF


class TestFromAnnotation:
    """Type annotation tests."""

    def test_given_object_type_when_built_then_members(self, annotation: Callable[..., Any]) -> None:
        """Object type members become keys."""
        shape = annotation("type T = { a: string; b: { c: number }; onTap(): void };")
        assert shape == ShapeOf({"a": LEAF, "b": ShapeOf({"c": LEAF}), "onTap": LEAF})

    def test_given_index_signature_when_built_then_any_key(self, annotation: Callable[..., Any]) -> None:
        """Index signatures declare every key."""
        shape = annotation("type T = { [key: string]: { id: number } };")
        assert shape == ShapeOf({ANY_KEY: ShapeOf({"id": LEAF})})

    @pytest.mark.parametrize(
        "source",
        [
            "type T = { id: number }[];",
            "type T = Array<{ id: number }>;",
            "type T = Record<string, { id: number }>;",
        ],
    )
    def test_given_collection_type_when_built_then_wildcard(
        self, annotation: Callable[..., Any], source: str
    ) -> None:
        """Arrays and records declare their element shape for every key."""
        assert annotation(source) == ObjectOf(ShapeOf({"id": LEAF}))

    def test_given_union_type_when_built_then_union(self, annotation: Callable[..., Any]) -> None:
        """Unions keep structured branches."""
        shape = annotation("type T = { a: string } | string;")
        assert shape == UnionOf((ShapeOf({"a": LEAF}), LEAF))

    def test_given_alias_reference_when_built_then_resolved(self, annotation: Callable[..., Any]) -> None:
        """Named types resolve through the alias table."""
        shape = annotation("type Item = { id: number };\ntype T = { item: Item };")
        assert shape == ShapeOf({"item": ShapeOf({"id": LEAF})})

    def test_given_interface_reference_when_built_then_resolved(self, annotation: Callable[..., Any]) -> None:
        """Interfaces resolve like aliases."""
        shape = annotation("interface Item { id: number }\ntype T = { item: Item };")
        assert shape == ShapeOf({"item": ShapeOf({"id": LEAF})})

    def test_given_recursive_alias_when_built_then_terminates(self, annotation: Callable[..., Any]) -> None:
        """Self-referencing types stop at the cycle."""
        shape = annotation("type Tree = { child: Tree; name: string };\ntype T = Tree;")
        assert shape == ShapeOf({"child": LEAF, "name": LEAF})

    def test_given_unknown_type_when_built_then_leaf(self, annotation: Callable[..., Any]) -> None:
        """Types defined elsewhere are leaves."""
        assert annotation("type T = Imported;") == LEAF


class TestTypeAliasScope:
    """Block-scoped alias table tests."""

    def test_given_inner_definition_when_popped_then_outer_visible_again(self) -> None:
        """Inner frames shadow outer ones until popped."""
        # Given
        aliases = TypeAliasScope()
        aliases.define("Props", "outer")

        # When
        aliases.push()
        aliases.define("Props", "inner")
        inner = aliases.lookup("Props")
        aliases.pop()

        # Then
        assert inner == "inner"
        assert aliases.lookup("Props") == "outer"

    def test_given_reset_when_looked_up_then_empty(self) -> None:
        """Reset starts a fresh program."""
        aliases = TypeAliasScope()
        aliases.define("Props", "x")
        aliases.reset()
        assert aliases.lookup("Props") is None
