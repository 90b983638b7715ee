"""Tests for declared shapes and the coverage check."""

import pytest

from proplint.rules.props.shapes import (
    ANY_KEY,
    COMPUTED_PROP,
    HANDLERS_PROP,
    INSTANCE,
    LEAF,
    ObjectOf,
    ShapeOf,
    UnionOf,
    children_of,
    is_covered,
    make_union,
    render_path,
)


class TestMakeUnion:
    """Union collapse tests."""

    def test_given_only_leaves_when_unioned_then_leaf(self) -> None:
        """Nothing checkable collapses to a leaf."""
        assert make_union([LEAF, LEAF]) is LEAF

    def test_given_instance_branch_when_unioned_then_leaf(self) -> None:
        """An opaque instance makes every sub-path acceptable."""
        assert make_union([ShapeOf({"a": LEAF}), INSTANCE]) is LEAF

    def test_given_complex_branch_when_unioned_then_union(self) -> None:
        """A structured branch keeps the union."""
        union = make_union([ShapeOf({"a": LEAF}), LEAF])
        assert union == UnionOf((ShapeOf({"a": LEAF}), LEAF))


class TestChildrenOf:
    """Key mapping tests."""

    def test_given_object_of_when_children_read_then_wildcard(self) -> None:
        """Collections expose their element shape under the any-key."""
        assert children_of(ObjectOf(LEAF)) == {ANY_KEY: LEAF}

    def test_given_leaf_when_children_read_then_none(self) -> None:
        """Leaves have no keys."""
        assert children_of(LEAF) is None


class TestIsCovered:
    """Coverage algorithm tests."""

    @pytest.fixture
    def declared(self) -> dict:
        """``{a: string, b: shape({c: string}), list: arrayOf(shape({id}))}``."""
        return {
            "a": LEAF,
            "b": ShapeOf({"c": LEAF}),
            "list": ObjectOf(ShapeOf({"id": LEAF})),
            "when": INSTANCE,
        }

    @pytest.mark.parametrize(
        "path",
        [
            ("a",),
            ("a", "length"),
            ("b",),
            ("b", "c"),
            ("list", COMPUTED_PROP, "id"),
            ("list", "0", "id"),
            ("when", "getTime"),
            ("b", COMPUTED_PROP),
        ],
    )
    def test_given_declared_path_when_checked_then_covered(self, declared: dict, path: tuple) -> None:
        """Declared paths and anything below a leaf are covered."""
        assert is_covered(declared, path)

    @pytest.mark.parametrize(
        "path",
        [("missing",), ("b", "d"), ("list", COMPUTED_PROP, "name")],
    )
    def test_given_undeclared_path_when_checked_then_not_covered(self, declared: dict, path: tuple) -> None:
        """Keys absent from a structured shape are not covered."""
        assert not is_covered(declared, path)

    def test_given_path_ending_at_union_when_checked_then_covered(self) -> None:
        """A path stopping exactly at a union is covered whatever its branches."""
        # Given
        declared = {"x": UnionOf((ShapeOf({}), ShapeOf({})))}

        # Then
        assert is_covered(declared, ("x",))

    def test_given_path_through_union_when_checked_then_any_branch_covers(self) -> None:
        """Any union branch may cover the rest of the path."""
        # Given
        declared = {"x": UnionOf((ShapeOf({"a": LEAF}), ShapeOf({"b": LEAF})))}

        # Then
        assert is_covered(declared, ("x", "a"))
        assert is_covered(declared, ("x", "b"))
        assert not is_covered(declared, ("x", "c"))

    def test_given_any_key_mapping_when_checked_then_every_key_covered(self) -> None:
        """The any-key stands for every key at its level."""
        assert is_covered({"style": ShapeOf({ANY_KEY: LEAF})}, ("style", "color"))

    @pytest.mark.parametrize("sentinel", [COMPUTED_PROP, HANDLERS_PROP])
    def test_given_undeclared_top_sentinel_when_checked_then_covered(self, sentinel: str) -> None:
        """Dynamic keys cannot be checked and are accepted."""
        assert is_covered({}, (sentinel,))

    def test_given_shape_built_from_nested_validators_when_checked_then_leaf_keys_only(self) -> None:
        """``shape({a, b: shape({c})})`` covers a and b.c, not b.d."""
        # Given
        declared = {"x": ShapeOf({"a": LEAF, "b": ShapeOf({"c": LEAF})})}

        # Then
        assert is_covered(declared, ("x", "a"))
        assert is_covered(declared, ("x", "b", "c"))
        assert not is_covered(declared, ("x", "b", "d"))


class TestRenderPath:
    """Message path rendering tests."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            (("a",), "a"),
            (("a", "b"), "a.b"),
            (("list", COMPUTED_PROP, "id"), "list[].id"),
            (("on", HANDLERS_PROP), "on[]"),
        ],
    )
    def test_given_path_when_rendered_then_dotted_with_index_markers(self, path: tuple, expected: str) -> None:
        """Sentinels render as ``[]``."""
        assert render_path(path) == expected
