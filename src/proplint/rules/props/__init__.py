"""The prop-types rule: declared shapes, usage extraction and reconciliation."""

from proplint.rules.props.declarations import DeclarationBuilder, TypeAliasScope
from proplint.rules.props.rule import MISSING_MESSAGE, RULE_NAME, PropTypesRule, Violation, run_rule
from proplint.rules.props.shapes import (
    ANY_KEY,
    COMPUTED_PROP,
    HANDLERS_PROP,
    INSTANCE,
    LEAF,
    Instance,
    Leaf,
    ObjectOf,
    Shape,
    ShapeOf,
    UnionOf,
    is_covered,
    make_union,
    render_path,
)
from proplint.rules.props.usage import UsageExtractor

__all__ = [
    "ANY_KEY",
    "COMPUTED_PROP",
    "HANDLERS_PROP",
    "INSTANCE",
    "LEAF",
    "MISSING_MESSAGE",
    "RULE_NAME",
    "DeclarationBuilder",
    "Instance",
    "Leaf",
    "ObjectOf",
    "PropTypesRule",
    "Shape",
    "ShapeOf",
    "TypeAliasScope",
    "UnionOf",
    "UsageExtractor",
    "Violation",
    "is_covered",
    "make_union",
    "render_path",
    "run_rule",
]
