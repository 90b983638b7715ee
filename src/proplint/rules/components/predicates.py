"""Syntactic classification of component-defining constructs.

Every predicate here is a pure function of the tree plus the configured
factory names and the current pragma. The pragma lives in a ``PragmaCell``
because an ``@jsx`` comment rewrites it mid-walk; the component detector is
its only writer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from proplint.analysis.doc import doc_comment_for, parse_doc_comment
from proplint.analysis.nodes import (
    CLASS_TYPES,
    MARKUP_TYPES,
    Node,
    call_of_argument,
    callee,
    class_superclass,
    find_return_statement,
    function_body,
    is_function,
    member_property_name,
    node_text,
    owning_property,
    return_argument,
    unwrap,
)
from proplint.config.models import DetectionConfig

_SUB_BLOCK_KEYS = ("computed", "handlers")


@dataclass
class PragmaCell:
    """Current base-library namespace for one program walk."""

    value: str


class NodeRoles:
    """Answers "what kind of component construct is this node?"."""

    def __init__(self, detection: DetectionConfig, pragma: PragmaCell | None = None) -> None:
        self.detection = detection
        self.pragma = pragma or PragmaCell(detection.pragma)
        self._kind_re = re.compile(rf"^(?:{detection.kind_factory})$")
        self._hoc_re = re.compile(rf"^(?:{detection.hoc_factory})$")

    # =========================================================================
    # Object-literal components
    # =========================================================================

    def _argument_callee_text(self, node: Node) -> str | None:
        if node.type != "object":
            return None
        call = call_of_argument(node)
        if call is None:
            return None
        return node_text(callee(call))

    def is_factory_component(self, node: Node) -> bool:
        """Object literal passed to the configured component factory, e.g. ``kind({...})``."""
        text = self._argument_callee_text(node)
        return text is not None and self._kind_re.match(text) is not None

    def is_higher_order_factory(self, node: Node) -> bool:
        text = self._argument_callee_text(node)
        return text is not None and self._hoc_re.match(text) is not None

    def is_legacy_class_component(self, node: Node) -> bool:
        """Object literal passed to ``createClass`` or ``<pragma>.createClass``."""
        text = self._argument_callee_text(node)
        if text is None:
            return False
        pattern = rf"^(?:{re.escape(self.pragma.value)}\.)?(?:{self.detection.create_class})$"
        return re.match(pattern, text) is not None

    # =========================================================================
    # Classes
    # =========================================================================

    def is_explicit_component(self, node: Node) -> bool:
        """Class documented with ``@extends``/``@augments`` of a base component class."""
        comment = doc_comment_for(node)
        if comment is None:
            return False
        bases = {f"{self.pragma.value}.Component", f"{self.pragma.value}.PureComponent"}
        return any(
            tag.title in ("extends", "augments") and tag.name in bases
            for tag in parse_doc_comment(comment)
        )

    def is_modern_class_component(self, node: Node) -> bool:
        if node.type not in CLASS_TYPES:
            return False
        if self.is_explicit_component(node):
            return True
        superclass = class_superclass(node)
        if superclass is None:
            return False
        pattern = rf"^(?:{re.escape(self.pragma.value)}\.)?(?:Pure)?Component$"
        return re.match(pattern, node_text(superclass)) is not None

    def is_pure_variant(self, node: Node) -> bool:
        if node.type not in CLASS_TYPES:
            return False
        superclass = class_superclass(node)
        if superclass is None:
            return False
        pattern = rf"^(?:{re.escape(self.pragma.value)}\.)?PureComponent$"
        return re.match(pattern, node_text(superclass)) is not None

    # =========================================================================
    # Factory sub-blocks
    # =========================================================================

    def sub_block_factory(self, fn: Node) -> Node | None:
        """Factory object owning ``fn`` as a member of its computed/handlers block."""
        if not is_function(fn):
            return None
        prop = owning_property(fn)
        if prop is None:
            return None
        outer = owning_property(prop[1])
        if outer is None or outer[0] not in _SUB_BLOCK_KEYS:
            return None
        if not self.is_factory_component(outer[1]):
            return None
        return outer[1]

    def _sub_block_key(self, fn: Node) -> str | None:
        if self.sub_block_factory(fn) is None:
            return None
        prop = owning_property(fn)
        outer = owning_property(prop[1]) if prop else None
        return outer[0] if outer else None

    def is_computed_sub_block(self, fn: Node) -> bool:
        return self._sub_block_key(fn) == "computed"

    def is_handlers_sub_block(self, fn: Node) -> bool:
        return self._sub_block_key(fn) == "handlers"

    # =========================================================================
    # Markup
    # =========================================================================

    def is_markup(self, node: Node | None) -> bool:
        node = unwrap(node)
        if node is None:
            return False
        if node.type in MARKUP_TYPES:
            return True
        if node.type == "call_expression":
            fn = unwrap(callee(node))
            return fn is not None and member_property_name(fn) == "createElement"
        return False

    def returns_markup(self, node: Node, strict: bool = False) -> bool:
        """Whether a return statement or function yields markup.

        A conditional counts when either branch is markup, or both when
        ``strict``.
        """
        if node.type == "return_statement":
            expr = return_argument(node)
        elif node.type == "arrow_function" and function_body(node) is not None and (
            function_body(node).type != "statement_block"
        ):
            expr = function_body(node)
        elif is_function(node):
            ret = find_return_statement(node)
            expr = return_argument(ret) if ret is not None else None
        else:
            return False

        expr = unwrap(expr)
        if expr is None:
            return False
        if expr.type == "ternary_expression":
            consequent = self.is_markup(expr.child_by_field_name("consequence"))
            alternate = self.is_markup(expr.child_by_field_name("alternative"))
            return (consequent and alternate) if strict else (consequent or alternate)
        return self.is_markup(expr)
