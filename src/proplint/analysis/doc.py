"""Comment inspection: JSDoc tags and ``@jsx`` pragmas."""

from __future__ import annotations

import re
from dataclasses import dataclass

from proplint.analysis.nodes import Node, node_text

JSX_PRAGMA_RE = re.compile(r"^\*\s*@jsx\s+([^\s]+)")
IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")

_TAG_RE = re.compile(r"@(\w+)(?:[ \t]+\{([^}]*)\})?(?:[ \t]+([^\s{}]+))?")
_LEADING_STAR_RE = re.compile(r"^\s*\*\s?", re.MULTILINE)

# Constructs a JSDoc block may sit above instead of the documented node
_DOC_CARRIERS = frozenset(
    {"export_statement", "variable_declarator", "lexical_declaration", "variable_declaration"}
)


@dataclass(frozen=True, slots=True)
class DocTag:
    """One ``@title {type} name`` tag; ``name`` falls back to the braced type."""

    title: str
    type: str | None = None
    name: str | None = None


def comment_value(raw: str) -> str:
    """Comment text without its delimiters."""
    if raw.startswith("/*"):
        return raw[2:-2] if raw.endswith("*/") else raw[2:]
    if raw.startswith("//"):
        return raw[2:]
    return raw


def parse_doc_comment(raw: str) -> list[DocTag]:
    """Parse the block tags of a ``/** ... */`` comment."""
    body = _LEADING_STAR_RE.sub("", comment_value(raw).lstrip("*"))
    tags = []
    for match in _TAG_RE.finditer(body):
        title, type_expr, name = match.groups()
        type_expr = type_expr.strip() if type_expr else None
        tags.append(DocTag(title=title, type=type_expr, name=name or type_expr))
    return tags


def doc_comment_for(node: Node) -> str | None:
    """The JSDoc block directly above ``node`` (or its declaration/export wrapper)."""
    anchor = node
    while anchor.parent is not None and anchor.parent.type in _DOC_CARRIERS:
        anchor = anchor.parent
    previous = anchor.prev_named_sibling
    if previous is None or previous.type != "comment":
        return None
    text = node_text(previous)
    if not text.startswith("/**"):
        return None
    if anchor.start_point[0] - previous.end_point[0] > 1:
        return None
    return text


def pragma_from_comment(raw: str) -> str | None:
    """Namespace named by an ``@jsx`` pragma block comment, if any.

    ``/** @jsx Preact.h */`` yields ``Preact``.
    """
    if not raw.startswith("/*"):
        return None
    match = JSX_PRAGMA_RE.match(comment_value(raw))
    if match is None:
        return None
    namespace = match.group(1).split(".")[0]
    if not IDENTIFIER_RE.match(namespace):
        return None
    return namespace
