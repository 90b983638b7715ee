"""Syntax-tree analysis shared by the rules: node helpers, traversal, scopes, doc comments."""

from proplint.analysis.doc import DocTag, doc_comment_for, parse_doc_comment, pragma_from_comment
from proplint.analysis.scope import (
    Definition,
    DefinitionKind,
    Reference,
    Scope,
    ScopeKind,
    ScopeManager,
    Variable,
)
from proplint.analysis.traversal import Visitor, iter_subtree, walk

__all__ = [
    "Definition",
    "DefinitionKind",
    "DocTag",
    "Reference",
    "Scope",
    "ScopeKind",
    "ScopeManager",
    "Variable",
    "Visitor",
    "doc_comment_for",
    "iter_subtree",
    "parse_doc_comment",
    "pragma_from_comment",
    "walk",
]
