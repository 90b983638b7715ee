"""Parsing of JavaScript-family sources into tree-sitter syntax trees."""

from proplint.parsing.treesitter import (
    EXTENSION_MAP,
    JsParser,
    ParseResult,
    detect_language,
)

__all__ = [
    "EXTENSION_MAP",
    "JsParser",
    "ParseResult",
    "detect_language",
]
