"""Tree-sitter parsing for JavaScript and TypeScript sources.

The grammars come from the ``tree-sitter-javascript`` and
``tree-sitter-typescript`` packages. JSX is part of the JavaScript grammar;
``.tsx`` files use the TSX flavour of the TypeScript grammar, which is also
where structural type annotations come from.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tree_sitter

from proplint.core.errors import ParseError


@dataclass(frozen=True)
class GrammarSpec:
    """Where to find the tree-sitter language for a dialect."""

    module: str
    language_func: str = "language"


# dialect -> grammar
GRAMMARS: dict[str, GrammarSpec] = {
    "javascript": GrammarSpec("tree_sitter_javascript"),
    "typescript": GrammarSpec("tree_sitter_typescript", "language_typescript"),
    "tsx": GrammarSpec("tree_sitter_typescript", "language_tsx"),
}

# extension (no dot) -> dialect
EXTENSION_MAP: dict[str, str] = {
    "js": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "cjs": "javascript",
    "ts": "typescript",
    "mts": "typescript",
    "cts": "typescript",
    "tsx": "tsx",
}


@dataclass
class ParseResult:
    """Result of parsing a file."""

    tree: Any  # Tree-sitter Tree (not serializable)
    language: str
    source: bytes
    error_count: int
    total_nodes: int
    root_node: Any  # Tree-sitter Node

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


def detect_language(path: Path) -> str | None:
    """Dialect for a path, or None when the extension is not handled."""
    return EXTENSION_MAP.get(path.suffix.lower().lstrip("."))


@dataclass
class JsParser:
    """
    Tree-sitter parser for JavaScript-family sources.

    Usage::

        parser = JsParser()
        result = parser.parse(Path("src/Button.jsx"), content)
        result.root_node  # program node
    """

    _parser: Any = field(default=None, repr=False)
    _languages: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self._parser = tree_sitter.Parser()
        self._languages = {}

    def _get_language(self, dialect: str) -> Any:
        """Get or load a Tree-sitter language."""
        if dialect in self._languages:
            return self._languages[dialect]

        spec = GRAMMARS.get(dialect)
        if spec is None:
            raise ParseError.unknown_dialect(dialect)
        try:
            mod = importlib.import_module(spec.module)
            lang_fn = getattr(mod, spec.language_func)
        except (ImportError, AttributeError) as err:
            raise ParseError.unknown_dialect(dialect) from err

        lang = tree_sitter.Language(lang_fn())
        self._languages[dialect] = lang
        return lang

    def parse(self, path: Path, content: bytes | None = None) -> ParseResult:
        """
        Parse a file with Tree-sitter.

        Args:
            path: Path to file (used for language detection)
            content: File content as bytes. If None, reads from path.

        Returns:
            ParseResult with tree, language, and error info.

        Raises:
            ParseError: Unsupported extension or unreadable file.
        """
        language = detect_language(path)
        if language is None:
            raise ParseError.unsupported_language(str(path), path.suffix)

        if content is None:
            try:
                content = path.read_bytes()
            except OSError as e:
                raise ParseError.read_failed(str(path), str(e)) from e

        return self.parse_source(content, language)

    def parse_source(self, content: bytes | str, language: str = "javascript") -> ParseResult:
        """Parse in-memory source in the given dialect."""
        if isinstance(content, str):
            content = content.encode("utf-8")

        self._parser.language = self._get_language(language)
        tree = self._parser.parse(content)

        error_count = 0
        total_nodes = 0
        stack = [tree.root_node]
        while stack:
            node = stack.pop()
            total_nodes += 1
            if node.type == "ERROR" or node.is_missing:
                error_count += 1
            stack.extend(node.children)

        return ParseResult(
            tree=tree,
            language=language,
            source=content,
            error_count=error_count,
            total_nodes=total_nodes,
            root_node=tree.root_node,
        )
