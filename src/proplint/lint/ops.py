"""Lint operations - discover sources, run the prop-types rule, collect results."""

from __future__ import annotations

import os
import time
from collections.abc import Iterable
from pathlib import Path

from proplint.analysis.nodes import (
    CLASS_TYPES,
    Node,
    call_of_argument,
    entry_key,
    entry_value,
    is_function,
    line_of,
    node_text,
    object_entries,
    owning_property,
    string_value,
)
from proplint.config.models import ProplintConfig
from proplint.core.errors import ParseError
from proplint.core.excludes import PRUNABLE_DIRS
from proplint.core.logging import clear_run_id, get_logger, set_run_id
from proplint.lint.models import (
    ComponentFamily,
    ComponentInfo,
    Diagnostic,
    FileResult,
    LintResult,
    Severity,
)
from proplint.parsing import JsParser, ParseResult, detect_language
from proplint.rules.props import RULE_NAME, PropTypesRule, run_rule

log = get_logger(__name__)


class LintOps:
    """Prop-types linting over files and in-memory sources."""

    def __init__(self, config: ProplintConfig | None = None) -> None:
        self._config = config or ProplintConfig()
        self._parser = JsParser()

    @property
    def config(self) -> ProplintConfig:
        return self._config

    # =========================================================================
    # Discovery
    # =========================================================================

    def discover(self, paths: Iterable[Path]) -> list[Path]:
        """Expand directories into lintable files, pruning dependency/build dirs.

        Files passed explicitly are kept whatever their location.
        """
        extensions = {e.lower() for e in self._config.files.extensions}
        pruned = PRUNABLE_DIRS | set(self._config.files.excluded_dirs)
        found: list[Path] = []
        for path in paths:
            if path.is_file():
                found.append(path)
                continue
            for dirpath, dirnames, filenames in os.walk(path):
                dirnames[:] = sorted(d for d in dirnames if d not in pruned)
                for filename in sorted(filenames):
                    candidate = Path(dirpath) / filename
                    if candidate.suffix.lower() in extensions:
                        found.append(candidate)
        return found

    # =========================================================================
    # Linting
    # =========================================================================

    def lint_paths(self, paths: Iterable[Path]) -> LintResult:
        """Lint every discovered file under ``paths``."""
        start_time = time.time()
        set_run_id()
        try:
            files = self.discover(paths)
            log.info("lint_started", files=len(files))

            result = LintResult()
            for path in files:
                result.files.append(self.lint_file(path))

            result.duration_seconds = time.time() - start_time
            log.info(
                "lint_finished",
                files=result.files_checked,
                diagnostics=result.total_diagnostics,
                status=result.status,
                duration_seconds=round(result.duration_seconds, 3),
            )
            return result
        finally:
            clear_run_id()

    def lint_file(self, path: Path) -> FileResult:
        try:
            parsed = self._parser.parse(path)
        except ParseError as e:
            log.warning("file_skipped", path=str(path), error=e.error_name, reason=e.message)
            return FileResult(path=str(path), status="error", error_detail=e.message)
        return self._lint_parsed(str(path), parsed)

    def lint_source(
        self,
        source: str | bytes,
        *,
        path: str = "<input>",
        language: str | None = None,
    ) -> FileResult:
        """Lint in-memory source; the dialect comes from ``path`` unless given."""
        dialect = language or detect_language(Path(path)) or "javascript"
        parsed = self._parser.parse_source(source, dialect)
        return self._lint_parsed(path, parsed)

    def _lint_parsed(self, path: str, parsed: ParseResult) -> FileResult:
        if parsed.has_errors:
            log.debug("syntax_errors_tolerated", path=path, errors=parsed.error_count)
        rule = self._run(parsed)
        diagnostics = [
            Diagnostic(
                path=path,
                line=v.node.start_point[0] + 1,
                column=v.node.start_point[1] + 1,
                end_line=v.node.end_point[0] + 1,
                end_column=v.node.end_point[1] + 1,
                message=v.message,
                rule=RULE_NAME,
                severity=Severity.ERROR,
                data=dict(v.data),
            )
            for v in rule.violations
        ]
        diagnostics.sort(key=lambda d: (d.line, d.column or 0))
        log.debug("file_linted", path=path, diagnostics=len(diagnostics))
        return FileResult(
            path=path,
            status="dirty" if diagnostics else "clean",
            diagnostics=diagnostics,
            components=rule.registry.length(),
            parse_errors=parsed.error_count,
        )

    def _run(self, parsed: ParseResult) -> PropTypesRule:
        return run_rule(
            parsed.root_node,
            options=self._config.prop_types,
            detection=self._config.detection,
        )

    # =========================================================================
    # Component listing
    # =========================================================================

    def detect_components(self, source: str | bytes, *, path: str = "<input>") -> list[ComponentInfo]:
        """Confirmed components of a source, in source order."""
        dialect = detect_language(Path(path)) or "javascript"
        rule = self._run(self._parser.parse_source(source, dialect))
        infos = [
            ComponentInfo(
                name=component_name(c.node),
                family=self._family(rule, c.node),
                line=line_of(c.node),
                declares_props=c.declared_prop_types is not None,
                used_props=len(c.used_prop_types),
            )
            for c in rule.registry.list().values()
        ]
        infos.sort(key=lambda i: i.line)
        return infos

    def detect_components_in_file(self, path: Path) -> list[ComponentInfo]:
        if detect_language(path) is None:
            raise ParseError.unsupported_language(str(path), path.suffix)
        try:
            content = path.read_bytes()
        except OSError as e:
            raise ParseError.read_failed(str(path), str(e)) from e
        return self.detect_components(content, path=str(path))

    @staticmethod
    def _family(rule: PropTypesRule, node: Node) -> ComponentFamily:
        roles = rule.roles
        if node.type in CLASS_TYPES:
            return ComponentFamily.PURE_CLASS if roles.is_pure_variant(node) else ComponentFamily.CLASS
        if node.type == "object":
            if roles.is_factory_component(node):
                return ComponentFamily.FACTORY
            return ComponentFamily.LEGACY_CLASS
        return ComponentFamily.FUNCTION


def component_name(node: Node) -> str | None:
    """Best-effort display name of a component node."""
    name = node.child_by_field_name("name") if node.type in CLASS_TYPES or is_function(node) else None
    if name is not None and node.type != "method_definition":
        return node_text(name)

    if node.type == "object":
        for entry in object_entries(node):
            if entry_key(entry) in ("name", "displayName"):
                value = entry_value(entry)
                if value is not None and value.type == "string":
                    return string_value(value)
        call = call_of_argument(node)
        if call is not None:
            node = call

    parent = node.parent
    if parent is not None and parent.type == "variable_declarator":
        return node_text(parent.child_by_field_name("name"))
    prop = owning_property(node)
    if prop is not None:
        return prop[0]
    return None
