"""Linting: models and operations."""

from proplint.lint.models import (
    ComponentFamily,
    ComponentInfo,
    Diagnostic,
    FileResult,
    LintResult,
    Severity,
)
from proplint.lint.ops import LintOps, component_name

__all__ = [
    "ComponentFamily",
    "ComponentInfo",
    "Diagnostic",
    "FileResult",
    "LintOps",
    "LintResult",
    "Severity",
    "component_name",
]
