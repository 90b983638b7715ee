"""Lint models - diagnostics and results."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal


class Severity(Enum):
    """Diagnostic severity level."""

    ERROR = "error"
    WARNING = "warning"


class ComponentFamily(Enum):
    """How a detected component is defined."""

    CLASS = "class"
    PURE_CLASS = "pure-class"
    LEGACY_CLASS = "legacy-class"
    FACTORY = "factory"
    FUNCTION = "function"


@dataclass
class Diagnostic:
    """A single rule violation."""

    path: str
    line: int
    message: str
    rule: str  # rule that produced this
    severity: Severity = Severity.ERROR
    column: int | None = None
    end_line: int | None = None
    end_column: int | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["severity"] = self.severity.value
        return result


@dataclass
class ComponentInfo:
    """A confirmed component, as reported by ``proplint components``."""

    name: str | None
    family: ComponentFamily
    line: int
    declares_props: bool = False
    used_props: int = 0

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        result["family"] = self.family.value
        return result


@dataclass
class FileResult:
    """Result of linting one file."""

    path: str
    status: Literal["clean", "dirty", "error"]
    diagnostics: list[Diagnostic] = field(default_factory=list)
    components: int = 0
    parse_errors: int = 0  # syntax error nodes tolerated by the parser
    error_detail: str | None = None  # If status=="error"


@dataclass
class LintResult:
    """Aggregated result from a lint run."""

    files: list[FileResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total_diagnostics(self) -> int:
        return sum(len(f.diagnostics) for f in self.files)

    @property
    def files_checked(self) -> int:
        return len(self.files)

    @property
    def status(self) -> Literal["clean", "dirty", "error"]:
        if any(f.status == "error" for f in self.files):
            return "error"
        if any(f.status == "dirty" for f in self.files):
            return "dirty"
        return "clean"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "files_checked": self.files_checked,
            "total_diagnostics": self.total_diagnostics,
            "duration_seconds": round(self.duration_seconds, 3),
            "files": [
                {
                    "path": f.path,
                    "status": f.status,
                    "components": f.components,
                    "parse_errors": f.parse_errors,
                    "error_detail": f.error_detail,
                    "diagnostics": [d.to_dict() for d in f.diagnostics],
                }
                for f in self.files
            ],
        }
