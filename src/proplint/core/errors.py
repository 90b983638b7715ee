"""proplint error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Parse (3xxx)
    PARSE_UNSUPPORTED_LANGUAGE = 3001
    PARSE_READ_FAILED = 3002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001
    INTERNAL_UNHANDLED_NODE = 9003


@dataclass(frozen=True, slots=True)
class ProplintError(Exception):
    """Base error with structured context for CLI and JSON output."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ProplintError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ParseError(ProplintError):
    """Source parsing errors."""

    @classmethod
    def unsupported_language(cls, path: str, ext: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_LANGUAGE,
            message=f"Unsupported file extension: {ext}",
            details={"path": path, "ext": ext},
        )

    @classmethod
    def unknown_dialect(cls, dialect: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_UNSUPPORTED_LANGUAGE,
            message=f"Language not available: {dialect}",
            details={"dialect": dialect},
        )

    @classmethod
    def read_failed(cls, path: str, reason: str) -> "ParseError":
        return cls(
            code=ErrorCode.PARSE_READ_FAILED,
            message=f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class InternalError(ProplintError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )

    @classmethod
    def unhandled_node(cls, kind: str, operation: str) -> "InternalError":
        """A caller wired an operation to a node kind it was never meant to handle."""
        return cls(
            code=ErrorCode.INTERNAL_UNHANDLED_NODE,
            message=f"{kind} nodes are not handled by {operation}",
            details={"kind": kind, "operation": operation},
        )
