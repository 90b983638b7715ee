"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PROPLINT__SECTION__KEY)
3. Repo YAML (.proplint.yaml)
4. Global YAML (~/.config/proplint/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PROPLINT__<SECTION>__<KEY>=<VALUE>

Examples:
    PROPLINT__LOGGING__LEVEL=DEBUG
    PROPLINT__DETECTION__PRAGMA=Preact
    PROPLINT__PROP_TYPES__SKIP_UNDECLARED=true
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PROPLINT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every file and component decision.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class DetectionConfig(BaseModel):
    """Component detection settings.

    Factory settings are regular expressions matched against the printed
    callee of a call, anchored at both ends.

    Env vars:
        PROPLINT__DETECTION__PRAGMA: Base-library namespace (default: React)
        PROPLINT__DETECTION__KIND_FACTORY: Factory-component callee pattern
        PROPLINT__DETECTION__HOC_FACTORY: Higher-order factory callee pattern
        PROPLINT__DETECTION__CREATE_CLASS: Legacy class factory name
    """

    pragma: str = Field(
        default="React",
        description="Namespace identifier of the component library. "
        "A /** @jsx Foo.h */ comment overrides it for the rest of a file.",
    )
    kind_factory: str = Field(
        default="kind",
        description="Callee pattern of object-factory components, e.g. kind({...}).",
    )
    hoc_factory: str = Field(
        default="hoc",
        description="Callee pattern of higher-order factories. Never treated as components.",
    )
    create_class: str = Field(
        default="createClass",
        description="Legacy class factory, optionally namespaced under the pragma.",
    )

    @field_validator("pragma")
    @classmethod
    def validate_pragma(cls, v: str) -> str:
        if not _IDENTIFIER_RE.match(v):
            raise ValueError(f"Pragma must be a JS identifier, got {v!r}")
        return v

    @field_validator("kind_factory", "hoc_factory", "create_class")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid pattern {v!r}: {e}") from e
        return v


class PropTypesConfig(BaseModel):
    """Options of the prop-types rule.

    Env vars:
        PROPLINT__PROP_TYPES__SKIP_UNDECLARED: Skip components without propTypes
    """

    model_config = ConfigDict(extra="forbid")

    ignore: list[str] = Field(
        default_factory=list,
        description="Prop names that are never reported.",
    )
    custom_validators: list[str] = Field(
        default_factory=list,
        description="Validator namespaces trusted without structural analysis.",
    )
    skip_undeclared: bool = Field(
        default=False,
        description="Only validate components that declare propTypes at all.",
    )


class FilesConfig(BaseModel):
    """Source discovery settings."""

    extensions: list[str] = Field(
        default_factory=lambda: [".js", ".jsx", ".mjs", ".cjs", ".ts", ".tsx"],
        description="File extensions linted when a directory is given.",
    )
    excluded_dirs: list[str] = Field(
        default_factory=list,
        description="Extra directory names pruned during discovery.",
    )


class ProplintConfig(BaseModel):
    """Root configuration for proplint.

    All settings can be configured via:
    1. Environment variables: PROPLINT__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    prop_types: PropTypesConfig = Field(default_factory=PropTypesConfig)
    files: FilesConfig = Field(default_factory=FilesConfig)
