"""Core module exports."""

from proplint.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ParseError,
    ProplintError,
)
from proplint.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ParseError",
    "ProplintError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
