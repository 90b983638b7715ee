"""Config module exports."""

from proplint.config.loader import load_config
from proplint.config.models import (
    DetectionConfig,
    FilesConfig,
    LoggingConfig,
    PropTypesConfig,
    ProplintConfig,
)

__all__ = [
    "load_config",
    "DetectionConfig",
    "FilesConfig",
    "LoggingConfig",
    "PropTypesConfig",
    "ProplintConfig",
]
