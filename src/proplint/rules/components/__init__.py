"""Component detection: classification predicates, registry and the detecting visitor."""

from proplint.rules.components.detector import ComponentDetector
from proplint.rules.components.predicates import NodeRoles, PragmaCell
from proplint.rules.components.registry import (
    Component,
    ComponentRegistry,
    Confidence,
    Role,
    UsedProp,
    merge_confidence,
)

__all__ = [
    "Component",
    "ComponentDetector",
    "ComponentRegistry",
    "Confidence",
    "NodeRoles",
    "PragmaCell",
    "Role",
    "UsedProp",
    "merge_confidence",
]
