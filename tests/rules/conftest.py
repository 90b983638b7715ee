"""Fixtures for rule tests."""

import textwrap
from collections.abc import Callable
from typing import Any

import pytest

from proplint.config.models import DetectionConfig, PropTypesConfig, ProplintConfig
from proplint.lint import LintOps


@pytest.fixture
def lint() -> Callable[..., list[str]]:
    """Messages reported for a dedented source snippet."""

    def _lint(
        source: str,
        *,
        path: str = "Component.jsx",
        detection: DetectionConfig | None = None,
        **options: Any,
    ) -> list[str]:
        config = ProplintConfig(
            prop_types=PropTypesConfig(**options),
            detection=detection or DetectionConfig(),
        )
        result = LintOps(config).lint_source(textwrap.dedent(source), path=path)
        return [d.message for d in result.diagnostics]

    return _lint
