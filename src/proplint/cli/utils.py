"""CLI utilities."""

from pathlib import Path
from typing import Any

import click
from rich.console import Console

from proplint.config import ProplintConfig, load_config
from proplint.core.errors import ConfigError
from proplint.core.logging import configure_logging

_console = Console(stderr=True)


def get_console() -> Console:
    """Shared Rich console (stderr) for human-readable output."""
    return _console


def load_cli_config(ctx: click.Context, root: Path, **overrides: Any) -> ProplintConfig:
    """Load config for ``root`` and configure logging from it.

    ``--verbose`` forces DEBUG regardless of the configured level.

    Raises:
        click.ClickException: If the config files are invalid
    """
    try:
        config = load_config(root, **{k: v for k, v in overrides.items() if v})
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    logging_config = config.logging
    if ctx.obj and ctx.obj.get("verbose"):
        logging_config = logging_config.model_copy(update={"level": "DEBUG"})
    configure_logging(config=logging_config)
    return config


def common_root(paths: tuple[Path, ...]) -> Path:
    """Directory config files are looked up from: the first path's directory."""
    if not paths:
        return Path.cwd()
    first = paths[0].resolve()
    return first if first.is_dir() else first.parent
