"""proplint check command - report props used without validation."""

import json
import sys
from pathlib import Path
from typing import Any

import click
from rich.table import Table

from proplint.cli.utils import common_root, get_console, load_cli_config
from proplint.lint import LintOps, LintResult


def _overrides(
    ignore: tuple[str, ...],
    custom_validator: tuple[str, ...],
    skip_undeclared: bool,
    pragma: str | None,
) -> dict[str, Any]:
    prop_types: dict[str, Any] = {}
    if ignore:
        prop_types["ignore"] = list(ignore)
    if custom_validator:
        prop_types["custom_validators"] = list(custom_validator)
    if skip_undeclared:
        prop_types["skip_undeclared"] = True
    overrides: dict[str, Any] = {}
    if prop_types:
        overrides["prop_types"] = prop_types
    if pragma:
        overrides["detection"] = {"pragma": pragma}
    return overrides


def _print_report(result: LintResult) -> None:
    console = get_console()
    for file_result in result.files:
        if file_result.status == "error":
            console.print(f"[red]✗[/red] {file_result.path}: {file_result.error_detail}", highlight=False)
            continue
        if not file_result.diagnostics:
            continue
        table = Table(title=file_result.path, title_justify="left", show_header=False, box=None, padding=(0, 1))
        table.add_column("location", style="dim")
        table.add_column("message")
        table.add_column("rule", style="cyan")
        for d in file_result.diagnostics:
            table.add_row(f"{d.line}:{d.column}", d.message, d.rule)
        console.print(table)
        console.print()

    total = result.total_diagnostics
    if total:
        console.print(f"[red]{total} problem(s)[/red] in {result.files_checked} file(s)", highlight=False)
    else:
        console.print(f"[green]✓[/green] {result.files_checked} file(s) clean", highlight=False)


@click.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True, path_type=Path))
@click.option("--ignore", multiple=True, help="Prop name never reported (repeatable)")
@click.option("--custom-validator", multiple=True, help="Trusted validator namespace (repeatable)")
@click.option("--skip-undeclared", is_flag=True, help="Only check components that declare propTypes")
@click.option("--pragma", default=None, help="Component library namespace (default: React)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def check_command(
    ctx: click.Context,
    paths: tuple[Path, ...],
    ignore: tuple[str, ...],
    custom_validator: tuple[str, ...],
    skip_undeclared: bool,
    pragma: str | None,
    as_json: bool,
) -> None:
    """Check components for props used without validation.

    PATHS are files or directories (default: current directory). Exits
    with status 1 when any problem is found.
    """
    paths = paths or (Path("."),)
    config = load_cli_config(
        ctx, common_root(paths), **_overrides(ignore, custom_validator, skip_undeclared, pragma)
    )
    result = LintOps(config).lint_paths(paths)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_report(result)

    if result.status != "clean":
        sys.exit(1)
