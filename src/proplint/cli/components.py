"""proplint components command - list detected components."""

import json
from pathlib import Path

import click
from rich.table import Table

from proplint.cli.utils import common_root, get_console, load_cli_config
from proplint.core.errors import ParseError
from proplint.lint import LintOps


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def components_command(ctx: click.Context, path: Path, as_json: bool) -> None:
    """List the components detected in a source file."""
    config = load_cli_config(ctx, common_root((path,)))
    try:
        components = LintOps(config).detect_components_in_file(path)
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps([c.to_dict() for c in components], indent=2))
        return

    console = get_console()
    if not components:
        console.print(f"No components found in {path}", highlight=False)
        return

    table = Table(show_header=True, box=None, padding=(0, 1), pad_edge=False)
    table.add_column("line", justify="right", style="dim")
    table.add_column("name")
    table.add_column("family", style="cyan")
    table.add_column("propTypes")
    table.add_column("used", justify="right")
    for c in components:
        table.add_row(
            str(c.line),
            c.name or "[dim]<anonymous>[/dim]",
            c.family.value,
            "yes" if c.declares_props else "no",
            str(c.used_props),
        )
    console.print(table)
