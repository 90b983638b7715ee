"""proplint CLI - proplint command."""

import click

from proplint.cli.check import check_command
from proplint.cli.components import components_command


@click.group()
@click.version_option(version="0.1.0", prog_name="proplint")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """proplint - Prop validation checks for JavaScript component code."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(check_command, name="check")
cli.add_command(components_command, name="components")


if __name__ == "__main__":
    cli()
