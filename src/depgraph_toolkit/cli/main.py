"""
CLI interface for the dependency graph toolkit using Click.
"""

from typing import Any

import click

from ..shared.logging import get_logger, setup_logging
from .commands.analyze import analyze, security
from .commands.layout import layout


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Enable quiet mode")
@click.pass_context
def cli(ctx: Any, verbose: bool, quiet: bool) -> None:
    """Dependency Graph Toolkit - Analyze, classify and lay out .NET solution dependencies."""
    ctx.ensure_object(dict)

    # Store global flags in context for easy access by subcommands
    ctx.obj["global_flags"] = {"verbose": verbose, "quiet": quiet}

    if quiet:
        log_level = "WARNING"
    elif verbose:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    setup_logging(log_level)
    ctx.obj["logger"] = get_logger()


cli.add_command(analyze)
cli.add_command(security)
cli.add_command(layout)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
