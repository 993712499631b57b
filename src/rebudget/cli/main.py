#!/usr/bin/env python3
"""
Main CLI Entry Point for the Rebudget Tool

Provides the `rebudget` command group.
"""

import logging
import os

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Grant Rebudget - budget transfers with automatic F&A

    Preview and apply transfers between budget line items, posting indirect
    costs to the F&A account and exporting the audit trail.
    """
    ctx.ensure_object(dict)

    if config_env:
        os.environ["REBUDGET_ENV"] = config_env

    if debug:
        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("rebudget").setLevel(logging.DEBUG)

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = get_config()

    if verbose:
        click.echo(f"Environment: {ctx.obj['config'].environment.value}")
        click.echo(f"Data directory: {ctx.obj['config'].data_dir}")


@main.command()
def version() -> None:
    """Show version information."""
    from rebudget import __author__, __version__

    click.echo(f"Grant Rebudget v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    click.echo("Current Configuration:")
    for name, value in ctx.obj["config"].to_dict().items():
        click.echo(f"  {name}: {value}")


from .policy import template  # noqa: E402
from .transfers import preview, project  # noqa: E402

main.add_command(template)
main.add_command(preview)
main.add_command(project)


if __name__ == "__main__":
    main()
