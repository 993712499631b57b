#!/usr/bin/env python3
"""
Policy CLI - rate document templates
"""

from pathlib import Path

import click

from ..core.json_utils import format_json, write_json
from ..policy import default_policy_template


@click.command()
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write template to file")
def template(output: Path | None) -> None:
    """
    Print the default rates template (JSON).

    Examples:
      rebudget template
      rebudget template --output rates.json
    """
    data = default_policy_template()
    if output:
        write_json(output, data)
        click.echo(f"✅ Template written to {output}")
    else:
        click.echo(format_json(data))
