"""
Native Click implementation of the config command.

Usage: rollups-node config
"""

import click

from ...core.settings import describe_config
from ..context import NodeContext


@click.command("config")
@click.pass_obj
def config(ctx: NodeContext) -> None:
    """Show the resolved configuration.

    Values come from CARTESI_* environment variables, falling back to
    the built-in defaults.
    """
    for key, value in describe_config(ctx.config):
        if isinstance(value, tuple):
            value = ",".join(value)
        click.echo(f"{key}={value}")
