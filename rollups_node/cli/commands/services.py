"""
Native Click implementation of the services command.

Usage: rollups-node services
"""

import click

from ..context import NodeContext


@click.command("services")
@click.pass_obj
def services(ctx: NodeContext) -> None:
    """List the services the node can run."""
    enabled = set(ctx.config.services)
    for name in ctx.container.list_services():
        factory = ctx.container.get_service_factory(name)
        binary = getattr(factory, "BINARY_NAME", "-")
        marker = "*" if name in enabled else " "
        click.echo(f"{marker} {name:20} {binary}")
