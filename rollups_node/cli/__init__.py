"""
Click-based CLI for the rollups node.

Usage:
    from rollups_node.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

import click

from ..core.exceptions import NodeConfigError
from .context import NodeContext
from .decorators import fatal

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("rollups-node")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="rollups-node")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """rollups-node - supervisor for the rollups auxiliary services

    Launches the configured servers as child processes, forwards their
    output, and shuts them down gracefully on SIGINT/SIGTERM.

    \b
    Commands:
        rollups-node run          Start and supervise the configured services
        rollups-node services     List the services the node can run
        rollups-node config       Show the resolved configuration

    \b
    Configuration is read from CARTESI_* environment variables.
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    if ctx.obj is None:
        try:
            ctx.obj = NodeContext.create()
        except NodeConfigError as e:
            from ..services.logging import NodeLogger

            fatal(NodeLogger(), e)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "NodeContext",
    "__version__",
    "cli",
    "register_commands",
]
