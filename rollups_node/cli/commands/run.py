"""
Native Click implementation of the run command.

Usage: rollups-node run [--service NAME ...] [--cancel-on-failure]
"""

from __future__ import annotations

import signal

import click

from ...core.context import ExecutionContext
from ...core.exceptions import ContextCancelled
from ...services.signal_handler import ShutdownSignalHandler
from ...services.supervision import Supervisor
from ..context import NodeContext
from ..decorators import fatal_on_error


@click.command("run")
@click.option(
    "-s",
    "--service",
    "service_names",
    multiple=True,
    help="Service to run (repeatable; default: CARTESI_SERVICES)",
)
@click.option(
    "--cancel-on-failure",
    is_flag=True,
    default=False,
    help="Shut the other services down as soon as one fails",
)
@click.pass_obj
@fatal_on_error
def run(
    ctx: NodeContext,
    service_names: tuple[str, ...],
    cancel_on_failure: bool,
) -> None:
    """Start and supervise the configured services.

    Runs until every service has exited. SIGINT or SIGTERM asks all
    services to terminate gracefully.

    \b
    Examples:
        rollups-node run
        rollups-node run -s graphql-server -s inspect-server
        CARTESI_SERVICES=graphql-server,authority-claimer rollups-node run
    """
    config = ctx.config
    logger = ctx.logger
    names = service_names or config.services

    services = ctx.container.create_services(
        names,
        logger=logger,
        shutdown_timeout=config.escalation_timeout,
    )
    supervisor = Supervisor(services, logger=logger, cancel_on_failure=cancel_on_failure)

    root = ExecutionContext()

    def on_shutdown(signum: int) -> None:
        root.cancel(ContextCancelled(f"received {signal.Signals(signum).name}"))

    with ShutdownSignalHandler(on_shutdown, logger=logger):
        supervisor.run(root)

    logger.info("All services stopped")
