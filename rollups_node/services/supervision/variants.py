"""
Concrete services supervised by the node.

Each variant binds a fixed executable to the IService contract and
delegates the actual supervision to its own ProcessRunner. New auxiliary
servers are added as new classes here and registered in
``rollups_node.core.bootstrap``; nothing else changes.

Variants that listen on a port receive it through their environment,
under the key named by ``PORT_ENV``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from typing import IO

from ...core.context import ExecutionContext
from ...core.interfaces.logger import ILogger
from ...core.interfaces.service import IService
from ...core.models.service import ExitOutcome
from .runner import ProcessRunner


def _fixed_runner(
    service_name: str,
    binary: str,
    logger: ILogger | None,
    shutdown_timeout: float | None,
    port_env: str | None = None,
    port: int | None = None,
) -> ProcessRunner:
    """Build the runner for a fixed executable, exporting the port if given."""
    env = None
    if port_env is not None and port is not None:
        env = {**os.environ, port_env: str(port)}
    return ProcessRunner(
        service_name,
        [binary],
        logger=logger,
        shutdown_timeout=shutdown_timeout,
        env=env,
    )


class GraphQLService(IService):
    """The rollups GraphQL server."""

    SERVICE_NAME = "graphql-server"
    BINARY_NAME = "cartesi-rollups-graphql-server"
    PORT_ENV = "GRAPHQL_PORT"

    def __init__(
        self,
        logger: ILogger | None = None,
        shutdown_timeout: float | None = None,
        port: int | None = None,
    ) -> None:
        self._runner = _fixed_runner(
            self.SERVICE_NAME, self.BINARY_NAME, logger, shutdown_timeout, self.PORT_ENV, port
        )

    @property
    def name(self) -> str:
        return self.SERVICE_NAME

    def start(self, ctx: ExecutionContext) -> ExitOutcome:
        return self._runner.run(ctx)


class InspectService(IService):
    """The inspect-state HTTP server."""

    SERVICE_NAME = "inspect-server"
    BINARY_NAME = "cartesi-rollups-inspect-server"
    PORT_ENV = "INSPECT_PORT"

    def __init__(
        self,
        logger: ILogger | None = None,
        shutdown_timeout: float | None = None,
        port: int | None = None,
    ) -> None:
        self._runner = _fixed_runner(
            self.SERVICE_NAME, self.BINARY_NAME, logger, shutdown_timeout, self.PORT_ENV, port
        )

    @property
    def name(self) -> str:
        return self.SERVICE_NAME

    def start(self, ctx: ExecutionContext) -> ExitOutcome:
        return self._runner.run(ctx)


class AuthorityClaimerService(IService):
    """The authority claimer, which submits epoch claims on chain."""

    SERVICE_NAME = "authority-claimer"
    BINARY_NAME = "cartesi-rollups-authority-claimer"

    def __init__(
        self,
        logger: ILogger | None = None,
        shutdown_timeout: float | None = None,
    ) -> None:
        self._runner = _fixed_runner(
            self.SERVICE_NAME, self.BINARY_NAME, logger, shutdown_timeout
        )

    @property
    def name(self) -> str:
        return self.SERVICE_NAME

    def start(self, ctx: ExecutionContext) -> ExitOutcome:
        return self._runner.run(ctx)


class ExternalService(IService):
    """
    Ad-hoc service wrapping an arbitrary command line.

    Usage:
        service = ExternalService("indexer", ["my-indexer", "--verbose"])
        service.start(ctx)
    """

    def __init__(
        self,
        name: str,
        argv: Sequence[str],
        logger: ILogger | None = None,
        shutdown_timeout: float | None = None,
        stdout: IO | int | None = None,
        stderr: IO | int | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._name = name
        self._runner = ProcessRunner(
            name,
            argv,
            logger=logger,
            shutdown_timeout=shutdown_timeout,
            stdout=stdout,
            stderr=stderr,
            env=env,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def argv(self) -> list[str]:
        return self._runner.argv

    def start(self, ctx: ExecutionContext) -> ExitOutcome:
        return self._runner.run(ctx)
