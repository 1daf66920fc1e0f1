"""
Supervisor: starts a set of services concurrently under one shared
ExecutionContext and aggregates their results.

By default a failing service does not affect its siblings; only the
owner of the context decides when everything shuts down. With
cancel_on_failure=True the supervisor runs the services under a child
context and cancels it on the first failure, so the remaining services
receive SIGTERM. The caller's context is never cancelled.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent import futures

from ...core.context import ExecutionContext
from ...core.exceptions import SiblingFailed
from ...core.interfaces.logger import ILogger
from ...core.interfaces.service import IService
from ...core.models.service import ExitOutcome, ServiceResult


class Supervisor:
    """
    Runs every registered service on its own thread and waits for all.

    Usage:
        supervisor = Supervisor([GraphQLService(), InspectService()])
        results = supervisor.run(ctx)   # raises the first failure
    """

    def __init__(
        self,
        services: Sequence[IService],
        logger: ILogger | None = None,
        cancel_on_failure: bool = False,
    ) -> None:
        """
        Initialize supervisor.

        Args:
            services: Services in registration order
            logger: Logger for lifecycle diagnostics
            cancel_on_failure: Cancel the remaining services when one fails

        Raises:
            ValueError: If two services share a name
        """
        seen: set[str] = set()
        for service in services:
            if service.name in seen:
                raise ValueError(f"duplicate service name: {service.name}")
            seen.add(service.name)

        self._services = list(services)
        self._logger = logger
        self._cancel_on_failure = cancel_on_failure

    @property
    def services(self) -> list[IService]:
        return list(self._services)

    @property
    def logger(self) -> ILogger:
        """Get logger, creating NullLogger if none was injected."""
        if self._logger is None:
            from ..logging import NullLogger

            self._logger = NullLogger()
        return self._logger

    def run(self, ctx: ExecutionContext) -> list[ServiceResult]:
        """
        Start all services and wait for every one of them to finish.

        Args:
            ctx: Shared context; cancelling it shuts every service down

        Returns:
            One ServiceResult per service, in registration order

        Raises:
            Exception: The first failure in registration order, after all
                services have finished
        """
        if not self._services:
            return []

        run_ctx = ctx.child() if self._cancel_on_failure else ctx
        self.logger.info(
            "Starting %d service(s): %s",
            len(self._services),
            ", ".join(s.name for s in self._services),
        )

        with futures.ThreadPoolExecutor(
            max_workers=len(self._services), thread_name_prefix="service"
        ) as pool:
            pending = [pool.submit(self._start_one, run_ctx, s) for s in self._services]
            results = [f.result() for f in pending]

        for result in results:
            if result.error is not None:
                raise result.error
        return results

    def _start_one(self, ctx: ExecutionContext, service: IService) -> ServiceResult:
        try:
            outcome = service.start(ctx)
        except Exception as e:
            self.logger.warning("%s failed: %s", service.name, e)
            if self._cancel_on_failure:
                ctx.cancel(SiblingFailed(f"sibling service {service.name} failed"))
            return ServiceResult(name=service.name, outcome=ExitOutcome.FAILED, error=e)

        self.logger.info("%s finished (%s)", service.name, outcome.value)
        return ServiceResult(name=service.name, outcome=outcome)
