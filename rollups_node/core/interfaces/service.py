"""
Service interface definitions.

A service wraps exactly one external process. Concrete services are
independent implementations of this contract; the supervisor only
ever sees IService.
"""

from abc import ABC, abstractmethod

from ..context import ExecutionContext
from ..models.service import ExitOutcome


class IService(ABC):
    """
    Interface for a supervisable unit of external execution.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Stable identifier used in diagnostics.

        Examples: 'graphql-server', 'authority-claimer'
        """
        pass

    @abstractmethod
    def start(self, ctx: ExecutionContext) -> ExitOutcome:
        """
        Launch the process and block until it has exited.

        When ``ctx`` is cancelled the process receives SIGTERM and this
        call keeps waiting for it to exit.

        Args:
            ctx: Context whose cancellation requests termination

        Returns:
            ExitOutcome.CLEAN if the process exited with status 0 on its own,
            ExitOutcome.TERMINATED if it exited because of the termination
            request

        Raises:
            ServiceLaunchError: If the executable could not be started
            ServiceExitError: If the process exited abnormally
            ServiceAlreadyStartedError: If called more than once
        """
        pass

    def __str__(self) -> str:
        return self.name
