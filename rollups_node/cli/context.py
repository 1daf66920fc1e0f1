"""
Click context extension for the node CLI.

Provides NodeContext, which holds the bootstrapped container and is
passed through the Click command chain via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..core.bootstrap import bootstrap
from ..core.container import ServiceContainer
from ..core.interfaces.logger import ILogger
from ..core.models.config import NodeConfig


@dataclass
class NodeContext:
    """Extended context passed through Click command chain.

    Attributes:
        container: Bootstrapped service container
    """

    container: ServiceContainer

    @classmethod
    def create(cls, container: ServiceContainer | None = None) -> NodeContext:
        """Create a NodeContext, bootstrapping from the environment if needed.

        Raises:
            ConfigValidationError: If the configuration cannot be loaded
        """
        return cls(container=container if container is not None else bootstrap())

    @property
    def config(self) -> NodeConfig:
        return self.container.resolve(NodeConfig)

    @property
    def logger(self) -> ILogger:
        return self.container.resolve(ILogger)  # type: ignore[type-abstract]
