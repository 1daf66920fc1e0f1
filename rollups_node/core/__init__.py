"""
Core abstractions for the rollups node: configuration, execution
context, interfaces, models and the service container.
"""

from .context import ExecutionContext
from .exceptions import (
    ConfigValidationError,
    ContextCancelled,
    NodeConfigError,
    NodeException,
    ServiceAlreadyStartedError,
    ServiceError,
    ServiceExitError,
    ServiceLaunchError,
    SiblingFailed,
)

__all__ = [
    "ConfigValidationError",
    "ContextCancelled",
    "ExecutionContext",
    "NodeConfigError",
    "NodeException",
    "ServiceAlreadyStartedError",
    "ServiceError",
    "ServiceExitError",
    "ServiceLaunchError",
    "SiblingFailed",
]
