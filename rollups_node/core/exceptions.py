"""
Custom exception hierarchy for the rollups node.

Every failure the node can surface to the operator derives from
NodeException, so the CLI can turn it into a single fatal log line
and an exit code.
"""

from __future__ import annotations


class NodeException(Exception):
    """
    Base exception for all node errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (env keys, binaries, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
    """

    exit_code: int = 1

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class NodeConfigError(NodeException):
    """Base class for configuration-related errors."""

    pass


class ConfigValidationError(NodeConfigError, ValueError):
    """
    Invalid or missing configuration value.

    Inherits from ValueError so callers validating input generically
    can still catch it.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)
        self.key = key
        self.value = value


# =============================================================================
# Service Errors
# =============================================================================


class ServiceError(NodeException):
    """Base class for errors raised while supervising a service."""

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if service_name:
            ctx["service"] = service_name
        super().__init__(message, context=ctx, cause=cause)
        self.service_name = service_name


class ServiceLaunchError(ServiceError):
    """
    The service executable could not be started.

    Raised for missing binaries and permission problems, before any
    waiting happens.
    """

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        executable: str | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if executable:
            ctx["executable"] = executable
        super().__init__(message, service_name=service_name, context=ctx, cause=cause)
        self.executable = executable


class ServiceExitError(ServiceError):
    """
    The service process exited abnormally.

    Negative return codes follow the subprocess convention: the process
    was killed by signal ``-returncode``.
    """

    def __init__(
        self,
        message: str,
        *,
        service_name: str | None = None,
        returncode: int | None = None,
        context: dict | None = None,
        cause: BaseException | None = None,
    ) -> None:
        ctx = context or {}
        if returncode is not None:
            ctx["returncode"] = returncode
        super().__init__(message, service_name=service_name, context=ctx, cause=cause)
        self.returncode = returncode


class ServiceAlreadyStartedError(ServiceError):
    """A service instance was started a second time."""

    pass


# =============================================================================
# Cancellation reasons
# =============================================================================


class ContextCancelled(NodeException):
    """Default reason attached to a cancelled execution context."""

    def __init__(self, message: str = "context canceled", **kwargs) -> None:
        super().__init__(message, **kwargs)


class SiblingFailed(ContextCancelled):
    """Cancellation reason used when a sibling service failed."""

    pass
