"""
Click decorators for node CLI commands.

- fatal_on_error: turns a NodeException into a fatal log entry and exit code
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, NoReturn, TypeVar

import click

from ..core.exceptions import NodeException

if TYPE_CHECKING:
    from ..core.interfaces.logger import ILogger
    from .context import NodeContext

F = TypeVar("F", bound=Callable[..., Any])


def fatal(logger: ILogger, error: NodeException) -> NoReturn:
    """Log ``error`` and terminate the process with its exit code."""
    logger.error("%s", error)
    raise SystemExit(error.exit_code)


def fatal_on_error(f: F) -> F:
    """Decorator that makes NodeException fatal for a command.

    Usage:
        @cli.command()
        @click.pass_obj
        @fatal_on_error
        def run(ctx: NodeContext):
            ...

    Note:
        This decorator should be applied AFTER @click.pass_obj so that
        the NodeContext is available.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ctx_maybe: Any = args[0] if args else kwargs.get("ctx")

        if ctx_maybe is None:
            raise click.ClickException(
                "Internal error: NodeContext not available. "
                "Ensure @click.pass_obj is applied before @fatal_on_error."
            )
        ctx: NodeContext = ctx_maybe

        try:
            return f(*args, **kwargs)
        except NodeException as e:
            fatal(ctx.logger, e)

    return wrapper  # type: ignore[return-value]
