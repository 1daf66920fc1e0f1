"""
Cancellable execution context shared by concurrently running services.

An ExecutionContext carries a single cancellation signal and the reason
it was cancelled. It is shared by reference; nothing but cancel() ever
mutates it, and cancellation cannot be undone.

The cancellation signal is exposed as a concurrent.futures.Future so it
can be raced against other futures with concurrent.futures.wait().
"""

from __future__ import annotations

import threading
from concurrent import futures

from .exceptions import ContextCancelled


class ExecutionContext:
    """
    Cancellable token with a reason.

    Usage:
        ctx = ExecutionContext()
        worker_ctx = ctx.child()
        ...
        ctx.cancel()            # worker_ctx is cancelled too
        worker_ctx.reason       # ContextCancelled("context canceled")
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reason: BaseException | None = None
        self._done: futures.Future[BaseException] = futures.Future()

    def cancel(self, reason: BaseException | None = None) -> bool:
        """
        Cancel the context.

        Only the first call has an effect; later reasons are ignored.

        Args:
            reason: Why the context was cancelled (default: ContextCancelled)

        Returns:
            True if this call cancelled the context
        """
        with self._lock:
            if self._reason is not None:
                return False
            self._reason = reason if reason is not None else ContextCancelled()
        self._done.set_result(self._reason)
        return True

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._reason is not None

    @property
    def reason(self) -> BaseException | None:
        """The cancellation reason, or None while the context is live."""
        return self._reason

    def done(self) -> futures.Future[BaseException]:
        """Future resolved with the reason once the context is cancelled."""
        return self._done

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the context is cancelled; False on timeout."""
        try:
            self._done.result(timeout=timeout)
        except futures.TimeoutError:
            return False
        return True

    def child(self) -> ExecutionContext:
        """
        Derive a context that is cancelled whenever this one is.

        The child can also be cancelled on its own without affecting
        the parent.
        """
        child = ExecutionContext()
        self._done.add_done_callback(lambda f: child.cancel(f.result()))
        return child

    def __repr__(self) -> str:
        state = f"cancelled: {self._reason}" if self.cancelled else "live"
        return f"<ExecutionContext {state}>"
