"""
Signal handler that turns SIGINT/SIGTERM into context cancellation.

Handlers are installed for the lifetime of a supervisor run and restored
afterwards. The shutdown callback never runs inside the signal frame: it
is dispatched to a short-lived thread so it can take locks that the
interrupted main thread may be holding.
"""

import signal
import threading
from collections.abc import Callable
from signal import Handlers

from ..core.interfaces.logger import ILogger

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class ShutdownSignalHandler:
    """
    Manages shutdown signals for the node process.

    Counts the signals received and calls ``on_shutdown`` with the
    signal number every time a shutdown signal arrives.
    """

    def __init__(
        self,
        on_shutdown: Callable[[int], None],
        signals: tuple[int, ...] = DEFAULT_SIGNALS,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize signal handler.

        Args:
            on_shutdown: Callback receiving the signal number
            signals: Signals to handle
            logger: Logger for internal diagnostics
        """
        self._on_shutdown = on_shutdown
        self._signals = signals
        self._signal_count = 0
        self._original_handlers: dict[int, Handlers | Callable | int | None] = {}
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, creating NullLogger if none was injected."""
        if self._logger is None:
            from .logging import NullLogger

            self._logger = NullLogger()
        return self._logger

    def install(self) -> None:
        """Install signal handlers, saving the previous ones."""
        for signum in self._signals:
            self.logger.debug("Installing handler for %s", signal.Signals(signum).name)
            self._original_handlers[signum] = signal.signal(signum, self._handle_signal)

    def restore(self) -> None:
        """Restore original signal handlers."""
        for signum, handler in self._original_handlers.items():
            self.logger.debug("Restoring handler for %s", signal.Signals(signum).name)
            signal.signal(signum, handler if handler is not None else signal.SIG_DFL)
        self._original_handlers.clear()

    def __enter__(self) -> "ShutdownSignalHandler":
        self.install()
        return self

    def __exit__(self, *exc_info) -> None:
        self.restore()

    def _handle_signal(self, signum: int, frame) -> None:
        """Record the signal and dispatch the shutdown callback."""
        self._signal_count += 1
        if self._signal_count > 1:
            self.logger.warning("Shutdown already in progress, waiting for services to exit")
        threading.Thread(
            target=self._on_shutdown,
            args=(signum,),
            name="shutdown-signal",
            daemon=True,
        ).start()
