"""
Process runner: launches one external process and supervises it under an
ExecutionContext.

Process exit and context cancellation are raced with
concurrent.futures.wait(FIRST_COMPLETED). If the context wins, the
process gets SIGTERM (and SIGKILL after the optional grace period) and
the runner keeps waiting until the process has actually exited.
"""

from __future__ import annotations

import shlex
import signal
import subprocess
import threading
from collections.abc import Mapping, Sequence
from concurrent import futures
from typing import IO

from ...core.context import ExecutionContext
from ...core.exceptions import (
    ServiceAlreadyStartedError,
    ServiceExitError,
    ServiceLaunchError,
)
from ...core.interfaces.logger import ILogger
from ...core.models.service import ExitOutcome

# Exit statuses that mean "terminated by SIGTERM": the subprocess
# convention (negative signal number) and the shell one (128 + signal).
TERMINATION_STATUSES = frozenset({-signal.SIGTERM, 128 + signal.SIGTERM})


def describe_returncode(returncode: int) -> str:
    """Human-readable description of a Popen return code."""
    if returncode < 0:
        try:
            sig = signal.Signals(-returncode).name
        except ValueError:
            sig = str(-returncode)
        return f"killed by signal {sig}"
    return f"exit status {returncode}"


class ProcessRunner:
    """
    Single-use supervisor for one external process.

    Owns the process handle for the duration of run(); a second call to
    run() raises ServiceAlreadyStartedError.
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
        """
        Initialize process runner.

        Args:
            name: Service name used in diagnostics
            argv: Executable and arguments
            logger: Logger for supervision diagnostics
            shutdown_timeout: Seconds to wait after SIGTERM before SIGKILL
                (None waits forever)
            stdout: Child stdout (default: inherit the node's stdout)
            stderr: Child stderr (default: inherit the node's stderr)
            env: Child environment (default: inherit the node's environment)
        """
        if not argv:
            raise ValueError("argv must name an executable")
        self._name = name
        self._argv = list(argv)
        self._logger = logger
        self._shutdown_timeout = shutdown_timeout
        self._stdout = stdout
        self._stderr = stderr
        self._env = dict(env) if env is not None else None
        self._started = False
        self._lock = threading.Lock()

    @property
    def argv(self) -> list[str]:
        return list(self._argv)

    @property
    def logger(self) -> ILogger:
        """Get logger, creating NullLogger if none was injected."""
        if self._logger is None:
            from ..logging import NullLogger

            self._logger = NullLogger()
        return self._logger

    def run(self, ctx: ExecutionContext) -> ExitOutcome:
        """
        Launch the process and block until it has exited.

        Args:
            ctx: Context whose cancellation requests termination

        Returns:
            ExitOutcome.CLEAN or ExitOutcome.TERMINATED

        Raises:
            ServiceLaunchError: If the executable could not be started
            ServiceExitError: If the process exited abnormally
            ServiceAlreadyStartedError: If run() was already called
        """
        with self._lock:
            if self._started:
                raise ServiceAlreadyStartedError(
                    f"{self._name} was already started", service_name=self._name
                )
            self._started = True

        proc = self._launch()

        terminate_requested = False
        killed = False
        with futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix=f"{self._name}-wait"
        ) as pool:
            exited = pool.submit(proc.wait)
            try:
                self.logger.debug("%s: started pid %d", self._name, proc.pid)
                done, _ = futures.wait(
                    [exited, ctx.done()], return_when=futures.FIRST_COMPLETED
                )

                if exited not in done:
                    self.logger.info("%s: %s", self._name, ctx.reason)
                    proc.send_signal(signal.SIGTERM)
                    terminate_requested = True
                    killed = self._await_exit(proc, exited)

                returncode = exited.result()
            except BaseException:
                # The pool cannot shut down until the child is gone.
                self._stop(proc)
                raise

        self.logger.debug("%s: %s", self._name, describe_returncode(returncode))
        return self._classify(returncode, terminate_requested, killed)

    def _launch(self) -> subprocess.Popen:
        self.logger.debug("%s: launching %s", self._name, shlex.join(self._argv))
        try:
            # Own session: a terminal Ctrl-C reaches the node only, and the
            # node turns it into SIGTERM for each child.
            return subprocess.Popen(
                self._argv,
                stdout=self._stdout,
                stderr=self._stderr,
                env=self._env,
                start_new_session=True,
            )
        except OSError as e:
            raise ServiceLaunchError(
                f"failed to start {self._name}: {e.strerror or e}",
                service_name=self._name,
                executable=self._argv[0],
                cause=e,
            ) from e

    def _await_exit(self, proc: subprocess.Popen, exited: futures.Future) -> bool:
        """Wait out the grace period after SIGTERM; True if SIGKILL was needed."""
        if self._shutdown_timeout is None:
            return False
        try:
            exited.result(timeout=self._shutdown_timeout)
        except futures.TimeoutError:
            self.logger.warning(
                "%s: still running %.1fs after SIGTERM, killing",
                self._name,
                self._shutdown_timeout,
            )
            proc.kill()
            return True
        return False

    def _stop(self, proc: subprocess.Popen) -> None:
        """Terminate and reap ``proc`` while an error is propagating."""
        if proc.poll() is not None:
            return
        proc.send_signal(signal.SIGTERM)
        try:
            proc.wait(timeout=self._shutdown_timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()

    def _classify(self, returncode: int, terminate_requested: bool, killed: bool) -> ExitOutcome:
        if returncode == 0:
            return ExitOutcome.TERMINATED if terminate_requested else ExitOutcome.CLEAN

        if terminate_requested:
            if returncode in TERMINATION_STATUSES:
                return ExitOutcome.TERMINATED
            if killed and returncode == -signal.SIGKILL:
                return ExitOutcome.TERMINATED

        raise ServiceExitError(
            f"{self._name} {describe_returncode(returncode)}",
            service_name=self._name,
            returncode=returncode,
        )
