"""
Unit tests for ProcessRunner and the service start contract.

Tests run real child processes (``python -c``) and verify:
- Exit classification (clean, terminated-by-request, failed)
- Cancellation sends SIGTERM and start() waits for the actual exit
- Launch failures are reported immediately
- SIGKILL escalation after the grace period
- Errors while waiting stop the child before propagating
"""

import os
import signal
import sys
import threading
import time

import pytest
from process_scripts import (
    EXIT_CLEAN,
    EXIT_ONE,
    SELF_KILL,
    SLEEP_FOREVER,
    exit_after,
    ignore_sigterm,
    trap_sigterm,
    wait_for_file,
)

from rollups_node.core.context import ExecutionContext
from rollups_node.core.exceptions import (
    ContextCancelled,
    ServiceAlreadyStartedError,
    ServiceExitError,
    ServiceLaunchError,
)
from rollups_node.core.models.service import ExitOutcome
from rollups_node.services.supervision import ProcessRunner, describe_returncode
from rollups_node.services.supervision import runner as runner_module


class TestExitClassification:
    """Exit statuses observed without any termination request."""

    def test_clean_exit_returns_clean(self, python_service, ctx):
        service = python_service("clean", EXIT_CLEAN)

        assert service.start(ctx) is ExitOutcome.CLEAN

    def test_clean_exit_ignores_later_cancellation(self, python_service, ctx):
        service = python_service("clean", EXIT_CLEAN)

        outcome = service.start(ctx)
        ctx.cancel()

        assert outcome is ExitOutcome.CLEAN

    def test_nonzero_exit_raises(self, python_service, ctx):
        service = python_service("broken", EXIT_ONE)

        with pytest.raises(ServiceExitError) as exc_info:
            service.start(ctx)

        assert exc_info.value.returncode == 1
        assert exc_info.value.service_name == "broken"
        assert "exit status 1" in str(exc_info.value)

    def test_signal_death_not_requested_raises(self, python_service, ctx):
        """Death by a signal the node did not send is a failure."""
        service = python_service("suicidal", SELF_KILL)

        with pytest.raises(ServiceExitError) as exc_info:
            service.start(ctx)

        assert exc_info.value.returncode == -signal.SIGKILL
        assert "SIGKILL" in str(exc_info.value)


class TestCancellation:
    """Behavior when the context is cancelled while the process runs."""

    def test_default_sigterm_disposition_is_expected(self, python_service, ctx):
        service = python_service("sleeper", SLEEP_FOREVER)
        threading.Timer(0.05, ctx.cancel).start()

        assert service.start(ctx) is ExitOutcome.TERMINATED

    def test_graceful_exit_after_sigterm(self, python_service, ctx, ready_file):
        """Process that exits 0 on SIGTERM shortly after cancellation."""
        service = python_service("graceful", trap_sigterm(0, ready_file))

        def cancel_when_ready() -> None:
            wait_for_file(ready_file)
            time.sleep(0.05)
            ctx.cancel()

        threading.Thread(target=cancel_when_ready, daemon=True).start()

        assert service.start(ctx) is ExitOutcome.TERMINATED

    def test_shell_style_sigterm_status_is_expected(self, python_service, ctx, ready_file):
        service = python_service("shell-style", trap_sigterm(128 + signal.SIGTERM, ready_file))

        def cancel_when_ready() -> None:
            wait_for_file(ready_file)
            ctx.cancel()

        threading.Thread(target=cancel_when_ready, daemon=True).start()

        assert service.start(ctx) is ExitOutcome.TERMINATED

    def test_unrelated_status_after_sigterm_raises(self, python_service, ctx, ready_file):
        service = python_service("sloppy", trap_sigterm(2, ready_file))

        def cancel_when_ready() -> None:
            wait_for_file(ready_file)
            ctx.cancel()

        threading.Thread(target=cancel_when_ready, daemon=True).start()

        with pytest.raises(ServiceExitError) as exc_info:
            service.start(ctx)

        assert exc_info.value.returncode == 2

    def test_already_cancelled_context_terminates_and_waits(self, python_service, ctx):
        ctx.cancel()
        service = python_service("late", SLEEP_FOREVER)
        start = time.monotonic()

        assert service.start(ctx) is ExitOutcome.TERMINATED
        assert time.monotonic() - start < 10

    def test_cancellation_is_logged_with_reason(self, python_service, ctx, logger):
        ctx.cancel(ContextCancelled("received SIGTERM"))
        service = python_service("graphql-server", SLEEP_FOREVER)

        service.start(ctx)

        assert "graphql-server: received SIGTERM" in logger.messages("info")

    def test_start_waits_for_process_exit(self, ctx, logger, ready_file, tmp_path):
        """start() returns only after the child has actually exited."""
        marker = tmp_path / "exited"
        script = (
            "import signal, sys, time, pathlib\n"
            "def stop(*a):\n"
            "    time.sleep(0.3)\n"
            f"    pathlib.Path({str(marker)!r}).touch()\n"
            "    sys.exit(0)\n"
            "signal.signal(signal.SIGTERM, stop)\n"
            f"pathlib.Path({str(ready_file)!r}).touch()\n"
            "time.sleep(60)\n"
        )
        runner = ProcessRunner("slow-stop", [sys.executable, "-c", script], logger=logger)

        def cancel_when_ready() -> None:
            wait_for_file(ready_file)
            ctx.cancel()

        threading.Thread(target=cancel_when_ready, daemon=True).start()

        assert runner.run(ctx) is ExitOutcome.TERMINATED
        assert marker.exists()


class TestEscalation:
    """SIGKILL after the grace period."""

    def test_ignored_sigterm_is_killed_after_grace_period(
        self, python_service, ctx, logger, ready_file
    ):
        service = python_service("stubborn", ignore_sigterm(ready_file), shutdown_timeout=0.2)

        def cancel_when_ready() -> None:
            wait_for_file(ready_file)
            ctx.cancel()

        threading.Thread(target=cancel_when_ready, daemon=True).start()

        assert service.start(ctx) is ExitOutcome.TERMINATED
        assert any("killing" in msg for msg in logger.messages("warning"))

    def test_no_escalation_when_process_exits_in_time(self, python_service, ctx, logger):
        ctx.cancel()
        service = python_service("quick", SLEEP_FOREVER, shutdown_timeout=10)

        assert service.start(ctx) is ExitOutcome.TERMINATED
        assert logger.messages("warning") == []


class TestLaunch:
    """Launch failures and single-use semantics."""

    def test_missing_executable_raises_without_blocking(self, logger):
        runner = ProcessRunner("ghost", ["rollups-node-no-such-binary"], logger=logger)
        ctx = ExecutionContext()
        start = time.monotonic()

        with pytest.raises(ServiceLaunchError) as exc_info:
            runner.run(ctx)

        assert time.monotonic() - start < 5
        assert exc_info.value.executable == "rollups-node-no-such-binary"
        assert exc_info.value.service_name == "ghost"

    def test_non_executable_file_raises(self, tmp_path, ctx):
        script = tmp_path / "not-executable"
        script.write_text("#!/bin/sh\nexit 0\n")
        script.chmod(0o644)
        runner = ProcessRunner("noexec", [str(script)])

        with pytest.raises(ServiceLaunchError):
            runner.run(ctx)

    def test_second_start_raises(self, python_service, ctx):
        service = python_service("once", EXIT_CLEAN)
        service.start(ctx)

        with pytest.raises(ServiceAlreadyStartedError):
            service.start(ctx)

    def test_empty_argv_rejected(self):
        with pytest.raises(ValueError):
            ProcessRunner("nothing", [])

    def test_output_can_be_redirected(self, ctx, tmp_path):
        out = tmp_path / "out.txt"
        with open(out, "w") as f:
            runner = ProcessRunner(
                "echo", [sys.executable, "-c", "print('hello from child')"], stdout=f
            )
            runner.run(ctx)

        assert out.read_text().strip() == "hello from child"

    def test_delayed_failure_is_reported(self, python_service, ctx):
        service = python_service("flaky", exit_after(0.01, 3))

        with pytest.raises(ServiceExitError) as exc_info:
            service.start(ctx)

        assert exc_info.value.returncode == 3


class TestDescribeReturncode:
    def test_exit_status(self):
        assert describe_returncode(4) == "exit status 4"

    def test_known_signal(self):
        assert describe_returncode(-signal.SIGTERM) == "killed by signal SIGTERM"

    def test_unknown_signal(self):
        assert describe_returncode(-250) == "killed by signal 250"


class TestInterruptedWait:
    """An error while waiting stops the child before it propagates."""

    @pytest.fixture
    def pid_file(self, tmp_path):
        return tmp_path / "pid"

    def child_script(self, pid_file, ignore_term: bool = False) -> str:
        disposition = "signal.signal(signal.SIGTERM, signal.SIG_IGN)\n" if ignore_term else ""
        return (
            "import os, pathlib, signal, time\n"
            f"{disposition}"
            f"pathlib.Path({str(pid_file)!r}).write_text(str(os.getpid()))\n"
            "time.sleep(60)\n"
        )

    def interrupt_wait(self, monkeypatch, pid_file, error: BaseException) -> None:
        def interrupted(*args, **kwargs):
            wait_for_file(pid_file)
            raise error

        monkeypatch.setattr(runner_module.futures, "wait", interrupted)

    def assert_reaped(self, pid_file) -> None:
        with pytest.raises(ProcessLookupError):
            os.kill(int(pid_file.read_text()), 0)

    def test_error_terminates_child(self, python_service, ctx, monkeypatch, pid_file):
        service = python_service("sleeper", self.child_script(pid_file))
        self.interrupt_wait(monkeypatch, pid_file, RuntimeError("wait failed"))
        start = time.monotonic()

        with pytest.raises(RuntimeError, match="wait failed"):
            service.start(ctx)

        assert time.monotonic() - start < 10
        self.assert_reaped(pid_file)

    def test_keyboard_interrupt_kills_stubborn_child(
        self, python_service, ctx, monkeypatch, pid_file
    ):
        service = python_service(
            "stubborn", self.child_script(pid_file, ignore_term=True), shutdown_timeout=0.2
        )
        self.interrupt_wait(monkeypatch, pid_file, KeyboardInterrupt())
        start = time.monotonic()

        with pytest.raises(KeyboardInterrupt):
            service.start(ctx)

        assert time.monotonic() - start < 10
        self.assert_reaped(pid_file)


def test_child_runs_in_its_own_session(python_service, ctx, tmp_path):
    """Terminal signals aimed at the node's process group skip the children."""
    out = tmp_path / "sid"
    script = f"import os, pathlib; pathlib.Path({str(out)!r}).write_text(str(os.getsid(0)))"

    python_service("session", script).start(ctx)

    assert int(out.read_text()) != os.getsid(0)
