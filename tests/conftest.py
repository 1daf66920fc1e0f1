"""
Shared pytest fixtures for rollups-node tests.

This module provides fixtures for supervision testing:
- logger: RecordingLogger that keeps every message for assertions
- ctx: a live root ExecutionContext
- python_service: builds ExternalService instances running a Python one-liner
- ready_file: path a child process touches once its signal handlers are set
- fake_binaries: installs stand-in service executables on PATH
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from rollups_node.core.context import ExecutionContext
from rollups_node.core.interfaces.logger import ILogger
from rollups_node.services.supervision import ExternalService


class RecordingLogger(ILogger):
    """Logger that records (level, formatted message) pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, message: str, args: tuple[Any, ...]) -> None:
        self.records.append((level, message % args if args else message))

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", message, args)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", message, args)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", message, args)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", message, args)

    def set_level(self, level: str) -> None:
        pass

    def messages(self, level: str | None = None) -> list[str]:
        return [msg for lvl, msg in self.records if level is None or lvl == level]


@pytest.fixture
def logger() -> RecordingLogger:
    """Provide a fresh RecordingLogger."""
    return RecordingLogger()


@pytest.fixture
def ctx() -> ExecutionContext:
    """Provide a live root execution context."""
    return ExecutionContext()


@pytest.fixture
def ready_file(tmp_path: Path) -> Path:
    """Path a child process creates once it has installed its handlers."""
    return tmp_path / "ready"


@pytest.fixture
def python_service(logger: RecordingLogger) -> Callable[..., ExternalService]:
    """
    Provide a factory for services running ``python -c <script>``.

    Returns:
        A callable (name, script, **kwargs) -> ExternalService
    """

    def make(name: str, script: str, **kwargs: Any) -> ExternalService:
        kwargs.setdefault("logger", logger)
        return ExternalService(name, [sys.executable, "-c", script], **kwargs)

    return make


@pytest.fixture
def fake_binaries(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str, str], Path]:
    """
    Provide a factory that installs executables on PATH.

    Each executable is a shell wrapper running the given Python source
    with the test interpreter.

    Returns:
        A callable (binary_name, python_source) -> path of the executable
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")

    def install(name: str, source: str) -> Path:
        script = bin_dir / f"{name}.py"
        script.write_text(source)
        binary = bin_dir / name
        binary.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n')
        binary.chmod(0o755)
        return binary

    return install
