"""
Service supervision models.
"""

from __future__ import annotations

from enum import Enum

from .base import ImmutableModel


class ExitOutcome(str, Enum):
    """How a supervised process ended."""

    CLEAN = "clean"
    TERMINATED = "terminated"
    FAILED = "failed"


class ServiceResult(ImmutableModel):
    """Outcome of one service within a supervisor run."""

    name: str
    outcome: ExitOutcome
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is not ExitOutcome.FAILED
