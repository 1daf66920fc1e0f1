"""
Configuration models.

The node's settings are resolved once at startup into a frozen
NodeConfig; see ``rollups_node.core.settings`` for how values are read.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from .base import ImmutableModel

# Type aliases
LogLevel = Literal["debug", "info", "warning", "error"]
Port = Annotated[int, Field(ge=0, le=65535)]


class NodeConfig(ImmutableModel):
    """Complete node configuration."""

    graphql_port: Port = 8080
    inspect_port: Port = 8081
    log_level: LogLevel = "info"
    log_enable_timestamp: bool = False
    shutdown_timeout: Annotated[float, Field(ge=0, allow_inf_nan=False)] = 10.0
    services: tuple[str, ...] = ("graphql-server",)

    @property
    def escalation_timeout(self) -> float | None:
        """Grace period before SIGKILL, or None when escalation is disabled."""
        return self.shutdown_timeout or None
