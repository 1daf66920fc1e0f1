"""
Environment settings for the rollups node.

Every setting is listed explicitly in SETTINGS with its environment
key, its default and the parser that turns the raw string into a typed
value. load_config() walks that table once and fails fast on the first
missing or malformed value.

Priority (highest to lowest):
1. Environment variables (CARTESI_<KEY>)
2. Table defaults
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from .exceptions import ConfigValidationError
from .models.config import NodeConfig

ENV_PREFIX = "CARTESI_"

_LOG_LEVEL_ALIASES = {
    "debug": "debug",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
}


def parse_int(raw: str) -> int:
    return int(raw.strip())


def parse_float(raw: str) -> float:
    return float(raw.strip())


def parse_log_level(raw: str) -> str:
    """Normalize a log level name; 'warn' is accepted for 'warning'."""
    level = _LOG_LEVEL_ALIASES.get(raw.strip().lower())
    if level is None:
        raise ValueError(f"unknown log level {raw!r}")
    return level


def parse_name_list(raw: str) -> tuple[str, ...]:
    """Parse a comma-separated list of names, dropping blanks and duplicates."""
    names: list[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    if not names:
        raise ValueError("expected at least one name")
    return tuple(names)


@dataclass(frozen=True)
class Setting:
    """
    One entry of the settings table.

    Attributes:
        field: NodeConfig field the value is stored in
        env: Environment key without the CARTESI_ prefix
        default: Raw default, or None if the setting is required
        parser: Converts the raw string into the typed value
        flag: Value is True when the variable is set at all, even empty
    """

    field: str
    env: str
    default: str | None
    parser: Callable[[str], Any] = str
    flag: bool = False

    @property
    def key(self) -> str:
        return ENV_PREFIX + self.env

    def resolve(self, environ: Mapping[str, str]) -> Any:
        """
        Read and parse this setting from ``environ``.

        Empty values count as unset.

        Raises:
            ConfigValidationError: If the value is missing with no default
                or cannot be parsed
        """
        if self.flag:
            return self.key in environ

        raw = environ.get(self.key, "")
        if raw == "":
            if self.default is None:
                raise ConfigValidationError(
                    f"missing required setting {self.key}", key=self.key
                )
            raw = self.default

        try:
            return self.parser(raw)
        except ValueError as e:
            raise ConfigValidationError(
                f"invalid value for {self.key}: {e}", key=self.key, value=raw, cause=e
            ) from e


SETTINGS: tuple[Setting, ...] = (
    Setting("graphql_port", "GRAPHQL_PORT", "8080", parse_int),
    Setting("inspect_port", "INSPECT_PORT", "8081", parse_int),
    Setting("log_level", "LOG_LEVEL", "info", parse_log_level),
    Setting("log_enable_timestamp", "LOG_ENABLE_TIMESTAMP", None, flag=True),
    Setting("shutdown_timeout", "SHUTDOWN_TIMEOUT", "10", parse_float),
    Setting("services", "SERVICES", "graphql-server", parse_name_list),
)


def load_config(
    environ: Mapping[str, str] | None = None,
    settings: Iterable[Setting] = SETTINGS,
) -> NodeConfig:
    """Load the node configuration from the environment.

    Args:
        environ: Variables to read (default: os.environ)
        settings: Settings table to resolve

    Returns:
        Frozen NodeConfig

    Raises:
        ConfigValidationError: On the first missing or malformed value
    """
    env = os.environ if environ is None else environ
    table = tuple(settings)

    values = {setting.field: setting.resolve(env) for setting in table}

    try:
        return NodeConfig(**values)
    except ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first.get("loc") else ""
        setting = next((s for s in table if s.field == field), None)
        key = setting.key if setting else field
        raise ConfigValidationError(
            f"invalid value for {key}: {first['msg']}",
            key=key,
            value=str(first.get("input")),
            cause=e,
        ) from e


def describe_config(config: NodeConfig) -> list[tuple[str, Any]]:
    """Pair each environment key with its resolved value, in table order."""
    return [(setting.key, getattr(config, setting.field)) for setting in SETTINGS]
