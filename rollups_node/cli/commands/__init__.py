"""
Click command implementations for the node CLI.

Each module corresponds to a command (e.g., run.py implements
'rollups-node run'). Commands are registered with the main group via
register_commands() in rollups_node.cli.
"""

from .config import config
from .run import run
from .services import services

COMMANDS = [
    config,
    run,
    services,
]

__all__ = [
    "COMMANDS",
    "config",
    "run",
    "services",
]
