"""
Pydantic models for the rollups node.
"""

from .base import ImmutableModel, NodeBaseModel
from .config import LogLevel, NodeConfig
from .service import ExitOutcome, ServiceResult

__all__ = [
    "ExitOutcome",
    "ImmutableModel",
    "LogLevel",
    "NodeBaseModel",
    "NodeConfig",
    "ServiceResult",
]
