"""
Interface definitions for the node's injectable collaborators.
"""

from .logger import ILogger
from .service import IService

__all__ = [
    "ILogger",
    "IService",
]
