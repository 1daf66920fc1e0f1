"""Service supervision: process runner, service variants and supervisor."""

from .runner import ProcessRunner, describe_returncode
from .supervisor import Supervisor
from .variants import (
    AuthorityClaimerService,
    ExternalService,
    GraphQLService,
    InspectService,
)

__all__ = [
    "AuthorityClaimerService",
    "ExternalService",
    "GraphQLService",
    "InspectService",
    "ProcessRunner",
    "Supervisor",
    "describe_returncode",
]
