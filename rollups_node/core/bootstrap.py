"""
Application bootstrap for the rollups node.

Builds the service container with the resolved configuration, the
logger and every known service variant. Call once at startup and pass
the container down.
"""

from .container import ServiceContainer
from .interfaces.logger import ILogger
from .models.config import NodeConfig
from .settings import load_config


def bootstrap(
    config: NodeConfig | None = None,
    logger: ILogger | None = None,
) -> ServiceContainer:
    """
    Bootstrap the node.

    Args:
        config: Resolved configuration (loaded from the environment if omitted)
        logger: Logger to use instead of one built from the configuration

    Returns:
        Initialized ServiceContainer

    Raises:
        ConfigValidationError: If the configuration cannot be loaded
    """
    container = ServiceContainer()

    if config is None:
        config = load_config()
    container.register_singleton(NodeConfig, implementation=config)

    _register_logger(container, config, logger)
    _register_service_variants(container, config)
    return container


def _register_logger(
    container: ServiceContainer, config: NodeConfig, logger: ILogger | None
) -> None:
    """Register the logger, configured once from the node settings."""
    if logger is not None:
        container.register_singleton(ILogger, implementation=logger)  # type: ignore[type-abstract]
        return

    from ..services.logging import NodeLogger

    def create_logger() -> ILogger:
        return NodeLogger(
            level=config.log_level,
            enable_timestamp=config.log_enable_timestamp,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def _register_service_variants(container: ServiceContainer, config: NodeConfig) -> None:
    """Register the auxiliary servers the node knows how to supervise."""
    from ..services.supervision.variants import (
        AuthorityClaimerService,
        GraphQLService,
        InspectService,
    )

    container.register_service(
        GraphQLService.SERVICE_NAME, GraphQLService, port=config.graphql_port
    )
    container.register_service(
        InspectService.SERVICE_NAME, InspectService, port=config.inspect_port
    )
    container.register_service(AuthorityClaimerService.SERVICE_NAME, AuthorityClaimerService)
