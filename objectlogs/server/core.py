"""Application factory for creating Litestar app instance."""

from __future__ import annotations


from litestar import Litestar
from litestar.di import Provide
from litestar.openapi import OpenAPIConfig
from litestar.config.compression import CompressionConfig
from litestar.middleware.logging import LoggingMiddlewareConfig

from objectlogs.config.settings import get_settings
from objectlogs.server import plugins
from objectlogs.server.lifecycle import on_startup
from objectlogs.server.routes import get_route_handlers
from objectlogs.api.dependencies import provide_analysis_service


def create_app() -> Litestar:
    """Create and configure the Litestar application.

    This factory function loads configuration and initializes the app
    with templates, OpenAPI, compression, logging and dependency injection.

    Returns:
        Litestar: Configured application instance
    """
    # Load settings once at app creation
    settings = get_settings()

    # Configure OpenAPI
    openapi_config = OpenAPIConfig(
        title=settings.name,
        version=settings.version,
        description=settings.description,
        create_examples=True,
    )

    compression_config = CompressionConfig(
        backend="brotli",
        minimum_size=1000,  # Only compress responses >= 1KB
        brotli_quality=4,
    )

    logging_middleware_config = LoggingMiddlewareConfig()

    app = Litestar(
        debug=settings.debug,
        route_handlers=get_route_handlers(),
        on_startup=[on_startup],
        dependencies={
            "analysis_service": Provide(provide_analysis_service, sync_to_thread=False),
        },
        template_config=plugins.template_config,
        logging_config=plugins.logging_config,
        openapi_config=openapi_config,
        compression_config=compression_config,
        middleware=[logging_middleware_config.middleware],
    )

    return app
