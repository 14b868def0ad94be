"""Application lifecycle hooks for startup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from objectlogs.config.settings import get_settings

if TYPE_CHECKING:
    from litestar import Litestar

logger = logging.getLogger(__name__)


async def on_startup(app: "Litestar") -> None:
    """Log the analyzer configuration.

    A missing log directory only disables directory analysis, uploads keep
    working, so startup goes on with a warning.
    """
    settings = get_settings()
    logger.info(
        "Starting %s %s (default_days=%d, encoding=%s)",
        settings.name,
        settings.version,
        settings.analyzer.default_days,
        settings.analyzer.encoding,
    )
    if not settings.analyzer.log_dir.is_dir():
        logger.warning(
            "Log directory %s does not exist: directory analysis will fail.",
            settings.analyzer.log_dir,
        )
