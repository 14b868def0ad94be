"""Global plugin instances and configurations.

This module provides singleton instances for:
- LogAnalysisService (file selection, parsing, aggregation)
- Jinja template configuration
- Logging configuration
"""
from __future__ import annotations

from pathlib import Path

from litestar.plugins.jinja import JinjaTemplateEngine
from litestar.logging import LoggingConfig
from litestar.template.config import TemplateConfig

from objectlogs.services.analysis import LogAnalysisService
from objectlogs.config.settings import get_settings

settings = get_settings()

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

# LogAnalysisService instance - stateless, shared by all requests
analysis_service = LogAnalysisService(
    encoding=settings.analyzer.encoding,
    log_dir=settings.analyzer.log_dir,
)

# Jinja templates for the HTML pages
template_config = TemplateConfig(
    directory=TEMPLATES_DIR,
    engine=JinjaTemplateEngine,
)

# Logging configuration
logging_config = LoggingConfig(
    root={"level": settings.api.log_level, "handlers": ["queue_listener"]},
    formatters={
        "standard": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"}
    },
    log_exceptions="always",
)
