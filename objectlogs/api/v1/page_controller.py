"""HTML pages: upload form, analysis result and reset."""
from __future__ import annotations

import logging
from typing import Annotated, Any

from litestar import Controller, get, post
from litestar.enums import RequestEncodingType
from litestar.params import Body
from litestar.response import Template
from litestar.status_codes import HTTP_200_OK, HTTP_400_BAD_REQUEST

from objectlogs.config.settings import get_settings
from objectlogs.services.analysis import (
    LogAnalysisService,
    parse_num_days,
    render_tables,
)
from objectlogs.services.logparser import LogAnalysisError, ParseResult, alert_message
from objectlogs.api.dependencies import NUM_DAYS_FIELD, close_uploads, log_files_from_form


logger = logging.getLogger(__name__)

PAGE_TEMPLATE = "index.html.j2"
RESET_MESSAGE = "Log files reset from GUI successfully."


def _page(
    *,
    result: ParseResult | None = None,
    num_days: Any = None,
    error: str | None = None,
    message: str | None = None,
    status_code: int = HTTP_200_OK,
) -> Template:
    settings = get_settings()
    return Template(
        template_name=PAGE_TEMPLATE,
        context={
            "title": settings.name,
            "num_days": num_days if num_days is not None else settings.analyzer.default_days,
            "tables": render_tables(result),
            "error": error,
            "message": message,
        },
        status_code=status_code,
    )


class AnalyzerPageController(Controller):
    """Browser facing pages.

    Failures are shown in an alert box on the same page, with empty tables.
    """
    path = "/"

    @get("/")
    async def index(self) -> Template:
        """Render the empty form."""
        return _page()

    @post("/analyze", status_code=HTTP_200_OK)
    async def analyze(
        self,
        analysis_service: LogAnalysisService,
        data: Annotated[dict[str, Any], Body(media_type=RequestEncodingType.MULTI_PART)],
    ) -> Template:
        """Run the analysis on the uploaded files and render the tables."""
        raw_days = data.get(NUM_DAYS_FIELD)
        try:
            num_days = parse_num_days(raw_days)
            result = await analysis_service.analyze(log_files_from_form(data), num_days)
        except LogAnalysisError as e:
            logger.warning("Analysis failed: %s", e)
            return _page(
                num_days=raw_days,
                error=alert_message(e),
                status_code=HTTP_400_BAD_REQUEST,
            )
        finally:
            await close_uploads(data)
        return _page(result=result, num_days=num_days)

    @post("/reset", status_code=HTTP_200_OK)
    async def reset(self) -> Template:
        """Clear the tables and counts."""
        return _page(message=RESET_MESSAGE)
