"""Object log analysis API endpoints."""
from __future__ import annotations

import logging
from typing import Annotated, Any

from litestar import Controller, Request, Response, get, post
from litestar.enums import RequestEncodingType
from litestar.exceptions import ClientException
from litestar.params import Body
from litestar.status_codes import HTTP_200_OK, HTTP_400_BAD_REQUEST

from objectlogs.config.settings import get_settings
from objectlogs.services.analysis import LogAnalysisService, parse_num_days
from objectlogs.services.logparser import (
    LogAnalysisError,
    LogRecord,
    ParseResult,
    alert_message,
    get_format_parser,
)
from objectlogs.api.dependencies import NUM_DAYS_FIELD, close_uploads, log_files_from_form


logger = logging.getLogger(__name__)

MultipartForm = Annotated[dict[str, Any], Body(media_type=RequestEncodingType.MULTI_PART)]

EXPORT_FORMAT_PARAM = "format"
EXPORT_MEDIA_TYPES = {
    "json": "application/json",
    "xml": "application/xml",
}


def _record_payload(record: LogRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "fileName": record.file_name,
        "objectName": record.object_name,
        "owner": record.owner,
        "date": record.date,
    }
    if record.deletion_date is not None:
        payload["deletionDate"] = record.deletion_date
    return payload


def result_payload(result: ParseResult) -> dict[str, Any]:
    """Serialize a ParseResult with the same camelCase keys the page uses."""
    return {
        "created": [_record_payload(r) for r in result.created],
        "deleted": [_record_payload(r) for r in result.deleted],
        "modified": [_record_payload(r) for r in result.modified],
        "createdCount": len(result.created),
        "deletedCount": len(result.deleted),
        "modifiedCount": len(result.modified),
    }


def _client_error(error: LogAnalysisError) -> ClientException:
    logger.warning("Analysis failed: %s", error)
    return ClientException(status_code=HTTP_400_BAD_REQUEST, detail=alert_message(error))


class AnalysisController(Controller):
    """Analysis endpoints

    Same pipeline as the HTML pages, returning JSON or a merged log file.
    """
    path = "/api/v1/analysis"
    tags = ["Analysis"]

    @post("/", status_code=HTTP_200_OK)
    async def analyze_uploads(
        self,
        analysis_service: LogAnalysisService,
        data: MultipartForm,
    ) -> dict[str, Any]:
        """Analyze uploaded log files."""
        try:
            result = await self._run(analysis_service, data)
        except LogAnalysisError as e:
            raise _client_error(e) from e
        finally:
            await close_uploads(data)
        return result_payload(result)

    @get("/directory")
    async def analyze_directory(
        self,
        analysis_service: LogAnalysisService,
        request: Request,
    ) -> dict[str, Any]:
        """Analyze the log files of the configured log directory.

        Without a ``numDays`` query parameter the configured default threshold applies.
        """
        num_days: str | None = request.query_params.get(NUM_DAYS_FIELD)
        try:
            days = (
                parse_num_days(num_days)
                if num_days is not None
                else get_settings().analyzer.default_days
            )
            result = await analysis_service.analyze_directory(days)
        except LogAnalysisError as e:
            raise _client_error(e) from e
        return result_payload(result)

    @post("/export", status_code=HTTP_200_OK)
    async def export_merged(
        self,
        analysis_service: LogAnalysisService,
        data: MultipartForm,
        request: Request,
    ) -> Response[str]:
        """Merge the uploaded log files into a single XML or JSON log.

        The ``format`` query parameter picks ``json`` (default) or ``xml``.
        """
        fmt: str = request.query_params.get(EXPORT_FORMAT_PARAM, "json")
        try:
            parser = get_format_parser(fmt)
            result = await self._run(analysis_service, data)
        except LogAnalysisError as e:
            raise _client_error(e) from e
        finally:
            await close_uploads(data)
        extension = parser.extension.lstrip(".")
        return Response(
            content=parser.dump(result),
            media_type=EXPORT_MEDIA_TYPES[extension],
            headers={"Content-Disposition": f'attachment; filename="merged.{extension}"'},
        )

    async def _run(
        self, analysis_service: LogAnalysisService, data: dict[str, Any]
    ) -> ParseResult:
        num_days = parse_num_days(data.get(NUM_DAYS_FIELD))
        return await analysis_service.analyze(log_files_from_form(data), num_days)
