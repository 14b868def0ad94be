"""Shared dependency providers and form helpers for the API layer."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from litestar.datastructures import UploadFile

from objectlogs.services.analysis import LogAnalysisService, LogFile
from objectlogs.server.plugins import analysis_service


logger = logging.getLogger(__name__)

FILES_FIELD = "logFiles"
NUM_DAYS_FIELD = "numDays"
LAST_MODIFIED_FIELD = "lastModified"


def provide_analysis_service() -> LogAnalysisService:
    """Provide the global LogAnalysisService instance."""
    return analysis_service


def _as_list(value: Any) -> list[Any]:
    """Multipart fields arrive as a single value or a list when repeated."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _parse_last_modified(value: Any, now: datetime) -> datetime:
    """Convert a browser ``lastModified`` value (epoch milliseconds)."""
    try:
        return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)
    except (TypeError, ValueError, OverflowError, OSError):
        logger.warning("Ignoring invalid lastModified value %r", value)
        return now


def _uploads(data: dict[str, Any]) -> list[UploadFile]:
    return [item for item in _as_list(data.get(FILES_FIELD)) if isinstance(item, UploadFile)]


def log_files_from_form(
    data: dict[str, Any], now: datetime | None = None
) -> list[LogFile]:
    """Build LogFile objects from an upload form.

    The n-th ``lastModified`` value belongs to the n-th file. A file without
    one is treated as modified ``now``. Empty file inputs are skipped.
    Uploads are only read once the date filter has kept them.
    """
    now = now or datetime.now(timezone.utc)
    uploads: list[UploadFile] = [item for item in _uploads(data) if item.filename]
    timestamps: list[Any] = _as_list(data.get(LAST_MODIFIED_FIELD))

    files: list[LogFile] = []
    for index, upload in enumerate(uploads):
        last_modified = (
            _parse_last_modified(timestamps[index], now)
            if index < len(timestamps)
            else now
        )
        files.append(
            LogFile(name=upload.filename, last_modified=last_modified, loader=upload.read)
        )
    return files


async def close_uploads(data: dict[str, Any]) -> None:
    """Release the spooled files of an upload form."""
    for upload in _uploads(data):
        await upload.close()
