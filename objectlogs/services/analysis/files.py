"""Candidate log files and the modification date filter."""
from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

import aiofiles

from objectlogs.services.logparser.errors import (
    InvalidDayCountError,
    LogReadError,
    NoFilesInRangeError,
    NoLogFilesError,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogFile:
    """A log file selected for analysis.

    Uploads carry a ``loader`` coroutine (or their bytes in ``content``);
    files found on disk carry a ``path``. Nothing is read until ``read``.
    """

    name: str
    last_modified: datetime
    path: Path | None = field(default=None)
    content: bytes | None = field(default=None, repr=False)
    loader: Callable[[], Awaitable[bytes]] | None = field(
        default=None, repr=False, compare=False
    )

    async def read(self, encoding: str = "utf-8") -> str:
        """Return the decoded file content.

        Raises:
            LogReadError: If the file cannot be read or decoded.
        """
        try:
            if self.content is not None:
                raw: bytes = self.content
            elif self.loader is not None:
                raw = await self.loader()
            elif self.path is not None:
                async with aiofiles.open(self.path, "rb") as f:
                    raw = await f.read()
            else:
                raise LogReadError(self.name)
            return raw.decode(encoding)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s: %s", self.name, e)
            raise LogReadError(self.name) from e


def parse_num_days(value: Any) -> int:
    """Validate the day threshold entered by the user.

    Accepts an int or a string holding one. Anything else, or a value below 1,
    raises InvalidDayCountError.
    """
    if isinstance(value, bool):
        raise InvalidDayCountError()
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as e:
            raise InvalidDayCountError() from e
    if not isinstance(value, int) or value < 1:
        raise InvalidDayCountError()
    return value


def local_date(moment: datetime) -> date:
    """Truncate a timestamp to its calendar day in local time."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def days_since(last_modified: datetime, today: date) -> int:
    """Whole days between a file's modification day and today.

    Negative for files modified after today.
    """
    return (today - local_date(last_modified)).days


def filter_by_age(
    files: Sequence[LogFile],
    num_days: int,
    now: datetime | None = None,
) -> list[LogFile]:
    """Keep the files modified at most ``num_days`` days ago.

    Args:
        files: Candidate files, in selection order.
        num_days: Day threshold, at least 1.
        now: Reference time, defaults to the current local time.

    Raises:
        InvalidDayCountError: If ``num_days`` is below 1.
        NoLogFilesError: If ``files`` is empty.
        NoFilesInRangeError: If no file is recent enough.
    """
    if num_days < 1:
        raise InvalidDayCountError()
    if not files:
        raise NoLogFilesError()

    today: date = local_date(now or datetime.now().astimezone())
    selected: list[LogFile] = []
    for log_file in files:
        age = days_since(log_file.last_modified, today)
        if age <= num_days:
            selected.append(log_file)
        else:
            logger.debug("Skipping %s, modified %d days ago", log_file.name, age)

    if not selected:
        raise NoFilesInRangeError()

    logger.info("Selected %d of %d log files (num_days=%d)", len(selected), len(files), num_days)
    return selected
