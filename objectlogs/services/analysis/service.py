"""Log analysis service - selects, reads, parses and merges object logs.

This service orchestrates:
- Day threshold filtering of the candidate files
- Concurrent reads, one coroutine per file
- Parsing via the parser matching each file extension
- Aggregation into a single ParseResult, in file order
"""
from __future__ import annotations

import asyncio
import logging
import stat
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import aiofiles.os

from objectlogs.services.analysis.files import LogFile, filter_by_age
from objectlogs.services.logparser import (
    SUPPORTED_EXTENSIONS,
    LogReadError,
    ParseResult,
    get_parser,
)


logger = logging.getLogger(__name__)


class LogAnalysisService:
    """Runs the whole pipeline over a set of log files.

    Example:
        service = LogAnalysisService(encoding="utf-8", log_dir=Path("logs"))
        result = await service.analyze(files, num_days=7)
    """

    def __init__(
        self,
        *,
        encoding: str = "utf-8",
        log_dir: Path | None = None,
    ) -> None:
        """Initialize the analysis service.

        Args:
            encoding: Text encoding used to decode every log file.
            log_dir: Directory scanned by ``analyze_directory``.
        """
        self.encoding: str = encoding
        self.log_dir: Path | None = log_dir

    async def analyze(
        self,
        files: Sequence[LogFile],
        num_days: int,
        *,
        now: datetime | None = None,
    ) -> ParseResult:
        """Filter, read and parse ``files`` and merge their records.

        Raises:
            LogAnalysisError: On the first failure; no partial result is returned.
        """
        selected: list[LogFile] = filter_by_age(files, num_days, now=now)
        results: list[ParseResult] = await asyncio.gather(
            *(self._read_and_parse(log_file) for log_file in selected)
        )
        merged = aggregate(results)
        logger.info(
            "Analyzed %d files: created=%d deleted=%d modified=%d",
            len(selected),
            len(merged.created),
            len(merged.deleted),
            len(merged.modified),
        )
        return merged

    async def analyze_directory(
        self, num_days: int, *, now: datetime | None = None
    ) -> ParseResult:
        """Run ``analyze`` over the supported files of ``log_dir``."""
        return await self.analyze(await self.collect_directory(), num_days, now=now)

    async def collect_directory(self) -> list[LogFile]:
        """List the supported log files of ``log_dir`` with their mtimes.

        Files with other extensions are ignored. Entries are sorted by name.

        Raises:
            LogReadError: If ``log_dir`` is unset or cannot be listed.
        """
        if self.log_dir is None:
            raise LogReadError("<log directory not configured>")
        try:
            names: list[str] = sorted(await aiofiles.os.listdir(self.log_dir))
        except OSError as e:
            logger.warning("Could not list log directory %s: %s", self.log_dir, e)
            raise LogReadError(str(self.log_dir)) from e

        files: list[LogFile] = []
        for name in names:
            path = self.log_dir / name
            if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
                continue
            try:
                stat_result = await aiofiles.os.stat(path)
            except OSError as e:
                raise LogReadError(name) from e
            if not stat.S_ISREG(stat_result.st_mode):
                continue
            files.append(
                LogFile(
                    name=name,
                    last_modified=datetime.fromtimestamp(stat_result.st_mtime).astimezone(),
                    path=path,
                )
            )
        logger.debug("Found %d log files in %s", len(files), self.log_dir)
        return files

    async def _read_and_parse(self, log_file: LogFile) -> ParseResult:
        """Read one file and parse it with the parser for its extension."""
        parser = get_parser(log_file.name)
        log_data: str = await log_file.read(self.encoding)
        return parser.parse(log_data, log_file.name)


def aggregate(results: Sequence[ParseResult]) -> ParseResult:
    """Concatenate per-file results, keeping their order."""
    merged = ParseResult()
    for result in results:
        merged.extend(result)
    return merged
