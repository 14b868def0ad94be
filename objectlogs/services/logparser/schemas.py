"""Schemas for parsed object log data - pure data, no I/O."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LogRecord:
    """One created, deleted or modified object entry from a log file."""

    file_name: str
    object_name: str | None
    owner: str | None
    date: str | None
    deletion_date: str | None = field(default=None)


@dataclass
class ParseResult:
    """Records of one log file (or of several, once aggregated).

    Each sequence keeps the order in which entries appear in the source.
    """

    created: list[LogRecord] = field(default_factory=list)
    deleted: list[LogRecord] = field(default_factory=list)
    modified: list[LogRecord] = field(default_factory=list)

    @property
    def total(self) -> int:
        """Return the number of records across all three sequences."""
        return len(self.created) + len(self.deleted) + len(self.modified)

    def extend(self, other: ParseResult) -> None:
        """Append the records of another result, keeping their order."""
        self.created.extend(other.created)
        self.deleted.extend(other.deleted)
        self.modified.extend(other.modified)
