"""Turns a ParseResult into the three object tables shown on the page."""
from __future__ import annotations

from dataclasses import dataclass, field

from objectlogs.services.logparser.schemas import LogRecord, ParseResult


COLUMNS = ("File Name", "Object", "Owner")


@dataclass(frozen=True)
class ObjectTable:
    """One rendered record sequence with its count display."""

    table_id: str
    count_id: str
    title: str
    date_header: str
    rows: list[tuple[str, str, str, str, str]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.rows)

    @property
    def headers(self) -> tuple[str, ...]:
        return (*COLUMNS, self.date_header, "Deletion Date")


def record_row(record: LogRecord) -> tuple[str, str, str, str, str]:
    """Cells of one table row, absent values shown as empty cells."""
    return (
        record.file_name,
        record.object_name or "",
        record.owner or "",
        record.date or "",
        record.deletion_date or "",
    )


def render_tables(result: ParseResult | None = None) -> list[ObjectTable]:
    """Build the created, deleted and modified tables.

    With no result the tables are empty, as on a fresh or reset page.
    """
    result = result or ParseResult()
    return [
        ObjectTable(
            table_id="creationTable",
            count_id="createdCount",
            title="Created Objects",
            date_header="Creation Date",
            rows=[record_row(r) for r in result.created],
        ),
        ObjectTable(
            table_id="deletionTable",
            count_id="deletedCount",
            title="Deleted Objects",
            date_header="Creation Date",
            rows=[record_row(r) for r in result.deleted],
        ),
        ObjectTable(
            table_id="modificationTable",
            count_id="modifiedCount",
            title="Modified Objects",
            date_header="Modification Date",
            rows=[record_row(r) for r in result.modified],
        ),
    ]
