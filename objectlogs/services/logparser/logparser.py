import logging
from abc import ABC, abstractmethod
from pathlib import PurePath
from typing import Any
from xml.etree import ElementTree

from litestar.exceptions import SerializationException
from litestar.serialization import decode_json, encode_json

from .constants import (
    DELETED_SECTION,
    SECTIONS,
    OBJECT_TAG,
    NAME_FIELD,
    OWNER_FIELD,
    DELETION_DATE_FIELD,
    DATE_FIELD_BY_SECTION,
    XML_ROOT_TAG,
)
from .errors import LogParseError, UnsupportedFormatError
from .schemas import LogRecord, ParseResult


logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"


class LogFormatParser(ABC):
    """Turns the raw text of one log file into a ParseResult.

    Subclasses only know how to find sections, entries and fields in their
    format. Mapping entries to LogRecord is shared so both formats agree on
    which source field fills which record field.
    """

    extension: str = ""

    def parse(self, log_data: str, file_name: str) -> ParseResult:
        """Parse a whole log document.

        Args:
            log_data (str): The decoded file content.
            file_name (str): Name stamped on every produced record.

        Raises:
            LogParseError: If the document is malformed.
        """
        document = self._load(log_data.removeprefix(BYTE_ORDER_MARK), file_name)
        result = ParseResult()
        for section in SECTIONS:
            records: list[LogRecord] = [
                self._to_record(section, entry, file_name)
                for entry in self._entries(document, section, file_name)
            ]
            getattr(result, section).extend(records)
        logger.debug(
            "Parsed %s: created=%d deleted=%d modified=%d",
            file_name,
            len(result.created),
            len(result.deleted),
            len(result.modified),
        )
        return result

    def _to_record(self, section: str, entry: Any, file_name: str) -> LogRecord:
        return LogRecord(
            file_name=file_name,
            object_name=self._field(entry, NAME_FIELD),
            owner=self._field(entry, OWNER_FIELD),
            date=self._field(entry, DATE_FIELD_BY_SECTION[section]),
            deletion_date=(
                self._field(entry, DELETION_DATE_FIELD)
                if section == DELETED_SECTION
                else None
            ),
        )

    @abstractmethod
    def _load(self, log_data: str, file_name: str) -> Any:
        """Decode the document, raising LogParseError on syntax errors."""

    @abstractmethod
    def _entries(self, document: Any, section: str, file_name: str) -> list[Any]:
        """Return the object entries of a section, empty if the section is absent."""

    @abstractmethod
    def _field(self, entry: Any, name: str) -> str | None:
        """Return a field value of an entry, None if absent."""

    @abstractmethod
    def dump(self, result: ParseResult) -> str:
        """Serialize a ParseResult back into this format."""


def _local_name(tag: Any) -> str | None:
    """Tag without its namespace, None for comments and processing instructions."""
    if not isinstance(tag, str):
        return None
    return tag.rpartition("}")[2]


def _first_by_local_name(
    node: ElementTree.Element, name: str
) -> ElementTree.Element | None:
    return next((e for e in node.iter() if _local_name(e.tag) == name), None)


class XmlLogParser(LogFormatParser):
    """Tag based extraction, the first matching element anywhere wins."""

    extension = ".xml"

    def _load(self, log_data: str, file_name: str) -> ElementTree.Element:
        try:
            return ElementTree.fromstring(log_data)
        except ElementTree.ParseError as e:
            raise LogParseError(file_name, str(e)) from e

    def _entries(
        self, document: ElementTree.Element, section: str, file_name: str
    ) -> list[ElementTree.Element]:
        found = _first_by_local_name(document, section)
        if found is None:
            logger.debug("No <%s> section in %s", section, file_name)
            return []
        return [e for e in found.iter() if _local_name(e.tag) == OBJECT_TAG]

    def _field(self, entry: ElementTree.Element, name: str) -> str | None:
        found = _first_by_local_name(entry, name)
        if found is None:
            return None
        return "".join(found.itertext())

    def dump(self, result: ParseResult) -> str:
        root = ElementTree.Element(XML_ROOT_TAG)
        for section in SECTIONS:
            section_element = ElementTree.SubElement(root, section)
            for record in getattr(result, section):
                obj = ElementTree.SubElement(section_element, OBJECT_TAG)
                for name, value in _record_fields(section, record).items():
                    ElementTree.SubElement(obj, name).text = value
        ElementTree.indent(root)
        return ElementTree.tostring(root, encoding="unicode")


class JsonLogParser(LogFormatParser):
    """Direct property access on a top-level JSON object."""

    extension = ".json"

    def _load(self, log_data: str, file_name: str) -> dict[str, Any]:
        try:
            document = decode_json(log_data)
        except SerializationException as e:
            raise LogParseError(file_name, str(e)) from e
        if not isinstance(document, dict):
            raise LogParseError(file_name, "top-level value must be an object")
        return document

    def _entries(
        self, document: dict[str, Any], section: str, file_name: str
    ) -> list[dict[str, Any]]:
        entries = document.get(section)
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise LogParseError(file_name, f"'{section}' must be an array")
        for entry in entries:
            if not isinstance(entry, dict):
                raise LogParseError(file_name, f"'{section}' entries must be objects")
        return entries

    def _field(self, entry: dict[str, Any], name: str) -> str | None:
        value = entry.get(name)
        if value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return encode_json(value).decode("utf-8")

    def dump(self, result: ParseResult) -> str:
        document = {
            section: [_record_fields(section, record) for record in getattr(result, section)]
            for section in SECTIONS
        }
        return encode_json(document).decode("utf-8")


def _record_fields(section: str, record: LogRecord) -> dict[str, str]:
    """Map a record back to its source field names, dropping absent values."""
    fields = {
        NAME_FIELD: record.object_name,
        OWNER_FIELD: record.owner,
        DATE_FIELD_BY_SECTION[section]: record.date,
    }
    if section == DELETED_SECTION:
        fields[DELETION_DATE_FIELD] = record.deletion_date
    return {name: value for name, value in fields.items() if value is not None}


PARSERS: dict[str, LogFormatParser] = {
    parser.extension: parser for parser in (XmlLogParser(), JsonLogParser())
}

SUPPORTED_EXTENSIONS = tuple(PARSERS)


def get_parser(file_name: str) -> LogFormatParser:
    """Pick the parser for a file by its extension.

    Raises:
        UnsupportedFormatError: If no parser handles the extension.
    """
    if parser := PARSERS.get(PurePath(file_name).suffix.lower()):
        return parser
    raise UnsupportedFormatError(file_name)


def get_format_parser(fmt: str) -> LogFormatParser:
    """Pick the parser for an export format name such as 'xml' or 'json'."""
    if parser := PARSERS.get(f".{fmt.lower().lstrip('.')}"):
        return parser
    raise UnsupportedFormatError(f"export.{fmt}")


def parse_log(log_data: str, file_name: str) -> ParseResult:
    """Parse one log file with the parser its extension selects."""
    return get_parser(file_name).parse(log_data, file_name)


def dump_json_log(result: ParseResult) -> str:
    return PARSERS[".json"].dump(result)


def dump_xml_log(result: ParseResult) -> str:
    return PARSERS[".xml"].dump(result)


__all__ = [
    "LogFormatParser",
    "XmlLogParser",
    "JsonLogParser",
    "SUPPORTED_EXTENSIONS",
    "get_parser",
    "get_format_parser",
    "parse_log",
    "dump_json_log",
    "dump_xml_log",
]
