"""Log parser module - parsing only, no file or HTTP operations."""
from .logparser import (
    LogFormatParser,
    XmlLogParser,
    JsonLogParser,
    SUPPORTED_EXTENSIONS,
    get_parser,
    get_format_parser,
    parse_log,
    dump_json_log,
    dump_xml_log,
)
from .schemas import LogRecord, ParseResult
from .errors import (
    LogAnalysisError,
    InvalidDayCountError,
    NoLogFilesError,
    NoFilesInRangeError,
    UnsupportedFormatError,
    LogReadError,
    LogParseError,
    alert_message,
)

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
    "LogRecord",
    "ParseResult",
    "LogAnalysisError",
    "InvalidDayCountError",
    "NoLogFilesError",
    "NoFilesInRangeError",
    "UnsupportedFormatError",
    "LogReadError",
    "LogParseError",
    "alert_message",
]
