"""Errors raised while selecting, reading and parsing object logs."""
from __future__ import annotations


class LogAnalysisError(Exception):
    """Base class for every failure surfaced to the user."""


class InvalidDayCountError(LogAnalysisError):
    def __init__(self) -> None:
        super().__init__("Error: Enter a valid number of days.")


class NoLogFilesError(LogAnalysisError):
    def __init__(self) -> None:
        super().__init__("Error: Select at least one log file.")


class NoFilesInRangeError(LogAnalysisError):
    def __init__(self) -> None:
        super().__init__("No log files found within the specified date range.")


class UnsupportedFormatError(LogAnalysisError):
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Unsupported file format: {file_name}")


class LogReadError(LogAnalysisError):
    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"Error reading file: {file_name}")


class LogParseError(LogAnalysisError):
    def __init__(self, file_name: str, reason: str) -> None:
        self.file_name = file_name
        self.reason = reason
        super().__init__(f"Malformed log file {file_name}: {reason}")


def alert_message(error: LogAnalysisError) -> str:
    """Return the text shown to the user for a failed analysis."""
    if isinstance(error, (UnsupportedFormatError, LogReadError, LogParseError)):
        return f"Error reading log files: {error}"
    return str(error)
