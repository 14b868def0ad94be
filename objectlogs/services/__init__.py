"""Services layer - file selection, parsing and rendering."""
from .logparser import parse_log
from .analysis import LogAnalysisService

__all__ = ["parse_log", "LogAnalysisService"]
