from .files import LogFile, parse_num_days, filter_by_age, days_since
from .service import LogAnalysisService, aggregate
from .renderer import ObjectTable, render_tables

__all__ = [
    "LogFile",
    "parse_num_days",
    "filter_by_age",
    "days_since",
    "LogAnalysisService",
    "aggregate",
    "ObjectTable",
    "render_tables",
]
