"""Central route registration."""
from litestar.types import ControllerRouterHandler

from objectlogs.api.v1.analysis_controller import AnalysisController
from objectlogs.api.v1.page_controller import AnalyzerPageController
from objectlogs.api.v1.settings import read_settings

def get_route_handlers() -> list[ControllerRouterHandler]:
    """Get all route handlers for the application."""
    return [
        AnalyzerPageController,
        AnalysisController,
        read_settings,
    ]
