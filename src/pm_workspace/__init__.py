"""
In-memory state layer for a product-management workspace: demand, document
and roadmap stores, RICE scoring, dashboard metrics and drag reordering.
"""

from .demands import DemandQuery, DemandRepository
from .documents import DocumentQuery, DocumentRepository
from .metrics import MetricsAggregator
from .models import DemandPriority, DemandStatus, DocumentStatus, RoadmapStatus
from .reorder import DragSession, move_item
from .results import (
    EntityNotFoundError,
    MutationResult,
    Outcome,
    ReorderIndexError,
    RiceValidationError,
    WorkspaceError,
)
from .rice import calculate_rice
from .roadmap import RoadmapRepository
from .settings import Settings, configure_logging, get_settings
from .workspace import Workspace, build_workspace

__all__ = [
    "DemandPriority",
    "DemandQuery",
    "DemandRepository",
    "DemandStatus",
    "DocumentQuery",
    "DocumentRepository",
    "DocumentStatus",
    "DragSession",
    "EntityNotFoundError",
    "MetricsAggregator",
    "MutationResult",
    "Outcome",
    "ReorderIndexError",
    "RiceValidationError",
    "RoadmapRepository",
    "RoadmapStatus",
    "Settings",
    "Workspace",
    "WorkspaceError",
    "build_workspace",
    "calculate_rice",
    "configure_logging",
    "get_settings",
    "move_item",
]
