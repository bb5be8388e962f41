from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .demands import DemandRepository
from .documents import DocumentRepository
from .fixtures import load_demo_data
from .metrics import MetricsAggregator
from .reorder import DragSession
from .repositories import Clock
from .roadmap import RoadmapRepository
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
@dataclass
class Workspace:
    """
    One set of stores plus the aggregator reading them. Build a fresh one per
    test or per session instead of sharing module-level state.
    """

    settings: Settings
    demands: DemandRepository
    documents: DocumentRepository
    roadmap: RoadmapRepository
    metrics: MetricsAggregator

    def drag_demands(self) -> DragSession:
        """Start a drag session that reorders the demand list."""
        return DragSession(self.demands.reorder)

    def drag_roadmap(self) -> DragSession:
        """Start a drag session that reorders the roadmap timeline."""
        return DragSession(self.roadmap.reorder)


# PUBLIC_INTERFACE
def build_workspace(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> Workspace:
    """
    Factory wiring the stores together.
    - roadmap and metrics read demands through the DemandReader port
    - sample records are loaded when settings.seed_demo_data is set
    """
    s = settings or get_settings()
    demands = DemandRepository(settings=s, clock=clock)
    documents = DocumentRepository(settings=s, clock=clock)
    roadmap = RoadmapRepository(demands, settings=s, clock=clock)
    metrics = MetricsAggregator(demands, roadmap, documents, settings=s, clock=clock)
    workspace = Workspace(
        settings=s,
        demands=demands,
        documents=documents,
        roadmap=roadmap,
        metrics=metrics,
    )
    if s.seed_demo_data:
        load_demo_data(workspace)
        logger.info("Loaded demo data into workspace")
    return workspace
