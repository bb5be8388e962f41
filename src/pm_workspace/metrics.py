from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from .documents import DocumentRepository
from .models import DemandEntity, DemandPriority, DemandStatus, DocumentStatus, RoadmapStatus
from .repositories import Clock, DemandReader
from .roadmap import RoadmapRepository
from .schemas import (
    DashboardSnapshot,
    DemandStats,
    DocumentStats,
    RoadmapStats,
    TrendPoint,
    VersionProgress,
)
from .settings import Settings, get_settings
from .utils import round_half_up

logger = logging.getLogger(__name__)

TREND_WINDOW_DAYS = 30


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return int(round_half_up(part / whole * 100))


def _day_of(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


# PUBLIC_INTERFACE
class MetricsAggregator:
    """
    Computes dashboard snapshots by reading the three stores at call time.

    The aggregator keeps nothing but its last snapshot; it is not notified
    of store mutations, so the snapshot is only as fresh as the last
    refresh() call.
    """

    def __init__(
        self,
        demands: DemandReader,
        roadmap: RoadmapRepository,
        documents: DocumentRepository,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._demands = demands
        self._roadmap = roadmap
        self._documents = documents
        self._settings = settings or get_settings()
        self._clock = clock or datetime.now
        self.snapshot: Optional[DashboardSnapshot] = None

    def refresh(self) -> DashboardSnapshot:
        """Recompute and store the dashboard snapshot."""
        now = self._clock()
        today = now.date()
        demands = self._demands.all()

        self.snapshot = DashboardSnapshot(
            generated_at=now,
            demand_stats=self._demand_stats(demands, today),
            roadmap_stats=self._roadmap_stats(demands, today),
            document_stats=self._document_stats(demands),
        )
        logger.debug(
            "Dashboard refreshed: %d demands, %d roadmap items, %d documents",
            len(demands),
            len(self._roadmap),
            len(self._documents),
        )
        return self.snapshot

    def _demand_stats(self, demands: List[DemandEntity], today: date) -> DemandStats:
        by_status = {s: 0 for s in DemandStatus}
        by_priority = {p: 0 for p in DemandPriority}
        per_day: Counter = Counter()
        for d in demands:
            by_status[d["status"]] += 1
            by_priority[d["priority"]] += 1
            per_day[_day_of(d["created_at"])] += 1

        # Oldest first, ending today; counts are per exact day, not cumulative
        start = today - timedelta(days=TREND_WINDOW_DAYS - 1)
        trend = [
            TrendPoint(day=start + timedelta(days=i), count=per_day[start + timedelta(days=i)])
            for i in range(TREND_WINDOW_DAYS)
        ]
        return DemandStats(by_status=by_status, by_priority=by_priority, trend=trend)

    def _roadmap_stats(self, demands: List[DemandEntity], today: date) -> RoadmapStats:
        status_by_id = {d["id"]: d["status"] for d in demands}
        progress = []
        delayed = 0
        for item in self._roadmap.all():
            total = len(item["demand_ids"])
            completed = sum(
                1 for demand_id in item["demand_ids"] if status_by_id.get(demand_id) == DemandStatus.ONLINE
            )
            progress.append(
                VersionProgress(
                    version=item["version"],
                    completed=completed,
                    total=total,
                    progress=_percent(completed, total),
                )
            )
            if _day_of(item["end_time"]) < today and item["status"] != RoadmapStatus.COMPLETED:
                delayed += 1
        return RoadmapStats(progress=progress, delayed=delayed)

    def _document_stats(self, demands: List[DemandEntity]) -> DocumentStats:
        documents = self._documents.all()
        by_status: Dict[str, int] = {}
        if self._settings.zero_fill_document_status:
            by_status = {s.value: 0 for s in DocumentStatus}
        for doc in documents:
            key = doc["status"].value if isinstance(doc["status"], DocumentStatus) else str(doc["status"])
            by_status[key] = by_status.get(key, 0) + 1

        referenced = {doc["demand_id"] for doc in documents if doc["demand_id"]}
        if self._settings.coverage_existing_demands_only:
            # Drop dangling demand_ids so coverage stays within 0..100
            referenced &= {d["id"] for d in demands}
        return DocumentStats(by_status=by_status, demand_coverage=_percent(len(referenced), len(demands)))
