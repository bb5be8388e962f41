from datetime import date, timedelta

from pm_workspace.metrics import TREND_WINDOW_DAYS, MetricsAggregator
from pm_workspace.models import DemandPriority, DemandStatus, DocumentStatus, RoadmapStatus
from pm_workspace.schemas import (
    DemandCreate,
    DemandUpdate,
    DocumentCreate,
    RoadmapItemCreate,
)
from pm_workspace.settings import Settings
from pm_workspace.workspace import build_workspace


def add_demand(ws, title="Demand", reach=100, status=None):
    demand = ws.demands.create(
        DemandCreate(
            title=title,
            description=f"{title} description",
            rice_params={"reach": reach, "impact": 1, "confidence": 100, "effort": 1},
        )
    )
    if status is not None:
        ws.demands.update(demand["id"], DemandUpdate(status=status))
    return demand


def add_item(ws, version="V1", demand_ids=None, end_time="2025-12-31", status=RoadmapStatus.PLANNING):
    return ws.roadmap.create(
        RoadmapItemCreate(
            version=version,
            status=status,
            start_time="2025-01-01",
            end_time=end_time,
            demand_ids=demand_ids or [],
        )
    )


def add_document(ws, demand_id=None, status=DocumentStatus.DRAFT):
    return ws.documents.create(DocumentCreate(title="Doc", demand_id=demand_id, status=status))


class TestEmptyWorkspace:
    def test_zero_filled_and_no_division_errors(self, workspace, clock):
        snap = workspace.metrics.refresh()

        assert snap.generated_at == clock.now
        assert snap.demand_stats.by_status == {s: 0 for s in DemandStatus}
        assert snap.demand_stats.by_priority == {p: 0 for p in DemandPriority}
        assert len(snap.demand_stats.trend) == TREND_WINDOW_DAYS
        assert all(point.count == 0 for point in snap.demand_stats.trend)
        assert snap.roadmap_stats.progress == []
        assert snap.roadmap_stats.delayed == 0
        assert snap.document_stats.demand_coverage == 0
        assert snap.document_stats.by_status == {"Draft": 0, "Published": 0, "Archived": 0}

    def test_coverage_is_zero_without_demands(self, workspace):
        add_document(workspace, demand_id="ghost")
        assert workspace.metrics.refresh().document_stats.demand_coverage == 0


class TestDemandFacet:
    def test_counts_by_status_and_priority(self, workspace):
        add_demand(workspace, reach=10)
        add_demand(workspace, reach=5, status=DemandStatus.ONLINE)
        add_demand(workspace, reach=1, status=DemandStatus.REJECTED)

        stats = workspace.metrics.refresh().demand_stats
        assert stats.by_status[DemandStatus.PENDING] == 1
        assert stats.by_status[DemandStatus.ONLINE] == 1
        assert stats.by_status[DemandStatus.REJECTED] == 1
        assert stats.by_status[DemandStatus.TESTING] == 0
        assert stats.by_priority == {
            DemandPriority.HIGH: 1,
            DemandPriority.MEDIUM: 1,
            DemandPriority.LOW: 1,
        }

    def test_trend_window_counts_exact_days(self, workspace, clock):
        today = clock.now.date()
        clock.advance(days=-30)
        add_demand(workspace, "outside window")
        clock.advance(days=1)
        add_demand(workspace, "first day")
        clock.advance(days=29)
        add_demand(workspace, "today 1")
        clock.advance(hours=3)
        add_demand(workspace, "today 2")

        trend = workspace.metrics.refresh().demand_stats.trend
        assert trend[0].day == today - timedelta(days=TREND_WINDOW_DAYS - 1)
        assert trend[-1].day == today
        assert trend[0].count == 1
        assert trend[-1].count == 2
        assert sum(point.count for point in trend) == 3


class TestRoadmapFacet:
    def test_progress_counts_online_demands(self, workspace):
        online = add_demand(workspace, status=DemandStatus.ONLINE)
        pending = add_demand(workspace)
        add_item(workspace, "V1", demand_ids=[online["id"], pending["id"], "deleted-id"])
        add_item(workspace, "V2")

        progress = workspace.metrics.refresh().roadmap_stats.progress
        assert [(p.version, p.completed, p.total, p.progress) for p in progress] == [
            ("V1", 1, 3, 33),
            ("V2", 0, 0, 0),
        ]

    def test_progress_rounds_half_up(self, workspace):
        online = add_demand(workspace, status=DemandStatus.ONLINE)
        others = [add_demand(workspace)["id"] for _ in range(7)]
        add_item(workspace, demand_ids=[online["id"]] + others)
        assert workspace.metrics.refresh().roadmap_stats.progress[0].progress == 13

    def test_delayed_items(self, workspace, clock):
        today = clock.now.date()
        yesterday = (today - timedelta(days=1)).isoformat()
        add_item(workspace, "late", end_time=yesterday)
        add_item(workspace, "late but done", end_time=yesterday, status=RoadmapStatus.COMPLETED)
        add_item(workspace, "due today", end_time=today.isoformat(), status=RoadmapStatus.DEVELOPING)
        add_item(workspace, "future", end_time=(today + timedelta(days=5)).isoformat())

        assert workspace.metrics.refresh().roadmap_stats.delayed == 1


class TestDocumentFacet:
    def test_status_counts_and_coverage(self, workspace):
        first = add_demand(workspace)
        add_demand(workspace)
        add_demand(workspace)
        add_demand(workspace)
        add_document(workspace, demand_id=first["id"], status=DocumentStatus.PUBLISHED)
        add_document(workspace, demand_id=first["id"])
        add_document(workspace)

        stats = workspace.metrics.refresh().document_stats
        assert stats.by_status == {"Draft": 2, "Published": 1, "Archived": 0}
        assert stats.demand_coverage == 25

    def test_dangling_references_still_count(self, workspace):
        kept = add_demand(workspace)
        removed = add_demand(workspace)
        add_document(workspace, demand_id=kept["id"])
        add_document(workspace, demand_id=removed["id"])
        workspace.demands.delete(removed["id"])
        # Two distinct referenced ids over one remaining demand
        assert workspace.metrics.refresh().document_stats.demand_coverage == 200

    def test_repeated_and_empty_references(self, workspace):
        first = add_demand(workspace)
        add_demand(workspace)
        add_document(workspace, demand_id=first["id"])
        add_document(workspace, demand_id=first["id"])
        add_document(workspace, demand_id="")
        add_document(workspace)
        assert workspace.metrics.refresh().document_stats.demand_coverage == 50

    def test_coverage_limited_to_existing_demands(self, clock):
        ws = build_workspace(settings=Settings(coverage_existing_demands_only=True), clock=clock)
        kept = add_demand(ws)
        removed = add_demand(ws)
        add_document(ws, demand_id=kept["id"])
        add_document(ws, demand_id=removed["id"])
        ws.demands.delete(removed["id"])
        assert ws.metrics.refresh().document_stats.demand_coverage == 100

    def test_open_ended_status_buckets(self, clock):
        ws = build_workspace(settings=Settings(zero_fill_document_status=False), clock=clock)
        add_document(ws, status=DocumentStatus.ARCHIVED)
        assert ws.metrics.refresh().document_stats.by_status == {"Archived": 1}


class TestSnapshot:
    def test_snapshot_is_stale_until_refresh(self, workspace):
        assert workspace.metrics.snapshot is None
        first = workspace.metrics.refresh()
        add_demand(workspace)

        assert workspace.metrics.snapshot is first
        assert sum(first.demand_stats.by_status.values()) == 0
        second = workspace.metrics.refresh()
        assert sum(second.demand_stats.by_status.values()) == 1
        assert workspace.metrics.snapshot is second

    def test_aggregator_can_be_built_directly(self, workspace, settings, clock):
        aggregator = MetricsAggregator(
            workspace.demands, workspace.roadmap, workspace.documents, settings=settings, clock=clock
        )
        add_item(workspace, end_time=date(2020, 1, 1).isoformat())
        assert aggregator.refresh().roadmap_stats.delayed == 1
