"""
Sample records for demos and manual exploration.

Derived RICE fields are recomputed on load, so only rice_params matter here.
Several documents point at demand ids that are not seeded; those are
dangling weak references on purpose.
"""
from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, List

from .models import (
    DemandEntity,
    DemandPriority,
    DemandStatus,
    DocumentEntity,
    DocumentStatus,
    RoadmapItemEntity,
    RoadmapStatus,
)

if TYPE_CHECKING:
    from .workspace import Workspace


def demo_demands() -> List[DemandEntity]:
    return [
        {
            "id": "1",
            "title": "Streamline the sign-up flow",
            "description": "Sign-up asks for six fields; keep phone number plus verification code and collect the rest later.",
            "status": DemandStatus.PENDING,
            "priority": DemandPriority.LOW,
            "rice_score": 0.0,
            "rice_params": {"reach": 10000, "impact": 4, "confidence": 90, "effort": 2},
            "tags": ["ux", "conversion"],
            "creator": "pm-a",
            "product_id": "prod-1",
            "created_at": datetime(2024, 9, 1),
            "updated_at": datetime(2024, 9, 1),
        },
        {
            "id": "2",
            "title": "Membership tiers",
            "description": "Three tiers by spend, each with its own perks such as discounts and dedicated support.",
            "status": DemandStatus.DEVELOPING,
            "priority": DemandPriority.LOW,
            "rice_score": 0.0,
            "rice_params": {"reach": 5000, "impact": 3, "confidence": 80, "effort": 5},
            "tags": ["monetization", "retention"],
            "creator": "pm-a",
            "product_id": "prod-1",
            "created_at": datetime(2024, 8, 28),
            "updated_at": datetime(2024, 8, 30),
        },
    ]


def demo_documents() -> List[DocumentEntity]:
    return [
        {
            "id": "doc1",
            "title": "Sign-up flow PRD",
            "content": "<p>1. Phone verification then password<br>2. International dialling codes</p>",
            "status": DocumentStatus.PUBLISHED,
            "demand_id": "1",
            "tags": ["PRD", "ux"],
            "version": 1.2,
            "creator": "pm-a",
            "created_at": datetime(2025, 9, 5),
            "updated_at": datetime(2025, 9, 7),
        },
        {
            "id": "doc2",
            "title": "Membership tier design",
            "content": "<p>Regular, gold and diamond tiers; one point per unit spent.</p>",
            "status": DocumentStatus.PUBLISHED,
            "demand_id": "2",
            "tags": ["PRD", "membership"],
            "version": 1.0,
            "creator": "pm-a",
            "created_at": datetime(2025, 8, 29),
            "updated_at": datetime(2025, 8, 29),
        },
        {
            "id": "doc3",
            "title": "iOS payment failure report",
            "content": "<p>Payment callbacks are not delivered on some iOS versions.</p>",
            "status": DocumentStatus.PUBLISHED,
            "demand_id": "3",
            "tags": ["bug", "payments", "tech"],
            "version": 1.1,
            "creator": "dev-b",
            "created_at": datetime(2025, 9, 4),
            "updated_at": datetime(2025, 9, 5),
        },
        {
            "id": "doc4",
            "title": "Home page performance plan",
            "content": "<p>Target load time under 1.5s: WebP images, lazy loading, smaller first-screen bundle.</p>",
            "status": DocumentStatus.DRAFT,
            "demand_id": "5",
            "tags": ["performance", "frontend"],
            "version": 0.8,
            "creator": "lead-d",
            "created_at": datetime(2025, 8, 22),
            "updated_at": datetime(2025, 9, 1),
        },
        {
            "id": "doc5",
            "title": "Order timeout cancellation rules",
            "content": "<p>Regular items time out after 15 minutes, pre-orders after 30.</p>",
            "status": DocumentStatus.DRAFT,
            "demand_id": None,
            "tags": ["orders", "rules"],
            "version": 1.0,
            "creator": "pm-a",
            "created_at": datetime(2025, 9, 3),
            "updated_at": datetime(2025, 9, 3),
        },
    ]


def demo_roadmap() -> List[RoadmapItemEntity]:
    return [
        {
            "id": "v1",
            "version": "V1.0",
            "status": RoadmapStatus.COMPLETED,
            "start_time": date(2024, 6, 1),
            "end_time": date(2024, 8, 30),
            "description": "Core launch: sign-up and basic demand management",
            "owner": "pm-a",
            "demand_ids": ["1"],
        },
        {
            "id": "v2",
            "version": "V2.0",
            "status": RoadmapStatus.DEVELOPING,
            "start_time": date(2024, 9, 1),
            "end_time": date(2024, 11, 30),
            "description": "Roadmap planning and the document center",
            "owner": "pm-a",
            "demand_ids": ["2"],
        },
    ]


# PUBLIC_INTERFACE
def load_demo_data(workspace: "Workspace") -> None:
    """Append the sample demands, documents and roadmap items to a workspace."""
    workspace.demands.load(demo_demands())
    workspace.documents.load(demo_documents())
    workspace.roadmap.load(demo_roadmap())
