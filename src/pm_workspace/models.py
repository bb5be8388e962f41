from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, TypedDict


class DemandStatus(str, Enum):
    PENDING = "Pending"
    DEVELOPING = "Developing"
    TESTING = "Testing"
    ONLINE = "Online"
    REJECTED = "Rejected"


class DemandPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class DocumentStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    ARCHIVED = "Archived"


class RoadmapStatus(str, Enum):
    PLANNING = "Planning"
    DEVELOPING = "Developing"
    COMPLETED = "Completed"


class RiceParamsEntity(TypedDict):
    reach: float
    impact: float
    confidence: float
    effort: float


# PUBLIC_INTERFACE
class DemandEntity(TypedDict):
    """
    A feature request as held by the demand store.

    Fields:
    - id: Opaque unique identifier, immutable
    - title / description: Non-empty text
    - status: DemandStatus, Pending on creation
    - priority: DemandPriority derived from rice_score
    - rice_score: Score derived from rice_params (one decimal)
    - rice_params: reach, impact, confidence, effort
    - tags: Distinct labels in display order
    - creator / product_id: Free-text metadata
    - created_at: Fixed at creation
    - updated_at: Refreshed on every mutation
    """

    id: str
    title: str
    description: str
    status: DemandStatus
    priority: DemandPriority
    rice_score: float
    rice_params: RiceParamsEntity
    tags: List[str]
    creator: str
    product_id: str
    created_at: datetime
    updated_at: datetime


# PUBLIC_INTERFACE
class DocumentEntity(TypedDict):
    """
    A specification document. demand_id is a weak reference into the demand
    store and may point at a deleted demand. version starts at 1.0 and grows
    by 0.1 on each update.
    """

    id: str
    title: str
    content: str
    status: DocumentStatus
    demand_id: Optional[str]
    tags: List[str]
    version: float
    creator: str
    created_at: datetime
    updated_at: datetime


# PUBLIC_INTERFACE
class RoadmapItemEntity(TypedDict):
    """A release plan entry referencing demands by id (duplicates kept)."""

    id: str
    version: str
    status: RoadmapStatus
    start_time: date
    end_time: date
    description: str
    owner: str
    demand_ids: List[str]
