from __future__ import annotations

from datetime import date, datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .models import DemandPriority, DemandStatus, DocumentStatus, RoadmapStatus

# Shared type for incoming roadmap dates which can be a date, datetime, or ISO8601 string
DayInput = Union[date, datetime, str]


def _parse_day(value: Optional[DayInput]) -> Optional[date]:
    """
    Internal helper to normalize roadmap dates into a calendar date.
    - If value is a datetime, its date part is kept.
    - If value is a date, return as-is.
    - If value is a string, parse 'YYYY-MM-DD' or a full ISO8601 datetime.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        s = value.strip()
        try:
            return date.fromisoformat(s)
        except ValueError:
            try:
                return datetime.fromisoformat(s).date()
            except ValueError as e:
                raise ValueError(
                    "Invalid date format. Use an ISO8601 date or datetime string (e.g., '2025-01-31')."
                ) from e

    raise ValueError("Invalid type for date; expected date, datetime, or ISO8601 string.")


def _require_text(v: Optional[str], field: str) -> Optional[str]:
    if v is None:
        return v
    s = v.strip()
    if not s:
        raise ValueError(f"{field} must not be blank")
    return s


def _distinct_tags(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    seen = set()
    for tag in v:
        if tag in seen:
            raise ValueError(f"duplicate tag: {tag!r}")
        seen.add(tag)
    return v


# PUBLIC_INTERFACE
class RiceParams(BaseModel):
    """
    RICE inputs. Values are accepted as given; range checks are only applied
    by stores running with strict validation enabled.
    """

    reach: float = Field(..., description="Number of users affected")
    impact: float = Field(..., description="Impact level, 1..5")
    confidence: float = Field(..., description="Confidence percentage, 0..100")
    effort: float = Field(..., description="Cost in person-days")


# PUBLIC_INTERFACE
class RiceParamsUpdate(BaseModel):
    """Partial RICE inputs merged over the stored parameters."""

    reach: Optional[float] = None
    impact: Optional[float] = None
    confidence: Optional[float] = None
    effort: Optional[float] = None


# PUBLIC_INTERFACE
class DemandCreate(BaseModel):
    """
    Schema for creating a demand. Status, priority, score, id and timestamps
    are assigned by the store.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Simplify sign-up",
                "description": "Keep phone number and code only",
                "rice_params": {"reach": 10000, "impact": 4, "confidence": 90, "effort": 2},
                "tags": ["ux", "conversion"],
                "creator": "pm-a",
                "product_id": "prod-1",
            }
        }
    )

    title: str = Field(..., description="Short title of the demand", min_length=1)
    description: str = Field(..., description="What is requested and why", min_length=1)
    rice_params: RiceParams
    tags: List[str] = Field(default_factory=list, description="Distinct labels in display order")
    creator: str = Field(default="", description="Who raised the demand")
    product_id: str = Field(default="", description="Owning product")

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v: str, info: ValidationInfo) -> str:
        """Strip whitespace and reject blank text."""
        return _require_text(v, info.field_name)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _distinct_tags(v)


# PUBLIC_INTERFACE
class DemandUpdate(BaseModel):
    """
    Schema for patching a demand.
    All fields are optional; only provided fields will be updated.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    status: Optional[DemandStatus] = None
    rice_params: Optional[RiceParamsUpdate] = None
    tags: Optional[List[str]] = None
    creator: Optional[str] = None
    product_id: Optional[str] = None

    @field_validator("title", "description")
    @classmethod
    def validate_text(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return _require_text(v, info.field_name)

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _distinct_tags(v)


# PUBLIC_INTERFACE
class DocumentCreate(BaseModel):
    """Schema for creating a document. Version starts at 1.0."""

    title: str = Field(..., description="Document title", min_length=1)
    content: str = Field(default="", description="Rich-text body, stored untouched")
    status: DocumentStatus = Field(default=DocumentStatus.DRAFT)
    demand_id: Optional[str] = Field(default=None, description="Related demand id, if any")
    tags: List[str] = Field(default_factory=list)
    creator: str = Field(default="")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "title")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: List[str]) -> List[str]:
        return _distinct_tags(v)


# PUBLIC_INTERFACE
class DocumentUpdate(BaseModel):
    """
    Schema for patching a document. demand_id may be explicitly set to null
    to detach the document from its demand.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    content: Optional[str] = None
    status: Optional[DocumentStatus] = None
    demand_id: Optional[str] = None
    tags: Optional[List[str]] = None
    creator: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v, "title")

    @field_validator("tags")
    @classmethod
    def validate_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _distinct_tags(v)


# PUBLIC_INTERFACE
class RoadmapItemCreate(BaseModel):
    """
    Schema for creating a roadmap item. Dates accept ISO8601 strings; the
    ordering of start_time and end_time is not checked.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "version": "V2.3",
                "status": "Planning",
                "start_time": "2025-09-01",
                "end_time": "2025-11-30",
                "description": "Roadmap planning and document center",
                "owner": "pm-a",
                "demand_ids": ["1", "2"],
            }
        }
    )

    version: str = Field(..., description="Free-text release label", min_length=1)
    status: RoadmapStatus = Field(default=RoadmapStatus.PLANNING)
    start_time: date
    end_time: date
    description: str = Field(default="")
    owner: str = Field(default="")
    demand_ids: List[str] = Field(default_factory=list, description="Referenced demand ids in order")

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        return _require_text(v, "version")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_day(cls, v: Optional[DayInput]) -> Optional[date]:
        return _parse_day(v)


# PUBLIC_INTERFACE
class RoadmapItemUpdate(BaseModel):
    """Schema for patching a roadmap item; only provided fields are updated."""

    version: Optional[str] = Field(default=None, min_length=1)
    status: Optional[RoadmapStatus] = None
    start_time: Optional[date] = None
    end_time: Optional[date] = None
    description: Optional[str] = None
    owner: Optional[str] = None
    demand_ids: Optional[List[str]] = None

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: Optional[str]) -> Optional[str]:
        return _require_text(v, "version")

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def parse_day(cls, v: Optional[DayInput]) -> Optional[date]:
        return _parse_day(v)


class TrendPoint(BaseModel):
    day: date
    count: int


class VersionProgress(BaseModel):
    version: str
    completed: int
    total: int
    progress: int = Field(..., description="Share of Online demands, 0..100")


class DemandStats(BaseModel):
    by_status: Dict[DemandStatus, int]
    by_priority: Dict[DemandPriority, int]
    trend: List[TrendPoint]


class RoadmapStats(BaseModel):
    progress: List[VersionProgress]
    delayed: int = Field(..., description="Items past end_time and not Completed")


class DocumentStats(BaseModel):
    by_status: Dict[str, int]
    demand_coverage: int = Field(..., description="Percent of demands referenced by a document")


# PUBLIC_INTERFACE
class DashboardSnapshot(BaseModel):
    """
    Point-in-time dashboard aggregate. Not kept in sync with later store
    mutations; call MetricsAggregator.refresh() again for fresh numbers.
    """

    generated_at: datetime
    demand_stats: DemandStats
    roadmap_stats: RoadmapStats
    document_stats: DocumentStats
