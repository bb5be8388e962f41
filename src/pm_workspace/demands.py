from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .models import DemandEntity, DemandPriority, DemandStatus, RiceParamsEntity
from .repositories import DemandReader, InMemoryCollection
from .results import MutationResult
from .rice import calculate_rice, validate_rice_params
from .schemas import DemandCreate, DemandUpdate

logger = logging.getLogger(__name__)

SORT_FIELDS = {"rice_score", "created_at"}


@dataclass(frozen=True)
class DemandQuery:
    """
    Filters for listing demands.
    """
    search: Optional[str] = None
    status: Optional[DemandStatus] = None
    priority: Optional[DemandPriority] = None
    sort: Optional[str] = None  # allowed: rice_score, -rice_score, created_at, -created_at; None keeps list order


# PUBLIC_INTERFACE
class DemandRepository(InMemoryCollection[DemandEntity], DemandReader):
    """
    In-memory demand store. rice_score and priority are derived from
    rice_params on every create and on every update that touches them.
    """

    entity_name = "demand"

    def _check_rice(self, params: RiceParamsEntity) -> None:
        if self._settings.strict_validation:
            try:
                validate_rice_params(params)
            except ValueError:
                logger.warning("Rejected RICE params %s", params)
                raise

    def _apply_rice(self, entity: DemandEntity) -> DemandEntity:
        result = calculate_rice(entity["rice_params"])
        entity["rice_score"] = result.score
        entity["priority"] = result.priority
        return entity

    def create(self, data: DemandCreate) -> DemandEntity:
        params: RiceParamsEntity = data.rice_params.model_dump()  # type: ignore[assignment]
        self._check_rice(params)
        now = self._now()
        entity: DemandEntity = {
            "id": self._allocate_id(),
            "title": data.title,
            "description": data.description,
            "status": DemandStatus.PENDING,
            "priority": DemandPriority.LOW,
            "rice_score": 0.0,
            "rice_params": params,
            "tags": list(data.tags),
            "creator": data.creator,
            "product_id": data.product_id,
            "created_at": now,
            "updated_at": now,
        }
        return self._append(self._apply_rice(entity))

    def update(self, demand_id: str, data: DemandUpdate) -> MutationResult:
        """
        Merge the provided fields into the demand. rice_params fields are
        merged over the stored parameters and the score recomputed from the
        result. A missing id is a no-op reported as NOT_FOUND.
        """
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        rice_patch = fields.pop("rice_params", None)

        def patch(entity: DemandEntity) -> DemandEntity:
            if rice_patch:
                merged: RiceParamsEntity = {**entity["rice_params"], **rice_patch}  # type: ignore[typeddict-item]
                self._check_rice(merged)
                entity["rice_params"] = merged
            entity.update(fields)  # type: ignore[typeddict-item]
            if rice_patch:
                self._apply_rice(entity)
            entity["updated_at"] = self._now()
            return entity

        return self._replace(demand_id, patch)

    def list(self, query: Optional[DemandQuery] = None) -> List[DemandEntity]:
        """
        Return demands matching the query.
        - Substring search across title and description (case-sensitive)
        - Filter by status and by priority
        - Optional sorting by rice_score/created_at (asc/desc)
        """
        q = query or DemandQuery()
        items: Iterable[DemandEntity] = self.all()

        if q.search:
            s = q.search
            items = [d for d in items if s in d["title"] or s in d["description"]]
        if q.status is not None:
            items = [d for d in items if d["status"] == q.status]
        if q.priority is not None:
            items = [d for d in items if d["priority"] == q.priority]

        items = list(items)
        if q.sort:
            sort_key = q.sort.strip().lower()
            reverse = sort_key.startswith("-")
            field = sort_key[1:] if reverse else sort_key
            if field in SORT_FIELDS:
                items = sorted(items, key=lambda d: d[field], reverse=reverse)
        return items

    def load(self, records: Iterable[DemandEntity]) -> None:
        """Append seeded demands, recomputing their derived RICE fields."""
        super().load(self._apply_rice(dict(r)) for r in records)  # type: ignore[misc]
