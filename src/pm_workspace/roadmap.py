from __future__ import annotations

from typing import List, Optional

from .models import DemandEntity, RoadmapItemEntity
from .repositories import Clock, DemandReader, InMemoryCollection
from .results import MutationResult
from .schemas import RoadmapItemCreate, RoadmapItemUpdate
from .settings import Settings


# PUBLIC_INTERFACE
class RoadmapRepository(InMemoryCollection[RoadmapItemEntity]):
    """
    In-memory, ordered roadmap store. demand_ids are weak references
    resolved through a DemandReader; the store never writes to demands.
    """

    entity_name = "roadmap item"

    def __init__(
        self,
        demands: DemandReader,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        super().__init__(settings=settings, clock=clock)
        self._demands = demands

    def create(self, data: RoadmapItemCreate) -> RoadmapItemEntity:
        entity: RoadmapItemEntity = {
            "id": self._allocate_id(),
            "version": data.version,
            "status": data.status,
            "start_time": data.start_time,
            "end_time": data.end_time,
            "description": data.description,
            "owner": data.owner,
            "demand_ids": list(data.demand_ids),
        }
        return self._append(entity)

    def update(self, item_id: str, data: RoadmapItemUpdate) -> MutationResult:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)

        def patch(entity: RoadmapItemEntity) -> RoadmapItemEntity:
            entity.update(fields)  # type: ignore[typeddict-item]
            return entity

        return self._replace(item_id, patch)

    def get_demands_in_version(self, demand_ids: List[str]) -> List[DemandEntity]:
        """Resolve demand ids in order, skipping ids whose demand no longer exists."""
        resolved = (self._demands.get(demand_id) for demand_id in demand_ids)
        return [d for d in resolved if d is not None]
