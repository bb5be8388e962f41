from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .models import DocumentEntity, DocumentStatus
from .repositories import InMemoryCollection
from .results import MutationResult
from .schemas import DocumentCreate, DocumentUpdate
from .utils import document_page

INITIAL_VERSION = 1.0
VERSION_STEP = 0.1


@dataclass(frozen=True)
class DocumentQuery:
    """
    Filters for listing documents.
    """
    status: Optional[DocumentStatus] = None
    demand_id: Optional[str] = None


def next_version(current: Optional[float]) -> float:
    """Bump a document version by one step, keeping a single decimal."""
    return round((current or INITIAL_VERSION) + VERSION_STEP, 1)


# PUBLIC_INTERFACE
class DocumentRepository(InMemoryCollection[DocumentEntity]):
    """
    In-memory document store. Every update bumps the version by 0.1, even
    when the patch changes nothing.
    """

    entity_name = "document"

    def create(self, data: DocumentCreate) -> DocumentEntity:
        now = self._now()
        entity: DocumentEntity = {
            "id": self._allocate_id(),
            "title": data.title,
            "content": data.content,
            "status": data.status,
            "demand_id": data.demand_id,
            "tags": list(data.tags),
            "version": INITIAL_VERSION,
            "creator": data.creator,
            "created_at": now,
            "updated_at": now,
        }
        return self._append(entity)

    def update(self, document_id: str, data: DocumentUpdate) -> MutationResult:
        fields = data.model_dump(exclude_unset=True, exclude_none=True)
        # Respect explicit nulling of demand_id
        if data.demand_id is None and "demand_id" in data.model_fields_set:
            fields["demand_id"] = None

        def patch(entity: DocumentEntity) -> DocumentEntity:
            entity.update(fields)  # type: ignore[typeddict-item]
            entity["version"] = next_version(entity["version"])
            entity["updated_at"] = self._now()
            return entity

        return self._replace(document_id, patch)

    def search(self, keyword: str) -> List[DocumentEntity]:
        """
        Documents whose title contains keyword, or with a tag containing it.
        Plain case-sensitive substring matching, in list order.
        """
        return [
            d for d in self.all()
            if keyword in d["title"] or any(keyword in tag for tag in d["tags"])
        ]

    def paginate(self, page: int, page_size: int) -> Dict[str, Any]:
        """
        Return the 1-based page [(page-1)*page_size, page*page_size) of the
        collection in list order, with the total count. Pages outside the
        collection, and non-positive page or page_size, yield no items.
        """
        with self._lock:
            total = len(self._items)
            if page < 1 or page_size < 1:
                items: List[DocumentEntity] = []
            else:
                start = (page - 1) * page_size
                items = [self._copy(d) for d in self._items[start:start + page_size]]
        return document_page(items, total, page, page_size)

    def find_by_demand(self, demand_id: str) -> List[DocumentEntity]:
        return [d for d in self.all() if d["demand_id"] == demand_id]

    def list(self, query: Optional[DocumentQuery] = None) -> List[DocumentEntity]:
        q = query or DocumentQuery()
        items = self.all()
        if q.status is not None:
            items = [d for d in items if d["status"] == q.status]
        if q.demand_id is not None:
            items = [d for d in items if d["demand_id"] == q.demand_id]
        return items
