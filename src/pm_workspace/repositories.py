from __future__ import annotations

import copy
import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from threading import RLock
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from .models import DemandEntity
from .reorder import indices_in_bounds, move_item
from .results import MutationResult, ReorderIndexError
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

E = TypeVar("E")
Clock = Callable[[], datetime]


# PUBLIC_INTERFACE
class DemandReader(ABC):
    """
    Read-only view of the demand store used by the roadmap store and the
    metrics aggregator. Ids are weak references, so get() may return None
    for ids that used to exist.
    """

    @abstractmethod
    def get(self, demand_id: str) -> Optional[DemandEntity]:
        """Return a DemandEntity by id, or None if not found."""

    @abstractmethod
    def all(self) -> List[DemandEntity]:
        """Return every demand in list order."""


class InMemoryCollection(Generic[E]):
    """
    Ordered in-memory record collection shared by the three stores.

    Records are dicts keyed by 'id'. Reads hand out deep copies so callers
    cannot mutate stored state, and every public call holds the lock for its
    whole duration.
    """

    entity_name = "record"

    def __init__(self, settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> None:
        self._lock = RLock()
        self._items: List[E] = []
        self._settings = settings or get_settings()
        self._clock = clock or datetime.now

    def _now(self) -> datetime:
        return self._clock()

    def _allocate_id(self) -> str:
        return str(uuid.uuid4())

    @staticmethod
    def _copy(item: E) -> E:
        return copy.deepcopy(item)

    def _index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item["id"] == item_id:
                return i
        return None

    def _append(self, item: E) -> E:
        with self._lock:
            self._items.append(item)
        logger.debug("Created %s %s", self.entity_name, item["id"])
        return self._copy(item)

    def _replace(self, item_id: str, patch: Callable[[E], E]) -> MutationResult:
        with self._lock:
            idx = self._index_of(item_id)
            if idx is None:
                logger.info("Ignoring update of missing %s %s", self.entity_name, item_id)
                return MutationResult.not_found(item_id)
            updated = patch(self._copy(self._items[idx]))
            self._items[idx] = updated
            logger.debug("Updated %s %s", self.entity_name, item_id)
            return MutationResult.found(self._copy(updated), item_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, item_id: str) -> Optional[E]:
        with self._lock:
            idx = self._index_of(item_id)
            return None if idx is None else self._copy(self._items[idx])

    def find_by_id(self, item_id: str) -> Optional[E]:
        return self.get(item_id)

    def all(self) -> List[E]:
        with self._lock:
            return [self._copy(t) for t in self._items]

    def delete(self, item_id: str) -> MutationResult:
        """Remove a record. References held elsewhere are left dangling."""
        with self._lock:
            idx = self._index_of(item_id)
            if idx is None:
                logger.info("Ignoring delete of missing %s %s", self.entity_name, item_id)
                return MutationResult.not_found(item_id)
            removed = self._items.pop(idx)
        logger.debug("Deleted %s %s", self.entity_name, item_id)
        return MutationResult.found(removed, item_id)

    def reorder(self, from_index: int, to_index: int) -> MutationResult:
        """
        Move the record at from_index to to_index.

        Out-of-range indices are ignored (NOT_FOUND result) or raise
        ReorderIndexError, depending on the reorder_out_of_range setting.
        """
        with self._lock:
            if not indices_in_bounds(len(self._items), from_index, to_index):
                if self._settings.reorder_out_of_range == "raise":
                    raise ReorderIndexError(
                        f"cannot move {self.entity_name} {from_index} -> {to_index} "
                        f"in a list of {len(self._items)}"
                    )
                logger.info(
                    "Ignoring out-of-range %s reorder %d -> %d", self.entity_name, from_index, to_index
                )
                return MutationResult.not_found((from_index, to_index))
            move_item(self._items, from_index, to_index)
            moved = self._copy(self._items[to_index])
        return MutationResult.found(moved, (from_index, to_index))

    def load(self, records: Iterable[E]) -> None:
        """Append pre-built records as given, keeping their ids."""
        with self._lock:
            for record in records:
                self._items.append(self._copy(record))
