"""
Drag-to-reorder reconciliation shared by the demand list and the roadmap timeline.

A DragSession follows one pointer gesture: pick_up() captures the dragged
record and its index, each hover() over another slot may commit a move, and
release() ends the gesture without a final commit. A hover only commits once
the pointer has crossed the hovered slot's vertical midpoint in the direction
of travel, so two neighbours do not swap back and forth under the pointer.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, MutableSequence, Optional

logger = logging.getLogger(__name__)


class DragState(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


# PUBLIC_INTERFACE
def indices_in_bounds(length: int, from_index: int, to_index: int) -> bool:
    """True when both indices address an existing element of a sequence of this length."""
    return 0 <= from_index < length and 0 <= to_index < length


# PUBLIC_INTERFACE
def move_item(items: MutableSequence[Any], from_index: int, to_index: int) -> MutableSequence[Any]:
    """
    Splice the element at from_index out and reinsert it at to_index, in place.
    The caller is responsible for bounds checking.
    """
    moved = items.pop(from_index)
    items.insert(to_index, moved)
    return items


# PUBLIC_INTERFACE
class DragSession:
    """
    State machine for a single drag gesture over an ordered list.

    on_move(from_index, to_index) is called for every committed move; it
    usually is a store's reorder method. A falsy return value (an ignored
    MutationResult) leaves the tracked index where it was.
    """

    def __init__(self, on_move: Callable[[int, int], Any]) -> None:
        self._on_move = on_move
        self.state = DragState.IDLE
        self.dragged_id: Optional[str] = None
        self.drag_index: Optional[int] = None
        self.moves: List[tuple] = []

    @property
    def is_dragging(self) -> bool:
        return self.state is DragState.DRAGGING

    def pick_up(self, dragged_id: str, index: int) -> None:
        self.state = DragState.DRAGGING
        self.dragged_id = dragged_id
        self.drag_index = index
        self.moves = []
        logger.debug("Picked up %s at index %d", dragged_id, index)

    def hover(
        self,
        hover_index: int,
        slot_top: float,
        slot_bottom: float,
        pointer_y: Optional[float],
    ) -> bool:
        """
        Handle the pointer hovering the slot at hover_index.

        slot_top/slot_bottom are the hovered element's vertical bounds and
        pointer_y the pointer's vertical position in the same coordinates
        (None when the position is unknown). Returns True when a move was
        committed.
        """
        if not self.is_dragging or self.drag_index is None:
            return False

        drag_index = self.drag_index
        if drag_index == hover_index:
            return False

        hover_middle_y = (slot_bottom - slot_top) / 2
        hover_client_y = pointer_y - slot_top if pointer_y is not None else 0

        # Dragging down: only move once the pointer is past the midpoint
        if drag_index < hover_index and hover_client_y < hover_middle_y:
            return False
        # Dragging up: only move once the pointer is above the midpoint
        if drag_index > hover_index and hover_client_y > hover_middle_y:
            return False

        result = self._on_move(drag_index, hover_index)
        if result is not None and not result:
            logger.info("Move %d -> %d was not applied", drag_index, hover_index)
            return False

        self.drag_index = hover_index
        self.moves.append((drag_index, hover_index))
        return True

    def release(self) -> List[tuple]:
        """End the gesture and return the moves committed during it."""
        moves = self.moves
        logger.debug("Released %s after %d move(s)", self.dragged_id, len(moves))
        self.state = DragState.IDLE
        self.dragged_id = None
        self.drag_index = None
        self.moves = []
        return moves
