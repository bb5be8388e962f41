import pytest

from pm_workspace.reorder import DragSession, DragState, indices_in_bounds, move_item
from pm_workspace.results import MutationResult
from pm_workspace.schemas import RoadmapItemCreate

# Every slot is 40px tall; slot i spans [i*40, i*40 + 40) so its midpoint offset is 20
SLOT_HEIGHT = 40


def slot(index):
    top = index * SLOT_HEIGHT
    return top, top + SLOT_HEIGHT


class ListHarness:
    """Plain list wired to a DragSession the way a list view would wire it."""

    def __init__(self, items):
        self.items = list(items)
        self.calls = []

    def on_move(self, from_index, to_index):
        self.calls.append((from_index, to_index))
        move_item(self.items, from_index, to_index)


@pytest.fixture
def harness():
    return ListHarness(["a", "b", "c", "d"])


@pytest.fixture
def session(harness):
    return DragSession(harness.on_move)


class TestMoveItem:
    def test_moves_forward_and_back(self):
        items = ["a", "b", "c", "d"]
        assert move_item(items, 0, 2) == ["b", "c", "a", "d"]
        assert move_item(items, 3, 0) == ["d", "b", "c", "a"]

    def test_same_index_keeps_order(self):
        assert move_item(["a", "b"], 1, 1) == ["a", "b"]

    def test_bounds(self):
        assert indices_in_bounds(3, 0, 2)
        assert not indices_in_bounds(3, 0, 3)
        assert not indices_in_bounds(3, -1, 0)
        assert not indices_in_bounds(0, 0, 0)


class TestDragSession:
    def test_idle_until_picked_up(self, session, harness):
        assert session.state is DragState.IDLE
        assert session.hover(1, *slot(1), pointer_y=75) is False
        assert harness.calls == []

    def test_hover_own_slot_is_no_op(self, session, harness):
        session.pick_up("a", 0)
        assert session.hover(0, *slot(0), pointer_y=35) is False
        assert harness.calls == []

    def test_dragging_down_waits_for_midpoint(self, session, harness):
        session.pick_up("a", 0)
        top, bottom = slot(1)
        assert session.hover(1, top, bottom, pointer_y=top + 10) is False
        assert harness.items == ["a", "b", "c", "d"]

        assert session.hover(1, top, bottom, pointer_y=top + 30) is True
        assert harness.items == ["b", "a", "c", "d"]
        assert session.drag_index == 1

    def test_dragging_down_commits_exactly_at_midpoint(self, session, harness):
        session.pick_up("a", 0)
        top, bottom = slot(1)
        assert session.hover(1, top, bottom, pointer_y=top + 20) is True

    def test_dragging_up_waits_for_midpoint(self, session, harness):
        session.pick_up("d", 3)
        top, bottom = slot(2)
        assert session.hover(2, top, bottom, pointer_y=top + 30) is False
        assert session.hover(2, top, bottom, pointer_y=top + 5) is True
        assert harness.items == ["a", "b", "d", "c"]
        assert session.drag_index == 2

    def test_no_jitter_between_neighbours(self, session, harness):
        session.pick_up("a", 0)
        top, bottom = slot(1)
        assert session.hover(1, top, bottom, pointer_y=top + 25)
        # "b" now sits in slot 0; the pointer lingering in its lower half must not swap back
        top0, bottom0 = slot(0)
        assert session.hover(0, top0, bottom0, pointer_y=top0 + 30) is False
        assert harness.items == ["b", "a", "c", "d"]
        assert harness.calls == [(0, 1)]

    def test_tracked_index_follows_successive_moves(self, session, harness):
        session.pick_up("a", 0)
        for target in (1, 2, 3):
            top, bottom = slot(target)
            assert session.hover(target, top, bottom, pointer_y=top + 35)
        assert harness.items == ["b", "c", "d", "a"]
        assert harness.calls == [(0, 1), (1, 2), (2, 3)]

    def test_missing_pointer_offset_counts_as_top_of_slot(self, session, harness):
        session.pick_up("a", 0)
        assert session.hover(2, *slot(2), pointer_y=None) is False
        session.pick_up("d", 3)
        assert session.hover(1, *slot(1), pointer_y=None) is True
        assert harness.items == ["a", "d", "b", "c"]

    def test_release_does_not_commit(self, session, harness):
        session.pick_up("a", 0)
        top, bottom = slot(1)
        session.hover(1, top, bottom, pointer_y=top + 30)
        moves = session.release()
        assert moves == [(0, 1)]
        assert session.state is DragState.IDLE
        assert session.drag_index is None
        assert harness.calls == [(0, 1)]
        assert session.hover(2, *slot(2), pointer_y=90) is False

    def test_ignored_move_keeps_tracked_index(self):
        session = DragSession(lambda f, t: MutationResult.not_found((f, t)))
        session.pick_up("x", 0)
        assert session.hover(1, *slot(1), pointer_y=75) is False
        assert session.drag_index == 0


class TestStoreDragging:
    def test_roadmap_timeline_drag(self, workspace):
        ids = [
            workspace.roadmap.create(
                RoadmapItemCreate(version=f"V{i}", start_time="2025-01-01", end_time="2025-02-01")
            )["id"]
            for i in range(3)
        ]
        session = workspace.drag_roadmap()
        session.pick_up(ids[2], 2)
        assert session.hover(0, *slot(0), pointer_y=10)
        session.release()
        assert [item["id"] for item in workspace.roadmap.all()] == [ids[2], ids[0], ids[1]]
