from itertools import count

import pytest

from rivercross.node import SearchNode, NodeFlags
from rivercross.state import State, BoatSide
from rivercross.errors import InvariantViolation
from rivercross.logger import RunLogger

L, R = BoatSide.LEFT, BoatSide.RIGHT


def mk_root(state=None, sink=None):
    state = state or State.initial(3, 3)
    if sink is None:
        return SearchNode(nid=0, state=state)
    return SearchNode(nid=0, state=state, sink=sink)


class TestLifecycle:
    """Flag transitions on a single node."""

    def test_root_flags(self):
        root = mk_root()
        assert root.flags == NodeFlags(is_root=True)
        assert root.depth == 0

    def test_open_close_exclusive(self):
        n = mk_root()
        n.open()
        assert n.flags.is_open and not n.flags.is_closed
        n.close()
        assert n.flags.is_closed and not n.flags.is_open

    def test_mark_valid_and_solution(self):
        bad = mk_root(State(3, 2, 0, 1, R))
        assert bad.mark_valid() is False
        assert bad.flags.is_valid is False
        assert bad.mark_solution() is False

        goal = mk_root(State(0, 0, 3, 3, R))
        assert goal.mark_solution() is True
        assert goal.flags.is_solution

    def test_marks_are_memoized(self):
        log = RunLogger()
        n = mk_root(State(3, 2, 0, 1, R), sink=log)
        n.mark_valid()
        n.mark_valid()
        assert len(log.of_type("flags")) == 1


class TestChildren:

    def test_generate_children_order_and_links(self):
        root = mk_root()
        ids = count(1)
        kids = root.generate_children(ids)
        assert [k.nid for k in kids] == [1, 2, 3, 4, 5]
        assert [k.state for k in kids] == [
            State(2, 3, 1, 0, R),
            State(1, 3, 2, 0, R),
            State(3, 2, 0, 1, R),
            State(3, 1, 0, 2, R),
            State(2, 2, 1, 1, R),
        ]
        assert root.children == kids
        assert all(k.parent is root for k in kids)
        assert all(not k.flags.is_root for k in kids)
        assert kids[0].depth == 1

    def test_children_share_sink(self):
        log = RunLogger()
        root = mk_root(sink=log)
        root.generate_children(count(1))
        assert [e["node"] for e in log.of_type("spawned")] == [0, 1, 2, 3, 4, 5]

    def test_retrace_marks_whole_path(self):
        root = mk_root()
        child = root.generate_children(count(1))[4]
        grandchild = child.generate_children(count(10))[0]
        path = grandchild.retrace_path()
        assert path == [grandchild, child, root]
        assert all(n.flags.is_solution for n in path)
        # siblings untouched
        assert not root.children[0].flags.is_solution


class TestDuplicates:
    """Copies mirror their original."""

    def test_set_original_copies_flags(self):
        original = mk_root()
        original.open()
        dup = SearchNode(nid=7, state=original.state, parent=original)
        dup.set_original(original)
        assert dup.is_copy
        assert dup.original is original
        assert dup.flags.is_open
        assert not dup.flags.is_root
        assert dup in original.subscribers

    def test_flags_propagate_to_copy(self):
        original = SearchNode(nid=1, state=State(3, 2, 0, 1, R), parent=mk_root())
        dup = SearchNode(nid=2, state=original.state, parent=original.parent)
        dup.set_original(original)
        original.open()
        assert dup.flags.is_open
        original.mark_valid()
        assert dup.flags.is_valid is False
        original.close()
        assert dup.flags.is_closed and not dup.flags.is_open
        assert dup.is_copy

    def test_original_unaffected_by_copy(self):
        original = mk_root()
        dup = SearchNode(nid=2, state=original.state, parent=original)
        dup.set_original(original)
        dup.close()
        assert not original.flags.is_closed

    def test_unsubscribe_stops_propagation(self):
        original = mk_root()
        dup = SearchNode(nid=2, state=original.state, parent=original)
        dup.set_original(original)
        dup.unsubscribe()
        original.close()
        assert not dup.flags.is_closed
        assert dup not in original.subscribers

    def test_set_original_only_once(self):
        a = mk_root()
        b = SearchNode(nid=1, state=a.state, parent=a)
        c = SearchNode(nid=2, state=a.state, parent=a)
        c.set_original(a)
        with pytest.raises(InvariantViolation):
            c.set_original(b)

    def test_duplicate_event(self):
        log = RunLogger()
        a = mk_root(sink=log)
        b = SearchNode(nid=1, state=a.state, parent=a, sink=log)
        b.set_original(a)
        frames = log.of_type("duplicate")
        assert len(frames) == 1
        assert frames[0]["node"] == 1 and frames[0]["original"] == 0
        assert frames[0]["flags"]["is_copy"] is True

    def test_to_dict(self):
        root = mk_root()
        kids = root.generate_children(count(1))
        d = root.to_dict()
        assert d["nid"] == 0
        assert d["parent"] is None
        assert d["children"] == [k.nid for k in kids]
        assert d["flags"]["is_root"] is True
