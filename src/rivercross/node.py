# src/rivercross/node.py
"""
Search-tree nodes.

The tree is owned top-down through ``children``; ``parent`` is the back link
used for retracing, and ``original`` is a lateral, non-owning link from a
duplicate to the first node discovered with the same state. Copies subscribe
to their original and mirror its open/closed/valid/solution flags for the rest
of the run.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, Iterator, List, Optional

from .errors import InvariantViolation
from .events import EventSink, NullSink
from .moves import generate_moves
from .state import State


@dataclass
class NodeFlags:
    is_open: bool = False
    is_closed: bool = False
    is_valid: bool = True     # assumed until checked at expansion time
    is_solution: bool = False
    is_root: bool = False
    is_copy: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


@dataclass(eq=False)
class SearchNode:
    nid: int
    state: State
    parent: Optional["SearchNode"] = field(default=None, repr=False)
    sink: EventSink = field(default_factory=NullSink, repr=False)
    flags: NodeFlags = field(default_factory=NodeFlags)
    children: List["SearchNode"] = field(default_factory=list, repr=False)
    original: Optional["SearchNode"] = field(default=None, repr=False)
    subscribers: List["SearchNode"] = field(default_factory=list, repr=False)
    _valid_checked: bool = field(default=False, repr=False)
    _solution_checked: bool = field(default=False, repr=False)

    def __post_init__(self):
        self.flags.is_root = self.parent is None
        self.sink.on_spawned(self)

    @property
    def is_copy(self) -> bool:
        return self.flags.is_copy

    @property
    def depth(self) -> int:
        d = 0
        cur = self.parent
        while cur is not None:
            d += 1
            cur = cur.parent
        return d

    # --- flag changes -------------------------------------------------------

    def _notify(self) -> None:
        self.sink.on_flags_changed(self, self.flags)
        for copy in self.subscribers:
            copy._follow(self.flags)

    def _follow(self, flags: NodeFlags) -> None:
        """Mirror the original's flags. Root and copy markers stay our own."""
        self.flags.is_valid = flags.is_valid
        self.flags.is_solution = flags.is_solution
        self.flags.is_closed = flags.is_closed
        self.flags.is_open = flags.is_open
        self.sink.on_flags_changed(self, self.flags)

    def mark_valid(self) -> bool:
        """Evaluate (once) whether the state is legal. Must precede expansion."""
        if not self._valid_checked:
            self._valid_checked = True
            self.flags.is_valid = self.state.is_valid
            self._notify()
        return self.flags.is_valid

    def mark_solution(self) -> bool:
        """Evaluate (once) whether the state is the goal."""
        if not self._solution_checked:
            self._solution_checked = True
            self.flags.is_solution = self.state.is_solution
            self._notify()
        return self.flags.is_solution

    def open(self) -> None:
        self.flags.is_open = True
        self.flags.is_closed = False
        self.sink.on_opened(self)
        self._notify()

    def close(self) -> None:
        self.flags.is_closed = True
        self.flags.is_open = False
        self.sink.on_closed(self)
        self._notify()

    # --- duplicates ---------------------------------------------------------

    def set_original(self, other: "SearchNode") -> None:
        """Turn this node into a copy of ``other`` and follow its flag changes."""
        if self.original is not None:
            raise InvariantViolation(f"node {self.nid} already copies node {self.original.nid}")
        if other is self:
            raise InvariantViolation(f"node {self.nid} cannot be its own original")
        self.flags = replace(other.flags, is_root=self.flags.is_root, is_copy=True)
        self.original = other
        other.subscribers.append(self)
        self.sink.on_marked_duplicate(self, other)

    def unsubscribe(self) -> None:
        """Stop following the original. The copy keeps its last mirrored flags."""
        if self.original is not None and self in self.original.subscribers:
            self.original.subscribers.remove(self)

    # --- tree ---------------------------------------------------------------

    def generate_children(self, ids: Iterator[int]) -> List["SearchNode"]:
        """
        Spawn one child per legal boat load, in move-generator order.

        Every child is attached to ``children``, duplicates included; the
        engine decides which of them join the frontier.
        """
        generated: List[SearchNode] = []
        for state in generate_moves(self.state):
            child = SearchNode(nid=next(ids), state=state, parent=self, sink=self.sink)
            self.children.append(child)
            generated.append(child)
        return generated

    def retrace_path(self) -> List["SearchNode"]:
        """
        Walk parent links up to the root, marking every node on the way as
        part of the solution. Returned goal-first; reverse for root-first.
        """
        path: List[SearchNode] = []
        current: Optional[SearchNode] = self
        while current is not None:
            current.flags.is_solution = True
            current.sink.on_marked_solution(current)
            path.append(current)
            current = current.parent
        return path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nid": self.nid,
            "state": self.state.to_dict(),
            "parent": self.parent.nid if self.parent is not None else None,
            "original": self.original.nid if self.original is not None else None,
            "children": [c.nid for c in self.children],
            "flags": self.flags.to_dict(),
        }
