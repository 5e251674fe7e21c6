# src/rivercross/engine.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from itertools import count
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import SearchConfig
from .errors import InvariantViolation
from .events import EventSink, NullSink
from .node import SearchNode
from .state import State


class SearchStatus(Enum):
    IDLE = auto()
    RUNNING = auto()
    SOLVED = auto()
    EXHAUSTED = auto()   # cap reached or frontier emptied; a normal outcome


@dataclass
class SearchResult:
    status: SearchStatus
    path: List[State] = field(default_factory=list)  # root first; empty unless SOLVED
    iterations: int = 0
    nodes_created: int = 0

    @property
    def solved(self) -> bool:
        return self.status == SearchStatus.SOLVED

    @property
    def crossings(self) -> int:
        return max(len(self.path) - 1, 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.name,
            "path": [s.to_dict() for s in self.path],
            "iterations": self.iterations,
            "nodes_created": self.nodes_created,
        }


class SearchEngine:
    """
    Iteration-bounded breadth-first search:
    - The open list is FIFO; index 0 is always the next node to expand.
    - The popped node is goal-tested first. A goal stops the run and its path
      is retraced; otherwise a valid node is expanded and every child is
      de-duplicated against the closed list, then the open list.
    - Duplicates become copies of the matching node and never join the
      frontier. The expanded node then moves to the closed list.
    - The run ends SOLVED at the first goal popped, or EXHAUSTED once the open
      list is empty or ``max_iterations`` expansions were committed.

    Each ``step()`` commits fully before returning, so a run may be stepped
    cooperatively and aborted between steps.
    """

    def __init__(self, sink: Optional[EventSink] = None, record_snapshots: bool = False):
        self.sink: EventSink = sink if sink is not None else NullSink()
        self.record_snapshots = record_snapshots
        self.status = SearchStatus.IDLE
        self.iteration = 0
        self.max_iterations = 0
        self.root: Optional[SearchNode] = None
        self.open_list: List[SearchNode] = []
        self.closed_list: List[SearchNode] = []
        self.nodes: List[SearchNode] = []
        self.solution: List[SearchNode] = []
        self.logs: List[Dict[str, Any]] = []
        self._ids = count()
        self._totals: Tuple[int, int] = (0, 0)

    # Capture the frontier after an iteration. Only recorded with record_snapshots=True.
    def snapshot(self, note: str = "") -> Dict[str, Any]:
        snap = {
            "iteration": self.iteration,
            "note": note,
            "status": self.status.name,
            "open": [n.nid for n in self.open_list],
            "closed": [n.nid for n in self.closed_list],
        }
        self.logs.append(snap)
        return snap

    def abort(self) -> None:
        """Discard the run: lists, node set and logs. The engine goes back to IDLE."""
        self.status = SearchStatus.IDLE
        self.iteration = 0
        self.max_iterations = 0
        self.root = None
        self.open_list = []
        self.closed_list = []
        self.nodes = []
        self.solution = []
        self.logs = []
        self._ids = count()
        self._totals = (0, 0)

    def start_search(self, cannibals: Any, missionaries: Any, max_iterations: Any) -> SearchNode:
        """Validate the inputs, reset, and queue the root. Nothing changes on bad input."""
        cfg = SearchConfig.parse(cannibals, missionaries, max_iterations)
        return self.start(cfg)

    def start(self, cfg: SearchConfig) -> SearchNode:
        cfg.validate()
        self.abort()
        self.max_iterations = cfg.max_iterations
        self._totals = (cfg.cannibals, cfg.missionaries)
        self.status = SearchStatus.RUNNING

        self.root = self._spawn_root(State.initial(cfg.cannibals, cfg.missionaries))
        self.open_list.append(self.root)
        self.root.open()
        self._check_continue()
        if self.record_snapshots:
            self.snapshot("start")
        return self.root

    def _spawn_root(self, state: State) -> SearchNode:
        root = SearchNode(nid=next(self._ids), state=state, sink=self.sink)
        self.nodes.append(root)
        return root

    @staticmethod
    def find_in_list(nodes: Iterable[SearchNode], state: State) -> Optional[SearchNode]:
        """First node holding ``state``, or None."""
        for node in nodes:
            if node.state == state:
                return node
        return None

    def search_for_original(self, node: SearchNode) -> Optional[SearchNode]:
        """Mark ``node`` as a copy if its state is already closed or queued."""
        original = self.find_in_list(self.closed_list, node.state)
        if original is None:
            original = self.find_in_list(self.open_list, node.state)
        if original is not None:
            node.set_original(original)
        return original

    def add_to_open_list(self, node: SearchNode) -> bool:
        """Queue ``node`` unless it duplicates a known state. Returns True if queued."""
        self.search_for_original(node)
        if node.is_copy:
            return False
        self.open_list.append(node)
        node.open()
        return True

    def _check_totals(self, nodes: Iterable[SearchNode]) -> None:
        for n in nodes:
            if (n.state.total_cannibals, n.state.total_missionaries) != self._totals:
                raise InvariantViolation(f"node {n.nid} {n.state} does not keep totals {self._totals}")

    def _expand(self, current: SearchNode) -> List[SearchNode]:
        children = current.generate_children(self._ids)
        self.nodes.extend(children)
        self._check_totals(children)
        for child in children:
            self.add_to_open_list(child)
        return children

    def _check_continue(self) -> None:
        if not self.open_list or self.iteration >= self.max_iterations:
            self.status = SearchStatus.EXHAUSTED

    # Core function. One BFS iteration.
    def step(self) -> SearchNode:
        """Expand (or goal-test) the front of the open list. Returns that node."""
        if self.status != SearchStatus.RUNNING:
            raise RuntimeError(f"step() needs a running search (status is {self.status.name})")

        current = self.open_list[0]
        if current.mark_solution():
            self.solution = list(reversed(current.retrace_path()))
            self.status = SearchStatus.SOLVED
            if self.record_snapshots:
                self.snapshot("solved")
            return current

        if current.mark_valid():
            self._expand(current)

        self.open_list.remove(current)
        self.closed_list.append(current)
        current.close()
        self.iteration += 1

        self._check_continue()
        if self.record_snapshots:
            self.snapshot()
        return current

    def run(self) -> SearchResult:
        """Step until SOLVED or EXHAUSTED."""
        if self.status == SearchStatus.IDLE:
            raise RuntimeError("run() needs a started search; call start_search() first")
        while self.status == SearchStatus.RUNNING:
            self.step()
        return self.result()

    def current_frontier(self) -> Tuple[SearchNode, ...]:
        return tuple(self.open_list)

    def result(self) -> Optional[SearchResult]:
        """None until the run reaches a terminal status."""
        if self.status == SearchStatus.SOLVED:
            return SearchResult(
                status=self.status,
                path=[n.state for n in self.solution],
                iterations=self.iteration,
                nodes_created=len(self.nodes),
            )
        if self.status == SearchStatus.EXHAUSTED:
            return SearchResult(status=self.status, iterations=self.iteration, nodes_created=len(self.nodes))
        return None

    def check_invariants(self) -> None:
        """Raise InvariantViolation if a state sits twice in the lists or in both of them."""
        seen: Dict[State, str] = {}
        for name, nodes in (("open", self.open_list), ("closed", self.closed_list)):
            for n in nodes:
                if n.state in seen:
                    raise InvariantViolation(
                        f"state {n.state} found in {seen[n.state]} and {name} lists"
                    )
                seen[n.state] = name
