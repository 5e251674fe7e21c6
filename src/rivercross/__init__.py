# src/rivercross/__init__.py
"""
Breadth-first search for the missionaries-and-cannibals river crossing.

The package holds the search core only: puzzle states, move generation,
search-tree nodes with duplicate tracking, and the iteration-bounded BFS
engine. Renderers plug in through the ``EventSink`` protocol.
"""

from .state import State, BoatSide
from .moves import BOAT_LOADS, legal_loads, generate_moves
from .node import SearchNode, NodeFlags
from .engine import SearchEngine, SearchResult, SearchStatus
from .events import EventSink, NullSink, FanOutSink
from .logger import RunLogger
from .config import SearchConfig, load_config
from .errors import SearchError, ConfigurationError, InvariantViolation

__all__ = [
    # Puzzle
    "State", "BoatSide", "BOAT_LOADS", "legal_loads", "generate_moves",
    # Search
    "SearchNode", "NodeFlags", "SearchEngine", "SearchResult", "SearchStatus",
    # Collaborators
    "EventSink", "NullSink", "FanOutSink", "RunLogger",
    "SearchConfig", "load_config",
    "SearchError", "ConfigurationError", "InvariantViolation",
]
