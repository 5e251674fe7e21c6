"""Move generation: every boat load that fits, in a fixed order."""
from __future__ import annotations

from typing import List, Tuple

from .state import State

Load = Tuple[int, int]  # (cannibals, missionaries)

# 1 cannibal, 2 cannibals, 1 missionary, 2 missionaries, 1 of each.
BOAT_LOADS: Tuple[Load, ...] = ((1, 0), (2, 0), (0, 1), (0, 2), (1, 1))


def legal_loads(state: State) -> List[Load]:
    """Loads whose occupants are actually standing on the boat's bank."""
    cannibals, missionaries = state.on_boat_side()
    return [(c, m) for c, m in BOAT_LOADS if c <= cannibals and m <= missionaries]


def generate_moves(state: State) -> List[State]:
    """
    Resulting states for each legal load, in ``BOAT_LOADS`` order.

    Invalid results are kept; the search filters them when it tries to expand
    them.
    """
    return [state.move(c, m) for c, m in legal_loads(state)]
