"""Puzzle state for the missionaries-and-cannibals crossing."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from .errors import InvariantViolation


class BoatSide(Enum):
    LEFT = "Left"
    RIGHT = "Right"

    @property
    def opposite(self) -> "BoatSide":
        return BoatSide.RIGHT if self is BoatSide.LEFT else BoatSide.LEFT


@dataclass(frozen=True)
class State:
    """
    One configuration of the river banks.

    Rendered as ``[cannibals left, missionaries left, cannibals right,
    missionaries right]`` prefixed by the boat side, so the classic goal reads
    ``Right [0, 0, 3, 3]``.
    """

    cannibals_left: int
    missionaries_left: int
    cannibals_right: int
    missionaries_right: int
    boat_side: BoatSide = BoatSide.LEFT

    @classmethod
    def initial(cls, cannibals: int, missionaries: int) -> "State":
        """Everybody on the left bank together with the boat."""
        return cls(cannibals, missionaries, 0, 0, BoatSide.LEFT)

    @property
    def total_cannibals(self) -> int:
        return self.cannibals_left + self.cannibals_right

    @property
    def total_missionaries(self) -> int:
        return self.missionaries_left + self.missionaries_right

    @property
    def is_valid(self) -> bool:
        # A bank is safe when its missionaries are not outnumbered, or absent.
        left_ok = self.cannibals_left <= self.missionaries_left or self.missionaries_left == 0
        right_ok = self.cannibals_right <= self.missionaries_right or self.missionaries_right == 0
        return left_ok and right_ok

    @property
    def is_solution(self) -> bool:
        return self.cannibals_left == 0 and self.missionaries_left == 0

    def on_boat_side(self) -> Tuple[int, int]:
        """Return (cannibals, missionaries) standing on the bank holding the boat."""
        if self.boat_side is BoatSide.LEFT:
            return self.cannibals_left, self.missionaries_left
        return self.cannibals_right, self.missionaries_right

    def move(self, cannibals: int, missionaries: int) -> "State":
        """
        Ferry ``cannibals`` and ``missionaries`` from the boat's bank to the
        other bank and flip the boat. The result is not checked for validity;
        callers evaluate ``is_valid`` on it separately.

        Example: ``Left [3, 3, 0, 0]`` with ``move(1, 1)`` gives
        ``Right [2, 2, 1, 1]``.
        """
        sign = -1 if self.boat_side is BoatSide.LEFT else 1
        moved = State(
            cannibals_left=self.cannibals_left + sign * cannibals,
            missionaries_left=self.missionaries_left + sign * missionaries,
            cannibals_right=self.cannibals_right - sign * cannibals,
            missionaries_right=self.missionaries_right - sign * missionaries,
            boat_side=self.boat_side.opposite,
        )
        if min(moved.as_tuple()) < 0:
            raise InvariantViolation(
                f"move({cannibals}, {missionaries}) from {self} leaves a negative count: {moved}"
            )
        return moved

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.cannibals_left, self.missionaries_left, self.cannibals_right, self.missionaries_right)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cannibals_left": self.cannibals_left,
            "missionaries_left": self.missionaries_left,
            "cannibals_right": self.cannibals_right,
            "missionaries_right": self.missionaries_right,
            "boat_side": self.boat_side.value,
        }

    def __str__(self) -> str:
        counts = ", ".join(str(v) for v in self.as_tuple())
        return f"{self.boat_side.value} [{counts}]"
