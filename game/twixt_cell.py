"""Per-position state of a TwixT board."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from .constants import NUM_PLAYERS, OFF_BOARD
from .link_geometry import Compass, Position, to_compass


def direction_bit(direction) -> int:
    """Return the mask bit of a direction (bit index == Compass ordinal)."""
    return 1 << to_compass(direction)


@dataclass
class Cell:
    """State of a single board position.

    Direction masks are 8-bit ints, bit ``d`` standing for ``Compass(d)``:

    - candidates[player]: directions still eligible to become a link for player
    - links: directions actually linked
    - blocked_neighbors: same-colored neighbors whose link was vetoed by a
      crossing link (kept for the observation tensor only)

    linked_to_border holds one bit per (player, border) pair, set once the
    cell is connected to that border line by same-colored links.
    """

    color: int = OFF_BOARD
    neighbors: Dict[Compass, Position] = field(default_factory=dict)
    candidates: List[int] = field(default_factory=lambda: [0] * NUM_PLAYERS)
    links: int = 0
    blocked_neighbors: int = 0
    linked_to_border: int = 0

    def copy(self) -> "Cell":
        return Cell(
            color=self.color,
            neighbors=dict(self.neighbors),
            candidates=list(self.candidates),
            links=self.links,
            blocked_neighbors=self.blocked_neighbors,
            linked_to_border=self.linked_to_border,
        )

    # Neighbors

    def set_neighbor(self, direction, position: Position) -> None:
        self.neighbors[to_compass(direction)] = position

    def get_neighbor(self, direction) -> Position:
        return self.neighbors[to_compass(direction)]

    # Candidates

    def set_candidate(self, player: int, direction) -> None:
        self.candidates[player] |= direction_bit(direction)

    def delete_candidate(self, player: int, direction) -> None:
        self.candidates[player] &= ~direction_bit(direction)

    def is_candidate(self, player: int, direction) -> bool:
        return bool(self.candidates[player] & direction_bit(direction))

    def get_candidates(self, player: int) -> int:
        return self.candidates[player]

    def clear_candidates(self) -> None:
        self.candidates = [0] * NUM_PLAYERS

    # Links

    def set_link(self, direction) -> None:
        self.links |= direction_bit(direction)

    def has_link(self, direction) -> bool:
        return bool(self.links & direction_bit(direction))

    def has_links(self) -> bool:
        return self.links > 0

    def linked_directions(self) -> List[Compass]:
        return [direction for direction in Compass if self.links & (1 << direction)]

    # Blocked neighbors

    def set_blocked_neighbor(self, direction) -> None:
        self.blocked_neighbors |= direction_bit(direction)

    def has_blocked_neighbors(self) -> bool:
        return self.blocked_neighbors > 0

    # Border connectivity

    def set_linked_to_border(self, player: int, border: int) -> None:
        self.linked_to_border |= 1 << (player * 2 + border)

    def is_linked_to_border(self, player: int, border: int) -> bool:
        return bool(self.linked_to_border & (1 << (player * 2 + border)))
