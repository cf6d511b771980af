"""Static link geometry and the precomputed blocker index.

A link (bridge) joins two pegs a knight's move apart. Links cannot cross, so
for every possible link we precompute the set of other links that would
cross it. The table only depends on the board size, so one BlockerIndex is
built per size and shared read-only by every board of that size.

Coordinates are (col, row) tuples. Columns grow to the right, rows grow
upwards: NNE is two rows up and one column to the right.
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Dict, FrozenSet, Iterator, NamedTuple, Tuple

from .constants import RED_PLAYER

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class Compass(IntEnum):
    """The 8 link directions. The ordinal is the bit index in direction masks."""

    NNE = 0
    ENE = 1
    ESE = 2
    SSE = 3
    SSW = 4
    WSW = 5
    WNW = 6
    NNW = 7


MAX_COMPASS = len(Compass)


class Link(NamedTuple):
    """A link placed (or to be placed) from ``position`` in ``direction``."""

    position: Position
    direction: Compass


class LinkDescriptor(NamedTuple):
    """Properties of one link direction.

    offsets: offset of the target peg, e.g. (2, 1) for ENE
    blocking_links: (relative origin, direction) of every link that crosses
        a link placed in this direction from the origin (0, 0)
    """

    offsets: Position
    blocking_links: Tuple[Tuple[Position, Compass], ...]


def to_compass(direction) -> Compass:
    """Validate a direction value and return it as a Compass member."""
    try:
        return Compass(direction)
    except ValueError:
        raise ValueError(
            f"Invalid direction: {direction}; should be in range [0..{MAX_COMPASS - 1}]"
        ) from None


def opposite(direction) -> Compass:
    """Return the direction pointing back from the target peg."""
    return Compass((to_compass(direction) + MAX_COMPASS // 2) % MAX_COMPASS)


def add(position: Position, offset: Position) -> Position:
    return position[0] + offset[0], position[1] + offset[1]


# Table of 8 link descriptors, indexed by Compass
LINK_DESCRIPTORS: Tuple[LinkDescriptor, ...] = (
    # NNE
    LinkDescriptor(
        (1, 2),
        (
            ((0, 1), Compass.ENE),
            ((-1, 0), Compass.ENE),
            ((0, 2), Compass.ESE),
            ((0, 1), Compass.ESE),
            ((-1, 2), Compass.ESE),
            ((-1, 1), Compass.ESE),
            ((0, 1), Compass.SSE),
            ((0, 2), Compass.SSE),
            ((0, 3), Compass.SSE),
        ),
    ),
    # ENE
    LinkDescriptor(
        (2, 1),
        (
            ((0, -1), Compass.NNE),
            ((1, 0), Compass.NNE),
            ((-1, 1), Compass.ESE),
            ((0, 1), Compass.ESE),
            ((1, 1), Compass.ESE),
            ((0, 1), Compass.SSE),
            ((0, 2), Compass.SSE),
            ((1, 1), Compass.SSE),
            ((1, 2), Compass.SSE),
        ),
    ),
    # ESE
    LinkDescriptor(
        (2, -1),
        (
            ((0, -1), Compass.NNE),
            ((1, -1), Compass.NNE),
            ((0, -2), Compass.NNE),
            ((1, -2), Compass.NNE),
            ((-1, -1), Compass.ENE),
            ((0, -1), Compass.ENE),
            ((1, -1), Compass.ENE),
            ((0, 1), Compass.SSE),
            ((1, 0), Compass.SSE),
        ),
    ),
    # SSE
    LinkDescriptor(
        (1, -2),
        (
            ((0, -1), Compass.NNE),
            ((0, -2), Compass.NNE),
            ((0, -3), Compass.NNE),
            ((-1, -1), Compass.ENE),
            ((0, -1), Compass.ENE),
            ((-1, -2), Compass.ENE),
            ((0, -2), Compass.ENE),
            ((-1, 0), Compass.ESE),
            ((0, -1), Compass.ESE),
        ),
    ),
    # SSW
    LinkDescriptor(
        (-1, -2),
        (
            ((-1, -1), Compass.ENE),
            ((-2, -2), Compass.ENE),
            ((-2, 0), Compass.ESE),
            ((-1, 0), Compass.ESE),
            ((-2, -1), Compass.ESE),
            ((-1, -1), Compass.ESE),
            ((-1, 1), Compass.SSE),
            ((-1, 0), Compass.SSE),
            ((-1, -1), Compass.SSE),
        ),
    ),
    # WSW
    LinkDescriptor(
        (-2, -1),
        (
            ((-2, -2), Compass.NNE),
            ((-1, -1), Compass.NNE),
            ((-3, 0), Compass.ESE),
            ((-2, 0), Compass.ESE),
            ((-1, 0), Compass.ESE),
            ((-2, 1), Compass.SSE),
            ((-1, 1), Compass.SSE),
            ((-2, 0), Compass.SSE),
            ((-1, 0), Compass.SSE),
        ),
    ),
    # WNW
    LinkDescriptor(
        (-2, 1),
        (
            ((-2, 0), Compass.NNE),
            ((-1, 0), Compass.NNE),
            ((-2, -1), Compass.NNE),
            ((-1, -1), Compass.NNE),
            ((-3, 0), Compass.ENE),
            ((-2, 0), Compass.ENE),
            ((-1, 0), Compass.ENE),
            ((-2, 2), Compass.SSE),
            ((-1, 1), Compass.SSE),
        ),
    ),
    # NNW
    LinkDescriptor(
        (-1, 2),
        (
            ((-1, 1), Compass.NNE),
            ((-1, 0), Compass.NNE),
            ((-1, -1), Compass.NNE),
            ((-2, 1), Compass.ENE),
            ((-1, 1), Compass.ENE),
            ((-2, 0), Compass.ENE),
            ((-1, 0), Compass.ENE),
            ((-2, 2), Compass.ESE),
            ((-1, 1), Compass.ESE),
        ),
    ),
)


def target_of(position: Position, direction) -> Position:
    """Return the position a link from ``position`` in ``direction`` leads to."""
    return add(position, LINK_DESCRIPTORS[to_compass(direction)].offsets)


def reverse_link(link: Link) -> Link:
    """Return the same physical link seen from its other end."""
    return Link(target_of(link.position, link.direction), opposite(link.direction))


# =========================  BOARD GEOMETRY  =========================


def is_off_board(position: Position, size: int) -> bool:
    """Check if position lies outside the board or on one of the four corners."""
    col, row = position
    return (
        row < 0
        or row > size - 1
        or col < 0
        or col > size - 1
        or ((col == 0 or col == size - 1) and (row == 0 or row == size - 1))
    )


def is_on_border(player: int, position: Position, size: int) -> bool:
    """Check if position lies on one of the player's two border lines."""
    col, row = position
    if player == RED_PLAYER:
        return (row == 0 or row == size - 1) and 0 < col < size - 1
    return (col == 0 or col == size - 1) and 0 < row < size - 1


# =========================  BLOCKER INDEX  =========================


class BlockerIndex:
    """Immutable map from every on-board link to the links crossing it.

    Every physical link is stored under both of its orientations, and each
    crossing is registered for both links, so the relation is symmetric:
    ``m in index.get_blockers(l)`` iff ``l in index.get_blockers(m)``.
    """

    def __init__(self, size: int):
        self.size = size
        blockers: Dict[Link, set] = {}

        for col in range(size):
            for row in range(size):
                position = (col, row)
                if is_off_board(position, size):
                    continue
                for direction in Compass:
                    if is_off_board(target_of(position, direction), size):
                        continue
                    link = Link(position, direction)
                    blockers.setdefault(link, set())
                    self._register_crossings(blockers, link)

        self._blockers: Dict[Link, FrozenSet[Link]] = {
            link: frozenset(crossing) for link, crossing in blockers.items()
        }
        logger.debug(f"Built blocker index for size {size}: {len(self._blockers)} links")

    def _register_crossings(self, blockers: Dict[Link, set], link: Link) -> None:
        descriptor = LINK_DESCRIPTORS[link.direction]
        for offset, other_direction in descriptor.blocking_links:
            from_position = add(link.position, offset)
            if is_off_board(from_position, self.size):
                continue
            to_position = add(from_position, LINK_DESCRIPTORS[other_direction].offsets)
            if is_off_board(to_position, self.size):
                continue

            crossing = Link(from_position, other_direction)
            ends = (link, reverse_link(link))
            crossing_ends = (crossing, reverse_link(crossing))
            for end in ends:
                blockers.setdefault(end, set()).update(crossing_ends)
            for end in crossing_ends:
                blockers.setdefault(end, set()).update(ends)

    def get_blockers(self, link: Link) -> FrozenSet[Link]:
        """Return the links that, once placed, forbid placing ``link``."""
        return self._blockers.get(link, frozenset())

    def __contains__(self, link) -> bool:
        return link in self._blockers

    def __iter__(self) -> Iterator[Link]:
        return iter(self._blockers)

    def __len__(self) -> int:
        return len(self._blockers)


_BLOCKER_INDEX_CACHE: Dict[int, BlockerIndex] = {}


def get_blocker_index(size: int) -> BlockerIndex:
    """Return the shared BlockerIndex for a board size, building it on first use."""
    index = _BLOCKER_INDEX_CACHE.get(size)
    if index is None:
        index = BlockerIndex(size)
        _BLOCKER_INDEX_CACHE[size] = index
    return index
