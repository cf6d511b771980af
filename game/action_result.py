"""Action result value object for board moves.

Encapsulates what applying one action did to the board so that callers
(game adapter, writers, controller) do not need to inspect cell internals.
"""

from .constants import OPEN


class ActionResult:
    """Encapsulates the result of a board action.

    Attributes:
        player: Player who acted (0 or 1)
        action: Action index as submitted by the player
        position: Effective (col, row) where the peg was placed. After a swap
            this is the rotated position, not the decoded one.
        swapped: True if this action exercised the swap rule
        new_links: Compass directions (from position) of links formed
        result: Board result after the action (constants.OPEN, RED_WIN, ...)
    """

    def __init__(self, player, action, position, swapped=False, new_links=None, result=OPEN):
        self.player = player
        self.action = action
        self.position = position
        self.swapped = swapped
        self.new_links = list(new_links) if new_links else []
        self.result = result

    def __repr__(self):
        return (
            f"ActionResult(player={self.player}, action={self.action}, "
            f"position={self.position}, swapped={self.swapped}, "
            f"links={[d.name for d in self.new_links]}, result={self.result})"
        )

    def has_links(self):
        """Check if this action formed at least one link."""
        return len(self.new_links) > 0

    def is_swap(self):
        return self.swapped
