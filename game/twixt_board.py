import logging

from .action_result import ActionResult
from .constants import (
    ANSI_BLUE,
    ANSI_DEFAULT,
    ANSI_RED,
    BLUE_COLOR,
    BLUE_PLAYER,
    BLUE_WIN,
    DEFAULT_ANSI_COLOR_OUTPUT,
    DEFAULT_BOARD_SIZE,
    DRAW,
    EMPTY,
    END,
    MAX_BOARD_SIZE,
    MIN_BOARD_SIZE,
    NUM_PLAYERS,
    OFF_BOARD,
    OPEN,
    RED_COLOR,
    RED_PLAYER,
    RED_WIN,
    RESULT_NAMES,
    START,
    VALID_TURNS,
)
from .link_geometry import (
    Compass,
    Link,
    add,
    get_blocker_index,
    is_off_board,
    is_on_border,
    opposite,
    target_of,
)
from .twixt_cell import Cell

logger = logging.getLogger(__name__)


class TwixtBoard:
    # The twixt board has size x size cells:
    #   * the x-axis (cols) points right, the y-axis (rows) points up
    #   * coords (col, row) start at the lower left corner (0, 0)
    #   * coord labels (c3, f4, ...) start at the upper left corner (a1)
    #   * player 0 == 'x', red, plays top/bottom (rows 0 and size-1)
    #   * player 1 == 'o', blue, plays left/right (cols 0 and size-1)
    #   * the four corners are off-board
    #
    # Example 8x8 board: red peg at (3, 2) == xd6, blue peg at (5, 3) == of5
    #
    #     a  b  c  d  e  f  g  h
    #  1     .  .  .  .  .  .
    #  2  .  .  .  .  .  .  .  .
    #  3  .  .  .  .  .  .  .  .
    #  4  .  .  .  .  .  .  .  .
    #  5  .  .  .  .  .  o  .  .
    #  6  .  .  .  x  .  .  .  .
    #  7  .  .  .  .  .  .  .  .
    #  8     .  .  .  .  .  .
    #
    # Actions are indexed from 0 to size * (size - 2) - 1 from the player's
    # perspective; each player's range excludes the opponent's border lines.
    #
    # player 0 actions:                    player 1 actions:
    #     a  b  c  d  e  f  g  h               a  b  c  d  e  f  g  h
    #  1     7 15 23 31 39 47               1
    #  2     6 14 22 30 38 46               2  0  1  2  3  4  5  6  7
    #  3     5 13 21 29 37 45               3  8  9 10 11 12 13 14 15
    #  4     4 12 20 28 36 44               4 16 17 18 19 20 21 22 23
    #  5     3 11 19 27 35 43               5 24 25 26 27 28 29 30 31
    #  6     2 10 18 26 34 42               6 32 33 34 35 36 37 38 39
    #  7     1  9 17 25 33 41               7 40 41 42 43 44 45 46 47
    #  8     0  8 16 24 32 40               8
    #
    # Mapping a move to an action:
    #   player 0: (c, r) => (c - 1) * size + r,        e.g. xd6 == (3, 2) => 18
    #   player 1: (c, r) => (size - r - 2) * size + c, e.g. od6 == (3, 2) => 35
    #
    # A red link from c5 (2, 3) to d3 (3, 5) is stored at both ends:
    #   cells[2][3].links == 0b00000001  (bit 0: NNE)
    #   cells[3][5].links == 0b00010000  (bit 4: SSW)

    def __init__(self, size=DEFAULT_BOARD_SIZE, ansi_color_output=DEFAULT_ANSI_COLOR_OUTPUT, clone=None):
        """Initialize a TwixT board.

        The crossing-link table (BlockerIndex) only depends on the size and is
        shared between all boards of that size; everything else is owned by
        this board and deep-copied when cloning.

        Args:
            size: Length of a side of the board (5..24)
            ansi_color_output: Color pegs and links with ANSI codes in to_string()
            clone: TwixtBoard instance to clone from
        """
        if clone is not None:
            self.size = clone.size
            self.ansi_color_output = clone.ansi_color_output
            self.blockers = clone.blockers
            self.cells = [[cell.copy() for cell in column] for column in clone.cells]
            self._legal_actions = [list(actions) for actions in clone._legal_actions]
            self.move_counter = clone.move_counter
            self.swapped = clone.swapped
            self.move_one = clone.move_one
            self.result = clone.result
            return

        if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
            raise ValueError(
                f"board_size out of range [{MIN_BOARD_SIZE}..{MAX_BOARD_SIZE}]: {size}"
            )

        self.size = size
        self.ansi_color_output = ansi_color_output
        self.blockers = get_blocker_index(size)

        self.move_counter = 0
        self.swapped = False
        self.move_one = None
        self.result = OPEN

        self._initialize_cells()
        self._initialize_legal_actions()

    # =========================  INITIALIZATION  =========================

    def _initialize_cells(self):
        size = self.size
        self.cells = [[Cell() for _ in range(size)] for _ in range(size)]

        for col in range(size):
            for row in range(size):
                position = (col, row)
                cell = self.cells[col][row]
                if self.is_off_board(position):
                    cell.color = OFF_BOARD
                    continue

                cell.color = EMPTY
                if col == 0:
                    cell.set_linked_to_border(BLUE_PLAYER, START)
                elif col == size - 1:
                    cell.set_linked_to_border(BLUE_PLAYER, END)
                elif row == 0:
                    cell.set_linked_to_border(RED_PLAYER, START)
                elif row == size - 1:
                    cell.set_linked_to_border(RED_PLAYER, END)

                self._initialize_candidates(position, cell)

    def _initialize_candidates(self, position, cell):
        """Set neighbors and candidate directions of an empty cell.

        A direction is a candidate for both players unless it jumps from one
        player's border line straight onto the other player's border line.
        """
        cell.clear_candidates()
        for direction in Compass:
            target = target_of(position, direction)
            if self.is_off_board(target):
                continue
            cell.set_neighbor(direction, target)
            if not (
                self.is_on_border(RED_PLAYER, position) and self.is_on_border(BLUE_PLAYER, target)
            ) and not (
                self.is_on_border(BLUE_PLAYER, position) and self.is_on_border(RED_PLAYER, target)
            ):
                cell.set_candidate(RED_PLAYER, direction)
                cell.set_candidate(BLUE_PLAYER, direction)

    def _initialize_legal_actions(self):
        num_actions = self.num_distinct_actions()
        self._legal_actions = [list(range(num_actions)) for _ in range(NUM_PLAYERS)]

    # =========================  QUERIES  =========================

    def get_cell(self, position):
        col, row = position
        return self.cells[col][row]

    def is_off_board(self, position):
        return is_off_board(position, self.size)

    def is_on_border(self, player, position):
        return is_on_border(player, position, self.size)

    def num_distinct_actions(self):
        return self.size * (self.size - 2)

    def legal_actions(self, player):
        """Return the player's legal actions in ascending order (a copy)."""
        self._check_player(player)
        return list(self._legal_actions[player])

    def has_legal_actions(self, player):
        return len(self._legal_actions[player]) > 0

    def get_result(self):
        return self.result

    def get_move_counter(self):
        return self.move_counter

    def is_terminal(self):
        return self.result != OPEN

    def _check_player(self, player):
        if player not in (RED_PLAYER, BLUE_PLAYER):
            raise ValueError(f"Invalid player: {player}; should be {RED_PLAYER} or {BLUE_PLAYER}")

    # =========================  MOVES  =========================

    def apply_action(self, player, action):
        """Place a peg for player and update links, borders and the result.

        On the second ply, choosing the first move's position again swaps:
        the first peg is removed and the swapping player gets that peg
        rotated by 90° instead.

        Args:
            player: Acting player (0 or 1)
            action: Action index taken from legal_actions(player)

        Returns:
            ActionResult describing the effective move
        """
        if self.result != OPEN:
            raise ValueError(
                f"Cannot apply action {action}: game is over ({RESULT_NAMES[self.result]})"
            )
        self._check_player(player)
        if action not in self._legal_actions[player]:
            raise ValueError(f"Illegal action {action} for player {player}")

        position = self.action_to_position(player, action)
        swapped = False

        if self.move_counter == 1:
            if position == self.move_one:
                swapped = True
                self.swapped = True
                self._undo_first_move()

                # turn move 90° clockwise: (3, 2) -> (5, 3)
                position = (self.size - position[1] - 1, position[0])
                logger.debug(f"Player {player} swapped; peg moves to {position}")
            else:
                self._remove_legal_action(RED_PLAYER, self.move_one)
                self._remove_legal_action(BLUE_PLAYER, self.move_one)

        new_links = self._set_peg_and_links(player, position)

        if self.move_counter == 0:
            # keep the move selectable, the second player may swap by choosing it
            self.move_one = position
        else:
            self._remove_legal_action(RED_PLAYER, position)
            self._remove_legal_action(BLUE_PLAYER, position)

        self.move_counter += 1
        self._update_result(player, position)

        return ActionResult(player, action, position, swapped, new_links, self.result)

    def _remove_legal_action(self, player, position):
        actions = self._legal_actions[player]
        action = self._position_to_action_unchecked(player, position)
        if action in actions:
            actions.remove(action)

    def _undo_first_move(self):
        """Take back the first peg and restore the initial candidates and legal actions.

        The first peg cannot have links, so restoring means re-running the
        candidate rule on its cell and on the neighbors it pruned.
        """
        cell = self.get_cell(self.move_one)
        cell.color = EMPTY
        self._initialize_candidates(self.move_one, cell)
        for neighbor in cell.neighbors.values():
            self._initialize_candidates(neighbor, self.get_cell(neighbor))
        self._initialize_legal_actions()

    def _set_peg_and_links(self, player, position):
        """Color the cell and link it to every reachable same-colored candidate.

        Returns:
            List of Compass directions (from position) in which links were formed
        """
        opponent = 1 - player
        linked_to_neutral = False
        new_links = []

        cell = self.get_cell(position)
        cell.color = player

        for direction in Compass:
            if not cell.is_candidate(player, direction):
                continue

            target = self.get_cell(cell.get_neighbor(direction))
            if target.color == EMPTY:
                # the opponent can no longer link from target to this cell
                target.delete_candidate(opponent, opposite(direction))
            elif target.color == player:
                if self._is_blocked(Link(position, direction)):
                    cell.set_blocked_neighbor(direction)
                    target.set_blocked_neighbor(opposite(direction))
                    continue

                cell.set_link(direction)
                target.set_link(opposite(direction))
                new_links.append(direction)

                if target.is_linked_to_border(player, START):
                    cell.set_linked_to_border(player, START)
                elif target.is_linked_to_border(player, END):
                    cell.set_linked_to_border(player, END)
                else:
                    linked_to_neutral = True

        if new_links:
            logger.debug(f"Player {player} at {position} linked {[d.name for d in new_links]}")
            if linked_to_neutral:
                if cell.is_linked_to_border(player, START):
                    self._explore_local_graph(player, position, START)
                if cell.is_linked_to_border(player, END):
                    self._explore_local_graph(player, position, END)

        return new_links

    def _is_blocked(self, link):
        for blocker in self.blockers.get_blockers(link):
            if self.get_cell(blocker.position).has_link(blocker.direction):
                return True
        return False

    def _explore_local_graph(self, player, position, border):
        """Mark every peg linked to position as connected to the border.

        The border flag doubles as the visited marker.
        """
        stack = [position]
        while stack:
            cell = self.get_cell(stack.pop())
            for direction in cell.linked_directions():
                neighbor = cell.get_neighbor(direction)
                target = self.get_cell(neighbor)
                if not target.is_linked_to_border(player, border):
                    target.set_linked_to_border(player, border)
                    stack.append(neighbor)

    def _update_result(self, player, position):
        cell = self.get_cell(position)
        if cell.is_linked_to_border(player, START) and cell.is_linked_to_border(player, END):
            self.result = RED_WIN if player == RED_PLAYER else BLUE_WIN
            logger.debug(f"Player {player} connected both borders at move {self.move_counter}")
            return

        # e.g. less than 5 moves played on a 6x6 board => no draw possible yet
        if self.move_counter < self.size - 1:
            return

        if not self.has_legal_actions(1 - player):
            self.result = DRAW
            logger.debug(f"Player {1 - player} has no legal actions left: draw")

    # =========================  ACTION MAPPING  =========================

    def action_to_position(self, player, action):
        """Decode a player's action index into a (col, row) position."""
        self._check_player(player)
        size = self.size
        if not 0 <= action < self.num_distinct_actions():
            raise ValueError(
                f"Action {action} out of range [0..{self.num_distinct_actions() - 1}]"
            )

        if player == RED_PLAYER:
            col = action // size + 1
            row = action % size
        else:
            col = action % size
            row = size - (action // size) - 2

        position = (col, row)
        if self.is_off_board(position):
            raise ValueError(f"Action {action} of player {player} decodes to off-board {position}")
        return position

    def position_to_action(self, player, position):
        """Encode a (col, row) position as an action index of player."""
        self._check_player(player)
        if self.is_off_board(position) or self.is_on_border(1 - player, position):
            raise ValueError(f"Position {position} is not playable by player {player}")
        return self._position_to_action_unchecked(player, position)

    def _position_to_action_unchecked(self, player, position):
        col, row = position
        if player == RED_PLAYER:
            return (col - 1) * self.size + row
        return (self.size - row - 2) * self.size + col

    def get_tensor_position(self, position, turn):
        """Map a position into the (size-2) x size tensor plane, rotated by turn.

        Returns:
            (tensor_col, tensor_row) where tensor_col is in [0, size-3]
        """
        col, row = position
        size = self.size
        if turn == 0:
            return col - 1, row
        if turn == 90:
            return size - row - 2, col
        if turn == 180:
            return size - col - 2, size - row - 1
        raise ValueError(f"invalid turn: {turn}; should be {', '.join(map(str, VALID_TURNS))}")

    def tensor_position_to_position(self, tensor_position, turn):
        """Inverse of get_tensor_position for the same turn."""
        tensor_col, tensor_row = tensor_position
        size = self.size
        if turn == 0:
            return tensor_col + 1, tensor_row
        if turn == 90:
            return tensor_row, size - tensor_col - 2
        if turn == 180:
            return size - tensor_col - 2, size - tensor_row - 1
        raise ValueError(f"invalid turn: {turn}; should be {', '.join(map(str, VALID_TURNS))}")

    # =========================  RENDERING  =========================

    # Glyph slots per text line: each slot shows the first placed link found
    # among its (offset, direction, glyph) entries, or a blank. A slot crossed
    # by two links still shows one glyph so every column keeps its width.
    _BEFORE_ROW_SLOTS = (
        (((-1, 0), Compass.ENE, "/"), ((-1, -1), Compass.NNE, "/"), ((0, 0), Compass.WNW, "_")),
        (((0, 0), Compass.NNE, "|"), ((0, 0), Compass.NNW, "|")),
        (((1, 0), Compass.WNW, "\\"), ((1, -1), Compass.NNW, "\\"), ((0, 0), Compass.ENE, "_")),
    )
    _PEG_ROW_LEFT = (((-1, -1), Compass.NNE, "|"), ((0, 0), Compass.WSW, "_"))
    _PEG_ROW_RIGHT = (((1, -1), Compass.NNW, "|"), ((0, 0), Compass.ESE, "_"))
    _AFTER_ROW_SLOTS = (
        (((1, -1), Compass.WNW, "\\"), ((0, -1), Compass.NNW, "\\")),
        (
            ((-1, -1), Compass.ENE, "_"),
            ((1, -1), Compass.WNW, "_"),
            ((0, 0), Compass.SSW, "|"),
            ((0, 0), Compass.SSE, "|"),
        ),
        (((-1, -1), Compass.ENE, "/"), ((0, -1), Compass.NNE, "/")),
    )

    def _color_string(self, ansi_color, text):
        if not self.ansi_color_output:
            return text
        return f"{ansi_color}{text}{ANSI_DEFAULT}"

    def _link_glyph(self, position, slot):
        for offset, direction, glyph in slot:
            origin = add(position, offset)
            if self.is_off_board(origin):
                continue
            cell = self.get_cell(origin)
            if cell.has_link(direction):
                if cell.color == RED_COLOR:
                    return self._color_string(ANSI_RED, glyph)
                if cell.color == BLUE_COLOR:
                    return self._color_string(ANSI_BLUE, glyph)
                return glyph
        return " "

    def _peg_glyph(self, position):
        col, row = position
        color = self.get_cell(position).color
        if color == RED_COLOR:
            return self._color_string(ANSI_RED, "x")
        if color == BLUE_COLOR:
            return self._color_string(ANSI_BLUE, "o")
        if self.is_off_board(position):
            return " "
        if col == 0 or col == self.size - 1:
            # blue border line
            return self._color_string(ANSI_BLUE, ".")
        if row == 0 or row == self.size - 1:
            # red border line
            return self._color_string(ANSI_RED, ".")
        return "."

    def to_string(self):
        """Render the board as a text diagram.

        Every row is drawn as three lines: links leaving upwards ("before"),
        the pegs with their row label, and links leaving downwards ("after").
        """
        size = self.size
        lines = []

        header = "     " + "".join(
            self._color_string(ANSI_RED, f"{chr(ord('a') + col)}  ") for col in range(size)
        )
        lines.append(header)

        for row in range(size - 1, -1, -1):
            before = ["    "]
            peg = ["  " if size - row < 10 else " ", self._color_string(ANSI_BLUE, f"{size - row} ")]
            after = ["    "]
            for col in range(size):
                position = (col, row)
                before.extend(self._link_glyph(position, slot) for slot in self._BEFORE_ROW_SLOTS)
                peg.append(self._link_glyph(position, self._PEG_ROW_LEFT))
                peg.append(self._peg_glyph(position))
                peg.append(self._link_glyph(position, self._PEG_ROW_RIGHT))
                after.extend(self._link_glyph(position, slot) for slot in self._AFTER_ROW_SLOTS)
            lines.extend(("".join(before), "".join(peg), "".join(after)))

        footer = ""
        if self.swapped:
            footer += "[swapped]"
        if self.result != OPEN:
            footer += f"[{RESULT_NAMES[self.result]}]"
        lines.append("")
        lines.append(footer)
        return "\n".join(lines)

    def __str__(self):
        return self.to_string()
