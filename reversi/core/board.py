"""Reversi board: cell storage, move legality and capture resolution."""

from enum import Enum, IntEnum
from typing import Callable, List, NamedTuple, Optional, Tuple

SIZE = 8
MAX_CHIPS = SIZE * SIZE


class Cell(IntEnum):
    EMPTY = 0
    LIGHT = 1
    DARK = -1

    @property
    def opponent(self) -> "Cell":
        return Cell(-self.value)


class Outcome(Enum):
    LIGHT_WINS = "light"
    DARK_WINS = "dark"
    TIE = "tie"
    NOT_OVER = "not_over"


class OutOfRangeError(IndexError):
    """Raised for a cell index outside 0..63."""


class Direction(NamedTuple):
    name: str
    delta: int
    in_bounds: Callable[[int], bool]


# Each check tells whether one more step from `pos` stays on the board
# without wrapping around a row edge.
DIRECTIONS: Tuple[Direction, ...] = (
    Direction("N", -8, lambda pos: pos - 8 >= 0),
    Direction("S", 8, lambda pos: pos + 8 < MAX_CHIPS),
    Direction("W", -1, lambda pos: pos % SIZE != 0),
    Direction("E", 1, lambda pos: (pos + 1) % SIZE != 0),
    Direction("NW", -9, lambda pos: pos - 9 >= 0 and pos % SIZE != 0),
    Direction("NE", -7, lambda pos: pos - 7 >= 0 and (pos + 1) % SIZE != 0),
    Direction("SW", 7, lambda pos: pos + 7 < MAX_CHIPS and pos % SIZE != 0),
    Direction("SE", 9, lambda pos: pos + 9 < MAX_CHIPS and (pos + 1) % SIZE != 0),
)


def determine_winner(light: int, dark: int) -> Outcome:
    if light > dark:
        return Outcome.LIGHT_WINS
    if dark > light:
        return Outcome.DARK_WINS
    return Outcome.TIE


def _check_range(pos: int):
    if not 0 <= pos < MAX_CHIPS:
        raise OutOfRangeError(f"cell {pos} is outside 0..{MAX_CHIPS - 1}")


class ReversiBoard:
    def __init__(self, cells: Optional[List[int]] = None, turn: Cell = Cell.DARK):
        """Initialize from a 64-cell list, or an empty board."""
        if cells is None:
            cells = [Cell.EMPTY] * MAX_CHIPS
        if len(cells) != MAX_CHIPS:
            raise ValueError(f"expected {MAX_CHIPS} cells, got {len(cells)}")
        # Stored as plain ints, which compare equal to Cell members.
        self.cells = [int(Cell(c)) for c in cells]
        self.turn = Cell(turn)

    @classmethod
    def new_game(cls, first: Cell = Cell.DARK) -> "ReversiBoard":
        """Standard four-chip opening; the first mover owns cells 27 and 36."""
        first = Cell(first)
        if first == Cell.EMPTY:
            raise ValueError("first mover must be LIGHT or DARK")
        board = cls(turn=first)
        board.cells[27] = int(first)
        board.cells[36] = int(first)
        board.cells[28] = int(first.opponent)
        board.cells[35] = int(first.opponent)
        return board

    def copy(self) -> "ReversiBoard":
        """Return an independent value copy."""
        clone = ReversiBoard.__new__(ReversiBoard)
        clone.cells = list(self.cells)
        clone.turn = self.turn
        return clone

    def __eq__(self, other):
        if not isinstance(other, ReversiBoard):
            return NotImplemented
        return self.cells == other.cells and self.turn == other.turn

    def __str__(self):
        symbols = {Cell.EMPTY: ".", Cell.LIGHT: "O", Cell.DARK: "X"}
        rows = []
        for r in range(SIZE):
            rows.append(" ".join(symbols[c] for c in self.cells[r * SIZE:(r + 1) * SIZE]))
        return "\n".join(rows)

    # --- Legality ---

    def check_direction(self, pos: int, direction: Direction) -> bool:
        """True if placing at `pos` sandwiches opponent chips along `direction`."""
        me = int(self.turn)
        found_opponent = False
        curr = pos
        while direction.in_bounds(curr):
            curr += direction.delta
            cell = self.cells[curr]
            if cell == -me:
                found_opponent = True
            elif cell == me:
                return found_opponent
            else:
                return False
        return False

    def is_legal(self, pos: int) -> bool:
        _check_range(pos)
        if self.cells[pos] != Cell.EMPTY:
            return False
        return any(self.check_direction(pos, d) for d in DIRECTIONS)

    def legal_moves(self) -> List[int]:
        """Legal cells for the side to move, ascending. Empty means pass."""
        return [pos for pos in range(MAX_CHIPS) if self.is_legal(pos)]

    # --- Mutation ---

    def flip_direction(self, pos: int, direction: Direction) -> int:
        """Flip the opponent run along one ray if it is capped by our chip."""
        if not self.check_direction(pos, direction):
            return 0
        me = int(self.turn)
        flipped = 0
        curr = pos
        while direction.in_bounds(curr):
            curr += direction.delta
            if self.cells[curr] != -me:
                break
            self.cells[curr] = me
            flipped += 1
        return flipped

    def apply_move(self, pos: int) -> int:
        """
        Place the mover's chip at `pos` and resolve captures on all 8 rays.
        An occupied cell is a no-op. The turn is not switched.
        Returns the number of flipped chips.
        """
        _check_range(pos)
        if self.cells[pos] != Cell.EMPTY:
            return 0
        self.cells[pos] = int(self.turn)
        return sum(self.flip_direction(pos, d) for d in DIRECTIONS)

    def switch_side(self):
        self.turn = self.turn.opponent

    # --- Scoring ---

    def count(self, color: Cell) -> int:
        return sum(1 for c in self.cells if c == color)

    def score(self) -> Tuple[int, int]:
        """Return (light, dark) chip counts."""
        return self.count(Cell.LIGHT), self.count(Cell.DARK)

    def empty_count(self) -> int:
        return self.count(Cell.EMPTY)

    def check_terminal(self, forced_end: bool = False) -> Outcome:
        """
        Decided outcome when the board is full, or when the caller knows
        neither side can move (`forced_end`). Otherwise NOT_OVER.
        """
        light, dark = self.score()
        if light + dark == MAX_CHIPS or forced_end:
            return determine_winner(light, dark)
        return Outcome.NOT_OVER

    def has_moves_for(self, color: Cell) -> bool:
        trial = self.copy()
        trial.turn = Cell(color)
        return any(trial.is_legal(pos) for pos in range(MAX_CHIPS))

    def is_game_over(self) -> bool:
        """Full board, or neither side has a legal move."""
        if self.check_terminal() != Outcome.NOT_OVER:
            return True
        return not self.has_moves_for(self.turn) and not self.has_moves_for(self.turn.opponent)


# Function-style access to the board operations.

def new_game(first: Cell = Cell.DARK) -> ReversiBoard:
    return ReversiBoard.new_game(first)


def is_legal(board: ReversiBoard, pos: int) -> bool:
    return board.is_legal(pos)


def legal_moves(board: ReversiBoard) -> List[int]:
    return board.legal_moves()


def apply_move(board: ReversiBoard, pos: int) -> int:
    return board.apply_move(pos)


def switch_side(board: ReversiBoard):
    board.switch_side()


def score(board: ReversiBoard) -> Tuple[int, int]:
    return board.score()


def check_terminal(board: ReversiBoard, forced_end: bool = False) -> Outcome:
    return board.check_terminal(forced_end)
