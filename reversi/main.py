import logging
from typing import List, Optional, Tuple

from reversi.config import CONFIG
from reversi.core.board import Cell, Outcome, ReversiBoard
from reversi.core.search import SearchEngine

logger = logging.getLogger(__name__)

# Marks an Engine argument that should be read from CONFIG.
FROM_CONFIG = object()


def parse_color(name: str) -> Cell:
    """Map 'light' / 'dark' (any case) to a Cell."""
    try:
        color = Cell[name.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown colour: {name}") from None
    if color == Cell.EMPTY:
        raise ValueError(f"Unknown colour: {name}")
    return color


class Engine:
    """
    One game session: the authoritative board plus the search that plays
    for the computer. Search metrics live as long as the engine does.
    """

    def __init__(self, first: Optional[Cell] = None, policy=None, playouts: Optional[int] = None,
                 time_limit=FROM_CONFIG, threads: Optional[int] = None, seed=FROM_CONFIG):
        """
        Unset arguments are read from CONFIG when the engine is built.
        `time_limit` and `seed` use FROM_CONFIG as their default because
        None is meaningful for both (no time limit, unseeded).
        """
        self.board = ReversiBoard.new_game(self._resolve_first(first))
        self.search = SearchEngine(
            CONFIG.search.policy if policy is None else policy,
            playouts=CONFIG.search.playouts if playouts is None else playouts,
            time_limit=CONFIG.search.time_limit_s if time_limit is FROM_CONFIG else time_limit,
            threads=CONFIG.search.threads if threads is None else threads,
            seed=CONFIG.search.seed if seed is FROM_CONFIG else seed,
        )

    @staticmethod
    def _resolve_first(first: Optional[Cell]) -> Cell:
        return parse_color(CONFIG.game.first_mover) if first is None else first

    def new_game(self, first: Optional[Cell] = None):
        """Start over on the same engine; metrics are kept."""
        self.board = ReversiBoard.new_game(self._resolve_first(first))

    def legal_moves(self) -> List[int]:
        return self.board.legal_moves()

    def is_legal(self, pos: int) -> bool:
        return self.board.is_legal(pos)

    def make_move(self, pos: int) -> bool:
        """Play `pos` for the side to move. Returns True if legal."""
        if not self.board.is_legal(pos):
            return False
        self.board.apply_move(pos)
        self.board.switch_side()
        return True

    def pass_turn(self):
        self.board.switch_side()

    def get_best_move(self) -> Optional[int]:
        return self.search.search_best_move(self.board)

    def play_computer_turn(self) -> Optional[int]:
        """Search and play for the side to move; passes when it has no move."""
        move = self.get_best_move()
        if move is None:
            logger.info("%s has no legal move, skipping turn", self.board.turn.name)
            self.pass_turn()
            return None
        self.make_move(move)
        return move

    def score(self) -> Tuple[int, int]:
        return self.board.score()

    def check_terminal(self, forced_end: bool = False) -> Outcome:
        return self.board.check_terminal(forced_end)

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def winner(self) -> Outcome:
        """Decided outcome once the game is over, NOT_OVER before that."""
        if not self.is_game_over():
            return Outcome.NOT_OVER
        return self.board.check_terminal(forced_end=True)

    def get_average_rollouts_per_second(self) -> Optional[float]:
        return self.search.get_average_rollouts_per_second()

    def get_average_search_seconds(self) -> Optional[float]:
        return self.search.get_average_search_seconds()

    def print_board(self):
        print(self.board)
