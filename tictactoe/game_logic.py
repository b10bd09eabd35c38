from dataclasses import dataclass
from typing import Optional, Tuple

EMPTY = ''
PLAYER_X = 'X'
PLAYER_O = 'O'
BOARD_CELLS = 9

# move outcomes
CONTINUE = "continue"
WIN = "win"
TIE = "tie"
REJECTED = "rejected"

# rows, cols, diags - checked in this order
WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)


def other_player(player):
    return PLAYER_O if player == PLAYER_X else PLAYER_X


@dataclass(frozen=True)
class RoundStarted:
    """
    emitted when a fresh round begins
    """
    next_player: str = PLAYER_X


@dataclass(frozen=True)
class MoveResult:
    """
    what happened after apply_move
    """
    accepted: bool
    outcome: str
    winner: Optional[str] = None
    winning_line: Optional[Tuple[int, int, int]] = None
    next_player: Optional[str] = None


@dataclass
class Stats:
    """
    session counters, survive round restarts
    """
    wins_x: int = 0
    wins_o: int = 0
    ties: int = 0

    def wins_for(self, player):
        return self.wins_x if player == PLAYER_X else self.wins_o

    def add_win(self, player):
        if player == PLAYER_X:
            self.wins_x += 1
        else:
            self.wins_o += 1


_REJECTED = MoveResult(accepted=False, outcome=REJECTED)


class BoardEngine:
    """
    tic-tac-toe rules and session state, no ui
    """
    def __init__(self):
        """
        empty board, not started until start_round
        """
        self._board = [EMPTY] * BOARD_CELLS
        self._current_player = PLAYER_X
        self._running = False             # NotStarted until first round
        self._stats = Stats()

    @property
    def board(self):
        return tuple(self._board)

    @property
    def current_player(self):
        return self._current_player

    @property
    def running(self):
        return self._running

    def start_round(self):
        """
        clear board, X to move; stats untouched
        """
        self._board = [EMPTY] * BOARD_CELLS
        self._current_player = PLAYER_X
        self._running = True
        return RoundStarted(next_player=self._current_player)

    def is_cell_empty(self, index):
        """
        true if index on the board and cell blank
        """
        return self._valid_index(index) and self._board[index] == EMPTY

    def apply_move(self, index):
        """
        place current player's mark at index and evaluate the round.
        invalid index, taken cell or finished round -> rejected, no changes
        """
        if not self._running or not self.is_cell_empty(index):
            return _REJECTED

        player = self._current_player
        self._board[index] = player

        line = self._winning_line()
        if line is not None:
            # mover is still current_player here, flip only happens on continue
            self._stats.add_win(player)
            self._running = False
            return MoveResult(accepted=True, outcome=WIN,
                              winner=player, winning_line=line)

        if EMPTY not in self._board:
            self._stats.ties += 1
            self._running = False
            return MoveResult(accepted=True, outcome=TIE)

        self._current_player = other_player(player)
        return MoveResult(accepted=True, outcome=CONTINUE,
                          next_player=self._current_player)

    def get_stats(self):
        # copy so callers can't touch the counters
        return Stats(self._stats.wins_x, self._stats.wins_o, self._stats.ties)

    def _winning_line(self):
        b = self._board
        for a, m, c in WIN_LINES:
            if b[a] != EMPTY and b[a] == b[m] == b[c]:
                return (a, m, c)
        return None

    @staticmethod
    def _valid_index(index):
        # bool is an int subclass, not a cell
        return (isinstance(index, int) and not isinstance(index, bool)
                and 0 <= index < BOARD_CELLS)
