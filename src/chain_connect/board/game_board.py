# chain_connect.board.game_board
# ==============================================================
# Game-state collaborator of the decision engine.
# ------------------------------------------------------------------
#   • N x N square board held as an np.int8 array (0 / 1 / -1)
#   • X (1) links top <-> bottom, O (-1) links left <-> right
#   • Stones connect through all 8 neighbours; crossing diagonals are
#     settled by move order (the earlier link stands)
#   • Optional real-time pygame viewer (use_pygame=True)
# ------------------------------------------------------------------

from __future__ import annotations

import atexit
import logging
import threading
import time
from typing import Callable, List, NamedTuple, Optional, Set, Tuple

import numpy as np

from .win_check import connects_axis, diagonal_links, is_diagonal_blocked

logger = logging.getLogger(__name__)

Coordinate = Tuple[int, int]
Agent = Callable[[List[List[int]], List[Coordinate]], Coordinate]

BOARD_SIZE = 15
EMPTY = 0
PLAYER_X = 1    # vertical: top <-> bottom
PLAYER_O = -1   # horizontal: left <-> right

PLAYER_NAMES = {PLAYER_X: "X", PLAYER_O: "O"}


def opponent_of(player: int) -> int:
    return -player


def player_name(player: int) -> str:
    return PLAYER_NAMES.get(player, "?")


def is_vertical(player: int) -> bool:
    return player == PLAYER_X


class MoveRecord(NamedTuple):
    row: int
    col: int
    player: int


class MoveResult(NamedTuple):
    success: bool
    game_over: bool = False
    winner: int = 0
    reason: str = ""


class WinResult(NamedTuple):
    is_win: bool
    reached: int = 0

# ==============================================================
# 🏗️  Game object
# ==============================================================

class GameBoard(object):
    """
    One game on a square board.

    Parameters
    ----------
    size : int, optional
        Board side length (min 5, max 26, default 15)
    use_pygame : bool, keyword-only, optional
        Launch the pygame viewer. When *True* the board is **not** printed
        to the console; each move is echoed as a single line instead.

    Attributes
    ----------
    size : int
        The board is 'size*size'.
    board : np.ndarray
        int8 array. '0' empty, '1' X, '-1' O.
    move_order : np.ndarray
        int32 array with the move index of every stone, '-1' for empty cells.
    move_count : int
        Number of stones placed so far.
    player : int
        Player to move in the match wrappers. X always opens.
    winner : int
        Confirmed winner, '0' while the game runs.
    history : list[MoveRecord]
        Every placement in order.
    """
    _closing: bool = False

    # ------------------------------------------------------------------
    # Construction / initialisation
    # ------------------------------------------------------------------
    def __init__(self, size: int = BOARD_SIZE, **kwargs):
        self._use_pygame: bool = bool(kwargs.pop('use_pygame', False))
        if kwargs:
            raise TypeError(
                f"Unexpected keyword argument(s): {', '.join(kwargs.keys())}"
            )

        size = max(5, min(size, 26))       # clamp board size
        self.size = size
        self.board: np.ndarray = np.zeros((size, size), dtype=np.int8)
        self.move_order: np.ndarray = np.full((size, size), -1, dtype=np.int32)
        self.move_count: int = 0
        self.player: int = PLAYER_X
        self.winner: int = 0
        self.history: List[MoveRecord] = []
        # players whose reported win must first be confirmed gap-free
        self._gated_players: Set[int] = set()

        if self._use_pygame:
            self._init_pygame_backend(size)
        atexit.register(self.close)

    # ==============================================================
    # 🔌  PYGAME INTEGRATION
    # ==============================================================
    def _init_pygame_backend(self, size: int) -> None:
        """Starts the pygame render loop in a daemon thread."""
        from .viewer import ViewerState, game_loop

        self._viewer_state: ViewerState = ViewerState(size)
        vs = self._viewer_state
        vs.engine = self
        self._shutdown_event = threading.Event()
        vs.shutdown_event = self._shutdown_event

        self._pygame_thread = threading.Thread(
            target=game_loop, args=(vs,), daemon=True, name='chain_connect_viewer'
        )
        self._pygame_thread.start()

    def _sync_to_viewer(self) -> None:
        if not self._use_pygame:
            return
        vs = self._viewer_state
        vs.board = self.board.copy()
        vs.links = diagonal_links(self.board, self.move_order, PLAYER_X) + \
            diagonal_links(self.board, self.move_order, PLAYER_O)
        vs.last_move = self.last_move
        vs.current_player = self.player
        vs.winner = self.winner

    def close(self) -> None:
        """Stop the viewer thread and unblock every waiter. Safe to call twice."""
        self._closing = True

        ev = getattr(self, '_click_event', None)
        if ev:
            ev.set()
        vs = getattr(self, '_viewer_state', None)
        if vs and getattr(vs, 'step_event', None):
            vs.step_event.set()

        if getattr(self, '_shutdown_event', None):
            self._shutdown_event.set()

        t = getattr(self, '_pygame_thread', None)
        if t and t.is_alive() and threading.current_thread() is not t:
            t.join(timeout=3)

    # ==============================================================
    # 🎮  Core gameplay primitives
    # ==============================================================
    def is_valid_position(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_valid_move(self, row: int, col: int) -> bool:
        return self.is_valid_position(row, col) and self.board[row, col] == EMPTY

    def get_player_positions(self, player: int) -> List[Coordinate]:
        rows, cols = np.nonzero(self.board == player)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def legal_moves(self) -> List[Coordinate]:
        """Empty coordinates (row, col), 0-based, in row-major order."""
        rows, cols = np.nonzero(self.board == EMPTY)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def is_full(self) -> bool:
        return self.move_count >= self.size * self.size

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.history[-1] if self.history else None

    def get_last_opponent_move(self, player: int) -> Optional[MoveRecord]:
        for record in reversed(self.history):
            if record.player == opponent_of(player):
                return record
        return None

    def make_move(self, row: int, col: int, player: int) -> MoveResult:
        """Place a stone and report the raw win check for the mover.

        A reported win is provisional. Match wrappers confirm it with
        :meth:`_confirm_win` before they set :attr:`winner`.
        """
        if self.winner != 0:
            return MoveResult(False, True, self.winner, 'game already won')
        if player not in PLAYER_NAMES:
            return MoveResult(False, reason=f'unknown player {player!r}')
        if not self.is_valid_position(row, col):
            return MoveResult(False, reason=f'({row}, {col}) is off the board')
        if self.board[row, col] != EMPTY:
            return MoveResult(False, reason=f'({row}, {col}) is occupied')

        self.board[row, col] = player
        self.move_order[row, col] = self.move_count
        self.move_count += 1
        self.history.append(MoveRecord(row, col, player))
        logger.debug("%s -> (%d, %d) [move %d]", player_name(player), row, col, self.move_count)

        won = self.check_win(player).is_win
        return MoveResult(True, won, player if won else 0)

    def check_win(self, player: int) -> WinResult:
        connected, reached = connects_axis(self.board, self.move_order, player)
        return WinResult(connected, reached)

    def is_diagonal_link_blocked(self, a: Coordinate, b: Coordinate, player: int) -> bool:
        return is_diagonal_blocked(self.board, self.move_order, a, b, player)

    def diagonal_connections(self, player: int):
        """Standing diagonal links of *player* with the move they were made on."""
        return diagonal_links(self.board, self.move_order, player)

    def reset(self) -> None:
        self.board = np.zeros((self.size, self.size), dtype=np.int8)
        self.move_order = np.full((self.size, self.size), -1, dtype=np.int32)
        self.move_count = 0
        self.player = PLAYER_X
        self.winner = 0
        self.history = []
        self._sync_to_viewer()

    def move(self, coordinates: Coordinate) -> None:
        """Play *coordinates* for the player to move and evaluate the position."""
        assert self.winner == 0, 'The game is already won.'
        assert self.is_valid_move(*coordinates), 'Field occupied.'

        current_player = self.player
        self.make_move(coordinates[0], coordinates[1], current_player)
        self.player = opponent_of(current_player)
        self.evaluate()
        self._sync_to_viewer()

        if getattr(self, '_click_event', None):
            if current_player == getattr(self, '_human_player', current_player):
                self._click_event.set()

        if self._use_pygame:
            print(f'{player_name(current_player)} -> {coordinates}')

    def evaluate(self) -> int:
        """Set :attr:`winner` once a connection is confirmed. Returns the winner."""
        mover = opponent_of(self.player)
        for candidate in (mover, opponent_of(mover)):
            if not self.check_win(candidate).is_win:
                continue
            if candidate in self._gated_players and not self._confirm_win(candidate):
                continue
            self.winner = candidate
            break
        return self.winner

    def _confirm_win(self, player: int) -> bool:
        """A connection only counts once *player* has no unresolved gap left."""
        if self.is_full():
            return True
        from ..engine.registry import GapRegistry

        registry = GapRegistry(self, player)
        registry.update_registry()
        if registry.has_any_gaps(player):
            logger.info(
                "%s is connected but %d gap(s) remain open - game continues",
                player_name(player), len(registry.get_player_patterns(player)),
            )
            return False
        return True

    def print(self) -> None:
        """Print a text grid: columns lettered, rows numbered from 1."""
        if self._use_pygame:
            return
        names = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        symbols = {EMPTY: '·', PLAYER_X: 'X', PLAYER_O: 'O'}
        print("    " + " ".join(names[:self.size]))
        for r in range(self.size):
            cells = " ".join(symbols[int(v)] for v in self.board[r])
            print(f"{r + 1:>3} {cells}")

    @staticmethod
    def translator(string: str) -> Coordinate:
        """Translate terminal input such as ``H8`` into (row, col); (-1, -1) if unreadable."""
        names = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        string = string.strip().upper()
        if len(string) < 2 or string[0] not in names or not string[1:].isdigit():
            return (-1, -1)
        return (int(string[1:]) - 1, names.index(string[0]))

    # ==============================================================
    # 🤖  Match wrappers
    # ==============================================================
    def machine_vs_machine(self, machine1: Agent | None = None, machine2: Agent | None = None,
                           *, auto: bool = False, rate: float = 3.0):
        """Computer-controlled duel. X is *machine1*."""
        from random import choice
        if machine1 is None:
            machine1 = lambda board, al: choice(al)
        if machine2 is None:
            machine2 = lambda board, al: choice(al)
        self._gated_players = {PLAYER_X, PLAYER_O}

        if not self._use_pygame:
            return self._machine_vs_machine_cli(machine1, machine2, auto=auto, rate=rate)
        return self._machine_vs_machine_gui(machine1, machine2, auto=auto, rate=rate)

    def human_vs_machine(self, human_player: int = PLAYER_X, machine: Agent | None = None):
        """Play against an agent. Console input or clicks in the viewer."""
        if machine is None:
            from random import choice
            machine = lambda board, al: choice(al)
        self._gated_players = {opponent_of(human_player)}

        if not self._use_pygame:
            return self._human_vs_machine_cli(human_player, machine)
        return self._human_vs_machine_gui(human_player, machine)

    def human_vs_human(self):
        self._gated_players = set()
        if not self._use_pygame:
            return self._human_vs_human_cli()
        return self._human_vs_human_gui()

    def _announce_winner(self) -> None:
        if self.winner != 0:
            print(f'{player_name(self.winner)} wins after {self.move_count} moves!')
        elif self.is_full():
            print('Board full - no winner.')

    def _read_human_move(self) -> Coordinate:
        while True:
            coordinate = self.translator(input(f"{player_name(self.player)} to move (e.g. 'H8'): "))
            if self.is_valid_move(*coordinate):
                return coordinate

    def _ask_machine(self, machine: Agent) -> Coordinate:
        return machine(self.board.tolist(), self.legal_moves())

    # --------------------------------------------------------------
    # Console implementation
    # --------------------------------------------------------------
    def _machine_vs_machine_cli(self, machine1: Agent, machine2: Agent, auto: bool, rate: float):
        self.reset()
        while self.winner == 0 and not self.is_full() and not self._closing:
            self.print()
            if auto:
                time.sleep(1 / max(rate, 0.1))
            else:
                input('Press ENTER to continue.')
            chosen = self._ask_machine(machine1 if self.player == PLAYER_X else machine2)
            self.move(chosen)
        self.print()
        self._announce_winner()

    def _human_vs_machine_cli(self, human_player: int, machine: Agent):
        self.reset()
        while self.winner == 0 and not self.is_full() and not self._closing:
            self.print()
            if self.player == human_player:
                self.move(self._read_human_move())
            else:
                self.move(self._ask_machine(machine))
        self.print()
        self._announce_winner()

    def _human_vs_human_cli(self):
        self.reset()
        while self.winner == 0 and not self.is_full() and not self._closing:
            self.print()
            self.move(self._read_human_move())
        self.print()
        self._announce_winner()

    # --------------------------------------------------------------
    # Viewer implementation with SPACE-to-step
    # --------------------------------------------------------------
    def _machine_vs_machine_gui(self, machine1: Agent, machine2: Agent, auto: bool, rate: float):
        self.reset()
        vs = self._viewer_state
        step_event = threading.Event()
        vs.step_event = step_event
        vs.status_message = 'Auto-play - press ENTER to pause' if auto else 'Press SPACE to advance'
        vs.auto_mode = auto
        vs.auto_delay = 1 / rate if rate else 0.33

        while self.winner == 0 and not self.is_full() and not self._closing:
            if vs.auto_mode:
                time.sleep(vs.auto_delay)
            else:
                while not self._closing and not step_event.wait(0.1):
                    pass
                step_event.clear()
            if self._closing:
                break
            self.move(self._ask_machine(machine1 if self.player == PLAYER_X else machine2))
        if self._shutdown_event.is_set():
            self.close()
            return
        self._announce_winner()

    def _human_vs_machine_gui(self, human_player: int, machine: Agent):
        self._human_player = human_player
        self.reset()
        vs = self._viewer_state
        vs.status_message = 'Your turn - click a cell'

        click_event = threading.Event()
        self._click_event = click_event
        vs.click_event = click_event

        while self.winner == 0 and not self.is_full() and not self._closing:
            if self.player == self._human_player:
                while not self._closing and not click_event.wait(0.05):
                    pass
                click_event.clear()
                if self._closing:
                    break
            else:
                vs.status_message = 'Engine is thinking…'
                self.move(self._ask_machine(machine))
                vs.status_message = 'Your turn - click a cell'
        self._announce_winner()

    def _human_vs_human_gui(self):
        self.reset()
        vs = self._viewer_state
        vs.status_message = 'Click a cell to play'

        click_event = threading.Event()
        self._click_event = click_event
        vs.click_event = click_event

        while self.winner == 0 and not self.is_full() and not self._closing:
            while not self._closing and not click_event.wait(0.05):
                pass
            click_event.clear()
        self._announce_winner()
