from .game_board import (
    BOARD_SIZE,
    EMPTY,
    PLAYER_O,
    PLAYER_X,
    Agent,
    Coordinate,
    GameBoard,
    MoveRecord,
    MoveResult,
    WinResult,
    is_vertical,
    opponent_of,
    player_name,
)

import warnings


def _suppress_pygame_pkg_resources_warning():
    warnings.filterwarnings(
        "ignore",
        message=r"pkg_resources is deprecated as an API",
        category=UserWarning,
        module=r"pygame\.pkgdata",
    )

_suppress_pygame_pkg_resources_warning()
