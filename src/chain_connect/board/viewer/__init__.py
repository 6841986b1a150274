from .state import ViewerState
from .loop import game_loop

__all__ = ["ViewerState", "game_loop"]
