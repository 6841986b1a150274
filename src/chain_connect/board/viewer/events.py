# Credits: https://github.com/parappayo/hex-py/blob/master/game_input.py
# License: (MIT License) https://github.com/parappayo/hex-py/blob/master/LICENSE
# Author: Parappayo
# Modified by: HackXIt

import pygame
from .state import ViewerState


def on_quit(event, game: ViewerState):
    if getattr(game, "engine", None):
        game.engine.close()
    elif game.shutdown_event is not None:
        game.shutdown_event.set()


def on_key_down(event, game: ViewerState):
    if event.key == pygame.K_ESCAPE:
        on_quit(event, game)
    if event.key == pygame.K_SPACE and game.step_event is not None and not game.auto_mode:
        game.step_event.set()
    if event.key == pygame.K_RETURN and game.step_event is not None:
        if game.auto_mode:
            game.auto_mode = False
            game.status_message = "Press SPACE to advance"
        else:
            game.auto_mode = True
            game.status_message = "Auto-play - press ENTER to pause"
            game.step_event.set()


def on_mouse_down(event, game: ViewerState):
    if game.step_event is not None:
        return  # machine duel, clicks are ignored
    if event.button == 1 and game.is_valid_move() and getattr(game, "engine", None):
        engine = game.engine
        human = getattr(engine, "_human_player", engine.player)
        if engine.player == human:
            engine.move(game.nearest_cell_to_mouse)


def on_mouse_move(event, game: ViewerState):
    game.nearest_cell_to_mouse = game.cell_at(event.pos)


event_handlers = {
    pygame.QUIT: on_quit,
    pygame.KEYDOWN: on_key_down,
    pygame.MOUSEBUTTONDOWN: on_mouse_down,
    pygame.MOUSEMOTION: on_mouse_move,
}


def handle_events(events, game: ViewerState):
    for event in events:
        handler = event_handlers.get(event.type)
        if handler is not None:
            handler(event, game)
