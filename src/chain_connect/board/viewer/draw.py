# Credits: https://github.com/parappayo/hex-py/blob/master/game_draw.py
# License: (MIT License) https://github.com/parappayo/hex-py/blob/master/LICENSE
# Author: Parappayo
# Modified by: HackXIt

import pygame
from .state import ViewerState


def draw_cell(surface, game: ViewerState, cell):
    rect = game.cell_rect(cell)
    pygame.draw.rect(surface, game.grid_colour, rect, 1)

    owner = int(game.board[cell])
    if owner != 0:
        radius = game.tile_size // 2 - 4
        pygame.draw.circle(surface, game.player_colour[owner], game.cell_center(cell), radius)

    if cell == game.nearest_cell_to_mouse and not game.is_game_over() and owner == 0:
        pygame.draw.circle(surface, game.cursor_colour, game.cell_center(cell), 6)


def draw_links(surface, game: ViewerState):
    width = 3
    for a, b, _ in game.links:
        colour = game.player_colour[int(game.board[a])]
        pygame.draw.line(surface, colour, game.cell_center(a), game.cell_center(b), width)


def draw_last_move(surface, game: ViewerState):
    if game.last_move is None:
        return
    cell = (game.last_move.row, game.last_move.col)
    pygame.draw.rect(surface, (255, 255, 255), game.cell_rect(cell), 2)


def draw_board(surface, game: ViewerState):
    for row in range(game.size):
        for col in range(game.size):
            draw_cell(surface, game, (row, col))
    draw_links(surface, game)
    draw_last_move(surface, game)


def draw_end_zones(surface, game: ViewerState):
    width = 6
    x0, y0 = game.board_position
    span = game.size * game.tile_size
    x_colour = game.player_colour[1]
    o_colour = game.player_colour[-1]

    pygame.draw.line(surface, x_colour, (x0, y0 - 8), (x0 + span, y0 - 8), width)
    pygame.draw.line(surface, x_colour, (x0, y0 + span + 8), (x0 + span, y0 + span + 8), width)
    pygame.draw.line(surface, o_colour, (x0 - 8, y0), (x0 - 8, y0 + span), width)
    pygame.draw.line(surface, o_colour, (x0 + span + 8, y0), (x0 + span + 8, y0 + span), width)


def draw_frame(surface, game: ViewerState, flip=True):
    surface.fill(game.background_colour)

    draw_board(surface, game)
    draw_end_zones(surface, game)

    if getattr(game, "status_message", ""):
        font = pygame.font.SysFont(None, 28)
        txt = font.render(game.status_message, True, (255, 255, 255))
        rect = txt.get_rect()
        rect.centerx = surface.get_width() // 2
        rect.top = 20
        surface.blit(txt, rect)

    if flip:
        pygame.display.flip()
