# Credits: https://github.com/parappayo/hex-py/blob/master/hex.py
# License: (MIT License) https://github.com/parappayo/hex-py/blob/master/LICENSE
# Author: Parappayo
# Modified by: HackXIt

import sys, time, pygame
from . import draw, events


def game_loop(game):
    pygame.init()
    pygame.display.set_caption("chain-connect")
    screen = pygame.display.set_mode(game.screen_size)
    running = True

    while running:
        events.handle_events(pygame.event.get(), game)
        draw.draw_frame(screen, game)
        sys.stdout.flush()

        if getattr(game, "shutdown_event", None) and game.shutdown_event.is_set():
            draw.draw_frame(screen, game)
            running = False
            # keep the final position up until any key, click or close
            waiting_for_ack = True
            while waiting_for_ack:
                for ev in pygame.event.get():
                    if ev.type in (pygame.KEYDOWN,
                                   pygame.MOUSEBUTTONDOWN,
                                   pygame.QUIT):
                        waiting_for_ack = False
                        break
                time.sleep(0.05)

        time.sleep(0.05)  # cap at 20 fps

    pygame.quit()
