import argparse
import logging
import sys

import numpy as np
import pygame

from .game import SCREEN_HEIGHT, SCREEN_WIDTH, FlappyDragon, GameMode
from .surface import KEY_MAP, CellRenderer, CellSurface

logger = logging.getLogger("flappy_dragon")

FPS = 60


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play Flappy Dragon in a pygame window.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for obstacle placement.")
    parser.add_argument("--scale", type=int, default=2, help="Window pixels per cell pixel.")
    parser.add_argument("--log-level", default="warning", help="Logging level (debug, info, ...).")
    return parser.parse_args(argv)


def run(game, cells, renderer, window, scale):
    clock = pygame.time.Clock()
    frame = pygame.Surface(renderer.size_for(cells))
    last_mode = game.mode

    running = True
    while running and not cells.quitting:
        cells.key = None
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key in KEY_MAP:
                cells.key = KEY_MAP[event.key]

        cells.frame_time_ms = float(clock.get_time())
        game.tick(cells)

        if game.mode == GameMode.END and last_mode != GameMode.END:
            print(f"Game Over! Final Score: {game.score}")
        last_mode = game.mode

        renderer.draw(cells, frame)
        if scale == 1:
            window.blit(frame, (0, 0))
        else:
            pygame.transform.scale(frame, window.get_size(), window)
        pygame.display.flip()

        clock.tick(FPS)


def main(argv=None):
    args = _parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    cells = CellSurface(SCREEN_WIDTH, SCREEN_HEIGHT)
    try:
        pygame.init()
        renderer = CellRenderer()
        width, height = renderer.size_for(cells)
        window = pygame.display.set_mode((width * args.scale, height * args.scale))
        pygame.display.set_caption("Flappy Dragon!")
    except pygame.error as e:
        print(f"Pygame error: {e}")
        print("Could not open a display. A windowed session is required to play.")
        pygame.quit()
        return 1

    game = FlappyDragon(rng=np.random.default_rng(args.seed))
    logger.info("Starting Flappy Dragon (seed=%s)", args.seed)
    try:
        run(game, cells, renderer, window, args.scale)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
