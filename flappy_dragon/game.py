import logging
from enum import Enum

import numpy as np

from .surface import BLACK, NAVY, RED, YELLOW, Key

logger = logging.getLogger(__name__)


# --- Constants ---
SCREEN_WIDTH = 80
SCREEN_HEIGHT = 50
FRAME_DURATION = 70.0  # ms of accumulated frame time per physics step

PLAYER_START = (5, 25)


class GameMode(Enum):
    MENU = "menu"
    PLAYING = "playing"
    END = "end"


class Player:
    GRAVITY = 0.2
    TERMINAL_VELOCITY = 2.0
    FLAP_VELOCITY = -2.0
    GLYPH = "@"

    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.velocity = 0.0

    def advance(self):
        if self.velocity < self.TERMINAL_VELOCITY:
            self.velocity += self.GRAVITY
        self.y += int(self.velocity)
        # One world column per physics step; this is the scroll speed
        self.x += 1
        # Clamp only, velocity is left as is
        if self.y < 0:
            self.y = 0

    def flap(self):
        self.velocity = self.FLAP_VELOCITY

    def render(self, surface):
        # The player is pinned to screen column 0, the world scrolls under it
        surface.set(0, self.y, YELLOW, BLACK, self.GLYPH)


class Obstacle:
    GAP_RANGE = (10, 40)
    MAX_SIZE = 20
    MIN_SIZE = 2
    GLYPH = "|"

    def __init__(self, x, score, rng):
        self.x = x
        self.gap_y = int(rng.integers(*self.GAP_RANGE))
        self.size = max(self.MIN_SIZE, self.MAX_SIZE - score)

    def render(self, surface, player_x):
        screen_x = self.x - player_x
        half_size = self.size // 2
        for y in range(0, self.gap_y - half_size):
            surface.set(screen_x, y, RED, BLACK, self.GLYPH)
        for y in range(self.gap_y + half_size, SCREEN_HEIGHT):
            surface.set(screen_x, y, RED, BLACK, self.GLYPH)

    def hit_obstacle(self, player):
        half_size = self.size // 2
        return player.x == self.x and (
            player.y < self.gap_y - half_size or player.y > self.gap_y + half_size
        )


class FlappyDragon:
    """
    The game state machine. `tick` is called once per rendered frame with the
    surface that supplies elapsed time and the pressed key, and receives the
    draw calls.

    A single random generator is kept for the whole lifetime of the game and
    handed to every obstacle, so one seed reproduces a full run.
    """

    def __init__(self, rng=None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.mode = GameMode.MENU
        self.player = Player(*PLAYER_START)
        self.frame_time = 0.0
        self.score = 0
        self.obstacle = Obstacle(SCREEN_WIDTH, 0, self.rng)

    def tick(self, surface):
        if self.mode == GameMode.MENU:
            self.main_menu(surface)
        elif self.mode == GameMode.PLAYING:
            self.play(surface)
        elif self.mode == GameMode.END:
            self.dead(surface)

    def restart(self):
        self.mode = GameMode.PLAYING
        self.player = Player(*PLAYER_START)
        self.frame_time = 0.0
        self.score = 0
        self.obstacle = Obstacle(SCREEN_WIDTH, 0, self.rng)
        logger.info("New game started")

    def play(self, surface):
        surface.cls_bg(NAVY)

        # Physics runs on its own cadence, decoupled from the frame rate
        self.frame_time += surface.frame_time_ms
        if self.frame_time > FRAME_DURATION:
            self.frame_time = 0.0
            self.player.advance()

        if surface.key == Key.SPACE:
            self.player.flap()

        self.player.render(surface)
        surface.print(0, 0, "Press [Space] to flap!")
        surface.print(0, 1, f"Score: {self.score}")

        self.obstacle.render(surface, self.player.x)
        if self.player.x > self.obstacle.x:
            self.score += 1
            self.obstacle = Obstacle(self.player.x + SCREEN_WIDTH, self.score, self.rng)
            logger.debug(
                "Obstacle passed, score=%d; next at x=%d gap_y=%d size=%d",
                self.score, self.obstacle.x, self.obstacle.gap_y, self.obstacle.size,
            )

        if self.player.y > SCREEN_HEIGHT or self.obstacle.hit_obstacle(self.player):
            self.mode = GameMode.END
            logger.info("Game over with %d points", self.score)

    def main_menu(self, surface):
        surface.cls()
        surface.print_centered(5, "Welcome to Flappy Dragon!")
        surface.print_centered(8, "[P] Play Game")
        surface.print_centered(9, "[Q] Quit Game")
        self._handle_menu_key(surface)

    def dead(self, surface):
        surface.cls()
        surface.print_centered(5, "You are dead!")
        surface.print_centered(6, f"You earned {self.score} points.")
        surface.print_centered(8, "[P] Play Game")
        surface.print_centered(9, "[Q] Quit Game")
        self._handle_menu_key(surface)

    def _handle_menu_key(self, surface):
        if surface.key == Key.P:
            self.restart()
        elif surface.key == Key.Q:
            logger.info("Quit requested from %s screen", self.mode.value)
            surface.quit()
