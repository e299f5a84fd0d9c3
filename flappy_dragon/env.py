import logging
import os

import gymnasium as gym
from gymnasium.spaces import MultiDiscrete
import numpy as np
import pygame

from .game import SCREEN_HEIGHT, SCREEN_WIDTH, FlappyDragon, GameMode
from .surface import CellRenderer, CellSurface, Key

logger = logging.getLogger(__name__)


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: Press Space to flap. Gravity pulls the dragon down between flaps."
    )

    game_description = (
        "Steer a dragon through an endless line of walls, each one with a gap that "
        "shrinks as your score grows. Falling off the screen or touching a wall ends the run."
    )

    auto_advance = True

    # --- Constants ---
    CELL_SIZE = 8
    WIDTH, HEIGHT = SCREEN_WIDTH * CELL_SIZE, SCREEN_HEIGHT * CELL_SIZE
    FPS = 30
    MAX_STEPS = 10000

    # Rewards
    REWARD_SURVIVE = 0.1
    REWARD_PASS = 10.0
    REWARD_DEATH = -10.0

    def __init__(self, render_mode="rgb_array"):
        super().__init__()
        self.render_mode = render_mode

        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.HEIGHT, self.WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        # Observations are rendered off-screen; no window is needed
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pygame.init()
        self.screen = pygame.Surface((self.WIDTH, self.HEIGHT))
        self.cells = CellSurface(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.renderer = CellRenderer(self.CELL_SIZE)

        self.game = None
        self.steps = 0

        self.reset()
        self.validate_implementation()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        self.steps = 0
        self.game = FlappyDragon(rng=self.np_random)
        self.game.restart()

        # Draw the opening frame without advancing time
        self.cells.frame_time_ms = 0.0
        self.cells.key = None
        self.game.tick(self.cells)

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.game.mode == GameMode.END:
            truncated = self.steps >= self.MAX_STEPS
            return self._get_observation(), 0, True, truncated, self._get_info()

        self.steps += 1
        space_pressed = action[1] == 1

        self.cells.frame_time_ms = 1000.0 / self.FPS
        self.cells.key = Key.SPACE if space_pressed else None

        prev_score = self.game.score
        self.game.tick(self.cells)

        reward = self.REWARD_SURVIVE
        reward += (self.game.score - prev_score) * self.REWARD_PASS

        terminated = self.game.mode == GameMode.END
        if terminated:
            reward = self.REWARD_DEATH
        truncated = self.steps >= self.MAX_STEPS

        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info(),
        )

    def _get_observation(self):
        self.renderer.draw(self.cells, self.screen)
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _get_info(self):
        return {
            "score": self.game.score,
            "steps": self.steps,
            "mode": self.game.mode.value,
            "player_y": self.game.player.y,
            "gap_y": self.game.obstacle.gap_y,
        }

    def render(self):
        return self._get_observation()

    def validate_implementation(self):
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(info, dict)
        assert info["mode"] == GameMode.PLAYING.value
        assert info["score"] == 0

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.HEIGHT, self.WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        logger.info("Implementation validated successfully")

    def close(self):
        pygame.quit()
