import os

import gymnasium as gym
import numpy as np
import pygame
from gymnasium.spaces import MultiDiscrete

from .config import GameConfig
from .game import EnergyDash
from .render import Renderer
from .scores import ScoreStore
from .state import GameState

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    # Must be a short, user-facing control string:
    user_guide = (
        "Controls: Press space to jump over the cardboard boxes. Touch the energy bolts to collect them."
    )

    # Must be a short, user-facing description of the game:
    game_description = (
        "An endless city runner at dusk. Jump the boxes, grab energy to power up the "
        "skyline's windows, and run as far as you can. One hit ends the run."
    )

    # Should frames auto-advance or wait for user input?
    auto_advance = True

    MAX_STEPS = 10000
    CRASH_PENALTY = -10.0

    def __init__(self, render_mode="rgb_array", config=None, character='dave', store=None):
        super().__init__()
        self.render_mode = render_mode
        self.config = config or GameConfig(width=640, height=400)
        self.SCREEN_WIDTH = self.config.width
        self.SCREEN_HEIGHT = self.config.height

        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        self.renderer = Renderer(self.SCREEN_WIDTH, self.SCREEN_HEIGHT)

        self.character = character
        self.store = store if store is not None else ScoreStore(capacity=self.config.leaderboard_size)
        self.game = None
        self.steps = 0

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        # Share gymnasium's seeded generator so runs are reproducible
        self.game = EnergyDash(self.config, rng=self.np_random, store=self.store, character=self.character)
        self.game.start()
        self.steps = 0

        return self._get_observation(), self._get_info()

    def step(self, action):
        if self.game.game_state is not GameState.PLAYING:
            return self._get_observation(), 0, True, False, self._get_info()

        self.steps += 1
        space_pressed = action[1] == 1
        if space_pressed:
            self.game.press()

        score_before = self.game.score
        self.game.update()

        # Survival point plus any energy picked up this step
        reward = float(self.game.score - score_before)
        terminated = self.game.game_state is GameState.GAME_OVER
        if terminated:
            reward = self.CRASH_PENALTY
            # sfx: crash_sound

        truncated = not terminated and self.steps >= self.MAX_STEPS

        return (
            self._get_observation(),
            reward,
            terminated,
            truncated,
            self._get_info()
        )

    def render(self):
        return self._get_observation()

    def _get_observation(self):
        self.renderer.draw(self.game.snapshot(), self.store.load())
        return self.renderer.to_array()

    def _get_info(self):
        return {
            "score": self.game.score,
            "steps": self.steps,
            "distance": int(self.game.distance),
            "speed": self.game.speed,
            "energy": self.game.state.energy_collected,
            "light_level": self.game.city_light_level,
        }

    def validate_implementation(self):
        print("Running implementation validation...")
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert obs.dtype == np.uint8
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        print("✓ Implementation validated successfully")

    def close(self):
        pygame.quit()
