import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from energy_dash.config import GameConfig
from energy_dash.game import EnergyDash
from energy_dash.scores import ScoreStore


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingStore(ScoreStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saved = []

    def save(self, entry):
        self.saved.append(dict(entry))
        return super().save(entry)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def make_game(clock, store):
    def factory(seed=0, **overrides):
        cfg = GameConfig(**overrides)
        return EnergyDash(cfg, seed=seed, store=store, clock=clock)
    return factory


@pytest.fixture
def game(make_game):
    return make_game()
