import pytest

from energy_dash.config import COLLECTIBLE_TYPES, GameConfig


def test_defaults():
    cfg = GameConfig()
    assert cfg.ground_y == cfg.height - 100
    assert cfg.jump_power == -16
    assert cfg.gravity == 0.7
    assert cfg.max_speed is None
    assert sum(kind['rarity'] for kind in COLLECTIBLE_TYPES) == pytest.approx(1.0)


def test_replace_keeps_other_fields():
    cfg = GameConfig().replace(base_speed=9.0)
    assert cfg.base_speed == 9.0
    assert cfg.gravity == 0.7


@pytest.mark.parametrize("overrides", [
    {'width': 0},
    {'gravity': -1},
    {'jump_power': 5},
    {'obstacle_interval': 30},
    {'collectible_chance': 1.5},
    {'max_light_level': -0.1},
    {'leaderboard_size': 0},
])
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        GameConfig(**overrides)
