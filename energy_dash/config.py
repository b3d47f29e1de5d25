from dataclasses import dataclass, replace
from typing import Optional


# Obstacle types - cardboard boxes of different sizes
OBSTACLE_TYPES = (
    {'type': 'small_box', 'width': 35, 'height': 30, 'color': (222, 184, 135), 'shadow': (205, 133, 63), 'points': 5},
    {'type': 'medium_box', 'width': 45, 'height': 40, 'color': (210, 180, 140), 'shadow': (188, 154, 106), 'points': 8},
    {'type': 'large_box', 'width': 55, 'height': 50, 'color': (245, 222, 179), 'shadow': (221, 208, 163), 'points': 12},
    {'type': 'tall_box', 'width': 40, 'height': 60, 'color': (218, 165, 32), 'shadow': (184, 134, 11), 'points': 10},
)

# Collectible types - ascending value, descending rarity
COLLECTIBLE_TYPES = (
    {'type': 'white_energy', 'points': 10, 'color': (255, 255, 255), 'rarity': 0.4},
    {'type': 'yellow_energy', 'points': 25, 'color': (255, 255, 0), 'rarity': 0.3},
    {'type': 'blue_energy', 'points': 50, 'color': (0, 191, 255), 'rarity': 0.2},
    {'type': 'gold_energy', 'points': 100, 'color': (255, 215, 0), 'rarity': 0.1},
)

CHARACTERS = {
    'dave': {'name': 'Dave', 'color': (74, 144, 226), 'accent': (44, 90, 160), 'description': 'Big Softie'},
    'mel': {'name': 'Mel', 'color': (139, 69, 19), 'accent': (101, 67, 33), 'description': 'Coffee Lover'},
    'ash': {'name': 'Ash', 'color': (50, 205, 50), 'accent': (34, 139, 34), 'description': 'Tech Support'},
    'charlie': {'name': 'Charlie & Riley', 'color': (255, 105, 180), 'accent': (233, 30, 99), 'description': 'Double Trouble'},
}

DEFAULT_CHARACTER = 'dave'

BUILDING_COLORS = (
    (44, 62, 80), (52, 73, 94), (93, 78, 117), (74, 103, 65),
    (139, 115, 85), (107, 112, 92), (127, 132, 113), (90, 106, 98),
    (74, 85, 104), (45, 55, 72), (85, 60, 154), (111, 66, 193),
)

GRASS_COLORS = ((34, 139, 34), (50, 205, 50), (0, 100, 0))

# Soil tones, darker and lighter than the dirt
PEBBLE_COLORS = (
    (93, 47, 10), (74, 37, 7), (107, 55, 16),
    (160, 82, 45), (205, 133, 63), (222, 184, 135),
)


@dataclass
class GameConfig:
    """Tunable constants for one simulation.

    Lengths are in pixels, speeds in pixels per tick and intervals in ticks.
    """

    width: int = 800
    height: int = 600
    ground_offset: int = 100

    # Player
    player_x: float = 100
    player_width: int = 75
    player_height: int = 105
    gravity: float = 0.7
    jump_power: float = -16

    # Speed model
    base_speed: float = 6.5
    speed_gain: float = 0.001
    max_speed: Optional[float] = None
    distance_factor: float = 0.1

    collision_margin: float = 1

    # Spawn timers
    obstacle_interval: float = 90
    obstacle_interval_floor: float = 45
    obstacle_interval_decay: float = 0.015
    collectible_interval: float = 150
    collectible_chance: float = 0.6
    grass_interval: tuple = (80, 120)
    grass_chance: float = 0.7
    pebble_interval: tuple = (150, 250)
    pebble_chance: float = 0.3

    # Collectibles
    collectible_size: int = 70
    bob_speed: float = 0.15
    bob_amplitude: float = 8

    # City lighting
    light_step_energy: int = 25
    light_step: float = 0.1
    max_light_level: float = 0.95

    # Background
    building_count: int = 15

    # Game over / leaderboard
    auto_save_delay: float = 2.0
    leaderboard_size: int = 10

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"viewport must be positive, got {self.width}x{self.height}")
        if self.gravity <= 0:
            raise ValueError("gravity must be positive")
        if self.jump_power >= 0:
            raise ValueError("jump_power must be negative (screen y grows downwards)")
        if self.obstacle_interval_floor > self.obstacle_interval:
            raise ValueError("obstacle_interval_floor cannot exceed obstacle_interval")
        for name in ('collectible_chance', 'grass_chance', 'pebble_chance', 'max_light_level'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        if self.leaderboard_size < 1:
            raise ValueError("leaderboard_size must be at least 1")

    @property
    def ground_y(self):
        return self.height - self.ground_offset

    def replace(self, **changes):
        return replace(self, **changes)
