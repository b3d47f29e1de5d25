from enum import Enum

from .entities import make_clouds, make_player, make_skyline, make_stars


class GameState(Enum):
    LEADERBOARD = 'leaderboard'
    MENU = 'menu'
    PLAYING = 'playing'
    GAME_OVER = 'gameOver'


IDLE_STATES = (GameState.LEADERBOARD, GameState.MENU)


class RunState:
    """Everything one simulation owns: player, entity pools, timers and counters.

    No entity record is shared between pools. The backdrop (buildings, clouds,
    stars) lives across runs; `reset_run` only clears per-run fields.
    """

    def __init__(self, cfg, rng):
        self.cfg = cfg
        self.rng = rng

        self.width = cfg.width
        self.height = cfg.height
        self.ground_y = cfg.ground_y

        self.game_state = GameState.LEADERBOARD
        self.run_id = 0

        self.city_light_level = 0.0
        self.energy_collected = 0

        self.player = make_player(cfg, self.ground_y)
        self.buildings = make_skyline(rng, cfg.building_count, self.ground_y, self.city_light_level)
        self.clouds = make_clouds(rng)
        self.stars = make_stars(rng, self.width, self.height)

        self.reset_run()

    def reset_run(self):
        cfg = self.cfg
        self.score = 0
        self.distance = 0.0
        self.speed = cfg.base_speed
        self.game_time = 0
        self.background_offset = 0.0
        self.cloud_offset = 0.0

        color = self.player['color']
        self.player = make_player(cfg, self.ground_y, color=color)

        self.obstacles = []
        self.collectibles = []
        self.particles = []
        self.grass_tufts = []
        self.pebbles = []

        self.obstacle_timer = 0
        self.collectible_timer = 0
        self.grass_timer = 0
        self.pebble_timer = 0

        self.city_light_level = 0.0
        self.energy_collected = 0

    @property
    def resting_y(self):
        return self.ground_y - self.player['height']

    def resize(self, width, height):
        self.width = width
        self.height = height
        old_ground_y = self.ground_y
        self.ground_y = height - self.cfg.ground_offset

        # Ground-anchored entities follow the ground line
        shift = self.ground_y - old_ground_y
        for pool in (self.obstacles, self.grass_tufts, self.pebbles, self.buildings):
            for entity in pool:
                entity['y'] += shift
        for collectible in self.collectibles:
            collectible['y'] += shift
            collectible['base_y'] += shift
        self.player['y'] = min(self.player['y'], self.resting_y)
        if self.player['is_grounded']:
            self.player['y'] = self.resting_y
