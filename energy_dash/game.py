import logging
import math
import time

import numpy as np

from . import lighting, physics, spawner
from .collision import check_collision
from .config import CHARACTERS, DEFAULT_CHARACTER, GameConfig
from .entities import make_collect_burst
from .scheduler import Scheduler
from .scores import ScoreStore, make_entry
from .state import IDLE_STATES, GameState, RunState

logger = logging.getLogger(__name__)


class EnergyDash:
    """Endless-runner simulation with its game-state machine.

    Input arrives through commands (`press`, `start`, `confirm_save`); a press is
    queued and applied at the top of the next `update`, never mid-integration.
    Presentation code reads `snapshot()` and the query properties once per frame.
    """

    def __init__(self, cfg=None, seed=None, rng=None, store=None, clock=time.monotonic, character=DEFAULT_CHARACTER):
        self.cfg = cfg or GameConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.store = store if store is not None else ScoreStore(capacity=self.cfg.leaderboard_size)
        self.scheduler = Scheduler(clock)
        self.state = RunState(self.cfg, self.rng)

        self.selected_character = None
        self.select_character(character)

        self.last_run = None
        self._press_queued = False

    # --- Queries -----------------------------------------------------------

    @property
    def game_state(self):
        return self.state.game_state

    @property
    def score(self):
        return self.state.score

    @property
    def distance(self):
        return self.state.distance

    @property
    def speed(self):
        return self.state.speed

    @property
    def city_light_level(self):
        return self.state.city_light_level

    @property
    def is_high_score(self):
        """True once a run has ended with a score that earns a leaderboard slot."""
        return self.last_run is not None and self.last_run['is_high_score']

    @property
    def character_label(self):
        if self.selected_character is None:
            return 'Player'
        return CHARACTERS[self.selected_character]['name']

    def leaderboard(self):
        return self.store.load()

    # --- Commands ----------------------------------------------------------

    def select_character(self, key):
        if key is not None and key not in CHARACTERS:
            raise KeyError(f"unknown character {key!r}; choose from {sorted(CHARACTERS)}")
        self.selected_character = key

    def press(self):
        """Space / up-arrow / tap / click. Starts a run from idle, jumps while playing."""
        self._press_queued = True

    def start(self):
        if self.state.game_state is GameState.PLAYING:
            return False

        # Anything the previous run left scheduled is stale now
        self.scheduler.cancel_run(self.state.run_id)
        self.state.run_id += 1
        self.state.reset_run()
        lighting.reset_building_lights(self.state)

        color = CHARACTERS[self.selected_character]['color'] if self.selected_character else None
        self.state.player['color'] = color
        self.state.game_state = GameState.PLAYING
        self.last_run = None
        self._press_queued = False
        logger.info("Run %d started as %s", self.state.run_id, self.character_label)
        return True

    def jump(self):
        jumped = physics.jump(self.state)
        if jumped:
            logger.debug("Jump at tick %d", self.state.game_time)
        return jumped

    def show_menu(self):
        self.state.game_state = GameState.MENU

    def show_leaderboard(self):
        self.state.game_state = GameState.LEADERBOARD

    def confirm_save(self, name):
        """Save a high score under `name` and return to the leaderboard."""
        if self.state.game_state is not GameState.GAME_OVER or not self.is_high_score:
            return False
        name = (name or '').strip()
        if not name:
            logger.info("No name provided, not saving score")
            return False
        self._save(name, self.character_label)
        self.show_leaderboard()
        return True

    def resize(self, width, height):
        self.state.resize(width, height)

    # --- Simulation --------------------------------------------------------

    def update(self):
        """Advance one frame."""
        self.scheduler.poll()
        self._apply_input()

        state = self.state
        state.game_time += 1
        physics.update_backdrop(state)

        if state.game_state is not GameState.PLAYING:
            return

        state.score += 1  # survival
        physics.update_speed(state)
        physics.update_stars(state)
        physics.update_player(state)
        spawner.spawn_tick(state)

        if self._update_obstacles():
            return
        self._update_collectibles()
        physics.update_particles(state.particles)
        physics.update_grass(state)
        physics.scroll_pool(state.pebbles, state.speed, extent='size')

    def _apply_input(self):
        if not self._press_queued:
            return
        self._press_queued = False
        if self.state.game_state in IDLE_STATES:
            self.start()
        elif self.state.game_state is GameState.PLAYING:
            self.jump()

    def _update_obstacles(self):
        state = self.state
        obstacles = state.obstacles
        for i in range(len(obstacles) - 1, -1, -1):
            obstacle = obstacles[i]
            obstacle['x'] -= state.speed
            if obstacle['x'] + obstacle['width'] < 0:
                del obstacles[i]
            elif check_collision(state.player, obstacle, self.cfg.collision_margin):
                self._game_over()
                return True
        return False

    def _update_collectibles(self):
        state = self.state
        collectibles = state.collectibles
        for i in range(len(collectibles) - 1, -1, -1):
            collectible = collectibles[i]
            collectible['x'] -= state.speed
            physics.bob_collectible(collectible, self.cfg)

            if collectible['x'] + collectible['width'] < 0:
                del collectibles[i]
            elif check_collision(state.player, collectible, self.cfg.collision_margin):
                state.score += collectible['points']
                lighting.add_energy(state, collectible['points'])
                state.particles.extend(make_collect_burst(
                    state.rng,
                    collectible['x'] + collectible['width'] / 2,
                    collectible['y'] + collectible['height'] / 2,
                ))
                del collectibles[i]

    def _game_over(self):
        state = self.state
        state.game_state = GameState.GAME_OVER
        is_high = self.store.is_high_score(state.score)
        self.last_run = {
            'run_id': state.run_id,
            'score': state.score,
            'distance': math.floor(state.distance),
            'is_high_score': is_high,
        }
        logger.info("Run %d over: score=%d distance=%d high_score=%s",
                    state.run_id, state.score, math.floor(state.distance), is_high)
        if not is_high:
            self.scheduler.schedule(self.cfg.auto_save_delay, self._auto_save, state.run_id)

    def _auto_save(self):
        if self.state.game_state is not GameState.GAME_OVER:
            return
        self._save('Anonymous', 'Player')
        self.show_leaderboard()

    def _save(self, name, character):
        entry = make_entry(name, character, self.last_run['score'], self.last_run['distance'])
        try:
            self.store.save(entry)
        except OSError:
            logger.exception("Score for run %d was not saved", self.last_run['run_id'])

    # --- Rendering hand-off ------------------------------------------------

    def snapshot(self):
        """Copies of everything a renderer needs for one frame."""
        state = self.state

        def copy_pool(pool):
            return [dict(e) for e in pool]

        buildings = []
        for b in state.buildings:
            building = dict(b)
            building['windows'] = [dict(w) for w in b['windows']]
            buildings.append(building)

        return {
            'game_state': state.game_state,
            'width': state.width,
            'height': state.height,
            'ground_y': state.ground_y,
            'score': state.score,
            'distance': math.floor(state.distance),
            'speed': state.speed,
            'energy_collected': state.energy_collected,
            'city_light_level': state.city_light_level,
            'game_time': state.game_time,
            'background_offset': state.background_offset,
            'cloud_offset': state.cloud_offset,
            'character': self.selected_character,
            'is_high_score': self.is_high_score,
            'player': dict(state.player),
            'obstacles': copy_pool(state.obstacles),
            'collectibles': copy_pool(state.collectibles),
            'particles': copy_pool(state.particles),
            'grass_tufts': copy_pool(state.grass_tufts),
            'pebbles': copy_pool(state.pebbles),
            'buildings': buildings,
            'clouds': copy_pool(state.clouds),
            'stars': copy_pool(state.stars),
        }
