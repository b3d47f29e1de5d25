from .config import COLLECTIBLE_TYPES, OBSTACLE_TYPES
from .entities import make_collectible, make_grass_tuft, make_obstacle, make_pebble, pick


def obstacle_interval(cfg, game_time):
    """Ticks between obstacles; shrinks with game time down to a floor."""
    return max(cfg.obstacle_interval - game_time * cfg.obstacle_interval_decay, cfg.obstacle_interval_floor)


def choose_obstacle_type(rng, types=OBSTACLE_TYPES):
    return pick(rng, types)


def choose_collectible_type(rng, types=COLLECTIBLE_TYPES):
    """Rarity-weighted pick by walking the cumulative weights.

    Falls back to the first entry if float error lets the walk run off the end.
    """
    remaining = rng.random() * sum(kind['rarity'] for kind in types)
    for kind in types:
        if remaining <= kind['rarity']:
            return kind
        remaining -= kind['rarity']
    return types[0]


def spawn_obstacle(state):
    kind = choose_obstacle_type(state.rng)
    obstacle = make_obstacle(state.rng, kind, state.width, state.ground_y)
    state.obstacles.append(obstacle)
    return obstacle


def spawn_collectible(state):
    kind = choose_collectible_type(state.rng)
    collectible = make_collectible(state.rng, kind, state.width, state.ground_y, state.cfg.collectible_size)
    state.collectibles.append(collectible)
    return collectible


def spawn_tick(state):
    """Advance every spawn timer by one tick and create whatever comes due."""
    cfg = state.cfg
    rng = state.rng

    state.obstacle_timer += 1
    if state.obstacle_timer > obstacle_interval(cfg, state.game_time):
        spawn_obstacle(state)
        state.obstacle_timer = 0

    # Fixed interval, but only some expiries produce a pickup
    state.collectible_timer += 1
    if state.collectible_timer > cfg.collectible_interval:
        if rng.random() < cfg.collectible_chance:
            spawn_collectible(state)
        state.collectible_timer = 0

    low, high = cfg.grass_interval
    state.grass_timer += 1
    if state.grass_timer > low + rng.random() * (high - low):
        if rng.random() < cfg.grass_chance:
            state.grass_tufts.append(make_grass_tuft(rng, state.width, state.ground_y))
        state.grass_timer = 0

    low, high = cfg.pebble_interval
    state.pebble_timer += 1
    if state.pebble_timer > low + rng.random() * (high - low):
        if rng.random() < cfg.pebble_chance:
            state.pebbles.append(make_pebble(rng, state.width, state.ground_y))
        state.pebble_timer = 0
