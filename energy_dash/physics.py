import math

from .entities import recycle_building, recycle_cloud
from .state import GameState

# Per-type particle physics: (gravity, horizontal drag, phase step)
PARTICLE_PHYSICS = {
    'sparkle': (0.15, 0.98, 0.2),
    'orb': (0.1, 0.99, 0.15),
    'lightning': (0.25, 1.0, 0.3),
}
DEFAULT_PARTICLE_PHYSICS = (0.2, 1.0, 0.0)


def jump(state):
    """Launch the player if grounded mid-run. Returns True when the jump happened."""
    player = state.player
    if state.game_state is not GameState.PLAYING or not player['is_grounded']:
        return False
    player['velocity_y'] = state.cfg.jump_power
    player['is_jumping'] = True
    player['is_grounded'] = False
    return True


def update_player(state):
    player = state.player
    player['velocity_y'] += state.cfg.gravity
    player['y'] += player['velocity_y']

    # Ground collision
    if player['y'] >= state.resting_y:
        player['y'] = state.resting_y
        player['velocity_y'] = 0.0
        player['is_jumping'] = False
        player['is_grounded'] = True


def update_speed(state):
    """Accumulate distance at the current speed, then ramp speed with game time."""
    cfg = state.cfg
    state.distance += state.speed * cfg.distance_factor
    speed = cfg.base_speed + state.game_time * cfg.speed_gain
    if cfg.max_speed is not None:
        speed = min(speed, cfg.max_speed)
    state.speed = speed

    state.background_offset += state.speed * 0.3
    state.cloud_offset += state.speed * 0.1
    state.player['run_cycle'] += state.speed * 0.2


def scroll_pool(pool, dx, extent='width'):
    """Move every entity left by dx and drop those fully past the left edge."""
    for i in range(len(pool) - 1, -1, -1):
        entity = pool[i]
        entity['x'] -= dx
        if entity['x'] + entity[extent] < 0:
            del pool[i]


def bob_collectible(collectible, cfg):
    collectible['bob_offset'] += cfg.bob_speed
    collectible['y'] = collectible['base_y'] + math.sin(collectible['bob_offset']) * cfg.bob_amplitude


def update_particles(particles):
    for i in range(len(particles) - 1, -1, -1):
        p = particles[i]
        p['x'] += p['velocity_x']
        p['y'] += p['velocity_y']

        gravity, drag, phase_step = PARTICLE_PHYSICS.get(p['type'], DEFAULT_PARTICLE_PHYSICS)
        p['velocity_y'] += gravity
        if p['type'] == 'lightning':
            # Zig-zag sideways drift
            p['velocity_x'] += math.sin(p['phase']) * 0.5
        else:
            p['velocity_x'] *= drag
        p['phase'] += phase_step

        p['life'] -= 1
        if p['life'] <= 0:
            del particles[i]


def update_grass(state):
    for grass in state.grass_tufts:
        grass['sway_offset'] += 0.02
    scroll_pool(state.grass_tufts, state.speed)


def update_backdrop(state):
    """Parallax layers that keep moving in every game state."""
    rng = state.rng
    for building in state.buildings:
        building['x'] -= building['speed'] * 0.5
        if building['x'] + building['width'] < 0:
            recycle_building(rng, building, state.width, state.ground_y, state.city_light_level)

    for cloud in state.clouds:
        cloud['x'] -= cloud['speed'] * 0.3
        if cloud['x'] + cloud['size'] * 2 < 0:
            recycle_cloud(rng, cloud, state.width)


def update_stars(state):
    for star in state.stars:
        star['brightness'] = 0.3 + 0.7 * (0.5 + 0.5 * math.sin(state.game_time * 0.002 + star['x'] * 0.01))
