import pytest

from energy_dash import physics
from energy_dash.state import GameState


def test_jump_ignored_outside_a_run(game):
    assert game.game_state is GameState.LEADERBOARD
    assert not physics.jump(game.state)
    assert game.state.player['velocity_y'] == 0
    assert game.state.player['is_grounded']


def test_jump_ignored_while_airborne(game):
    game.start()
    assert physics.jump(game.state)
    physics.update_player(game.state)
    velocity = game.state.player['velocity_y']
    assert not physics.jump(game.state)
    assert game.state.player['velocity_y'] == velocity


def test_jump_arc_lands_exactly_on_ground(game):
    game.start()
    state = game.state
    player = state.player
    cfg = game.cfg

    assert physics.jump(state)
    assert player['velocity_y'] == cfg.jump_power
    assert player['is_jumping'] and not player['is_grounded']

    expected_velocity = cfg.jump_power
    for _ in range(200):
        physics.update_player(state)
        assert player['y'] <= state.resting_y
        if player['is_grounded']:
            break
        expected_velocity += cfg.gravity
        assert player['velocity_y'] == pytest.approx(expected_velocity)
    else:
        pytest.fail("player never landed")

    assert player['y'] == state.resting_y
    assert player['velocity_y'] == 0
    assert not player['is_jumping']


def test_distance_uses_speed_before_ramp(game):
    game.start()
    state = game.state
    state.game_time = 1000
    speed_before = state.speed
    physics.update_speed(state)
    assert state.distance == pytest.approx(speed_before * 0.1)
    assert state.speed == pytest.approx(game.cfg.base_speed + 1000 * game.cfg.speed_gain)


def test_speed_cap(make_game):
    game = make_game(max_speed=7.0)
    game.start()
    game.state.game_time = 10 ** 6
    physics.update_speed(game.state)
    assert game.state.speed == 7.0


def test_scroll_pool_removes_only_fully_offscreen():
    pool = [{'x': 5, 'width': 10}, {'x': -5, 'width': 10}, {'x': -6, 'width': 10}, {'x': 100, 'width': 10}]
    physics.scroll_pool(pool, 5)
    # Right edge exactly at 0 is still on screen
    assert [e['x'] for e in pool] == [0, -10, 95]


def test_scroll_pool_with_size_extent():
    pebbles = [{'x': 2, 'size': 3}, {'x': 1, 'size': 3}]
    physics.scroll_pool(pebbles, 4.5, extent='size')
    assert [p['x'] for p in pebbles] == [-2.5]


def test_particles_expire_when_life_runs_out():
    particles = [
        {'x': 0, 'y': 0, 'velocity_x': 1, 'velocity_y': 0, 'life': 1, 'max_life': 1, 'type': 'sparkle', 'phase': 0},
        {'x': 0, 'y': 0, 'velocity_x': 1, 'velocity_y': 0, 'life': 3, 'max_life': 3, 'type': 'orb', 'phase': 0},
    ]
    physics.update_particles(particles)
    assert len(particles) == 1
    assert particles[0]['type'] == 'orb'
    assert particles[0]['velocity_y'] == pytest.approx(0.1)
    physics.update_particles(particles)
    physics.update_particles(particles)
    assert particles == []


def test_buildings_recycle_past_right_edge(game):
    state = game.state
    building = state.buildings[0]
    building['x'] = -building['width'] - 0.01
    physics.update_backdrop(state)
    assert building['x'] >= state.width
    assert building['y'] == pytest.approx(state.ground_y - building['height'])
    assert all(not w['lit'] for w in building['windows'])


def test_clouds_recycle_past_right_edge(game):
    state = game.state
    cloud = state.clouds[0]
    cloud['x'] = -cloud['size'] * 2 - 0.01
    physics.update_backdrop(state)
    assert cloud['x'] >= state.width
