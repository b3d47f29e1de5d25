import math

import pytest

from energy_dash import spawner
from energy_dash.config import CHARACTERS, COLLECTIBLE_TYPES, GameConfig
from energy_dash.entities import make_collectible, make_obstacle
from energy_dash.game import EnergyDash
from energy_dash.scores import ScoreStore, make_entry
from energy_dash.state import GameState


def crash(game):
    """Drop a box right on top of the player and run one frame."""
    state = game.state
    kind = {'type': 'large_box', 'width': 55, 'height': 50, 'color': (0, 0, 0), 'shadow': (0, 0, 0), 'points': 12}
    state.obstacles.append(make_obstacle(state.rng, kind, state.player['x'] + 10, state.ground_y))
    game.update()
    assert game.game_state is GameState.GAME_OVER


def fill_leaderboard(store, score=10_000):
    for i in range(10):
        store.save(make_entry(f'pro{i}', 'Dave', score, 999))
    store.saved.clear()


def test_starts_on_leaderboard(game):
    assert game.game_state is GameState.LEADERBOARD
    assert game.score == 0
    assert game.distance == 0


def test_nothing_spawns_on_idle_screens(game):
    for show in (game.show_leaderboard, game.show_menu):
        show()
        skyline = [b['x'] for b in game.state.buildings]
        for _ in range(400):
            game.update()
        state = game.state
        assert state.obstacles == [] and state.collectibles == []
        assert state.grass_tufts == [] and state.pebbles == []
        assert (state.obstacle_timer, state.collectible_timer, state.grass_timer, state.pebble_timer) == (0, 0, 0, 0)
        assert state.score == 0
        assert [b['x'] for b in state.buildings] != skyline


def test_press_from_idle_starts_a_run(game):
    game.press()
    assert game.game_state is GameState.LEADERBOARD
    game.update()
    assert game.game_state is GameState.PLAYING
    assert game.score == 1


def test_press_from_menu_starts_a_run(game):
    game.show_menu()
    assert game.game_state is GameState.MENU
    game.press()
    game.update()
    assert game.game_state is GameState.PLAYING


def test_jump_press_is_applied_at_next_update(game):
    game.start()
    game.press()
    assert game.state.player['velocity_y'] == 0
    game.update()
    assert game.state.player['velocity_y'] == pytest.approx(game.cfg.jump_power + game.cfg.gravity)
    assert not game.state.player['is_grounded']


def test_survival_scoring_and_distance(game):
    game.start()
    assert game.score == 0 and game.distance == 0

    expected_distance = 0.0
    ticks = 60
    for _ in range(ticks):
        expected_distance += game.speed * 0.1
        game.update()
        assert game.state.player['y'] <= game.state.resting_y

    assert game.state.obstacles == [] and game.state.collectibles == []
    assert game.score == ticks
    assert game.distance == pytest.approx(expected_distance)
    assert game.speed == pytest.approx(game.cfg.base_speed + ticks * game.cfg.speed_gain)


def test_obstacle_removed_exactly_when_fully_offscreen(make_game):
    game = make_game(
        player_x=-5000, base_speed=6.3, speed_gain=0,
        obstacle_interval=10 ** 6, obstacle_interval_floor=10 ** 6,
    )
    game.start()
    obstacle = spawner.spawn_obstacle(game.state)
    ticks_needed = math.ceil((game.state.width + obstacle['width']) / game.speed)

    for tick in range(1, ticks_needed + 1):
        game.update()
        still_there = any(o is obstacle for o in game.state.obstacles)
        if tick < ticks_needed:
            assert still_there, f"removed early at tick {tick}"
        else:
            assert not still_there
            assert obstacle['x'] + obstacle['width'] < 0


def test_collision_ends_run_and_freezes_counters(game):
    game.start()
    for _ in range(10):
        game.update()
    crash(game)

    score, distance = game.score, game.distance
    positions = [o['x'] for o in game.state.obstacles]
    building_x = game.state.buildings[0]['x']
    for _ in range(30):
        game.update()

    assert game.score == score
    assert game.distance == distance
    assert [o['x'] for o in game.state.obstacles] == positions
    # Backdrop keeps moving
    assert game.state.buildings[0]['x'] != building_x


def test_press_after_game_over_does_nothing(game):
    game.start()
    crash(game)
    game.press()
    game.update()
    assert game.game_state is GameState.GAME_OVER


def test_collecting_energy(game):
    game.start()
    state = game.state
    kind = {'type': 'gold_energy', 'points': 100, 'color': (255, 215, 0), 'rarity': 0.1}
    collectible = make_collectible(state.rng, kind, state.player['x'] + 10, state.ground_y)
    # Park it at the player's chest height
    collectible['base_y'] = state.player['y'] + 20
    state.collectibles.append(collectible)

    game.update()
    assert state.collectibles == []
    assert game.score == 1 + 100
    assert state.energy_collected == 100
    assert game.city_light_level == pytest.approx(0.4)
    assert 15 <= len(state.particles) <= 25


def test_high_score_requires_a_name(game, store):
    game.start()
    crash(game)
    assert game.is_high_score

    assert not game.confirm_save("   ")
    assert game.game_state is GameState.GAME_OVER
    assert store.saved == []

    assert game.confirm_save("  Ada ")
    assert game.game_state is GameState.LEADERBOARD
    assert store.saved[0]['name'] == 'Ada'
    assert store.saved[0]['character'] == 'Dave'
    assert store.saved[0]['score'] == game.score


def test_high_score_waits_for_confirmation(game, clock, store):
    game.start()
    crash(game)
    clock.advance(60)
    game.update()
    assert game.game_state is GameState.GAME_OVER
    assert store.saved == []


def test_regular_score_auto_saves_anonymously(game, clock, store):
    fill_leaderboard(store)
    game.start()
    crash(game)
    assert not game.is_high_score
    assert not game.confirm_save("Ada")

    clock.advance(1.9)
    game.update()
    assert game.game_state is GameState.GAME_OVER

    clock.advance(0.2)
    game.update()
    assert game.game_state is GameState.LEADERBOARD
    assert len(store.saved) == 1
    assert store.saved[0]['name'] == 'Anonymous'
    assert store.saved[0]['character'] == 'Player'
    assert len(store.load()) == 10


def test_new_run_cancels_pending_auto_save(game, clock, store):
    fill_leaderboard(store)
    game.start()
    crash(game)
    game.start()

    clock.advance(5)
    game.update()
    assert game.game_state is GameState.PLAYING
    assert store.saved == []


def test_start_is_refused_mid_run(game):
    game.start()
    run_id = game.state.run_id
    assert not game.start()
    assert game.state.run_id == run_id


def test_character_selection(game):
    game.select_character('mel')
    game.start()
    assert game.state.player['color'] == CHARACTERS['mel']['color']
    assert game.character_label == 'Mel'

    with pytest.raises(KeyError):
        game.select_character('nobody')


def test_no_character_means_no_sprite(game, store):
    game.select_character(None)
    game.start()
    assert game.state.player['color'] is None
    crash(game)
    game.confirm_save('Ada')
    assert store.saved[0]['character'] == 'Player'


def test_same_seed_same_run(clock, store):
    a = EnergyDash(seed=42, store=store, clock=clock)
    b = EnergyDash(seed=42, store=store, clock=clock)
    for g in (a, b):
        g.start()
        for _ in range(400):
            g.update()
    assert a.score == b.score
    assert [o['x'] for o in a.state.obstacles] == [o['x'] for o in b.state.obstacles]
    assert [o['type'] for o in a.state.obstacles] == [o['type'] for o in b.state.obstacles]


def test_resize_keeps_player_on_ground(game):
    game.start()
    game.resize(1024, 700)
    assert game.state.ground_y == 600
    assert game.state.player['y'] == 600 - game.state.player['height']


def test_snapshot_is_detached(game):
    game.start()
    snap = game.snapshot()
    snap['player']['y'] = -999
    snap['buildings'][0]['windows'][0]['lit'] = True
    assert game.state.player['y'] != -999
    assert snap['game_state'] is GameState.PLAYING
    assert snap['score'] == 0


def test_resize_moves_ground_entities_with_the_ground(game):
    game.start()
    state = game.state
    kind = {'type': 'small_box', 'width': 45, 'height': 40, 'color': (0, 0, 0), 'shadow': (0, 0, 0), 'points': 10}
    state.obstacles.append(make_obstacle(state.rng, kind, 600, state.ground_y))
    state.collectibles.append(make_collectible(state.rng, COLLECTIBLE_TYPES[0], 600, state.ground_y))
    hover = state.ground_y - state.collectibles[0]['base_y']

    game.resize(800, 400)
    assert state.ground_y == 300
    assert state.obstacles[0]['y'] + state.obstacles[0]['height'] == 300
    assert state.ground_y - state.collectibles[0]['base_y'] == pytest.approx(hover)
    for building in state.buildings:
        assert building['y'] + building['height'] == pytest.approx(300)


def test_unreadable_scores_do_not_break_game_over(tmp_path, clock):
    path = tmp_path / 'scores.json'
    path.write_text('{"energyDashScores": [{"name": "x", "score": NaN, "distance": 1}]}')
    game = EnergyDash(GameConfig(), seed=0, store=ScoreStore(str(path)), clock=clock)
    game.start()
    crash(game)
    assert game.is_high_score
