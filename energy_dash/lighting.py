import math


def light_level_for(energy, cfg):
    """Step function: +light_step per light_step_energy collected, capped."""
    return min(cfg.max_light_level, (energy // cfg.light_step_energy) * cfg.light_step)


def light_buildings(buildings, target):
    """Light unlit windows until each building reaches `target`; never turns one off."""
    if target <= 0:
        return
    for building in buildings:
        windows = building['windows']
        total = len(windows)
        if total == 0:
            continue
        current = sum(1 for w in windows if w['lit']) / total
        if current >= target:
            continue
        to_light = math.ceil((target - current) * total)
        for window in windows:
            if to_light <= 0:
                break
            if not window['lit']:
                window['lit'] = True
                to_light -= 1


def add_energy(state, points):
    state.energy_collected += points
    level = light_level_for(state.energy_collected, state.cfg)
    # Monotonic within a run
    state.city_light_level = max(state.city_light_level, level)
    light_buildings(state.buildings, state.city_light_level)


def reset_building_lights(state):
    rng = state.rng
    for building in state.buildings:
        for window in building['windows']:
            window['lit'] = rng.random() < state.city_light_level
