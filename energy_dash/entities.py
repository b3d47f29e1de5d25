import math

from .config import BUILDING_COLORS, GRASS_COLORS, PEBBLE_COLORS

# Building depth layers: (max height, name, scroll speed, opacity)
DEPTH_LAYERS = (
    (150, 'background', 0.2, 0.6),
    (250, 'middle', 0.4, 0.8),
    (math.inf, 'foreground', 0.6, 1.0),
)
DEPTH_ORDER = {'background': 0, 'middle': 1, 'foreground': 2}

# Cloud layers: (count, x spacing, x jitter, y range, size range, speed range, opacity range, respawn jitter, respawn y, respawn size)
CLOUD_LAYERS = {
    'back': (6, 200, 100, (20, 140), (75, 135), (0.1, 0.25), (0.3, 0.55), 300, (20, 140), (50, 90)),
    'mid': (8, 180, 90, (30, 170), (60, 135), (0.2, 0.45), (0.5, 0.8), 250, (30, 170), (40, 90)),
    'front': (5, 250, 125, (25, 125), (68, 151), (0.3, 0.7), (0.6, 1.0), 400, (25, 125), (45, 100)),
    'wispy': (10, 150, 75, (15, 175), (38, 91), (0.15, 0.35), (0.2, 0.5), 200, (15, 175), (25, 60)),
}


def pick(rng, items):
    """Uniform catalog pick; an out-of-range draw is clamped to a valid index."""
    index = int(rng.random() * len(items))
    return items[min(max(index, 0), len(items) - 1)]


def make_player(cfg, ground_y, color=None):
    return {
        'x': cfg.player_x,
        'y': ground_y - cfg.player_height,
        'width': cfg.player_width,
        'height': cfg.player_height,
        'velocity_y': 0.0,
        'is_jumping': False,
        'is_grounded': True,
        'color': color,
        'run_cycle': 0.0,
    }


def make_obstacle(rng, kind, x, ground_y):
    return {
        'x': x,
        'y': ground_y - kind['height'],
        'width': kind['width'],
        'height': kind['height'],
        'type': kind['type'],
        'color': kind['color'],
        'shadow': kind['shadow'],
        'points': kind['points'],
        'has_fragile_label': rng.random() > 0.7,
    }


def make_collectible(rng, kind, x, ground_y, size=70):
    base_y = ground_y - 80 - rng.random() * 100
    return {
        'x': x,
        'y': base_y,
        'base_y': base_y,
        'width': size,
        'height': size,
        'type': kind['type'],
        'points': kind['points'],
        'color': kind['color'],
        'bob_offset': rng.random() * math.pi * 2,
    }


def make_grass_tuft(rng, x, ground_y):
    return {
        'x': x,
        'y': ground_y - 5,
        'width': 8 + rng.random() * 6,
        'height': 8 + rng.random() * 10,
        'sway_offset': rng.random() * math.pi * 2,
        'blades': int(3 + rng.random() * 4),
        'color': pick(rng, GRASS_COLORS),
    }


def make_pebble(rng, x, ground_y):
    # Embedded 15-40 px below the ground surface
    return {
        'x': x,
        'y': ground_y + 15 + rng.random() * 25,
        'size': 3 + rng.random() * 6,
        'color': pick(rng, PEBBLE_COLORS),
        'shape': 'round' if rng.random() > 0.5 else 'oval',
        'opacity': 0.3 + rng.random() * 0.4,
    }


def depth_for_height(height):
    for max_height, depth, speed, opacity in DEPTH_LAYERS:
        if height < max_height:
            return depth, speed, opacity
    return DEPTH_LAYERS[-1][1:]


def make_windows(rng, width, height, light_level, row_height=25, col_width=20):
    rows = int(height // row_height)
    cols = int(width // col_width)
    windows = []
    for row in range(1, rows):
        for col in range(1, cols):
            windows.append({
                'x': col * (width / cols) - 4,
                'y': row * (height / rows) - 4,
                'lit': rng.random() < light_level,
            })
    return windows


def make_building(rng, x, ground_y, light_level):
    height = 60 + rng.random() * 300
    width = 90 + rng.random() * 90
    depth, speed, opacity = depth_for_height(height)
    return {
        'x': x,
        'y': ground_y - height,
        'width': width,
        'height': height,
        'color': pick(rng, BUILDING_COLORS),
        'window_pattern': int(rng.random() * 3),
        'speed': speed,
        'depth': depth,
        'opacity': opacity,
        'windows': make_windows(rng, width, height, light_level),
    }


def recycle_building(rng, building, viewport_width, ground_y, light_level):
    """Re-roll a building that scrolled off the left edge and park it past the right edge."""
    building['x'] = viewport_width + rng.random() * 100
    building['height'] = 60 + rng.random() * 300
    building['y'] = ground_y - building['height']
    building['color'] = pick(rng, BUILDING_COLORS)
    building['depth'], building['speed'], building['opacity'] = depth_for_height(building['height'])
    building['windows'] = make_windows(rng, building['width'], building['height'], light_level)


def make_skyline(rng, count, ground_y, light_level):
    buildings = [make_building(rng, i * 120 + rng.random() * 60, ground_y, light_level) for i in range(count)]
    # Back-to-front draw order
    buildings.sort(key=lambda b: DEPTH_ORDER[b['depth']])
    return buildings


def make_clouds(rng):
    clouds = []
    for layer, layout in CLOUD_LAYERS.items():
        count, spacing, jitter, y_range, size_range, speed_range, opacity_range = layout[:7]
        for i in range(count):
            clouds.append({
                'x': i * spacing + rng.random() * jitter,
                'y': rng.uniform(*y_range),
                'size': rng.uniform(*size_range),
                'speed': rng.uniform(*speed_range),
                'opacity': rng.uniform(*opacity_range),
                'layer': layer,
            })
    return clouds


def recycle_cloud(rng, cloud, viewport_width):
    respawn_jitter, y_range, size_range = CLOUD_LAYERS[cloud['layer']][7:]
    cloud['x'] = viewport_width + rng.random() * respawn_jitter
    cloud['y'] = rng.uniform(*y_range)
    cloud['size'] = rng.uniform(*size_range)


def make_stars(rng, width, height):
    stars = []
    # Small twinkling stars, then brighter ones higher in the sky
    for count, sky_frac, brightness, twinkle in ((40, 0.6, (0.3, 1.0), (0.02, 0.05)), (20, 0.5, (0.6, 1.0), (0.01, 0.03))):
        for _ in range(count):
            stars.append({
                'x': rng.random() * width * 2,
                'y': rng.random() * height * sky_frac,
                'size': 2 + rng.random() * 3,
                'brightness': rng.uniform(*brightness),
                'twinkle_offset': rng.random() * math.pi * 2,
                'twinkle_speed': rng.uniform(*twinkle),
            })
    return stars


def make_collect_burst(rng, x, y):
    """15-25 mixed sparkle/orb/lightning particles around a collected pickup."""
    particles = []
    count = int(15 + rng.random() * 10)
    for _ in range(count):
        roll = rng.random()
        if roll < 0.4:
            life = 45 + rng.random() * 15
            p = {
                'x': x + (rng.random() - 0.5) * 20,
                'y': y + (rng.random() - 0.5) * 20,
                'velocity_x': (rng.random() - 0.5) * 8,
                'velocity_y': -rng.random() * 6 - 2,
                'color': pick(rng, ((255, 215, 0), (255, 255, 0), (255, 255, 255), (0, 255, 255))),
                'size': 2 + rng.random() * 2,
                'type': 'sparkle',
                'phase': rng.random() * math.pi * 2,
            }
        elif roll < 0.7:
            life = 60 + rng.random() * 20
            p = {
                'x': x + (rng.random() - 0.5) * 15,
                'y': y + (rng.random() - 0.5) * 15,
                'velocity_x': (rng.random() - 0.5) * 4,
                'velocity_y': -rng.random() * 4 - 1,
                'color': pick(rng, ((255, 255, 0), (255, 215, 0), (255, 255, 127))),
                'size': 4 + rng.random() * 4,
                'type': 'orb',
                'phase': rng.random() * math.pi * 2,
            }
        else:
            life = 30 + rng.random() * 10
            p = {
                'x': x + (rng.random() - 0.5) * 25,
                'y': y + (rng.random() - 0.5) * 25,
                'velocity_x': (rng.random() - 0.5) * 10,
                'velocity_y': -rng.random() * 5 - 3,
                'color': pick(rng, ((255, 165, 0), (255, 140, 0), (255, 179, 71))),
                'size': 1 + rng.random() * 3,
                'type': 'lightning',
                'phase': rng.random() * 10,
            }
        p['life'] = life
        p['max_life'] = life
        particles.append(p)
    return particles


