import math

import numpy as np
import pygame
import pygame.gfxdraw

from .state import GameState

COLOR_SKY = ((26, 26, 46), (22, 33, 62), (15, 76, 117), (50, 130, 184), (255, 107, 107), (255, 167, 38))
COLOR_GROUND = (139, 69, 19)
COLOR_GRASS_TOP = (45, 80, 22)
COLOR_TEXT = (255, 255, 255)
COLOR_ACCENT = (255, 215, 0)
COLOR_WINDOW_LIT = (255, 230, 140)
COLOR_WINDOW_DARK = (30, 35, 45)
COLOR_OVERLAY = (0, 0, 0, 170)


class Renderer:
    """Draws `EnergyDash.snapshot()` dicts onto a pygame surface."""

    def __init__(self, width, height, surface=None):
        pygame.init()
        pygame.font.init()
        self.screen = surface if surface is not None else pygame.Surface((width, height))
        self.font_large = pygame.font.Font(None, 48)
        self.font_small = pygame.font.Font(None, 24)
        self._sky = None

    def resize(self, width, height, surface=None):
        self.screen = surface if surface is not None else pygame.Surface((width, height))
        self._sky = None

    def draw(self, snap, leaderboard=()):
        self._render_sky(snap)
        self._render_clouds(snap)
        self._render_buildings(snap)
        self._render_stars(snap)
        self._render_ground(snap)

        # Gameplay entities only while a run is on screen
        if snap['game_state'] in (GameState.PLAYING, GameState.GAME_OVER):
            self._render_grass(snap)
            self._render_pebbles(snap)
            self._render_obstacles(snap)
            self._render_collectibles(snap)
            self._render_particles(snap)
            self._render_player(snap)

        self._render_ui(snap)
        if snap['game_state'] is GameState.GAME_OVER:
            self._render_game_over(snap)
        elif snap['game_state'] in (GameState.LEADERBOARD, GameState.MENU):
            self._render_leaderboard(snap, leaderboard)
        return self.screen

    def to_array(self):
        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _render_sky(self, snap):
        w, h = self.screen.get_size()
        if self._sky is None or self._sky.get_size() != (w, h):
            # Cached vertical gradient
            self._sky = pygame.Surface((w, h))
            stops = len(COLOR_SKY) - 1
            for y in range(h):
                pos = y / max(1, h - 1) * stops
                i = min(int(pos), stops - 1)
                t = pos - i
                c1, c2 = COLOR_SKY[i], COLOR_SKY[i + 1]
                color = [int(c1[j] + (c2[j] - c1[j]) * t) for j in range(3)]
                pygame.draw.line(self._sky, color, (0, y), (w, y))
        self.screen.blit(self._sky, (0, 0))

    def _render_clouds(self, snap):
        for layer in ('wispy', 'back', 'mid', 'front'):
            for cloud in snap['clouds']:
                if cloud['layer'] != layer:
                    continue
                alpha = int(255 * cloud['opacity'] * 0.6)
                r = max(2, int(cloud['size'] * 0.4))
                x, y = int(cloud['x']), int(cloud['y'])
                for dx, dy, scale in ((0, 0, 1.0), (r, -r // 3, 0.8), (2 * r, 0, 0.9)):
                    pygame.gfxdraw.filled_circle(self.screen, x + dx, y + dy, int(r * scale), (255, 255, 255, alpha))

    def _render_buildings(self, snap):
        for b in snap['buildings']:
            rect = pygame.Rect(int(b['x']), int(b['y']), int(b['width']), int(b['height']))
            pygame.draw.rect(self.screen, b['color'], rect)
            for window in b['windows']:
                color = COLOR_WINDOW_LIT if window['lit'] else COLOR_WINDOW_DARK
                pygame.draw.rect(self.screen, color, (rect.x + int(window['x']), rect.y + int(window['y']), 8, 8))

    def _render_stars(self, snap):
        for star in snap['stars']:
            v = int(255 * max(0.0, min(1.0, star['brightness'])))
            size = max(1, int(star['size'] / 2))
            pygame.draw.circle(self.screen, (v, v, v), (int(star['x']), int(star['y'])), size)

    def _render_ground(self, snap):
        w, h = self.screen.get_size()
        ground_y = int(snap['ground_y'])
        pygame.draw.rect(self.screen, COLOR_GROUND, (0, ground_y, w, h - ground_y))
        pygame.draw.rect(self.screen, COLOR_GRASS_TOP, (0, ground_y, w, 8))
        # Scrolling dirt marks
        offset = int(snap['background_offset']) % 60
        for x in range(-offset, w, 60):
            pygame.draw.line(self.screen, (110, 55, 15), (x, ground_y + 30), (x + 20, ground_y + 30), 2)

    def _render_grass(self, snap):
        for g in snap['grass_tufts']:
            base_x, base_y = g['x'], g['y'] + 5
            for i in range(g['blades']):
                bx = base_x + i * g['width'] / max(1, g['blades'])
                sway = math.sin(g['sway_offset'] + i) * 2
                pygame.draw.line(self.screen, g['color'], (int(bx), int(base_y)), (int(bx + sway), int(base_y - g['height'])), 2)

    def _render_pebbles(self, snap):
        for p in snap['pebbles']:
            alpha = int(255 * p['opacity'])
            w = p['size'] * (1.4 if p['shape'] == 'oval' else 1.0)
            surf = pygame.Surface((max(1, int(w * 2)), max(1, int(p['size'] * 2))), pygame.SRCALPHA)
            pygame.draw.ellipse(surf, (*p['color'], alpha), surf.get_rect())
            self.screen.blit(surf, (int(p['x']), int(p['y'])))

    def _render_obstacles(self, snap):
        for obs in snap['obstacles']:
            rect = pygame.Rect(int(obs['x']), int(obs['y']), obs['width'], obs['height'])
            pygame.draw.rect(self.screen, obs['shadow'], rect.move(3, 3), border_radius=2)
            pygame.draw.rect(self.screen, obs['color'], rect, border_radius=2)
            pygame.draw.line(self.screen, obs['shadow'], (rect.centerx, rect.top), (rect.centerx, rect.top + rect.height // 3), 3)
            if obs['has_fragile_label']:
                label = self.font_small.render("FRAGILE", True, (200, 30, 30))
                label = pygame.transform.smoothscale(label, (max(1, rect.width - 4), max(1, rect.height // 4)))
                self.screen.blit(label, label.get_rect(center=rect.center))

    def _render_collectibles(self, snap):
        for c in snap['collectibles']:
            cx = int(c['x'] + c['width'] / 2)
            cy = int(c['y'] + c['height'] / 2)
            r = int(c['width'] / 2)
            pygame.gfxdraw.filled_circle(self.screen, cx, cy, r, (*c['color'], 60))
            pygame.gfxdraw.aacircle(self.screen, cx, cy, r // 2, c['color'])
            # Lightning bolt
            s = r / 2
            bolt = [(cx + s * 0.2, cy - s), (cx - s * 0.5, cy + s * 0.1), (cx, cy + s * 0.1),
                    (cx - s * 0.2, cy + s), (cx + s * 0.5, cy - s * 0.1), (cx, cy - s * 0.1)]
            pygame.gfxdraw.filled_polygon(self.screen, [(int(x), int(y)) for x, y in bolt], c['color'])

    def _render_particles(self, snap):
        for p in snap['particles']:
            ratio = max(0.0, p['life'] / p['max_life'])
            size = max(1, int(p['size'] * (0.5 + 0.5 * ratio)))
            color = (*p['color'], int(255 * ratio))
            pygame.gfxdraw.filled_circle(self.screen, int(p['x']), int(p['y']), size, color)

    def _render_player(self, snap):
        player = snap['player']
        if player['color'] is None:
            return
        bounce = 0 if not player['is_grounded'] else int(abs(math.sin(player['run_cycle'] * 0.5)) * 4)
        rect = pygame.Rect(int(player['x']), int(player['y']) - bounce, player['width'], player['height'])
        pygame.draw.rect(self.screen, player['color'], rect, border_radius=18)
        eye_y = rect.top + rect.height // 4
        pygame.draw.circle(self.screen, COLOR_TEXT, (rect.centerx + 12, eye_y), 7)
        pygame.draw.circle(self.screen, (0, 0, 0), (rect.centerx + 14, eye_y), 3)

    def _render_ui(self, snap):
        w, _ = self.screen.get_size()
        score_text = self.font_large.render(f"SCORE: {snap['score']}", True, COLOR_ACCENT)
        self.screen.blit(score_text, (20, 20))
        dist_text = self.font_small.render(f"DISTANCE: {snap['distance']}m", True, COLOR_TEXT)
        self.screen.blit(dist_text, (20, 64))
        speed_text = self.font_small.render(f"SPEED: {snap['speed']:.1f}", True, COLOR_TEXT)
        self.screen.blit(speed_text, (20, 86))

        # City power bar
        bar_w = 160
        pygame.draw.rect(self.screen, (50, 50, 80), (w - bar_w - 20, 24, bar_w, 12), border_radius=5)
        pygame.draw.rect(self.screen, COLOR_ACCENT, (w - bar_w - 20, 24, int(bar_w * snap['city_light_level']), 12), border_radius=5)
        label = self.font_small.render(f"CITY POWER {int(snap['city_light_level'] * 100)}%", True, COLOR_TEXT)
        self.screen.blit(label, label.get_rect(topright=(w - 20, 42)))

    def _render_overlay(self, title, lines):
        w, h = self.screen.get_size()
        overlay = pygame.Surface((w, h), pygame.SRCALPHA)
        overlay.fill(COLOR_OVERLAY)
        self.screen.blit(overlay, (0, 0))
        title_text = self.font_large.render(title, True, COLOR_ACCENT)
        self.screen.blit(title_text, title_text.get_rect(center=(w / 2, h * 0.2)))
        for i, line in enumerate(lines):
            text = self.font_small.render(line, True, COLOR_TEXT)
            self.screen.blit(text, text.get_rect(center=(w / 2, h * 0.2 + 50 + i * 24)))

    def _render_game_over(self, snap):
        lines = [f"FINAL SCORE: {snap['score']}", f"DISTANCE: {snap['distance']}m"]
        if snap['is_high_score']:
            lines.append("NEW HIGH SCORE! TYPE YOUR NAME AND PRESS ENTER")
        self._render_overlay("GAME OVER", lines)

    def _render_leaderboard(self, snap, leaderboard):
        lines = []
        for i in range(10):
            if i < len(leaderboard):
                entry = leaderboard[i]
                lines.append(f"{i + 1:>2}. {entry['name']:<16} {entry['score']:>8,}")
            else:
                lines.append(f"{i + 1:>2}. {'---':<16} {0:>8}")
        lines.append("")
        lines.append("PRESS SPACE OR TAP TO START")
        self._render_overlay("HIGH SCORES", lines)
