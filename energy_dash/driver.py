import logging
import time
from collections import deque

import pygame

logger = logging.getLogger(__name__)

# Entity counts above these are worth a warning
POOL_LIMITS = {
    'particles': 100,
    'obstacles': 20,
    'collectibles': 15,
    'grass_tufts': 50,
    'pebbles': 30,
}


class FrameDriver:
    """One simulation update followed by one render per display frame.

    Keeps rolling frame timings and logs a performance report every
    `report_every` frames.
    """

    def __init__(self, game, render_fn, fps=60, report_every=60, timer=time.perf_counter):
        self.game = game
        self.render_fn = render_fn
        self.fps = fps
        self.report_every = report_every
        self.timer = timer
        self.clock = pygame.time.Clock()

        self.frame_count = 0
        self.frame_times = deque(maxlen=60)
        self.update_time = 0.0
        self.render_time = 0.0
        self.max_update_time = 0.0
        self.max_render_time = 0.0
        self.measured_fps = 0
        self._last = None

    def frame(self):
        start = self.timer()
        self.game.update()
        mid = self.timer()
        self.render_fn(self.game)
        end = self.timer()

        self.update_time = (mid - start) * 1000
        self.render_time = (end - mid) * 1000
        self.max_update_time = max(self.max_update_time, self.update_time)
        self.max_render_time = max(self.max_render_time, self.render_time)

        if self._last is not None:
            self.frame_times.append((end - self._last) * 1000)
        self._last = end
        self.frame_count += 1

        if self.frame_count % self.report_every == 0:
            self._report()

    def tick(self):
        self.frame()
        if self.fps:
            self.clock.tick(self.fps)

    def object_counts(self):
        state = self.game.state
        return {name: len(getattr(state, name)) for name in POOL_LIMITS}

    def _report(self):
        if self.frame_times:
            average = sum(self.frame_times) / len(self.frame_times)
            self.measured_fps = round(1000 / average) if average > 0 else 0
            if self.measured_fps < 30:
                logger.warning("Low FPS detected: %dfps", self.measured_fps)
        if self.render_time > 16.67:
            logger.warning("High render time: %.2fms", self.render_time)
        if self.update_time > 8:
            logger.warning("High update time: %.2fms", self.update_time)
        for name, count in self.object_counts().items():
            if count > POOL_LIMITS[name]:
                logger.warning("High %s count: %d", name, count)
