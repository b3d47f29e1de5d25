import json
import logging
import math
import os
from datetime import date

logger = logging.getLogger(__name__)

STORAGE_KEY = 'energyDashScores'


def make_entry(name, character, score, distance, day=None):
    return {
        'name': name,
        'character': character,
        'score': int(score),
        'distance': int(distance),
        'date': (day or date.today()).strftime('%m/%d/%Y'),
    }


def _clean(raw):
    if not isinstance(raw, list):
        return None
    entries = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        score = item.get('score')
        distance = item.get('distance')
        # json accepts NaN and Infinity as floats
        if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
            continue
        if not isinstance(distance, (int, float)) or not math.isfinite(distance):
            distance = 0
        entries.append({
            'name': str(item.get('name', 'Anonymous')),
            'character': str(item.get('character', 'Player')),
            'score': int(score),
            'distance': int(distance),
            'date': str(item.get('date', '')),
        })
    return entries


class ScoreStore:
    """Top-N leaderboard, sorted by score descending.

    The whole list is read and written as one JSON object under STORAGE_KEY.
    With no path the list lives in memory only.
    """

    def __init__(self, path=None, capacity=10):
        self.path = path
        self.capacity = capacity
        self._memory = []

    def load(self):
        if self.path is None:
            return [dict(e) for e in self._memory]
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read score file %s, starting empty: %s", self.path, e)
            return []

        raw = payload.get(STORAGE_KEY) if isinstance(payload, dict) else payload
        entries = _clean(raw)
        if entries is None:
            logger.warning("Score file %s has no score list, starting empty", self.path)
            return []
        # Re-establish the ordering invariant for hand-edited files
        entries.sort(key=lambda e: e['score'], reverse=True)
        return entries[:self.capacity]

    def _write(self, entries):
        if self.path is None:
            self._memory = [dict(e) for e in entries]
            return
        tmp_path = self.path + '.tmp'
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                json.dump({STORAGE_KEY: entries}, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            logger.error("Failed to write score file %s", self.path)
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

    def save(self, entry):
        """Insert `entry`, keep the best `capacity` scores and return the new list.

        Sorting is stable, so an existing entry stays ahead of a new equal score.
        """
        entries = self.load()
        entries.append(dict(entry))
        entries.sort(key=lambda e: e['score'], reverse=True)
        entries = entries[:self.capacity]
        self._write(entries)
        logger.info("Saved score %d for %s", entry['score'], entry['name'])
        return entries

    def is_high_score(self, score):
        entries = self.load()
        if len(entries) < self.capacity:
            return True
        return score > entries[-1]['score']

    def clear(self):
        self._write([])
