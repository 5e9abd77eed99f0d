"""
Local timestamp store for NeonCalc
Remembers roughly when each history entry was first seen on this machine

The history service only returns (expression, result) pairs, so the client
keeps its own "expression=result" -> first-seen time map in a JSON file.
Best effort: file problems are logged and otherwise ignored.
"""
import json
import logging
import time

import config

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def entry_key(expression, result):
    return f"{expression}={result}"


class LocalTimestampStore:
    def __init__(self, path=config.TIMESTAMPS_PATH, retention_days=config.HISTORY_RETENTION_DAYS):
        self.path = path
        self.retention_days = retention_days

    def _load(self):
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable timestamp file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def _save(self, data):
        try:
            with open(self.path, "w") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("Could not write timestamp file %s: %s", self.path, e)

    def _prune(self, data, now):
        cutoff = now - self.retention_days * SECONDS_PER_DAY
        return {key: ts for key, ts in data.items()
                if isinstance(ts, (int, float)) and ts >= cutoff}

    def record_all(self, entries, now=None):
        """Record many (expression, result) pairs with a single write"""
        now = time.time() if now is None else now
        data = self._prune(self._load(), now)
        for expression, result in entries:
            key = entry_key(expression, result)
            data[key] = min(data.get(key, now), now)
        self._save(data)
        return data

    def clear(self):
        self._save({})
