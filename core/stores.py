"""Persisted statistics and settings."""

import logging

from .config import STATISTICS_KEY, SETTINGS_KEY
from .interfaces import PersistenceAdapter
from .models import Statistics, Settings, Difficulty, Theme

logger = logging.getLogger(__name__)


class StatisticsStore:
    """Reads and writes the four statistics counters as one value."""

    def __init__(self, storage: PersistenceAdapter, user_id: str = "default"):
        self.storage = storage
        self.user_id = user_id

    def load(self) -> Statistics:
        data = self.storage.get(STATISTICS_KEY, self.user_id)
        if data is None:
            return Statistics()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed statistics for {self.user_id}: {data!r}")
            return Statistics()
        counters = {}
        for field in Statistics.FIELDS:
            value = data.get(field, 0)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                logger.warning(f"Resetting invalid {field} for {self.user_id}: {value!r}")
                value = 0
            counters[field] = value
        return Statistics(**counters)

    def record_outcome(self, is_correct: bool) -> Statistics:
        """Apply one resolved round and write all counters back together."""
        stats = self.load().with_outcome(is_correct)
        self.storage.set(STATISTICS_KEY, stats.to_dict(), self.user_id)
        return stats

    def reset(self) -> None:
        self.storage.remove(STATISTICS_KEY, self.user_id)


class SettingsStore:
    """User settings, persisted independently of rounds and statistics."""

    def __init__(self, storage: PersistenceAdapter, user_id: str = "default"):
        self.storage = storage
        self.user_id = user_id

    def load(self) -> Settings:
        return Settings.from_dict(self.storage.get(SETTINGS_KEY, self.user_id))

    def update(self, difficulty: str = None, theme: str = None) -> Settings:
        """Change difficulty and/or theme. Raises ValueError for unknown values."""
        settings = self.load()
        if difficulty is not None:
            settings.difficulty = Difficulty(difficulty)
        if theme is not None:
            settings.theme = Theme(theme)
        self._save(settings)
        return settings

    def dismiss_help(self) -> Settings:
        """Remember that the player asked not to see the help text again."""
        settings = self.load()
        settings.help_dismissed = True
        self._save(settings)
        return settings

    def _save(self, settings: Settings) -> None:
        self.storage.set(SETTINGS_KEY, settings.to_dict(), self.user_id)
