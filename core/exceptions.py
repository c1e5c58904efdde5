"""Exceptions raised by the romaja core."""


class RomajaError(Exception):
    """Base class for romaja errors."""


class LoadError(RomajaError):
    """The dictionary could not be fetched or parsed."""


class NoEntriesForDifficulty(RomajaError):
    """The difficulty filter left no dictionary entries to pick from."""

    def __init__(self, difficulty: str):
        super().__init__(f"No dictionary entries for difficulty '{difficulty}'")
        self.difficulty = difficulty


class CorruptPersistedState(RomajaError):
    """A persisted round could not be parsed."""


class RoundResolvedError(RomajaError):
    """A guess was submitted to a round that is already resolved."""
