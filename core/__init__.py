from .models import (
    DictionaryEntry, Round, Statistics, Settings,
    GuessOutcome, OutcomeKind, Difficulty, Theme
)
from .interfaces import PersistenceAdapter, Romanizer
from .exceptions import (
    RomajaError, LoadError, NoEntriesForDifficulty,
    CorruptPersistedState, RoundResolvedError
)
from .engine import RoundEngine
from .romanizer import HangulRomanizer
from .utils import normalize, count_syllables
from .config import MAX_ATTEMPTS, ROMANIZATION_SCHEMES

__all__ = [
    'DictionaryEntry', 'Round', 'Statistics', 'Settings',
    'GuessOutcome', 'OutcomeKind', 'Difficulty', 'Theme',
    'PersistenceAdapter', 'Romanizer',
    'RomajaError', 'LoadError', 'NoEntriesForDifficulty',
    'CorruptPersistedState', 'RoundResolvedError',
    'RoundEngine', 'HangulRomanizer',
    'normalize', 'count_syllables',
    'MAX_ATTEMPTS', 'ROMANIZATION_SCHEMES'
]
