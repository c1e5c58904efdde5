"""Dictionary loading and difficulty pools."""

import logging
from pathlib import Path

import requests

from .config import DICTIONARY_FETCH_TIMEOUT, EASY_SYLLABLE_COUNT, HARD_MIN_SYLLABLE_COUNT
from .exceptions import LoadError
from .models import DictionaryEntry, Difficulty
from .utils import count_syllables

logger = logging.getLogger(__name__)

DEFAULT_DICTIONARY_PATH = Path(__file__).parent / 'data' / 'dict.csv'


def _clean_definition(definition: str) -> str:
    definition = definition.strip()
    if len(definition) >= 2 and definition.startswith('"') and definition.endswith('"'):
        definition = definition[1:-1].strip()
    return definition[:1].upper() + definition[1:]


def parse_dictionary(text: str) -> list[DictionaryEntry]:
    """Parse `word,definition` lines into dictionary entries.

    Each line is split on its first comma only. A definition wrapped in one
    pair of double quotes is unwrapped, and its first letter is capitalized.
    A line with no comma becomes a word with an empty definition.
    """
    entries = []
    for line in text.lstrip('\ufeff').splitlines():
        if not line.strip():
            continue
        word, _, definition = line.partition(',')
        word = word.strip()
        if not word:
            continue
        entries.append(DictionaryEntry(word, _clean_definition(definition)))
    return entries


def load_dictionary(path: str | Path = None) -> list[DictionaryEntry]:
    """Load the dictionary from a local CSV file (the bundled one by default)."""
    path = Path(path) if path else DEFAULT_DICTIONARY_PATH
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Failed to load dictionary from {path}: {e}") from e
    entries = parse_dictionary(text)
    if not entries:
        raise LoadError(f"Dictionary at {path} has no entries")
    logger.info(f"Loaded {len(entries)} dictionary entries from {path}")
    return entries


def fetch_dictionary(url: str, timeout: float = DICTIONARY_FETCH_TIMEOUT) -> list[DictionaryEntry]:
    """Fetch the dictionary over HTTP. No retries."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise LoadError(f"Failed to fetch dictionary from {url}: {e}") from e
    try:
        text = response.content.decode('utf-8')
    except UnicodeDecodeError as e:
        raise LoadError(f"Dictionary at {url} is not valid UTF-8: {e}") from e
    entries = parse_dictionary(text)
    if not entries:
        raise LoadError(f"Dictionary at {url} has no entries")
    logger.info(f"Fetched {len(entries)} dictionary entries from {url}")
    return entries


def load_dictionary_source(source: str = None) -> list[DictionaryEntry]:
    """Load from an http(s) URL or a local path."""
    if source and source.startswith(('http://', 'https://')):
        return fetch_dictionary(source)
    return load_dictionary(source)


def filter_by_difficulty(entries: list[DictionaryEntry], difficulty) -> list[DictionaryEntry]:
    """Select the pool of entries for a difficulty.

    easy: exactly two syllables. hard: three or more. normal: everything.
    """
    difficulty = Difficulty(difficulty)
    if difficulty == Difficulty.EASY:
        return [e for e in entries if count_syllables(e.word) == EASY_SYLLABLE_COUNT]
    if difficulty == Difficulty.HARD:
        return [e for e in entries if count_syllables(e.word) >= HARD_MIN_SYLLABLE_COUNT]
    return list(entries)
