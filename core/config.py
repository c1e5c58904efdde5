"""Configuration constants for romaja application."""

import json
import os

MAX_ATTEMPTS = 3

# Hangul syllable block
HANGUL_SYLLABLE_FIRST = 0xAC00
HANGUL_SYLLABLE_LAST = 0xD7AF

# Difficulty pools by syllable count
EASY_SYLLABLE_COUNT = 2       # easy: exactly this many syllables
HARD_MIN_SYLLABLE_COUNT = 3   # hard: at least this many syllables

DIFFICULTIES = ('easy', 'normal', 'hard')
THEMES = ('light', 'dark', 'auto')
DEFAULT_DIFFICULTY = 'normal'
DEFAULT_THEME = 'auto'

# First scheme is the canonical answer shown on failure
ROMANIZATION_SCHEMES = ('revised', 'mccune-reischauer')

# Persistence keys
ROUND_KEY = 'round'
STATISTICS_KEY = 'statistics'
SETTINGS_KEY = 'settings'

DICTIONARY_FETCH_TIMEOUT = 10  # seconds
DEFAULT_CONFIG_FILE = os.path.expanduser('~/.config/romaja/config.json')
DEFAULT_STATE_DIR = os.path.expanduser('~/.config/romaja')


def load_config(config_file: str = None) -> dict:
    """Load the optional JSON config file. Returns {} if it does not exist."""
    config_file = config_file or DEFAULT_CONFIG_FILE
    if not os.path.exists(config_file):
        return {}
    with open(config_file, 'r', encoding='utf-8') as f:
        return json.load(f)
