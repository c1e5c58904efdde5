"""File-based storage implementation."""

import json
import logging
import os

from core.config import DEFAULT_STATE_DIR
from core.interfaces import PersistenceAdapter

logger = logging.getLogger(__name__)


class FileStorage(PersistenceAdapter):
    """Keeps each user's keys in one JSON document."""

    def __init__(self, state_dir: str = None):
        self.state_dir = state_dir or os.environ.get('ROMAJA_STATE_DIR') or DEFAULT_STATE_DIR

    def _get_state_file(self, user_id: str) -> str:
        """Get state file path for a user."""
        if user_id == "default":
            return os.path.join(self.state_dir, 'romaja_state.json')
        return os.path.join(self.state_dir, f'romaja_state_{user_id}.json')

    def _load(self, user_id: str) -> dict:
        state_file = self._get_state_file(user_id)
        if not os.path.exists(state_file):
            return {}
        try:
            with open(state_file, 'r', encoding='utf-8') as f:
                state = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable state file {state_file}, starting empty: {e}")
            return {}
        if not isinstance(state, dict):
            logger.warning(f"State file {state_file} is not an object, starting empty")
            return {}
        return state

    def _save(self, state: dict, user_id: str) -> None:
        os.makedirs(self.state_dir, exist_ok=True)
        state_file = self._get_state_file(user_id)
        tmp_file = state_file + '.tmp'
        with open(tmp_file, 'w', encoding='utf-8') as f:
            json.dump(state, f, indent=2, ensure_ascii=False)
        os.replace(tmp_file, state_file)

    def get(self, key: str, user_id: str = "default"):
        return self._load(user_id).get(key)

    def set(self, key: str, value, user_id: str = "default") -> None:
        state = self._load(user_id)
        state[key] = value
        self._save(state, user_id)

    def remove(self, key: str, user_id: str = "default") -> None:
        state = self._load(user_id)
        if key in state:
            del state[key]
            self._save(state, user_id)
