"""Round engine: word selection, answer matching and the attempt limit."""

import logging
import secrets
from typing import Callable

from .config import MAX_ATTEMPTS, ROUND_KEY
from .dictionary import filter_by_difficulty
from .exceptions import CorruptPersistedState, NoEntriesForDifficulty, RoundResolvedError
from .interfaces import PersistenceAdapter, Romanizer
from .models import DictionaryEntry, Difficulty, GuessOutcome, Round, Statistics
from .romanizer import HangulRomanizer
from .stores import SettingsStore, StatisticsStore
from .utils import normalize

logger = logging.getLogger(__name__)


class RoundEngine:
    """Owns the active round and is the only writer of statistics.

    Args:
        storage: Persistence adapter shared with the other stores
        user_id: Whose round, statistics and settings to use
        romanizer: Produces the accepted answers for a word
        random_index: Returns a uniformly random index in [0, n)
        difficulty_filter: When False every round draws from the full dictionary
    """

    def __init__(self, storage: PersistenceAdapter, user_id: str = "default",
                 romanizer: Romanizer = None, random_index: Callable[[int], int] = None,
                 difficulty_filter: bool = True):
        self.storage = storage
        self.user_id = user_id
        self.romanizer = romanizer or HangulRomanizer()
        self.random_index = random_index or secrets.randbelow
        self.difficulty_filter = difficulty_filter
        self.statistics = StatisticsStore(storage, user_id)
        self.settings = SettingsStore(storage, user_id)

    def accepted_answers(self, word: str) -> list[str]:
        """Romanize a word in every scheme, trimmed and without duplicates."""
        answers = []
        for form in self.romanizer.romanize(word):
            form = form.strip()
            if form and form not in answers:
                answers.append(form)
        if not answers:
            answers.append(word.strip())
        return answers

    def current_round(self) -> Round | None:
        """Get the persisted unresolved round, discarding it if corrupt."""
        data = self.storage.get(ROUND_KEY, self.user_id)
        if data is None:
            return None
        try:
            return self._parse_round(data)
        except CorruptPersistedState as e:
            logger.warning(f"Discarding corrupt round for {self.user_id}: {e}")
            self.storage.remove(ROUND_KEY, self.user_id)
            return None

    def _parse_round(self, data) -> Round:
        word = data.get('word') if isinstance(data, dict) else None
        answers = self.accepted_answers(word) if isinstance(word, str) and word.strip() else []
        return Round.from_dict(data, answers)

    def start_round(self, dictionary: list[DictionaryEntry], difficulty=None) -> Round:
        """Resume the persisted round, or pick a new word and persist it.

        Raises:
            NoEntriesForDifficulty: if the difficulty pool is empty
        """
        round = self.current_round()
        if round:
            logger.info(f"Resuming round for {self.user_id}: {round.word} ({round.get_attempt_display()})")
            return round

        if difficulty is None:
            difficulty = self.settings.load().difficulty
        difficulty = Difficulty(difficulty)
        pool = filter_by_difficulty(dictionary, difficulty) if self.difficulty_filter else list(dictionary)
        if not pool:
            raise NoEntriesForDifficulty(difficulty.value)

        entry = pool[self.random_index(len(pool))]
        round = Round(entry.word, entry.definition, self.accepted_answers(entry.word),
                      difficulty=difficulty.value)
        self._save_round(round)
        logger.info(f"New {difficulty.value} round for {self.user_id}: {round.word}")
        return round

    def submit_guess(self, round: Round, raw_input: str) -> GuessOutcome:
        """Evaluate a guess against every accepted answer.

        An empty guess never uses up an attempt. The last wrong guess resolves
        the round and resets the streak in the same step.
        """
        if round.resolved:
            raise RoundResolvedError(f"Round for '{round.word}' is already resolved")

        guess = normalize(raw_input)
        if not guess:
            return GuessOutcome.retry(round.attempts_left)

        if any(guess == normalize(answer) for answer in round.accepted_answers):
            self._resolve(round, True)
            logger.info(f"Correct answer for {round.word} from {self.user_id}")
            return GuessOutcome.correct()

        if round.attempt < MAX_ATTEMPTS:
            round.attempt += 1
            self._save_round(round)
            logger.info(f"Incorrect answer for {round.word} from {self.user_id} ({round.get_attempt_display()})")
            return GuessOutcome.retry(round.attempts_left)

        self._resolve(round, False)
        logger.info(f"Attempts exhausted for {round.word} from {self.user_id}")
        return GuessOutcome.exhausted(round.canonical_answer)

    def get_statistics_snapshot(self) -> Statistics:
        return self.statistics.load()

    def reset_statistics(self) -> None:
        self.statistics.reset()

    def _resolve(self, round: Round, is_correct: bool) -> None:
        round.resolved = True
        self.storage.remove(ROUND_KEY, self.user_id)
        self.statistics.record_outcome(is_correct)

    def _save_round(self, round: Round) -> None:
        self.storage.set(ROUND_KEY, round.to_dict(), self.user_id)
