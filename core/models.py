"""Domain models for romaja application."""

from dataclasses import dataclass
from enum import Enum

from .config import MAX_ATTEMPTS, DIFFICULTIES, THEMES, DEFAULT_DIFFICULTY, DEFAULT_THEME
from .exceptions import CorruptPersistedState


class Difficulty(str, Enum):
    EASY = 'easy'
    NORMAL = 'normal'
    HARD = 'hard'


class Theme(str, Enum):
    LIGHT = 'light'
    DARK = 'dark'
    AUTO = 'auto'


class OutcomeKind(Enum):
    """Result of a single guess."""
    CORRECT = 'correct'
    INCORRECT_RETRY = 'retry'
    INCORRECT_EXHAUSTED = 'exhausted'


@dataclass(frozen=True)
class DictionaryEntry:
    word: str
    definition: str


@dataclass(frozen=True)
class GuessOutcome:
    kind: OutcomeKind
    attempts_left: int | None = None
    correct_answer: str | None = None

    @classmethod
    def correct(cls) -> 'GuessOutcome':
        return cls(OutcomeKind.CORRECT)

    @classmethod
    def retry(cls, attempts_left: int) -> 'GuessOutcome':
        return cls(OutcomeKind.INCORRECT_RETRY, attempts_left=attempts_left)

    @classmethod
    def exhausted(cls, correct_answer: str) -> 'GuessOutcome':
        return cls(OutcomeKind.INCORRECT_EXHAUSTED, attempts_left=0, correct_answer=correct_answer)

    @property
    def resolved(self) -> bool:
        return self.kind != OutcomeKind.INCORRECT_RETRY

    def to_dict(self) -> dict:
        return {
            'result': self.kind.value,
            'attempts_left': self.attempts_left,
            'correct_answer': self.correct_answer,
            'resolved': self.resolved
        }


class Round:
    """A single question/answer cycle for one dictionary entry."""

    def __init__(self, word: str, definition: str, accepted_answers: list[str],
                 attempt: int = 1, difficulty: str | None = None):
        self.word = word
        self.definition = definition
        self.accepted_answers = list(accepted_answers)
        self.attempt = attempt
        self.difficulty = difficulty  # pool the word was drawn from
        self.resolved = False

    @property
    def attempts_left(self) -> int:
        return MAX_ATTEMPTS - self.attempt

    @property
    def canonical_answer(self) -> str:
        """The answer shown to the player when the round is lost."""
        return self.accepted_answers[0]

    def get_attempt_display(self) -> str:
        return f"Attempt {self.attempt}/{MAX_ATTEMPTS}"

    def to_dict(self) -> dict:
        # Accepted answers are derived from the word, so they are not stored
        data = {
            'word': self.word,
            'definition': self.definition,
            'attempt': self.attempt
        }
        if self.difficulty is not None:
            data['difficulty'] = self.difficulty
        return data

    @classmethod
    def from_dict(cls, data, accepted_answers: list[str]) -> 'Round':
        """Rebuild a persisted round. Raises CorruptPersistedState if malformed."""
        if not isinstance(data, dict):
            raise CorruptPersistedState(f"Expected a dict, got {type(data).__name__}")
        word = data.get('word')
        definition = data.get('definition', '')
        attempt = data.get('attempt')
        if not isinstance(word, str) or not word.strip():
            raise CorruptPersistedState("Persisted round has no word")
        if not isinstance(definition, str):
            raise CorruptPersistedState("Persisted round has an invalid definition")
        if isinstance(attempt, bool) or not isinstance(attempt, int) \
                or not 1 <= attempt <= MAX_ATTEMPTS:
            raise CorruptPersistedState(f"Persisted round has an invalid attempt: {attempt!r}")
        if not accepted_answers:
            raise CorruptPersistedState(f"No accepted answers for '{word}'")
        # Rounds saved without a difficulty report none
        difficulty = data.get('difficulty')
        if difficulty not in DIFFICULTIES:
            difficulty = None
        return cls(word, definition, accepted_answers, attempt, difficulty)


class Statistics:
    """Streak and win-rate counters."""

    FIELDS = ('current_streak', 'max_streak', 'total_attempts', 'correct_answers')

    def __init__(self, current_streak: int = 0, max_streak: int = 0,
                 total_attempts: int = 0, correct_answers: int = 0):
        self.current_streak = current_streak
        self.max_streak = max_streak
        self.total_attempts = total_attempts
        self.correct_answers = correct_answers

    @property
    def wrong_answers(self) -> int:
        return self.total_attempts - self.correct_answers

    @property
    def win_rate(self) -> float:
        if self.total_attempts == 0:
            return 0.0
        return self.correct_answers / self.total_attempts

    def with_outcome(self, is_correct: bool) -> 'Statistics':
        """Return the counters after one more resolved round."""
        if is_correct:
            current = self.current_streak + 1
            return Statistics(
                current_streak=current,
                max_streak=max(self.max_streak, current),
                total_attempts=self.total_attempts + 1,
                correct_answers=self.correct_answers + 1
            )
        return Statistics(
            current_streak=0,
            max_streak=self.max_streak,
            total_attempts=self.total_attempts + 1,
            correct_answers=self.correct_answers
        )

    def get_win_rate_display(self) -> str:
        return f"{round(self.win_rate * 100)}%"

    def to_dict(self) -> dict:
        return {field: getattr(self, field) for field in self.FIELDS}

    def __eq__(self, other) -> bool:
        if not isinstance(other, Statistics):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"Statistics({self.to_dict()})"


class Settings:
    """User preferences. Only difficulty is read by the round engine."""

    def __init__(self, difficulty: Difficulty = Difficulty(DEFAULT_DIFFICULTY),
                 theme: Theme = Theme(DEFAULT_THEME), help_dismissed: bool = False):
        self.difficulty = difficulty
        self.theme = theme
        self.help_dismissed = help_dismissed

    def to_dict(self) -> dict:
        return {
            'difficulty': self.difficulty.value,
            'theme': self.theme.value,
            'help_dismissed': self.help_dismissed
        }

    @classmethod
    def from_dict(cls, data: dict | None) -> 'Settings':
        """Build settings from stored data, falling back to defaults for unknown values."""
        if not isinstance(data, dict):
            return cls()
        difficulty = data.get('difficulty')
        theme = data.get('theme')
        return cls(
            difficulty=Difficulty(difficulty) if difficulty in DIFFICULTIES else Difficulty(DEFAULT_DIFFICULTY),
            theme=Theme(theme) if theme in THEMES else Theme(DEFAULT_THEME),
            help_dismissed=data.get('help_dismissed') is True
        )
