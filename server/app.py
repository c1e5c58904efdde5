"""FastAPI server for romaja application."""

import logging
import os
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

logger = logging.getLogger(__name__)

from core.config import MAX_ATTEMPTS, ROMANIZATION_SCHEMES, load_config
from core.dictionary import load_dictionary_source
from core.engine import RoundEngine
from core.exceptions import LoadError, NoEntriesForDifficulty, RoundResolvedError
from core.interfaces import PersistenceAdapter
from core.models import DictionaryEntry, Difficulty, Round, Statistics, Settings
from core.romanizer import HangulRomanizer

from server.file_storage import FileStorage
from server.postgres_storage import PostgresStorage


# Pydantic models for API
class GuessRequest(BaseModel):
    guess: str
    user_id: str = "default"


class SettingsRequest(BaseModel):
    user_id: str = "default"
    difficulty: Optional[Literal['easy', 'normal', 'hard']] = None
    theme: Optional[Literal['light', 'dark', 'auto']] = None


class UserRequest(BaseModel):
    user_id: str = "default"


class RoundResponse(BaseModel):
    word: str
    definition: str
    attempt: int
    max_attempts: int
    attempts_left: int
    attempt_display: str
    difficulty: Optional[str]  # Pool the round was drawn from, as started
    difficulty_fallback: bool = False


class StatisticsResponse(BaseModel):
    current_streak: int
    max_streak: int
    total_attempts: int
    correct_answers: int
    wrong_answers: int
    win_rate: float
    win_rate_display: str


class GuessResponse(BaseModel):
    result: str  # correct, retry or exhausted
    attempts_left: int
    correct_answer: Optional[str]
    accepted_answers: Optional[list[str]]  # Only revealed once the round is resolved
    resolved: bool
    statistics: StatisticsResponse


class SettingsResponse(BaseModel):
    difficulty: str
    theme: str
    help_dismissed: bool


# Global state, set up on startup
storage: PersistenceAdapter = None
dictionary: list[DictionaryEntry] = None
romanizer = HangulRomanizer(ROMANIZATION_SCHEMES)


app = FastAPI(title="Romaja API", description="Korean word romanization quiz API")


@app.on_event("startup")
async def startup():
    """Initialize storage and load the dictionary on startup."""
    global storage, dictionary

    logging.basicConfig(
        level=os.environ.get('ROMAJA_LOG_LEVEL', 'info').upper(),
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s'
    )
    config = load_config()

    # File storage by default, set ROMAJA_STORAGE=postgres to use PostgreSQL
    storage_type = os.environ.get('ROMAJA_STORAGE') or config.get('storage', 'file')
    if storage_type == 'postgres':
        storage = PostgresStorage(os.environ.get('DATABASE_URL') or config.get('database_url'))
        logger.info("Using PostgreSQL storage")
    else:
        storage = FileStorage(os.environ.get('ROMAJA_STATE_DIR') or config.get('state_dir'))
        logger.info("Using file storage")

    source = os.environ.get('ROMAJA_DICTIONARY') or config.get('dictionary')
    try:
        dictionary = load_dictionary_source(source)
    except LoadError as e:
        # Rounds cannot start without a dictionary; the API answers 503 until restart
        logger.error(f"Dictionary load failed: {e}")
        dictionary = None


def get_engine(user_id: str = "default") -> RoundEngine:
    return RoundEngine(storage, user_id=user_id, romanizer=romanizer)


def require_dictionary() -> list[DictionaryEntry]:
    if not dictionary:
        raise HTTPException(status_code=503, detail="Dictionary not available")
    return dictionary


def statistics_response(stats: Statistics) -> StatisticsResponse:
    return StatisticsResponse(
        **stats.to_dict(),
        wrong_answers=stats.wrong_answers,
        win_rate=stats.win_rate,
        win_rate_display=stats.get_win_rate_display()
    )


def settings_response(settings: Settings) -> SettingsResponse:
    return SettingsResponse(**settings.to_dict())


def round_response(round: Round, fallback: bool = False) -> RoundResponse:
    return RoundResponse(
        word=round.word,
        definition=round.definition,
        attempt=round.attempt,
        max_attempts=MAX_ATTEMPTS,
        attempts_left=round.attempts_left,
        attempt_display=round.get_attempt_display(),
        difficulty=round.difficulty,
        difficulty_fallback=fallback
    )


@app.get("/")
async def root():
    """Health check."""
    return {
        "service": "romaja",
        "status": "ok" if dictionary else "no dictionary",
        "dictionary_size": len(dictionary) if dictionary else 0
    }


@app.get("/api/round", response_model=RoundResponse)
async def get_round(user_id: str = "default"):
    """Resume the active round or start a new one."""
    entries = require_dictionary()
    engine = get_engine(user_id)

    try:
        round = engine.start_round(entries)
    except NoEntriesForDifficulty as e:
        logger.warning(f"{e}, falling back to the full dictionary for {user_id}")
        round = engine.start_round(entries, Difficulty.NORMAL)
        return round_response(round, fallback=True)

    return round_response(round)


@app.post("/api/guess", response_model=GuessResponse)
async def submit_guess(request: GuessRequest):
    """Submit a romanized guess for the active round."""
    try:
        engine = get_engine(request.user_id)
        round = engine.current_round()
        if round is None:
            raise HTTPException(status_code=400, detail="No active round")

        outcome = engine.submit_guess(round, request.guess)

        return GuessResponse(
            result=outcome.kind.value,
            attempts_left=outcome.attempts_left or 0,
            correct_answer=outcome.correct_answer,
            accepted_answers=round.accepted_answers if outcome.resolved else None,
            resolved=outcome.resolved,
            statistics=statistics_response(engine.get_statistics_snapshot())
        )
    except HTTPException:
        raise
    except RoundResolvedError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error in submit_guess: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Internal error: {type(e).__name__}: {str(e)}")


@app.get("/api/stats", response_model=StatisticsResponse)
async def get_stats(user_id: str = "default"):
    """Get the statistics snapshot."""
    return statistics_response(get_engine(user_id).get_statistics_snapshot())


@app.post("/api/stats/reset", response_model=StatisticsResponse)
async def reset_stats(request: UserRequest):
    """Clear all statistics counters."""
    engine = get_engine(request.user_id)
    engine.reset_statistics()
    logger.info(f"Statistics reset for {request.user_id}")
    return statistics_response(engine.get_statistics_snapshot())


@app.get("/api/settings", response_model=SettingsResponse)
async def get_settings(user_id: str = "default"):
    return settings_response(get_engine(user_id).settings.load())


@app.post("/api/settings", response_model=SettingsResponse)
async def update_settings(request: SettingsRequest):
    """Change difficulty and/or theme. The active round is kept."""
    settings = get_engine(request.user_id).settings.update(
        difficulty=request.difficulty, theme=request.theme
    )
    return settings_response(settings)


@app.post("/api/help/dismiss", response_model=SettingsResponse)
async def dismiss_help(request: UserRequest):
    """Stop showing the help text."""
    return settings_response(get_engine(request.user_id).settings.dismiss_help())


def create_app():
    """Factory function for creating the app (useful for testing)."""
    return app
