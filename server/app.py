"""FastAPI server for the stop game."""

import asyncio
import logging
import os
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional

logger = logging.getLogger(__name__)

from core.config import TIME_LIMITS, DEFAULT_TIME_LIMIT, GENERATION_GRACE_SECONDS, HISTORY_LIMIT
from core.controller import GameSession
from core.errors import SessionStateError, ValidationError
from core.interfaces import AnswerSource, Storage, WordChecker
from core.models import Category, OpponentProfile
from core.opponent import OpponentModel
from core.stats import compute_player_rankings, recent_history, seed_profile
from core.validator import RoundValidator
from core.vocabulary import AcceptAllChecker, WordListChecker, WordListSource

from server.file_storage import FileStorage
from server.gemini_provider import GeminiProvider
from server.postgres_storage import PostgresStorage


# Pydantic models for API
class CreateSessionRequest(BaseModel):
    player_name: str


class StartRoundRequest(BaseModel):
    session_id: str
    time_limit: int = DEFAULT_TIME_LIMIT


class FinishRoundRequest(BaseModel):
    session_id: str
    answers: dict[str, Optional[str]] = {}


class SessionRequest(BaseModel):
    session_id: str


class SessionResponse(BaseModel):
    session_id: str
    player_name: str
    profile: dict


class StartRoundResponse(BaseModel):
    letter: str
    time_limit: int
    categories: list[dict]


class RoundResultResponse(BaseModel):
    letter: str
    categories: list[dict]
    totals: dict
    profile: dict


class ProfileResponse(BaseModel):
    level: int
    experience: int
    experience_in_level: str
    success_rate: str
    rounds_played: int


# Global state (in production, use proper DI)
storage: Storage = None
word_checker: WordChecker = None
answer_source: AnswerSource = None
sessions: dict[str, GameSession] = {}

# Opponent answers being generated in the background, per session
pending_answers: dict[str, asyncio.Task] = {}


def category_list() -> list[dict]:
    return [{'key': c.value, 'name': c.display_name} for c in Category]


def log_event(event: str, session_id: str, **data) -> None:
    """Log an event to the database."""
    session = sessions.get(session_id)
    if storage and session and hasattr(storage, 'log_event'):
        storage.log_event(event, session.player_name, session_id, **data)


def load_profile(player_name: str) -> OpponentProfile:
    """Saved profile for a player, or one rebuilt from their round history."""
    try:
        saved = storage.load_profile(player_name)
        if saved:
            return OpponentProfile.from_dict(saved)
        return seed_profile(storage.load_rounds(player_name=player_name))
    except Exception as e:
        logger.error(f"Could not load profile for {player_name}, starting fresh: {e}")
        return OpponentProfile()


def get_session(session_id: str) -> GameSession:
    session = sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    return session


def cancel_pending(session_id: str) -> None:
    task = pending_answers.pop(session_id, None)
    if task and not task.done():
        task.cancel()


async def collect_opponent_answers(session_id: str) -> dict | None:
    """Wait briefly for background generation; None if it did not finish."""
    task = pending_answers.pop(session_id, None)
    if task is None:
        return None
    done, _ = await asyncio.wait({task}, timeout=GENERATION_GRACE_SECONDS)
    if not done:
        task.cancel()
        logger.warning(f"Opponent answers not ready for session {session_id}, using empty answers")
        return None
    try:
        return task.result()
    except Exception as e:
        logger.error(f"Background opponent generation failed for session {session_id}: {e}")
        return None


def create_storage() -> Storage:
    # Use PostgreSQL by default, set STOP_STORAGE=file to use file storage
    storage_type = os.environ.get('STOP_STORAGE', 'postgres')
    if storage_type == 'file':
        logger.info("Using file storage")
        return FileStorage()
    logger.info("Using PostgreSQL storage")
    return PostgresStorage()


def get_api_key(storage: Storage) -> str | None:
    """Get API key from environment variable first, then fall back to config file."""
    api_key = os.environ.get('GEMINI_API_KEY')
    if not api_key:
        try:
            config = storage.load_config()
            api_key = config.get('gemini_api_key')
        except FileNotFoundError:
            pass
    return api_key


def create_providers(storage: Storage) -> tuple[WordChecker, AnswerSource]:
    checker_type = os.environ.get('STOP_CHECKER', 'heuristic')
    source_type = os.environ.get('STOP_SOURCE', 'wordlist')

    gemini = None
    if 'gemini' in (checker_type, source_type):
        api_key = get_api_key(storage)
        if not api_key:
            raise RuntimeError(
                "GEMINI_API_KEY environment variable not set and config file not found. "
                "Set GEMINI_API_KEY or create ~/.config/stopgame/config.json"
            )
        gemini = GeminiProvider(api_key)

    if checker_type == 'gemini':
        checker = gemini
    elif checker_type == 'wordlist':
        checker = WordListChecker()
    else:
        checker = AcceptAllChecker()

    source = gemini if source_type == 'gemini' else WordListSource()
    logger.info(f"Word checker: {checker_type}, answer source: {source_type}")
    return checker, source


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage and word providers on startup."""
    global storage, word_checker, answer_source
    storage = create_storage()
    word_checker, answer_source = create_providers(storage)
    yield
    for session_id in list(pending_answers):
        cancel_pending(session_id)


app = FastAPI(
    title="Stop API",
    description="Categories-by-letter word game against an adaptive opponent",
    lifespan=lifespan
)


@app.get("/")
async def root():
    """Health check."""
    return {"service": "stopgame", "status": "ok"}


@app.get("/api/config")
async def get_config():
    """Categories and selectable time limits."""
    return {
        "categories": category_list(),
        "time_limits": list(TIME_LIMITS),
        "default_time_limit": DEFAULT_TIME_LIMIT
    }


@app.post("/api/sessions", response_model=SessionResponse)
async def create_session(request: CreateSessionRequest):
    """Start a game session for a player."""
    player_name = request.player_name.strip()
    if not player_name:
        raise HTTPException(status_code=400, detail="Player name must not be empty")

    session = GameSession(
        opponent_model=OpponentModel(source=answer_source),
        validator=RoundValidator(word_checker),
        profile=load_profile(player_name),
        player_name=player_name
    )
    session_id = str(uuid.uuid4())[:8]
    sessions[session_id] = session
    log_event('session.create', session_id)

    return SessionResponse(
        session_id=session_id,
        player_name=player_name,
        profile=session.profile.to_display_dict()
    )


@app.post("/api/rounds/start", response_model=StartRoundResponse)
async def start_round(request: StartRoundRequest):
    """Draw a letter and start generating the opponent's answers."""
    session = get_session(request.session_id)
    try:
        session.set_time_limit(request.time_limit)
        letter = session.start_round()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    cancel_pending(request.session_id)
    pending_answers[request.session_id] = asyncio.create_task(
        session.opponent_model.generate_answers_async(letter, session.profile, timeout=session.time_limit)
    )
    log_event('round.start', request.session_id, letter=letter, time_limit=session.time_limit)

    return StartRoundResponse(letter=letter, time_limit=session.time_limit, categories=category_list())


@app.post("/api/rounds/finish", response_model=RoundResultResponse)
async def finish_round(request: FinishRoundRequest):
    """Score the round with the player's answers."""
    session = get_session(request.session_id)
    opponent_answers = await collect_opponent_answers(request.session_id)

    try:
        if opponent_answers is not None:
            session.set_opponent_answers(opponent_answers)
        verdict = session.finish_round(request.answers)
    except ValidationError as e:
        log_event('round.rejected', request.session_id, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    try:
        storage.save_round(session.build_round_record(verdict))
        storage.save_profile(session.player_name, session.profile.to_dict())
    except Exception as e:
        logger.error(f"Failed to persist round for {session.player_name}: {e}")

    log_event('round.finish', request.session_id,
              letter=verdict.letter,
              player_points=verdict.player_total,
              opponent_points=verdict.opponent_total,
              opponent_level=session.profile.level)

    result = verdict.to_dict()
    return RoundResultResponse(
        letter=result['letter'],
        categories=result['categories'],
        totals=result['totals'],
        profile=session.profile.to_display_dict()
    )


@app.post("/api/rounds/abandon")
async def abandon_round(request: SessionRequest):
    """Drop the current round without scoring it."""
    session = get_session(request.session_id)
    cancel_pending(request.session_id)
    session.abandon_round()
    log_event('round.abandon', request.session_id)
    return {"success": True, "stage": session.stage}


@app.get("/api/profile", response_model=ProfileResponse)
async def get_profile(session_id: str):
    """Current opponent profile for a session."""
    session = get_session(session_id)
    display = session.profile.to_display_dict()
    return ProfileResponse(
        level=session.profile.level,
        experience=session.profile.experience,
        experience_in_level=display['experience_in_level'],
        success_rate=display['success_rate'],
        rounds_played=session.profile.rounds_played
    )


@app.get("/api/history")
async def get_history(limit: int = HISTORY_LIMIT):
    """Most recent rounds across all players."""
    return {"rounds": recent_history(storage.load_rounds(limit=limit), limit)}


@app.get("/api/rankings")
async def get_rankings():
    """Players ranked by average points."""
    return {"rankings": compute_player_rankings(storage.load_rounds())}


@app.get("/api/players")
async def list_players():
    """List all players with stored rounds or a saved profile."""
    return {"players": storage.list_players()}


@app.post("/api/sessions/end")
async def end_session(request: SessionRequest):
    """Close a session and forget it; an unfinished round is dropped unscored."""
    session = get_session(request.session_id)
    cancel_pending(request.session_id)
    session.abandon_round()
    log_event('session.end', request.session_id)
    del sessions[request.session_id]
    return {"success": True}
