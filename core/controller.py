"""Round controller and per-player game session."""

import logging
import random
import time
from datetime import datetime, timezone

from .config import ALPHABET, EXCLUDED_LETTERS, TIME_LIMITS
from .errors import SessionStateError, ValidationError
from .models import (
    OpponentProfile, RoundVerdict,
    build_answer_set, normalize_letter, require_answer_set
)
from .opponent import OpponentModel
from .validator import RoundValidator

logger = logging.getLogger(__name__)

PLAYABLE_LETTERS = [c for c in ALPHABET if c not in EXCLUDED_LETTERS]

# Session stages, in screen order
STAGE_WELCOME = 'welcome'
STAGE_SETUP = 'setup'
STAGE_PLAYING = 'playing'
STAGE_RESULTS = 'results'


def draw_letter(rng: random.Random = None) -> str:
    """Draw a round letter, skipping the excluded ones."""
    return (rng or random).choice(PLAYABLE_LETTERS)


def play_round(letter: str, human: dict, opponent_model: OpponentModel,
               validator: RoundValidator, profile: OpponentProfile,
               opponent: dict = None) -> tuple[RoundVerdict, OpponentProfile]:
    """Score one round and return (verdict, updated opponent profile).

    Opponent answers are generated from the profile unless already given.
    The profile passed in is never modified.
    """
    if opponent is None:
        opponent = opponent_model.generate_answers(letter, profile)
    verdict = validator.validate_round(letter, human, opponent)
    return verdict, opponent_model.record_outcome(profile, verdict)


class GameSession:
    """One player's game: name, time limit, current round and opponent profile.

    Stages follow the screens: welcome -> setup -> playing -> results,
    and back to setup for the next round.
    """

    def __init__(self, opponent_model: OpponentModel = None, validator: RoundValidator = None,
                 profile: OpponentProfile = None, player_name: str = None,
                 rng: random.Random = None):
        self.opponent_model = opponent_model or OpponentModel()
        self.validator = validator or RoundValidator()
        self.profile = profile or OpponentProfile()
        self.rng = rng or random.Random()
        self.player_name = None
        self.time_limit = None
        self.stage = STAGE_WELCOME
        self.letter = None
        self.started_at = None
        self.opponent_answers = None
        self.last_verdict = None
        if player_name is not None:
            self.set_player_name(player_name)

    def set_player_name(self, name: str) -> None:
        name = (name or '').strip()
        if not name:
            raise ValidationError("Player name must not be empty")
        self.player_name = name
        if self.stage == STAGE_WELCOME:
            self.stage = STAGE_SETUP

    def set_time_limit(self, seconds: int) -> None:
        if self.stage == STAGE_PLAYING:
            raise SessionStateError("Cannot change the time limit during a round")
        if seconds not in TIME_LIMITS:
            raise ValidationError(f"Time limit must be one of {TIME_LIMITS}, got {seconds!r}")
        self.time_limit = seconds

    def _clear_round(self) -> None:
        self.letter = None
        self.started_at = None
        self.opponent_answers = None

    def start_round(self, letter: str = None, now: float = None) -> str:
        """Start a round and return its letter."""
        if self.stage == STAGE_WELCOME:
            raise SessionStateError("Set a player name before starting a round")
        if self.stage == STAGE_PLAYING:
            raise SessionStateError("A round is already in progress")
        if self.time_limit is None:
            raise SessionStateError("Choose a time limit before starting a round")

        self.letter = normalize_letter(letter) if letter is not None else draw_letter(self.rng)
        self.started_at = now if now is not None else time.time()
        self.opponent_answers = None
        self.last_verdict = None
        self.stage = STAGE_PLAYING
        logger.info(f"Round started for {self.player_name}: letter {self.letter}, {self.time_limit}s")
        return self.letter

    def set_opponent_answers(self, answers: dict) -> None:
        """Store the opponent's materialized answers for the current round."""
        if self.stage != STAGE_PLAYING:
            raise SessionStateError("No round in progress")
        self.opponent_answers = require_answer_set(answers, 'opponent answers')

    def seconds_remaining(self, now: float = None) -> int:
        if self.stage != STAGE_PLAYING:
            return 0
        now = now if now is not None else time.time()
        return max(0, int(self.time_limit - (now - self.started_at)))

    def is_expired(self, now: float = None) -> bool:
        return self.stage == STAGE_PLAYING and self.seconds_remaining(now) == 0

    def finish_round(self, human_answers: dict) -> RoundVerdict:
        """Score the current round with the player's raw answers.

        Opponent categories without a materialized answer count as empty.
        On malformed input the session goes back to setup and the error
        is re-raised; the profile is left untouched.
        """
        if self.stage != STAGE_PLAYING:
            raise SessionStateError("No round in progress")

        opponent = self.opponent_answers or build_answer_set(None)
        try:
            human = build_answer_set(human_answers)
            verdict, profile = play_round(
                self.letter, human, self.opponent_model, self.validator, self.profile, opponent
            )
        except ValidationError:
            logger.warning(f"Rejected answers for {self.player_name}, back to setup")
            self._clear_round()
            self.stage = STAGE_SETUP
            raise

        self.profile = profile
        self.last_verdict = verdict
        self._clear_round()
        self.stage = STAGE_RESULTS
        return verdict

    def abandon_round(self) -> None:
        """Drop the current round without scoring it."""
        if self.stage == STAGE_PLAYING:
            logger.info(f"Round abandoned by {self.player_name}")
            self._clear_round()
            self.stage = STAGE_SETUP

    def next_round(self) -> None:
        """Return from the results screen to setup."""
        if self.stage == STAGE_RESULTS:
            self.stage = STAGE_SETUP

    def build_round_record(self, verdict: RoundVerdict, now: datetime = None) -> dict:
        """Record of a completed round for the history store."""
        now = now or datetime.now(timezone.utc)
        return {
            'name': self.player_name,
            'date': now.isoformat(),
            'letter': verdict.letter,
            'player_points': verdict.player_total,
            'opponent_points': verdict.opponent_total,
            'categories': [result.to_dict() for result in verdict.results],
            'timestamp': int(now.timestamp() * 1000)
        }
