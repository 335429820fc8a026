from .models import (
    Category, CategoryResult, RoundVerdict, OpponentProfile,
    build_answer_set, require_answer_set, normalize_letter
)
from .errors import StopGameError, ValidationError, SessionStateError
from .interfaces import WordChecker, AnswerSource, Storage
from .validator import RoundValidator
from .opponent import OpponentModel
from .controller import GameSession, play_round, draw_letter
from .stats import compute_player_rankings, recent_history, seed_profile
from .config import (
    TIME_LIMITS, DEFAULT_TIME_LIMIT,
    UNIQUE_POINTS, DUPLICATE_POINTS, XP_PER_LEVEL
)

__all__ = [
    'Category', 'CategoryResult', 'RoundVerdict', 'OpponentProfile',
    'build_answer_set', 'require_answer_set', 'normalize_letter',
    'StopGameError', 'ValidationError', 'SessionStateError',
    'WordChecker', 'AnswerSource', 'Storage',
    'RoundValidator', 'OpponentModel',
    'GameSession', 'play_round', 'draw_letter',
    'compute_player_rankings', 'recent_history', 'seed_profile',
    'TIME_LIMITS', 'DEFAULT_TIME_LIMIT',
    'UNIQUE_POINTS', 'DUPLICATE_POINTS', 'XP_PER_LEVEL'
]
