"""Round scoring: judges both answer sets and awards points per category."""

import logging
import re

from .config import UNIQUE_POINTS, DUPLICATE_POINTS, MAX_ANSWER_WORDS, MIN_ANSWER_LETTERS
from .interfaces import WordChecker
from .models import Category, CategoryResult, RoundVerdict, normalize_letter, require_answer_set
from .utils import first_letter, normalize_answer, normalize_shape
from .vocabulary import AcceptAllChecker

logger = logging.getLogger(__name__)

# Words made of letters, joined by single spaces, hyphens, apostrophes or dots ("St. Louis")
_ANSWER_SHAPE = re.compile(r"^[^\W\d_]+(?:(?:[-'.]|\.? )[^\W\d_]+)*\.?$")


def is_well_formed(answer: str) -> bool:
    """Shape check that rejects noise such as digits, symbols or 'aaaa'."""
    text = normalize_shape(answer)
    if not _ANSWER_SHAPE.match(text):
        return False
    if len(text.split(' ')) > MAX_ANSWER_WORDS:
        return False
    letters = [c for c in text.casefold() if c.isalpha()]
    if len(letters) < MIN_ANSWER_LETTERS:
        return False
    return len(set(letters)) > 1


def score_category(human_valid: bool, opponent_valid: bool, same_answer: bool) -> tuple[int, int]:
    """Points for (human, opponent) in one category.

    Two valid equal answers share the reduced award, two valid different
    answers each get the full award, a lone valid answer gets the full award.
    """
    if human_valid and opponent_valid:
        points = DUPLICATE_POINTS if same_answer else UNIQUE_POINTS
        return points, points
    return (UNIQUE_POINTS if human_valid else 0, UNIQUE_POINTS if opponent_valid else 0)


class RoundValidator:
    """Scores a round from the letter and both sides' answers.

    Holds no round state: the same inputs always give the same verdict,
    provided the word checker is deterministic.
    """

    def __init__(self, checker: WordChecker = None):
        self.checker = checker or AcceptAllChecker()

    def judge_answer(self, letter: str, category: Category, answer: str) -> bool:
        """Return True if answer is valid for category in a round with letter."""
        if not answer or not answer.strip():
            return False
        if first_letter(answer) != letter:
            return False
        if not is_well_formed(answer):
            return False
        return bool(self.checker.is_plausible(answer.strip(), category))

    def validate_round(self, letter: str, human: dict, opponent: dict) -> RoundVerdict:
        """Judge every category for both sides and total the points.

        Raises ValidationError for a malformed letter or an answer set that
        does not cover exactly the fixed categories.
        """
        letter = normalize_letter(letter)
        human = require_answer_set(human, 'human answers')
        opponent = require_answer_set(opponent, 'opponent answers')

        results = []
        for category in Category:
            human_answer = human[category]
            opponent_answer = opponent[category]
            human_valid = self.judge_answer(letter, category, human_answer)
            opponent_valid = self.judge_answer(letter, category, opponent_answer)
            same = normalize_answer(human_answer) == normalize_answer(opponent_answer)
            human_points, opponent_points = score_category(human_valid, opponent_valid, same)
            results.append(CategoryResult(
                category=category,
                human_answer=human_answer,
                opponent_answer=opponent_answer,
                human_valid=human_valid,
                opponent_valid=opponent_valid,
                human_points=human_points,
                opponent_points=opponent_points
            ))

        verdict = RoundVerdict(
            letter=letter,
            results=tuple(results),
            player_total=sum(r.human_points for r in results),
            opponent_total=sum(r.opponent_points for r in results)
        )
        logger.debug(f"Round {letter} scored: player {verdict.player_total}, opponent {verdict.opponent_total}")
        return verdict
