"""The synthetic opponent: answer generation and skill profile updates."""

import asyncio
import logging
import random

from .config import (
    BASE_ANSWER_CHANCE, ANSWER_CHANCE_PER_LEVEL, MAX_ANSWER_CHANCE,
    RARE_WORD_LEVEL, COMMON_WORD_COUNT
)
from .errors import ValidationError
from .interfaces import AnswerSource, WordChecker
from .models import Category, OpponentProfile, RoundVerdict, normalize_letter
from .utils import first_letter
from .vocabulary import WordListSource

logger = logging.getLogger(__name__)


def answer_chance(level: int) -> float:
    """Probability that the opponent fills a category at a given level."""
    chance = BASE_ANSWER_CHANCE + ANSWER_CHANCE_PER_LEVEL * (max(1, level) - 1)
    return min(MAX_ANSWER_CHANCE, chance)


class OpponentModel:
    """Generates opponent answers and evolves its profile.

    Answers are random within a bounded distribution: each category is
    filled with probability answer_chance(level), with a word drawn
    uniformly from the candidates. Below RARE_WORD_LEVEL only the first
    COMMON_WORD_COUNT candidates per letter are used. Pass a seeded
    random.Random for reproducible answers.
    """

    def __init__(self, source: AnswerSource = None, checker: WordChecker = None,
                 rng: random.Random = None):
        self.source = source or WordListSource()
        self.checker = checker
        self.rng = rng or random.Random()

    def _candidates(self, letter: str, category: Category, level: int) -> list[str]:
        candidates = [c for c in self.source.candidates(letter, category) if first_letter(c) == letter]
        if self.checker:
            candidates = [c for c in candidates if self.checker.is_plausible(c, category)]
        if level < RARE_WORD_LEVEL:
            candidates = candidates[:COMMON_WORD_COUNT]
        return candidates

    def generate_answer(self, letter: str, category: Category, level: int = 1) -> str:
        """Pick one answer for a category, or '' when there is none."""
        try:
            candidates = self._candidates(letter, category, level)
        except Exception as e:
            logger.warning(f"Answer source failed for {category.value}/{letter}: {e}")
            return ''
        if not candidates:
            return ''
        if self.rng.random() >= answer_chance(level):
            return ''
        return self.rng.choice(candidates)

    def generate_answers(self, letter: str, profile: OpponentProfile = None) -> dict[Category, str]:
        """Generate an answer for every category. Never raises."""
        profile = profile or OpponentProfile()
        answers = {category: '' for category in Category}
        try:
            letter = normalize_letter(letter)
        except ValidationError as e:
            logger.warning(f"Cannot generate answers: {e}")
            return answers

        for category in Category:
            answers[category] = self.generate_answer(letter, category, profile.level)
        return answers

    async def generate_answers_async(self, letter: str, profile: OpponentProfile = None,
                                     timeout: float | None = None) -> dict[Category, str]:
        """Generate answers in the default executor, waiting at most timeout seconds.

        Categories still pending when the wait ends are answered with ''.
        """
        profile = profile or OpponentProfile()
        answers = {category: '' for category in Category}
        try:
            letter = normalize_letter(letter)
        except ValidationError as e:
            logger.warning(f"Cannot generate answers: {e}")
            return answers

        loop = asyncio.get_running_loop()
        futures = {
            loop.run_in_executor(None, self.generate_answer, letter, category, profile.level): category
            for category in Category
        }
        done, pending = await asyncio.wait(futures, timeout=timeout)
        for future in pending:
            future.cancel()
        if pending:
            logger.warning(f"Opponent generation timed out, {len(pending)} categories left empty")

        for future in done:
            category = futures[future]
            if future.exception() is not None:
                logger.warning(f"Opponent generation failed for {category.value}: {future.exception()}")
                continue
            answers[category] = future.result()
        return answers

    def record_outcome(self, profile: OpponentProfile, verdict: RoundVerdict) -> OpponentProfile:
        """Return the profile updated with one scored round.

        A malformed verdict leaves the profile as it was.
        """
        try:
            updated = profile.apply_verdict(verdict)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed verdict, profile unchanged: {e}")
            return profile

        if updated.level > profile.level:
            logger.info(f"Opponent reached level {updated.level}")
        return updated
