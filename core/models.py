"""Domain models for the stop game."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from .config import ALPHABET, CATEGORIES, XP_VALID_ANSWER, XP_INVALID_ANSWER, XP_PER_LEVEL
from .errors import ValidationError
from .utils import round_half_up


class Category(str, Enum):
    """The fixed, ordered set of categories every round covers."""

    NAME = 'name'
    PLACE = 'place'
    COUNTRY = 'country'
    ANIMAL = 'animal'
    OBJECT = 'object'
    COLOR = 'color'
    ELEMENT = 'element'
    PROFESSION = 'profession'
    MEDIA = 'media'
    BRAND = 'brand'
    PLANT = 'plant'
    VERB = 'verb'
    ADJECTIVE = 'adjective'
    EMOTION = 'emotion'
    CONTINENT = 'continent'
    FRUIT = 'fruit'

    @property
    def display_name(self) -> str:
        return CATEGORY_DISPLAY_NAMES[self.value]


CATEGORY_DISPLAY_NAMES = dict(CATEGORIES)


def to_category(key) -> Category:
    """Convert a category or its string key, raising ValidationError for unknown keys."""
    if isinstance(key, Category):
        return key
    try:
        return Category(key)
    except ValueError:
        raise ValidationError(f"Unknown category: {key!r}") from None


def normalize_letter(letter) -> str:
    """Return the round letter upper-cased, or raise ValidationError."""
    if not isinstance(letter, str) or len(letter) != 1 or letter.upper() not in ALPHABET:
        raise ValidationError(f"Letter must be a single letter A-Z, got {letter!r}")
    return letter.upper()


def build_answer_set(raw: Mapping | None) -> dict[Category, str]:
    """Build a full answer set from captured form input.

    Categories the form did not supply are filled with an empty answer.
    Unknown keys are rejected. Values are kept as typed, not trimmed.
    """
    answers = {category: '' for category in Category}
    for key, value in (raw or {}).items():
        answers[to_category(key)] = '' if value is None else str(value)
    return answers


def require_answer_set(answers, side: str = 'answers') -> dict[Category, str]:
    """Check that an answer set covers exactly the fixed categories.

    Returns a copy keyed by Category in enum order.
    """
    if not isinstance(answers, Mapping):
        raise ValidationError(f"{side} must be a mapping of category to answer")

    checked = {}
    for key, value in answers.items():
        category = to_category(key)
        if value is None:
            value = ''
        if not isinstance(value, str):
            raise ValidationError(f"{side}[{category.value}] must be a string, got {type(value).__name__}")
        checked[category] = value

    missing = [category.value for category in Category if category not in checked]
    if missing:
        raise ValidationError(f"{side} missing categories: {', '.join(missing)}")
    return {category: checked[category] for category in Category}


@dataclass(frozen=True)
class CategoryResult:
    """Judgement of one category for both sides."""

    category: Category
    human_answer: str
    opponent_answer: str
    human_valid: bool
    opponent_valid: bool
    human_points: int
    opponent_points: int

    def to_dict(self) -> dict:
        return {
            'category': self.category.value,
            'category_name': self.category.display_name,
            'human_answer': self.human_answer,
            'opponent_answer': self.opponent_answer,
            'human_valid': self.human_valid,
            'opponent_valid': self.opponent_valid,
            'human_points': self.human_points,
            'opponent_points': self.opponent_points
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CategoryResult':
        return cls(
            category=to_category(data['category']),
            human_answer=data.get('human_answer') or '',
            opponent_answer=data.get('opponent_answer') or '',
            human_valid=bool(data.get('human_valid', False)),
            opponent_valid=bool(data.get('opponent_valid', False)),
            human_points=int(data.get('human_points', 0)),
            opponent_points=int(data.get('opponent_points', 0))
        )


@dataclass(frozen=True)
class RoundVerdict:
    """Scored result of one round. Results follow the Category order."""

    letter: str
    results: tuple[CategoryResult, ...]
    player_total: int
    opponent_total: int

    @property
    def totals(self) -> dict:
        return {'player': self.player_total, 'opponent': self.opponent_total}

    @property
    def categories(self) -> list[Category]:
        return [result.category for result in self.results]

    def result_for(self, category) -> CategoryResult:
        category = to_category(category)
        for result in self.results:
            if result.category is category:
                return result
        raise KeyError(category.value)

    def to_dict(self) -> dict:
        return {
            'letter': self.letter,
            'categories': [result.to_dict() for result in self.results],
            'totals': self.totals
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RoundVerdict':
        try:
            results = tuple(CategoryResult.from_dict(r) for r in data['categories'])
            totals = data.get('totals') or {}
            return cls(
                letter=data['letter'],
                results=results,
                player_total=int(totals.get('player', sum(r.human_points for r in results))),
                opponent_total=int(totals.get('opponent', sum(r.opponent_points for r in results)))
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ValidationError(f"Malformed verdict: {e}") from e


def level_for_experience(experience: int) -> int:
    """Levels start at 1 and go up every XP_PER_LEVEL experience points."""
    return 1 + experience // XP_PER_LEVEL


@dataclass(frozen=True)
class OpponentProfile:
    """Skill profile of the synthetic opponent.

    Profiles are values: apply_verdict returns a new profile and leaves
    this one untouched. Experience and level never go down.
    """

    level: int = 1
    experience: int = 0
    success_rate: float = 0.0
    valid_answers: int = 0
    attempted_answers: int = 0
    rounds_played: int = 0

    @property
    def experience_in_level(self) -> int:
        return self.experience % XP_PER_LEVEL

    def apply_verdict(self, verdict: RoundVerdict) -> 'OpponentProfile':
        """Return the profile after one more scored round.

        Raises ValidationError if the verdict does not cover exactly the
        fixed categories in order.
        """
        if not isinstance(verdict, RoundVerdict):
            raise ValidationError(f"Expected a RoundVerdict, got {type(verdict).__name__}")
        if not isinstance(verdict.results, (tuple, list)):
            raise ValidationError("Verdict results must be a sequence")
        for result in verdict.results:
            if not isinstance(result, CategoryResult):
                raise ValidationError(f"Expected a CategoryResult, got {type(result).__name__}")
            if not isinstance(result.human_answer, str) or not isinstance(result.opponent_answer, str):
                raise ValidationError(f"Answers for {result.category} must be strings")
        if verdict.categories != list(Category):
            raise ValidationError("Verdict does not cover the fixed category set")

        valid = sum(1 for r in verdict.results if r.opponent_valid)
        attempted = sum(1 for r in verdict.results if r.opponent_valid or r.opponent_answer.strip())
        gained = valid * XP_VALID_ANSWER + (attempted - valid) * XP_INVALID_ANSWER

        experience = self.experience + gained
        valid_answers = self.valid_answers + valid
        attempted_answers = self.attempted_answers + attempted
        if attempted_answers:
            success_rate = min(100.0, max(0.0, valid_answers * 100.0 / attempted_answers))
        else:
            success_rate = self.success_rate

        return OpponentProfile(
            level=max(self.level, level_for_experience(experience)),
            experience=experience,
            success_rate=success_rate,
            valid_answers=valid_answers,
            attempted_answers=attempted_answers,
            rounds_played=self.rounds_played + 1
        )

    def to_display_dict(self) -> dict:
        """Values shown next to the results screen."""
        return {
            'level': self.level,
            'experience_in_level': f"{self.experience_in_level}/{XP_PER_LEVEL}",
            'success_rate': f"{round_half_up(self.success_rate)}%"
        }

    def to_dict(self) -> dict:
        return {
            'level': self.level,
            'experience': self.experience,
            'success_rate': self.success_rate,
            'valid_answers': self.valid_answers,
            'attempted_answers': self.attempted_answers,
            'rounds_played': self.rounds_played
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'OpponentProfile':
        experience = max(0, int(data.get('experience', 0)))
        return cls(
            level=max(1, int(data.get('level', 1)), level_for_experience(experience)),
            experience=experience,
            success_rate=min(100.0, max(0.0, float(data.get('success_rate', 0.0)))),
            valid_answers=max(0, int(data.get('valid_answers', 0))),
            attempted_answers=max(0, int(data.get('attempted_answers', 0))),
            rounds_played=max(0, int(data.get('rounds_played', 0)))
        )
