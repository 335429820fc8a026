"""Unit tests for the stop game core module."""

import asyncio
import random
import time
import unittest
from datetime import datetime, timezone

from core.config import CATEGORIES, EXCLUDED_LETTERS, UNIQUE_POINTS, MAX_ANSWER_CHANCE
from core.controller import (
    GameSession, play_round, draw_letter,
    STAGE_SETUP, STAGE_PLAYING, STAGE_RESULTS, STAGE_WELCOME
)
from core.errors import SessionStateError, ValidationError
from core.interfaces import AnswerSource, WordChecker
from core.models import (
    Category, CategoryResult, OpponentProfile, RoundVerdict,
    build_answer_set, normalize_letter, require_answer_set
)
from core.opponent import OpponentModel, answer_chance
from core.stats import compute_player_rankings, recent_history, seed_profile
from core.utils import first_letter, normalize_answer, round_half_up
from core.validator import RoundValidator, is_well_formed, score_category
from core.vocabulary import (
    WORD_LISTS, AcceptAllChecker, WordListChecker, WordListSource,
    export_word_lists, is_known_word, words_starting_with
)


# ============================================================================
# Mock Implementations
# ============================================================================

class StubChecker(WordChecker):
    """Word checker that rejects a fixed set of words and records calls."""

    def __init__(self, rejected: set = None):
        self.rejected = {w.lower() for w in (rejected or set())}
        self.calls = []

    def is_plausible(self, word: str, category) -> bool:
        self.calls.append((word, category))
        return word.lower() not in self.rejected


class ListSource(AnswerSource):
    """Answer source returning fixed candidates per category."""

    def __init__(self, words: dict = None, default: list = None):
        self.words = words or {}
        self.default = default or []
        self.calls = []

    def candidates(self, letter: str, category) -> list[str]:
        self.calls.append((letter, category))
        return list(self.words.get(category, self.default))


class FailingSource(AnswerSource):
    """Answer source that is always unreachable."""

    def candidates(self, letter: str, category) -> list[str]:
        raise ConnectionError("vocabulary service unreachable")


class SlowSource(AnswerSource):
    """Answer source that takes longer than a round allows."""

    def __init__(self, delay: float):
        self.delay = delay

    def candidates(self, letter: str, category) -> list[str]:
        time.sleep(self.delay)
        return [f"{letter}slow"]


class FixedRandom:
    """Stand-in for random.Random with fixed draws."""

    def __init__(self, value: float = 0.0, pick_last: bool = False):
        self.value = value
        self.pick_last = pick_last

    def random(self) -> float:
        return self.value

    def choice(self, seq):
        return seq[-1] if self.pick_last else seq[0]


def answers(**kwargs) -> dict:
    """Full answer set with the given categories filled."""
    return build_answer_set(kwargs)


def all_answers(letter: str, suffix: str = '') -> dict:
    """An answer starting with letter for every category."""
    return build_answer_set({c.value: f"{letter}{c.value}{suffix}" for c in Category})


def score(letter: str, human: dict, opponent: dict) -> RoundVerdict:
    return RoundValidator().validate_round(letter, human, opponent)


# ============================================================================
# Test Cases
# ============================================================================

class TestCategory(unittest.TestCase):
    """Tests for the category enumeration."""

    def test_sixteen_categories_in_config_order(self):
        self.assertEqual(len(Category), 16)
        self.assertEqual([c.value for c in Category], [key for key, _ in CATEGORIES])

    def test_display_name(self):
        self.assertEqual(Category.MEDIA.display_name, 'Movie/Series/Book')
        self.assertEqual(Category.ANIMAL.display_name, 'Animal')

    def test_every_category_has_a_word_list(self):
        for category in Category:
            self.assertIn(category.value, WORD_LISTS)


class TestAnswerSets(unittest.TestCase):
    """Tests for answer set construction and checking."""

    def test_build_fills_missing_categories(self):
        result = build_answer_set({'animal': 'Ant'})
        self.assertEqual(list(result), list(Category))
        self.assertEqual(result[Category.ANIMAL], 'Ant')
        self.assertEqual(result[Category.FRUIT], '')

    def test_build_keeps_text_untrimmed(self):
        result = build_answer_set({'color': '  Blue '})
        self.assertEqual(result[Category.COLOR], '  Blue ')

    def test_build_none_is_empty(self):
        result = build_answer_set({'color': None})
        self.assertEqual(result[Category.COLOR], '')

    def test_build_rejects_unknown_category(self):
        with self.assertRaises(ValidationError):
            build_answer_set({'animals': 'Ant'})

    def test_require_missing_category(self):
        with self.assertRaises(ValidationError) as ctx:
            require_answer_set({'animal': 'Ant'})
        self.assertIn('fruit', str(ctx.exception))

    def test_require_non_string_value(self):
        raw = {c.value: '' for c in Category}
        raw['animal'] = 5
        with self.assertRaises(ValidationError):
            require_answer_set(raw)

    def test_require_not_a_mapping(self):
        with self.assertRaises(ValidationError):
            require_answer_set(['Ant'])

    def test_require_accepts_string_keys(self):
        raw = {c.value: '' for c in Category}
        result = require_answer_set(raw)
        self.assertEqual(list(result), list(Category))

    def test_normalize_letter(self):
        self.assertEqual(normalize_letter('a'), 'A')
        self.assertEqual(normalize_letter('B'), 'B')

    def test_normalize_letter_invalid(self):
        for bad in ['', 'AB', '1', ' ', None, 7]:
            with self.assertRaises(ValidationError):
                normalize_letter(bad)

    def test_normalize_letter_outside_alphabet(self):
        for bad in ['é', 'ß', 'Ω', 'ж']:
            with self.assertRaises(ValidationError):
                normalize_letter(bad)


class TestUtils(unittest.TestCase):
    """Tests for text helpers."""

    def test_normalize_answer(self):
        self.assertEqual(normalize_answer('  North   America '), 'north america')
        self.assertEqual(normalize_answer(''), '')

    def test_first_letter_ignores_case_and_accents(self):
        self.assertEqual(first_letter('água'), 'A')
        self.assertEqual(first_letter('  Écran'), 'E')

    def test_first_letter_non_letter(self):
        self.assertEqual(first_letter('7up'), '')
        self.assertEqual(first_letter('   '), '')

    def test_round_half_up(self):
        self.assertEqual(round_half_up(12.5), 13)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(2.49), 2)
        self.assertEqual(round_half_up(0.0), 0)


class TestScoreCategory(unittest.TestCase):
    """Tests for the per-category point rule."""

    def test_both_valid_same(self):
        self.assertEqual(score_category(True, True, True), (5, 5))

    def test_both_valid_different(self):
        self.assertEqual(score_category(True, True, False), (10, 10))

    def test_only_human_valid(self):
        self.assertEqual(score_category(True, False, False), (10, 0))

    def test_only_opponent_valid(self):
        self.assertEqual(score_category(False, True, False), (0, 10))

    def test_none_valid_even_if_same(self):
        self.assertEqual(score_category(False, False, True), (0, 0))


class TestWellFormed(unittest.TestCase):
    """Tests for the answer shape heuristic."""

    def test_accepts_words_and_names(self):
        for word in ['Ant', 'North America', 'Coca-Cola', "Levi's", 'St. Louis', 'Água']:
            self.assertTrue(is_well_formed(word), word)

    def test_accepts_decomposed_accents_and_curly_apostrophes(self):
        self.assertTrue(is_well_formed('A\u0301gua'))
        self.assertTrue(is_well_formed('O’Neill'))

    def test_rejects_noise(self):
        for word in ['a', 'Aaaa', 'A123', 'Ant!', '???', 'Ab cd ef gh ij']:
            self.assertFalse(is_well_formed(word), word)


class TestRoundValidator(unittest.TestCase):
    """Tests for round scoring."""

    def test_empty_answers_score_nothing(self):
        for letter in 'ABCMZ':
            verdict = score(letter, answers(), answers())
            self.assertEqual(verdict.totals, {'player': 0, 'opponent': 0})
            for result in verdict.results:
                self.assertFalse(result.human_valid)
                self.assertFalse(result.opponent_valid)

    def test_duplicate_answer_case_insensitive(self):
        verdict = score('A', answers(animal='Ant'), answers(animal='ant'))
        result = verdict.result_for(Category.ANIMAL)
        self.assertTrue(result.human_valid)
        self.assertTrue(result.opponent_valid)
        self.assertEqual((result.human_points, result.opponent_points), (5, 5))
        self.assertEqual(verdict.totals, {'player': 5, 'opponent': 5})

    def test_one_sided_answer(self):
        verdict = score('B', answers(color='Blue'), answers(color=''))
        result = verdict.result_for('color')
        self.assertTrue(result.human_valid)
        self.assertFalse(result.opponent_valid)
        self.assertEqual((result.human_points, result.opponent_points), (10, 0))

    def test_wrong_first_letter_scores_zero(self):
        verdict = score('C', answers(fruit='Dragonfruit'), answers(fruit='Cherry'))
        result = verdict.result_for(Category.FRUIT)
        self.assertFalse(result.human_valid)
        self.assertEqual(result.human_points, 0)
        self.assertEqual(result.opponent_points, 10)

    def test_equal_but_invalid_answers_score_zero(self):
        verdict = score('C', answers(fruit='Dragonfruit'), answers(fruit='dragonfruit'))
        result = verdict.result_for(Category.FRUIT)
        self.assertEqual((result.human_points, result.opponent_points), (0, 0))

    def test_different_valid_answers(self):
        verdict = score('A', answers(animal='Ant'), answers(animal='Antelope'))
        result = verdict.result_for(Category.ANIMAL)
        self.assertEqual((result.human_points, result.opponent_points), (10, 10))

    def test_duplicate_ignores_surrounding_whitespace(self):
        verdict = score('B', answers(color='  Blue '), answers(color='blue'))
        result = verdict.result_for(Category.COLOR)
        self.assertEqual((result.human_points, result.opponent_points), (5, 5))
        # Original text kept for display
        self.assertEqual(result.human_answer, '  Blue ')

    def test_lowercase_letter_accepted(self):
        verdict = score('a', answers(animal='Ant'), answers())
        self.assertEqual(verdict.letter, 'A')
        self.assertEqual(verdict.totals['player'], 10)

    def test_accented_answer_matches_letter(self):
        verdict = score('A', answers(element='Água'), answers())
        self.assertTrue(verdict.result_for(Category.ELEMENT).human_valid)

    def test_noise_is_invalid(self):
        verdict = score('A', answers(animal='Aaaa', color='A1'), answers())
        self.assertEqual(verdict.totals['player'], 0)

    def test_checker_rejection(self):
        checker = StubChecker(rejected={'Aspirin'})
        verdict = RoundValidator(checker).validate_round(
            'A', answers(animal='Aspirin'), answers(animal='Ant'))
        result = verdict.result_for(Category.ANIMAL)
        self.assertFalse(result.human_valid)
        self.assertTrue(result.opponent_valid)
        self.assertEqual((result.human_points, result.opponent_points), (0, 10))

    def test_checker_not_called_for_failed_shape(self):
        checker = StubChecker()
        RoundValidator(checker).validate_round('A', answers(animal='Ant', color='Blue'), answers())
        self.assertEqual(checker.calls, [('Ant', Category.ANIMAL)])

    def test_wordlist_checker(self):
        validator = RoundValidator(WordListChecker())
        verdict = validator.validate_round('A', answers(animal='Ant', color='Antelope'), answers())
        self.assertTrue(verdict.result_for(Category.ANIMAL).human_valid)
        self.assertFalse(verdict.result_for(Category.COLOR).human_valid)

    def test_results_follow_category_order(self):
        verdict = score('M', answers(fruit='Mango', name='Maria'), answers())
        self.assertEqual(verdict.categories, list(Category))

    def test_totals_never_exceed_maximum(self):
        verdict = score('B', all_answers('B'), answers())
        self.assertEqual(verdict.totals, {'player': UNIQUE_POINTS * 16, 'opponent': 0})

    def test_all_duplicates(self):
        verdict = score('B', all_answers('B'), all_answers('b'))
        self.assertEqual(verdict.totals, {'player': 80, 'opponent': 80})

    def test_same_inputs_same_verdict(self):
        human = answers(animal='Ant', color='Amber', fruit='Banana')
        opponent = answers(animal='ant', place='Airport')
        self.assertEqual(score('A', human, opponent), score('A', human, opponent))

    def test_missing_category_rejected(self):
        partial = {c: '' for c in Category if c is not Category.FRUIT}
        with self.assertRaises(ValidationError):
            score('A', partial, answers())
        with self.assertRaises(ValidationError):
            score('A', answers(), partial)

    def test_extra_category_rejected(self):
        raw = {c.value: '' for c in Category}
        raw['sport'] = 'Archery'
        with self.assertRaises(ValidationError):
            score('A', raw, answers())

    def test_decomposed_accent_answer_is_valid(self):
        verdict = score('A', answers(element='A\u0301gua'), answers())
        self.assertTrue(verdict.result_for(Category.ELEMENT).human_valid)

    def test_bad_letter_rejected(self):
        for bad in ['', 'AB', '3', 'ß', 'é']:
            with self.assertRaises(ValidationError):
                score(bad, answers(), answers())

    def test_verdict_to_dict(self):
        verdict = score('A', answers(animal='Ant'), answers(animal='ant'))
        data = verdict.to_dict()
        self.assertEqual(data['letter'], 'A')
        self.assertEqual(data['totals'], {'player': 5, 'opponent': 5})
        self.assertEqual(len(data['categories']), 16)
        animal = data['categories'][3]
        self.assertEqual(animal['category'], 'animal')
        self.assertEqual(animal['human_points'], 5)
        self.assertEqual(RoundVerdict.from_dict(data), verdict)


class TestOpponentGeneration(unittest.TestCase):
    """Tests for opponent answer generation."""

    def test_answer_chance_bounds(self):
        self.assertAlmostEqual(answer_chance(1), 0.55)
        self.assertAlmostEqual(answer_chance(100), MAX_ANSWER_CHANCE)
        chances = [answer_chance(level) for level in range(1, 20)]
        self.assertEqual(chances, sorted(chances))

    def test_answers_every_category(self):
        model = OpponentModel(rng=random.Random(3))
        result = model.generate_answers('M', OpponentProfile())
        self.assertEqual(list(result), list(Category))
        for value in result.values():
            self.assertIsInstance(value, str)

    def test_answers_start_with_letter(self):
        model = OpponentModel(rng=FixedRandom())
        result = model.generate_answers('B', OpponentProfile())
        for category, value in result.items():
            if value:
                self.assertEqual(first_letter(value), 'B', category)
        self.assertEqual(result[Category.ANIMAL], 'bear')

    def test_seeded_generation_is_reproducible(self):
        first = OpponentModel(rng=random.Random(42)).generate_answers('P', OpponentProfile(level=4))
        second = OpponentModel(rng=random.Random(42)).generate_answers('P', OpponentProfile(level=4))
        self.assertEqual(first, second)

    def test_skips_category_above_answer_chance(self):
        model = OpponentModel(rng=FixedRandom(value=0.99))
        result = model.generate_answers('A', OpponentProfile(level=50))
        self.assertTrue(all(v == '' for v in result.values()))

    def test_low_level_uses_common_words(self):
        source = ListSource(default=['ant', 'ape', 'asp', 'auk', 'albatross'])
        model = OpponentModel(source=source, rng=FixedRandom(pick_last=True))
        low = model.generate_answers('A', OpponentProfile(level=1))
        high = model.generate_answers('A', OpponentProfile(level=3))
        self.assertEqual(low[Category.ANIMAL], 'asp')
        self.assertEqual(high[Category.ANIMAL], 'albatross')

    def test_candidates_with_wrong_letter_ignored(self):
        source = ListSource(words={Category.COLOR: ['blue', 'amber']})
        model = OpponentModel(source=source, rng=FixedRandom())
        result = model.generate_answers('A', OpponentProfile())
        self.assertEqual(result[Category.COLOR], 'amber')
        self.assertEqual(result[Category.FRUIT], '')

    def test_checker_filters_candidates(self):
        source = ListSource(default=['ant', 'ape'])
        model = OpponentModel(source=source, checker=StubChecker(rejected={'ant'}), rng=FixedRandom())
        result = model.generate_answers('A', OpponentProfile())
        self.assertEqual(result[Category.ANIMAL], 'ape')

    def test_unfamiliar_letter_gives_empty_strings(self):
        model = OpponentModel(rng=FixedRandom())
        result = model.generate_answers('Q', OpponentProfile())
        self.assertEqual(list(result), list(Category))
        self.assertEqual(result[Category.ELEMENT], '')

    def test_invalid_letter_never_raises(self):
        model = OpponentModel(rng=FixedRandom())
        result = model.generate_answers('7', OpponentProfile())
        self.assertEqual(result, answers())

    def test_failing_source_degrades_to_empty(self):
        model = OpponentModel(source=FailingSource(), rng=FixedRandom())
        result = model.generate_answers('A', OpponentProfile())
        self.assertEqual(result, answers())

    def test_generation_does_not_touch_profile(self):
        profile = OpponentProfile(level=2, experience=150)
        OpponentModel(rng=FixedRandom()).generate_answers('A', profile)
        self.assertEqual(profile, OpponentProfile(level=2, experience=150))

    def test_async_generation(self):
        model = OpponentModel(source=ListSource(default=['ant']), rng=FixedRandom())
        result = asyncio.run(model.generate_answers_async('A', OpponentProfile(), timeout=5))
        self.assertEqual(result, build_answer_set({c.value: 'ant' for c in Category}))

    def test_async_generation_timeout_leaves_empty(self):
        model = OpponentModel(source=SlowSource(0.5), rng=FixedRandom())
        result = asyncio.run(model.generate_answers_async('A', OpponentProfile(), timeout=0.05))
        self.assertEqual(result, answers())


class TestOpponentProfile(unittest.TestCase):
    """Tests for profile updates."""

    def setUp(self):
        self.model = OpponentModel(rng=FixedRandom())

    def test_initial_profile(self):
        profile = OpponentProfile()
        self.assertEqual(profile.level, 1)
        self.assertEqual(profile.experience, 0)
        self.assertEqual(profile.success_rate, 0.0)

    def test_experience_weights(self):
        # One valid, one attempted but wrong letter, the rest empty
        verdict = score('A', answers(), answers(animal='Ant', color='Blue'))
        profile = self.model.record_outcome(OpponentProfile(), verdict)
        self.assertEqual(profile.experience, 12)
        self.assertEqual(profile.valid_answers, 1)
        self.assertEqual(profile.attempted_answers, 2)
        self.assertAlmostEqual(profile.success_rate, 50.0)
        self.assertEqual(profile.rounds_played, 1)

    def test_no_attempts_keeps_success_rate(self):
        verdict = score('A', answers(animal='Ant'), answers())
        profile = self.model.record_outcome(OpponentProfile(), verdict)
        self.assertEqual(profile.experience, 0)
        self.assertEqual(profile.success_rate, 0.0)
        self.assertEqual(profile.rounds_played, 1)

    def test_update_returns_new_profile(self):
        original = OpponentProfile()
        verdict = score('A', answers(), answers(animal='Ant'))
        updated = self.model.record_outcome(original, verdict)
        self.assertEqual(original, OpponentProfile())
        self.assertEqual(updated.experience, 10)

    def test_level_up_every_hundred(self):
        verdict = score('A', answers(), all_answers('A'))
        profile = self.model.record_outcome(OpponentProfile(), verdict)
        self.assertEqual(profile.experience, 160)
        self.assertEqual(profile.level, 2)
        self.assertEqual(profile.experience_in_level, 60)

    def test_ten_perfect_rounds(self):
        profile = OpponentProfile()
        for _ in range(10):
            verdict = score('A', answers(), all_answers('A'))
            profile = self.model.record_outcome(profile, verdict)
        self.assertGreaterEqual(profile.experience, 1600)
        self.assertGreaterEqual(profile.level, 17)
        self.assertEqual(profile.success_rate, 100.0)

    def test_monotonic_over_mixed_rounds(self):
        rng = random.Random(11)
        profile = OpponentProfile()
        words = ['Ant', 'Blue', '', 'Aaaa', 'Amber', 'x']
        for _ in range(30):
            opponent = build_answer_set({c.value: rng.choice(words) for c in Category})
            updated = self.model.record_outcome(profile, score('A', answers(), opponent))
            self.assertGreaterEqual(updated.experience, profile.experience)
            self.assertGreaterEqual(updated.level, profile.level)
            self.assertGreaterEqual(updated.success_rate, 0.0)
            self.assertLessEqual(updated.success_rate, 100.0)
            profile = updated

    def test_malformed_verdict_leaves_profile(self):
        profile = OpponentProfile(level=3, experience=240)
        bad = RoundVerdict(letter='A', results=(), player_total=0, opponent_total=0)
        self.assertIs(self.model.record_outcome(profile, bad), profile)
        self.assertIs(self.model.record_outcome(profile, {'letter': 'A'}), profile)

    def test_stored_null_answers_read_as_empty(self):
        data = score('A', answers(animal='Ant'), answers(color='Amber')).to_dict()
        for row in data['categories']:
            row['opponent_answer'] = None if not row['opponent_answer'] else row['opponent_answer']
            row['human_answer'] = None if not row['human_answer'] else row['human_answer']
        verdict = RoundVerdict.from_dict(data)
        self.assertEqual(verdict.result_for(Category.FRUIT).opponent_answer, '')
        profile = self.model.record_outcome(OpponentProfile(), verdict)
        self.assertEqual(profile.experience, 10)
        self.assertEqual(profile.attempted_answers, 1)

    def test_non_string_answer_leaves_profile(self):
        verdict = score('A', answers(), answers(animal='Ant'))
        results = list(verdict.results)
        results[0] = CategoryResult(
            category=Category.NAME, human_answer='', opponent_answer=None,
            human_valid=False, opponent_valid=False, human_points=0, opponent_points=0
        )
        bad = RoundVerdict(letter='A', results=tuple(results), player_total=0, opponent_total=10)
        profile = OpponentProfile(level=2, experience=150)
        self.assertIs(self.model.record_outcome(profile, bad), profile)
        with self.assertRaises(ValidationError):
            profile.apply_verdict(bad)

    def test_non_result_entries_leave_profile(self):
        verdict = score('A', answers(), answers(animal='Ant'))
        bad = RoundVerdict(letter='A', results=({'category': 'name'},) + verdict.results[1:],
                           player_total=0, opponent_total=10)
        profile = OpponentProfile()
        self.assertIs(self.model.record_outcome(profile, bad), profile)

    def test_display_rounds_half_up(self):
        self.assertEqual(OpponentProfile(success_rate=12.5).to_display_dict()['success_rate'], '13%')

    def test_apply_verdict_raises_on_malformed(self):
        bad = RoundVerdict(letter='A', results=(), player_total=0, opponent_total=0)
        with self.assertRaises(ValidationError):
            OpponentProfile().apply_verdict(bad)

    def test_display_dict(self):
        profile = OpponentProfile(level=3, experience=250, success_rate=66.6)
        self.assertEqual(profile.to_display_dict(), {
            'level': 3,
            'experience_in_level': '50/100',
            'success_rate': '67%'
        })

    def test_from_dict_clamps(self):
        profile = OpponentProfile.from_dict({'experience': -5, 'success_rate': 150, 'level': 0})
        self.assertEqual(profile.experience, 0)
        self.assertEqual(profile.success_rate, 100.0)
        self.assertEqual(profile.level, 1)

    def test_from_dict_level_follows_experience(self):
        profile = OpponentProfile.from_dict({'experience': 250})
        self.assertEqual(profile.level, 3)

    def test_to_dict_and_from_dict_roundtrip(self):
        profile = OpponentProfile(level=2, experience=130, success_rate=75.0,
                                  valid_answers=12, attempted_answers=16, rounds_played=1)
        self.assertEqual(OpponentProfile.from_dict(profile.to_dict()), profile)


class TestPlayRound(unittest.TestCase):
    """Tests for the single-call round controller."""

    def test_generates_opponent_answers_when_missing(self):
        model = OpponentModel(source=ListSource(default=['ant']), rng=FixedRandom())
        profile = OpponentProfile()
        verdict, updated = play_round('A', answers(animal='Ant'), model, RoundValidator(), profile)
        self.assertEqual(verdict.result_for(Category.ANIMAL).opponent_points, 5)
        self.assertEqual(updated.experience, 160)
        self.assertEqual(profile, OpponentProfile())

    def test_uses_given_opponent_answers(self):
        source = ListSource(default=['ant'])
        model = OpponentModel(source=source, rng=FixedRandom())
        verdict, _ = play_round('A', answers(), model, RoundValidator(), OpponentProfile(), answers())
        self.assertEqual(verdict.totals, {'player': 0, 'opponent': 0})
        self.assertEqual(source.calls, [])


class TestGameSession(unittest.TestCase):
    """Tests for the session stage flow."""

    def setUp(self):
        self.source = ListSource(default=['ant'])
        self.session = GameSession(
            opponent_model=OpponentModel(source=self.source, rng=FixedRandom()),
            player_name='Ana',
            rng=random.Random(1)
        )

    def test_name_moves_to_setup(self):
        session = GameSession()
        self.assertEqual(session.stage, STAGE_WELCOME)
        session.set_player_name('  Ana ')
        self.assertEqual(session.player_name, 'Ana')
        self.assertEqual(session.stage, STAGE_SETUP)

    def test_empty_name_rejected(self):
        with self.assertRaises(ValidationError):
            GameSession(player_name='   ')

    def test_start_requires_name(self):
        session = GameSession()
        session.set_time_limit(60)
        with self.assertRaises(SessionStateError):
            session.start_round()

    def test_start_requires_time_limit(self):
        with self.assertRaises(SessionStateError):
            self.session.start_round()

    def test_invalid_time_limit(self):
        with self.assertRaises(ValidationError):
            self.session.set_time_limit(45)

    def test_time_limit_locked_during_round(self):
        self.session.set_time_limit(60)
        self.session.start_round(letter='A', now=1000.0)
        with self.assertRaises(SessionStateError):
            self.session.set_time_limit(120)
        self.assertEqual(self.session.time_limit, 60)
        self.assertEqual(self.session.seconds_remaining(now=1050.0), 10)

    def test_start_round(self):
        self.session.set_time_limit(60)
        letter = self.session.start_round(letter='a', now=1000.0)
        self.assertEqual(letter, 'A')
        self.assertEqual(self.session.stage, STAGE_PLAYING)
        self.assertEqual(self.session.seconds_remaining(now=1030.0), 30)
        self.assertFalse(self.session.is_expired(now=1030.0))
        self.assertTrue(self.session.is_expired(now=1061.0))
        with self.assertRaises(SessionStateError):
            self.session.start_round()

    def test_random_letter_not_excluded(self):
        self.session.set_time_limit(90)
        letter = self.session.start_round()
        self.assertNotIn(letter, EXCLUDED_LETTERS)

    def test_finish_without_opponent_answers(self):
        self.session.set_time_limit(60)
        self.session.start_round(letter='A')
        verdict = self.session.finish_round({'animal': 'Ant'})
        self.assertEqual(verdict.result_for(Category.ANIMAL).human_points, 10)
        self.assertEqual(verdict.totals['opponent'], 0)
        self.assertEqual(self.session.stage, STAGE_RESULTS)
        self.assertEqual(self.session.profile.rounds_played, 1)
        self.assertEqual(self.session.profile.experience, 0)
        self.assertIs(self.session.last_verdict, verdict)

    def test_finish_with_opponent_answers(self):
        self.session.set_time_limit(60)
        self.session.start_round(letter='A')
        self.session.set_opponent_answers(answers(animal='ant'))
        verdict = self.session.finish_round({'animal': 'Ant'})
        self.assertEqual(verdict.totals, {'player': 5, 'opponent': 5})
        self.assertEqual(self.session.profile.experience, 10)
        self.assertEqual(self.source.calls, [])

    def test_malformed_answers_return_to_setup(self):
        profile = self.session.profile
        self.session.set_time_limit(60)
        self.session.start_round(letter='A')
        with self.assertRaises(ValidationError):
            self.session.finish_round({'sport': 'Archery'})
        self.assertEqual(self.session.stage, STAGE_SETUP)
        self.assertIs(self.session.profile, profile)
        self.assertIsNone(self.session.letter)
        self.assertIsNone(self.session.last_verdict)

    def test_finish_without_round(self):
        with self.assertRaises(SessionStateError):
            self.session.finish_round({})

    def test_opponent_answers_need_round(self):
        with self.assertRaises(SessionStateError):
            self.session.set_opponent_answers(answers())

    def test_abandon_keeps_profile(self):
        profile = self.session.profile
        self.session.set_time_limit(60)
        self.session.start_round(letter='A')
        self.session.set_opponent_answers(answers(animal='ant'))
        self.session.abandon_round()
        self.assertEqual(self.session.stage, STAGE_SETUP)
        self.assertIs(self.session.profile, profile)
        self.assertIsNone(self.session.opponent_answers)

    def test_next_round_after_results(self):
        self.session.set_time_limit(60)
        self.session.start_round(letter='A')
        self.session.finish_round({})
        self.session.next_round()
        self.assertEqual(self.session.stage, STAGE_SETUP)
        self.assertEqual(self.session.start_round(letter='B'), 'B')

    def test_build_round_record(self):
        self.session.set_time_limit(60)
        self.session.start_round(letter='A')
        verdict = self.session.finish_round({'animal': 'Ant'})
        record = self.session.build_round_record(verdict, now=datetime(2024, 1, 1, tzinfo=timezone.utc))
        self.assertEqual(record['name'], 'Ana')
        self.assertEqual(record['letter'], 'A')
        self.assertEqual(record['player_points'], 10)
        self.assertEqual(record['opponent_points'], 0)
        self.assertEqual(record['timestamp'], 1704067200000)
        self.assertEqual(record['date'], '2024-01-01T00:00:00+00:00')
        self.assertEqual(len(record['categories']), 16)

    def test_draw_letter(self):
        rng = random.Random(0)
        for _ in range(200):
            self.assertNotIn(draw_letter(rng), EXCLUDED_LETTERS)


class TestStats(unittest.TestCase):
    """Tests for history and rankings."""

    def test_rankings_sorted_by_average(self):
        records = [
            {'name': 'Ana', 'player_points': 100, 'timestamp': 1},
            {'name': 'Ana', 'player_points': 50, 'timestamp': 2},
            {'name': 'Bia', 'player_points': 90, 'timestamp': 3},
        ]
        rankings = compute_player_rankings(records)
        self.assertEqual([r['name'] for r in rankings], ['Bia', 'Ana'])
        self.assertEqual(rankings[1], {
            'name': 'Ana',
            'games_played': 2,
            'total_points': 150,
            'average_points': 75,
            'best_score': 100
        })

    def test_rankings_average_rounds_half_up(self):
        records = [
            {'name': 'Ana', 'player_points': 20, 'timestamp': 1},
            {'name': 'Ana', 'player_points': 5, 'timestamp': 2},
            {'name': 'Bia', 'player_points': 13, 'timestamp': 3},
        ]
        rankings = compute_player_rankings(records)
        self.assertEqual(rankings[0]['name'], 'Ana')
        self.assertEqual(rankings[0]['average_points'], 13)
        self.assertEqual(rankings[0]['best_score'], 20)

    def test_rankings_empty(self):
        self.assertEqual(compute_player_rankings([]), [])

    def test_recent_history(self):
        records = [{'timestamp': t} for t in [5, 1, 9, 3]]
        self.assertEqual([r['timestamp'] for r in recent_history(records, 2)], [9, 5])

    def test_seed_profile_replays_rounds(self):
        session = GameSession(player_name='Ana')
        session.set_time_limit(60)
        session.start_round(letter='A')
        session.set_opponent_answers(answers(animal='Ant', color='Blue'))
        verdict = session.finish_round({})
        record = session.build_round_record(verdict)

        profile = seed_profile([record, record])
        self.assertEqual(profile.experience, 24)
        self.assertEqual(profile.rounds_played, 2)
        self.assertAlmostEqual(profile.success_rate, 50.0)

    def test_seed_profile_skips_bad_records(self):
        profile = seed_profile([
            {'name': 'Ana', 'categories': []},
            {'name': 'Ana'},
            {'name': 'Ana', 'letter': 'A', 'categories': ['animal']},
        ])
        self.assertEqual(profile, OpponentProfile())


class TestVocabulary(unittest.TestCase):
    """Tests for the static word lists."""

    def test_words_starting_with_keeps_order(self):
        self.assertEqual(words_starting_with('animal', 'a')[:3], ['ant', 'alligator', 'antelope'])

    def test_is_known_word(self):
        self.assertTrue(is_known_word('  ANT ', 'animal'))
        self.assertTrue(is_known_word('north  america', Category.CONTINENT))
        self.assertFalse(is_known_word('Ant', 'color'))

    def test_word_list_source(self):
        self.assertEqual(WordListSource().candidates('Z', 'animal'), ['zebra'])

    def test_checkers(self):
        self.assertTrue(WordListChecker().is_plausible('Blue', 'color'))
        self.assertFalse(WordListChecker().is_plausible('Blorb', 'color'))
        self.assertTrue(AcceptAllChecker().is_plausible('Blorb', 'color'))

    def test_export_word_lists(self):
        rows = export_word_lists()
        self.assertEqual(len(rows), sum(len(words) for words in WORD_LISTS.values()))
        self.assertEqual(rows[0]['category'], 'name')
        self.assertEqual(rows[0]['letter'], first_letter(rows[0]['word']))


if __name__ == '__main__':
    unittest.main()
