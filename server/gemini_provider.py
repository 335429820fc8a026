"""Gemini AI provider implementation."""

import ast
import logging
import threading
import time
import google.generativeai as genai

from core.interfaces import AnswerSource, WordChecker
from core.models import to_category
from core.utils import first_letter, fold_accents, normalize_answer
from core.vocabulary import is_known_word, words_starting_with

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 8


class GeminiProvider(AnswerSource, WordChecker):
    """Gemini-backed word suggestions and plausibility judgements.

    Both operations fall back to the static word lists when the model
    cannot be reached or answers with something unreadable. Results are
    cached per (letter, category) and per (word, category).
    """

    def __init__(self, api_key: str, model_name: str = 'gemini-2.0-flash'):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        self.model_name = model_name
        self._candidates_cache = {}
        self._plausible_cache = {}
        self._lock = threading.Lock()

    def _execute_prompt(self, prompt: str) -> tuple[str, int]:
        start_time = time.time()
        response = self.model.generate_content(prompt)
        end_time = time.time()
        ms = int((end_time - start_time) * 1000)
        return (response.text, ms)

    def _sanitize_list(self, response: str) -> str:
        response = response.replace('```python', '').replace('```', '')
        return response[response.find('['):response.rfind(']')+1]

    def _parse_word_list(self, response: str) -> list[str]:
        sanitized = self._sanitize_list(response)
        try:
            words = ast.literal_eval(sanitized)
        except (SyntaxError, ValueError) as e:
            logger.error(f"Failed to parse word list: {e}")
            logger.error(f"Raw response:\n{response}")
            if '[' not in response:
                logger.error("Diagnosis: No opening bracket '[' found in response")
            elif ']' not in response:
                logger.error("Diagnosis: No closing bracket ']' found in response")
            return []
        if not isinstance(words, list):
            logger.warning(f"Word list response is not a list: {type(words)}")
            return []
        return [w.strip() for w in words if isinstance(w, str) and w.strip()]

    def candidates(self, letter: str, category) -> list[str]:
        category = to_category(category)
        key = (letter.upper(), category)
        with self._lock:
            if key in self._candidates_cache:
                return list(self._candidates_cache[key])

        prompt = f"""
            We are playing the word game "Stop". Suggest up to {MAX_SUGGESTIONS} different
            answers for the category "{category.display_name}" that start with the letter "{letter}".

            Requirements:
            - Each answer must begin with the letter "{letter}"
            - Each answer is one word or a short name (at most 3 words)
            - Order them from most common to most obscure

            Respond with ONLY a Python list of strings, no other text, no markdown formatting.
        """
        try:
            response, ms = self._execute_prompt(prompt)
        except Exception as e:
            logger.warning(f"Gemini suggestion request failed for {category.value}/{letter}: {e}")
            return words_starting_with(category, letter)

        words = [w for w in self._parse_word_list(response) if first_letter(w) == letter.upper()]
        logger.info(f"Gemini suggested {len(words)} words for {category.value}/{letter} in {ms}ms")
        if not words:
            words = words_starting_with(category, letter)
        with self._lock:
            self._candidates_cache[key] = list(words)
        return words

    def is_plausible(self, word: str, category) -> bool:
        category = to_category(category)
        if is_known_word(word, category):
            return True

        key = (fold_accents(normalize_answer(word)), category)
        with self._lock:
            if key in self._plausible_cache:
                return self._plausible_cache[key]

        prompt = f"""
            We are playing the word game "Stop". Is "{word}" an acceptable answer
            for the category "{category.display_name}"?

            Accept common spellings, plurals and well-known names. Reject random
            letters, words from a different category and made-up words.

            Respond with ONLY True or False.
        """
        try:
            response, ms = self._execute_prompt(prompt)
        except Exception as e:
            # Unreachable judge: the validator's shape rules already passed
            logger.warning(f"Gemini judgement failed for '{word}' ({category.value}), accepting: {e}")
            return True

        answer = response.strip().strip('.').lower()
        if answer not in ('true', 'false'):
            logger.warning(f"Unexpected judgement for '{word}' ({category.value}): {response!r}")
            return True

        plausible = answer == 'true'
        with self._lock:
            self._plausible_cache[key] = plausible
        return plausible
