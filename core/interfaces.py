"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class WordChecker(ABC):
    """Plausibility check shared by answer generation and validation."""

    @abstractmethod
    def is_plausible(self, word: str, category) -> bool:
        """Return True if word plausibly belongs to category."""
        pass


class AnswerSource(ABC):
    """Supplies candidate words for the opponent."""

    @abstractmethod
    def candidates(self, letter: str, category) -> list[str]:
        """Return candidate words for a category starting with letter.
        The list is ordered from most to least common and may be empty."""
        pass


class Storage(ABC):
    """Abstract base class for round history and profile storage."""

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Returns config dict."""
        pass

    @abstractmethod
    def save_round(self, record: dict) -> None:
        """Append a completed round record.
        Record keys: name, date, letter, player_points, opponent_points, categories, timestamp."""
        pass

    @abstractmethod
    def load_rounds(self, limit: int | None = None, player_name: str | None = None) -> list[dict]:
        """Load round records, newest first. Optionally filtered by player."""
        pass

    @abstractmethod
    def load_profile(self, player_name: str) -> dict | None:
        """Load the saved opponent profile for a player. Returns dict or None."""
        pass

    @abstractmethod
    def save_profile(self, player_name: str, profile: dict) -> None:
        """Save the opponent profile for a player."""
        pass

    @abstractmethod
    def list_players(self) -> list[str]:
        """List names of players with saved rounds or profiles."""
        pass
