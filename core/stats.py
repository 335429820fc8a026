"""Player rankings and history built from stored round records."""

import logging

from .config import HISTORY_LIMIT
from .errors import ValidationError
from .models import OpponentProfile, RoundVerdict
from .utils import round_half_up

logger = logging.getLogger(__name__)


def compute_player_rankings(records: list[dict]) -> list[dict]:
    """Aggregate round records per player, best average first.

    Each entry: {name, games_played, total_points, average_points, best_score}.
    """
    stats = {}
    for record in records:
        name = record.get('name')
        if not name:
            continue
        points = int(record.get('player_points', 0))
        entry = stats.setdefault(name, {
            'name': name,
            'games_played': 0,
            'total_points': 0,
            'average_points': 0,
            'best_score': 0
        })
        entry['games_played'] += 1
        entry['total_points'] += points
        entry['best_score'] = max(entry['best_score'], points)

    for entry in stats.values():
        entry['average_points'] = round_half_up(entry['total_points'] / entry['games_played'])

    return sorted(
        stats.values(),
        key=lambda e: (-e['average_points'], -e['best_score'], e['name'])
    )


def recent_history(records: list[dict], limit: int = HISTORY_LIMIT) -> list[dict]:
    """Most recent round records first."""
    ordered = sorted(records, key=lambda r: r.get('timestamp', 0), reverse=True)
    return ordered[:limit]


def seed_profile(records: list[dict]) -> OpponentProfile:
    """Rebuild an opponent profile by replaying stored rounds, oldest first.

    Records that cannot be read back as a verdict are skipped.
    """
    profile = OpponentProfile()
    for record in sorted(records, key=lambda r: r.get('timestamp', 0)):
        try:
            verdict = RoundVerdict.from_dict({
                'letter': record.get('letter', ''),
                'categories': record.get('categories', []),
                'totals': {
                    'player': record.get('player_points', 0),
                    'opponent': record.get('opponent_points', 0)
                }
            })
            profile = profile.apply_verdict(verdict)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Skipping unreadable round record: {e}")
    return profile
