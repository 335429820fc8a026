"""File-based storage implementation."""

import hashlib
import json
import logging
import os
import re

from core.config import CONFIG_FILE
from core.interfaces import Storage

logger = logging.getLogger(__name__)


def _safe_name(player_name: str) -> str:
    """Make a player name usable in a file name.

    The readable part folds case and punctuation, so a hash of the exact
    name keeps 'Bob' and 'bob' in separate files.
    """
    readable = re.sub(r'[^\w-]', '_', player_name.strip().lower())
    digest = hashlib.sha1(player_name.encode('utf-8')).hexdigest()[:10]
    return f'{readable}_{digest}'


class FileStorage(Storage):
    """File-based storage implementation."""

    def __init__(self, config_file: str = None, state_dir: str = None):
        self.config_file = config_file or os.path.expanduser(CONFIG_FILE)
        # Project root is one level up from server/
        project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        self.state_dir = state_dir or os.environ.get('STOP_STATE_DIR') or project_root
        os.makedirs(self.state_dir, exist_ok=True)

    def _get_rounds_file(self) -> str:
        return os.path.join(self.state_dir, 'stop_rounds.json')

    def _get_profile_file(self, player_name: str) -> str:
        return os.path.join(self.state_dir, f'stop_profile_{_safe_name(player_name)}.json')

    def _read_json(self, path: str, default):
        if os.path.exists(path):
            try:
                with open(path, 'r') as f:
                    return json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error reading {path}: {e}")
                return default
        return default

    def _write_json(self, path: str, data) -> None:
        tmp_path = path + '.tmp'
        with open(tmp_path, 'w') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)

    def load_config(self) -> dict:
        if not os.path.exists(self.config_file):
            raise FileNotFoundError(
                f"Config file not found at {self.config_file}\n"
                f'Please create it with: {{"gemini_api_key": "YOUR_API_KEY_HERE"}}'
            )
        with open(self.config_file, 'r') as f:
            return json.load(f)

    def save_round(self, record: dict) -> None:
        rounds = self._read_json(self._get_rounds_file(), [])
        rounds.append(record)
        self._write_json(self._get_rounds_file(), rounds)

    def load_rounds(self, limit: int | None = None, player_name: str | None = None) -> list[dict]:
        rounds = self._read_json(self._get_rounds_file(), [])
        if player_name is not None:
            rounds = [r for r in rounds if r.get('name') == player_name]
        rounds.sort(key=lambda r: r.get('timestamp', 0), reverse=True)
        if limit is not None:
            rounds = rounds[:limit]
        return rounds

    def load_profile(self, player_name: str) -> dict | None:
        data = self._read_json(self._get_profile_file(player_name), None)
        if data is None or data.get('name') != player_name:
            return None
        return data.get('profile')

    def save_profile(self, player_name: str, profile: dict) -> None:
        self._write_json(self._get_profile_file(player_name), {
            'name': player_name,
            'profile': profile
        })

    def list_players(self) -> list[str]:
        """List all player names with rounds or a saved profile."""
        players = {r.get('name') for r in self._read_json(self._get_rounds_file(), []) if r.get('name')}
        if os.path.exists(self.state_dir):
            for filename in os.listdir(self.state_dir):
                if filename.startswith('stop_profile_') and filename.endswith('.json'):
                    data = self._read_json(os.path.join(self.state_dir, filename), None)
                    if data and data.get('name'):
                        players.add(data['name'])
        return sorted(players)
