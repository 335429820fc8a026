"""REST API client for the stop game server."""

import requests


class StopAPIClient:
    """Client for communicating with the stop game REST API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session_id = None
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params or {})
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        if self.session_id is not None:
            data['session_id'] = self.session_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def get_config(self) -> dict:
        """Get categories and selectable time limits."""
        return self._get("/api/config")

    def create_session(self, player_name: str) -> dict:
        """Start a game session and remember its id."""
        self.session_id = None
        result = self._post("/api/sessions", {'player_name': player_name})
        self.session_id = result['session_id']
        return result

    def start_round(self, time_limit: int) -> dict:
        """Start a round; returns the letter and categories."""
        return self._post("/api/rounds/start", {'time_limit': time_limit})

    def finish_round(self, answers: dict) -> dict:
        """Submit answers and get the round verdict."""
        return self._post("/api/rounds/finish", {'answers': answers})

    def abandon_round(self) -> dict:
        """Drop the current round."""
        return self._post("/api/rounds/abandon", {})

    def get_profile(self) -> dict:
        """Get the opponent profile for this session."""
        return self._get("/api/profile", {'session_id': self.session_id})

    def get_history(self, limit: int = 10) -> dict:
        """Get the most recent rounds."""
        return self._get("/api/history", {'limit': limit})

    def get_rankings(self) -> dict:
        """Get players ranked by average points."""
        return self._get("/api/rankings")

    def get_players(self) -> dict:
        """List all known player names."""
        return self._get("/api/players")

    def end_session(self) -> dict:
        """Close the current session on the server."""
        result = self._post("/api/sessions/end", {})
        self.session_id = None
        return result
