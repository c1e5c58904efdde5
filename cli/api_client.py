"""REST API client for romaja server."""

import requests


class RomajaAPIClient:
    """Client for communicating with the romaja REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        if data is None:
            data = {}
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def start_round(self) -> dict:
        """Resume the active round or start a new one."""
        return self._get("/api/round")

    def submit_guess(self, guess: str) -> dict:
        """Submit a romanized guess."""
        return self._post("/api/guess", {'guess': guess})

    def get_statistics(self) -> dict:
        return self._get("/api/stats")

    def reset_statistics(self) -> dict:
        return self._post("/api/stats/reset")

    def get_settings(self) -> dict:
        return self._get("/api/settings")

    def set_difficulty(self, difficulty: str) -> dict:
        return self._post("/api/settings", {'difficulty': difficulty})

    def dismiss_help(self) -> dict:
        return self._post("/api/help/dismiss")
