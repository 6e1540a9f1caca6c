from __future__ import annotations

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class EmailApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def send_reminder(self, vote_id: int) -> int:
        url = f"{self._settings.api_base()}/api/emailNotifier/reminderMessage/{vote_id}"
        return self._http_client.request_strict("POST", url).status_code
