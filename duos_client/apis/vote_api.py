from __future__ import annotations

from typing import Any

from duos_client.config import AppSettings
from duos_client.http import HttpClient


class VoteApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    def update_votes(self, vote_ids: list[int], vote: dict[str, Any]) -> list[dict[str, Any]]:
        payload = {
            "vote": vote.get("vote"),
            "rationale": vote.get("rationale"),
            "voteIds": list(vote_ids),
        }
        return self._http_client.put_json(f"{self._settings.api_base()}/api/votes", payload)

    def update_rationale(self, vote_ids: list[int], rationale: str) -> list[dict[str, Any]]:
        payload = {"rationale": rationale, "voteIds": list(vote_ids)}
        return self._http_client.put_json(f"{self._settings.api_base()}/api/votes/rationale", payload)
