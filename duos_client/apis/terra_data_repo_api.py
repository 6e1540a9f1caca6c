from __future__ import annotations

from typing import Any, Iterable

from duos_client.config import AppSettings
from duos_client.http import HttpClient
from duos_client.jobs import JobPoller


class TerraDataRepoApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient, job_poller: JobPoller):
        self._settings = settings
        self._http_client = http_client
        self._job_poller = job_poller

    def list_snapshots(self, dataset_identifiers: Iterable[str]) -> dict[str, Any]:
        # The repository expects dataset identifiers (e.g. DUOS-000123), not numeric ids.
        return self._http_client.get_json(
            f"{self._settings.tdr_repository_base()}/snapshots",
            params={"duosDatasetIds": list(dataset_identifiers)},
        )

    def prepare_export(self, snapshot_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"{self._settings.tdr_repository_base()}/snapshots/{snapshot_id}/export")

    def wait_for_job(self, job_id: str) -> dict[str, Any]:
        return self._job_poller.wait_for_job(job_id)
