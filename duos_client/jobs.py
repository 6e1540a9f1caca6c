from __future__ import annotations

import logging
import time
from typing import Any, Callable
from urllib.parse import quote

from duos_client.config import AppSettings
from duos_client.errors import JobFailedError, JobTimeoutError, UnknownJobStatusError
from duos_client.http import DispatchPolicy, HttpClient
from duos_client.models import JobHandle, JobStatus, RequestDescriptor
from duos_client.reporting import ErrorReporter, safe_report

logger = logging.getLogger(__name__)

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class JobPoller:
    """Turns the data repository's fire-and-poll job API into a blocking call.

    Status is fetched with the strict policy; a ``running`` job is re-polled
    after a fixed interval, a ``succeeded`` job has its result fetched once and
    decorated with a Terra import link, and a ``failed`` job is reported and
    raised as :class:`JobFailedError`. Transport and HTTP errors propagate
    immediately.
    """

    def __init__(
        self,
        http_client: HttpClient,
        reporter: ErrorReporter,
        settings: AppSettings,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._http_client = http_client
        self._reporter = reporter
        self._settings = settings
        self._sleep = sleep

    def handle_for(self, job_id: str) -> JobHandle:
        status_url = f"{self._settings.tdr_repository_base()}/jobs/{job_id}"
        return JobHandle(job_id=job_id, status_url=status_url, result_url=f"{status_url}/result")

    def wait_for_job(self, job_id: str) -> dict[str, Any]:
        handle = self.handle_for(job_id)
        max_polls = self._settings.job_max_polls
        attempts = 0

        while True:
            payload = self._fetch(handle.status_url)
            attempts += 1
            if not isinstance(payload, dict):
                raise UnknownJobStatusError(job_id, payload)
            status = JobStatus.parse(job_id, payload.get("job_status"))

            if status is JobStatus.SUCCEEDED:
                return self._fetch_result(handle)

            if status is JobStatus.FAILED:
                status_code = payload.get("status_code")
                report = safe_report(self._reporter, handle.status_url, status_code)
                raise JobFailedError(job_id, handle.status_url, status_code, report)

            if max_polls and attempts >= max_polls:
                raise JobTimeoutError(job_id, attempts)

            logger.debug("Job %s still running (poll %d)", job_id, attempts)
            self._sleep(self._settings.job_poll_interval_seconds)

    def _fetch(self, url: str) -> Any:
        envelope = self._http_client.dispatch(RequestDescriptor("GET", url), DispatchPolicy.STRICT)
        return envelope.json()

    def _fetch_result(self, handle: JobHandle) -> dict[str, Any]:
        result = dict(self._fetch(handle.result_url) or {})
        result["terraImportLink"] = self.terra_import_link(result)
        logger.info("Job %s succeeded", handle.job_id)
        return result

    def terra_import_link(self, result: dict[str, Any]) -> str:
        snapshot = result["snapshot"]
        manifest = result["format"]["parquet"]["manifest"]
        return (
            f"{self._settings.terra_url}/#import-data"
            f"?url={self._settings.app_origin}"
            f"&snapshotId={snapshot['id']}"
            f"&format=tdrexport"
            f"&snapshotName={snapshot['name']}"
            f"&tdrmanifest={quote(manifest, safe=_URI_COMPONENT_SAFE)}"
            f"&tdrSyncPermissions=false"
        )
