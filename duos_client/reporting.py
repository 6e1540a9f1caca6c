from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
import json
import logging

import requests

logger = logging.getLogger(__name__)


def format_report_message(url: str, status_code: int | None) -> str:
    return f"Error fetching response: {json.dumps(url)} Status: {status_code}"


def safe_report(reporter: "ErrorReporter", url: str, status_code: int | None) -> Future | None:
    """Call ``reporter.report`` without ever letting it raise into the caller."""
    try:
        return reporter.report(url, status_code)
    except Exception:  # noqa: BLE001
        logger.warning("Error reporter raised while reporting %s", url, exc_info=True)
        return None


class ErrorReporter:
    """Best-effort forwarding of failed request diagnostics to a remote sink.

    ``report`` never raises and never blocks on the network: the message is
    logged locally and, when a sink URL is configured, posted from a worker
    thread. Failures while talking to the sink are logged and dropped.
    """

    def __init__(
        self,
        sink_url: str = "",
        *,
        timeout_seconds: int = 10,
        max_workers: int = 2,
        session: requests.Session | None = None,
    ):
        self._sink_url = sink_url
        self._timeout_seconds = timeout_seconds
        # Separate from the dispatch sessions so reporting is never intercepted or re-reported.
        self._session = session or requests.Session()
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="error-reporter")

    def report(self, url: str, status_code: int | None) -> Future | None:
        message = format_report_message(url, status_code)
        logger.error(message)

        if not self._sink_url:
            return None

        try:
            return self._executor.submit(self._send, message)
        except RuntimeError as error:
            logger.warning("Error reporter is shut down, dropping report: %s", error)
            return None

    def _send(self, message: str) -> None:
        try:
            response = self._session.post(
                self._sink_url,
                json={"message": message},
                timeout=self._timeout_seconds,
            )
            if response.status_code >= 400:
                logger.warning("Error sink responded with HTTP %s", response.status_code)
        except requests.RequestException as error:
            logger.warning("Failed to deliver error report: %s", error)

    def close(self) -> None:
        self._executor.shutdown(wait=False)
        self._session.close()
