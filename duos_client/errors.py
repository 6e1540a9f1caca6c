from __future__ import annotations

from typing import Any


class DuosClientError(RuntimeError):
    pass


class TransportError(DuosClientError):
    """Raised when no response was received at all (network failure, timeout)."""

    status_code = 502

    def __init__(self, url: str, cause: BaseException):
        super().__init__(f"Request to {url} failed: {cause}")
        self.url = url
        self.cause = cause


class ApiHttpError(DuosClientError):
    def __init__(self, status_code: int, url: str, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class JobError(DuosClientError):
    def __init__(self, job_id: str, message: str):
        super().__init__(message)
        self.job_id = job_id


class JobFailedError(JobError):
    """A polled job reached the ``failed`` state.

    ``report`` holds whatever the error reporter returned for the failure
    (a future when a remote sink is configured, otherwise ``None``).
    """

    def __init__(self, job_id: str, status_url: str, status_code: int | None, report: Any = None):
        super().__init__(job_id, f"Job {job_id} failed with status code {status_code}")
        self.status_url = status_url
        self.status_code = status_code
        self.report = report


class UnknownJobStatusError(JobError):
    def __init__(self, job_id: str, status: Any):
        super().__init__(job_id, f"Job {job_id} returned unrecognized status {status!r}")
        self.status = status


class JobTimeoutError(JobError):
    def __init__(self, job_id: str, attempts: int):
        super().__init__(job_id, f"Job {job_id} still running after {attempts} polls")
        self.attempts = attempts
