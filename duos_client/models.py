from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Union

from duos_client.errors import UnknownJobStatusError

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})


@dataclass(frozen=True)
class RequestDescriptor:
    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    params: Mapping[str, Any] | None = None
    json_body: Any = None
    data: bytes | Mapping[str, Any] | None = None
    files: Mapping[str, Any] | None = None
    stream: bool = False
    authenticated: bool = True

    def __post_init__(self) -> None:
        if self.method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method}")


@dataclass(frozen=True)
class JsonBody:
    value: Any


@dataclass(frozen=True)
class BinaryBody:
    content: bytes
    content_type: str = ""


@dataclass(frozen=True)
class EmptyBody:
    pass


ResponseBody = Union[JsonBody, BinaryBody, EmptyBody]


@dataclass(frozen=True)
class ResponseEnvelope:
    """One HTTP response whose body has already been decoded."""

    status_code: int
    url: str
    headers: Mapping[str, str]
    body: ResponseBody

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if isinstance(self.body, JsonBody):
            return self.body.value
        if isinstance(self.body, EmptyBody):
            return None
        raise TypeError(f"Response from {self.url} is not JSON ({self.body.content_type or 'unknown type'})")

    def content(self) -> bytes:
        if isinstance(self.body, BinaryBody):
            return self.body.content
        if isinstance(self.body, EmptyBody):
            return b""
        raise TypeError(f"Response from {self.url} was decoded as JSON")

    def text(self) -> str:
        return self.content().decode("utf-8")


@dataclass(frozen=True)
class JobHandle:
    job_id: str
    status_url: str
    result_url: str


class JobStatus(str, Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @classmethod
    def parse(cls, job_id: str, value: Any) -> "JobStatus":
        try:
            return cls(value)
        except ValueError:
            raise UnknownJobStatusError(job_id, value) from None


@dataclass(frozen=True)
class SessionSnapshot:
    credential: str | None
    is_valid: bool
