from __future__ import annotations

from enum import Enum
import logging
import threading
from typing import Any, Callable

import requests
from requests.structures import CaseInsensitiveDict

from duos_client.config import AppSettings
from duos_client.errors import ApiHttpError, TransportError
from duos_client.models import (
    BinaryBody,
    EmptyBody,
    JsonBody,
    RequestDescriptor,
    ResponseBody,
    ResponseEnvelope,
)
from duos_client.reporting import ErrorReporter, safe_report
from duos_client.session import SessionContext, SessionInvalidationInterceptor

logger = logging.getLogger(__name__)


class DispatchPolicy(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


class BusyIndicator:
    """Counts in-flight requests; use as a context manager around each call."""

    def __init__(self, on_change: Callable[[int], None] | None = None):
        # Reentrant so a listener may read ``count`` while being notified.
        self._lock = threading.RLock()
        self._count = 0
        self._on_change = on_change

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    @property
    def is_busy(self) -> bool:
        return self.count > 0

    def __enter__(self) -> "BusyIndicator":
        self._update(1)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._update(-1)

    def _update(self, delta: int) -> None:
        # Notify under the lock so listeners observe counts in update order.
        with self._lock:
            self._count += delta
            if self._on_change is not None:
                self._on_change(self._count)


def decode_body(response: requests.Response) -> ResponseBody:
    content = response.content
    if not content:
        return EmptyBody()

    content_type = response.headers.get("Content-Type", "")
    if "json" in content_type.lower():
        try:
            return JsonBody(requests.models.complexjson.loads(content))
        except ValueError:
            logger.debug("Invalid JSON body from %s, keeping raw bytes", response.url)
    return BinaryBody(content=content, content_type=content_type)


class HttpClient:
    def __init__(
        self,
        settings: AppSettings,
        session_context: SessionContext,
        interceptor: SessionInvalidationInterceptor,
        reporter: ErrorReporter,
        *,
        busy: BusyIndicator | None = None,
        session: requests.Session | None = None,
        binary_session: requests.Session | None = None,
    ):
        self._settings = settings
        self._session_context = session_context
        self._interceptor = interceptor
        self._reporter = reporter
        self.busy = busy or BusyIndicator()

        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        self._binary_session = binary_session or requests.Session()
        self._binary_session.headers.update({"Accept": "application/octet-stream"})

        for transport in (self._session, self._binary_session):
            interceptor.install(transport)

    def dispatch(self, descriptor: RequestDescriptor, policy: DispatchPolicy) -> ResponseEnvelope:
        with self.busy:
            try:
                response = self._send(descriptor)
            except requests.RequestException as error:
                self._report(descriptor.url, TransportError.status_code)
                raise TransportError(descriptor.url, error) from error

            status_code = response.status_code
            logger.debug("%s %s -> %s", descriptor.method, descriptor.url, status_code)

            try:
                envelope = ResponseEnvelope(
                    status_code=status_code,
                    url=descriptor.url,
                    headers=CaseInsensitiveDict(response.headers),
                    body=decode_body(response),
                )
            finally:
                response.close()

            if status_code == 401:
                self._interceptor.invalidate()

            if policy is DispatchPolicy.STRICT:
                if status_code >= 400:
                    self._report(descriptor.url, status_code)
                    raise ApiHttpError(
                        status_code=status_code,
                        url=descriptor.url,
                        message=f"HTTP {status_code} for {descriptor.url}: {_excerpt(envelope)}",
                    )
            elif status_code >= 500:
                self._report(descriptor.url, status_code)

            return envelope

    def _send(self, descriptor: RequestDescriptor) -> requests.Response:
        transport = self._binary_session if descriptor.stream else self._session
        auth_headers = self._session_context.auth_headers() if descriptor.authenticated else {}
        headers = {**auth_headers, **descriptor.headers}
        return transport.request(
            descriptor.method,
            descriptor.url,
            headers=headers,
            params=descriptor.params,
            json=descriptor.json_body,
            data=descriptor.data,
            files=descriptor.files,
            timeout=self._settings.timeout_seconds,
            stream=descriptor.stream,
        )

    def _report(self, url: str, status_code: int) -> None:
        safe_report(self._reporter, url, status_code)

    def request_strict(self, method: str, url: str, **fields: Any) -> ResponseEnvelope:
        return self.dispatch(RequestDescriptor(method, url, **fields), DispatchPolicy.STRICT)

    def request_lenient(self, method: str, url: str, **fields: Any) -> ResponseEnvelope:
        return self.dispatch(RequestDescriptor(method, url, **fields), DispatchPolicy.LENIENT)

    def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        return self.request_strict("GET", url, params=params).json()

    def post_json(self, url: str, payload: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self.request_strict("POST", url, json_body=payload, params=params).json()

    def put_json(self, url: str, payload: Any = None, params: dict[str, Any] | None = None) -> Any:
        return self.request_strict("PUT", url, json_body=payload, params=params).json()

    def delete(self, url: str) -> ResponseEnvelope:
        return self.request_strict("DELETE", url)

    def download(self, url: str, payload: Any = None, method: str = "GET") -> ResponseEnvelope:
        return self.request_strict(method, url, json_body=payload, stream=True)

    def upload(
        self,
        url: str,
        files: dict[str, Any],
        data: dict[str, Any] | None = None,
        method: str = "POST",
    ) -> ResponseEnvelope:
        return self.request_strict(method, url, files=files, data=data, stream=True)

    def close(self) -> None:
        self._session.close()
        self._binary_session.close()


def _excerpt(envelope: ResponseEnvelope) -> str:
    body = envelope.body
    if isinstance(body, BinaryBody):
        return body.content[:500].decode("utf-8", errors="replace")
    if isinstance(body, JsonBody):
        return str(body.value)[:500]
    return ""
