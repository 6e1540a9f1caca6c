"""Shared fixtures: a fake transport adapter mounted on real requests sessions."""

import json
import threading
from urllib.parse import urlsplit

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from duos_client.config import AppSettings
from duos_client.http import HttpClient
from duos_client.session import SessionContext, SessionInvalidationInterceptor


class FakeAdapter(BaseAdapter):
    """Transport adapter that serves queued responses and records requests.

    Routes are matched on method and URL without the query string. A route
    added with ``times=None`` answers every matching request.
    """

    def __init__(self):
        super().__init__()
        self._lock = threading.Lock()
        self._routes = []
        self.requests = []

    def add(self, method, url, status=200, json_body=None, content=b"", headers=None, exc=None, times=1):
        response_headers = dict(headers or {})
        if json_body is not None:
            content = json.dumps(json_body).encode("utf-8")
            response_headers.setdefault("Content-Type", "application/json")
        self._routes.append(
            {
                "method": method,
                "url": url,
                "status": status,
                "content": content,
                "headers": response_headers,
                "exc": exc,
                "times": times,
            }
        )

    def send(self, request, **kwargs):
        target = _strip_query(request.url)
        with self._lock:
            self.requests.append(request)
            route = self._take_route(request.method, target)
        if route is None:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        if route["exc"] is not None:
            raise route["exc"]
        return _build_response(request, route)

    def _take_route(self, method, url):
        for route in self._routes:
            if route["method"] == method and route["url"] == url:
                if route["times"] is not None:
                    route["times"] -= 1
                    if route["times"] == 0:
                        self._routes.remove(route)
                return route
        return None

    def requests_to(self, url, method=None):
        return [
            request
            for request in self.requests
            if _strip_query(request.url) == url and (method is None or request.method == method)
        ]

    def close(self):
        pass


def _strip_query(url):
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


def _build_response(request, route):
    response = requests.Response()
    response.status_code = route["status"]
    response.headers = CaseInsensitiveDict(route["headers"])
    response._content = route["content"]
    response._content_consumed = True
    response.encoding = "utf-8"
    response.url = request.url
    response.request = request
    return response


class RecordingNavigator:
    def __init__(self, path="/datasets/catalog"):
        self.path = path
        self.redirects = []
        self._lock = threading.Lock()

    def current_path(self):
        return self.path

    def navigate(self, url):
        with self._lock:
            self.redirects.append(url)


class RecordingReporter:
    def __init__(self, result=None):
        self.calls = []
        self.result = result
        self._lock = threading.Lock()

    def report(self, url, status_code):
        with self._lock:
            self.calls.append((url, status_code))
        return self.result

    def close(self):
        pass


API = "https://api.test"
TDR = "https://tdr.test"


@pytest.fixture
def settings():
    return AppSettings(
        env="prod",
        api_url=API,
        ontology_url="https://ontology.test",
        tdr_api_url=TDR,
        terra_url="https://terra.test",
        app_origin="https://duos.test",
        support_url="https://support.test",
        error_report_url="",
        login_path="/home",
        timeout_seconds=5,
        job_poll_interval_seconds=1.0,
        job_max_polls=0,
        report_workers=1,
    )


@pytest.fixture
def adapter():
    return FakeAdapter()


@pytest.fixture
def transports(adapter):
    session = requests.Session()
    binary_session = requests.Session()
    session.mount("https://", adapter)
    binary_session.mount("https://", adapter)
    return session, binary_session


@pytest.fixture
def session_context():
    context = SessionContext()
    context.sign_in("token-1")
    return context


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def reporter():
    return RecordingReporter()


@pytest.fixture
def interceptor(session_context, navigator):
    return SessionInvalidationInterceptor(session_context, navigator, "/home")


@pytest.fixture
def http_client(settings, session_context, interceptor, reporter, transports):
    session, binary_session = transports
    return HttpClient(
        settings,
        session_context,
        interceptor,
        reporter,
        session=session,
        binary_session=binary_session,
    )
