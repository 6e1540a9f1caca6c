from __future__ import annotations

import logging
import threading
from typing import Any, Protocol
from urllib.parse import quote

import requests

from duos_client.models import SessionSnapshot

logger = logging.getLogger(__name__)


class Navigator(Protocol):
    def current_path(self) -> str: ...

    def navigate(self, url: str) -> None: ...


class HeadlessNavigator:
    """Navigator for processes without a browsing context.

    Keeps track of the current path and remembers the last redirect so callers
    can tell that re-authentication is required.
    """

    def __init__(self, current_path: str = "/"):
        self._current_path = current_path
        self.last_redirect: str | None = None

    def current_path(self) -> str:
        return self._current_path

    def set_current_path(self, path: str) -> None:
        self._current_path = path

    def navigate(self, url: str) -> None:
        logger.info("Redirecting to %s", url)
        self.last_redirect = url


class SessionContext:
    def __init__(self):
        self._lock = threading.Lock()
        self._credential: str | None = None
        self._is_valid = False
        self._invalidated = False

    @property
    def is_valid(self) -> bool:
        with self._lock:
            return self._is_valid

    @property
    def credential(self) -> str | None:
        with self._lock:
            return self._credential

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(credential=self._credential, is_valid=self._is_valid)

    def sign_in(self, credential: str) -> None:
        credential = credential.strip()
        if not credential:
            raise ValueError("A non-empty credential is required to sign in")
        with self._lock:
            self._credential = credential
            self._is_valid = True
            self._invalidated = False

    def sign_out(self) -> None:
        with self._lock:
            self._credential = None
            self._is_valid = False
            self._invalidated = True

    def invalidate(self) -> bool:
        """Clear the session; returns True only for the call that cleared it."""
        with self._lock:
            if self._invalidated:
                return False
            self._credential = None
            self._is_valid = False
            self._invalidated = True
            return True

    def auth_headers(self) -> dict[str, str]:
        credential = self.credential
        if not credential:
            return {}
        return {"Authorization": f"Bearer {credential}"}


class SessionInvalidationInterceptor:
    """Response hook that ends the session on any 401.

    Registered on every transport session, so it observes requests regardless
    of which facade issued them. Safe to trigger any number of times: only the
    first 401 after a sign-in clears the session and redirects.
    """

    def __init__(self, session_context: SessionContext, navigator: Navigator, login_path: str = "/home"):
        self._session_context = session_context
        self._navigator = navigator
        self._login_path = login_path

    def __call__(self, response: requests.Response, *args: Any, **kwargs: Any) -> requests.Response:
        if response.status_code == 401:
            self.invalidate()
        return response

    def login_url(self) -> str:
        return_path = quote(self._navigator.current_path(), safe="/")
        return f"{self._login_path}?redirectTo={return_path}"

    def invalidate(self) -> bool:
        if not self._session_context.invalidate():
            return False
        logger.warning("Session expired; redirecting to login")
        self._navigator.navigate(self.login_url())
        return True

    def install(self, session: requests.Session) -> None:
        hooks = session.hooks.setdefault("response", [])
        if self not in hooks:
            hooks.append(self)
