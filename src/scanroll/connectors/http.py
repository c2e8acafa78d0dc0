"""Shared HTTP plumbing: sessions, timeouts and error translation."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

import requests

from scanroll.constants.connectors import USER_AGENT
from scanroll.exceptions import ConnectorError

logger = logging.getLogger(__name__)


def build_session(headers: dict[str, str], auth: tuple[str, str] | None = None) -> requests.Session:
    """Create a session carrying the platform headers and credentials."""
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT, **headers})
    if auth is not None:
        session.auth = auth
    return session


class ThreadLocalSessions:
    """Hands each thread its own ``requests.Session`` built by ``factory``."""

    def __init__(self, factory: Callable[[], requests.Session]) -> None:
        self._factory = factory
        self._local = threading.local()
        self._lock = threading.Lock()
        self._created: list[requests.Session] = []

    def get(self) -> requests.Session:
        session: requests.Session | None = getattr(self._local, "session", None)
        if session is None:
            session = self._factory()
            self._local.session = session
            with self._lock:
                self._created.append(session)
        return session

    def close(self) -> None:
        """Close every session handed out so far."""
        with self._lock:
            created, self._created = self._created, []
        closed: list[requests.Session] = []
        for session in created:
            if not any(session is seen for seen in closed):
                session.close()
                closed.append(session)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.reason or ""
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return response.reason or ""


def get_json(
    session: requests.Session,
    url: str,
    *,
    label: str,
    params: dict[str, str | int] | None = None,
    timeout: tuple[float, float],
) -> tuple[object, requests.Response]:
    """GET ``url`` and return the decoded JSON body with the response.

    Every failure is raised as ``ConnectorError``: HTTP status >= 400 as
    ``kind="http"``, timeouts as ``"timeout"``, connection problems as
    ``"network"`` and undecodable bodies as ``"malformed"``.
    """
    logger.debug("GET %s params=%s", url, params)
    try:
        response = session.get(url, params=params, timeout=timeout)
    except requests.exceptions.Timeout as exc:
        raise ConnectorError(f"Timeout: no response from {label} API within {timeout[1]}s", kind="timeout") from exc
    except requests.exceptions.RequestException as exc:
        raise ConnectorError(f"Network Error: no response received from {label} API ({exc})", kind="network") from exc

    if response.status_code >= 400:
        raise ConnectorError(
            f"{label} API Error: {response.status_code} - {_error_message(response)}",
            kind="http",
            status_code=response.status_code,
        )

    try:
        return response.json(), response
    except ValueError as exc:
        raise ConnectorError(f"Malformed response from {label} API: body is not JSON", kind="malformed") from exc
