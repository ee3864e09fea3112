"""Thin JSON client for the storefront backend.

Every non-2xx response and every transport failure becomes an ApiError, so
gateways only ever have one exception type to translate into domain errors.
Response envelopes are normalised here and nowhere else.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)

_MESSAGE_KEYS = ("message", "msg", "error", "detail")
_COLLECTION_KEYS = ("data", "content")


class ApiError(Exception):
    """The backend could not be reached or answered with an error."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload

    @property
    def code(self) -> str | None:
        """Structured error code, when the backend sends one."""
        if isinstance(self.payload, dict):
            code = self.payload.get("code")
            return str(code) if code is not None else None
        return None


class ApiClient:

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        return self._request("GET", path, params=params)

    def post(self, path: str, body: Any = None) -> Any:
        return self._request("POST", path, json=body)

    # --- Internal helpers -----------------------------------------------------

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._url(path)
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise ApiError(f"Could not reach the server: {exc}") from exc

        if not resp.ok:
            error = _build_error(resp)
            if resp.status_code >= 500:
                logger.warning("Server error %s on %s: %s", resp.status_code, url, error)
            else:
                logger.debug("Client error %s on %s: %s", resp.status_code, url, error)
            raise error

        return _parse_body(resp.text)


def _parse_body(text: str) -> Any:
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return text


def _build_error(resp: requests.Response) -> ApiError:
    raw = resp.text or ""
    payload = _parse_body(raw)

    message = None
    if isinstance(payload, dict):
        for key in _MESSAGE_KEYS:
            if payload.get(key):
                message = str(payload[key])
                break
    if message is None and isinstance(payload, str) and payload:
        message = payload
    if message is None:
        message = f"HTTP {resp.status_code} {resp.reason or ''}".strip()

    return ApiError(message, status=resp.status_code, payload=payload)


def unwrap_collection(payload: Any) -> list[Any]:
    """Return the list inside a collection response.

    Accepts a bare list or an object whose ``data`` or ``content`` key holds
    the list.  Anything else is rejected.
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in _COLLECTION_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
    raise ApiError(f"Unexpected collection response: {type(payload).__name__}", payload=payload)


def unwrap_record(payload: Any) -> dict[str, Any]:
    """Return the object inside a single-record response."""
    if isinstance(payload, dict):
        inner = payload.get("data")
        if isinstance(inner, dict):
            return inner
        return payload
    raise ApiError(f"Unexpected record response: {type(payload).__name__}", payload=payload)
