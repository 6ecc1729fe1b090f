"""Thin HTTP client for the Dune REST API."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import HTTPAdapter
from urllib3.util import Retry

from dune_provisioner.engine.errors import TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.dune.com/api/v1"

Response = tuple[int, dict[str, Any]]


class ReadOnlyRetry(Retry):
    """``Retry`` that gives up on the first failure of a method outside ``allowed_methods``.

    Plain urllib3 retries connection errors for every method; ``allowed_methods``
    only gates read and status retries. Writes must reach the server at most once.
    """

    def increment(
        self,
        method: str | None = None,
        url: str | None = None,
        *args: Any,
        **kwargs: Any,
    ) -> Retry:
        if method is not None and method.upper() not in (self.allowed_methods or ()):
            return Retry(total=0, connect=0, read=0, redirect=0).increment(
                method, url, *args, **kwargs
            )
        return super().increment(method, url, *args, **kwargs)


class DuneClient:
    """JSON request/response wrapper around a ``requests.Session``.

    Only ``GET`` is retried, and only on connection or read failures. The
    adapter never retries on an HTTP status, so an error payload reaches the
    caller on the first answer. ``POST`` is sent exactly once, including when
    the connection cannot be established.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        read_retries: int = 2,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        retry = ReadOnlyRetry(
            total=read_retries,
            connect=read_retries,
            read=read_retries,
            status=0,
            other=0,
            allowed_methods=frozenset({"GET"}),
            backoff_factor=0.5,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)
        self.session.headers.update(
            {"X-Dune-API-Key": api_key, "Content-Type": "application/json"}
        )
        logger.debug("Initialized Dune client for %s", self.base_url)

    def _url(self, *segments: str) -> str:
        return "/".join([self.base_url, *(quote(s, safe="") for s in segments)])

    def _send(self, method: str, url: str, body: dict[str, Any] | None = None) -> Response:
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, json=body, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportFailure(method, url, str(exc)) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            if resp.ok:
                raise TransportFailure(method, url, "response body is not JSON") from exc
            payload = {"error": f"HTTP {resp.status_code}: {resp.text.strip()}"}

        if not isinstance(payload, dict):
            payload = {"data": payload}
        logger.debug("%s %s -> %d", method, url, resp.status_code)
        return resp.status_code, payload

    def post_json(self, path: str, body: dict[str, Any]) -> Response:
        """POST *body* to ``<base_url>/<path>``. Never retried."""
        return self._send("POST", self._url(path), body)

    def get_json(self, *segments: str) -> Response:
        """GET ``<base_url>/<segments...>`` with each segment URL-quoted."""
        return self._send("GET", self._url(*segments))
