"""
HTTP fetcher for the TMDB provider. Wraps a requests.Session with common
defaults, headers and a per-call timeout.
"""
from __future__ import annotations
from typing import Optional
from urllib.parse import urljoin

import requests

DEFAULT_UA = "StreamFlix/1.0 (+https://www.themoviedb.org)"


class Fetcher:
    def __init__(self, *, timeout: float = 10, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self._session = session

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "User-Agent": DEFAULT_UA,
                "Accept": "application/json",
            })
        return self._session

    def close(self):
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ── convenience methods ──────────────────

    def get_json(
        self,
        url: str,
        *,
        base_url: str | None = None,
        params: dict | None = None,
        headers: dict | None = None,
    ) -> dict | list:
        """GET and decode JSON. Raises requests.RequestException or ValueError."""
        full = urljoin(base_url, url) if base_url else url
        resp = self._get_session().get(
            full,
            params=params,
            headers=headers or {},
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json()
