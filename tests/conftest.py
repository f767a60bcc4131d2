import io

import pytest
import requests

from streamflix.core.config import Settings
from streamflix.providers.base import Category, FetchResult
from streamflix.services.console import ConsoleSink


class FakeResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self.payload = payload
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.text is not None:
            raise requests.exceptions.JSONDecodeError("Expecting value", self.text, 0)
        return self.payload


class FakeSession:
    """Records GETs and answers from a {path_suffix: response_or_exception} map."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []
        self.closed = False

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        for suffix, answer in self.routes.items():
            if url.endswith(suffix):
                if isinstance(answer, Exception):
                    raise answer
                if callable(answer):
                    return answer(params)
                return answer
        raise requests.ConnectionError(f"no route for {url}")

    def close(self):
        self.closed = True


class StubSource:
    """RemoteSource answering from {(category, page): pairs or error string}."""

    def __init__(self, pages=None):
        self.pages = pages or {}
        self.calls = []

    def fetch_page(self, category, page):
        category = Category.parse(category)
        self.calls.append((category, page))
        answer = self.pages.get((category, page), [])
        if isinstance(answer, str):
            return FetchResult.failure(category, page, answer)
        return FetchResult.success(category, page, answer)

    def close(self):
        pass


@pytest.fixture
def settings():
    return Settings(api_key="test-key", timeout=3)


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def console(output):
    return ConsoleSink(output)
