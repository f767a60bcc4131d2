import pytest
import requests

from conftest import FakeResponse, FakeSession
from streamflix.providers.base import Category
from streamflix.providers.fetcher import Fetcher
from streamflix.providers.tmdb import TMDBProvider, parse_item


def _provider(settings, routes):
    session = FakeSession(routes)
    return TMDBProvider(settings, Fetcher(timeout=settings.timeout, session=session)), session


def _page(*items):
    return FakeResponse({"page": 1, "results": list(items)})


def test_fetch_popular_builds_request_and_parses_pairs(settings):
    provider, session = _provider(settings, {
        "movie/popular": _page(
            {"title": "Movie A", "vote_average": 8.5},
            {"title": "Movie B", "vote_average": 9},
        ),
    })
    result = provider.fetch_popular(3)

    assert result.ok
    assert result.pairs == [("Movie A", 8.5), ("Movie B", 9.0)]
    call = session.calls[0]
    assert call["url"] == "https://api.themoviedb.org/3/movie/popular"
    assert call["params"] == {"api_key": "test-key", "language": "en-US", "page": 3}
    assert call["timeout"] == 3


def test_fetch_now_playing_uses_its_endpoint(settings):
    provider, session = _provider(settings, {
        "movie/now_playing": _page({"title": "Movie C", "vote_average": 7.0}),
    })
    result = provider.fetch_page("now-playing", 1)
    assert result.category is Category.NOW_PLAYING
    assert result.pairs == [("Movie C", 7.0)]
    assert session.calls[0]["url"].endswith("/3/movie/now_playing")


@pytest.mark.parametrize("answer", [
    requests.ConnectionError("connection refused"),
    requests.Timeout("read timed out"),
    FakeResponse(status_code=401),
    FakeResponse(text="<html>oops</html>"),
    FakeResponse({"status_message": "no results key"}),
    FakeResponse({"results": "not a list"}),
    FakeResponse(["not", "an", "object"]),
])
def test_page_failures_are_soft(settings, answer, caplog):
    """Transport and envelope problems come back as a failed result, never raise."""
    provider, _ = _provider(settings, {"movie/popular": answer})
    with caplog.at_level("WARNING", logger="streamflix.providers.tmdb"):
        result = provider.fetch_popular(2)
    assert not result.ok
    assert result.pairs == []
    assert result.page == 2
    assert "movie/popular page 2" in caplog.text


def test_malformed_items_are_skipped(settings):
    provider, _ = _provider(settings, {
        "movie/popular": _page(
            {"title": "Good", "vote_average": 6.1},
            {"vote_average": 5.0},
            {"title": "No rating"},
            {"title": "Text rating", "vote_average": "7.2"},
            {"title": "Bool rating", "vote_average": True},
            "garbage",
            {"title": "Also good", "vote_average": 0},
        ),
    })
    result = provider.fetch_popular(1)
    assert result.ok
    assert result.pairs == [("Good", 6.1), ("Also good", 0.0)]
    assert result.skipped == 5


def test_parse_item_rejects_non_finite_ratings():
    assert parse_item({"title": "NaN", "vote_average": float("nan")}) is None
    assert parse_item({"title": "Inf", "vote_average": float("inf")}) is None
    assert parse_item({"title": "Fine", "vote_average": 10}) == ("Fine", 10.0)


def test_unknown_category_is_a_programming_error(settings):
    provider, session = _provider(settings, {})
    with pytest.raises(ValueError):
        provider.fetch_page("top-rated", 1)
    with pytest.raises(ValueError):
        provider.fetch_page(Category.POPULAR, 0)
    assert session.calls == []


def test_fetch_details_and_poster_url(settings):
    provider, session = _provider(settings, {
        "movie/550": FakeResponse({"id": 550, "title": "Fight Club", "poster_path": "/abc.jpg"}),
    })
    details = provider.fetch_details(550)
    assert details["title"] == "Fight Club"
    assert session.calls[0]["params"] == {"api_key": "test-key", "language": "en-US"}
    assert provider.poster_url(details["poster_path"]) == "https://image.tmdb.org/t/p/w500/abc.jpg"
    assert provider.poster_url(None) is None


def test_fetch_details_soft_fails(settings):
    provider, _ = _provider(settings, {"movie/1": requests.Timeout("slow")})
    assert provider.fetch_details(1) is None


def test_close_releases_session(settings):
    provider, session = _provider(settings, {})
    provider.close()
    assert session.closed
