"""
TMDB — movie listings from api.themoviedb.org (v3).

Flow:
  1. GET movie/popular or movie/now_playing with api_key, language, page
  2. Envelope {"results": [{"title": ..., "vote_average": ...}, ...]}
  3. Each well-formed item becomes a (title, rating) pair

Soft failure: transport errors, bad status codes and undecodable or
mis-shaped envelopes turn into FetchResult.failure. A single malformed
item is skipped and the rest of the page is kept.
"""
from __future__ import annotations
import logging
import math
from typing import Optional

import requests

from ..core.config import Settings
from .base import Category, FetchResult
from .fetcher import Fetcher

log = logging.getLogger("streamflix.providers.tmdb")


def parse_item(item) -> Optional[tuple[str, float]]:
    """Return (title, rating) or None if the item can't be used."""
    if not isinstance(item, dict):
        return None
    title = item.get("title")
    rating = item.get("vote_average")
    if not isinstance(title, str):
        return None
    if isinstance(rating, bool) or not isinstance(rating, (int, float)):
        return None
    if not math.isfinite(rating):
        return None
    return title, float(rating)


class TMDBProvider:
    id = "tmdb"
    name = "The Movie Database"

    def __init__(self, settings: Settings, fetcher: Optional[Fetcher] = None):
        self.settings = settings
        self.fetcher = fetcher or Fetcher(timeout=settings.timeout)

    def close(self):
        self.fetcher.close()

    def _params(self, **extra) -> dict:
        params = {"api_key": self.settings.api_key, "language": self.settings.language}
        params.update(extra)
        return params

    def fetch_page(self, category: Category | str, page: int) -> FetchResult:
        category = Category.parse(category)
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")

        try:
            data = self.fetcher.get_json(
                category.path,
                base_url=self.settings.base_url,
                params=self._params(page=page),
            )
        except (requests.RequestException, ValueError) as e:
            log.warning(f"[tmdb] {category.path} page {page} failed: {e}")
            return FetchResult.failure(category, page, e)

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            log.warning(f"[tmdb] {category.path} page {page}: response has no 'results' list")
            return FetchResult.failure(category, page, "malformed envelope: no 'results' list")

        pairs = []
        skipped = 0
        for item in results:
            pair = parse_item(item)
            if pair is None:
                skipped += 1
                continue
            pairs.append(pair)

        if skipped:
            log.warning(f"[tmdb] {category.path} page {page}: skipped {skipped} malformed item(s)")
        log.debug("[tmdb] %s page %d -> %d movies", category.path, page, len(pairs))
        return FetchResult.success(category, page, pairs, skipped=skipped)

    def fetch_popular(self, page: int) -> FetchResult:
        return self.fetch_page(Category.POPULAR, page)

    def fetch_now_playing(self, page: int) -> FetchResult:
        return self.fetch_page(Category.NOW_PLAYING, page)

    def fetch_details(self, movie_id: int | str) -> Optional[dict]:
        """Full record for one movie, or None when it can't be fetched."""
        try:
            data = self.fetcher.get_json(
                f"movie/{movie_id}",
                base_url=self.settings.base_url,
                params=self._params(),
            )
        except (requests.RequestException, ValueError) as e:
            log.warning(f"[tmdb] movie/{movie_id} failed: {e}")
            return None
        if not isinstance(data, dict):
            log.warning(f"[tmdb] movie/{movie_id}: expected an object")
            return None
        return data

    def poster_url(self, poster_path: Optional[str]) -> Optional[str]:
        if not poster_path:
            return None
        return f"{self.settings.image_base_url}/{poster_path.lstrip('/')}"
