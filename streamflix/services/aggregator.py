"""
Listing aggregator — pulls "popular" and "now playing" concurrently.

Usage:
    aggregator = ListingAggregator(provider, console)
    popular, now_playing = aggregator.run()

Each category gets its own worker thread and its own MovieList, so the
lists have a single writer and need no locking. Pages inside one worker
are fetched strictly in order.
"""
from __future__ import annotations
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Optional, Protocol

from tqdm import tqdm

from ..core.models import MovieList
from ..providers.base import Category, FetchResult
from .console import ConsoleSink

log = logging.getLogger("streamflix.aggregator")


class RemoteSource(Protocol):
    def fetch_page(self, category: Category | str, page: int) -> FetchResult: ...


@dataclass
class AggregateResult:
    popular: MovieList
    now_playing: MovieList
    failures: list[FetchResult] = field(default_factory=list)

    def __iter__(self):
        # unpacks as (popular, now_playing)
        return iter((self.popular, self.now_playing))

    def to_dict(self):
        return {
            "popular": len(self.popular),
            "now_playing": len(self.now_playing),
            "failures": [f.to_dict() for f in self.failures],
        }


class ListingAggregator:
    THREAD_LABELS = {
        Category.POPULAR: "Popular movies",
        Category.NOW_PLAYING: "Now playing movies",
    }

    def __init__(
        self,
        source: RemoteSource,
        console: Optional[ConsoleSink] = None,
        *,
        popular_pages: int = 5,
        now_playing_pages: int = 1,
        progress: bool = False,
    ):
        if popular_pages < 0 or now_playing_pages < 0:
            raise ValueError("Page counts can't be negative")
        self.source = source
        self.console = console or ConsoleSink()
        self.popular_pages = popular_pages
        self.now_playing_pages = now_playing_pages
        self.progress = progress

    def _fetch_category(self, category: Category, pages: int) -> tuple[MovieList, list[FetchResult]]:
        self.console.write_line(
            f"{self.THREAD_LABELS[category]} thread ID: {threading.get_ident()}")

        movies = MovieList()
        failures: list[FetchResult] = []
        page_iter = tqdm(
            range(1, pages + 1),
            desc=f"Fetching {category.label.title()}",
            total=pages,
            disable=not self.progress or category is not Category.POPULAR,
            leave=False,
        )
        for page in page_iter:
            result = self.source.fetch_page(category, page)
            if not result.ok:
                # a failed page contributes nothing; keep going
                log.warning(f"[{category.value}] page {page} skipped: {result.error}")
                failures.append(result)
                continue
            for title, rating in result.pairs:
                movies.add_movie(title, rating)

        log.info(f"[{category.value}] {len(movies)} movies from {pages} page(s)")
        return movies, failures

    def run(self) -> AggregateResult:
        """Fetch both categories concurrently and wait for both to finish."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="streamflix") as pool:
            popular_job = pool.submit(self._fetch_category, Category.POPULAR, self.popular_pages)
            now_playing_job = pool.submit(
                self._fetch_category, Category.NOW_PLAYING, self.now_playing_pages)
            popular, popular_failures = popular_job.result()
            now_playing, now_playing_failures = now_playing_job.result()

        return AggregateResult(
            popular=popular,
            now_playing=now_playing,
            failures=popular_failures + now_playing_failures,
        )
