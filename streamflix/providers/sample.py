"""Offline provider serving a fixed list of classics. No network."""
from __future__ import annotations

from ..core.models import SAMPLE_MOVIES
from .base import Category, FetchResult


class SampleProvider:
    id = "sample"
    name = "Built-in sample data"

    def fetch_page(self, category: Category | str, page: int) -> FetchResult:
        category = Category.parse(category)
        if page == 1:
            return FetchResult.success(category, page, SAMPLE_MOVIES)
        return FetchResult.success(category, page, [])

    def close(self):
        pass
