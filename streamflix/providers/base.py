"""
Core types for the StreamFlix provider layer.

A page fetch never raises for network or payload trouble. It returns a
FetchResult which is either ok (with the parsed pairs) or a failure
carrying the reason, so callers decide explicitly what a failure means.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


# ──────────────────────────────
#  Listing categories
# ──────────────────────────────
class Category(str, Enum):
    POPULAR = "popular"
    NOW_PLAYING = "now-playing"

    @property
    def path(self) -> str:
        return {
            Category.POPULAR: "movie/popular",
            Category.NOW_PLAYING: "movie/now_playing",
        }[self]

    @property
    def label(self) -> str:
        return self.value.replace("-", " ").upper()

    @classmethod
    def parse(cls, value: "Category | str") -> "Category":
        if isinstance(value, Category):
            return value
        try:
            return cls(str(value).replace("_", "-").lower())
        except ValueError:
            raise ValueError(f"Unknown listing category: {value!r}") from None


# ──────────────────────────────
#  Page fetch output
# ──────────────────────────────
@dataclass
class FetchResult:
    category: Category
    page: int
    pairs: list[tuple[str, float]] = field(default_factory=list)
    error: Optional[str] = None
    skipped: int = 0                  # malformed items dropped from an ok page

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, category, page, pairs, skipped=0):
        return cls(category=category, page=page, pairs=list(pairs), skipped=skipped)

    @classmethod
    def failure(cls, category, page, error):
        return cls(category=category, page=page, error=str(error))

    def to_dict(self):
        d = {"category": self.category.value, "page": self.page, "count": len(self.pairs)}
        if self.error:
            d["error"] = self.error
        return d
