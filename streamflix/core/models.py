"""
Core listing types.

  - Movie: one title with its vote average
  - MovieList: insertion-ordered collection of Movies with sorted views
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Movie:
    title: str
    rating: float = 0.0

    def __post_init__(self):
        rating = float(self.rating)
        if not math.isfinite(rating):
            raise ValueError(f"Rating for {self.title!r} must be finite, got {rating}")
        object.__setattr__(self, "rating", rating)

    def to_dict(self):
        return {"title": self.title, "rating": self.rating}


SAMPLE_MOVIES = [
    ("The Shawshank Redemption", 9.3),
    ("The Godfather", 9.2),
    ("The Dark Knight", 9.4),
    ("Pulp Fiction", 9.0),
    ("Forrest Gump", 8.9),
    ("Inception", 9.1),
    ("Fight Club", 8.8),
    ("The Matrix", 9.0),
    ("Goodfellas", 9.1),
    ("The Lord of the Rings: The Return of the King", 9.3),
]


@dataclass
class MovieList:
    """Movies in the order they were added. Sorted views are copies."""
    _movies: list[Movie] = field(default_factory=list)

    def __post_init__(self):
        # never share the caller's list
        self._movies = list(self._movies)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, float]]) -> "MovieList":
        movies = cls()
        for title, rating in pairs:
            movies.add_movie(title, rating)
        return movies

    @classmethod
    def with_sample_data(cls) -> "MovieList":
        return cls.from_pairs(SAMPLE_MOVIES)

    def add_movie(self, title: str, rating: float) -> None:
        self._movies.append(Movie(title, rating))

    @property
    def movies(self) -> tuple[Movie, ...]:
        return tuple(self._movies)

    def sorted_by_title(self) -> "MovieList":
        # str ordering is by code point, independent of locale
        return MovieList(sorted(self._movies, key=lambda m: m.title))

    def sorted_by_rating(self) -> "MovieList":
        # sorted() is stable, so equal ratings keep insertion order
        return MovieList(sorted(self._movies, key=lambda m: m.rating, reverse=True))

    def titles(self) -> list[str]:
        return [m.title for m in self._movies]

    def __iter__(self) -> Iterator[Movie]:
        return iter(tuple(self._movies))

    def __len__(self) -> int:
        return len(self._movies)

    def __bool__(self) -> bool:
        return bool(self._movies)
