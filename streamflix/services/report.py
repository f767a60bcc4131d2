"""Text rendering of movie lists and the title filter."""
from __future__ import annotations
import re

from ..core.models import Movie, MovieList

SEPARATOR = "_" * 54
DEFAULT_PATTERN = "[dD]es"


def format_rating(rating: float) -> str:
    return f"{rating:g}"


def format_movie(movie: Movie) -> str:
    return f"{movie.title} | {format_rating(movie.rating)}"


def render_block(heading: str, movies: MovieList) -> str:
    lines = [SEPARATOR, heading, SEPARATOR]
    lines.extend(format_movie(m) for m in movies)
    return "\n".join(lines)


def render(label: str, movies: MovieList) -> tuple[str, str, str]:
    """Three blocks: insertion order, by title, by rating."""
    return (
        render_block(label, movies),
        render_block(f"{label} (Sorted Alphabetically)", movies.sorted_by_title()),
        render_block(f"{label} (Sorted by rating)", movies.sorted_by_rating()),
    )


def render_all(label: str, movies: MovieList) -> str:
    return "\n".join(render(label, movies))


def filter_titles(movies: MovieList, pattern: str = DEFAULT_PATTERN) -> MovieList:
    """Movies whose title contains a match for `pattern`, original order kept."""
    regex = re.compile(pattern)
    return MovieList([m for m in movies if regex.search(m.title)])


def render_matches(matches: MovieList) -> str:
    return "\n".join(f"Matching movie: {m.title}" for m in matches)
