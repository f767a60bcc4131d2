"""
Runtime settings for StreamFlix.

The API key is never global state: it is read once into a Settings value
and handed to the provider that needs it.
"""
from __future__ import annotations
import json
import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv

TMDB_BASE_URL = "https://api.themoviedb.org/3/"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"


class StreamFlixError(Exception):
    pass


class ConfigError(StreamFlixError):
    pass


@dataclass(frozen=True)
class Settings:
    api_key: str
    base_url: str = TMDB_BASE_URL
    image_base_url: str = TMDB_IMAGE_BASE_URL
    language: str = "en-US"
    timeout: float = 10.0
    popular_pages: int = 5
    now_playing_pages: int = 1
    filter_pattern: str = "[dD]es"

    def with_overrides(self, **changes) -> "Settings":
        """Copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_api_key_from_json(path: str, key: str = "api_key") -> str:
    """Read the TMDB key out of a small JSON document like {"api_key": "..."}."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read key file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Key file {path} is not valid JSON: {e}") from e

    value = data.get(key) if isinstance(data, dict) else None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"Key file {path} has no '{key}' entry")
    return value.strip()


def load_settings(key_file: Optional[str] = None, *, require_key: bool = True) -> Settings:
    load_dotenv()
    if key_file:
        api_key = load_api_key_from_json(key_file)
    else:
        api_key = (os.getenv("TMDB_API_KEY") or "").strip()

    if require_key and not api_key:
        raise ConfigError("TMDB_API_KEY is not set (use the environment, a .env file or --key-file)")

    timeout = os.getenv("STREAMFLIX_TIMEOUT")
    try:
        timeout_value = float(timeout) if timeout else Settings.timeout
    except ValueError as e:
        raise ConfigError(f"STREAMFLIX_TIMEOUT must be a number, got {timeout!r}") from e
    if not timeout_value > 0:
        raise ConfigError(f"STREAMFLIX_TIMEOUT must be positive, got {timeout!r}")

    return Settings(
        api_key=api_key,
        language=os.getenv("STREAMFLIX_LANGUAGE", Settings.language),
        timeout=timeout_value,
    )
