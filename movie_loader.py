"""Loading of the bundled movie catalog into validated Movie records."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from json import JSONDecodeError
from pathlib import Path
from typing import Any

from models import Movie
from movie_parser import RecordFormatError, parse_movie

DEFAULT_MOVIES_JSON_PATH = Path(__file__).resolve().parent / "data" / "movies.json"

LOGGER = logging.getLogger(__name__)


class MovieLoadError(RuntimeError):
    """Base class for failures that abort the whole load."""


class MovieSourceNotFoundError(MovieLoadError):
    """The movie data file does not exist."""


class MovieSourceError(MovieLoadError):
    """The movie data file exists but could not be read or decoded."""


class MovieFormatError(MovieLoadError):
    """The movie data file is not a well-formed JSON array."""


@dataclass(frozen=True, slots=True)
class LoadStats:
    total: int
    successful: int
    skipped: int


def movies_json_path() -> Path:
    """Return the configured catalog path (MOVIES_JSON_PATH or the bundled file)."""
    configured = os.getenv("MOVIES_JSON_PATH")
    return Path(configured) if configured else DEFAULT_MOVIES_JSON_PATH


def read_source_text(source: str | Path) -> str:
    """Read ``source`` as UTF-8 and join its lines without line terminators.

    Newlines embedded in JSON string values do not survive this merge.
    """
    path = Path(source)
    try:
        with path.open("r", encoding="utf-8") as fh:
            return "".join(line.rstrip("\r\n") for line in fh)
    except FileNotFoundError as exc:
        LOGGER.error("Cannot read movie data file: %s", exc)
        raise MovieSourceNotFoundError(f"Movie data file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Cannot read movie data file: %s", exc)
        raise MovieSourceError(f"Cannot read movie data file: {path}") from exc


def load_movies(source: str | Path | None = None) -> list[Movie]:
    """Load and validate all movies from ``source``.

    Raises:
        MovieSourceNotFoundError: the file does not exist.
        MovieSourceError: the file could not be read.
        MovieFormatError: the payload is not a JSON array.
    """
    movies, _ = load_movies_with_stats(source)
    return movies


def load_movies_with_stats(source: str | Path | None = None) -> tuple[list[Movie], LoadStats]:
    """Like load_movies, but also return the total/successful/skipped counters."""
    path = movies_json_path() if source is None else Path(source)
    payload = _decode_payload(read_source_text(path))

    movies: list[Movie] = []
    skipped = 0
    for index, item in enumerate(payload, start=1):
        movie = _parse_entry(index, item)
        if movie is None:
            skipped += 1
            continue
        movies.append(movie)

    stats = LoadStats(total=len(payload), successful=len(movies), skipped=skipped)
    LOGGER.info(
        "Movie data loading complete: total=%s successful=%s skipped=%s",
        stats.total,
        stats.successful,
        stats.skipped,
    )
    return movies, stats


def _decode_payload(text: str) -> list[Any]:
    try:
        payload = json.loads(text)
    except (JSONDecodeError, RecursionError) as exc:
        LOGGER.error("JSON format error: %s", exc)
        raise MovieFormatError(f"JSON format error: {exc}") from exc

    if not isinstance(payload, list):
        LOGGER.error("JSON format error: expected an array, got %s", type(payload).__name__)
        raise MovieFormatError("JSON format error: expected a top-level array")
    return payload


def _parse_entry(index: int, item: Any) -> Movie | None:
    """Parse one array element; None means the entry is skipped."""
    if not isinstance(item, dict):
        LOGGER.error("Error parsing movie #%s: not a JSON object", index)
        return None
    if not item:
        LOGGER.error("Movie #%s is an empty object", index)
        return None

    try:
        return parse_movie(item)
    except RecordFormatError as exc:
        LOGGER.error("Error parsing movie #%s: %s", index, exc)
    except ValueError as exc:
        LOGGER.error("Movie #%s has invalid data: %s", index, exc)
    return None
