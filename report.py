"""Presentation-side summaries of a loaded movie catalog.

Nothing here touches the loaded records; it only scans them to produce:

  - per-defect counts (DefectSummary) for the post-load notification,
  - the user-visible load/error message, looked up by key in MESSAGES,
  - display texts for one list row (MovieRow), with the poster resource
    resolved through PosterResolver.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from models import Movie
from movie_loader import MovieLoadError, MovieSourceNotFoundError
from poster_resolver import PosterResolver

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Message catalog
# ---------------------------------------------------------------------------

MESSAGES: dict[str, str] = {
    "movies_loaded": "Loaded %d movies",
    "movies_loaded_with_errors": "Loaded %d movies, detected %d data errors",
    "title_inferred_count": "%d movies are missing a title",
    "no_movies_available": "No movie data available",
    "error_file_not_found": "Movie data file not found",
    "error_loading_data": "Error loading movie data",
    "title_placeholder": "Unknown Title",
    "year_label": "Year: %d",
    "year_error": "Year: invalid",
    "year_error_format": "Year: %d (invalid)",
    "year_placeholder": "Year: unknown",
    "genre_label": "Genre: %s",
    "genre_error": "Genre: unknown",
}


def message(key: str, *args: object) -> str:
    """Look up ``key`` in MESSAGES and apply %-formatting with ``args``."""
    template = MESSAGES[key]
    return template % args if args else template


# ---------------------------------------------------------------------------
# Defect counts
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DefectSummary:
    movies: int = 0
    movies_with_errors: int = 0
    total_errors: int = 0
    title_errors: int = 0
    year_errors: int = 0
    genre_errors: int = 0
    poster_errors: int = 0


def summarize_defects(movies: Iterable[Movie]) -> DefectSummary:
    counts = dict.fromkeys(
        ("movies", "flawed", "total", "title", "year", "genre", "poster"), 0
    )
    for movie in movies:
        counts["movies"] += 1
        counts["flawed"] += movie.defects.any
        counts["total"] += movie.defects.count
        counts["title"] += movie.has_title_error
        counts["year"] += movie.has_year_error
        counts["genre"] += movie.has_genre_error
        counts["poster"] += movie.has_poster_error

    return DefectSummary(
        movies=counts["movies"],
        movies_with_errors=counts["flawed"],
        total_errors=counts["total"],
        title_errors=counts["title"],
        year_errors=counts["year"],
        genre_errors=counts["genre"],
        poster_errors=counts["poster"],
    )


def build_load_message(movies: list[Movie]) -> str:
    """Return the notification shown after a successful load."""
    if not movies:
        return message("no_movies_available")

    summary = summarize_defects(movies)
    if summary.total_errors == 0:
        return message("movies_loaded", summary.movies)

    text = message("movies_loaded_with_errors", summary.movies, summary.total_errors)
    if summary.title_errors > 0:
        text += "\n" + message("title_inferred_count", summary.title_errors)

    LOGGER.info(
        "Detected errors in %s movies: title=%s year=%s genre=%s poster=%s",
        summary.movies_with_errors,
        summary.title_errors,
        summary.year_errors,
        summary.genre_errors,
        summary.poster_errors,
    )
    return text


def error_message_for(exc: MovieLoadError) -> str:
    """Map a load failure to the message shown instead of the list."""
    if isinstance(exc, MovieSourceNotFoundError):
        return message("error_file_not_found")
    return f"{message('error_loading_data')}: {exc}"


# ---------------------------------------------------------------------------
# Row rendering
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class MovieRow:
    title: str
    title_error: bool
    year: str
    year_error: bool
    genre: str
    genre_error: bool
    poster: str


def render_row(movie: Movie, resolver: PosterResolver) -> MovieRow:
    """Build the display texts for one movie list row."""
    if movie.has_title_error:
        title = message("title_placeholder")
    else:
        title = movie.title or ""

    if movie.has_year_error:
        # A retained value (negative, decimal) is shown next to the error marker.
        year = message("year_error_format", movie.year) if movie.year is not None else message("year_error")
        year_error = True
    elif movie.year is not None:
        year = message("year_label", movie.year)
        year_error = False
    else:
        year = message("year_placeholder")
        year_error = True

    if movie.has_genre_error:
        genre = message("genre_error")
    else:
        genre = message("genre_label", movie.genre)

    return MovieRow(
        title=title,
        title_error=movie.has_title_error,
        year=year,
        year_error=year_error,
        genre=genre,
        genre_error=movie.has_genre_error,
        poster=resolver.poster_for(movie),
    )
