"""Tolerant parsing of a single raw movie object into a validated Movie."""

from __future__ import annotations

import json
import logging
import math
import re
from enum import Enum
from typing import Any, Callable, Mapping

from models import UNKNOWN_GENRE, Movie, MovieDefects

LOGGER = logging.getLogger(__name__)

# Integer.parseInt semantics: optional sign, ASCII digits, no padding.
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

_MISSING = object()


class RecordFormatError(ValueError):
    """Raised when a raw record cannot be read as a movie object at all."""


class YearKind(Enum):
    MISSING = "missing"
    TEXT = "text"
    DECIMAL = "decimal"
    INTEGER = "integer"
    UNSUPPORTED = "unsupported"


def classify_year(value: Any) -> YearKind:
    """Map a decoded JSON value onto the closed set of year kinds."""
    if value is _MISSING:
        return YearKind.MISSING
    if isinstance(value, str):
        return YearKind.TEXT
    # bool is an int subclass in Python but never a valid JSON number.
    if isinstance(value, bool):
        return YearKind.UNSUPPORTED
    if isinstance(value, float):
        return YearKind.DECIMAL
    if isinstance(value, int):
        return YearKind.INTEGER
    return YearKind.UNSUPPORTED


def parse_movie(raw: Mapping[str, Any]) -> Movie:
    """Validate every field of ``raw`` and build a Movie.

    Field problems never raise; they end up as flags on ``Movie.defects``.
    RecordFormatError is raised only when ``raw`` is not a mapping.
    """
    if not isinstance(raw, Mapping):
        raise RecordFormatError(f"Expected a JSON object, got {type(raw).__name__}")

    title, title_error = _parse_title(raw)
    year, year_error_message = _parse_year(raw.get("year", _MISSING))
    genre, genre_error = _parse_genre(raw)
    poster, poster_error = _parse_poster(raw)

    defects = MovieDefects(
        title_error=title_error,
        year_error=bool(year_error_message),
        year_error_message=year_error_message,
        genre_error=genre_error,
        poster_error=poster_error,
    )
    return Movie(title=title, year=year, genre=genre, poster=poster, defects=defects)


def _parse_title(raw: Mapping[str, Any]) -> tuple[str | None, bool]:
    title = _text_field(raw, "title")
    if title is None:
        LOGGER.error("Movie title is null or missing")
        return None, True
    if not title.strip():
        LOGGER.error("Title is an empty string")
        return title, True
    return title, False


def _parse_genre(raw: Mapping[str, Any]) -> tuple[str, bool]:
    # An empty genre string is accepted as-is; only missing/null is a defect.
    genre = _text_field(raw, "genre")
    if genre is None:
        LOGGER.error("Movie genre is missing")
        return UNKNOWN_GENRE, True
    return genre, False


def _parse_poster(raw: Mapping[str, Any]) -> tuple[str | None, bool]:
    poster = _text_field(raw, "poster")
    if poster is None:
        LOGGER.error("Poster resource is missing or null")
        return None, True
    if not poster.strip():
        LOGGER.error("Poster resource is an empty string")
        return None, True
    return poster, False


def _parse_year(value: Any) -> tuple[int | None, str]:
    """Return ``(year, error_message)``; an empty message means the year is valid."""
    try:
        handler = _YEAR_HANDLERS[classify_year(value)]
        year, message = handler(value)
    except Exception as exc:  # any failure while deriving the year is a year defect
        year, message = None, f"Error parsing year: {exc}"

    if message:
        LOGGER.error(message)
    return year, message


def _year_missing(_value: Any) -> tuple[int | None, str]:
    return None, "Year field is missing"


def _year_from_text(value: str) -> tuple[int | None, str]:
    parsed = _parse_int(value)
    if parsed is None:
        return None, f"Year is not a valid number: {value}"
    return _check_positive(parsed)


def _year_from_decimal(value: float) -> tuple[int | None, str]:
    # Integer part is kept for display even though the value is flagged.
    # The message uses Python's float repr, so 1e20 reads "1e+20".
    return math.trunc(value), f"Year is a decimal: {value!r}"


def _year_from_integer(value: int) -> tuple[int | None, str]:
    return _check_positive(value)


def _year_unsupported(value: Any) -> tuple[int | None, str]:
    raise RecordFormatError(f"year is not a number: {_json_text(value)}")


_YEAR_HANDLERS: dict[YearKind, Callable[[Any], tuple[int | None, str]]] = {
    YearKind.MISSING: _year_missing,
    YearKind.TEXT: _year_from_text,
    YearKind.DECIMAL: _year_from_decimal,
    YearKind.INTEGER: _year_from_integer,
    YearKind.UNSUPPORTED: _year_unsupported,
}


def _check_positive(year: int) -> tuple[int | None, str]:
    if year <= 0:
        return year, f"Year is negative: {year}"
    return year, ""


def _parse_int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if value < _INT_MIN or value > _INT_MAX:
        return None
    return value


def _text_field(raw: Mapping[str, Any], key: str) -> str | None:
    """Read ``key`` as text; None when absent or JSON null.

    Any other non-string value (number, boolean, object, array) is coerced
    to its compact JSON text, so ``{"a": 1}`` reads as ``'{"a":1}'``.
    """
    value = raw.get(key)
    if value is None or isinstance(value, str):
        return value
    return _json_text(value)


def _json_text(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"))
    except (TypeError, ValueError):
        return repr(value)
