"""Shared typed models for the movie catalog."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

UNKNOWN_GENRE = "Unknown Genre"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


@dataclass(frozen=True, slots=True)
class MovieDefects:
    """Per-field validation flags attached to a parsed movie."""

    title_error: bool = False
    year_error: bool = False
    year_error_message: str = ""
    genre_error: bool = False
    poster_error: bool = False

    @property
    def count(self) -> int:
        return sum((self.title_error, self.year_error, self.genre_error, self.poster_error))

    @property
    def any(self) -> bool:
        return self.count > 0


@dataclass(frozen=True, slots=True)
class Movie:
    """Validated movie record.

    Defective fields keep their best-effort value next to the flag so the
    presentation layer can show both. ``genre`` is never None.
    """

    title: str | None
    year: int | None
    genre: str
    poster: str | None
    defects: MovieDefects = field(default_factory=MovieDefects)

    def with_title(self, title: str | None) -> Movie:
        return replace(
            self,
            title=title,
            defects=replace(self.defects, title_error=_is_blank(title)),
        )

    def with_genre(self, genre: str | None) -> Movie:
        return replace(
            self,
            genre=UNKNOWN_GENRE if genre is None else genre,
            defects=replace(self.defects, genre_error=genre is None),
        )

    # Year and poster replacements leave the defect flags as they were.
    def with_year(self, year: int | None) -> Movie:
        return replace(self, year=year)

    def with_poster(self, poster: str | None) -> Movie:
        return replace(self, poster=poster)

    @property
    def has_title_error(self) -> bool:
        return self.defects.title_error

    @property
    def has_year_error(self) -> bool:
        return self.defects.year_error

    @property
    def year_error_message(self) -> str:
        return self.defects.year_error_message

    @property
    def has_genre_error(self) -> bool:
        return self.defects.genre_error

    @property
    def has_poster_error(self) -> bool:
        return self.defects.poster_error
