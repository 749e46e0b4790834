from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest

import movie_loader
from movie_loader import (
    LoadStats,
    MovieFormatError,
    MovieLoadError,
    MovieSourceError,
    MovieSourceNotFoundError,
    load_movies,
    load_movies_with_stats,
    read_source_text,
)


def _write_json(tmp_path: Path, payload: Any, name: str = "movies.json") -> Path:
    path = tmp_path / name
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def _valid(title: str, year: int = 2000) -> dict[str, Any]:
    return {"title": title, "year": year, "genre": "Drama", "poster": f"{title.lower()}_poster"}


def test_end_to_end_skips_empty_object(tmp_path: Path) -> None:
    path = _write_json(
        tmp_path,
        [
            _valid("Alpha"),
            {},
            {"title": "Beta", "year": -1999, "genre": "Drama", "poster": "beta_poster"},
            _valid("Gamma"),
            _valid("Delta"),
        ],
    )

    movies, stats = load_movies_with_stats(path)

    assert len(movies) == 4
    assert sum(1 for m in movies if m.has_year_error) == 1
    assert [m.title for m in movies] == ["Alpha", "Beta", "Gamma", "Delta"]
    assert stats == LoadStats(total=5, successful=4, skipped=1)


def test_nonexistent_source_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(MovieSourceNotFoundError) as exc_info:
        load_movies(tmp_path / "missing.json")

    assert isinstance(exc_info.value, MovieLoadError)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_malformed_json_raises_format_error(tmp_path: Path) -> None:
    path = tmp_path / "movies.json"
    path.write_text('[{"title": "Alpha",', encoding="utf-8")

    with pytest.raises(MovieFormatError):
        load_movies(path)


@pytest.mark.parametrize("payload", [{"title": "Alpha"}, "movies", 42, None])
def test_non_array_payload_raises_format_error(tmp_path: Path, payload: Any) -> None:
    path = _write_json(tmp_path, payload)

    with pytest.raises(MovieFormatError, match="array"):
        load_movies(path)


def test_undecodable_bytes_raise_source_error(tmp_path: Path) -> None:
    path = tmp_path / "movies.json"
    path.write_bytes(b"[\xff\xfe]")

    with pytest.raises(MovieSourceError):
        load_movies(path)


def test_format_error_is_distinct_from_not_found(tmp_path: Path) -> None:
    path = tmp_path / "movies.json"
    path.write_text("not json", encoding="utf-8")

    with pytest.raises(MovieLoadError) as exc_info:
        load_movies(path)

    assert not isinstance(exc_info.value, MovieSourceNotFoundError)


def test_non_object_entries_are_skipped(tmp_path: Path) -> None:
    path = _write_json(tmp_path, [_valid("Alpha"), "Beta", 7, None, [1, 2], _valid("Gamma")])

    movies, stats = load_movies_with_stats(path)

    assert [m.title for m in movies] == ["Alpha", "Gamma"]
    assert stats == LoadStats(total=6, successful=2, skipped=4)


def test_record_with_container_title_survives(tmp_path: Path) -> None:
    path = _write_json(
        tmp_path,
        [_valid("Alpha"), {"title": {"a": 1}, "year": 2000, "genre": "x", "poster": "p"}],
    )

    movies, stats = load_movies_with_stats(path)

    assert stats == LoadStats(total=2, successful=2, skipped=0)
    assert movies[1].title == '{"a":1}'
    assert movies[1].has_title_error is False


def test_deeply_nested_payload_raises_format_error(tmp_path: Path) -> None:
    path = tmp_path / "movies.json"
    path.write_text("[" * 200000, encoding="utf-8")

    with pytest.raises(MovieFormatError) as exc_info:
        load_movies_with_stats(path)

    assert isinstance(exc_info.value.__cause__, RecursionError)


def test_field_defects_never_drop_records(tmp_path: Path) -> None:
    path = _write_json(tmp_path, [{"title": None}, {"year": 2010.5}, {"poster": ""}])

    movies = load_movies(path)

    assert len(movies) == 3


def test_empty_array_returns_empty_list(tmp_path: Path) -> None:
    path = _write_json(tmp_path, [])

    movies, stats = load_movies_with_stats(path)

    assert movies == []
    assert stats == LoadStats(total=0, successful=0, skipped=0)


def test_read_source_text_drops_line_terminators(tmp_path: Path) -> None:
    path = tmp_path / "movies.json"
    path.write_text('[\n  {"title": "Alpha"}\r\n]\n', encoding="utf-8")

    assert read_source_text(path) == '[  {"title": "Alpha"}]'


def test_summary_is_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = _write_json(tmp_path, [_valid("Alpha"), {}])

    with caplog.at_level(logging.INFO, logger="movie_loader"):
        load_movies(path)

    assert "total=2 successful=1 skipped=1" in caplog.text
    assert "Movie #2 is an empty object" in caplog.text


def test_default_source_uses_env_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = _write_json(tmp_path, [_valid("Alpha")])
    monkeypatch.setenv("MOVIES_JSON_PATH", str(path))

    movies = load_movies()

    assert [m.title for m in movies] == ["Alpha"]


def test_bundled_catalog_loads(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MOVIES_JSON_PATH", raising=False)

    movies, stats = load_movies_with_stats()

    assert movie_loader.movies_json_path() == movie_loader.DEFAULT_MOVIES_JSON_PATH
    assert stats.total == 10
    assert stats.skipped == 1
    assert len(movies) == 9
