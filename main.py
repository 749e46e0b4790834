"""CLI entrypoint: load the movie catalog and print it with its defects."""

from __future__ import annotations

import argparse
import logging
import os

from dotenv import load_dotenv

from movie_loader import MovieLoadError, load_movies
from poster_resolver import PosterResolver, configured_namespace, load_poster_namespace
from report import build_load_message, error_message_for, render_row


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Load the movie catalog and show validation results")
    parser.add_argument(
        "--source",
        default=None,
        help="Path to the movies JSON file (default: MOVIES_JSON_PATH or the bundled data/movies.json)",
    )
    parser.add_argument(
        "--poster-dir",
        default=None,
        help="Directory of poster images used for poster resolution (default: POSTER_DIR or bundled names)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the load message, not the movie rows",
    )
    return parser.parse_args(argv)


def run(source: str | None, poster_dir: str | None, quiet: bool) -> int:
    """Load, summarise and print the catalog. Returns the process exit code."""
    try:
        movies = load_movies(source)
    except MovieLoadError as exc:
        logging.error("Movie loading failed: %s", exc)
        print(error_message_for(exc))
        return 1

    print(build_load_message(movies))
    if quiet or not movies:
        return 0

    namespace = load_poster_namespace(poster_dir) if poster_dir else configured_namespace()
    resolver = PosterResolver(namespace)
    for movie in movies:
        row = render_row(movie, resolver)
        markers = "".join(
            flag
            for flag, failed in (
                ("T", row.title_error),
                ("Y", row.year_error),
                ("G", row.genre_error),
                ("P", movie.has_poster_error),
            )
            if failed
        )
        print(f"{row.title} | {row.year} | {row.genre} | {row.poster} | {markers or '-'}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Initialize config and run the loader."""
    load_dotenv()
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = parse_args(argv)
    return run(source=args.source, poster_dir=args.poster_dir, quiet=args.quiet)


if __name__ == "__main__":
    raise SystemExit(main())
