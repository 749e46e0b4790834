"""Poster identifier resolution against a static image resource namespace."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Collection

from models import Movie

NOT_FOUND = None
PLACEHOLDER_POSTER = "placeholder_poster"
POSTER_SUFFIX = "_poster"
POSTER_IMAGE_EXTENSIONS: frozenset[str] = frozenset({".png", ".jpg", ".jpeg", ".webp"})

# Hand-curated names that do not follow the generic rewrite rules.
DIRECT_POSTER_MAP: dict[str, str] = {
    "interstellar_poster": "interstellar",
    "matrix_poster": "thematrix",
    "inception_poster": "inception",
    "dark_knight_poster": "dark_knight",
    "pulp_fiction_poster": "pulpfiction",
    "avatar_poster": "avatar",
    "titanic_poster": "titanic",
    "godfather_poster": "thegodfather",
}

# Poster images shipped with the application.
BUNDLED_POSTERS: frozenset[str] = frozenset(DIRECT_POSTER_MAP.values()) | {PLACEHOLDER_POSTER}

LOGGER = logging.getLogger(__name__)

PosterNamespace = Collection[str] | Callable[[str], bool]


def load_poster_namespace(directory: str | Path) -> frozenset[str]:
    """Collect image file stems in ``directory`` as resource names.

    An unreadable directory yields an empty namespace, so every poster
    falls back to the placeholder.
    """
    root = Path(directory)
    try:
        names = frozenset(
            path.stem
            for path in root.iterdir()
            if path.is_file() and path.suffix.lower() in POSTER_IMAGE_EXTENSIONS
        )
    except OSError as exc:
        LOGGER.error("Cannot read poster directory %s: %s", root, exc)
        return frozenset()
    LOGGER.debug("Poster namespace: %s images in %s", len(names), root)
    return names


def configured_namespace() -> frozenset[str]:
    """Return the namespace from POSTER_DIR, or the bundled names when unset."""
    poster_dir = os.getenv("POSTER_DIR")
    if not poster_dir:
        return BUNDLED_POSTERS
    return load_poster_namespace(poster_dir)


def clean_poster_name(identifier: str) -> str:
    return identifier.replace(POSTER_SUFFIX, "").replace(".png", "").replace(".jpg", "")


class PosterResolver:
    """Resolve symbolic poster identifiers to existing resource names.

    Candidates are tried in a fixed order and the first one present in the
    namespace wins:

    1. the hand-curated DIRECT_POSTER_MAP entry,
    2. the identifier verbatim,
    3. the identifier with every ``_poster`` removed, lowercased (only when it
       ends in ``_poster``),
    4. the identifier with ``_poster``, ``.png`` and ``.jpg`` removed,
    5. ``"the"`` + the name from step 4.

    Resolution is pure, so repeated calls give the same answer.
    """

    def __init__(self, namespace: PosterNamespace | None = None) -> None:
        if namespace is None:
            namespace = BUNDLED_POSTERS
        if callable(namespace):
            self._exists: Callable[[str], bool] = namespace
        else:
            names = frozenset(namespace)
            self._exists = names.__contains__

    def candidates(self, identifier: str) -> list[str]:
        """Return candidate resource names in lookup order."""
        ordered: list[str] = []
        mapped = DIRECT_POSTER_MAP.get(identifier)
        if mapped is not None:
            ordered.append(mapped)
        ordered.append(identifier)
        if identifier.endswith(POSTER_SUFFIX):
            ordered.append(identifier.replace(POSTER_SUFFIX, "").lower())
        clean_name = clean_poster_name(identifier)
        ordered.append(clean_name)
        ordered.append(f"the{clean_name}")
        return ordered

    def resolve(self, identifier: str) -> str | None:
        """Return the first existing candidate for ``identifier``, or NOT_FOUND."""
        try:
            for candidate in self.candidates(identifier):
                if self._exists(candidate):
                    LOGGER.debug("Poster %r resolved to %r", identifier, candidate)
                    return candidate
        except Exception as exc:  # probing failures degrade to the placeholder
            LOGGER.error("Failed to resolve poster %r: %s", identifier, exc)
            return NOT_FOUND

        LOGGER.warning("Cannot find poster resource for %r", identifier)
        return NOT_FOUND

    def poster_for(self, movie: Movie) -> str:
        """Return the resource name to display for ``movie``, falling back to the placeholder."""
        label = movie.title if movie.title is not None else "[No title]"
        if movie.poster is None or movie.has_poster_error:
            LOGGER.debug("No usable poster for %s, using placeholder", label)
            return PLACEHOLDER_POSTER

        resolved = self.resolve(movie.poster)
        if resolved is NOT_FOUND:
            return PLACEHOLDER_POSTER
        return resolved
