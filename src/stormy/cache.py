"""File-backed geocoding cache: one JSON file per (city, language) pair."""

from __future__ import annotations

import hashlib
import shutil
from pathlib import Path

from pydantic import ValidationError

from .exceptions import CacheError
from .models import Language, Location


def _safe_component(text: str) -> str:
    text = text.strip().replace(" ", "_")
    return "".join(ch if ch.isalnum() or ch in {"-", "_"} else "_" for ch in text)


def _city_key(city: str) -> str:
    """Readable city name plus a short digest of the exact name.

    Sanitizing is lossy ("Test City" and "Test_City" read the same), so the
    digest keeps distinct names in distinct files.
    """
    city = city.strip()
    digest = hashlib.sha256(city.encode("utf-8")).hexdigest()[:8]
    return f"{_safe_component(city)}_{digest}"


class GeocodingCache:
    """Maps a city name and language to a previously resolved Location.

    Entries never expire; only ``clear`` removes them. There is no locking:
    each entry is written as one whole file.
    """

    def __init__(self, cache_dir: Path) -> None:
        self.cache_dir = cache_dir

    def path_for(self, city: str, language: Language | str) -> Path:
        return self.cache_dir / f"geocoding_{_city_key(city)}_{language}.json"

    def ensure_dir(self) -> None:
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheError(f"Failed creating cache directory {self.cache_dir}: {exc}") from exc

    def get(self, city: str, language: Language | str) -> Location | None:
        """Return the cached Location, or None on a miss."""
        path = self.path_for(city, language)
        if not path.is_file():
            return None
        try:
            return Location.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise CacheError(f"Failed reading cache entry {path}: {exc}") from exc
        except ValidationError as exc:
            raise CacheError(f"Corrupt cache entry {path}: {exc}") from exc

    def put(self, city: str, language: Language | str, location: Location) -> Path:
        """Store ``location`` and return the path of the written entry."""
        self.ensure_dir()
        path = self.path_for(city, language)
        try:
            path.write_text(location.model_dump_json(), encoding="utf-8")
        except OSError as exc:
            raise CacheError(f"Failed writing cache entry {path}: {exc}") from exc
        return path

    def clear(self) -> None:
        """Remove the whole cache directory tree."""
        if not self.cache_dir.exists():
            return
        try:
            shutil.rmtree(self.cache_dir)
        except OSError as exc:
            raise CacheError(f"Failed clearing cache directory {self.cache_dir}: {exc}") from exc
