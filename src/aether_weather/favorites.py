"""Persisted list of favorite city display names."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from .exceptions import FavoritesStoreError


class FavoritesStore(ABC):
    """Whole-list load/save capability; no partial updates, no deduplication."""

    @abstractmethod
    def load(self) -> list[str]:
        """Return the stored list, empty when nothing has been saved."""

    @abstractmethod
    def save(self, favorites: list[str]) -> None:
        """Replace the stored list."""


class InMemoryFavoritesStore(FavoritesStore):
    def __init__(self, initial: list[str] | None = None) -> None:
        self._items = list(initial or [])

    def load(self) -> list[str]:
        return list(self._items)

    def save(self, favorites: list[str]) -> None:
        self._items = list(favorites)


class JsonFileFavoritesStore(FavoritesStore):
    """Stores the list as a JSON array, rewritten on every save."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> list[str]:
        if not self.path.exists():
            return []
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise FavoritesStoreError(f"Failed reading favorites from {self.path}: {exc}") from exc
        if not isinstance(payload, list):
            raise FavoritesStoreError(f"Favorites file {self.path} does not contain a JSON list.")
        return [item for item in payload if isinstance(item, str)]

    def save(self, favorites: list[str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(list(favorites), indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as exc:
            raise FavoritesStoreError(f"Failed writing favorites to {self.path}: {exc}") from exc
