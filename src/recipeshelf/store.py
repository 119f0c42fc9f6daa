from __future__ import annotations

import logging
from pathlib import Path
import threading
from typing import Callable

from .domain import RecipeEntry
from .errors import RecipeNotFoundError
from .listing import scan_recipes

logger = logging.getLogger(__name__)

Scanner = Callable[[Path], list[RecipeEntry]]


class RecipeStore:
    """Process-wide recipe index published as immutable snapshots.

    Rescans are serialized by a lock and swap in a whole new tuple, so a
    reader holding ``snapshot`` never sees a half-built index.
    """

    def __init__(self, recipes_dir: str | Path, scanner: Scanner = scan_recipes) -> None:
        self.recipes_dir = Path(recipes_dir)
        self._scanner = scanner
        self._snapshot: tuple[RecipeEntry, ...] = ()
        self._write_lock = threading.Lock()

    @property
    def snapshot(self) -> tuple[RecipeEntry, ...]:
        return self._snapshot

    @property
    def is_empty(self) -> bool:
        return not self._snapshot

    def rescan(self) -> tuple[RecipeEntry, ...]:
        with self._write_lock:
            snapshot = tuple(self._scanner(self.recipes_dir))
            self._snapshot = snapshot
        logger.debug("Indexed %d recipes from %s", len(snapshot), self.recipes_dir)
        return snapshot

    def find_by_title(self, title: str) -> RecipeEntry:
        for recipe in self._snapshot:
            if recipe.title == title:
                return recipe
        raise RecipeNotFoundError(title)
