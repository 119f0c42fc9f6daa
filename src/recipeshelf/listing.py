from __future__ import annotations

import logging
import os
from pathlib import Path

from .domain import RecipeEntry

logger = logging.getLogger(__name__)


def scan_recipes(root: str | Path) -> list[RecipeEntry]:
    """Walk ``root`` depth-first and return one entry per non-directory node.

    Entries of each directory are visited in name order, with subdirectories
    interleaved where their names sort. Symlinks are never followed. The walk
    is best effort: an unreadable directory is logged and whatever was
    collected up to that point is returned.
    """
    recipes: list[RecipeEntry] = []
    try:
        _walk(str(root), recipes)
    except OSError as exc:
        logger.warning("Error walking recipes under %s: %s", root, exc)
    return recipes


def _walk(directory: str, recipes: list[RecipeEntry]) -> None:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            _walk(os.path.join(directory, entry.name), recipes)
            continue
        recipes.append(RecipeEntry(title=entry.name, path=os.path.join(directory, entry.name)))
