from __future__ import annotations

import logging
from pathlib import Path

from markupsafe import escape

from ..domain import RecipeDocument, RecipeEntry, split_frontmatter

logger = logging.getLogger(__name__)

LINE_BREAK = "<br />"


def read_body(entry: RecipeEntry, *, trusted_html: bool = False) -> str:
    return load_recipe(entry, trusted_html=trusted_html).html


def load_recipe(entry: RecipeEntry, *, trusted_html: bool = False) -> RecipeDocument:
    """Read ``entry`` into a display fragment plus its front matter summary.

    The fragment always carries the whole file, front matter included; ``meta``
    is only an extra view of the leading YAML block.
    """
    try:
        text = Path(entry.path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.warning("Failed to read recipe %s: %s", entry.path, exc)
        return RecipeDocument(entry=entry, html=placeholder_body(entry))

    body = text if trusted_html else str(escape(text))
    return RecipeDocument(
        entry=entry,
        html=body.replace("\n", LINE_BREAK),
        meta=split_frontmatter(text).meta,
    )


def placeholder_body(entry: RecipeEntry) -> str:
    return str(escape(f"Unable to get Recipe: {entry.name}"))
