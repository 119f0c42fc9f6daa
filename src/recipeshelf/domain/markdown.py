from __future__ import annotations

from dataclasses import dataclass, field
import re
from typing import Any

import yaml


FRONTMATTER_RE = re.compile(r"^\ufeff?\s*---\r?\n(.*?)\r?\n---\r?\n", re.DOTALL)


@dataclass(frozen=True)
class SplitDocument:
    body: str
    meta: dict[str, str] = field(default_factory=dict)


def split_frontmatter(text: str) -> SplitDocument:
    """Peel a leading YAML block off ``text``.

    Anything that is not a YAML mapping is left in the body untouched, so a
    plain text recipe that happens to open with ``---`` still renders whole.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return SplitDocument(body=text)

    try:
        data = yaml.safe_load(match.group(1))
    except (yaml.YAMLError, ValueError):
        # impossible dates and oversized ints fail as ValueError
        return SplitDocument(body=text)

    if not isinstance(data, dict) or not data:
        return SplitDocument(body=text)

    meta: dict[str, str] = {}
    for key, value in data.items():
        display = display_value(value)
        if display:
            meta[str(key)] = display
    return SplitDocument(body=text[match.end() :], meta=meta)


def display_value(value: Any) -> str | None:
    if value is None or isinstance(value, dict):
        return None
    if isinstance(value, list):
        return ", ".join(str(item) for item in value if item is not None).strip() or None
    text = str(value).strip()
    return text or None
