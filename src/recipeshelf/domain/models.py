from __future__ import annotations

from dataclasses import dataclass, field
import re


# A word starts at the beginning of the text or after any non-word character.
_WORD_START_RE = re.compile(r"(?<!\w)(\w)")


def humanize_title(title: str) -> str:
    """Display form of a raw file name: underscores become spaces, words get a capital."""
    spaced = title.replace("_", " ")
    return _WORD_START_RE.sub(lambda m: m.group(1).upper(), spaced)


@dataclass(frozen=True)
class RecipeEntry:
    title: str
    path: str

    @property
    def name(self) -> str:
        return humanize_title(self.title)


@dataclass(frozen=True)
class RecipeDocument:
    entry: RecipeEntry
    html: str
    meta: dict[str, str] = field(default_factory=dict)
