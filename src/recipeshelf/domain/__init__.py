from .markdown import FRONTMATTER_RE, SplitDocument, display_value, split_frontmatter
from .models import RecipeDocument, RecipeEntry, humanize_title

__all__ = [
    "FRONTMATTER_RE",
    "RecipeDocument",
    "RecipeEntry",
    "SplitDocument",
    "display_value",
    "humanize_title",
    "split_frontmatter",
]
