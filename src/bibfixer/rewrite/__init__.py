"""Line-level rewriting helpers used by the entry reformatter."""

from .authors import collapse_authors, count_authors
from .escapes import unescape_latex
from .ordinals import replace_ordinals
from .urls import find_urls, wrap_urls

__all__ = [
    "collapse_authors",
    "count_authors",
    "find_urls",
    "replace_ordinals",
    "unescape_latex",
    "wrap_urls",
]
