"""Detection and ``\\url{}`` wrapping of bare URLs in field lines."""

from __future__ import annotations

import re

from .escapes import unescape_latex

URL_SCHEMES = ("http://", "https://", "ftp://")

# A URL runs until the first of these characters, or to the end of the line.
URL_TERMINATORS = " ,)}"

_URL_PATTERNS = tuple(
    re.compile(re.escape(scheme) + "[^" + re.escape(URL_TERMINATORS) + "]*")
    for scheme in URL_SCHEMES
)


def find_urls(line: str) -> list[tuple[int, int]]:
    """Return ``(start, end)`` spans of the URLs in ``line``.

    Spans are grouped by scheme in :data:`URL_SCHEMES` order and are left to
    right within a scheme. Spans of different schemes are not merged.
    """
    return [match.span() for pattern in _URL_PATTERNS for match in pattern.finditer(line)]


def wrap_urls(line: str) -> str:
    """Un-escape ``line`` and wrap every URL it contains in ``\\url{...}``.

    Schemes are processed one after the other, so a URL of a later scheme
    embedded in an already wrapped one is wrapped a second time.
    """
    line = unescape_latex(line)
    for pattern in _URL_PATTERNS:
        line = pattern.sub(lambda match: "\\url{" + match.group(0) + "}", line)
    return line
