"""Counting and collapsing of author/editor name lists."""

from __future__ import annotations

from collections.abc import Iterator

_SEPARATOR = " and "


def _separator_ends(line: str) -> Iterator[int]:
    """Yield the index just past each top-level ``and`` in a field line.

    The scan keeps two flags and nothing else. ``in_quotes`` toggles on every
    unescaped double quote. ``nested`` starts out true because the field name
    precedes the value; the opening brace of the value clears it and every
    further brace toggles it, so names grouped in braces are skipped.
    """
    in_quotes = False
    nested = True
    for i, char in enumerate(line):
        if char == '"' and i > 0 and line[i - 1] != "\\":
            in_quotes = not in_quotes
        elif char in "{}":
            nested = not nested
        elif (
            not in_quotes
            and not nested
            and char == "a"
            and i > 0
            and line.startswith(_SEPARATOR, i - 1)
        ):
            yield i + 3


def count_authors(line: str) -> int:
    """Return the number of names in an ``author`` or ``editor`` field line."""
    return sum(1 for _ in _separator_ends(line)) + 1


def collapse_authors(line: str) -> str:
    """Shorten a name list to its first name followed by ``and others``.

    Lines with a single name are returned unchanged.
    """
    end = next(_separator_ends(line), None)
    if end is None:
        return line
    return line[:end] + " others},"
