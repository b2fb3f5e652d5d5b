"""In-memory representation of an audio track on disk."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(order=True)
class Track:
    """A track with a display name and the file that holds it.

    Tracks order by name, then by path.
    """

    name: str
    path: Path

    def __str__(self) -> str:
        return self.name
