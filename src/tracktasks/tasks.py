"""Tasks that can be queued and executed in a defined order."""

from __future__ import annotations

import abc
import logging
from typing import Any

from .track import Track

logger = logging.getLogger(__name__)


class Task(abc.ABC):
    """Unit of work with a natural ordering.

    Lighter tasks run first. Tasks of different kinds never compare their
    payloads: the kind's name settles ties between equal weights.
    """

    def weight(self) -> int:
        return 10

    def sort_key(self) -> tuple[Any, ...]:
        return (self.weight(), type(self).__name__)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    @abc.abstractmethod
    def execute(self) -> None:
        """Perform the task."""


class RenameTask(Task):
    """Base class for tasks that give something a new name."""

    def __init__(self, new_name: str) -> None:
        self.new_name = new_name

    def sort_key(self) -> tuple[Any, ...]:
        return (*super().sort_key(), self.new_name)


class RenameTrackFileTask(RenameTask):
    """Rename a track and the audio file that backs it."""

    def __init__(self, new_name: str, track: Track) -> None:
        super().__init__(new_name)
        self.track = track

    def weight(self) -> int:
        # Tracks are renamed before anything that contains them.
        return 1

    def sort_key(self) -> tuple[Any, ...]:
        # There shouldn't be two tasks for the same track.
        return (self.weight(), type(self).__name__, self.track)

    def __str__(self) -> str:
        return f'Track rename: "{self.track.name}" -> "{self.new_name}"'

    def execute(self) -> None:
        """Set the track's name and rename its file to match, keeping the extension.

        Raises:
            FileExistsError: If a different file already has the target name
            OSError: If the rename itself fails
        """
        source = self.track.path
        target = source.with_name(f"{self.new_name}{source.suffix}")

        # A case-only rename finds the source itself on case-insensitive filesystems.
        if target.exists() and not target.samefile(source):
            raise FileExistsError(f"Cannot rename {source.name}: {target.name} already exists")

        logger.info("Renaming: [%s] -> [%s]", source.name, target.name)
        source.rename(target)
        self.track.name = self.new_name
        self.track.path = target
