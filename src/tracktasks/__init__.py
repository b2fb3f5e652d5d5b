"""Ordered file-system tasks for an audio track library."""

import logging

from .queue import TaskQueue
from .tasks import RenameTask, RenameTrackFileTask, Task
from .track import Track

# Install a NullHandler to avoid emitting logs unless the application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["RenameTask", "RenameTrackFileTask", "Task", "TaskQueue", "Track"]
