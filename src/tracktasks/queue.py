"""Queue that runs tasks in their natural order."""

from __future__ import annotations

import heapq
import itertools
import logging

from .tasks import Task

logger = logging.getLogger(__name__)


class TaskQueue:
    """Collects tasks and executes them lowest-first.

    Tasks that compare equal run in insertion order.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[tuple, int, Task]] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def add(self, task: Task) -> None:
        heapq.heappush(self._heap, (task.sort_key(), next(self._counter), task))
        logger.debug("Queued: %s", task)

    def run(self) -> list[Task]:
        """Execute every queued task and return them in execution order.

        An exception raised by a task stops the run. The failing task is
        discarded and the remaining tasks stay queued.
        """
        executed: list[Task] = []
        while self._heap:
            _, _, task = heapq.heappop(self._heap)
            task.execute()
            executed.append(task)

        logger.info("Executed %d tasks", len(executed))
        return executed
