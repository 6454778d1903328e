"""Multi-level round-robin task scheduler."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional


class TaskState(enum.IntEnum):
    FREE = 0
    SLEEPING = 1
    RUNNING = 2


@dataclass(eq=False)
class Task:
    """A schedulable task slot."""

    index: int
    state: TaskState = TaskState.FREE
    level: int = 0
    priority: int = 2


@dataclass
class _Level:
    tasks: List[Task] = field(default_factory=list)
    now: int = 0


class TaskController:
    """Keeps tasks on priority levels; the lowest-numbered busy level runs.

    On creation a main task is started on level 0 and an idle task on the
    last level, so that some task is always runnable.
    """

    def __init__(self, max_tasks: int = 1000, max_levels: int = 10) -> None:
        if max_tasks < 2 or max_levels < 1:
            raise ValueError("need at least two tasks and one level")
        self.tasks = [Task(i) for i in range(max_tasks)]
        self.levels = [_Level() for _ in range(max_levels)]
        self.now_lv = 0
        self.lv_change = False

        self.main = self.alloc()
        self.main.priority = 2
        self.main.level = 0
        self._add(self.main)
        self._switchsub()

        self.idle = self.alloc()
        self.run(self.idle, max_levels - 1, 1)

    def alloc(self) -> Task:
        """Take a free task slot; raise RuntimeError when none is left."""
        for task in self.tasks:
            if task.state is TaskState.FREE:
                task.state = TaskState.SLEEPING
                return task
        raise RuntimeError("no free task slot")

    def now(self) -> Task:
        """The task currently running."""
        level = self.levels[self.now_lv]
        return level.tasks[level.now]

    def _add(self, task: Task) -> None:
        self.levels[task.level].tasks.append(task)
        task.state = TaskState.RUNNING

    def _remove(self, task: Task) -> None:
        level = self.levels[task.level]
        i = level.tasks.index(task)
        del level.tasks[i]
        if i < level.now:
            level.now -= 1
        if level.now >= len(level.tasks):
            level.now = 0
        task.state = TaskState.SLEEPING

    def _switchsub(self) -> None:
        self.now_lv = next(
            (i for i, level in enumerate(self.levels) if level.tasks),
            len(self.levels) - 1,
        )
        self.lv_change = False

    def run(self, task: Task, level: int = -1, priority: int = 0) -> None:
        """Start or wake ``task``; negative level keeps its level, priority 0 keeps its priority."""
        if level < 0:
            level = task.level
        if priority > 0:
            task.priority = priority
        if task.state is TaskState.RUNNING and task.level != level:
            self._remove(task)
        if task.state is not TaskState.RUNNING:
            task.level = level
            self._add(task)
        self.lv_change = True

    def sleep(self, task: Task) -> Optional[Task]:
        """Put ``task`` to sleep.

        If it was the running task, returns the task that runs next;
        otherwise returns None.
        """
        if task.state is not TaskState.RUNNING:
            return None
        now_task = self.now()
        self._remove(task)
        if task is now_task:
            self._switchsub()
            return self.now()
        return None

    def switch(self) -> Task:
        """Advance round-robin and return the task that now runs."""
        level = self.levels[self.now_lv]
        level.now += 1
        if level.now >= len(level.tasks):
            level.now = 0
        if self.lv_change:
            self._switchsub()
        return self.now()