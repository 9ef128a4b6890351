from __future__ import annotations

import math
from collections.abc import Iterable, Iterator

from schedlab.model import Schedule, Task


class ScheduleValidationError(ValueError):
    pass


class EmptyTaskListError(ScheduleValidationError):
    def __init__(self) -> None:
        super().__init__("Empty task list")


class InvalidWorkerCountError(ScheduleValidationError):
    def __init__(self, num_workers: int) -> None:
        super().__init__(
            f"Invalid number of workers (must be 1 or more, got {num_workers})"
        )
        self.num_workers = num_workers


class InvalidConfidenceError(ScheduleValidationError):
    def __init__(self, confidence: float) -> None:
        super().__init__(
            f"Invalid estimate confidence (must be between 0 and 1, got {confidence})"
        )
        self.confidence = confidence


class DurationRangeError(ScheduleValidationError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Minimum duration greater than maximum for task {task_id}")
        self.task_id = task_id


class NonPositiveDurationError(ScheduleValidationError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Invalid task duration for task {task_id}")
        self.task_id = task_id


class DuplicateTaskError(ScheduleValidationError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Duplicate task id {task_id}")
        self.task_id = task_id


class MissingDependencyError(ScheduleValidationError):
    def __init__(self, dependency_id: str, task_id: str) -> None:
        super().__init__(f"Missing dependency {dependency_id} for task {task_id}")
        self.dependency_id = dependency_id
        self.task_id = task_id


class CyclicDependencyError(ScheduleValidationError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Cyclic dependency detected involving task {task_id}")
        self.task_id = task_id


def _find_cycle(tasks: tuple[Task, ...]) -> str | None:
    """Return a task id on some dependency cycle, or None if the graph is a DAG.

    Three-colour DFS. An explicit stack of (node, dependency iterator) pairs
    replaces recursion so long dependency chains cannot exhaust the call stack.
    """

    deps = {t.id: t.dependencies for t in tasks}
    in_progress: set[str] = set()
    done: set[str] = set()

    for task in tasks:
        if task.id in done:
            continue
        in_progress.add(task.id)
        stack: list[tuple[str, Iterator[str]]] = [(task.id, iter(deps[task.id]))]
        while stack:
            node, pending = stack[-1]
            for dep in pending:
                if dep in in_progress:
                    return dep
                if dep not in done:
                    in_progress.add(dep)
                    stack.append((dep, iter(deps[dep])))
                    break
            else:
                stack.pop()
                in_progress.discard(node)
                done.add(node)
    return None


def validate_schedule(schedule: Schedule) -> None:
    if not schedule.tasks:
        raise EmptyTaskListError()

    if schedule.num_workers < 1:
        raise InvalidWorkerCountError(schedule.num_workers)

    if not 0.0 < schedule.confidence < 1.0:
        raise InvalidConfidenceError(schedule.confidence)

    for task in schedule.tasks:
        # `not <=` so NaN bounds are rejected too.
        if not task.min_time <= task.max_time:
            raise DurationRangeError(task.id)
        if task.min_time <= 0 or task.max_time <= 0:
            raise NonPositiveDurationError(task.id)
        if not (math.isfinite(task.min_time) and math.isfinite(task.max_time)):
            raise NonPositiveDurationError(task.id)

    all_ids: set[str] = set()
    for task_id in schedule.task_ids():
        if task_id in all_ids:
            raise DuplicateTaskError(task_id)
        all_ids.add(task_id)

    for task in schedule.tasks:
        for dep in task.dependencies:
            if dep not in all_ids:
                raise MissingDependencyError(dep, task.id)

    cyclic = _find_cycle(schedule.tasks)
    if cyclic is not None:
        raise CyclicDependencyError(cyclic)


def build_schedule(
    tasks: Iterable[Task], num_workers: int, confidence: float
) -> Schedule:
    schedule = Schedule(
        tasks=tuple(tasks), num_workers=num_workers, confidence=confidence
    )
    validate_schedule(schedule)
    return schedule
