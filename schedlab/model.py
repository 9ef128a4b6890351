from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any

DEFAULT_CONFIDENCE = 0.8


@dataclass(frozen=True)
class Task:
    id: str
    dependencies: tuple[str, ...]
    min_time: float  # days
    max_time: float  # days

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "Task":
        estimate = obj["estimate"]
        if not isinstance(estimate, dict):
            raise TypeError(f"task '{obj['id']}' estimate must be an object")
        deps = obj.get("dependencies") or []
        if isinstance(deps, str) or not isinstance(deps, (list, tuple)):
            raise TypeError(f"task '{obj['id']}' dependencies must be a list")
        return Task(
            id=str(obj["id"]),
            dependencies=tuple(str(d) for d in deps),
            min_time=float(estimate["min"]),
            max_time=float(estimate["max"]),
        )


@dataclass(frozen=True)
class Schedule:
    """Task graph plus the resources and estimate confidence it runs with.

    Instances are candidates until `validate_schedule` accepts them; after that
    they are shared read-only between concurrently running trials.
    """

    tasks: tuple[Task, ...]
    num_workers: int
    confidence: float

    def task_ids(self) -> list[str]:
        return [t.id for t in self.tasks]


@dataclass(frozen=True)
class Project:
    schedule: Schedule
    start_date: dt.date | None = None

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "Project":
        tasks_raw = obj["tasks"]
        if not isinstance(tasks_raw, list):
            raise TypeError("tasks must be a list")
        tasks = []
        for item in tasks_raw:
            if not isinstance(item, dict):
                raise TypeError("tasks entries must be objects")
            tasks.append(Task.from_json(item))

        num_workers = obj["num_workers"]
        # bool is an int subclass.
        if isinstance(num_workers, bool) or not isinstance(num_workers, int):
            raise TypeError(f"num_workers must be an integer, got {num_workers!r}")

        schedule = Schedule(
            tasks=tuple(tasks),
            num_workers=num_workers,
            confidence=float(obj.get("confidence", DEFAULT_CONFIDENCE)),
        )

        start_raw = obj.get("start_date")
        start_date: dt.date | None
        if start_raw is None:
            start_date = None
        elif isinstance(start_raw, dt.datetime):
            start_date = start_raw.date()
        elif isinstance(start_raw, dt.date):
            # YAML decodes bare dates itself.
            start_date = start_raw
        else:
            start_date = dt.date.fromisoformat(str(start_raw))

        return Project(schedule=schedule, start_date=start_date)
