from __future__ import annotations

# One randomized playthrough of a schedule: discrete-event, worker-constrained.

from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from schedlab.model import Schedule
from schedlab.sampler import sample_durations
from schedlab.types import TrialResult

if TYPE_CHECKING:  # pragma: no cover
    from numpy.random import Generator, SeedSequence


def simulate_trial(
    schedule: Schedule, durations: Sequence[float], rng: "Generator"
) -> TrialResult:
    """Play out one realization of `schedule` with the given task durations.

    `durations` holds one sampled duration per task, in task order. A task is
    marked completed as soon as a worker takes it; its dependents become ready
    at that point and are handed out as workers free up.
    """

    tasks = schedule.tasks
    if len(durations) != len(tasks):
        raise ValueError(
            f"expected {len(tasks)} sampled durations, got {len(durations)}"
        )

    duration_of = {t.id: float(d) for t, d in zip(tasks, durations)}
    deps_of = {t.id: t.dependencies for t in tasks}
    dependents: dict[str, list[str]] = {}
    for t in tasks:
        for dep in t.dependencies:
            dependents.setdefault(dep, []).append(t.id)

    ready = [t.id for t in tasks if not t.dependencies]
    queued = set(ready)
    completed: set[str] = set()
    worker_free_at = [0.0] * schedule.num_workers
    now = 0.0

    while len(completed) < len(tasks):
        available = [i for i, free_at in enumerate(worker_free_at) if free_at <= now]

        just_completed: list[str] = []
        for worker in available:
            if not ready:
                break
            # Uniform pick; swap-remove keeps it O(1).
            idx = int(rng.integers(len(ready)))
            ready[idx], ready[-1] = ready[-1], ready[idx]
            task_id = ready.pop()
            queued.discard(task_id)

            completed.add(task_id)
            just_completed.append(task_id)
            worker_free_at[worker] = now + duration_of[task_id]

        for task_id in just_completed:
            for dependent in dependents.get(task_id, ()):
                if dependent in completed or dependent in queued:
                    continue
                if all(dep in completed for dep in deps_of[dependent]):
                    ready.append(dependent)
                    queued.add(dependent)

        now = min(worker_free_at)

    return TrialResult(
        total_project_duration=max(worker_free_at),
        total_effort_time=sum(duration_of[t.id] for t in tasks),
    )


def run_trial(schedule: Schedule, seed: "SeedSequence") -> TrialResult:
    rng = np.random.default_rng(seed)
    durations = sample_durations(rng, schedule.tasks, schedule.confidence)
    return simulate_trial(schedule, durations, rng)
