from __future__ import annotations

# Public simulation entrypoint.
#
# Every trial gets its own SeedSequence child, so trials share nothing but the
# read-only schedule and can run on any executor in any order.

import logging

import numpy as np

from schedlab.executors import RunExecutor, default_executor
from schedlab.model import Schedule

logger = logging.getLogger(__name__)


def simulate_many(
    schedule: Schedule,
    runs: int,
    *,
    seed: int | None = None,
    executor: RunExecutor | None = None,
) -> tuple[list[float], list[float]]:
    """Run `runs` independent trials of a validated schedule.

    Returns `(durations, efforts)`. Index i of both lists comes from the same
    trial; the order of trials carries no other meaning.
    """

    if runs < 1:
        raise ValueError(f"runs must be >= 1 (got {runs})")

    seeds = np.random.SeedSequence(seed).spawn(runs)
    executor = executor or default_executor(runs)
    logger.debug(
        "simulating %d trials of %d tasks with %d workers via %s",
        runs,
        len(schedule.tasks),
        schedule.num_workers,
        type(executor).__name__,
    )

    results = executor.execute(schedule=schedule, seeds=seeds)

    durations = [r.total_project_duration for r in results]
    efforts = [r.total_effort_time for r in results]
    return durations, efforts
