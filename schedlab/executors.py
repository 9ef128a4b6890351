from __future__ import annotations

import logging
import os
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from schedlab.model import Schedule
from schedlab.trial import run_trial
from schedlab.types import TrialResult

if TYPE_CHECKING:  # pragma: no cover
    from numpy.random import SeedSequence

logger = logging.getLogger(__name__)

# Below this many trials, process start-up costs more than it saves.
SERIAL_THRESHOLD = 2_000


class RunExecutor(Protocol):
    def execute(
        self, *, schedule: Schedule, seeds: list["SeedSequence"]
    ) -> list[TrialResult]:
        raise NotImplementedError


def _run_chunk(schedule: Schedule, seeds: list["SeedSequence"]) -> list[TrialResult]:
    return [run_trial(schedule, s) for s in seeds]


@dataclass(frozen=True)
class SerialExecutor:
    def execute(
        self, *, schedule: Schedule, seeds: list["SeedSequence"]
    ) -> list[TrialResult]:
        return _run_chunk(schedule, seeds)


@dataclass(frozen=True)
class ProcessPoolRunExecutor:
    """Spread trials over a process pool.

    Seeds are split into contiguous chunks; results are gathered as chunks
    finish, so the returned order is not the seed order.
    """

    max_workers: int | None = None
    chunks_per_worker: int = 4

    def execute(
        self, *, schedule: Schedule, seeds: list["SeedSequence"]
    ) -> list[TrialResult]:
        workers = self.max_workers or os.cpu_count() or 1
        n_chunks = max(1, min(len(seeds), workers * self.chunks_per_worker))
        size = -(-len(seeds) // n_chunks)
        chunks = [seeds[i : i + size] for i in range(0, len(seeds), size)]
        logger.debug(
            "running %d trials in %d chunks on %d processes",
            len(seeds),
            len(chunks),
            workers,
        )

        results: list[TrialResult] = []
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_run_chunk, schedule, chunk) for chunk in chunks]
            for fut in as_completed(futures):
                results.extend(fut.result())
        return results


def default_executor(runs: int, jobs: int | None = None) -> RunExecutor:
    if jobs == 1 or runs < SERIAL_THRESHOLD:
        return SerialExecutor()
    return ProcessPoolRunExecutor(max_workers=jobs)
