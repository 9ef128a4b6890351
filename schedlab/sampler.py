from __future__ import annotations

# Task duration sampler.
#
# The spread is calibrated with a heuristic z factor rather than the exact
# inverse normal CDF; output distributions depend on it, so it is kept as is.

import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

import numpy as np

from schedlab.model import Task

if TYPE_CHECKING:  # pragma: no cover
    from numpy.random import Generator


def z_score(confidence: float) -> float:
    return 2.0 * math.sqrt(1.0 - (1.0 - confidence) / 2.0)


def sample_duration(
    rng: "Generator", min_time: float, max_time: float, confidence: float
) -> float:
    mean = (min_time + max_time) / 2.0
    std_dev = (max_time - min_time) / (2.0 * z_score(confidence))
    sampled = rng.normal(loc=mean, scale=std_dev)
    return float(min(max(sampled, min_time), max_time))


def sample_durations(
    rng: "Generator", tasks: Sequence[Task], confidence: float
) -> list[float]:
    """Draw one duration per task, in task order."""

    lo = np.fromiter((t.min_time for t in tasks), dtype=float, count=len(tasks))
    hi = np.fromiter((t.max_time for t in tasks), dtype=float, count=len(tasks))
    std_dev = (hi - lo) / (2.0 * z_score(confidence))
    sampled = rng.normal(loc=(lo + hi) / 2.0, scale=std_dev)
    return np.clip(sampled, lo, hi).tolist()
