from __future__ import annotations

import math
from typing import Any

from schedlab.model import Schedule

SUMMARY_PERCENTILES = [5, 10, 25, 50, 75, 90, 95]


def percentile_sorted(values_sorted: list[float], p: float) -> float:
    if not values_sorted:
        return math.nan
    if p <= 0:
        return float(values_sorted[0])
    if p >= 100:
        return float(values_sorted[-1])

    # Linear interpolation between closest ranks, matching common percentile defs.
    n = len(values_sorted)
    pos = (p / 100.0) * (n - 1)
    lo = int(math.floor(pos))
    hi = int(math.ceil(pos))
    if lo == hi:
        return float(values_sorted[lo])
    frac = pos - lo
    return float(values_sorted[lo] * (1.0 - frac) + values_sorted[hi] * frac)


def percentiles(values: list[float], ps: list[int]) -> dict[str, float]:
    if not values:
        return {f"p{p}": math.nan for p in ps}
    values_sorted = sorted(float(x) for x in values)
    return {f"p{p}": percentile_sorted(values_sorted, p) for p in ps}


def _describe(values: list[float]) -> dict[str, Any]:
    return {
        "mean": math.fsum(values) / len(values) if values else math.nan,
        "min": min(values) if values else math.nan,
        "max": max(values) if values else math.nan,
        "percentiles": percentiles(values, SUMMARY_PERCENTILES),
    }


def summarize(
    *, schedule: Schedule, durations: list[float], efforts: list[float]
) -> dict[str, Any]:
    return {
        "runs": len(durations),
        "tasks": len(schedule.tasks),
        "num_workers": schedule.num_workers,
        "confidence": schedule.confidence,
        "duration_days": _describe(durations),
        "effort_days": _describe(efforts),
    }
