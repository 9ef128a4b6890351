from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TrialResult:
    total_project_duration: float  # wall-clock span, days
    total_effort_time: float  # sum of sampled task durations, days
