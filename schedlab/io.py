from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any


def write_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")


def write_samples_csv(path: Path, durations: list[float], efforts: list[float]) -> None:
    if len(durations) != len(efforts):
        raise ValueError("durations and efforts must have the same length")

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["trial", "duration_days", "effort_days"])
        for i, (duration, effort) in enumerate(zip(durations, efforts)):
            w.writerow([i, duration, effort])
