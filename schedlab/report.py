from __future__ import annotations

# ASCII cumulative-distribution table for the terminal.

import datetime as dt
import math
from collections.abc import Sequence

from schedlab.workdays import WorkCalendar

BAR_WIDTH = 60

_RESET = "\x1b[0m"

_RULE_TOP = "────┬" + "─" * BAR_WIDTH + "┬──────────┬──────────┬──────────"
_RULE_MID = "────┼" + "─" * BAR_WIDTH + "┼──────────┼──────────┼──────────"
_RULE_BOTTOM = "────┴" + "─" * BAR_WIDTH + "┴──────────┴──────────┴──────────"

# Bracket drawn to the right of the table, marking the p95..p5 interval.
_TRAILERS = {
    95: "◀━┓",
    60: "  ┣━━━━━━━━━━━━┓",
    55: "  ┃ 90%        ┃",
    50: "  ┃ Confidence ┃",
    45: "  ┃ Interval   ┃",
    40: "  ┣━━━━━━━━━━━━┛",
    5: "◀━┛",
}


def _rank(p: float, n: int) -> int:
    return int(math.floor(p * (n - 1) + 0.5))


def percentile_ladder(samples: Sequence[float]) -> list[tuple[int, float]]:
    """Return (percentile, value) rows for p100, p95, ... p0.

    Each value is the midpoint of the band between the row's percentile and
    the next lower one, so the ladder reads like a histogram of the CDF.
    """

    if not samples:
        raise ValueError("cannot build a percentile ladder from no samples")

    data = sorted(samples)
    n = len(data)
    rows: list[tuple[int, float]] = []
    for i in range(21):
        lower = 1e-10 if i == 20 else (95 - i * 5) / 100.0
        upper = 0.9999999999 if i == 0 else (100 - i * 5) / 100.0
        mid = (data[_rank(lower, n)] + data[_rank(upper, n)]) / 2.0
        rows.append((100 - i * 5, mid))
    return rows


def _color(pct: int) -> str:
    if pct <= 45:
        return "\x1b[31m"  # red
    if pct <= 65:
        return "\x1b[38;5;173m"  # orange
    if pct <= 80:
        return "\x1b[33m"  # yellow
    if pct <= 95:
        return "\x1b[32m"  # green
    return "\x1b[33m"


def _trailer(pct: int) -> str:
    if pct in _TRAILERS:
        return _TRAILERS[pct]
    if 6 <= pct <= 94:
        return "  ┃"
    return ""


def render_cdf(
    samples: Sequence[float],
    title: str,
    start: dt.date,
    calendar: WorkCalendar,
    *,
    color: bool = True,
) -> str:
    rows = percentile_ladder(samples)
    lo = min(samples)
    span = max(samples) - lo

    positions = []
    for _, days in rows:
        normalized = (days - lo) / span if span > 0 else 0.5
        positions.append(int(round(normalized * BAR_WIDTH)))
    offset = (BAR_WIDTH - (max(positions) - min(positions))) // 2

    lines = [
        _RULE_TOP,
        f"%ile│{title[:BAR_WIDTH]:^{BAR_WIDTH}}│ Workdays │ Schedule │ Complete  ",
        _RULE_MID,
    ]
    for i, ((pct, days), pos) in enumerate(zip(rows, positions)):
        end_date, calendar_span = calendar.compute_end_date(start, days)
        marker = min(pos + offset, BAR_WIDTH - 1)
        fg, bg = ("░", "▓") if i % 2 == 0 else ("▒", "█")
        bar = fg * marker + "▮" + bg * (BAR_WIDTH - marker - 1)

        c, r = (_color(pct), _RESET) if color else ("", "")
        lines.append(
            f"{c}{'p' + str(pct):>4}{r}│{c}{bar}{r}│"
            f"{c}{days:5.0f} days{r}│{c}{calendar_span.days:5d} days{r}│"
            f"{c}{end_date.isoformat()}{r}{_trailer(pct)}"
        )
    lines.append(_RULE_BOTTOM)
    return "\n".join(lines)
