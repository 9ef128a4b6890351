from __future__ import annotations

import argparse
import dataclasses
import datetime as dt
import logging
import sys
from pathlib import Path

from schedlab import __version__
from schedlab.executors import default_executor
from schedlab.io import write_samples_csv, write_summary_json
from schedlab.loader import load_project
from schedlab.metrics import summarize
from schedlab.report import render_cdf
from schedlab.sim import simulate_many
from schedlab.validate import validate_schedule
from schedlab.workdays import WorkCalendar, load_calendar

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 50_000
# Fewer trials than this distort the tail percentiles too much to be useful.
MIN_ITERATIONS = 100

AFTER_HELP_TEXT = """\
Project files are YAML or JSON:

    num_workers: 2
    confidence: 0.8
    tasks:
      - id: design
        estimate: {min: 2, likely: 3, max: 5}
      - id: build
        estimate: {min: 5, likely: 8, max: 13}
        dependencies: [design]
"""


def _date(value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {value!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="schedlab",
        description="Runs Monte Carlo simulations on project schedules",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sim = sub.add_parser(
        "simulate",
        help="Simulate a project file",
        epilog=AFTER_HELP_TEXT,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sim.add_argument("project", type=Path, help="Project file (.yaml, .yml or .json)")
    sim.add_argument(
        "-i",
        "--iterations",
        type=int,
        default=DEFAULT_ITERATIONS,
        help="Number of trials to run",
    )
    sim.add_argument(
        "-n",
        "--workers",
        type=int,
        metavar="NUM_WORKERS",
        help="Override num_workers from the project file",
    )
    sim.add_argument(
        "-b",
        "--begin",
        type=_date,
        metavar="YYYY-MM-DD",
        help="Override start_date from the project file",
    )
    sim.add_argument(
        "-s",
        "--schedule",
        type=Path,
        metavar="FILE",
        help="Work calendar file (.yaml, .yml or .json)",
    )
    sim.add_argument("--seed", type=int, help="Seed for reproducible runs")
    sim.add_argument(
        "--jobs",
        type=int,
        help="Worker processes (default: all CPUs, 1 runs in-process)",
    )
    sim.add_argument("--out-summary", type=Path, help="Write a JSON summary")
    sim.add_argument("--out-samples", type=Path, help="Write per-trial samples as CSV")
    sim.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    sim.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def _simulate(args: argparse.Namespace) -> int:
    if args.iterations < MIN_ITERATIONS:
        raise ValueError(f"Iterations must be at least {MIN_ITERATIONS}.")
    if args.jobs is not None and args.jobs < 1:
        raise ValueError("--jobs must be 1 or more")

    project = load_project(args.project)
    schedule = project.schedule
    if args.workers is not None:
        schedule = dataclasses.replace(schedule, num_workers=args.workers)
    validate_schedule(schedule)

    calendar = load_calendar(args.schedule) if args.schedule else WorkCalendar()
    start = args.begin or project.start_date or dt.date.today()

    durations, efforts = simulate_many(
        schedule,
        args.iterations,
        seed=args.seed,
        executor=default_executor(args.iterations, args.jobs),
    )

    color = not args.no_color
    plural = "" if schedule.num_workers == 1 else "s"
    print(
        render_cdf(
            durations,
            f"Completion Time ({schedule.num_workers} Worker{plural}, starting {start})",
            start,
            calendar,
            color=color,
        )
    )
    print()
    print(
        render_cdf(
            efforts,
            f"Total Work Effort (1 worker, starting {start})",
            start,
            calendar,
            color=color,
        )
    )

    if args.out_summary:
        summary = summarize(schedule=schedule, durations=durations, efforts=efforts)
        write_summary_json(args.out_summary, summary)
    if args.out_samples:
        write_samples_csv(args.out_samples, durations, efforts)
    return 0


def main(argv: list[str] | None = None) -> int:
    p = _build_parser()
    args = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "simulate":
        try:
            return _simulate(args)
        except (ValueError, OSError) as e:
            logger.debug("simulate failed", exc_info=True)
            print(f"error: {e}", file=sys.stderr)
            return 1

    raise AssertionError(f"Unhandled command: {args.cmd}")
