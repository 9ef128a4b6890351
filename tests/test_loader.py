from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import pytest

from schedlab.loader import ProjectFormatError, load_project, read_document
from schedlab.validate import DurationRangeError, validate_schedule

YAML_PROJECT = """\
num_workers: 3
tasks:
  - id: A
    estimate:
        min: 1
        likely: 2.4
        max: 3
    dependencies: []
  - id: B
    name: Second
    description: depends on A
    estimate:
        min: 2
        likely: 2.4
        max: 4
    dependencies: [A]
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_load_from_yaml(tmp_path: Path) -> None:
    project = load_project(_write(tmp_path, "p.yaml", YAML_PROJECT))
    schedule = project.schedule
    assert len(schedule.tasks) == 2
    assert schedule.num_workers == 3
    assert schedule.confidence == 0.8
    assert schedule.tasks[1].dependencies == ("A",)
    assert project.start_date is None
    validate_schedule(schedule)


def test_load_from_json(tmp_path: Path) -> None:
    doc = {
        "num_workers": 3,
        "confidence": 0.9,
        "start_date": "2026-03-02",
        "tasks": [
            {"id": "A", "estimate": {"min": 1, "likely": 1.8, "max": 3}},
            {"id": "B", "estimate": {"min": 2, "max": 4}, "dependencies": ["A"]},
        ],
    }
    project = load_project(_write(tmp_path, "p.json", json.dumps(doc)))
    assert project.schedule.confidence == 0.9
    assert project.start_date == dt.date(2026, 3, 2)
    assert project.schedule.tasks[0].dependencies == ()


def test_yaml_dates_and_fractional_days(tmp_path: Path) -> None:
    text = """\
num_workers: 1
start_date: 2026-01-05
tasks:
  - id: A
    estimate: {min: 1.5, likely: 2, max: 3.5}
"""
    project = load_project(_write(tmp_path, "p.yml", text))
    assert project.start_date == dt.date(2026, 1, 5)
    task = project.schedule.tasks[0]
    assert (task.min_time, task.max_time) == (1.5, 3.5)


@pytest.mark.parametrize("name", ["p.txt", "project"])
def test_unsupported_format(tmp_path: Path, name: str) -> None:
    with pytest.raises(ProjectFormatError, match="Unsupported file format"):
        load_project(_write(tmp_path, name, "irrelevant content"))


def test_loader_does_not_validate(tmp_path: Path) -> None:
    text = """\
num_workers: 3
tasks:
  - id: A
    estimate: {min: 3, likely: 2, max: 1}
    dependencies: []
"""
    project = load_project(_write(tmp_path, "p.yaml", text))
    with pytest.raises(DurationRangeError, match="for task A"):
        validate_schedule(project.schedule)


@pytest.mark.parametrize(
    "text,match",
    [
        ("- just\n- a list\n", "top level must be a mapping"),
        ("tasks: []\n", "missing required key 'num_workers'"),
        ("num_workers: 1\ntasks:\n  - id: A\n", "missing required key 'estimate'"),
        ("num_workers: 1\ntasks:\n  - id: A\n    estimate: {min: x, max: 2}\n", "x"),
        ("num_workers: 1\ntasks: nope\n", "tasks must be a list"),
        (
            "num_workers: 1\ntasks:\n  - id: A\n    estimate: {min: 1, max: 2}\n"
            "    dependencies: B\n",
            "dependencies must be a list",
        ),
        ("num_workers: [1\n", "could not parse"),
    ],
)
def test_malformed_documents(tmp_path: Path, text: str, match: str) -> None:
    with pytest.raises(ProjectFormatError, match=match):
        load_project(_write(tmp_path, "p.yaml", text))


def test_bad_json_is_a_format_error(tmp_path: Path) -> None:
    with pytest.raises(ProjectFormatError, match="could not parse"):
        read_document(_write(tmp_path, "p.json", "{not json"))


@pytest.mark.parametrize("name", ["website.yaml", "website.json"])
def test_bundled_examples_are_valid(repo_root: Path, name: str) -> None:
    project = load_project(repo_root / "examples" / name)
    validate_schedule(project.schedule)
    assert project.schedule.num_workers == 2
    assert project.start_date == dt.date(2026, 11, 2)


@pytest.mark.parametrize("value", ["2.7", "2.0", "true", "'2'"])
def test_num_workers_must_be_an_integer(tmp_path: Path, value: str) -> None:
    text = f"num_workers: {value}\ntasks:\n  - id: A\n    estimate: {{min: 1, max: 2}}\n"
    with pytest.raises(ProjectFormatError, match="num_workers must be an integer"):
        load_project(_write(tmp_path, "p.yaml", text))
