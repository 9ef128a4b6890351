from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from schedlab.model import Project

logger = logging.getLogger(__name__)


class ProjectFormatError(ValueError):
    pass


def read_document(path: Path) -> Any:
    """Decode a .yaml/.yml/.json file, choosing the parser by extension."""

    suffix = path.suffix.lower()
    if suffix not in (".yaml", ".yml", ".json"):
        raise ProjectFormatError("Unsupported file format. Use .yaml, .yml, or .json")

    text = path.read_text(encoding="utf-8")
    try:
        if suffix == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ProjectFormatError(f"{path}: could not parse file: {exc}") from exc


def load_project(path: Path) -> Project:
    """Read a project file into an unvalidated `Project`.

    Validation is left to `validate_schedule` so CLI overrides can be applied
    first.
    """

    raw = read_document(path)
    if not isinstance(raw, dict):
        raise ProjectFormatError(f"{path}: top level must be a mapping")

    try:
        project = Project.from_json(raw)
    except KeyError as exc:
        raise ProjectFormatError(f"{path}: missing required key {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ProjectFormatError(f"{path}: {exc}") from exc

    logger.debug(
        "loaded %d tasks from %s (workers=%d, confidence=%s)",
        len(project.schedule.tasks),
        path,
        project.schedule.num_workers,
        project.schedule.confidence,
    )
    return project
