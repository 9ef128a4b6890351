from __future__ import annotations

from pathlib import Path

import pytest

MAX_LINES = 400
SOURCE_DIRS = ("schedlab", "tests")


def _source_files(root: Path) -> list[Path]:
    files = [root / "runner.py"]
    for name in SOURCE_DIRS:
        files.extend(p for p in (root / name).rglob("*.py") if "__pycache__" not in p.parts)
    return sorted(files)


def test_source_tree_is_where_the_guardrail_looks(repo_root: Path) -> None:
    files = _source_files(repo_root)
    assert repo_root / "schedlab" / "trial.py" in files
    assert repo_root / "tests" / "test_codebase_size_limits.py" in files


@pytest.mark.parametrize("name", [*SOURCE_DIRS, "runner.py"])
def test_modules_stay_small(repo_root: Path, name: str) -> None:
    """Each schedlab module, test module and the runner shim stays short."""

    target = repo_root / name
    paths = [target] if target.is_file() else [
        p for p in _source_files(repo_root) if target in p.parents
    ]
    offenders = {
        p.relative_to(repo_root).as_posix(): n
        for p in paths
        if (n := len(p.read_text(encoding="utf-8").splitlines())) > MAX_LINES
    }
    assert not offenders, f"modules over {MAX_LINES} lines: {offenders}"
