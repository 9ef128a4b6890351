from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(scope="session", autouse=True)
def _add_repo_root_to_syspath() -> None:
    """Make local packages importable when running tests from `tests/`.

    Some pytest invocations end up with `tests/` as the import root. Ensure
    the repo root is on `sys.path` so `import runner` works.
    """

    root_str = str(REPO_ROOT)
    if root_str not in sys.path:
        sys.path.insert(0, root_str)


@pytest.fixture
def repo_root() -> Path:
    return REPO_ROOT
