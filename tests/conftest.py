from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import movie_rating...` works when pytest uses importlib import mode.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def write_csv(tmp_path):
    """Write rows under a userId,movieId,Label header and return the path."""

    def _write(name: str, rows: list[tuple], header: str = "userId,movieId,Label") -> Path:
        path = tmp_path / name
        lines = [header] + [",".join(str(v) for v in row) for row in rows]
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
