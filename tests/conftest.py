from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest


@pytest.fixture
def write_csv(tmp_path: Path):
    def _write(text: str, name: str = "events.csv") -> str:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def example_csv(write_csv) -> str:
    return write_csv("actor_a,actor_b,year\nA,B,2012\nB,A,2012\nA,C,2013\n")
