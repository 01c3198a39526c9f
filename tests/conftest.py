# tests/conftest.py
from __future__ import annotations

import zipfile
from pathlib import Path
from typing import Dict, Iterable

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


@pytest.fixture
def make_dataset(tmp_path: Path):
    """
    Factory: <base>/<name>/<name>.dat with the given lines.

    Usage:
        path = make_dataset("All-regression", ["@inputs a", "@outputs b", "1,2"])
        path = make_dataset("iris", lines, base=tmp_path / "data" / "uci")
    """

    def _make(name: str, lines: Iterable[str], base: Path | None = None) -> Path:
        d = (base or tmp_path) / name
        d.mkdir(parents=True, exist_ok=True)
        p = d / f"{name}.dat"
        p.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return p

    return _make


@pytest.fixture
def make_zip():
    """
    Factory: zip at ``path`` holding {arcname: text}; arcnames ending
    with "/" become directory entries.
    """

    def _make(path: Path, members: Dict[str, str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            for arcname, text in members.items():
                if arcname.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(arcname), "")
                else:
                    zf.writestr(arcname, text)
        return path

    return _make


REGRESSION_LINES = [
    "@relation All-regression",
    "@attribute a real",
    "@attribute b real",
    "@attribute c real",
    "@inputs a, b",
    "@outputs c",
    "@data",
    "1,2,3",
    "4,5,6",
]


@pytest.fixture
def regression_lines() -> list[str]:
    return list(REGRESSION_LINES)
