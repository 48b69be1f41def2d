"""Shared fixtures: a throwaway review workspace with config, documents and images."""
from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from PIL import Image

from sbgn_review.config import load_config

SBGN_TEXT = '<?xml version="1.0"?>\n<sbgn><map id="{base}"/></sbgn>\n'


def make_png(path: Path, size: tuple[int, int] = (64, 48), color=(200, 40, 40)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", size, color=color).save(path, format="PNG")
    return path


def make_sbgn(path: Path, base: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SBGN_TEXT.format(base=base), encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create sbgn/old_png/new_png/output dirs and a config.yaml pointing at them."""
    for name in ("sbgn", "old_png", "new_png"):
        (tmp_path / name).mkdir()
    config = {
        "sbgn": "sbgn",
        "old_png": "old_png",
        "new_png": "new_png",
        "output": "output",
        "max_image_dimension": 100,
    }
    (tmp_path / "config.yaml").write_text(yaml.safe_dump(config), encoding="utf-8")
    return tmp_path


@pytest.fixture
def add_item(workspace: Path):
    def _add(base: str, old_size=(64, 48), new_size=(64, 48)) -> None:
        make_sbgn(workspace / "sbgn" / f"{base}.sbgn", base)
        make_png(workspace / "old_png" / f"{base}.png", old_size)
        make_png(workspace / "new_png" / f"{base}.png", new_size, color=(40, 40, 200))

    return _add


@pytest.fixture
def config(workspace: Path):
    return load_config(workspace / "config.yaml")
