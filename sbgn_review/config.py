"""Configuration loading for the review tool."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

import yaml

from .errors import ConfigurationError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config.yaml")
DEFAULT_MAX_IMAGE_DIMENSION = 1200
REQUIRED_KEYS = ("sbgn", "old_png", "new_png", "output")


@dataclass(frozen=True)
class ReviewConfig:
    sbgn_dir: Path
    old_png_dir: Path
    new_png_dir: Path
    output_dir: Path
    max_image_dimension: int = DEFAULT_MAX_IMAGE_DIMENSION
    document_ext: str = ".sbgn"
    image_ext: str = ".png"

    @property
    def ledger_path(self) -> Path:
        return self.output_dir / "output.json"

    def image_dir(self, side: str) -> Path:
        return self.old_png_dir if side == "old" else self.new_png_dir

    def as_payload(self) -> Dict:
        return {
            "sbgn": str(self.sbgn_dir),
            "old_png": str(self.old_png_dir),
            "new_png": str(self.new_png_dir),
            "output": str(self.output_dir),
            "max_image_dimension": self.max_image_dimension,
        }


def _read_document(path: Path) -> Dict:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Cannot parse config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _resolve_dir(value, root: Path, key: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"Config key '{key}' must be a non-empty path")
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = root / path
    return path


def _normalise_ext(value, key: str) -> str:
    if not isinstance(value, str) or not value.strip(".").strip():
        raise ConfigurationError(f"Config key '{key}' must be a file extension")
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ReviewConfig:
    """Load and validate the config document at ``path``.

    Relative directories resolve against the directory holding the config
    file, so the tool behaves the same whatever the working directory is.
    """
    path = Path(path)
    data = _read_document(path)
    root = path.resolve().parent

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigurationError(f"Config file {path} is missing keys: {', '.join(missing)}")

    max_dim = data.get("max_image_dimension", DEFAULT_MAX_IMAGE_DIMENSION)
    if isinstance(max_dim, bool) or not isinstance(max_dim, int) or max_dim <= 0:
        raise ConfigurationError("Config key 'max_image_dimension' must be a positive integer")

    cfg = ReviewConfig(
        sbgn_dir=_resolve_dir(data["sbgn"], root, "sbgn"),
        old_png_dir=_resolve_dir(data["old_png"], root, "old_png"),
        new_png_dir=_resolve_dir(data["new_png"], root, "new_png"),
        output_dir=_resolve_dir(data["output"], root, "output"),
        max_image_dimension=max_dim,
        document_ext=_normalise_ext(data.get("document_ext", ".sbgn"), "document_ext"),
        image_ext=_normalise_ext(data.get("image_ext", ".png"), "image_ext"),
    )
    LOGGER.debug("Loaded config from %s: %s", path, cfg)
    return cfg
