"""Filesystem helpers: identifier checks, directory reconciliation, atomic writes."""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple

from .config import ReviewConfig
from .errors import ConfigurationError, StorageError, ValidationError

LOGGER = logging.getLogger(__name__)


def validate_identifier(identifier) -> str:
    """Reject identifiers that could escape the configured directories."""
    if not isinstance(identifier, str) or not identifier:
        raise ValidationError("Invalid base name.")
    if ".." in identifier or "/" in identifier or "\\" in identifier:
        raise ValidationError("Invalid base name.")
    if any(ord(ch) < 32 or ord(ch) == 127 for ch in identifier):
        raise ValidationError("Invalid base name.")
    return identifier


def strip_ext(filename: str, ext: str) -> Optional[str]:
    """Basename of ``filename`` if it ends with ``ext`` (any case), else None."""
    if len(filename) > len(ext) and filename.lower().endswith(ext.lower()):
        return filename[: -len(ext)]
    return None


def list_files_with_ext(directory: Path, ext: str) -> List[str]:
    try:
        names = os.listdir(directory)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read directory {directory}: {exc}") from exc
    return [name for name in names if strip_ext(name, ext) is not None]


def resolve_file(directory: Path, identifier: str, ext: str) -> Path:
    """Path of ``identifier`` in ``directory`` as it is spelled on disk.

    The extension matches case-insensitively, the same rule reconciliation
    uses. An exact-case name wins; with no match the canonical path is
    returned and the caller's read reports it missing.
    """
    exact = directory / f"{identifier}{ext}"
    matches = sorted(name for name in list_files_with_ext(directory, ext) if strip_ext(name, ext) == identifier)
    if not matches or exact.name in matches:
        return exact
    return directory / matches[0]


def reconcile_basenames(sources: Sequence[Tuple[Path, str]]) -> List[str]:
    """Return the sorted basenames present in every ``(directory, ext)`` source."""
    common: Optional[Set[str]] = None
    for directory, ext in sources:
        bases = {strip_ext(name, ext) for name in list_files_with_ext(directory, ext)}
        common = bases if common is None else common & bases
    return sorted(common or ())


def list_working_set(config: ReviewConfig) -> List[str]:
    bases = reconcile_basenames(
        [
            (config.sbgn_dir, config.document_ext),
            (config.old_png_dir, config.image_ext),
            (config.new_png_dir, config.image_ext),
        ]
    )
    LOGGER.debug("Working set has %d items", len(bases))
    return bases


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageError(f"Cannot create directory {path}: {exc}") from exc


def atomic_write_text(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` via a sibling temp file and ``os.replace``."""
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(text)
        os.replace(tmp_name, path)
    except OSError as exc:
        _discard(tmp_name)
        raise StorageError(f"Failed to write {path}: {exc}") from exc


def _discard(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass
    except OSError as exc:
        LOGGER.warning("Could not remove temp file %s: %s", name, exc)
