"""Read and overwrite SBGN document text."""
from __future__ import annotations

import logging
from pathlib import Path

from .config import ReviewConfig
from .errors import NotFoundError, StorageError, ValidationError
from .io import atomic_write_text, resolve_file, validate_identifier

LOGGER = logging.getLogger(__name__)

EDITED_SUFFIX = "_comment"


def original_path(config: ReviewConfig, identifier: str) -> Path:
    return resolve_file(config.sbgn_dir, identifier, config.document_ext)


def edited_path(config: ReviewConfig, identifier: str) -> Path:
    return config.output_dir / f"{identifier}{EDITED_SUFFIX}{config.document_ext}"


def _read_text(path: Path):
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as exc:
        raise StorageError(f"Failed to read {path}: {exc}") from exc


def get_document(config: ReviewConfig, identifier: str) -> str:
    """Return the edited text if one was saved, otherwise the original."""
    validate_identifier(identifier)
    text = _read_text(edited_path(config, identifier))
    if text is None:
        text = _read_text(original_path(config, identifier))
    if text is not None:
        return text
    raise NotFoundError(f"No document for {identifier}.")


def save_document(config: ReviewConfig, identifier: str, text: str) -> Path:
    validate_identifier(identifier)
    if not isinstance(text, str):
        raise ValidationError("Invalid payload.")
    path = edited_path(config, identifier)
    atomic_write_text(path, text)
    LOGGER.info("Saved edited document %s (%d chars)", path.name, len(text))
    return path
