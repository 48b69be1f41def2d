"""Image lookup and bounded downscaling."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .config import ReviewConfig
from .errors import NotFoundError, StorageError, ValidationError
from .io import resolve_file, validate_identifier

LOGGER = logging.getLogger(__name__)

IMAGE_SIDES = ("old", "new")


@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mimetype: str
    scaled: bool = False


def downscale_image(data: bytes, max_dim: int) -> ImagePayload:
    """Shrink ``data`` so neither side exceeds ``max_dim``, keeping its format.

    Images already within the bound come back byte-for-byte unchanged. The
    aspect ratio is preserved and images are never enlarged.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = img.format or "PNG"
            mimetype = Image.MIME.get(fmt, "application/octet-stream")
            width, height = img.size
            if width <= max_dim and height <= max_dim:
                return ImagePayload(data, mimetype)

            img.thumbnail((max_dim, max_dim), Image.Resampling.LANCZOS)
            if fmt == "JPEG" and img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            buffer = BytesIO()
            img.save(buffer, format=fmt)
    except (UnidentifiedImageError, OSError) as exc:
        raise StorageError(f"Cannot decode image: {exc}") from exc

    LOGGER.debug("Downscaled %dx%d image to fit %d", width, height, max_dim)
    return ImagePayload(buffer.getvalue(), mimetype, scaled=True)


@lru_cache(maxsize=256)
def _cached_image(path_str: str, mtime_ns: int, file_size: int, max_dim: int) -> ImagePayload:
    return downscale_image(Path(path_str).read_bytes(), max_dim)


def image_path(config: ReviewConfig, side: str, identifier: str) -> Path:
    if side not in IMAGE_SIDES:
        raise ValidationError("Invalid image type.")
    validate_identifier(identifier)
    return resolve_file(config.image_dir(side), identifier, config.image_ext)


def load_image(config: ReviewConfig, side: str, identifier: str) -> ImagePayload:
    path = image_path(config, side, identifier)
    try:
        stat = path.stat()
        return _cached_image(str(path), stat.st_mtime_ns, stat.st_size, config.max_image_dimension)
    except FileNotFoundError:
        raise NotFoundError("Image not found.") from None
    except OSError as exc:
        raise StorageError(f"Failed to load image {path}: {exc}") from exc
