"""Tests for image lookup and bounded downscaling."""
from __future__ import annotations

import os
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from conftest import make_png
from sbgn_review.errors import NotFoundError, StorageError, ValidationError
from sbgn_review.images import downscale_image, load_image


def _png_bytes(size, mode="RGB") -> bytes:
    buffer = BytesIO()
    Image.new(mode, size).save(buffer, format="PNG")
    return buffer.getvalue()


def _size(data: bytes):
    with Image.open(BytesIO(data)) as img:
        return img.format, img.size


def test_image_within_bound_is_unchanged():
    data = _png_bytes((100, 40))
    payload = downscale_image(data, 100)
    assert payload.data == data
    assert payload.mimetype == "image/png"
    assert not payload.scaled


@pytest.mark.parametrize("size", [(400, 200), (150, 600), (1001, 1000)])
def test_large_image_is_bounded_and_keeps_aspect(size):
    payload = downscale_image(_png_bytes(size), 100)
    fmt, (width, height) = _size(payload.data)
    assert payload.scaled
    assert fmt == "PNG"
    assert max(width, height) == 100
    assert width <= 100 and height <= 100
    assert abs(width / height - size[0] / size[1]) < 0.05


def test_downscale_is_idempotent():
    data = _png_bytes((500, 300))
    first = downscale_image(data, 120)
    second = downscale_image(data, 120)
    assert first.data == second.data
    assert downscale_image(first.data, 120).data == first.data


def test_jpeg_stays_jpeg():
    buffer = BytesIO()
    Image.new("RGB", (300, 300), (10, 200, 10)).save(buffer, format="JPEG")
    payload = downscale_image(buffer.getvalue(), 50)
    assert payload.mimetype == "image/jpeg"
    assert _size(payload.data) == ("JPEG", (50, 50))


def test_palette_png_is_preserved():
    payload = downscale_image(_png_bytes((300, 100), mode="P"), 60)
    assert _size(payload.data) == ("PNG", (60, 20))


def test_undecodable_bytes_raise_storage_error():
    with pytest.raises(StorageError):
        downscale_image(b"not an image", 100)


def test_load_image_scales_from_config(config, workspace: Path):
    make_png(workspace / "old_png" / "A.png", (300, 150))
    make_png(workspace / "new_png" / "A.png", (80, 40))

    old = load_image(config, "old", "A")
    new = load_image(config, "new", "A")
    assert _size(old.data)[1] == (100, 50)
    assert new.data == (workspace / "new_png" / "A.png").read_bytes()


def test_load_image_missing_raises_not_found(config):
    with pytest.raises(NotFoundError):
        load_image(config, "old", "ghost")


@pytest.mark.parametrize("side,base", [("middle", "A"), ("old", "../A"), ("new", "a/b"), ("old", "")])
def test_load_image_validates_before_io(config, side, base):
    with pytest.raises(ValidationError):
        load_image(config, side, base)


def test_load_image_picks_up_rewritten_file(config, workspace: Path):
    path = make_png(workspace / "old_png" / "A.png", (300, 300))
    assert _size(load_image(config, "old", "A").data)[1] == (100, 100)

    stat = path.stat()
    make_png(path, (90, 30))
    os.utime(path, ns=(stat.st_atime_ns, stat.st_mtime_ns + 1_000_000_000))
    assert _size(load_image(config, "old", "A").data)[1] == (90, 30)
