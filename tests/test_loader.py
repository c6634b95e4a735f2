# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""Tests for image validation and decoding."""

import io

import pytest
from PIL import Image

from adcraft.errors import DecodeFailureError, UnsupportedMediaError
from adcraft.measure.loader import check_media, load_image, sniff_media_type

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def _encode(img, fmt="PNG", **params):
    buffer = io.BytesIO()
    img.save(buffer, format=fmt, **params)
    return buffer.getvalue()


def _solid_png(rgb, size=(64, 48)):
    return _encode(Image.new("RGB", size, rgb))


class TestSniff:

    @pytest.mark.parametrize("fmt,expected", [
        ("PNG", "image/png"),
        ("JPEG", "image/jpeg"),
        ("WEBP", "image/webp"),
        ("GIF", "image/gif"),
        ("BMP", "image/bmp"),
    ])
    def test_known_formats(self, fmt, expected):
        data = _encode(Image.new("RGB", (8, 8), (1, 2, 3)), fmt)
        assert sniff_media_type(data) == expected

    def test_text_is_unknown(self):
        assert sniff_media_type(b"hello world") is None


class TestCheckMedia:

    def test_text_bytes_rejected(self):
        with pytest.raises(UnsupportedMediaError):
            check_media(b"name,price\nlamp,20\n")

    def test_declared_non_image_rejected(self, png_bytes):
        with pytest.raises(UnsupportedMediaError):
            check_media(png_bytes, media_type="application/pdf")

    def test_filename_guess(self, png_bytes):
        with pytest.raises(UnsupportedMediaError):
            check_media(png_bytes, filename="notes.txt")
        assert check_media(png_bytes, filename="lamp.png") == "image/png"

    def test_sniffed_type_returned(self, png_bytes):
        assert check_media(png_bytes) == "image/png"

    def test_error_carries_status_message(self):
        with pytest.raises(UnsupportedMediaError) as info:
            check_media(b"not an image")
        assert info.value.message == "Please upload an image file (PNG, JPG, or WebP)."


class TestLoadImage:

    def test_png_bytes(self):
        source = load_image(_solid_png((12, 34, 56), size=(64, 48)))
        assert (source.width, source.height) == (64, 48)
        assert source.image.mode == "RGBA"
        assert source.image.getpixel((5, 5)) == (12, 34, 56, 255)
        assert source.format == "PNG"

    def test_jpeg_and_webp(self):
        img = Image.new("RGB", (40, 30), (120, 120, 120))
        for fmt in ("JPEG", "WEBP"):
            source = load_image(_encode(img, fmt))
            assert source.format == fmt
            assert source.aspect_ratio == pytest.approx(40 / 30)

    def test_grayscale_converted(self):
        source = load_image(_encode(Image.new("L", (10, 10), 200)))
        assert source.image.getpixel((0, 0)) == (200, 200, 200, 255)

    def test_digest_stable(self, png_bytes):
        a, b = load_image(png_bytes), load_image(png_bytes)
        assert a.digest == b.digest
        assert a.digest.startswith("sha256:")
        assert len(a.digest) == len("sha256:") + 16

    def test_from_path(self, tmp_path, png_bytes):
        path = tmp_path / "lamp.png"
        path.write_bytes(png_bytes)
        assert load_image(path).width == 64

    def test_missing_path(self, tmp_path):
        with pytest.raises(DecodeFailureError):
            load_image(tmp_path / "missing.png")

    def test_corrupt_png(self):
        with pytest.raises(DecodeFailureError) as info:
            load_image(PNG_SIGNATURE + b"\x00" * 64)
        assert info.value.retryable

    def test_truncated_png(self, png_bytes):
        with pytest.raises(DecodeFailureError):
            load_image(png_bytes[:40])

    def test_non_image_never_decoded(self):
        with pytest.raises(UnsupportedMediaError):
            load_image(b"GIF? no, plain text")

    def test_exif_orientation_applied(self):
        img = Image.new("RGB", (40, 20), (255, 0, 0))
        exif = img.getexif()
        exif[0x0112] = 6  # rotate 90° clockwise on display
        source = load_image(_encode(img, "JPEG", exif=exif))
        assert (source.width, source.height) == (20, 40)
