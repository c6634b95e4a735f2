# Copyright (c) 2026 AdCraft
# SPDX-License-Identifier: MIT

"""Tests for palette extraction and resolution."""

import io

import numpy as np
import pytest
from PIL import Image

from adcraft.measure.colorspace import hex_to_rgb
from adcraft.measure.loader import load_image
from adcraft.measure.palette import (
    EXTRACTION_FALLBACK,
    LAYOUT_FALLBACK,
    MAX_WORKING_HEIGHT,
    WORKING_WIDTH,
    _working_pixels,
    extract_palette,
    palette_from_pixels,
    resolve_palette,
)
from adcraft.schema import Palette


def _solid_png(rgb, size=(64, 48)):
    buffer = io.BytesIO()
    Image.new("RGB", size, rgb).save(buffer, format="PNG")
    return buffer.getvalue()


def _distance(a, b):
    return max(abs(x - y) for x, y in zip(hex_to_rgb(a), hex_to_rgb(b)))


def _split_image(left, right, split=300, size=(400, 200)):
    """Image with ``left`` color up to column ``split`` and ``right`` after."""
    arr = np.zeros((size[1], size[0], 3), dtype=np.uint8)
    arr[:, :split] = left
    arr[:, split:] = right
    return Image.fromarray(arr)


class TestExtractPalette:

    @pytest.mark.parametrize("n", [1, 3, 5])
    def test_solid_image_single_color(self, n):
        img = Image.new("RGB", (120, 90), (200, 40, 40))
        assert extract_palette(img, n) == ["#c82828"]

    def test_accepts_source_image(self):
        source = load_image(_solid_png((10, 200, 30)))
        assert extract_palette(source) == ["#0ac81e"]

    def test_ranked_by_area(self):
        img = _split_image((220, 30, 30), (30, 30, 220))
        palette = extract_palette(img)
        assert _distance(palette[0], "#dc1e1e") <= 3
        assert _distance(palette[1], "#1e1edc") <= 3

    def test_never_more_than_requested(self):
        rng = np.random.default_rng(0)
        noise = Image.fromarray(rng.integers(0, 256, (80, 80, 3), dtype=np.uint8))
        assert len(extract_palette(noise, 5)) == 5
        assert len(extract_palette(noise, 2)) == 2

    def test_deterministic(self):
        rng = np.random.default_rng(1)
        noise = Image.fromarray(rng.integers(0, 256, (60, 90, 3), dtype=np.uint8))
        assert extract_palette(noise) == extract_palette(noise)

    def test_missing_image_returns_fallback(self):
        assert extract_palette(None) == list(EXTRACTION_FALLBACK)
        assert extract_palette(None, 2) == ["#0F172A", "#224870"]

    def test_transparent_pixels_read_as_black(self):
        img = Image.new("RGBA", (50, 50), (255, 0, 0, 0))
        assert extract_palette(img) == ["#000000"]

    def test_extreme_aspect_ratio(self):
        img = Image.new("RGB", (2000, 3), (0, 0, 255))
        assert extract_palette(img) == ["#0000ff"]

    def test_output_is_lowercase_hex(self):
        img = Image.new("RGB", (30, 30), (171, 205, 239))
        assert extract_palette(img) == ["#abcdef"]


class TestPaletteFromPixels:

    def test_tie_broken_by_first_seen(self):
        pixels = np.array([[0, 0, 255], [255, 0, 0]], dtype=np.uint8)
        assert palette_from_pixels(pixels, stride=1) == ["#0000ff", "#ff0000"]

    def test_bucket_mean_not_center(self):
        # 36/32 and 44/32 both round to bucket 1
        pixels = np.array([[36, 36, 36], [44, 44, 44]], dtype=np.uint8)
        assert palette_from_pixels(pixels, stride=1) == ["#282828"]

    def test_half_rounds_up(self):
        # 16/32 = 0.5 lands in bucket 1 together with 40
        pixels = np.array([[16, 0, 0], [40, 0, 0]], dtype=np.uint8)
        assert palette_from_pixels(pixels, stride=1) == ["#1c0000"]

    def test_below_half_splits(self):
        pixels = np.array([[15, 0, 0], [40, 0, 0]], dtype=np.uint8)
        assert len(palette_from_pixels(pixels, stride=1)) == 2

    def test_stride_skips_pixels(self):
        pixels = np.array([[255, 0, 0], [0, 255, 0]] * 3, dtype=np.uint8)
        assert palette_from_pixels(pixels, stride=2) == ["#ff0000"]

    def test_alpha_channel_ignored(self):
        pixels = np.array([[10, 20, 30, 255], [10, 20, 30, 7]], dtype=np.uint8)
        assert palette_from_pixels(pixels, stride=1) == ["#0a141e"]

    def test_empty(self):
        assert palette_from_pixels(np.zeros((0, 4), dtype=np.uint8)) == []

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            palette_from_pixels(np.zeros((4, 2), dtype=np.uint8))


class TestResolvePalette:

    def test_pads_with_layout_fallback(self):
        palette = resolve_palette(["#aa0000", "#00aa00"])
        assert isinstance(palette, Palette)
        assert palette.colors == ("#aa0000", "#00aa00", *LAYOUT_FALLBACK[2:])

    def test_empty_is_fallback(self):
        assert resolve_palette([]).colors == LAYOUT_FALLBACK

    def test_trims_extra(self):
        extracted = ["#000001", "#000002", "#000003", "#000004", "#000005", "#000006"]
        assert resolve_palette(extracted).colors == tuple(extracted[:5])

    def test_custom_fallback(self):
        fallback = ("#111111",) * 5
        assert resolve_palette(["#222222"], fallback).colors == ("#222222",) + ("#111111",) * 4

    def test_short_fallback_rejected(self):
        with pytest.raises(ValueError):
            resolve_palette([], ("#111111",))


class TestWorkingRaster:

    def test_tall_strip_height_capped(self):
        img = Image.new("RGB", (1, 5000), (40, 120, 200))
        pixels = _working_pixels(img)
        assert pixels.shape == (MAX_WORKING_HEIGHT, WORKING_WIDTH, 4)

    def test_tall_strip_extracts(self):
        img = Image.new("RGB", (1, 5000), (40, 120, 200))
        assert extract_palette(img) == ["#2878c8"]

    def test_cap_keeps_area_shares(self):
        arr = np.zeros((6000, 2, 3), dtype=np.uint8)
        arr[:4500] = (220, 30, 30)
        arr[4500:] = (30, 30, 220)
        palette = extract_palette(Image.fromarray(arr))
        assert _distance(palette[0], "#dc1e1e") <= 3
        assert _distance(palette[1], "#1e1edc") <= 3

    def test_normal_image_not_capped(self):
        pixels = _working_pixels(Image.new("RGB", (400, 300)))
        assert pixels.shape == (165, WORKING_WIDTH, 4)
