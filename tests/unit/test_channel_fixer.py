#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: CgBI PNG ToolKit (CGTK)
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Unit tests for the interlace-aware channel fixer.

Organization:
- Adam7 pass geometry and size accounting
- Red/blue swap on single images
- Swap across interlaced buffers and the corruption guard
"""

import pytest

from cgtk.utils.channel_fixer import (
    adam7_pass_geometry,
    expected_raw_size,
    fix_raw_image,
    image_geometry,
    swap_red_blue,
)
from cgtk.utils.exceptions import UnexpectedError
from tests.fixtures.mock_png_factory import MockPNG


# =============================================================================
# Pass Geometry Tests
# =============================================================================

@pytest.mark.unit
class TestAdam7Geometry:
    """Test Adam7 sub-image dimensions."""

    def test_8x8_pass_dimensions(self):
        """Test the seven Adam7 pass sizes of an 8x8 image."""
        dims = [(p.width, p.height) for p in adam7_pass_geometry(8, 8)]
        assert dims == [(1, 1), (1, 1), (2, 1), (2, 2), (4, 2), (4, 4), (8, 4)]

    def test_8x8_pass_byte_lengths(self):
        """Test pass byte lengths include one filter byte per row."""
        lengths = [p.byte_length for p in adam7_pass_geometry(8, 8)]
        assert lengths == [5, 5, 9, 18, 34, 68, 132]
        assert sum(lengths) == 271

    def test_1x1_has_only_first_pass(self):
        """Test that a 1x1 image only populates the first pass."""
        geometry = adam7_pass_geometry(1, 1)
        assert [p.is_empty for p in geometry] == [False, True, True, True, True, True, True]
        assert expected_raw_size(1, 1, 1) == 5

    def test_zero_width_pass_contributes_nothing(self):
        """Pass 1 of a 1-pixel-wide image has rows but no columns, and no filter bytes."""
        second = adam7_pass_geometry(1, 8)[1]
        assert second.width == 0
        assert second.height == 1
        assert second.byte_length == 0

    def test_pixel_counts_cover_image(self):
        """Test that the passes together cover every pixel exactly once."""
        for width, height in [(1, 1), (3, 5), (8, 8), (9, 17), (31, 2)]:
            covered = sum(p.width * p.height for p in adam7_pass_geometry(width, height))
            assert covered == width * height

    @pytest.mark.parametrize("width,height", [(1, 1), (2, 3), (5, 1), (8, 8), (9, 9), (13, 7), (33, 4)])
    def test_size_accounting_matches_interlaced_stream(self, width, height):
        """The seven pass lengths sum to the length of a real Adam7 raw stream."""
        raw = MockPNG(width=width, height=height, interlace=1).raw_scanlines()
        assert expected_raw_size(width, height, 1) == len(raw)

    def test_non_interlaced_size(self):
        """Test the raw size of a non-interlaced image."""
        assert expected_raw_size(4, 3, 0) == 3 * (4 * 4 + 1)
        assert len(image_geometry(4, 3, 0)) == 1


# =============================================================================
# Swap Tests
# =============================================================================

@pytest.mark.unit
class TestSwapRedBlue:
    """Test the in-place swap of bytes 0 and 2 of each pixel."""

    def test_single_pixel(self):
        """Test swapping the channels of a single BGRA pixel."""
        raw = bytearray([0, 0x10, 0x20, 0x30, 0x40])  # filter, B, G, R, A
        assert swap_red_blue(raw, 1, 1) == 5
        assert raw == bytearray([0, 0x30, 0x20, 0x10, 0x40])

    def test_filter_bytes_untouched(self):
        """Test that filter bytes are never swapped."""
        raw = bytearray([1, 10, 20, 30, 40, 50, 60, 70, 80,
                         4, 11, 21, 31, 41, 51, 61, 71, 81])
        swap_red_blue(raw, 2, 2)
        assert raw == bytearray([1, 30, 20, 10, 40, 70, 60, 50, 80,
                                 4, 31, 21, 11, 41, 71, 61, 51, 81])

    def test_swap_is_its_own_inverse(self):
        """Test that swapping twice restores the buffer."""
        original = MockPNG(width=6, height=4).raw_scanlines()
        raw = bytearray(original)
        fix_raw_image(raw, 6, 4, 0)
        assert raw != bytearray(original)
        fix_raw_image(raw, 6, 4, 0)
        assert raw == bytearray(original)

    def test_offset(self):
        """Test swapping a sub-image that starts part way into the buffer."""
        raw = bytearray([9, 9, 0, 1, 2, 3, 4])
        swap_red_blue(raw, 1, 1, offset=2)
        assert raw == bytearray([9, 9, 0, 3, 2, 1, 4])

    def test_empty_geometry(self):
        """Test that an empty sub-image consumes no bytes."""
        raw = bytearray(b'abc')
        assert swap_red_blue(raw, 0, 3) == 0
        assert raw == bytearray(b'abc')

    def test_buffer_too_short(self):
        """Test UnexpectedError when the sub-image does not fit."""
        with pytest.raises(UnexpectedError):
            swap_red_blue(bytearray(9), 2, 1, offset=1)


@pytest.mark.unit
class TestFixRawImage:
    """Test swapping over whole buffers."""

    def test_interlaced_matches_swapped_stream(self):
        """Fixing an Adam7 CgBI stream gives the Adam7 stream of the RGBA pixels."""
        for width, height in [(1, 1), (3, 2), (8, 8), (11, 6)]:
            rgba = MockPNG(width=width, height=height, interlace=1, seed=width)
            bgra = MockPNG(pixels=rgba.pixels, interlace=1, cgbi=True)
            raw = bytearray(bgra.raw_scanlines())

            processed = fix_raw_image(raw, width, height, 1)

            assert processed == len(raw)
            assert raw == bytearray(rgba.raw_scanlines())

    def test_interlaced_buffer_too_short(self):
        """Test UnexpectedError when the last Adam7 pass does not fit."""
        raw = bytearray(MockPNG(width=8, height=8, interlace=1).raw_scanlines())
        with pytest.raises(UnexpectedError, match="amount of image data"):
            fix_raw_image(raw[:-1], 8, 8, 1)

    def test_non_interlaced_buffer_too_short(self):
        """Test UnexpectedError for a short non-interlaced buffer."""
        raw = bytearray(MockPNG(width=3, height=3).raw_scanlines())
        with pytest.raises(UnexpectedError):
            fix_raw_image(raw[:-4], 3, 3, 0)

    def test_extra_bytes_are_left_alone(self):
        """Test that bytes past the image geometry are not touched."""
        raw = bytearray(MockPNG(width=2, height=2).raw_scanlines()) + b'tail'
        assert fix_raw_image(raw, 2, 2, 0) == len(raw) - 4
        assert raw.endswith(b'tail')
