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
Interlace-Aware Channel Fixer.

CgBI pixel data stores each pixel as B, G, R, A; standard PNG stores R, G, B, A.
The fix swaps byte offsets 0 and 2 of every 4-byte pixel in the decompressed
(still filtered) scanlines and leaves the green and alpha bytes, as well as each
scanline's leading filter byte, untouched. Every PNG filter predicts a byte
from the byte four positions earlier or from the same position on the previous
scanline, so the swap commutes with filtering and no unfiltering is needed.
The swap is its own inverse, so the same routine serves both directions.

Interlaced images are the concatenation of the seven Adam7 sub-images, each
with its own scanline width. Sub-images are processed in place, in their
original sub-sampled order; nothing is de-interlaced.
"""

import logging
from typing import List

import numpy as np

from cgtk.utils.data_models import PassGeometry
from cgtk.utils.exceptions import UnexpectedError
from cgtk.utils.png_constants import ADAM7_PASSES, BYTES_PER_PIXEL, InterlaceMethod

logger = logging.getLogger(__name__)


def _ceil_div(numerator: int, denominator: int) -> int:
    return max(0, (numerator + denominator - 1) // denominator)


def adam7_pass_geometry(width: int, height: int) -> List[PassGeometry]:
    """
    Compute the dimensions of the seven Adam7 sub-images.

    Args:
        width: Full image width in pixels.
        height: Full image height in pixels.

    Returns:
        Seven PassGeometry entries in pass order. Passes that contain no pixels
        (possible for images narrower or shorter than 8 pixels) have a zero
        dimension and a byte_length of 0.
    """
    return [
        PassGeometry(
            index=index,
            width=_ceil_div(width - x_offset, x_factor),
            height=_ceil_div(height - y_offset, y_factor),
        )
        for index, (x_factor, y_factor, x_offset, y_offset) in enumerate(ADAM7_PASSES)
    ]


def image_geometry(width: int, height: int, interlace: int) -> List[PassGeometry]:
    """Sub-images making up the raw buffer: one for plain images, seven for Adam7."""
    if interlace == InterlaceMethod.ADAM7:
        return adam7_pass_geometry(width, height)
    return [PassGeometry(index=0, width=width, height=height)]


def expected_raw_size(width: int, height: int, interlace: int) -> int:
    """Total length of the decompressed buffer for an 8-bit RGBA image."""
    return sum(geometry.byte_length for geometry in image_geometry(width, height, interlace))


def swap_red_blue(raw: bytearray, width: int, height: int, offset: int = 0) -> int:
    """
    Swap the red and blue bytes of every pixel of one (sub-)image in place.

    Args:
        raw: Mutable decompressed buffer.
        width: Pixels per scanline.
        height: Number of scanlines.
        offset: Position of the sub-image's first filter byte in `raw`.

    Returns:
        The number of bytes the sub-image occupies.
    """
    geometry = PassGeometry(index=0, width=width, height=height)
    if geometry.is_empty:
        return 0
    if offset + geometry.byte_length > len(raw):
        raise UnexpectedError("amount of image data")

    rows = np.frombuffer(raw, dtype=np.uint8, count=geometry.byte_length, offset=offset)
    rows = rows.reshape(height, geometry.row_length)
    # column 0 is the filter byte; pixel k starts at column 1 + 4k
    red = rows[:, 1::BYTES_PER_PIXEL].copy()
    rows[:, 1::BYTES_PER_PIXEL] = rows[:, 3::BYTES_PER_PIXEL]
    rows[:, 3::BYTES_PER_PIXEL] = red
    return geometry.byte_length


def fix_raw_image(raw: bytearray, width: int, height: int, interlace: int) -> int:
    """
    Swap red and blue across the whole decompressed buffer.

    Args:
        raw: Mutable decompressed buffer.
        width: Image width from IHDR.
        height: Image height from IHDR.
        interlace: Interlace method from IHDR.

    Returns:
        Number of bytes processed.

    Raises:
        UnexpectedError: If the computed (sub-)image sizes exceed the buffer.
    """
    total = 0
    for geometry in image_geometry(width, height, interlace):
        if geometry.is_empty:
            continue
        if total + geometry.byte_length > len(raw):
            raise UnexpectedError("amount of image data")
        total += swap_red_blue(raw, geometry.width, geometry.height, total)

    if total != len(raw):
        logger.debug(f"Raw buffer holds {len(raw)} bytes, image geometry accounts for {total}")
    return total
