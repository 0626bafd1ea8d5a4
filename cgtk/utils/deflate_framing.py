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
Deflate Re-framer.

CgBI containers store the compressed image stream as raw deflate data, with
neither the 2-byte zlib header nor the 4-byte Adler-32 trailer that a standard
PNG requires. Both framings are first-class modes here: RAW inflates without
any trailer verification (the checksum of a CgBI stream is unknown), ZLIB
verifies header and trailer.

Channels cannot be swapped inside a compressed stream, so re-framing always
means inflate, transform the raw bytes in place, and deflate again.
"""

import logging
import zlib
from enum import Enum
from typing import Callable, Optional

from cgtk.utils.exceptions import FormatError
from cgtk.utils.png_constants import DEFAULT_COMPRESSION_LEVEL

logger = logging.getLogger(__name__)


class DeflateFraming(Enum):
    """Framing of a deflate stream, expressed as the zlib `wbits` value."""
    RAW = -zlib.MAX_WBITS
    ZLIB = zlib.MAX_WBITS


def inflate(stream: bytes, framing: DeflateFraming) -> bytearray:
    """
    Decompress a complete deflate stream.

    Args:
        stream: The concatenated IDAT payloads.
        framing: RAW for CgBI data, ZLIB for standard PNG data.

    Returns:
        The decompressed bytes, as a mutable buffer.

    Raises:
        FormatError: If the stream is corrupt or ends before the final block.
    """
    decompressor = zlib.decompressobj(framing.value)
    try:
        data = decompressor.decompress(stream)
        data += decompressor.flush()
    except zlib.error as e:
        raise FormatError(f"corrupt compressed image data ({e})") from e
    if not decompressor.eof:
        raise FormatError("truncated compressed image data")
    if decompressor.unused_data:
        logger.debug(f"Ignoring {len(decompressor.unused_data)} bytes after the deflate stream")
    return bytearray(data)


def deflate(raw: bytes, framing: DeflateFraming, level: Optional[int] = None) -> bytes:
    """
    Compress raw bytes into a complete deflate stream.

    Args:
        raw: Decompressed pixel bytes.
        framing: RAW for CgBI output, ZLIB for standard PNG output.
        level: zlib compression level 0-9.

    Returns:
        The compressed stream.
    """
    if level is None:
        level = DEFAULT_COMPRESSION_LEVEL
    compressor = zlib.compressobj(level, zlib.DEFLATED, framing.value)
    return compressor.compress(raw) + compressor.flush()


def reframe(
    stream: bytes,
    source: DeflateFraming,
    target: DeflateFraming,
    transform: Callable[[bytearray], None],
    level: Optional[int] = None,
) -> bytes:
    """
    Inflate `stream`, apply `transform` to the raw bytes in place, and deflate
    the result with the `target` framing.

    Args:
        stream: Compressed input.
        source: Framing of the input.
        target: Framing of the output.
        transform: Called once with the mutable decompressed buffer.
        level: zlib compression level for the output.

    Returns:
        The re-framed compressed stream.
    """
    raw = inflate(stream, source)
    logger.debug(f"Inflated {len(stream)} {source.name} bytes to {len(raw)} raw bytes")
    transform(raw)
    result = deflate(raw, target, level)
    logger.debug(f"Deflated {len(raw)} raw bytes to {len(result)} {target.name} bytes")
    return result
