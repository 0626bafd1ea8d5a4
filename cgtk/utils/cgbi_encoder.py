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
CgBI Encoder.

Encodes a Pillow image as an Apple CgBI PNG. The image is first normalized to
RGBA with a zero alpha plane and written by Pillow's standard PNG encoder into
a staging buffer. That buffer is then walked chunk by chunk:

- the CgBI marker chunk is injected right after the signature,
- IHDR and ancillary chunks are copied unchanged,
- the zlib stream of all IDAT chunks is inflated, red and blue are swapped, and
  the result is re-compressed as raw deflate (no zlib header, no Adler-32
  trailer) into a single IDAT chunk emitted just before IEND.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Optional, Union

from PIL import Image

from cgtk.utils.channel_fixer import fix_raw_image
from cgtk.utils.chunk_io import ChunkReader, make_chunk, parse_image_header
from cgtk.utils.chunk_order import ChunkOrderMachine, Direction
from cgtk.utils.config_loader import config
from cgtk.utils.data_models import ImageHeader
from cgtk.utils.deflate_framing import DeflateFraming, reframe
from cgtk.utils.exceptions import FormatError
from cgtk.utils.png_constants import (
    CGBI_MARKER,
    IEND_LENGTH,
    PNG_SIGNATURE,
    READ_WINDOW,
    ChunkType,
)

logger = logging.getLogger(__name__)


def zero_alpha(image: Image.Image) -> Image.Image:
    """
    Return an RGBA copy of `image` whose alpha plane is all zero.

    Color values are kept as straight (non-premultiplied) RGB.
    """
    rgba = image.convert("RGBA")
    rgba.putalpha(0)
    return rgba


class CgbiEncoder:
    """
    Single-use PNG to CgBI rewriter.

    The output is assembled in memory and written to the sink only after the
    whole input has been processed.

    Attributes:
        header: The parsed IHDR fields, available once IHDR has been read.
    """

    def __init__(self, sink: BinaryIO, compression_level: Optional[int] = None):
        self._sink = sink
        self._machine = ChunkOrderMachine(Direction.ENCODE)
        self._level = compression_level if compression_level is not None else config.get("transcode.compression_level")
        self._output = io.BytesIO()
        self._compressed = bytearray()
        self._reader: Optional[ChunkReader] = None
        self.header: Optional[ImageHeader] = None
        self._handlers: Dict[bytes, Callable[[int, bytes], None]] = {
            ChunkType.IHDR.value: self._make_ihdr,
            ChunkType.IDAT.value: self._make_idat,
            ChunkType.IEND.value: self._make_iend,
        }

    def write(self, png_bytes: bytes) -> int:
        """
        Rewrite a standard 8-bit RGBA PNG as CgBI and write it to the sink.

        Args:
            png_bytes: A complete standard PNG.

        Returns:
            The number of bytes written.
        """
        self._reader = ChunkReader(png_bytes, config.get("transcode.read_window", READ_WINDOW))
        self._reader.read_signature()
        self._output.write(PNG_SIGNATURE)
        self._output.write(make_chunk(ChunkType.CGBI.value, CGBI_MARKER))

        while not self._machine.finished:
            length, chunk_type = self._reader.read_header()
            self._machine.advance(chunk_type)
            handler = self._handlers.get(chunk_type, self._copy_chunk)
            handler(length, chunk_type)

        result = self._output.getvalue()
        self._sink.write(result)
        return len(result)

    def _make_ihdr(self, length: int, chunk_type: bytes):
        data = self._reader.read_data(length)
        self._reader.verify_checksum()
        self.header = parse_image_header(data)
        self._output.write(make_chunk(chunk_type, data))

    def _make_idat(self, length: int, chunk_type: bytes):
        for block in self._reader.iter_data(length):
            self._compressed.extend(block)
        self._reader.verify_checksum()

    def _make_iend(self, length: int, chunk_type: bytes):
        if length != IEND_LENGTH:
            raise FormatError("bad IEND length")
        self._reader.verify_checksum()

        header = self.header
        data = reframe(
            bytes(self._compressed),
            DeflateFraming.ZLIB,
            DeflateFraming.RAW,
            lambda raw: fix_raw_image(raw, header.width, header.height, header.interlace_method),
            self._level,
        )
        self._compressed = bytearray()
        self._output.write(make_chunk(ChunkType.IDAT.value, data))
        self._output.write(make_chunk(chunk_type, b''))

    def _copy_chunk(self, length: int, chunk_type: bytes):
        data = self._reader.read_data(length)
        self._reader.verify_checksum()
        self._output.write(make_chunk(chunk_type, data))


def png_to_cgbi(png_bytes: bytes, compression_level: Optional[int] = None) -> bytes:
    """
    Rewrite standard 8-bit RGBA PNG bytes as a CgBI container.

    Pixel values, including alpha, are carried over as they are; use `encode`
    to apply the zero-alpha normalization.
    """
    sink = io.BytesIO()
    CgbiEncoder(sink, compression_level).write(png_bytes)
    return sink.getvalue()


def encode(destination: Union[str, Path, BinaryIO], image: Image.Image, compression_level: Optional[int] = None) -> int:
    """
    Encode a Pillow image as a CgBI PNG.

    Args:
        destination: A path or a writable binary stream.
        image: Any Pillow image; it is converted to RGBA with zero alpha.
        compression_level: zlib level for the IDAT chunk.

    Returns:
        The number of bytes written.
    """
    staging = io.BytesIO()
    zero_alpha(image).save(staging, format="PNG")
    logger.debug(f"Staged {image.width}x{image.height} {image.mode} image as {staging.tell()} PNG bytes")

    data = png_to_cgbi(staging.getvalue(), compression_level)
    if isinstance(destination, (str, Path)):
        Path(destination).write_bytes(data)
    else:
        destination.write(data)
    return len(data)
