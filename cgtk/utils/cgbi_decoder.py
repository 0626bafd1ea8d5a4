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
CgBI Decoder.

Rewrites an Apple CgBI container into a standard PNG byte stream and hands that
stream to Pillow's PNG decoder. The rewrite:

- checks the signature and the leading CgBI marker chunk (which is dropped),
- copies IHDR and every ancillary chunk unchanged,
- collects the raw deflate data of all IDAT chunks, inflates it, swaps the red
  and blue bytes of every pixel, and re-compresses it with zlib framing into a
  single IDAT chunk emitted just before IEND.

Nothing is written to the caller until the whole container has been validated.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Dict, Optional, Union

from PIL import Image

from cgtk.utils.channel_fixer import fix_raw_image
from cgtk.utils.chunk_io import ChunkReader, Source, make_chunk, parse_image_header
from cgtk.utils.chunk_order import ChunkOrderMachine, Direction
from cgtk.utils.config_loader import config
from cgtk.utils.data_models import ImageConfig, ImageHeader
from cgtk.utils.deflate_framing import DeflateFraming, reframe
from cgtk.utils.exceptions import FormatError
from cgtk.utils.png_constants import (
    CGBI_LENGTH,
    CGBI_MARKER,
    IEND_LENGTH,
    READ_WINDOW,
    ChunkType,
)

logger = logging.getLogger(__name__)


class CgbiDecoder:
    """
    Single-use CgBI to PNG rewriter.

    Attributes:
        header: The parsed IHDR fields, available once IHDR has been read.
    """

    def __init__(self, source: Source, compression_level: Optional[int] = None):
        window = config.get("transcode.read_window", READ_WINDOW)
        self._reader = ChunkReader(source, window)
        self._machine = ChunkOrderMachine(Direction.DECODE)
        self._level = compression_level if compression_level is not None else config.get("transcode.compression_level")
        self._output = io.BytesIO()
        self._compressed = bytearray()
        self.header: Optional[ImageHeader] = None
        self._handlers: Dict[bytes, Callable[[int, bytes], None]] = {
            ChunkType.CGBI.value: self._parse_cgbi,
            ChunkType.IHDR.value: self._parse_ihdr,
            ChunkType.IDAT.value: self._parse_idat,
            ChunkType.IEND.value: self._parse_iend,
        }

    def to_png_bytes(self) -> bytes:
        """
        Walk the whole container and return the standard PNG bytes.

        Raises:
            FormatError: For any structural problem, including ChunkOrderError.
            UnexpectedError: If the pixel data does not fit the IHDR geometry.
            UnexpectedEOFError: If the input ends before IEND.
        """
        self._output.write(self._reader.read_signature())
        while not self._machine.finished:
            length, chunk_type = self._reader.read_header()
            self._machine.advance(chunk_type)
            handler = self._handlers.get(chunk_type, self._copy_chunk)
            handler(length, chunk_type)
        return self._output.getvalue()

    def _parse_cgbi(self, length: int, chunk_type: bytes):
        if length != CGBI_LENGTH:
            raise FormatError("bad CgBI length")
        data = self._reader.read_data(length)
        if data != CGBI_MARKER:
            raise FormatError("bad CgBI data")
        self._reader.verify_checksum()

    def _parse_ihdr(self, length: int, chunk_type: bytes):
        data = self._reader.read_data(length)
        self._reader.verify_checksum()
        self.header = parse_image_header(data)
        logger.debug(
            f"IHDR: {self.header.width}x{self.header.height}, "
            f"interlace={self.header.interlace_method}"
        )
        self._output.write(make_chunk(chunk_type, data))

    def _parse_idat(self, length: int, chunk_type: bytes):
        for block in self._reader.iter_data(length):
            self._compressed.extend(block)
        self._reader.verify_checksum()

    def _parse_iend(self, length: int, chunk_type: bytes):
        if length != IEND_LENGTH:
            raise FormatError("bad IEND length")
        self._reader.verify_checksum()

        header = self.header
        data = reframe(
            bytes(self._compressed),
            DeflateFraming.RAW,
            DeflateFraming.ZLIB,
            lambda raw: fix_raw_image(raw, header.width, header.height, header.interlace_method),
            self._level,
        )
        self._compressed = bytearray()
        self._output.write(make_chunk(ChunkType.IDAT.value, data))
        self._output.write(make_chunk(chunk_type, b''))

    def _copy_chunk(self, length: int, chunk_type: bytes):
        data = self._reader.read_data(length)
        self._reader.verify_checksum()
        logger.debug(f"Passing through {chunk_type.decode('latin-1')} chunk ({length} bytes)")
        self._output.write(make_chunk(chunk_type, data))


def _read_source(source: Union[str, Path, BinaryIO, bytes]) -> Source:
    if isinstance(source, (str, Path)):
        return Path(source).read_bytes()
    return source


def cgbi_to_png(source: Union[str, Path, BinaryIO, bytes], compression_level: Optional[int] = None) -> bytes:
    """
    Rewrite a CgBI container as standard PNG bytes.

    Args:
        source: A path, a readable binary stream, or the file contents.
        compression_level: zlib level for the rebuilt IDAT chunk.

    Returns:
        A standard PNG byte string.
    """
    return CgbiDecoder(_read_source(source), compression_level).to_png_bytes()


def decode(source: Union[str, Path, BinaryIO, bytes]) -> Image.Image:
    """
    Decode a CgBI PNG into a Pillow image.

    The red and blue channels are restored; alpha is left as stored.

    Args:
        source: A path, a readable binary stream, or the file contents.

    Returns:
        A loaded RGBA image.
    """
    image = Image.open(io.BytesIO(cgbi_to_png(source)), formats=["PNG"])
    image.load()
    return image


def decode_config(source: Union[str, Path, BinaryIO, bytes]) -> ImageConfig:
    """
    Return the color mode and dimensions of a CgBI PNG.

    The full chunk and channel pipeline still runs, so a corrupt file is
    reported here just as it would be by `decode`.
    """
    image = Image.open(io.BytesIO(cgbi_to_png(source)), formats=["PNG"])
    width, height = image.size
    return ImageConfig(mode=image.mode, width=width, height=height)
