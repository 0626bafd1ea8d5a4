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
Chunk Reader/Validator and Chunk Writer.

Reads PNG-family containers chunk by chunk from any object with a blocking
`read(n)` method and writes chunks to any object with a `write(b)` method.
No seeking is required in either direction.

The reader accumulates the CRC-32 incrementally (type tag first, then the
payload in bounded windows) so a chunk can be validated without holding more
than one window of a large IDAT payload at a time when the caller streams it
onward with `iter_data()`.
"""

import io
import logging
import struct
import zlib
from typing import BinaryIO, Iterator, Tuple, Union

from cgtk.utils.data_models import Chunk, ImageHeader
from cgtk.utils.exceptions import FormatError, UnexpectedEOFError
from cgtk.utils.png_constants import (
    CHUNK_CRC_SIZE,
    CHUNK_HEADER_SIZE,
    IHDR_LENGTH,
    MAX_CHUNK_LENGTH,
    PNG_SIGNATURE,
    READ_WINDOW,
    InterlaceMethod,
)

logger = logging.getLogger(__name__)

Source = Union[BinaryIO, bytes, bytearray, memoryview]


def as_stream(source: Source) -> BinaryIO:
    """Wrap in-memory bytes in a stream; pass file-like objects through."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(source)
    return source


def crc32_of(chunk_type: bytes, data: bytes) -> int:
    """CRC-32 (IEEE) over type tag followed by payload."""
    return zlib.crc32(data, zlib.crc32(chunk_type)) & 0xffffffff


def make_chunk(chunk_type: bytes, data: bytes) -> bytes:
    """
    Frame a payload as a chunk in wire format.

    Args:
        chunk_type: 4-byte type tag.
        data: Chunk payload.

    Returns:
        length + type + payload + CRC-32, both integers big-endian.
    """
    if len(chunk_type) != 4:
        raise FormatError(f"bad chunk type: {chunk_type!r}")
    if len(data) > MAX_CHUNK_LENGTH:
        raise FormatError(f"Bad chunk length: {len(data)}")
    return Chunk(chunk_type, bytes(data), crc32_of(chunk_type, data)).to_bytes()


def write_chunk(sink: BinaryIO, chunk_type: bytes, data: bytes) -> int:
    """Write a freshly framed chunk to `sink` and return the bytes written."""
    framed = make_chunk(chunk_type, data)
    sink.write(framed)
    return len(framed)


class ChunkReader:
    """
    Sequential chunk reader with CRC validation.

    Typical use is `read_signature()` once, then `read_chunk()` until IEND.
    The lower-level `read_header()` / `iter_data()` / `verify_checksum()`
    triple lets a caller process a payload window by window.

    Attributes:
        offset: Number of bytes consumed from the source so far.
    """

    def __init__(self, source: Source, window: int = READ_WINDOW):
        self._stream = as_stream(source)
        self._window = max(1, int(window))
        self._crc = 0
        self.offset = 0

    def _read_full(self, size: int) -> bytes:
        """Read exactly `size` bytes or raise UnexpectedEOFError."""
        parts = []
        remaining = size
        while remaining > 0:
            block = self._stream.read(remaining)
            if not block:
                raise UnexpectedEOFError(
                    f"unexpected end of input at offset {self.offset + size - remaining}"
                )
            parts.append(block)
            remaining -= len(block)
        data = b''.join(parts)
        self.offset += size
        return data

    def read_signature(self) -> bytes:
        """Read and check the 8-byte PNG signature."""
        signature = self._read_full(len(PNG_SIGNATURE))
        if signature != PNG_SIGNATURE:
            raise FormatError("not a PNG file")
        return signature

    def read_header(self) -> Tuple[int, bytes]:
        """
        Read the 8-byte length + type header of the next chunk.

        The running CRC is reset and seeded with the type tag.

        Returns:
            Tuple of (payload length, type tag).
        """
        header = self._read_full(CHUNK_HEADER_SIZE)
        length, chunk_type = struct.unpack('>I4s', header)
        if length > MAX_CHUNK_LENGTH:
            raise FormatError(f"Bad chunk length: {length}")
        self._crc = zlib.crc32(chunk_type)
        return length, chunk_type

    def iter_data(self, length: int) -> Iterator[bytes]:
        """Yield the payload in windows of at most `window` bytes, updating the CRC."""
        while length > 0:
            block = self._read_full(min(self._window, length))
            self._crc = zlib.crc32(block, self._crc)
            length -= len(block)
            yield block

    def read_data(self, length: int) -> bytes:
        """Read a whole payload, updating the CRC."""
        return b''.join(self.iter_data(length))

    def verify_checksum(self) -> int:
        """
        Read the stored CRC and compare it with the accumulated one.

        Returns:
            The stored CRC value.

        Raises:
            FormatError: If the CRCs differ.
        """
        stored, = struct.unpack('>I', self._read_full(CHUNK_CRC_SIZE))
        if stored != self._crc & 0xffffffff:
            raise FormatError("invalid checksum")
        return stored

    def read_chunk(self) -> Chunk:
        """Read, validate and return the next chunk."""
        length, chunk_type = self.read_header()
        data = self.read_data(length)
        crc = self.verify_checksum()
        logger.debug(f"Read {chunk_type.decode('latin-1')} chunk ({length} bytes)")
        return Chunk(chunk_type, data, crc)

    def read_chunk_unchecked(self) -> Tuple[Chunk, bool]:
        """
        Read the next chunk without failing on a CRC mismatch.

        Returns:
            Tuple of (chunk, crc_valid).
        """
        length, chunk_type = self.read_header()
        data = self.read_data(length)
        stored, = struct.unpack('>I', self._read_full(CHUNK_CRC_SIZE))
        return Chunk(chunk_type, data, stored), stored == self._crc & 0xffffffff


def parse_image_header(payload: bytes) -> ImageHeader:
    """
    Parse and validate an IHDR payload.

    Args:
        payload: The IHDR chunk data.

    Returns:
        The parsed header.

    Raises:
        FormatError: For a wrong length, zero dimensions, non-zero compression
            or filter method, an unknown interlace method, or any color type and
            bit depth other than 8-bit true color with alpha.
    """
    if len(payload) != IHDR_LENGTH:
        raise FormatError("bad IHDR length")
    header = ImageHeader.from_bytes(payload)
    if header.interlace_method not in (InterlaceMethod.NONE, InterlaceMethod.ADAM7):
        raise FormatError("invalid interlace method")
    if header.width == 0 or header.height == 0:
        raise FormatError("invalid image dimensions")
    if header.width > MAX_CHUNK_LENGTH or header.height > MAX_CHUNK_LENGTH:
        raise FormatError("invalid image dimensions")
    if header.compression_method != 0 or header.filter_method != 0:
        raise FormatError("unsupported compression or filter method")
    if not header.is_supported:
        raise FormatError(
            f"color type {header.color_type_name} with bit depth {header.bit_depth} "
            "is not supported, only 8-bit true color with alpha"
        )
    return header
