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
Data Models for the CgBI PNG ToolKit.

This module defines strongly-typed data classes for representing the pieces of a
PNG-family container that the transcoder reads, validates and rewrites. These
classes provide type safety, self-documentation, and clear contracts between
modules.

Domain model classes:
    Chunk: A single validated chunk (type tag, payload, CRC-32)
    ImageHeader: The parsed fields of an IHDR chunk
    PassGeometry: Dimensions of one Adam7 sub-image (or of the whole image)
    ImageConfig: Color mode and dimensions returned by decode_config

Report classes:
    ChunkSummary: One row of a chunk listing produced by the inspect command
    ContainerSummary: The chunk listing of a whole file
    ConversionSummary: Outcome of a batch conversion
"""

import struct
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from cgtk.utils.png_constants import (
    BYTES_PER_PIXEL,
    SUPPORTED_BIT_DEPTH,
    SUPPORTED_COLOR_TYPE,
    ColorType,
    InterlaceMethod,
)


# ============================================================================
# Domain model classes
# ============================================================================

@dataclass(frozen=True)
class Chunk:
    """
    Represents a single chunk of a PNG or CgBI container.

    A chunk is immutable once validated. Rewritten output chunks are built as
    new values rather than patched copies.

    Attributes:
        chunk_type: The 4-byte ASCII type tag (e.g., b'IHDR')
        data: The chunk payload
        crc: The CRC-32 stored after the payload (over type + payload)

    Example:
        >>> chunk = Chunk(b'IEND', b'', 0xAE426082)
        >>> chunk.length
        0
        >>> chunk.name
        'IEND'
    """
    chunk_type: bytes
    data: bytes
    crc: int

    @property
    def length(self) -> int:
        """Length of the payload in bytes."""
        return len(self.data)

    @property
    def name(self) -> str:
        """The type tag decoded as text."""
        return self.chunk_type.decode('latin-1')

    @property
    def is_critical(self) -> bool:
        """True when the ancillary bit (bit 5 of the first byte) is clear."""
        return not self.chunk_type[0] & 0x20

    def to_bytes(self) -> bytes:
        """
        Serialise the chunk in wire format.

        Returns:
            length (big-endian uint32) + type + payload + CRC (big-endian uint32)
        """
        return (
            struct.pack('>I', len(self.data))
            + self.chunk_type
            + self.data
            + struct.pack('>I', self.crc)
        )


@dataclass(frozen=True)
class ImageHeader:
    """
    Represents the fields of an IHDR chunk.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        bit_depth: Bits per sample
        color_type: PNG color type (6 = true color with alpha)
        compression_method: Must be 0 (deflate)
        filter_method: Must be 0 (adaptive filtering)
        interlace_method: 0 (none) or 1 (Adam7)

    Example:
        >>> header = ImageHeader.from_bytes(bytes.fromhex('00000001000000010806000000'))
        >>> header.width, header.height, header.is_supported
        (1, 1, True)
    """
    width: int
    height: int
    bit_depth: int
    color_type: int
    compression_method: int = 0
    filter_method: int = 0
    interlace_method: int = InterlaceMethod.NONE

    @classmethod
    def from_bytes(cls, payload: bytes) -> 'ImageHeader':
        """
        Parse the 13-byte IHDR payload.

        Args:
            payload: The IHDR chunk data.

        Returns:
            The parsed ImageHeader.

        Raises:
            struct.error: If the payload is not exactly 13 bytes.
        """
        return cls(*struct.unpack('>IIBBBBB', payload))

    @property
    def is_supported(self) -> bool:
        """True only for 8-bit true color with alpha."""
        return self.bit_depth == SUPPORTED_BIT_DEPTH and self.color_type == SUPPORTED_COLOR_TYPE

    @property
    def is_interlaced(self) -> bool:
        return self.interlace_method == InterlaceMethod.ADAM7

    @property
    def color_type_name(self) -> str:
        try:
            return ColorType(self.color_type).name
        except ValueError:
            return f"UNKNOWN ({self.color_type})"


@dataclass(frozen=True)
class PassGeometry:
    """
    Dimensions of one sub-image in the raw (decompressed) pixel buffer.

    For non-interlaced images there is a single pass covering the whole image.
    Each scanline of a pass is one filter byte followed by four bytes per pixel.

    Attributes:
        index: Adam7 pass index 0..6 (0 for non-interlaced images)
        width: Pixels per scanline in this pass
        height: Scanlines in this pass
    """
    index: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @property
    def row_length(self) -> int:
        """Bytes per scanline, including the leading filter byte."""
        return self.width * BYTES_PER_PIXEL + 1

    @property
    def byte_length(self) -> int:
        """Bytes this pass occupies in the raw buffer; empty passes occupy none."""
        if self.is_empty:
            return 0
        return self.width * self.height * BYTES_PER_PIXEL + self.height


@dataclass(frozen=True)
class ImageConfig:
    """
    Color model and dimensions of a decoded image.

    Attributes:
        mode: Pillow image mode (e.g., 'RGBA')
        width: Image width in pixels
        height: Image height in pixels
    """
    mode: str
    width: int
    height: int

    @property
    def size(self):
        return (self.width, self.height)


# ============================================================================
# Report classes
# ============================================================================

@dataclass
class ChunkSummary:
    """
    One row of a chunk listing.

    Attributes:
        offset: Byte offset of the chunk's length field in the file
        name: The chunk type tag as text
        length: Payload length in bytes
        crc: CRC-32 stored in the file
        crc_valid: Whether the stored CRC matches the computed one
        notes: Free-form details (e.g., parsed IHDR fields)
    """
    offset: int
    name: str
    length: int
    crc: int
    crc_valid: bool
    notes: List[str] = field(default_factory=list)

    def format_row(self) -> str:
        """Render the summary as a single aligned text line."""
        status = 'ok' if self.crc_valid else 'BAD CRC'
        line = f"{self.offset:>10}  {self.name:<4}  {self.length:>10}  0x{self.crc:08x}  {status}"
        if self.notes:
            line += '  ' + '; '.join(self.notes)
        return line


@dataclass
class ContainerSummary:
    """
    Chunk listing of a whole container.

    Attributes:
        path: Source file path, if known
        is_cgbi: True if the first chunk is the CgBI marker
        header: Parsed IHDR fields, if an IHDR chunk was found
        chunks: Per-chunk rows in file order
        error: Why the file could not be listed, if it could not
    """
    path: Optional[str]
    is_cgbi: bool
    header: Optional[ImageHeader] = None
    chunks: List[ChunkSummary] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def all_crcs_valid(self) -> bool:
        return all(chunk.crc_valid for chunk in self.chunks)

    @property
    def ok(self) -> bool:
        return self.error is None and self.all_crcs_valid


@dataclass
class ConversionSummary:
    """
    Outcome of a batch conversion.

    Attributes:
        converted: (input, output) path pairs written successfully
        skipped: Input paths left alone (e.g., output already exists)
        failed: (input, error message) pairs
    """
    converted: List[Tuple[str, str]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def describe(self) -> str:
        return f"{len(self.converted)} converted, {len(self.skipped)} skipped, {len(self.failed)} failed"
