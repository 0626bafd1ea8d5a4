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
Shared Constants for PNG and CgBI Containers.

This module centralizes the fixed values used throughout the CGTK transcoder:
the PNG signature, the CgBI marker payload, chunk type tags, color types,
interlace methods and the Adam7 pass table. Every value here is immutable and
initialized once at import time.

Classes:
    ChunkType: Enum for the chunk types the transcoder interprets.
    ColorType: Enum for PNG color types.
    InterlaceMethod: Enum for PNG interlace methods.
"""
import struct
from enum import Enum, IntEnum

# --- Enumerations ---

class ChunkType(Enum):
    """Enumeration of the chunk type tags with special meaning to the transcoder."""
    CGBI = b'CgBI'
    IHDR = b'IHDR'
    IDAT = b'IDAT'
    IEND = b'IEND'

class ColorType(IntEnum):
    """Enumeration of PNG color types."""
    GRAYSCALE = 0
    TRUE_COLOR = 2
    PALETTED = 3
    GRAYSCALE_ALPHA = 4
    TRUE_COLOR_ALPHA = 6

class InterlaceMethod(IntEnum):
    """Enumeration of PNG interlace methods."""
    NONE = 0
    ADAM7 = 1


# --- Container Constants ---

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# BigEndian 1342185478, the payload every CgBI marker chunk carries
CGBI_MARKER_VALUE = 0x50002006
CGBI_MARKER = struct.pack('>I', CGBI_MARKER_VALUE)

MAX_CHUNK_LENGTH = 0x7fffffff
CHUNK_HEADER_SIZE = 8
CHUNK_CRC_SIZE = 4

IHDR_LENGTH = 13
CGBI_LENGTH = 4
IEND_LENGTH = 0

# The only combination the transcoder handles
SUPPORTED_BIT_DEPTH = 8
SUPPORTED_COLOR_TYPE = ColorType.TRUE_COLOR_ALPHA
BYTES_PER_PIXEL = 4

# Chunk payloads are copied in windows of this size
READ_WINDOW = 4096

DEFAULT_COMPRESSION_LEVEL = 6


# --- Adam7 Interlacing ---

# (x_factor, y_factor, x_offset, y_offset) per pass, see https://www.w3.org/TR/PNG/#8Interlace
ADAM7_PASSES = (
    (8, 8, 0, 0),
    (8, 8, 4, 0),
    (4, 8, 0, 4),
    (4, 4, 2, 0),
    (2, 4, 0, 2),
    (2, 2, 1, 0),
    (1, 2, 0, 1),
)
