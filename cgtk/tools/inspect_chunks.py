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
Chunk Inspection Tool for CGTK.

This module powers the 'inspect' command: it lists every chunk of a PNG or
CgBI file with its offset, length and CRC status, reports the IHDR fields, and
tells whether the image stream is zlib-framed (standard) or raw deflate (CgBI).
Unlike the converters it keeps going past a bad CRC so that damaged files can
be examined.
"""

import logging
from pathlib import Path
from typing import List, Optional
from cgtk.utils.chunk_io import ChunkReader, Source
from cgtk.utils.data_models import ChunkSummary, ContainerSummary, ImageHeader
from cgtk.utils.exceptions import CgbiError, UnexpectedEOFError
from cgtk.utils.path_helpers import get_png_files
from cgtk.utils.png_constants import CGBI_MARKER, IHDR_LENGTH, PNG_SIGNATURE, ChunkType
from cgtk.utils.script_arguments import InspectArguments

logger = logging.getLogger('inspect_chunks')


def looks_zlib_framed(stream: bytes) -> bool:
    """True if `stream` starts with a valid zlib header (deflate, checksum ok)."""
    if len(stream) < 2:
        return False
    cmf, flg = stream[0], stream[1]
    return cmf & 0x0f == 8 and (cmf << 8 | flg) % 31 == 0


def summarize_container(source: Source, path: Optional[str] = None) -> ContainerSummary:
    """
    Walk a container without enforcing chunk order and describe each chunk.

    Args:
        source: A readable binary stream or the file contents.
        path: Path shown in the report.

    Returns:
        ContainerSummary: The chunk listing.

    Raises:
        FormatError: If the signature is not the PNG signature.
    """
    reader = ChunkReader(source)
    reader.read_signature()
    summary = ContainerSummary(path=path, is_cgbi=False)
    first_idat = True

    while True:
        offset = reader.offset
        try:
            chunk, crc_valid = reader.read_chunk_unchecked()
        except UnexpectedEOFError:
            summary.chunks.append(ChunkSummary(offset, '----', 0, 0, False, ['truncated']))
            break

        row = ChunkSummary(offset, chunk.name, chunk.length, chunk.crc, crc_valid)
        if chunk.chunk_type == ChunkType.CGBI.value:
            summary.is_cgbi = offset == len(PNG_SIGNATURE)
            row.notes.append('marker ok' if chunk.data == CGBI_MARKER else f"unexpected marker {chunk.data.hex()}")
        elif chunk.chunk_type == ChunkType.IHDR.value and chunk.length == IHDR_LENGTH:
            header = ImageHeader.from_bytes(chunk.data)
            summary.header = header
            row.notes.append(
                f"{header.width}x{header.height}, depth {header.bit_depth}, "
                f"{header.color_type_name}, interlace {header.interlace_method}"
            )
        elif chunk.chunk_type == ChunkType.IDAT.value and first_idat:
            first_idat = False
            row.notes.append('zlib stream' if looks_zlib_framed(chunk.data) else 'raw deflate stream')
        elif not chunk.is_critical:
            row.notes.append('ancillary')
        summary.chunks.append(row)

        if chunk.chunk_type == ChunkType.IEND.value:
            break

    return summary


def _log_summary(summary: ContainerSummary):
    variant = 'CgBI' if summary.is_cgbi else 'standard PNG'
    logger.info(f"\n{summary.path}: {variant}")
    logger.info(f"{'offset':>10}  {'type':<4}  {'length':>10}  {'crc':<10}  status")
    for row in summary.chunks:
        logger.info(row.format_row())


def inspect_chunks(args: InspectArguments) -> List[ContainerSummary]:
    """
    Main entry point for the 'inspect' command.

    Returns one summary per file found; files that could not be read carry
    an `error` and no chunk rows.
    """
    summaries = []
    files = get_png_files(str(args.input_path), cgbi=True if args.cgbi_only else None)
    if not files:
        logger.warning(f"No PNG files found in {args.input_path}")
    for file_path in files:
        try:
            summary = summarize_container(Path(file_path).read_bytes(), file_path)
        except (CgbiError, OSError) as e:
            logger.error(f"Error reading {Path(file_path).name}: {e}")
            summaries.append(ContainerSummary(path=file_path, is_cgbi=False, error=str(e)))
            continue
        _log_summary(summary)
        summaries.append(summary)
    return summaries
