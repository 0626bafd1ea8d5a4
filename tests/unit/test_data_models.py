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
Unit tests for CGTK data models.

This module tests the dataclasses defined in cgtk.utils.data_models:
- Domain model classes (Chunk, ImageHeader, PassGeometry, ImageConfig)
- Report classes (ChunkSummary, ContainerSummary, ConversionSummary)
"""

import dataclasses
import zlib

import pytest

from cgtk.utils.data_models import (
    Chunk,
    ChunkSummary,
    ContainerSummary,
    ConversionSummary,
    ImageConfig,
    ImageHeader,
    PassGeometry,
)
from tests.fixtures.mock_png_factory import build_chunk, ihdr_payload


# =============================================================================
# Domain Model Classes Tests
# =============================================================================

@pytest.mark.unit
class TestChunk:
    """Test Chunk data model."""

    def test_to_bytes_matches_wire_format(self):
        """Test serializing a chunk to wire format."""
        data = b'Software\x00cgtk'
        chunk = Chunk(b'tEXt', data, zlib.crc32(b'tEXt' + data))
        assert chunk.to_bytes() == build_chunk(b'tEXt', data)

    def test_properties(self):
        """Test the derived chunk properties."""
        chunk = Chunk(b'IDAT', b'1234', 0)
        assert chunk.length == 4
        assert chunk.name == 'IDAT'
        assert chunk.is_critical

    def test_ancillary_chunk(self):
        """Test that a lowercase first letter marks an ancillary chunk."""
        assert not Chunk(b'tEXt', b'', 0).is_critical

    def test_chunk_is_frozen(self):
        """Test that chunks are immutable."""
        chunk = Chunk(b'IEND', b'', 0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            chunk.data = b'x'


@pytest.mark.unit
class TestImageHeader:
    """Test ImageHeader data model."""

    def test_from_bytes(self):
        """Test parsing IHDR fields from a payload."""
        payload = ihdr_payload(300, 200, interlace=1)
        header = ImageHeader.from_bytes(payload)
        assert (header.width, header.height) == (300, 200)
        assert (header.bit_depth, header.color_type) == (8, 6)
        assert header.is_interlaced

    def test_supported_combination(self):
        """Test which bit depth and color type pairs are supported."""
        assert ImageHeader(1, 1, 8, 6).is_supported
        assert not ImageHeader(1, 1, 16, 6).is_supported
        assert not ImageHeader(1, 1, 8, 2).is_supported

    def test_color_type_name(self):
        """Test color type names, including unknown values."""
        assert ImageHeader(1, 1, 8, 6).color_type_name == 'TRUE_COLOR_ALPHA'
        assert ImageHeader(1, 1, 8, 5).color_type_name == 'UNKNOWN (5)'


@pytest.mark.unit
class TestPassGeometry:
    """Test PassGeometry data model."""

    def test_byte_length_includes_filter_bytes(self):
        """Test pass byte length with one filter byte per row."""
        geometry = PassGeometry(index=0, width=3, height=2)
        assert geometry.row_length == 13
        assert geometry.byte_length == 26

    @pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (0, 0)])
    def test_empty_pass_has_no_bytes(self, width, height):
        """Test that an empty pass has no bytes at all."""
        geometry = PassGeometry(index=1, width=width, height=height)
        assert geometry.is_empty
        assert geometry.byte_length == 0


@pytest.mark.unit
class TestImageConfig:
    def test_size(self):
        """Test the size tuple of ImageConfig."""
        assert ImageConfig('RGBA', 10, 20).size == (10, 20)


# =============================================================================
# Report Classes Tests
# =============================================================================

@pytest.mark.unit
class TestReportClasses:
    """Test ChunkSummary, ContainerSummary and ConversionSummary."""

    def test_format_row(self):
        """Test the text row of a valid chunk."""
        row = ChunkSummary(offset=8, name='CgBI', length=4, crc=0x1234, crc_valid=True, notes=['marker ok'])
        line = row.format_row()
        assert 'CgBI' in line
        assert '0x00001234' in line
        assert line.endswith('ok  marker ok')

    def test_bad_crc_row(self):
        """Test that a bad CRC is flagged in the row."""
        assert 'BAD CRC' in ChunkSummary(8, 'IHDR', 13, 0, False).format_row()

    def test_container_crc_status(self):
        """Test the container status after a bad CRC row."""
        summary = ContainerSummary(path=None, is_cgbi=True)
        summary.chunks.append(ChunkSummary(8, 'CgBI', 4, 0, True))
        assert summary.all_crcs_valid
        summary.chunks.append(ChunkSummary(24, 'IHDR', 13, 0, False))
        assert not summary.all_crcs_valid

    def test_container_with_error_is_not_ok(self):
        """Test that a container that could not be read is not ok."""
        assert ContainerSummary(path='a.png', is_cgbi=False).ok
        failed = ContainerSummary(path='b.png', is_cgbi=False, error='not a PNG file')
        assert failed.all_crcs_valid
        assert not failed.ok

    def test_conversion_summary(self):
        """Test the counts and status of a batch summary."""
        summary = ConversionSummary()
        summary.converted.append(('a.png', 'a_png.png'))
        summary.skipped.append('b.png')
        assert summary.ok
        summary.failed.append(('c.png', 'bad'))
        assert not summary.ok
        assert summary.describe() == '1 converted, 1 skipped, 1 failed'
