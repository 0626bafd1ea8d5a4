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
Test fixtures and mock data factories for CGTK tests.

This package contains:
- MockPNG: Factory for creating in-memory standard and CgBI PNG files
- Chunk helpers: build_chunk, assemble, parse_chunks, ihdr_payload
"""

from tests.fixtures.mock_png_factory import MockPNG, assemble, build_chunk, ihdr_payload, parse_chunks

__all__ = ['MockPNG', 'assemble', 'build_chunk', 'ihdr_payload', 'parse_chunks']
