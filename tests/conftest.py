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
Pytest configuration and shared fixtures for CGTK test suite.

This module provides:
- Shared fixtures for common test data (mock PNG and CgBI files, images)
- Configuration isolation between tests

Fixtures are organized by scope:
- module: Created once per test module
- function: Created for each test function (default)

Example:
    >>> def test_using_fixture(cgbi_file):
    ...     '''Test using the cgbi_file fixture.'''
    ...     assert cgbi_file.read_bytes()[12:16] == b'CgBI'
"""

import numpy as np
import pytest
from PIL import Image

# pythonpath is configured in pyproject.toml to include project root
from cgtk.utils.config_loader import DEFAULT_CONFIG_PATH, config
from tests.fixtures.mock_png_factory import MockPNG


# =============================================================================
# Configuration Isolation
# =============================================================================

@pytest.fixture(autouse=True)
def restore_config():
    """
    Reload the packaged configuration after each test.

    The CLI's --config option replaces the settings of the process-wide
    Config singleton, so every test starts from the shipped defaults.
    """
    yield
    config.load(DEFAULT_CONFIG_PATH)


# =============================================================================
# Module-scope Fixtures (Created once per test module)
# =============================================================================

@pytest.fixture(scope="module")
def sample_pixels():
    """
    A 5x7 RGBA pixel grid with distinct red and blue values everywhere.

    Returns:
        np.ndarray: uint8 array of shape (7, 5, 4)
    """
    rng = np.random.default_rng(2025)
    pixels = rng.integers(0, 256, size=(7, 5, 4), dtype=np.uint8)
    pixels[..., 2] = (pixels[..., 0].astype(np.uint16) + 1) % 256
    return pixels


# =============================================================================
# Function-scope Fixtures (Created for each test)
# =============================================================================

@pytest.fixture
def cgbi_mock(sample_pixels):
    """A non-interlaced CgBI MockPNG built from sample_pixels."""
    return MockPNG(pixels=sample_pixels, cgbi=True)


@pytest.fixture
def cgbi_bytes(cgbi_mock):
    """The bytes of cgbi_mock."""
    return cgbi_mock.to_bytes()


@pytest.fixture
def cgbi_file(tmp_path, cgbi_mock):
    """cgbi_mock saved as icon.png in a temporary directory."""
    return cgbi_mock.save_to_file(tmp_path / "icon.png")


@pytest.fixture
def png_file(tmp_path, sample_pixels):
    """sample_pixels saved as a standard PNG (written by Pillow) named photo.png."""
    path = tmp_path / "photo.png"
    Image.fromarray(sample_pixels).save(path)
    return path


@pytest.fixture
def red_image():
    """A 2x2 fully opaque red RGBA image."""
    return Image.new("RGBA", (2, 2), (255, 0, 0, 255))
