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
Custom Exceptions Module.

A centralized module for custom exceptions used throughout the CgBI PNG ToolKit.
"""

class CgbiError(Exception):
    """Base exception for all transcoding errors."""
    pass

class FormatError(CgbiError, ValueError):
    """Raised when the input is not a valid PNG or CgBI container."""
    def __init__(self, message: str):
        super().__init__(f"png: invalid format: {message}")

class ChunkOrderError(FormatError):
    """Raised when a chunk appears where the chunk order forbids it."""
    def __init__(self, message: str = "chunk out of order"):
        super().__init__(message)

class UnsupportedError(CgbiError):
    """Raised when the input uses a valid but unimplemented PNG feature."""
    def __init__(self, message: str):
        super().__init__(f"png: unsupported feature: {message}")

class UnexpectedError(CgbiError):
    """Raised when decompressed pixel data does not match the image geometry."""
    def __init__(self, message: str):
        super().__init__(f"png: unexpected error: {message}")

class UnexpectedEOFError(CgbiError):
    """Raised when the input ends in the middle of the container."""
    def __init__(self, message: str = "unexpected end of input"):
        super().__init__(message)
