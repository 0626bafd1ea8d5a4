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
Dataclass-based Argument Models for CGTK Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments for each tool (`decode`, `encode`, `inspect`). It uses
`__post_init__` for validation and resolving configuration-backed default
values, ensuring that the core logic receives clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    ConvertArguments: Shared arguments for the two conversion tools.
    DecodeArguments: Arguments for the convert_to_png tool.
    EncodeArguments: Arguments for the convert_to_cgbi tool.
    InspectArguments: Arguments for the inspect_chunks tool.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from cgtk.utils.config_loader import config

logger = logging.getLogger(__name__)

@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    config_path: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Coerce path-like arguments to Path objects and check the input exists."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        if self.output_path and isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)
        if self.config_path and isinstance(self.config_path, str):
            self.config_path = Path(self.config_path)
        try:
            self._validate_base()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_base(self):
        if self.input_path is None:
            raise ValueError("The 'input_path' argument is required.")
        if not self.input_path.exists():
            raise ValueError(f"Input path not found: {self.input_path}")

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)

@dataclass
class ConvertArguments(BaseArguments):
    """Shared arguments for the conversion tools."""
    suffix: Optional[str] = None
    overwrite: Optional[bool] = None
    level: Optional[int] = None

    def __post_init__(self):
        """Validation and default resolution for conversion arguments."""
        super().__post_init__()
        try:
            self._validate_convert()
            self._resolve_defaults()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_convert(self):
        """Perform validation checks for conversion arguments."""
        if self.level is not None and not 0 <= self.level <= 9:
            raise ValueError(f"Compression level must be between 0 and 9, got {self.level}")
        if self.input_path.is_dir() and self.output_path and self.output_path.is_file():
            raise ValueError(f"Output must be a directory when the input is a directory: {self.output_path}")

    def _resolve_defaults(self):
        """Fill unset values from the configuration."""
        if self.suffix is None:
            self.suffix = config.get(self._suffix_key, '')
        if self.overwrite is None:
            self.overwrite = bool(config.get("output.overwrite", False))
        if self.level is None:
            self.level = config.get("transcode.compression_level")

    @property
    def _suffix_key(self) -> str:
        raise NotImplementedError

@dataclass
class DecodeArguments(ConvertArguments):
    """Arguments for the convert_to_png tool (CgBI -> PNG)."""

    @property
    def _suffix_key(self) -> str:
        return "output.png_suffix"

@dataclass
class EncodeArguments(ConvertArguments):
    """Arguments for the convert_to_cgbi tool (PNG -> CgBI)."""

    @property
    def _suffix_key(self) -> str:
        return "output.cgbi_suffix"

@dataclass
class InspectArguments(BaseArguments):
    """Arguments for the inspect_chunks tool."""
    cgbi_only: bool = False
