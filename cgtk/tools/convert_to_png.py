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
CgBI to PNG Conversion Tool for CGTK.

This module powers the 'decode' command: it rewrites Apple CgBI PNGs (as found
in iOS application bundles) into standard PNGs that any viewer can open. The
rewritten file keeps every ancillary chunk of the original.
"""

import logging
from pathlib import Path
from cgtk.utils.batch_runner import run_conversions
from cgtk.utils.cgbi_decoder import cgbi_to_png
from cgtk.utils.data_models import ConversionSummary
from cgtk.utils.script_arguments import DecodeArguments

logger = logging.getLogger('convert_to_png')


def _convert_single_file(input_path: Path, output_path: Path, level: int) -> int:
    data = cgbi_to_png(input_path, compression_level=level)
    output_path.write_bytes(data)
    return len(data)


def convert_to_png(args: DecodeArguments) -> ConversionSummary:
    """Main entry point for the 'decode' command."""
    return run_conversions(args, want_cgbi=True, convert_one=_convert_single_file)
