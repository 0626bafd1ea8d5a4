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
PNG to CgBI Conversion Tool for CGTK.

This module powers the 'encode' command: it converts ordinary images into
Apple CgBI PNGs with swapped red/blue channels, a zero alpha plane and a
headerless deflate stream. Any image Pillow can open with a .png extension is
accepted; it is converted to 8-bit RGBA first.
"""

import logging
from pathlib import Path
from PIL import Image
from cgtk.utils.batch_runner import run_conversions
from cgtk.utils.cgbi_encoder import encode
from cgtk.utils.data_models import ConversionSummary
from cgtk.utils.script_arguments import EncodeArguments

logger = logging.getLogger('convert_to_cgbi')


def _convert_single_file(input_path: Path, output_path: Path, level: int) -> int:
    with Image.open(input_path, formats=["PNG"]) as image:
        image.load()
        logger.debug(f"{input_path.name}: {image.width}x{image.height} {image.mode}")
        return encode(output_path, image, compression_level=level)


def convert_to_cgbi(args: EncodeArguments) -> ConversionSummary:
    """Main entry point for the 'encode' command."""
    return run_conversions(args, want_cgbi=False, convert_one=_convert_single_file)
