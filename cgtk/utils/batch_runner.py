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
Batch Conversion Runner.

Applies a single-file conversion to every matching PNG under an input path,
mirroring the input directory structure in the output directory. Failures are
logged and collected per file so that one corrupt file does not stop a batch.
"""
import logging
import os
from pathlib import Path
from typing import Callable
from cgtk.utils.data_models import ConversionSummary
from cgtk.utils.exceptions import CgbiError
from cgtk.utils.path_helpers import copy_folder_structure, get_png_files, resolve_output_path
from cgtk.utils.script_arguments import ConvertArguments

logger = logging.getLogger(__name__)

def run_conversions(
    args: ConvertArguments,
    want_cgbi: bool,
    convert_one: Callable[[Path, Path, int], int],
) -> ConversionSummary:
    """
    Convert every matching file under `args.input_path`.

    Args:
        args: Validated conversion arguments.
        want_cgbi: True to convert CgBI inputs, False for standard PNG inputs.
        convert_one: Called as convert_one(input, output, level); returns bytes written.

    Returns:
        ConversionSummary: What was converted, skipped and failed.
    """
    summary = ConversionSummary()
    files = get_png_files(str(args.input_path), cgbi=want_cgbi)
    kind = 'CgBI' if want_cgbi else 'standard PNG'
    if not files:
        logger.warning(f"No {kind} files found in {args.input_path}")
        return summary

    if args.input_path.is_dir():
        output_root = args.output_path or args.input_path
        copy_folder_structure(str(args.input_path), str(output_root))
    elif args.output_path and not args.output_path.is_dir():
        os.makedirs(args.output_path.parent, exist_ok=True)

    logger.info(f"Converting {len(files)} {kind} file(s)")
    for file_path in files:
        out_file = resolve_output_path(args.input_path, args.output_path, file_path, args.suffix)
        if os.path.abspath(out_file) == os.path.abspath(file_path) and not args.overwrite:
            logger.warning(f"Skipping {file_path}: output would replace the input (use --overwrite)")
            summary.skipped.append(file_path)
            continue
        if os.path.exists(out_file) and not args.overwrite:
            logger.warning(f"Skipping {file_path}: {out_file} already exists (use --overwrite)")
            summary.skipped.append(file_path)
            continue

        try:
            written = convert_one(Path(file_path), Path(out_file), args.level)
        except (CgbiError, OSError) as e:
            logger.error(f"Error processing {Path(file_path).name}: {e}")
            summary.failed.append((file_path, str(e)))
            continue
        logger.info(f"  {Path(file_path).name} -> {out_file} ({written} bytes)")
        summary.converted.append((file_path, out_file))

    logger.info(summary.describe())
    return summary
