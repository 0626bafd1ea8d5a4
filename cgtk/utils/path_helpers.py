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
File and Directory Path Utilities for CGTK.

This module provides helper functions for file system operations, such as
recursively finding PNG files (optionally only CgBI or only standard ones) and
preparing output paths while preserving directory structures.
"""
import os
import logging
from pathlib import Path
from typing import List, Optional
from cgtk.utils.pillow_plugin import is_cgbi

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.png',)

def _matches(filepath: str, cgbi: Optional[bool]) -> bool:
    try:
        return cgbi is None or is_cgbi(Path(filepath)) == cgbi
    except OSError as e:
        logger.warning(f"Skipping unreadable file {filepath}: {e}")
        return False

def get_png_files(input_path: str, cgbi: Optional[bool] = None) -> List[str]:
    """
    Get a list of PNG files from an input path (file or directory).

    Args:
        input_path (str): The path to a single PNG file or a directory.
        cgbi (bool, optional): True to keep only CgBI files, False to keep only
            standard PNG files, None to keep both.

    Returns:
        List[str]: A sorted list of absolute paths to PNG files.
    """
    input_path = str(input_path)
    png_files = []
    if os.path.isdir(input_path):
        for root, _, files in os.walk(input_path):
            for file in files:
                if file.lower().endswith(SUPPORTED_EXTENSIONS):
                    filepath = os.path.abspath(os.path.join(root, file))
                    if _matches(filepath, cgbi):
                        png_files.append(filepath)
    elif os.path.isfile(input_path):
        if _matches(input_path, cgbi):
            png_files.append(os.path.abspath(input_path))
    return sorted(png_files)

def prepare_output_path(input_path: str, output_path: str, file_path: str, suffix: str = '') -> str:
    """
    Construct the full output path for a processed file, preserving directory structure.

    Args:
        input_path (str): The root input directory.
        output_path (str): The root output directory.
        file_path (str): The full path to the input file being processed.
        suffix (str): Text appended to the file stem (e.g., '_cgbi').

    Returns:
        str: The full path for the corresponding output file.
    """
    relative_path = Path(os.path.relpath(file_path, input_path))
    relative_path = relative_path.with_name(f"{relative_path.stem}{suffix}{relative_path.suffix}")
    return os.path.join(output_path, relative_path)

def copy_folder_structure(input_folder: str, output_folder: str):
    """
    Create a matching folder structure in the output directory.

    Args:
        input_folder (str): The source folder.
        output_folder (str): The destination folder.
    """
    if not os.path.exists(output_folder):
        os.makedirs(output_folder)
    for root, dirs, _ in os.walk(input_folder):
        for dir_name in dirs:
            input_dir = os.path.join(root, dir_name)
            relative_dir = os.path.relpath(input_dir, input_folder)
            output_dir = os.path.join(output_folder, relative_dir)
            if not os.path.exists(output_dir):
                os.makedirs(output_dir)

def resolve_output_path(input_path: Path, output_path: Optional[Path], file_path: str, suffix: str) -> str:
    """
    Decide where the converted copy of `file_path` is written.

    A single input file goes to `output_path` (or into it, when it is a
    directory), defaulting to a sibling named with `suffix`. Files found under
    an input directory keep their relative location below `output_path`, which
    defaults to the input directory itself.

    Args:
        input_path (Path): The file or directory given on the command line.
        output_path (Path, optional): The output file or directory.
        file_path (str): The input file being converted.
        suffix (str): Text appended to the output file stem.

    Returns:
        str: The output file path.
    """
    source = Path(file_path)
    if input_path.is_dir():
        return prepare_output_path(str(input_path), str(output_path or input_path), file_path, suffix)
    named = f"{source.stem}{suffix}{source.suffix or '.png'}"
    if output_path is None:
        return str(source.with_name(named))
    if output_path.is_dir():
        return str(output_path / named)
    return str(output_path)
