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
Command-line interface for the CgBI PNG ToolKit (CGTK).

This script provides the main entry point for the `cgtk` command,
parsing user arguments and dispatching them to the appropriate tool.
"""
import argparse
import logging
import sys
from pathlib import Path
from cgtk.utils.config_loader import config
from cgtk.utils.log_helpers import setup_logger, shutdown_logger
from cgtk.utils.pillow_plugin import register_format
from cgtk.utils.script_arguments import DecodeArguments, EncodeArguments, InspectArguments

def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')

def valid_level(value: str) -> int:
    """Validate that the compression level is an integer between 0 and 9."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Level must be an integer between 0 and 9, got '{value}'")
    if ivalue < 0 or ivalue > 9:
        raise argparse.ArgumentTypeError(f"Level must be between 0 and 9, got '{ivalue}'")
    return ivalue

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='cgtk',
        description='CGTK - convert between standard PNG and Apple CgBI PNG',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    def add_common_args(p):
        p.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Input PNG file or directory.')
        p.add_argument('-c', '--config', type=Path, dest='config_path', help='Path to a custom configuration file.')
        p.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
        p.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    def add_convert_args(p):
        add_common_args(p)
        p.add_argument('-o', '--output', type=Path, dest='output_path', help='Output file, or output directory for a directory input.')
        p.add_argument('-s', '--suffix', type=str, dest='suffix', help='Suffix for output file names (default from config).')
        p.add_argument('-l', '--level', type=valid_level, dest='level', help='zlib compression level for the image data (default from config).')
        p.add_argument('--overwrite', type=str2bool, dest='overwrite', help='Replace existing output files (default from config).')

    # --- Decode (CgBI -> PNG) Tool ---
    decode_parser = subparsers.add_parser(
        'decode',
        help='Convert Apple CgBI PNGs to standard PNGs.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_convert_args(decode_parser)

    # --- Encode (PNG -> CgBI) Tool ---
    encode_parser = subparsers.add_parser(
        'encode',
        help='Convert standard PNGs to Apple CgBI PNGs.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_convert_args(encode_parser)

    # --- Inspect Chunks Tool ---
    inspect_parser = subparsers.add_parser(
        'inspect',
        help='List the chunks of PNG or CgBI files.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    add_common_args(inspect_parser)
    inspect_parser.add_argument('--cgbi-only', action='store_true', dest='cgbi_only', help='Only list CgBI files.')

    return parser

def main(argv=None) -> int:
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)

    if args.config_path:
        config.load(args.config_path)

    # --- Logger Setup ---
    log_level = logging.DEBUG if args.verbose else config.get('logging.level', 'INFO')
    log_file = args.log_file or config.get('logging.file') or None
    logger = setup_logger(log_file=str(log_file) if log_file else None, level=log_level)
    register_format()

    exit_code = 0
    try:
        if tool == 'decode':
            from cgtk.tools.convert_to_png import convert_to_png
            summary = convert_to_png(DecodeArguments(**args_dict))
            exit_code = 0 if summary.ok else 1
        elif tool == 'encode':
            from cgtk.tools.convert_to_cgbi import convert_to_cgbi
            summary = convert_to_cgbi(EncodeArguments(**args_dict))
            exit_code = 0 if summary.ok else 1
        elif tool == 'inspect':
            from cgtk.tools.inspect_chunks import inspect_chunks
            summaries = inspect_chunks(InspectArguments(**args_dict))
            exit_code = 0 if summaries and all(s.ok for s in summaries) else 1
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=True)
        exit_code = 1
    finally:
        shutdown_logger(logger)
    return exit_code

if __name__ == "__main__":
    sys.exit(main())
