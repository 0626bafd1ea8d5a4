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
Pillow Format Registration for CgBI PNGs.

Registers a "CGBI" image plugin with Pillow so that `PIL.Image.open` can read
CgBI files directly. CgBI shares the PNG signature, so detection looks only at
the signature and the plugin is placed ahead of Pillow's own PNG plugin. A file
whose first chunk is not the CgBI marker is declined with SyntaxError, which
makes Pillow fall through to its PNG plugin.

Registration is idempotent and is normally done once at startup with
`register_format()`.
"""

import io
import logging
import struct
from pathlib import Path
from typing import Union

from PIL import Image, ImageFile, PngImagePlugin

from cgtk.utils.cgbi_decoder import cgbi_to_png
from cgtk.utils.png_constants import CHUNK_HEADER_SIZE, PNG_SIGNATURE, ChunkType

logger = logging.getLogger(__name__)

FORMAT = "CGBI"
FORMAT_DESCRIPTION = "Apple CgBI PNG"
MIME_TYPE = "image/png"


def _accept(prefix: bytes) -> bool:
    return prefix[:len(PNG_SIGNATURE)] == PNG_SIGNATURE


def _first_chunk_type(head: bytes) -> bytes:
    start = len(PNG_SIGNATURE)
    if len(head) < start + CHUNK_HEADER_SIZE:
        return b''
    _, chunk_type = struct.unpack('>I4s', head[start:start + CHUNK_HEADER_SIZE])
    return chunk_type


def is_cgbi(source: Union[str, Path, bytes]) -> bool:
    """
    Check whether a file (or its leading bytes) is a CgBI PNG.

    Only the signature and the type of the first chunk are inspected.
    """
    if isinstance(source, (str, Path)):
        with open(source, "rb") as f:
            head = f.read(len(PNG_SIGNATURE) + CHUNK_HEADER_SIZE)
    else:
        head = bytes(source[:len(PNG_SIGNATURE) + CHUNK_HEADER_SIZE])
    return _accept(head) and _first_chunk_type(head) == ChunkType.CGBI.value


class CgbiImageFile(ImageFile.ImageFile):
    """Pillow image file handler that decodes CgBI PNGs through the CGTK decoder."""

    format = FORMAT
    format_description = FORMAT_DESCRIPTION

    def _open(self) -> None:
        head = self.fp.read(len(PNG_SIGNATURE) + CHUNK_HEADER_SIZE)
        if not is_cgbi(head):
            raise SyntaxError("not a CgBI file")
        data = head + self.fp.read()

        png = PngImagePlugin.PngImageFile(io.BytesIO(cgbi_to_png(data)))
        png.load()
        self.info.update(png.info)
        self._size = png.size
        self._mode = png.mode
        self.im = png.im
        self.tile = []


def register_format() -> None:
    """
    Register the CGBI plugin with Pillow, ahead of the PNG plugin.

    Calling this more than once has no further effect.
    """
    if FORMAT in Image.OPEN and Image.ID and Image.ID[0] == FORMAT:
        return
    Image.register_open(FORMAT, CgbiImageFile, _accept)
    Image.register_mime(FORMAT, MIME_TYPE)
    while FORMAT in Image.ID:
        Image.ID.remove(FORMAT)
    Image.ID.insert(0, FORMAT)
    logger.debug("Registered CGBI image plugin")
