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
Chunk-Order State Machine.

Tracks which chunk types are legal next while a container is walked. The
decode direction expects a leading CgBI marker chunk; the encode direction
starts as though the marker had already been seen, because the encoder emits
the marker itself and its input is a standard PNG beginning with IHDR.

    START --CgBI--> SEEN_MARKER --IHDR--> SEEN_HEADER --IDAT--> SEEN_DATA --IEND--> SEEN_END

Ancillary chunks are legal (without a state change) only in SEEN_HEADER and
SEEN_DATA.
"""

import logging
from enum import Enum, IntEnum

from cgtk.utils.exceptions import ChunkOrderError
from cgtk.utils.png_constants import ChunkType

logger = logging.getLogger(__name__)


class ChunkStage(IntEnum):
    """Stages of the chunk walk, in the order they are reached."""
    START = 0
    SEEN_MARKER = 1
    SEEN_HEADER = 2
    SEEN_DATA = 3
    SEEN_END = 4


class Direction(Enum):
    """Which container variant the walked input is."""
    DECODE = 'decode'
    ENCODE = 'encode'


INITIAL_STAGE = {
    Direction.DECODE: ChunkStage.START,
    Direction.ENCODE: ChunkStage.SEEN_MARKER,
}


class ChunkOrderMachine:
    """
    Validates chunk order for one container walk.

    Example:
        >>> machine = ChunkOrderMachine(Direction.DECODE)
        >>> machine.advance(b'CgBI')
        <ChunkStage.SEEN_MARKER: 1>
        >>> machine.advance(b'IDAT')
        Traceback (most recent call last):
        ...
        cgtk.utils.exceptions.ChunkOrderError: png: invalid format: chunk out of order
    """

    def __init__(self, direction: Direction):
        self.direction = direction
        self.stage = INITIAL_STAGE[direction]

    @property
    def finished(self) -> bool:
        return self.stage == ChunkStage.SEEN_END

    def _require(self, *allowed: ChunkStage):
        if self.stage not in allowed:
            raise ChunkOrderError()

    def advance(self, chunk_type: bytes) -> ChunkStage:
        """
        Move the machine past `chunk_type`.

        Args:
            chunk_type: The 4-byte type tag of the chunk just read.

        Returns:
            The new stage.

        Raises:
            ChunkOrderError: If the chunk is not legal in the current stage.
        """
        if self.finished:
            raise ChunkOrderError()

        if chunk_type == ChunkType.CGBI.value:
            self._require(ChunkStage.START)
            self.stage = ChunkStage.SEEN_MARKER
        elif chunk_type == ChunkType.IHDR.value:
            self._require(ChunkStage.SEEN_MARKER)
            self.stage = ChunkStage.SEEN_HEADER
        elif chunk_type == ChunkType.IDAT.value:
            self._require(ChunkStage.SEEN_HEADER, ChunkStage.SEEN_DATA)
            self.stage = ChunkStage.SEEN_DATA
        elif chunk_type == ChunkType.IEND.value:
            self._require(ChunkStage.SEEN_DATA)
            self.stage = ChunkStage.SEEN_END
        else:
            self._require(ChunkStage.SEEN_HEADER, ChunkStage.SEEN_DATA)

        logger.debug(f"{self.direction.value}: {chunk_type.decode('latin-1')} -> {self.stage.name}")
        return self.stage
