"""
File header validation and table-of-contents decoding.

Layout (little-endian):
    0x000  u32   absolute offset of the TOC
    0x10C  4     marker DE AD BE EF (end of the 272-byte header block)
    TOC    u32   entry count, then count x 20-byte entries:
                 name[12] (null-terminated), u32 chunk offset, u32 payload size

Copyright (C) 2026 The darkdb authors

This library is free software; you can redistribute it and/or
modify it under the terms of the GNU Lesser General Public
License as published by the Free Software Foundation; either
version 2.1 of the License, or (at your option) any later version.

This library is distributed in the hope that it will be useful,
but WITHOUT ANY WARRANTY; without even the implied warranty of
MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
Lesser General Public License for more details.

You should have received a copy of the GNU Lesser General Public
License along with this library; if not, write to the Free Software
Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301  USA
"""

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO

from .codec import BinaryReader
from .errors import EmptyFileError, InvalidFormatError, NoItemsError, TableNotFoundError

logger = logging.getLogger(__name__)

HEADER_SIZE = 272
MAGIC = b"\xde\xad\xbe\xef"
MAGIC_OFFSET = HEADER_SIZE - len(MAGIC)

TOC_NAME_SIZE = 12
TOC_ENTRY_SIZE = TOC_NAME_SIZE + 4 + 4


@dataclass(frozen=True)
class TocEntry:
    """One directory entry: where a chunk lives and how big its payload is."""
    name: str
    offset: int
    size: int


def stream_size(stream: BinaryIO) -> int:
    pos = stream.tell()
    size = stream.seek(0, os.SEEK_END)
    stream.seek(pos)
    return size


def validate_header(stream: BinaryIO, path) -> None:
    """Check the file is non-empty and carries the header marker."""
    size = stream_size(stream)
    if size == 0:
        raise EmptyFileError(path)
    if size < HEADER_SIZE:
        raise InvalidFormatError(path)

    stream.seek(MAGIC_OFFSET)
    if stream.read(len(MAGIC)) != MAGIC:
        raise InvalidFormatError(path)


def read_toc(stream: BinaryIO) -> list[TocEntry]:
    """Decode the TOC entries in on-disk order."""
    reader = BinaryReader(stream)
    reader.seek(0)
    toc_offset = reader.read_u32()

    reader.seek(toc_offset)
    count = reader.read_u32()
    entries = []
    for _ in range(count):
        name = reader.read_string(TOC_NAME_SIZE)
        entries.append(TocEntry(name=name, offset=reader.read_u32(), size=reader.read_u32()))

    logger.debug("TOC at 0x%x: %d entries", toc_offset, len(entries))
    return entries


def find_entry(entries: list[TocEntry], name: str) -> TocEntry:
    """Return the first entry named exactly `name` that has a payload."""
    for entry in entries:
        if entry.name == name:
            if entry.size == 0:
                raise NoItemsError(name)
            return entry
    raise TableNotFoundError(name)
