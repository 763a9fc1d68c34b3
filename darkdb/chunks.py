"""
Chunk decoding.

Every chunk starts with a 24-byte header (name[12] + 12 unused bytes)
followed by `TocEntry.size` bytes of records whose layout depends on the
chunk name:

    QUEST_DB / QUEST_CMP   repeated: u32 key length, key[length], i32 value
    BRHEAD                 last_saved_by[16], created_by[16], 88 unused,
                           u32 total_time (milliseconds)

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
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import BinaryIO, Union

from .codec import INT_SIZE, BinaryReader
from .errors import UnsupportedChunkError
from .toc import TocEntry

logger = logging.getLogger(__name__)

CHUNK_HEADER_SIZE = 24
CHUNK_NAME_SIZE = 12

INFO_STRING_SIZE = 16
INFO_RESERVED_SIZE = 88

BLANK_KEY = "(blank)"


class ChunkKind(str, Enum):
    """Chunk names this package knows how to decode."""
    INFO = "BRHEAD"
    QUEST_DB = "QUEST_DB"
    QUEST_CMP = "QUEST_CMP"


CHUNK_KINDS = frozenset(kind.value for kind in ChunkKind)

QUEST_KINDS = {ChunkKind.QUEST_DB, ChunkKind.QUEST_CMP}


class ValueKind(Enum):
    U32 = "u32"
    I32 = "i32"
    STRING = "string"


# Keys whose integer value holds milliseconds
TIME_KEYS = {
    ChunkKind.INFO: {"total_time"},
    ChunkKind.QUEST_DB: {"DrSTime", "DrSCmTime"},
    ChunkKind.QUEST_CMP: {"DrSTime", "DrSCmTime"},
}

INFO_DISPLAY_ORDER = ("created_by", "last_saved_by", "total_time")


@dataclass(frozen=True)
class Record:
    """A decoded key/value pair and where its value lives in the file."""
    key: str
    offset: int
    kind: ValueKind
    width: int
    value: Union[int, str]

    @property
    def display_key(self) -> str:
        return self.key if self.key else BLANK_KEY


@dataclass
class Chunk:
    kind: ChunkKind
    records: dict[str, Record] = field(default_factory=dict)

    def is_time_field(self, key: str) -> bool:
        return key in TIME_KEYS[self.kind]

    def with_records(self, records) -> "Chunk":
        return replace(self, records={record.key: record for record in records})


# ============================================================================
# Record layouts
# ============================================================================

def parse_quest_records(reader: BinaryReader, end: int) -> dict[str, Record]:
    """Decode length-prefixed key / i32 value pairs until `end`."""
    records = {}
    while reader.pos < end:
        key_length = reader.read_u32()
        key = reader.read_string(key_length)
        offset = reader.pos
        value = reader.read_i32()
        records[key] = Record(key=key, offset=offset, kind=ValueKind.I32,
                              width=INT_SIZE, value=value)
    return records


def parse_info_records(reader: BinaryReader) -> dict[str, Record]:
    """Decode the fixed BRHEAD fields (user first, then creator on disk)."""
    records = {}
    for key in ("last_saved_by", "created_by"):
        offset = reader.pos
        records[key] = Record(key=key, offset=offset, kind=ValueKind.STRING,
                              width=INFO_STRING_SIZE,
                              value=reader.read_string(INFO_STRING_SIZE))

    reader.skip(INFO_RESERVED_SIZE)
    offset = reader.pos
    records["total_time"] = Record(key="total_time", offset=offset, kind=ValueKind.U32,
                                   width=INT_SIZE, value=reader.read_u32())
    return records


def decode_chunk(stream: BinaryIO, entry: TocEntry) -> Chunk:
    """Read the chunk described by `entry` into a Chunk."""
    reader = BinaryReader(stream)
    reader.seek(entry.offset)
    name = reader.read_string(CHUNK_NAME_SIZE)
    reader.skip(CHUNK_HEADER_SIZE - CHUNK_NAME_SIZE)

    try:
        kind = ChunkKind(name)
    except ValueError:
        raise UnsupportedChunkError(name) from None

    if kind in QUEST_KINDS:
        end = entry.offset + CHUNK_HEADER_SIZE + entry.size
        records = parse_quest_records(reader, end)
    else:
        records = parse_info_records(reader)

    logger.debug("Decoded %s at 0x%x: %d records", kind.value, entry.offset, len(records))
    return Chunk(kind=kind, records=records)
