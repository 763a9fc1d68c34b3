"""
In-place edits: build every replacement up front, then overwrite bytes.

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
from dataclasses import dataclass
from typing import BinaryIO

from .chunks import Chunk, Record, ValueKind
from .codec import pack_i32, pack_string, pack_u32, parse_i32, parse_u32
from .timefmt import parse_edit_time

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Patch:
    """Bytes to write at an absolute file offset."""
    offset: int
    data: bytes


def encode_value(record: Record, raw_value: str) -> bytes:
    """Encode `raw_value` with the record's own kind and width."""
    match record.kind:
        case ValueKind.U32:
            return pack_u32(parse_u32(raw_value))
        case ValueKind.I32:
            return pack_i32(parse_i32(raw_value))
        case ValueKind.STRING:
            return pack_string(raw_value, record.width)


def build_changeset(chunk: Chunk, raw_value: str) -> list[Patch]:
    """One patch per record in `chunk`; raises before returning if any value is invalid."""
    changeset = []
    for record in chunk.records.values():
        value = parse_edit_time(raw_value) if chunk.is_time_field(record.key) else raw_value
        changeset.append(Patch(offset=record.offset, data=encode_value(record, value)))
    return changeset


def apply_changeset(stream: BinaryIO, changeset: list[Patch]) -> None:
    """Overwrite each patch's bytes in an open read-write stream."""
    for patch in changeset:
        stream.seek(patch.offset)
        stream.write(patch.data)
        logger.debug("Wrote %d bytes at 0x%x", len(patch.data), patch.offset)
    stream.flush()
