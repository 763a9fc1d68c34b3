"""
Filtering, ordering and rendering of decoded chunks.

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

import re
from typing import Optional

import yaml

from .chunks import INFO_DISPLAY_ORDER, Chunk, ChunkKind, Record
from .errors import InvalidPatternError
from .timefmt import ms_to_display

VALUE_PADDING = 10

_LEADING_TEXT = re.compile(r"\D*")
_TRAILING_DIGITS = re.compile(r"[0-9]*$")


def filter_chunk(chunk: Chunk, pattern: Optional[str], ignore_case: bool = False) -> Chunk:
    """Keep the records whose raw key matches `pattern` (no pattern keeps all)."""
    if pattern is None:
        return chunk

    flags = re.IGNORECASE if ignore_case else 0
    try:
        regex = re.compile(pattern, flags)
    except re.error as e:
        raise InvalidPatternError(pattern, str(e)) from None

    return chunk.with_records(r for r in chunk.records.values() if regex.search(r.key))


def natural_key(key: str) -> tuple[str, int]:
    """Sort key: leading non-digit text folded to lower case, then the trailing number."""
    text = _LEADING_TEXT.match(key).group(0).lower()
    digits = _TRAILING_DIGITS.search(key).group(0)
    return text, int(digits) if digits else 0


def sort_records(chunk: Chunk) -> list[Record]:
    """Records in presentation order."""
    if chunk.kind == ChunkKind.INFO:
        return [chunk.records[key] for key in INFO_DISPLAY_ORDER if key in chunk.records]
    return sorted(chunk.records.values(), key=lambda r: natural_key(r.display_key))


def format_chunk(chunk: Chunk) -> str:
    """Render the chunk as aligned "key value" lines, one per record."""
    records = sort_records(chunk)
    if not records:
        return ""

    key_width = max(len(r.display_key) for r in records)
    value_width = max(len(str(r.value)) for r in records) + VALUE_PADDING

    lines = []
    for record in records:
        line = f"{record.display_key.ljust(key_width)} {str(record.value).rjust(value_width)}"
        if chunk.is_time_field(record.key):
            line += f" (string: {ms_to_display(record.value)})"
        lines.append(line)
    return "\n".join(lines) + "\n"


def chunk_to_yaml(chunk: Chunk) -> str:
    """Render the chunk as a YAML mapping of raw key to value in presentation order."""
    output = {r.key: r.value for r in sort_records(chunk)}
    return yaml.dump(output, allow_unicode=True, sort_keys=False, default_flow_style=False, width=120)
