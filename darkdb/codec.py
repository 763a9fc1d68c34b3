"""
Primitive codecs for the TOC file format.

All integers are little-endian and 4 bytes wide. Strings are fixed-width
byte fields terminated by a null byte and padded with zeros.

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
import struct
from typing import BinaryIO

from .errors import (
    InvalidCharactersError,
    InvalidStringError,
    NonAsciiError,
    TooHighError,
    TooLongError,
    TooLowError,
    TruncatedError,
)

# ============================================================================
# Constants
# ============================================================================

U32_MIN = 0
U32_MAX = 0xFFFFFFFF
I32_MIN = -0x80000000
I32_MAX = 0x7FFFFFFF

INT_SIZE = 4

# Keys and names are raw bytes on disk; latin-1 maps every byte to a code point
STRING_ENCODING = "latin-1"

_INT_LITERAL = re.compile(r"[+-]?[0-9]+")


# ============================================================================
# Binary Reader
# ============================================================================

class BinaryReader:
    """Reads little-endian values from a seekable binary stream."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream

    @property
    def pos(self) -> int:
        return self.stream.tell()

    def seek(self, offset: int):
        self.stream.seek(offset)

    def read_bytes(self, n: int) -> bytes:
        start = self.stream.tell()
        result = self.stream.read(n)
        if len(result) < n:
            raise TruncatedError(start, n, len(result))
        return result

    def skip(self, n: int):
        self.read_bytes(n)

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read_bytes(INT_SIZE))[0]

    def read_i32(self) -> int:
        return struct.unpack("<i", self.read_bytes(INT_SIZE))[0]

    def read_string(self, n: int) -> str:
        return read_string(self.stream, n)


def read_string(stream: BinaryIO, n: int) -> str:
    """Read an n-byte null-terminated field and return the text before the null."""
    start = stream.tell()
    raw = stream.read(n)
    if len(raw) < n:
        raise TruncatedError(start, n, len(raw))
    end = raw.find(b"\x00")
    if end < 0:
        raise InvalidStringError()
    return raw[:end].decode(STRING_ENCODING)


# ============================================================================
# Packing
# ============================================================================

def pack_u32(value: int) -> bytes:
    return struct.pack("<I", value)


def pack_i32(value: int) -> bytes:
    return struct.pack("<i", value)


def pack_string(text: str, width: int) -> bytes:
    """Encode text into a zero-padded field of exactly `width` bytes.

    The last byte is always a null terminator, so at most width - 1
    characters fit.
    """
    try:
        data = text.encode("ascii")
    except UnicodeEncodeError:
        raise NonAsciiError() from None
    if len(text) >= width:
        raise TooLongError(width)
    buf = bytearray(data.ljust(width, b"\x00"))
    buf[-1] = 0
    return bytes(buf)


# ============================================================================
# Integer parsing
# ============================================================================

def parse_int(value, minimum: int | None = None, maximum: int | None = None) -> int:
    """Parse an int or integer literal and check it against [minimum, maximum]."""
    if isinstance(value, bool):
        raise InvalidCharactersError()
    if isinstance(value, int):
        number = value
    else:
        text = str(value).strip()
        if not _INT_LITERAL.fullmatch(text):
            raise InvalidCharactersError()
        number = int(text)

    if maximum is not None and number > maximum:
        raise TooHighError(maximum)
    if minimum is not None and number < minimum:
        raise TooLowError(minimum)
    return number


def parse_u32(value) -> int:
    return parse_int(value, U32_MIN, U32_MAX)


def parse_i32(value) -> int:
    return parse_int(value, I32_MIN, I32_MAX)
