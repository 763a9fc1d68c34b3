"""
Millisecond time values and their "D:HH:MM:SS" form.

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

from typing import Optional

from .errors import HourOutOfRangeError, InvalidTimeNumberError, MinSecOutOfRangeError

MS_PER_SEC = 1000
MS_PER_MIN = 60 * MS_PER_SEC
MS_PER_HOUR = 60 * MS_PER_MIN
MS_PER_DAY = 24 * MS_PER_HOUR

# Right-to-left order of the colon-separated segments
SEGMENT_ROLES = ("sec", "min", "hour", "day")


def ms_to_display(ms: int) -> str:
    """Format milliseconds as D:HH:MM:SS (truncating, day unpadded)."""
    day = ms // MS_PER_DAY
    hour = ms // MS_PER_HOUR % 24
    minute = ms // MS_PER_MIN % 60
    sec = ms // MS_PER_SEC % 60
    return f"{day}:{hour:02d}:{minute:02d}:{sec:02d}"


def parse_time_segment(text: Optional[str], role: Optional[str] = None) -> int:
    """Parse one time segment; a missing segment counts as 0."""
    if text is None:
        return 0
    text = text.strip()
    if not text.isascii() or not text.isdigit():
        raise InvalidTimeNumberError(role)
    return int(text)


def parse_edit_time(text: str) -> str:
    """Turn a user-supplied time into a millisecond string.

    Text without a colon is already milliseconds and is returned as-is
    (integer validation happens when the value is encoded). Otherwise the
    rightmost segment is seconds, then minutes, hours and days, so "4:51"
    means four minutes fifty-one seconds.
    """
    if ":" not in text:
        return text

    segments = text.split(":")
    if len(segments) > len(SEGMENT_ROLES):
        raise InvalidTimeNumberError()

    segments.reverse()
    values = {}
    for i, role in enumerate(SEGMENT_ROLES):
        raw = segments[i] if i < len(segments) else None
        values[role] = parse_time_segment(raw, role)

    if values["min"] > 59 or values["sec"] > 59:
        raise MinSecOutOfRangeError()
    if values["hour"] > 23:
        raise HourOutOfRangeError()

    ms = (values["day"] * MS_PER_DAY
          + values["hour"] * MS_PER_HOUR
          + values["min"] * MS_PER_MIN
          + values["sec"] * MS_PER_SEC)
    return str(ms)
