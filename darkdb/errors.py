"""
Exception types raised by darkdb.

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


class DarkDBError(Exception):
    """Base class for every error darkdb reports to the user."""


# ============================================================================
# Input / format errors
# ============================================================================

class FormatError(DarkDBError):
    """The file does not look like what the decoder expects."""


class EmptyFileError(FormatError):
    def __init__(self, path):
        super().__init__(f"Empty file: {path}")
        self.path = path


class InvalidFormatError(FormatError):
    def __init__(self, path):
        super().__init__(f"Invalid file: {path}")
        self.path = path


class TruncatedError(FormatError):
    def __init__(self, offset: int, need: int, have: int):
        super().__init__(
            f"Unexpected end of file at offset {offset}: need {need} bytes, have {have}."
        )
        self.offset = offset


class InvalidStringError(FormatError):
    def __init__(self):
        super().__init__("Invalid string conversion.")


class UnsupportedChunkError(FormatError):
    def __init__(self, name: str):
        super().__init__(f"Unsupported table: {name}.")
        self.name = name


class TableNotFoundError(FormatError):
    def __init__(self, name: str):
        super().__init__(f"{name} not found.")
        self.name = name


class NoItemsError(FormatError):
    def __init__(self, name: str):
        super().__init__(f"{name} has no items.")
        self.name = name


class KeyNotFoundError(FormatError):
    def __init__(self, pattern):
        super().__init__(f"No keys match: {pattern}")
        self.pattern = pattern


# ============================================================================
# Validation errors (bad user input)
# ============================================================================

class ValidationError(DarkDBError, ValueError):
    """A user-supplied value cannot be encoded."""


class InvalidCharactersError(ValidationError):
    def __init__(self):
        super().__init__("Value contains invalid characters.")


class TooHighError(ValidationError):
    def __init__(self, maximum: int):
        super().__init__(f"Value too high. Must be {maximum} or less.")
        self.maximum = maximum


class TooLowError(ValidationError):
    def __init__(self, minimum: int):
        super().__init__(f"Value too low. Must be {minimum} or more.")
        self.minimum = minimum


class NonAsciiError(ValidationError):
    def __init__(self):
        super().__init__("Value contains invalid characters. Must be ASCII characters.")


class TooLongError(ValidationError):
    def __init__(self, width: int):
        super().__init__(f"Value too long. Must be fewer than {width} characters.")
        self.width = width


class InvalidPatternError(ValidationError):
    def __init__(self, pattern: str, reason: str):
        super().__init__(f"Invalid KEY_REGEX {pattern!r}: {reason}")
        self.pattern = pattern


class TimeError(ValidationError):
    """A time string could not be turned into milliseconds."""


class InvalidTimeNumberError(TimeError):
    def __init__(self, role: str | None = None):
        if role is None:
            super().__init__("Time contains invalid numbers.")
        else:
            super().__init__(f"Time ({role}) is not a valid number.")
        self.role = role


class MinSecOutOfRangeError(TimeError):
    def __init__(self):
        super().__init__("Time (min, sec) cannot be greater than 59.")


class HourOutOfRangeError(TimeError):
    def __init__(self):
        super().__init__("Time (hour) cannot be greater than 23.")


# ============================================================================
# I/O and usage errors
# ============================================================================

class FileAccessError(DarkDBError):
    def __init__(self, message: str, path):
        super().__init__(message)
        self.path = path


class UsageError(DarkDBError):
    """Bad command-line usage; the message is shown as-is."""
