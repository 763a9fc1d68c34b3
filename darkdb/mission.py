"""
One file on disk: a read session per lookup and a single write session per edit.

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
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .changeset import Patch, apply_changeset, build_changeset
from .chunks import Chunk, decode_chunk
from .errors import FileAccessError, KeyNotFoundError
from .toc import TocEntry, find_entry, read_toc, validate_header
from .view import filter_chunk

logger = logging.getLogger(__name__)


class MissionFile:
    """A mission (.mis) or save (.sav) file."""

    def __init__(self, path):
        self.path = Path(path)

    def __repr__(self):
        return f"MissionFile({str(self.path)!r})"

    @contextmanager
    def _open(self, mode: str):
        if not self.path.is_file():
            raise FileAccessError(f"File not found: {self.path}", self.path)
        try:
            stream = open(self.path, mode)
        except OSError as e:
            raise FileAccessError(f"Cannot open {self.path}: {e.strerror}", self.path) from e
        with stream:
            yield stream

    def read_toc(self) -> list[TocEntry]:
        with self._open("rb") as stream:
            validate_header(stream, self.path)
            return read_toc(stream)

    def read_chunk(self, name: str) -> Chunk:
        """Decode the chunk named `name`."""
        with self._open("rb") as stream:
            validate_header(stream, self.path)
            entry = find_entry(read_toc(stream), name)
            return decode_chunk(stream, entry)

    def query(self, name: str, pattern: Optional[str] = None, ignore_case: bool = False) -> Chunk:
        """Decode a chunk and keep only the keys matching `pattern`."""
        return filter_chunk(self.read_chunk(name), pattern, ignore_case)

    def prepare_edit(self, name: str, pattern: Optional[str], new_value: str,
                     ignore_case: bool = False) -> list[Patch]:
        """Build the changeset for setting every matching key to `new_value`.

        Nothing is written; an invalid value raises here.
        """
        chunk = self.query(name, pattern, ignore_case)
        if not chunk.records:
            raise KeyNotFoundError(pattern)
        return build_changeset(chunk, new_value)

    def write(self, changeset: list[Patch]) -> None:
        """Apply a prepared changeset in one read-write session."""
        try:
            with self._open("r+b") as stream:
                apply_changeset(stream, changeset)
        except OSError as e:
            raise FileAccessError(f"Failed to write {self.path}: {e.strerror}", self.path) from e
        logger.debug("Applied %d patches to %s", len(changeset), self.path)
