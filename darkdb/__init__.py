"""
darkdb - view and edit the tables of mission and save files.

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

__version__ = "1.0.0"

from .chunks import CHUNK_KINDS, Chunk, ChunkKind, Record, ValueKind
from .errors import DarkDBError
from .mission import MissionFile

__all__ = [
    "CHUNK_KINDS",
    "Chunk",
    "ChunkKind",
    "DarkDBError",
    "MissionFile",
    "Record",
    "ValueKind",
    "__version__",
]
