"""
Per-invocation options and table name resolution.

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

import difflib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .chunks import ChunkKind
from .errors import UsageError

# User-facing table names
TABLES = {
    "info": ChunkKind.INFO,
    "questdb": ChunkKind.QUEST_DB,
    "questcmp": ChunkKind.QUEST_CMP,
}

OUTPUT_FORMATS = ("text", "yaml")

# DARKDB_ENV=test runs without the overwrite prompt
ENV_VAR = "DARKDB_ENV"


@dataclass(frozen=True)
class Options:
    table: Optional[str] = None
    path: Optional[Path] = None
    key_regex: Optional[str] = None
    ignore_case: bool = False
    new_value: Optional[str] = None
    assume_yes: bool = False
    output_format: str = "text"
    verbose: bool = False

    @classmethod
    def from_args(cls, args, environ: Mapping[str, str] = os.environ) -> "Options":
        return cls(
            table=args.table,
            path=Path(args.file) if args.file is not None else None,
            key_regex=args.key_regex,
            ignore_case=args.ignore_case,
            new_value=args.new_value,
            assume_yes=args.yes or environ.get(ENV_VAR) == "test",
            output_format=args.format,
            verbose=args.verbose,
        )

    @property
    def is_edit(self) -> bool:
        return self.new_value is not None


def suggest_tables(name: str) -> list[str]:
    return difflib.get_close_matches(name, list(TABLES), n=len(TABLES), cutoff=0.6)


def resolve_table(name: Optional[str], usage: str = "") -> ChunkKind:
    """Map a table name to its chunk kind or raise UsageError."""
    if not name:
        raise UsageError("TABLE not specified.")
    if name in TABLES:
        return TABLES[name]

    suggestions = suggest_tables(name)
    if not suggestions:
        raise UsageError(usage)
    lines = ["Invalid TABLE name. Did you mean?"]
    lines.extend(f"  {s}" for s in suggestions)
    raise UsageError("\n".join(lines) + "\n")
