"""
darkdb command line

View and edit the quest tables and header info of mission (.mis) and
save (.sav) files in place.

Usage:
    darkdb questdb miss20.mis                   Show all quest variables
    darkdb -i questdb miss20.mis '^goal_state'  Show matching keys, any case
    darkdb questdb miss20.mis loot 100          Set every *loot* key to 100
    darkdb info miss20.mis time 4:05:01:00      Set total_time using D:HH:MM:SS

Edits create FILE.bak the first time a file is written.

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

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Callable, Optional

from . import __version__
from .config import OUTPUT_FORMATS, TABLES, Options, resolve_table
from .errors import DarkDBError, FileAccessError, UsageError
from .mission import MissionFile
from .view import chunk_to_yaml, format_chunk


# ============================================================================
# Backup / confirmation
# ============================================================================

def backup_path(path: Path) -> Path:
    return path.with_name(path.name + ".bak")


def create_backup(path: Path) -> Optional[Path]:
    """Copy `path` to `path.bak` unless a backup already exists."""
    bak = backup_path(path)
    if bak.exists():
        return None
    try:
        shutil.copy2(path, bak)
    except OSError as e:
        raise FileAccessError(f"Failed to create backup {bak}: {e.strerror}", bak) from e
    return bak


def confirm_overwrite(path: Path, prompt: Optional[Callable[[str], str]] = None) -> bool:
    prompt = prompt or input
    try:
        answer = prompt(f"Overwrite {path}? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


# ============================================================================
# Commands
# ============================================================================

def cmd_get(options: Options) -> int:
    """Print the (optionally filtered) table."""
    kind = resolve_table(options.table, build_parser().format_usage())
    mission = MissionFile(options.path)
    chunk = mission.query(kind.value, options.key_regex, options.ignore_case)

    print(f"File: {mission.path}", file=sys.stderr)
    if options.output_format == "yaml":
        print(chunk_to_yaml(chunk), end="")
    else:
        print(format_chunk(chunk), end="")
    return 0


def cmd_set(options: Options, prompt: Optional[Callable[[str], str]] = None) -> int:
    """Set every matching key to the new value and write the file in place."""
    kind = resolve_table(options.table, build_parser().format_usage())
    mission = MissionFile(options.path)
    changeset = mission.prepare_edit(kind.value, options.key_regex, options.new_value,
                                     options.ignore_case)

    if not options.assume_yes and not confirm_overwrite(mission.path, prompt):
        print("Aborted.", file=sys.stderr)
        return 1

    bak = create_backup(mission.path)
    if bak is not None:
        print(f"Created backup {bak}")

    mission.write(changeset)
    print(f"Wrote {mission.path}")
    return 0


# ============================================================================
# CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="darkdb",
        description="View and edit tables in mission and save files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Tables: {", ".join(TABLES)}

Examples:
  %(prog)s questdb miss20.mis                   Show all quest variables
  %(prog)s -i questdb miss20.mis '^goal_state'  Show matching keys, any case
  %(prog)s questdb miss20.mis loot 100          Set every matching key to 100
  %(prog)s info miss20.mis time 4:05:01:00      Set total_time as D:HH:MM:SS

Time values (total_time, DrSTime, DrSCmTime) accept milliseconds or
[[[D:]HH:]MM:]SS. A backup FILE.bak is created before the first edit.
"""
    )
    parser.add_argument("table", nargs="?", metavar="TABLE", help="Table to read: " + ", ".join(TABLES))
    parser.add_argument("file", nargs="?", metavar="FILE", help="Mission or save file")
    parser.add_argument("key_regex", nargs="?", metavar="KEY_REGEX", help="Only keys matching this regex")
    parser.add_argument("new_value", nargs="?", metavar="NEW_VALUE", help="Set matching keys to this value")
    parser.add_argument("-i", "--ignore-case", action="store_true",
                        help="Match KEY_REGEX case-insensitively")
    parser.add_argument("-y", "--yes", action="store_true",
                        help="Overwrite FILE without asking")
    parser.add_argument("-f", "--format", choices=OUTPUT_FORMATS, default="text",
                        help="Output format when reading (default: text)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run(options: Options) -> int:
    resolve_table(options.table, build_parser().format_usage())
    if options.path is None:
        raise UsageError("FILE not specified.")
    if options.is_edit:
        return cmd_set(options)
    return cmd_get(options)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    options = Options.from_args(args)

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return run(options)
    except UsageError as e:
        print(e, file=sys.stderr, end="" if str(e).endswith("\n") else "\n")
        return 1
    except DarkDBError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
