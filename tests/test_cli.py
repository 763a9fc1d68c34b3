"""Tests for the darkdb command line."""

import errno

import pytest

from darkdb import cli
from darkdb.config import Options, resolve_table, suggest_tables
from darkdb.chunks import ChunkKind
from darkdb.errors import UsageError


def run(argv, capsys):
    status = cli.main([str(a) for a in argv])
    out, err = capsys.readouterr()
    return status, out, err


@pytest.fixture
def no_prompt(monkeypatch):
    monkeypatch.setenv("DARKDB_ENV", "test")


# =============================================================================
# Table names
# =============================================================================

class TestResolveTable:
    def test_known_tables(self):
        assert resolve_table("info") == ChunkKind.INFO
        assert resolve_table("questdb") == ChunkKind.QUEST_DB
        assert resolve_table("questcmp") == ChunkKind.QUEST_CMP

    def test_missing(self):
        with pytest.raises(UsageError, match=r"^TABLE not specified\.$"):
            resolve_table(None)

    def test_did_you_mean(self):
        with pytest.raises(UsageError) as exc:
            resolve_table("quest")
        assert str(exc.value) == "Invalid TABLE name. Did you mean?\n  questdb\n  questcmp\n"

    def test_no_suggestion_shows_usage(self):
        with pytest.raises(UsageError) as exc:
            resolve_table("q", usage="usage: darkdb ...")
        assert str(exc.value) == "usage: darkdb ..."

    def test_suggestions(self):
        assert suggest_tables("inf") == ["info"]
        assert suggest_tables("zzzz") == []


# =============================================================================
# Options
# =============================================================================

class TestOptions:
    def parse(self, argv, environ=None):
        return Options.from_args(cli.build_parser().parse_args(argv), environ or {})

    def test_read(self):
        options = self.parse(["-i", "questdb", "f.mis", "^goal"])
        assert options.table == "questdb"
        assert options.key_regex == "^goal"
        assert options.ignore_case
        assert not options.is_edit
        assert not options.assume_yes

    def test_edit(self):
        options = self.parse(["questdb", "f.mis", "loot", "100"])
        assert options.is_edit
        assert options.new_value == "100"

    def test_env_implies_yes(self):
        assert self.parse(["info", "f.mis"], {"DARKDB_ENV": "test"}).assume_yes
        assert self.parse(["-y", "info", "f.mis"]).assume_yes

    def test_frozen(self):
        options = self.parse(["info", "f.mis"])
        with pytest.raises(AttributeError):
            options.table = "questdb"


# =============================================================================
# get
# =============================================================================

class TestGet:
    def test_no_table(self, capsys):
        status, _, err = run([], capsys)
        assert status == 1
        assert err == "TABLE not specified.\n"

    def test_no_file(self, tmp_path, capsys):
        missing = tmp_path / "test.mis"
        status, _, err = run(["questdb", missing], capsys)
        assert status == 1
        assert err == f"Error: File not found: {missing}\n"

    def test_empty_file(self, empty_file, capsys):
        status, _, err = run(["questdb", empty_file], capsys)
        assert status == 1
        assert err == f"Error: Empty file: {empty_file}\n"

    @pytest.mark.parametrize("fixture", ["short_file", "invalid_file"])
    def test_invalid_files(self, fixture, request, capsys):
        path = request.getfixturevalue(fixture)
        status, _, err = run(["questdb", path], capsys)
        assert status == 1
        assert err == f"Error: Invalid file: {path}\n"

    def test_info(self, mis_file, capsys):
        status, out, err = run(["info", mis_file], capsys)
        assert status == 0
        assert err == f"File: {mis_file}\n"
        assert out == """\
created_by                creator
last_saved_by                user
total_time              363660000 (string: 4:05:01:00)
"""

    def test_questdb_of_sav_file(self, sav_file, capsys):
        status, out, _ = run(["questdb", sav_file], capsys)
        assert status == 0
        assert out == """\
DrSBackStabs                0
DrSBodyFound                0
DrSDmgDealt                 0
DrSKills                    0
DrSKnockout                 0
DrSLkPickCnt                0
DrSLootTotal                0
DrSObjKilled                0
DrSPocketCnt                0
DrSScrtCnt                  0
DrSTime                291000 (string: 0:00:04:51)
map_max_page                2
map_min_page                1
"""

    def test_table_not_found(self, sav_file, capsys):
        status, _, err = run(["info", sav_file], capsys)
        assert status == 1
        assert err == "Error: BRHEAD not found.\n"

    def test_did_you_mean(self, mis_file, capsys):
        status, _, err = run(["quest", mis_file], capsys)
        assert status == 1
        assert err == "Invalid TABLE name. Did you mean?\n  questdb\n  questcmp\n"

    def test_regex(self, mis_file, capsys):
        _, out, _ = run(["questdb", mis_file, "^goal_state"], capsys)
        assert out == """\
goal_state_0            0
goal_state_1            0
goal_state_2            0
goal_state_10           0
goal_state_12           0
"""

    def test_regex_ignore_case(self, mis_file, capsys):
        _, out, _ = run(["-i", "questdb", mis_file, "^goal_state"], capsys)
        assert out == """\
goal_state_0            0
goal_state_1            0
goal_state_2            0
goal_state_10           0
GOAL_STATE_11           0
goal_state_12           0
"""

    def test_yaml_output(self, sav_file, capsys):
        _, out, _ = run(["-f", "yaml", "questcmp", sav_file, "Time"], capsys)
        assert out == "DrSCmTime: 17460000\n"


# =============================================================================
# set
# =============================================================================

class TestSet:
    def test_backup_created_once(self, mis_file, no_prompt, capsys):
        status, out, _ = run(["questdb", mis_file, "loot", "100"], capsys)
        assert status == 0
        assert out == f"Created backup {mis_file}.bak\nWrote {mis_file}\n"

        bak = mis_file.with_name(mis_file.name + ".bak")
        original = bak.read_bytes()
        status, out, _ = run(["questdb", mis_file, "loot", "200"], capsys)
        assert status == 0
        assert out == f"Wrote {mis_file}\n"
        assert bak.read_bytes() == original

    def test_modify_i32(self, mis_file, no_prompt, capsys):
        run(["questdb", mis_file, "loot", "100"], capsys)
        _, out, _ = run(["questdb", mis_file, "loot"], capsys)
        assert out == """\
goal_loot_1           100
goal_loot_2           100
goal_loot_3           100
"""

    def test_modify_string(self, mis_file, no_prompt, capsys):
        run(["info", mis_file, "created_by", "new_creator"], capsys)
        _, out, _ = run(["info", mis_file], capsys)
        assert out == """\
created_by              new_creator
last_saved_by                  user
total_time                363660000 (string: 4:05:01:00)
"""

    def test_modify_u32(self, mis_file, no_prompt, capsys):
        run(["info", mis_file, "time", "12345"], capsys)
        _, out, _ = run(["info", mis_file], capsys)
        assert out == """\
created_by              creator
last_saved_by              user
total_time                12345 (string: 0:00:00:12)
"""

    def test_modify_time_string(self, mis_file, no_prompt, capsys):
        run(["info", mis_file, "time", "0:00:07:31"], capsys)
        _, out, _ = run(["info", mis_file], capsys)
        assert out == """\
created_by              creator
last_saved_by              user
total_time               451000 (string: 0:00:07:31)
"""

    def test_invalid_value_writes_nothing(self, mis_file, no_prompt, capsys):
        original = mis_file.read_bytes()
        status, out, err = run(["questdb", mis_file, "loot", "2147483648"], capsys)
        assert status == 1
        assert out == ""
        assert err == "Error: Value too high. Must be 2147483647 or less.\n"
        assert mis_file.read_bytes() == original
        assert not mis_file.with_name(mis_file.name + ".bak").exists()

    def test_declined_prompt(self, mis_file, monkeypatch, capsys):
        monkeypatch.delenv("DARKDB_ENV", raising=False)
        monkeypatch.setattr("builtins.input", lambda prompt: "n")
        original = mis_file.read_bytes()
        status, _, err = run(["questdb", mis_file, "loot", "5"], capsys)
        assert status == 1
        assert err == "Aborted.\n"
        assert mis_file.read_bytes() == original

    def test_accepted_prompt(self, mis_file, monkeypatch, capsys):
        monkeypatch.delenv("DARKDB_ENV", raising=False)
        monkeypatch.setattr("builtins.input", lambda prompt: "y")
        status, out, _ = run(["questdb", mis_file, "loot", "5"], capsys)
        assert status == 0
        assert out.endswith(f"Wrote {mis_file}\n")

    def test_backup_failure_leaves_file_untouched(self, mis_file, no_prompt, monkeypatch, capsys):
        def fail(src, dst):
            raise OSError(errno.ENOSPC, "No space left on device")

        monkeypatch.setattr("darkdb.cli.shutil.copy2", fail)
        original = mis_file.read_bytes()
        status, out, err = run(["questdb", mis_file, "loot", "100"], capsys)
        assert status == 1
        assert out == ""
        assert err == f"Error: Failed to create backup {mis_file}.bak: No space left on device\n"
        assert mis_file.read_bytes() == original

    def test_write_failure(self, mis_file, no_prompt, monkeypatch, capsys):
        def fail(stream, changeset):
            raise OSError(errno.EIO, "Input/output error")

        monkeypatch.setattr("darkdb.mission.apply_changeset", fail)
        status, out, err = run(["questdb", mis_file, "loot", "100"], capsys)
        assert status == 1
        assert out == f"Created backup {mis_file}.bak\n"
        assert err == f"Error: Failed to write {mis_file}: Input/output error\n"
