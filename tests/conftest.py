"""Fixtures that build small mission and save files in tmp_path."""

import pytest

from darkdb.codec import pack_i32, pack_string, pack_u32
from darkdb.toc import HEADER_SIZE, MAGIC, MAGIC_OFFSET


# Quest variables in deliberately scrambled on-disk order
MIS_QUEST_DB = [
    ("goal_state_10", 0),
    ("goal_loot_2", 2000),
    ("", 0),
    ("goal_state_0", 0),
    ("DrSSecrets", 0),
    ("GOAL_STATE_11", 0),
    ("goal_state_1", 0),
    ("map_min_page", 1),
    ("=goal_state_3", 0),
    ("goal_loot_1", 1000),
    ("goal_state_12", 0),
    ("goal_state_2", 0),
    ("1", 0),
    ("goal_loot_3", 3000),
    ("map_max_page", 2),
]

SAV_QUEST_DB = [
    ("DrSKills", 0),
    ("DrSBackStabs", 0),
    ("DrSBodyFound", 0),
    ("DrSDmgDealt", 0),
    ("DrSKnockout", 0),
    ("DrSLkPickCnt", 0),
    ("DrSLootTotal", 0),
    ("DrSObjKilled", 0),
    ("DrSPocketCnt", 0),
    ("DrSScrtCnt", 0),
    ("DrSTime", 291000),
    ("map_min_page", 1),
    ("map_max_page", 2),
]

SAV_QUEST_CMP = [
    ("DrSCmTime", 17460000),
    ("Difficulty", 2),
    ("DrSCmDmgDeal", 0),
    ("DrSCmDmgTake", 0),
    ("DrSCmKills", 0),
    ("DrSCmLoot", 0),
    ("TOTAL_LOOT", 0),
]


def quest_payload(pairs) -> bytes:
    data = bytearray()
    for key, value in pairs:
        raw = key.encode("ascii") + b"\x00"
        data += pack_u32(len(raw)) + raw + pack_i32(value)
    return bytes(data)


def info_payload(last_saved_by="user", created_by="creator", total_time=363660000) -> bytes:
    return (pack_string(last_saved_by, 16)
            + pack_string(created_by, 16)
            + b"\xcc" * 88
            + pack_u32(total_time))


def build_table_file(chunks) -> bytes:
    """Lay out a header, the chunks and a trailing TOC.

    `chunks` is a list of (name, payload) or (toc_name, chunk_name, payload).
    """
    header = bytearray(b"\xab" * HEADER_SIZE)
    header[MAGIC_OFFSET:HEADER_SIZE] = MAGIC

    body = bytearray()
    entries = []
    pos = HEADER_SIZE
    for chunk in chunks:
        if len(chunk) == 2:
            toc_name, payload = chunk
            chunk_name = toc_name
        else:
            toc_name, chunk_name, payload = chunk
        data = pack_string(chunk_name, 12) + b"\x00" * 12 + payload
        entries.append((toc_name, pos, len(payload)))
        body += data
        pos += len(data)

    toc = bytearray(pack_u32(len(entries)))
    for name, offset, size in entries:
        toc += pack_string(name, 12) + pack_u32(offset) + pack_u32(size)

    header[0:4] = pack_u32(pos)
    return bytes(header + body + toc)


@pytest.fixture
def mis_bytes():
    return build_table_file([
        ("BRHEAD", info_payload()),
        ("ScrModules", b""),
        ("QUEST_DB", quest_payload(MIS_QUEST_DB)),
    ])


@pytest.fixture
def sav_bytes():
    return build_table_file([
        ("QUEST_DB", quest_payload(SAV_QUEST_DB)),
        ("QUEST_CMP", quest_payload(SAV_QUEST_CMP)),
    ])


@pytest.fixture
def mis_file(tmp_path, mis_bytes):
    path = tmp_path / "miss20.mis"
    path.write_bytes(mis_bytes)
    return path


@pytest.fixture
def sav_file(tmp_path, sav_bytes):
    path = tmp_path / "game0000.sav"
    path.write_bytes(sav_bytes)
    return path


@pytest.fixture
def empty_file(tmp_path):
    path = tmp_path / "empty_file"
    path.write_bytes(b"")
    return path


@pytest.fixture
def short_file(tmp_path):
    path = tmp_path / "short_file"
    path.write_bytes(b"\x00" * 100)
    return path


@pytest.fixture
def invalid_file(tmp_path):
    path = tmp_path / "invalid_file"
    path.write_bytes(b"\x00" * 1024)
    return path
