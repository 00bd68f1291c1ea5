import pathlib
import sys

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import pytest

from restaurant_seating.loader import load_all, load_events, load_tables
from restaurant_seating.models import Action

DATA_DIR = pathlib.Path(__file__).parent / "data"


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_load_fixture_files():
    tables, operations = load_all(DATA_DIR / "tables.csv", DATA_DIR / "events.csv")
    assert [(t.id, t.size) for t in tables] == [(f"T{i}", i) for i in range(1, 7)]
    assert len(operations) == 12
    assert operations[0].action is Action.ARRIVE
    assert operations[0].who == "g1"
    assert operations[0].size == 1
    assert operations[8].action is Action.LEAVE
    assert operations[8].size is None


def test_tables_without_ids_are_numbered(tmp_path):
    path = write(tmp_path, "tables.csv", "capacity\n2\n4\n")
    tables = load_tables(path)
    assert [(t.id, t.size) for t in tables] == [("T1", 2), ("T2", 4)]


def test_table_ids_keep_leading_zeros(tmp_path):
    path = write(tmp_path, "tables.csv", "id,capacity\n007,2\n")
    assert load_tables(path)[0].id == "007"


@pytest.mark.parametrize(
    "text, message",
    [
        ("id,seats\nT1,2\n", "missing columns"),
        ("id,capacity\nT1,two\n", "row 2"),
        ("id,capacity\nT1,-1\n", "non-negative"),
        ("id,capacity\nT1,\n", "capacity is empty"),
        ("id,capacity\nT1,2\nT1,4\n", "duplicate table id"),
    ],
)
def test_bad_tables_rejected(tmp_path, text, message):
    path = write(tmp_path, "tables.csv", text)
    with pytest.raises(ValueError, match=message):
        load_tables(path)


@pytest.mark.parametrize(
    "text, message",
    [
        ("action,size\narrive,2\n", "missing columns"),
        ("action,group,size\nwander,g1,2\n", "Unknown action"),
        ("action,group,size\narrive,g1,\n", "needs a group size"),
        ("action,group,size\narrive,,2\n", "group is empty"),
    ],
)
def test_bad_events_rejected(tmp_path, text, message):
    path = write(tmp_path, "events.csv", text)
    with pytest.raises(ValueError, match=message):
        load_events(path)


def test_leave_rows_ignore_size(tmp_path):
    path = write(tmp_path, "events.csv", "action,group,size\nLEAVES,g1,3\n")
    operation = load_events(path)[0]
    assert operation.action is Action.LEAVE
    assert operation.size is None
