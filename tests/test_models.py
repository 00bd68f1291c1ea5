import pathlib
import sys

# Ensure src package is on path
sys.path.append(str(pathlib.Path(__file__).resolve().parents[1] / "src"))

import pytest

from restaurant_seating.models import (
    Action,
    CustomerGroup,
    IdSequence,
    Operation,
    Table,
    parse_size,
    tables_from_sizes,
)


def test_table_identity_ignores_size():
    assert Table("T1", 4) == Table("T1", 4)
    assert Table("T1", 4) != Table("T2", 4)
    assert len({Table("T1", 4), Table("T1", 4), Table("T2", 4)}) == 2


def test_group_and_table_with_same_id_differ():
    assert CustomerGroup("x", 2) != Table("x", 2)


def test_str_rendering():
    assert str(Table("T3", 4)) == "Table(T3): (4 chairs)"
    assert str(CustomerGroup("g1", 2)) == "Group(g1): (2 customers)"


@pytest.mark.parametrize("size", [-1, 2.5, "3", True])
def test_invalid_sizes_rejected(size):
    with pytest.raises(ValueError):
        Table("T1", size)
    with pytest.raises(ValueError):
        CustomerGroup("g1", size)


def test_id_sequences_are_independent():
    a = IdSequence("T")
    b = IdSequence("T")
    assert [a.next_id(), a.next_id()] == ["T1", "T2"]
    assert b.next_id() == "T1"


def test_tables_from_sizes_numbers_from_one_each_call():
    first = tables_from_sizes([2, 4])
    second = tables_from_sizes([6])
    assert [(t.id, t.size) for t in first] == [("T1", 2), ("T2", 4)]
    assert second[0].id == "T1"


def test_action_parse():
    assert Action.parse(" Arrive ") is Action.ARRIVE
    assert Action.parse("leaves") is Action.LEAVE
    with pytest.raises(ValueError):
        Action.parse("dance")


def test_operation_requires_size_for_arrival():
    with pytest.raises(ValueError):
        Operation(Action.ARRIVE, "g1")
    assert Operation(Action.LEAVE, "g1").size is None


def test_parse_size():
    assert parse_size(" 4 ") == 4
    assert parse_size(3.0) == 3
    assert parse_size("") is None
    assert parse_size(float("nan")) is None
    with pytest.raises(ValueError):
        parse_size("four")
