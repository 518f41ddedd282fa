from dataclasses import dataclass

from dualtable.debug import Row, format_state, print_state, snapshot
from dualtable.table import Entry, Mode, SlotState, Table


@dataclass(frozen=True)
class Key:
    value: str
    hash: int

    def __hash__(self) -> int:
        return self.hash

    def __str__(self) -> str:
        return self.value


def test_chaining_dump():
    t = Table(4, 1.0, Mode.CHAINING)
    t.add(Key("A", 0), 1)
    t.add(Key("B", 4), 2)
    t.add(Key("C", 2), 3)

    assert format_state(t) == (
        "=== Table (CHAINING) capacity=4 size=3 ===\n"
        "0: [A=1, B=2]\n"
        "1: null\n"
        "2: [C=3]\n"
        "3: null\n"
        "========================================\n"
    )

    # an emptied bucket still exists
    t.remove(Key("C", 2))
    assert "2: []\n" in format_state(t)


def test_open_addressing_dump():
    t = Table(4, 1.0, Mode.OPEN_ADDRESSING)
    t.add(Key("A", 0), 1)
    t.add(Key("B", 0), 2)
    t.remove(Key("A", 0))

    assert format_state(t) == (
        "=== Table (OPEN_ADDRESSING) capacity=4 size=1 ===\n"
        "0: TOMBSTONED\n"
        "1: OCCUPIED(B=2)\n"
        "2: NEVER_USED\n"
        "3: NEVER_USED\n"
        "========================================\n"
    )


def test_snapshot():
    t = Table(2, 1.0, Mode.OPEN_ADDRESSING)
    a = Key("A", 1)
    t.add(a, 1)

    state = snapshot(t)
    assert state.mode == Mode.OPEN_ADDRESSING
    assert state.capacity == 2
    assert state.size == 1
    assert state.rows == (
        Row(0, SlotState.NEVER_USED, None),
        Row(1, SlotState.OCCUPIED, (Entry(a, 1),)),
    )

    # should not see later writes
    t.add(a, 100)
    t.add(Key("B", 0), 2)
    assert state.rows[1].entries == (Entry(a, 1),)
    assert state.rows[0].state == SlotState.NEVER_USED
    assert state.size == 1


def test_snapshot_does_not_mutate():
    t = Table(8, 0.7, Mode.CHAINING)
    t.add("x", 1)

    before = snapshot(t)
    format_state(t)
    assert snapshot(t) == before
    assert t.size() == 1
    assert t.capacity() == 8


def test_print_state(capsys):
    t = Table(2, 1.0, Mode.CHAINING)
    t.add(Key("A", 1), 1)

    print_state(t)

    captured = capsys.readouterr()
    assert captured.out == format_state(t) + "\n"
    assert captured.out.startswith("=== Table (CHAINING) capacity=2 size=1 ===\n0: null\n1: [A=1]\n")
