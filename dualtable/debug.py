from dataclasses import dataclass

from .shared import printf, sprintf
from .table import Chains, Entry, Mode, SlotState, Slots, Table


@dataclass(frozen=True)
class Row:
    index: int
    # None for every chaining bucket
    state: SlotState | None
    # None when the bucket was never created or the slot holds no entry
    entries: tuple[Entry, ...] | None


@dataclass(frozen=True)
class TableState:
    mode: Mode
    capacity: int
    size: int
    rows: tuple[Row, ...]


def snapshot(table: Table) -> TableState:
    # entries are copied so later writes do not show up in the snapshot
    rows: list[Row] = []
    match table.storage:
        case Chains(buckets):
            for index, bucket in enumerate(buckets):
                if bucket is None:
                    rows.append(Row(index, None, None))
                else:
                    rows.append(Row(index, None, tuple(_copy(e) for e in bucket)))

        case Slots(slots):
            for index, slot in enumerate(slots):
                if slot.entry is None:
                    rows.append(Row(index, slot.state, None))
                else:
                    rows.append(Row(index, slot.state, (_copy(slot.entry),)))

    return TableState(
        mode=table.mode,
        capacity=table.capacity(),
        size=table.size(),
        rows=tuple(rows),
    )


def _copy(entry: Entry) -> Entry:
    return Entry(entry.key, entry.value)


def format_entry(entry: Entry) -> str:
    return sprintf("{0}={1}", entry.key, entry.value)


def format_row(row: Row) -> str:
    if row.state is None:
        if row.entries is None:
            return sprintf("{0:d}: null", row.index)
        return sprintf(
            "{0:d}: [{1:s}]", row.index, ", ".join(map(format_entry, row.entries))
        )

    match row.state:
        case SlotState.OCCUPIED:
            assert row.entries is not None
            return sprintf(
                "{0:d}: OCCUPIED({1:s})", row.index, format_entry(row.entries[0])
            )
        case SlotState.NEVER_USED | SlotState.TOMBSTONED:
            return sprintf("{0:d}: {1:s}", row.index, row.state.name)

    raise Exception("Wrong slot state", row.state)


def render_state(state: TableState) -> str:
    lines = [
        sprintf(
            "=== Table ({0:s}) capacity={1:d} size={2:d} ===",
            state.mode.name,
            state.capacity,
            state.size,
        )
    ]
    lines.extend(format_row(row) for row in state.rows)
    lines.append("=" * 40)
    return "\n".join(lines) + "\n"


def format_state(table: Table) -> str:
    return render_state(snapshot(table))


def print_state(table: Table):
    printf("{0:s}\n", format_state(table))
