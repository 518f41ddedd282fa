from dataclasses import dataclass
import enum
from collections.abc import Hashable, Iterator
from typing import Any

from .shared import printf


DEFAULT_CAPACITY = 16
DEFAULT_LOAD_FACTOR = 0.7


_debug_trace_resize = False


def set_debug_trace_resize(b: bool):
    global _debug_trace_resize
    _debug_trace_resize = b


class InvalidArgument(ValueError):
    pass


class TableFull(Exception):
    pass


class Mode(enum.Enum):
    CHAINING = enum.auto()
    OPEN_ADDRESSING = enum.auto()


class SlotState(enum.Enum):
    NEVER_USED = enum.auto()
    OCCUPIED = enum.auto()
    TOMBSTONED = enum.auto()


@dataclass(frozen=True)
class NotFound:
    pass


@dataclass
class Entry:
    key: Hashable
    value: Any


@dataclass
class Slot:
    state: SlotState
    entry: Entry | None

    @classmethod
    def empty(cls):
        return Slot(SlotState.NEVER_USED, None)


Bucket = list[Entry]


@dataclass
class Chains:
    buckets: list[Bucket | None]


@dataclass
class Slots:
    slots: list[Slot]


Storage = Chains | Slots


def new_storage(mode: Mode, capacity: int) -> Storage:
    match mode:
        case Mode.CHAINING:
            return Chains(buckets=[None for _ in range(capacity)])
        case Mode.OPEN_ADDRESSING:
            return Slots(slots=[Slot.empty() for _ in range(capacity)])
    raise Exception("Wrong mode", mode)


@dataclass
class Table:
    mode: Mode
    load_factor_threshold: float
    storage: Storage
    count: int

    def __init__(
        self,
        initial_capacity: int = DEFAULT_CAPACITY,
        load_factor_threshold: float = DEFAULT_LOAD_FACTOR,
        mode: Mode = Mode.CHAINING,
    ) -> None:
        if not 0 < load_factor_threshold <= 1:
            raise InvalidArgument(
                f"Load factor threshold must be in (0, 1], got {load_factor_threshold}"
            )
        if initial_capacity <= 0:
            initial_capacity = DEFAULT_CAPACITY

        self.mode = mode
        self.load_factor_threshold = load_factor_threshold
        self.storage = new_storage(mode, initial_capacity)
        self.count = 0

    @classmethod
    def default(cls) -> "Table":
        return cls(DEFAULT_CAPACITY, DEFAULT_LOAD_FACTOR, Mode.CHAINING)

    def __len__(self) -> int:
        return self.count

    def size(self) -> int:
        return self.count

    def capacity(self) -> int:
        match self.storage:
            case Chains(buckets):
                return len(buckets)
            case Slots(slots):
                return len(slots)
        raise Exception("Wrong storage", self.storage)

    def load_factor(self) -> float:
        return self.count / self.capacity()

    def hash(self, key: Hashable) -> int:
        # python's % is non-negative for a positive modulus
        return hash(key) % self.capacity()

    def add(self, key: Hashable, value: Any):
        if key is None:
            raise InvalidArgument("None keys are not allowed")

        self._insert(key, value)

        while self.load_factor() > self.load_factor_threshold:
            self._resize()

    def add_all(self, from_t: "Table"):
        for entry in from_t.entries():
            self.add(entry.key, entry.value)

    def get(self, key: Hashable) -> Any | NotFound:
        if key is None:
            return NotFound()

        match self.storage:
            case Chains(buckets):
                bucket = buckets[self.hash(key)]
                if bucket is None:
                    return NotFound()
                for entry in bucket:
                    if entry.key == key:
                        return entry.value
                return NotFound()

            case Slots(slots):
                index = self._find_slot(slots, key)
                if index is None:
                    return NotFound()
                entry = slots[index].entry
                assert entry is not None
                return entry.value

        raise Exception("Wrong storage", self.storage)

    def remove(self, key: Hashable) -> bool:
        if key is None:
            return False

        match self.storage:
            case Chains(buckets):
                bucket = buckets[self.hash(key)]
                if bucket is None:
                    return False
                for i, entry in enumerate(bucket):
                    if entry.key == key:
                        del bucket[i]
                        self.count -= 1
                        return True
                return False

            case Slots(slots):
                index = self._find_slot(slots, key)
                if index is None:
                    return False
                slots[index].state = SlotState.TOMBSTONED
                slots[index].entry = None
                self.count -= 1
                return True

        raise Exception("Wrong storage", self.storage)

    def entries(self) -> Iterator[Entry]:
        # positional order: bucket by bucket, slot by slot
        match self.storage:
            case Chains(buckets):
                for bucket in buckets:
                    if bucket is None:
                        continue
                    yield from bucket

            case Slots(slots):
                for slot in slots:
                    if slot.state is SlotState.OCCUPIED:
                        assert slot.entry is not None
                        yield slot.entry

    def _insert(self, key: Hashable, value: Any):
        match self.storage:
            case Chains(buckets):
                self._insert_chained(buckets, key, value)
            case Slots(slots):
                self._insert_probed(slots, key, value)

    def _insert_chained(self, buckets: list[Bucket | None], key: Hashable, value: Any):
        index = self.hash(key)
        bucket = buckets[index]
        if bucket is None:
            bucket = buckets[index] = Bucket()

        for entry in bucket:
            if entry.key == key:
                entry.value = value
                return

        bucket.append(Entry(key, value))
        self.count += 1

    def _insert_probed(self, slots: list[Slot], key: Hashable, value: Any):
        first_reusable: Slot | None = None
        index = self.hash(key)

        for _ in range(len(slots)):
            slot = slots[index]
            match slot.state:
                case SlotState.NEVER_USED:
                    if first_reusable is not None:
                        slot = first_reusable
                    slot.state = SlotState.OCCUPIED
                    slot.entry = Entry(key, value)
                    self.count += 1
                    return

                case SlotState.TOMBSTONED:
                    if first_reusable is None:
                        first_reusable = slot

                case SlotState.OCCUPIED:
                    assert slot.entry is not None
                    if slot.entry.key == key:
                        slot.entry.value = value
                        return

            index = (index + 1) % len(slots)

        # wrapped around: the key is absent, but only a tombstone can take it
        if first_reusable is None:
            raise TableFull(f"Table unexpectedly full (capacity {len(slots)})")

        first_reusable.state = SlotState.OCCUPIED
        first_reusable.entry = Entry(key, value)
        self.count += 1

    def _find_slot(self, slots: list[Slot], key: Hashable) -> int | None:
        index = self.hash(key)

        for _ in range(len(slots)):
            slot = slots[index]
            if slot.state is SlotState.NEVER_USED:
                return None
            if slot.state is SlotState.OCCUPIED:
                assert slot.entry is not None
                if slot.entry.key == key:
                    return index

            index = (index + 1) % len(slots)

        return None

    def _resize(self):
        items = list(self.entries())

        self.storage = new_storage(self.mode, self.capacity() * 2)
        self.count = 0
        for entry in items:
            self._insert(entry.key, entry.value)

        if _debug_trace_resize:
            printf("[resize] New capacity = {0:d}\n", self.capacity())
