"""A bucketed transposition table mapping position hashes to search results."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Dict, List, Optional

from tomato.evaluate import Eval

LINE_SIZE = 64
"""The size in bytes of one bucket, matching a cache line."""

ENTRY_SIZE = 10
"""The nominal packed size in bytes of one entry."""

BUCKET_LEN = LINE_SIZE // ENTRY_SIZE
"""The number of entries held in one bucket."""

_AGE_MASK = 0x3F
_LIVENESS_MASK = 0xC0
_MAX_AGE_LIMIT = 0x3F


class _Liveness(enum.IntEnum):
    EMPTY = 0
    OCCUPIED = 1 << 6
    DELETED = 2 << 6


@dataclass(frozen=True)
class TTEntry:
    """One stored search result.

    `tag` packs the entry's age in its low six bits and its liveness in
    the top two bits.
    """

    key_low16: int
    depth: int
    best_move: Any
    lower_bound: Eval
    upper_bound: Eval
    tag: int = field(default=int(_Liveness.OCCUPIED))

    DEPTH_CAPTURES: ClassVar[int] = -1

    def _age(self) -> int:
        return self.tag & _AGE_MASK

    def _liveness(self) -> int:
        return self.tag & _LIVENESS_MASK

    def _is_occupied(self) -> bool:
        return self._liveness() == _Liveness.OCCUPIED


_EMPTY_ENTRY = TTEntry(
    key_low16=0,
    depth=0,
    best_move=None,
    lower_bound=Eval.DRAW,
    upper_bound=Eval.DRAW,
    tag=int(_Liveness.EMPTY),
)


def _empty_bucket() -> List[TTEntry]:
    return [_EMPTY_ENTRY] * BUCKET_LEN


def _round_down_pow2(n: int) -> int:
    return 0 if n <= 0 else 1 << (n.bit_length() - 1)


class TTEntryGuard:
    """A handle on one slot of a table, produced by a probe.

    A hit gives access to the stored entry; a miss points at the slot
    that a later `save` will overwrite.
    """

    def __init__(
        self,
        valid: bool,
        hash_key: int,
        buckets: Optional[Dict[int, List[TTEntry]]],
        bucket_index: int = 0,
        slot: int = 0,
    ) -> None:
        self._valid = valid
        self._hash = hash_key
        self._buckets = buckets
        self._bucket_index = bucket_index
        self._slot = slot

    def entry(self) -> Optional[TTEntry]:
        """The entry found by the probe, or None if the probe missed."""
        if not self._valid or self._buckets is None:
            return None
        bucket = self._buckets.get(self._bucket_index)
        if bucket is None:
            return None
        return bucket[self._slot]

    def save(self, depth: int, best_move: Any, lower_bound: Eval, upper_bound: Eval) -> None:
        """Write a new entry into the guarded slot; a no-op on an empty table."""
        if self._buckets is None:
            return
        bucket = self._buckets.setdefault(self._bucket_index, _empty_bucket())
        bucket[self._slot] = TTEntry(
            key_low16=self._hash & 0xFFFF,
            depth=depth,
            best_move=best_move,
            lower_bound=lower_bound,
            upper_bound=upper_bound,
            tag=int(_Liveness.OCCUPIED),
        )


class TTable:
    """A fixed-capacity hash table of search results that evicts old entries.

    The capacity is a power of two number of buckets; buckets are
    materialised only when written, so a large capacity costs nothing
    until it is used.
    """

    def __init__(self) -> None:
        self._buckets: Optional[Dict[int, List[TTEntry]]] = None
        self._mask = 0

    @staticmethod
    def with_size(size_mb: int) -> "TTable":
        """A table holding no more than `size_mb` megabytes of buckets."""
        if size_mb < 0:
            raise ValueError("size must not be negative")
        if size_mb == 0:
            return TTable()
        new_size = _round_down_pow2(size_mb * 1_000_000 // LINE_SIZE)
        return TTable.with_capacity(new_size.bit_length() - 1)

    @staticmethod
    def with_capacity(capacity_log2: int) -> "TTable":
        """A table with 2 ** `capacity_log2` buckets."""
        if capacity_log2 < 0:
            raise ValueError("capacity must not be negative")
        table = TTable()
        table._buckets = {}
        table._mask = (1 << capacity_log2) - 1
        return table

    def _num_buckets(self) -> int:
        return 0 if self._buckets is None else self._mask + 1

    def _index_for(self, hash_key: int) -> int:
        return (hash_key >> 16) & self._mask

    def get(self, hash_key: int) -> TTEntryGuard:
        """Probe the table for `hash_key`, returning a guard on the matching or replaceable slot."""
        if self._buckets is None:
            return TTEntryGuard(False, 0, None)
        idx = self._index_for(hash_key)
        bucket = self._buckets.get(idx)
        if bucket is None:
            return TTEntryGuard(False, hash_key, self._buckets, idx, 0)

        key_low = hash_key & 0xFFFF
        replace_slot = 0
        eldest_age = 0
        for slot, entry in enumerate(bucket):
            if not entry._is_occupied():
                if eldest_age < 255:
                    eldest_age = 255
                    replace_slot = slot
            elif entry.key_low16 == key_low:
                return TTEntryGuard(True, hash_key, self._buckets, idx, slot)
            else:
                age = entry._age()
                if eldest_age < age:
                    replace_slot = slot
                    eldest_age = age
        return TTEntryGuard(False, hash_key, self._buckets, idx, replace_slot)

    def fill_rate_permill(self) -> int:
        """An estimate of how full the table is, out of 1000, from the first 1000 buckets."""
        if self._buckets is None:
            return 1000
        num_full = 0
        for idx in range(1000):
            bucket = self._buckets.get(idx & self._mask)
            if bucket is not None:
                num_full += sum(1 for e in bucket if e._is_occupied())
        return num_full // BUCKET_LEN

    def age_up(self, max_age: int) -> None:
        """Age every live entry by one, deleting those already at least `max_age` old."""
        if not 0 <= max_age <= _MAX_AGE_LIMIT:
            raise ValueError(f"max_age must lie in [0, {_MAX_AGE_LIMIT}], got {max_age}")
        if self._buckets is None:
            return
        for bucket in self._buckets.values():
            for slot, entry in enumerate(bucket):
                if not entry._is_occupied():
                    continue
                if max_age <= entry._age():
                    bucket[slot] = replace(entry, tag=int(_Liveness.DELETED))
                else:
                    bucket[slot] = replace(entry, tag=entry.tag + 1)

    def resize(self, size_mb: int) -> None:
        """Resize to at most `size_mb` megabytes.

        Shrinking folds the dropped buckets onto the kept ones; growing
        starts from an empty table.
        """
        if size_mb < 0:
            raise ValueError("size must not be negative")
        new_size = _round_down_pow2(size_mb * 1_000_000 // LINE_SIZE)
        old_size = self._num_buckets()
        if new_size == 0:
            self._buckets = None
            self._mask = 0
        elif new_size < old_size:
            assert self._buckets is not None
            new_mask = new_size - 1
            for idx in sorted(i for i in self._buckets if i >= new_size):
                bucket = self._buckets.pop(idx)
                self._buckets[idx & new_mask] = list(bucket)
            self._mask = new_mask
        else:
            self._buckets = {}
            self._mask = new_size - 1

    def size_mb(self) -> int:
        """The table's capacity in megabytes, rounded down."""
        if self._buckets is None:
            return 0
        return LINE_SIZE * (self._mask + 1) // 1_000_000

    def clear(self) -> None:
        """Remove every entry while keeping the capacity."""
        if self._buckets is not None:
            self._buckets.clear()