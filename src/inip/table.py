# -*- encoding: utf-8 -*-
# @File   : table.py
# @Time   : 2026/10/19 14:41:16
# @Author : Kariko Lin

"""Fixed-capacity open-addressing hash table.

Slots live in the arena as packed records, FNV-1a picks the home slot,
collisions probe linearly. The table never resizes: once half the slots
are taken, inserting another key raises `TableOverflow`.
"""

import logging
from typing import TypeAlias
from collections.abc import Iterator, Mapping
from struct import Struct

from .arena import Arena, ArenaStr, Region
from .errors import TableOverflow
from .settings import DEFAULT_TABLE_CAPACITY

FNV_OFFSET_BASIS = 0xcbf29ce484222325
FNV_PRIME = 0x100000001b3
_MASK64 = (1 << 64) - 1

# hash, key offset, key length + 1.
# the length is biased so that a zeroed slot reads as empty.
_SLOT = Struct('<QII')

Key: TypeAlias = ArenaStr | str | bytes | bytearray | memoryview


def fnv1a(data: bytes | bytearray | memoryview) -> int:
    """64-bit FNV-1a."""
    h = FNV_OFFSET_BASIS
    for i in bytes(data):
        h ^= i
        h = (h * FNV_PRIME) & _MASK64
    return h


def _key_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode('utf-8')
    if isinstance(key, (Region, bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f'unsupported key type: {type(key).__name__}')


class HashTable(Mapping[str, object]):
    """String keys to opaque values.

    Only keys are copied into the arena; values are kept as given
    and never looked at.
    """

    def __init__(
        self, arena: Arena, capacity: int = DEFAULT_TABLE_CAPACITY
    ) -> None:
        if capacity < 2 or capacity & (capacity - 1):
            raise ValueError(
                f'capacity must be a power of two, got {capacity}')
        self._arena = arena
        self.capacity = capacity
        self._slots = arena.alloc(capacity * _SLOT.size)
        self._values: list[object] = [None] * capacity
        self._len = 0

    @property
    def load_factor(self) -> float:
        return self._len / self.capacity

    def _probe(self, key: bytes, h: int) -> tuple[int, bool]:
        """Walk from the home slot.

        Returns the slot index and whether it holds `key`;
        if not, the index is the first empty slot met.
        """
        slots = self._slots.view()
        idx = h & (self.capacity - 1)
        for _ in range(self.capacity):
            stored, off, blen = _SLOT.unpack_from(slots, idx * _SLOT.size)
            if blen == 0:
                return idx, False
            if stored == h and self._arena._peek(off, blen - 1) == key:
                return idx, True
            idx = (idx + 1) & (self.capacity - 1)
        # unreachable while the load factor stays at or below 1/2
        raise TableOverflow(self.capacity)

    def _key_at(self, idx: int) -> ArenaStr:
        _, off, blen = _SLOT.unpack_from(self._slots.view(), idx * _SLOT.size)
        return ArenaStr(self._arena, off, blen - 1, self._slots.generation)

    def set(self, key: Key, value: object) -> ArenaStr:
        """Insert or overwrite. Returns the arena-owned key.

        Keys must be ASCII; lookups with anything else just miss.
        """
        raw = _key_bytes(key)
        if not raw.isascii():
            # stored keys are read back as ASCII text.
            raise ValueError(f'key must be ASCII, got {key!r}')
        h = fnv1a(raw)
        idx, found = self._probe(raw, h)
        if found:
            logging.debug('key %r overwritten in slot %d', raw, idx)
            self._values[idx] = value
            return self._key_at(idx)
        if self._len >= self.capacity // 2:
            raise TableOverflow(self.capacity)
        owned = self._arena.own(key if isinstance(key, Region) else raw)
        _SLOT.pack_into(
            self._slots.view(), idx * _SLOT.size, h, owned.offset, owned.size + 1)
        self._values[idx] = value
        self._len += 1
        return owned

    def get(self, key: Key, default: object = None) -> object:
        raw = _key_bytes(key)
        idx, found = self._probe(raw, fnv1a(raw))
        return self._values[idx] if found else default

    def __getitem__(self, key: Key) -> object:
        raw = _key_bytes(key)
        idx, found = self._probe(raw, fnv1a(raw))
        if not found:
            raise KeyError(key)
        return self._values[idx]

    def __contains__(self, key: object) -> bool:
        try:
            raw = _key_bytes(key)  # type: ignore[arg-type]
        except TypeError:
            return False
        return self._probe(raw, fnv1a(raw))[1]

    def __len__(self) -> int:
        return self._len

    def __iter__(self) -> Iterator[ArenaStr]:
        """Keys in slot order. Insertion order is not kept."""
        slots = self._slots.view()
        for idx in range(self.capacity):
            if _SLOT.unpack_from(slots, idx * _SLOT.size)[2]:
                yield self._key_at(idx)

    def __repr__(self) -> str:
        return 'HashTable { .len = %d, .cap = %d }' % (
            self._len, self.capacity)
