# -*- encoding: utf-8 -*-
# @File   : arena.py
# @Time   : 2026/10/19 14:20:48
# @Author : Kariko Lin

"""Bump-pointer arena that owns everything a parse produces.

One fixed `bytearray`, one offset moving forward in 8-byte steps.
Nothing is freed on its own: `reset()` forgets every allocation at once,
`destroy()` drops the block.

Handed-out `Region`s remember the arena generation they were cut from,
so touching one after `reset()` or `destroy()` raises `ArenaStateError`
instead of silently reading recycled bytes.
"""

import logging

from .errors import AllocatorExhausted, ArenaStateError

ALIGNMENT = 8


def align(offset: int, alignment: int = ALIGNMENT) -> int:
    return (offset + (alignment - 1)) & ~(alignment - 1)


class Region:
    """A span of arena memory."""
    __slots__ = ('arena', 'offset', 'size', 'generation')

    def __init__(
        self, arena: 'Arena', offset: int, size: int, generation: int
    ) -> None:
        self.arena = arena
        self.offset = offset
        self.size = size
        self.generation = generation

    @property
    def valid(self) -> bool:
        return (not self.arena.closed
                and self.generation == self.arena.generation)

    def view(self) -> memoryview:
        return self.arena._view(self)

    def write(self, data: bytes | bytearray | memoryview, at: int = 0) -> None:
        if at < 0 or at + len(data) > self.size:
            raise ValueError(
                f'{len(data)} bytes at {at} overrun a region of {self.size}')
        self.view()[at:at + len(data)] = data

    def __bytes__(self) -> bytes:
        return self.view().tobytes()

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return '<Region +%d { .size = %d }>' % (self.offset, self.size)


class ArenaStr(Region):
    """ASCII text stored in an arena.

    Compares equal to `str`, `bytes` and other `ArenaStr` holding the same
    characters, and hashes like the equal `str`, so it can stand in for
    one as a dict key.
    """
    __slots__ = ()

    def __str__(self) -> str:
        return self.view().tobytes().decode('ascii')

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Region):
            return bytes(self) == bytes(other)
        if isinstance(other, str):
            return str(self) == other
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(str(self))

    def __repr__(self) -> str:
        if not self.valid:
            return '<ArenaStr (stale)>'
        return f'ArenaStr({str(self)!r})'


class Arena:
    def __init__(self, capacity: int) -> None:
        if capacity <= 0 or capacity % ALIGNMENT:
            raise ValueError(
                f'capacity must be a positive multiple of {ALIGNMENT}, '
                f'got {capacity}')
        self.capacity = capacity
        self.offset = 0
        self.generation = 0
        self._buf: bytearray | None = bytearray(capacity)

    @property
    def closed(self) -> bool:
        return self._buf is None

    @property
    def used(self) -> int:
        return self.offset

    @property
    def remaining(self) -> int:
        return self.capacity - self.offset

    def alloc(self, size: int) -> Region:
        """Cut `size` zeroed bytes off the arena.

        Raises `AllocatorExhausted` (leaving the arena untouched)
        when the aligned request does not fit.
        """
        if self._buf is None:
            raise ArenaStateError('arena already destroyed')
        if size < 0:
            raise ValueError(f'negative allocation size: {size}')
        start = align(self.offset)
        if start + size > self.capacity:
            raise AllocatorExhausted(size, self.capacity - start)
        self._buf[start:start + size] = bytes(size)
        # capacity is a multiple of 8, so the aligned end never passes it.
        self.offset = align(start + size)
        return Region(self, start, size, self.generation)

    def dup(self, data: bytes | bytearray | memoryview | str) -> ArenaStr:
        """Copy `data` into the arena."""
        if isinstance(data, str):
            data = data.encode('ascii')
        region = self.alloc(len(data))
        ret = ArenaStr(self, region.offset, region.size, region.generation)
        ret.write(data)
        return ret

    def own(self, text: 'ArenaStr | bytes | str') -> ArenaStr:
        """`text` itself if this arena already holds it, else a copy."""
        if isinstance(text, ArenaStr) and text.arena is self and text.valid:
            return text
        if isinstance(text, Region):
            text = bytes(text)
        return self.dup(text)

    def reset(self) -> None:
        """Rewind to zero. Every region handed out so far goes stale."""
        if self._buf is None:
            raise ArenaStateError('arena already destroyed')
        logging.debug('arena reset after %d/%d bytes',
                      self.offset, self.capacity)
        self.offset = 0
        self.generation += 1

    def destroy(self) -> None:
        if self._buf is None:
            return
        logging.debug('arena of %d bytes destroyed', self.capacity)
        self._buf = None
        self.offset = 0
        self.generation += 1

    def _view(self, region: Region) -> memoryview:
        if region.arena is not self:
            raise ArenaStateError('region belongs to another arena')
        if self._buf is None:
            raise ArenaStateError('arena already destroyed')
        if region.generation != self.generation:
            raise ArenaStateError('region used after arena reset')
        return memoryview(self._buf)[region.offset:region.offset + region.size]

    def _peek(self, offset: int, size: int) -> memoryview:
        """Raw view for structures that keep bare offsets (hash slots)."""
        if self._buf is None:
            raise ArenaStateError('arena already destroyed')
        return memoryview(self._buf)[offset:offset + size]

    def __repr__(self) -> str:
        return 'Arena { .cap = %d, .offset = %d }' % (
            self.capacity, self.offset)
