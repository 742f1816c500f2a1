# -*- encoding: utf-8 -*-
# @File   : settings.py
# @Time   : 2026/10/19 14:10:37
# @Author : Kariko Lin

import codecs
from dataclasses import dataclass

DEFAULT_ARENA_CAPACITY = 64 * 1024
DEFAULT_TABLE_CAPACITY = 64


@dataclass(kw_only=True, frozen=True)
class Settings:
    """Knobs for one parse.

    `table_capacity` is the hard ceiling of the hash table:
    at most half of it may hold keys.
    `encoding=None` lets `IniFileParser` guess with chardet,
    trusting the guess only above `min_confidence`.
    """
    arena_capacity: int = DEFAULT_ARENA_CAPACITY
    table_capacity: int = DEFAULT_TABLE_CAPACITY
    encoding: str | None = None
    min_confidence: float = 0.8

    def __post_init__(self) -> None:
        if self.arena_capacity <= 0 or self.arena_capacity % 8:
            raise ValueError(
                f'arena_capacity must be a positive multiple of 8, '
                f'got {self.arena_capacity}')
        cap = self.table_capacity
        if cap < 2 or cap & (cap - 1):
            raise ValueError(
                f'table_capacity must be a power of two, got {cap}')
        if not 0.0 <= self.min_confidence <= 1.0:
            raise ValueError('min_confidence must be within [0, 1]')
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError as e:
                raise ValueError(f'unknown encoding: {self.encoding}') from e
