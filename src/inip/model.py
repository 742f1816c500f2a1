# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 15:30:20
# @Author : Kariko Lin

"""Parse results.

The table is flat: a key assigned again under a later section
replaces the earlier value, the section is only kept on the `Entry`.
Use `IniDocument.sections()` for a per-section view.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import NamedTuple

from .arena import Arena, ArenaStr
from .table import HashTable, Key


class Entry(NamedTuple):
    key: ArenaStr
    value: ArenaStr
    # shared by all entries under one header, owned by the arena.
    section: ArenaStr


class IniDocument(Mapping[str, ArenaStr]):
    """Hash table and ordered entry list from one parse.

    Everything in here lives in `self.arena`; after `close()`
    any access to keys, values or entries raises `ArenaStateError`.
    """

    def __init__(
        self, arena: Arena, table: HashTable, entries: Sequence[Entry]
    ) -> None:
        self._arena = arena
        self._table = table
        self._entries = tuple(entries)

    @property
    def arena(self) -> Arena:
        return self._arena

    @property
    def table(self) -> HashTable:
        return self._table

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Entries in the order they appear, duplicates included."""
        return self._entries

    def __getitem__(self, key: Key) -> ArenaStr:
        return self._table[key]  # type: ignore[return-value]

    def get(self, key: Key, default: object = None) -> object:
        return self._table.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[ArenaStr]:
        return iter(self._table)

    def to_dict(self) -> dict[str, str]:
        """Flat pairs, last write wins, keys in first-seen order."""
        return {str(i.key): str(i.value) for i in self._entries}

    def sections(self) -> dict[str, dict[str, str]]:
        """Pairs grouped by section (`''` for those before any header).

        Unlike the flat lookup, a key only shadows itself
        within the same section.
        """
        ret: dict[str, dict[str, str]] = {}
        for i in self._entries:
            ret.setdefault(str(i.section), {})[str(i.key)] = str(i.value)
        return ret

    def section(self, name: str) -> dict[str, str]:
        ret = self.sections()
        if name not in ret:
            raise KeyError(name)
        return ret[name]

    def close(self) -> None:
        self._arena.destroy()

    def __enter__(self) -> 'IniDocument':
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return 'IniDocument { .len = %d, .entries = %d }' % (
            len(self._table), len(self._entries))
