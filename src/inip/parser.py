# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 15:52:44
# @Author : Kariko Lin

"""Single-pass INI parser.

Supported, and nothing more:

    ```ini
    ; comment, must end with a newline
    key = value  ; pairs before any header go to section ''

    [section]
    key_2=value_2
    ```

Keys, values and section names are runs of ASCII letters,
digits and `_`.
"""

import logging
from collections.abc import Iterable, Mapping
from enum import Enum, auto

from .arena import Arena, ArenaStr, Region
from .consts import Mark
from .errors import (
    AllocatorExhausted,
    IllegalToken,
    MalformedInput,
    TableOverflow,
)
from .model import Entry, IniDocument
from .scanner import (
    advance,
    describe,
    is_ident_char,
    is_literal,
    read_literal,
    skip_to_end_of_line,
    skip_whitespace,
    start,
)
from .settings import Settings
from .table import HashTable


class Step(Enum):
    CONTINUE = auto()
    STOP = auto()


class IniParser:
    """Walks the cursor statement by statement.

    Each entry is appended to `self.entries` and, when a table is given,
    set into it as well (last write wins).
    """

    def __init__(
        self, source: Region | bytes,
        arena: Arena, table: HashTable | None = None
    ) -> None:
        self._arena = arena
        self._table = table
        self._cursor = start(
            source.view() if isinstance(source, Region) else source)
        self.section: ArenaStr = arena.dup(b'')
        self.entries: list[Entry] = []

    @property
    def position(self) -> int:
        return self._cursor.position

    def parse_next(self) -> Step:
        self._cursor = skip_whitespace(self._cursor)
        try:
            match self._cursor.ch:
                case Mark.LBRACKET:
                    self._section_header()
                case Mark.SEMICOLON:
                    self._cursor = skip_to_end_of_line(self._cursor)
                case Mark.EOF:
                    return Step.STOP
                case ch if is_ident_char(ch):
                    self._key_value()
                case ch:
                    raise IllegalToken(
                        f'illegal token {describe(ch)}', self.position)
        except (AllocatorExhausted, TableOverflow) as e:
            if e.offset is None:
                e.offset = self.position
            raise
        return Step.CONTINUE

    def run(self) -> list[Entry]:
        while self.parse_next() is Step.CONTINUE:
            pass
        return self.entries

    def _expect(self, mark: Mark, what: str) -> None:
        if self._cursor.ch != mark:
            raise MalformedInput(
                f'expected {what}, got {describe(self._cursor.ch)}',
                self.position)
        self._cursor = advance(self._cursor)

    def _section_header(self) -> None:
        self._cursor = advance(self._cursor)
        if not is_ident_char(self._cursor.ch):
            raise MalformedInput(
                f'invalid section name start {describe(self._cursor.ch)}',
                self.position)
        self._cursor, self.section = read_literal(self._cursor, self._arena)
        self._expect(Mark.RBRACKET, "']'")

    def _key_value(self) -> None:
        self._cursor, key = read_literal(self._cursor, self._arena)
        self._cursor = skip_whitespace(self._cursor)
        self._expect(Mark.ASSIGN, "'='")
        self._cursor = skip_whitespace(self._cursor)
        self._cursor, value = read_literal(self._cursor, self._arena)
        self._record(Entry(key, value, self.section))

    def _record(self, entry: Entry) -> None:
        if self._table is not None:
            self._table.set(entry.key, entry.value)
        self.entries.append(entry)


def parse(
    data: bytes | bytearray | memoryview | str,
    settings: Settings | None = None
) -> IniDocument:
    """Copy `data` into a fresh arena and parse it.

    On any error the arena is released and the error propagates.
    """
    if settings is None:
        settings = Settings()
    if isinstance(data, str):
        data = data.encode('utf-8')
    arena = Arena(settings.arena_capacity)
    try:
        source = arena.alloc(len(data))
        source.write(data)
        table = HashTable(arena, settings.table_capacity)
        parser = IniParser(source, arena, table)
        entries = parser.run()
    except BaseException:
        arena.destroy()
        raise
    logging.debug(
        'parsed %d entries (%d keys) using %d/%d arena bytes',
        len(entries), len(table), arena.used, arena.capacity)
    return IniDocument(arena, table, entries)


def from_records(
    records: Iterable[Mapping[str, str]],
    settings: Settings | None = None
) -> IniDocument:
    """Build a document from `{key, value, section}` mappings.

    Used to load exported entries back. The fields must be valid literals
    (keys non-empty), so the result can be written out as INI again.
    """
    if settings is None:
        settings = Settings()
    arena = Arena(settings.arena_capacity)
    entries: list[Entry] = []
    # one arena string per section name, shared like the parser does.
    sections: dict[str, ArenaStr] = {}
    try:
        table = HashTable(arena, settings.table_capacity)
        for idx, rec in enumerate(records):
            try:
                key = rec['key']
                value = rec.get('value', '')
                section = rec.get('section', '')
            except (AttributeError, KeyError, TypeError) as e:
                raise MalformedInput(f'record {idx}: bad record {rec!r}') from e
            for name, text, allow_empty in (
                ('key', key, False),
                ('value', value, True),
                ('section', section, True)
            ):
                if not isinstance(text, str) or not is_literal(
                        text, allow_empty):
                    raise MalformedInput(f'record {idx}: bad {name} {text!r}')
            if section not in sections:
                sections[section] = arena.dup(section)
            entry = Entry(arena.dup(key), arena.dup(value), sections[section])
            table.set(entry.key, entry.value)
            entries.append(entry)
    except BaseException:
        arena.destroy()
        raise
    return IniDocument(arena, table, entries)
