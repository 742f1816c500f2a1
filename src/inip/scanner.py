# -*- encoding: utf-8 -*-
# @File   : scanner.py
# @Time   : 2026/10/19 15:03:52
# @Author : Kariko Lin

"""Character cursor over the raw input.

Nothing here mutates: every function takes a `Cursor` and hands back
the moved one, so each step can be checked on its own.
"""

from typing import NamedTuple

from .arena import Arena, ArenaStr
from .consts import IDENT_CHARS, WHITESPACE, Mark
from .errors import MalformedInput


def is_ident_char(ch: int) -> bool:
    return ch in IDENT_CHARS


def is_whitespace(ch: int) -> bool:
    return ch in WHITESPACE


def is_literal(text: str, allow_empty: bool = False) -> bool:
    """Whether `text` would scan back as one whole literal."""
    if not text:
        return allow_empty
    return text.isascii() and all(
        is_ident_char(i) for i in text.encode('ascii'))


def describe(ch: int) -> str:
    return 'end of input' if ch == Mark.EOF else repr(chr(ch))


class Cursor(NamedTuple):
    data: memoryview | bytes
    position: int       # index of `ch`
    read_position: int  # next index to load
    ch: int             # byte at `position`, or Mark.EOF

    @property
    def at_end(self) -> bool:
        return self.ch == Mark.EOF


def start(data: memoryview | bytes) -> Cursor:
    return Cursor(data, 0, 1, data[0] if len(data) else Mark.EOF)


def advance(cur: Cursor) -> Cursor:
    if cur.ch == Mark.EOF and cur.position >= len(cur.data):
        return cur
    if cur.read_position >= len(cur.data):
        ch = Mark.EOF
    else:
        ch = cur.data[cur.read_position]
    return cur._replace(
        position=cur.read_position,
        read_position=cur.read_position + 1,
        ch=ch)


def read_literal(cur: Cursor, arena: Arena) -> tuple[Cursor, ArenaStr]:
    """Consume identifier characters and copy them into `arena`.

    May return an empty literal; callers check the first character.
    """
    begin = cur.position
    while is_ident_char(cur.ch):
        cur = advance(cur)
    return cur, arena.dup(cur.data[begin:cur.position])


def skip_whitespace(cur: Cursor) -> Cursor:
    while is_whitespace(cur.ch):
        cur = advance(cur)
    return cur


def skip_to_end_of_line(cur: Cursor) -> Cursor:
    """Stop on the next newline.

    A comment has to end with one: hitting the end of input first
    raises `MalformedInput`.
    """
    while cur.ch != Mark.NEWLINE:
        if cur.ch == Mark.EOF:
            raise MalformedInput('unterminated comment', cur.position)
        cur = advance(cur)
    return cur
