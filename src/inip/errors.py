# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/19 14:02:11
# @Author : Kariko Lin

"""Exception hierarchy of `inip`.

Every error is raised where it is detected and left to the caller.
`offset` is the input byte offset when the error came out of a scan,
otherwise `None`. For files that `IniFileParser` had to transcode
(UTF-16, BOM, ...) it counts bytes of the UTF-8 text that was scanned,
not of the file on disk.
"""


class IniError(Exception):
    """Base class for all inip errors."""
    tag = 'IniError'
    exit_code = 1

    def __init__(self, msg: str = '', offset: int | None = None) -> None:
        super().__init__(msg)
        self.msg = msg
        self.offset = offset

    def __str__(self) -> str:
        if self.offset is None:
            return self.msg
        return f'{self.msg} (at byte {self.offset})'


class IoFailure(IniError):
    """File could not be opened or read."""
    tag = 'IoFailure'
    exit_code = 4


class AllocatorExhausted(IniError):
    """Arena capacity exceeded."""
    tag = 'AllocatorExhausted'
    exit_code = 5

    def __init__(self, requested: int = 0, available: int = 0,
                 offset: int | None = None) -> None:
        super().__init__(
            f'arena exhausted: requested {requested} bytes, '
            f'{available} available', offset)
        self.requested = requested
        self.available = available


class TableOverflow(IniError):
    """Hash table reached its load factor ceiling.

    The table never grows, so this is a hard limit on the number of
    distinct keys: `capacity // 2`.
    """
    tag = 'TableOverflow'
    exit_code = 6

    def __init__(self, capacity: int = 0, offset: int | None = None) -> None:
        super().__init__(
            f'hash table full: at most {capacity // 2} keys '
            f'fit a table of capacity {capacity}', offset)
        self.capacity = capacity


class MalformedInput(IniError):
    """Input does not follow the INI grammar."""
    tag = 'MalformedInput'
    exit_code = 3


class IllegalToken(MalformedInput):
    """Unexpected character at the start of a statement."""
    pass


class ArenaStateError(IniError):
    """Region touched after its arena was reset or destroyed."""
    tag = 'ArenaState'
