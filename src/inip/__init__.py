# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 17:20:55
# @Author : Kariko Lin

from .arena import Arena, ArenaStr, Region
from .errors import (
    AllocatorExhausted,
    ArenaStateError,
    IllegalToken,
    IniError,
    IoFailure,
    MalformedInput,
    TableOverflow,
)
from .formats import IniFileParser, JsonEntriesHandler, YamlEntriesHandler
from .model import Entry, IniDocument
from .parser import IniParser, from_records, parse
from .settings import Settings
from .table import HashTable

loads = parse


def load(path: str, settings: Settings | None = None) -> IniDocument:
    """Read and parse the INI file at `path`."""
    return IniFileParser(path, settings).read()


__all__ = [
    'load', 'loads', 'parse', 'from_records',
    'Arena', 'ArenaStr', 'Region', 'HashTable',
    'Entry', 'IniDocument', 'IniParser', 'Settings',
    'IniFileParser', 'JsonEntriesHandler', 'YamlEntriesHandler',
    'IniError', 'IoFailure', 'AllocatorExhausted', 'TableOverflow',
    'MalformedInput', 'IllegalToken', 'ArenaStateError',
]
