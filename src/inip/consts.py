# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/10/19 14:12:05
# @Author : Kariko Lin

from enum import Enum
from string import ascii_letters, digits


class Mark(int, Enum):
    """Bytes the parser dispatches on."""
    EOF = -1  # never a byte value
    LBRACKET = ord('[')
    RBRACKET = ord(']')
    SEMICOLON = ord(';')
    ASSIGN = ord('=')
    NEWLINE = ord('\n')


WHITESPACE = frozenset(b' \t\r\n')
IDENT_CHARS = frozenset((ascii_letters + digits + '_').encode('ascii'))
