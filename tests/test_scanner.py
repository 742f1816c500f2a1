"""Scanner functions, one at a time."""
import pytest

from inip.arena import Arena
from inip.consts import Mark
from inip.errors import MalformedInput
from inip.scanner import (
    advance,
    is_ident_char,
    is_literal,
    read_literal,
    skip_to_end_of_line,
    skip_whitespace,
    start,
)


def test_start():
    cur = start(b'ab')
    assert (cur.position, cur.read_position, cur.ch) == (0, 1, ord('a'))
    assert start(b'').at_end

def test_advance_until_end():
    cur = advance(start(b'ab'))
    assert (cur.position, cur.read_position, cur.ch) == (1, 2, ord('b'))
    cur = advance(cur)
    assert cur.ch == Mark.EOF
    assert cur.position == 2
    # stays put at the end
    assert advance(cur) == cur

def test_cursor_is_not_mutated():
    cur = start(b'xy')
    advance(cur)
    assert cur.position == 0

def test_ident_chars():
    for ch in b'azAZ09_':
        assert is_ident_char(ch)
    for ch in b' =[];-.\n':
        assert not is_ident_char(ch)
    assert not is_ident_char(Mark.EOF)

def test_is_literal():
    assert is_literal('server_1')
    assert not is_literal('')
    assert is_literal('', allow_empty=True)
    assert not is_literal('a b')
    assert not is_literal('café')

def test_read_literal():
    arena = Arena(64)
    cur, lit = read_literal(start(b'host=x'), arena)
    assert lit == 'host'
    assert cur.ch == Mark.ASSIGN
    assert cur.position == 4

def test_read_literal_to_end():
    cur, lit = read_literal(start(b'30'), Arena(64))
    assert lit == '30'
    assert cur.at_end

def test_read_empty_literal():
    cur, lit = read_literal(start(b'=1'), Arena(64))
    assert lit == ''
    assert cur.position == 0

def test_skip_whitespace():
    cur = skip_whitespace(start(b' \t\r\n k'))
    assert cur.ch == ord('k')
    assert cur.position == 5

def test_skip_to_end_of_line_stops_on_newline():
    cur = skip_to_end_of_line(start(b'; note\nk=v'))
    assert cur.ch == Mark.NEWLINE
    assert cur.position == 6

def test_unterminated_comment():
    with pytest.raises(MalformedInput) as excinfo:
        skip_to_end_of_line(start(b'; no newline'))
    assert excinfo.value.offset == 12
