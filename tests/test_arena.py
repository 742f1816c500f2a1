"""Arena allocator: alignment, zeroing, exhaustion, lifecycle."""
import pytest

from inip.arena import Arena, ArenaStr, align
from inip.errors import AllocatorExhausted, ArenaStateError

# ==========================================
# 1. Alignment
# ==========================================

def test_align():
    assert align(0) == 0
    assert align(1) == 8
    assert align(8) == 8
    assert align(9) == 16

def test_offsets_stay_aligned():
    arena = Arena(64)
    a = arena.alloc(3)
    b = arena.alloc(5)
    c = arena.alloc(8)
    assert (a.offset, b.offset, c.offset) == (0, 8, 16)
    assert arena.offset == 24
    assert arena.offset % 8 == 0

def test_zero_size_allocation():
    arena = Arena(8)
    arena.alloc(8)
    empty = arena.alloc(0)
    assert len(empty) == 0
    assert arena.remaining == 0

def test_capacity_must_be_aligned():
    with pytest.raises(ValueError):
        Arena(10)
    with pytest.raises(ValueError):
        Arena(0)

def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Arena(16).alloc(-1)

# ==========================================
# 2. Zeroing & exhaustion
# ==========================================

def test_regions_come_back_zeroed_after_reset():
    arena = Arena(16)
    arena.alloc(16).write(b'\xff' * 16)
    arena.reset()
    assert bytes(arena.alloc(16)) == bytes(16)

def test_exhaustion_leaves_state_untouched():
    arena = Arena(32)
    arena.alloc(20)
    with pytest.raises(AllocatorExhausted) as excinfo:
        arena.alloc(9)
    assert excinfo.value.requested == 9
    assert excinfo.value.available == 8
    assert excinfo.value.offset is None
    assert arena.offset == 24
    assert len(arena.alloc(8)) == 8

def test_write_past_region_end():
    region = Arena(16).alloc(4)
    with pytest.raises(ValueError):
        region.write(b'12345')

# ==========================================
# 3. Strings
# ==========================================

def test_dup_compares_like_str():
    arena = Arena(64)
    s = arena.dup('host')
    assert isinstance(s, ArenaStr)
    assert s == 'host'
    assert s == b'host'
    assert s == arena.dup(b'host')
    assert s != 'port'
    assert hash(s) == hash('host')
    assert {s: 1}['host'] == 1
    assert str(s) == 'host'

def test_own_reuses_live_strings():
    arena, other = Arena(64), Arena(64)
    s = arena.dup('key')
    assert arena.own(s) is s
    copied = other.own(s)
    assert copied is not s and copied == 'key'
    assert copied.arena is other

# ==========================================
# 4. Lifecycle
# ==========================================

def test_reset_invalidates_regions():
    arena = Arena(32)
    s = arena.dup('abc')
    arena.reset()
    assert arena.offset == 0
    assert not s.valid
    with pytest.raises(ArenaStateError):
        str(s)

def test_destroy():
    arena = Arena(32)
    s = arena.dup('abc')
    arena.destroy()
    assert arena.closed
    with pytest.raises(ArenaStateError):
        bytes(s)
    with pytest.raises(ArenaStateError):
        arena.alloc(1)
    arena.destroy()  # second call is harmless
