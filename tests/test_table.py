"""Fixed-capacity hash table."""
import pytest

from inip.arena import Arena
from inip.errors import TableOverflow
from inip.table import HashTable, fnv1a


def make_table(capacity=8, arena_size=4096):
    return HashTable(Arena(arena_size), capacity)


def colliding_keys(capacity, count):
    """Keys that all share one home slot."""
    home = fnv1a(b'k0') & (capacity - 1)
    ret, i = [], 0
    while len(ret) < count:
        key = f'k{i}'
        if fnv1a(key.encode()) & (capacity - 1) == home:
            ret.append(key)
        i += 1
    return ret

# ==========================================
# 1. FNV-1a
# ==========================================

def test_fnv1a_reference_values():
    assert fnv1a(b'') == 0xcbf29ce484222325
    assert fnv1a(b'a') == 0xaf63dc4c8601ec8c
    assert fnv1a(b'foobar') == 0x85944171f73967e8

# ==========================================
# 2. set / get
# ==========================================

def test_set_and_get():
    table = make_table()
    owned = table.set('host', 'localhost')
    assert owned == 'host'
    assert owned.arena is table._arena
    assert table.get('host') == 'localhost'
    assert table['host'] == 'localhost'
    assert len(table) == 1

def test_missing_key():
    table = make_table()
    table.set('a', 1)
    assert table.get('b') is None
    assert table.get('b', 'x') == 'x'
    assert 'b' not in table
    with pytest.raises(KeyError):
        table['b']

def test_update_in_place_returns_existing_key():
    table = make_table()
    first = table.set('port', '80')
    second = table.set(b'port', '8080')
    assert first.offset == second.offset
    assert table.get('port') == '8080'
    assert len(table) == 1

def test_values_are_not_copied():
    table = make_table()
    value = object()
    table.set('obj', value)
    assert table.get('obj') is value

def test_lookup_does_not_mutate():
    table = make_table()
    table.set('k', 'v')
    before = bytes(table._slots)
    for _ in range(3):
        assert table.get('k') == 'v'
        assert table.get('missing') is None
    assert bytes(table._slots) == before
    assert len(table) == 1

def test_collisions_probe_linearly():
    keys = colliding_keys(8, 4)
    table = make_table(8)
    for n, key in enumerate(keys):
        table.set(key, n)
    for n, key in enumerate(keys):
        assert table.get(key) == n
    assert colliding_keys(8, 5)[-1] not in table

def test_iteration_in_slot_order():
    table = make_table(16)
    for key in ('a', 'b', 'c'):
        table.set(key, key.upper())
    assert sorted(str(k) for k in table) == ['a', 'b', 'c']
    assert dict((str(k), v) for k, v in table.items()) == {
        'a': 'A', 'b': 'B', 'c': 'C'}

# ==========================================
# 3. Capacity ceiling
# ==========================================

def test_overflow_at_half_capacity():
    table = make_table(8)
    for i in range(4):
        table.set(f'key{i}', i)
    assert table.load_factor == 0.5
    with pytest.raises(TableOverflow) as excinfo:
        table.set('key4', 4)
    assert excinfo.value.capacity == 8
    assert len(table) == 4
    # overwriting still works when full
    table.set('key0', 'again')
    assert table.get('key0') == 'again'

def test_capacity_must_be_power_of_two():
    with pytest.raises(ValueError):
        make_table(12)
    with pytest.raises(ValueError):
        make_table(1)

def test_slots_come_from_the_arena():
    arena = Arena(4096)
    HashTable(arena, 64)
    assert arena.used == 64 * 16

def test_non_ascii_keys_rejected():
    table = make_table()
    with pytest.raises(ValueError):
        table.set('é', 1)
    with pytest.raises(ValueError):
        table.set(b'\xc3\xa9', 1)
    assert len(table) == 0
    assert table.get('é') is None
    assert 'é' not in table
    table.set('ok', 1)
    assert [str(k) for k in table] == ['ok']
