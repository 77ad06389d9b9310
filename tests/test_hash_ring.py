import pytest

from builder import build_all_points
from errors import EmptyRingError
from hash_ring import HashRing
from models import HashPoint, Upstream


def _ring():
    return HashRing.build([HashPoint(30, "c"), HashPoint(10, "a"), HashPoint(20, "b")])


def test_build_sorts_points():
    assert _ring().hashes == [10, 20, 30]


def test_build_collapses_duplicates_keeping_first():
    ring = HashRing.build([HashPoint(5, "x"), HashPoint(1, "z"), HashPoint(5, "y")])
    assert ring.hashes == [1, 5]
    assert ring.owner(1) == "x"


def test_search_is_lower_bound():
    ring = _ring()
    assert ring.search(0) == 0
    assert ring.search(10) == 0
    assert ring.search(11) == 1
    assert ring.search(30) == 2
    assert ring.search(31) == 3


def test_lookup_wraps_to_smallest_hash():
    ring = _ring()
    assert ring.owner(ring.search(0xFFFFFFFF)) == "a"
    assert ring.lookup(25) == "c"


def test_real_ring_is_strictly_increasing():
    ups = [Upstream("a.example.com:80", 2), Upstream("b.example.com:80", 1)]
    ring = HashRing.build(build_all_points(ups))
    assert all(x < y for x, y in zip(ring.hashes, ring.hashes[1:]))
    assert len(ring) <= 3 * 160
    assert {p.owner for p in ring.points} == {"a.example.com:80", "b.example.com:80"}


def test_empty_ring_rejects_lookups():
    ring = HashRing.build([])
    assert len(ring) == 0
    with pytest.raises(EmptyRingError):
        ring.search(1)
    with pytest.raises(EmptyRingError):
        ring.owner(0)
