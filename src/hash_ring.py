from bisect import bisect_left

from errors import EmptyRingError


class HashRing:
    """
    Sorted, deduplicated ring of hash points.
    Positions are 32-bit hashes; lookups walk clockwise and wrap past the
    largest hash back to the smallest one.
    """

    def __init__(self, points=()):
        self.points = tuple(points)
        self.hashes = [p.hash for p in self.points]

    @classmethod
    def build(cls, points):
        """
        Sorts points by hash and keeps only the first point of every run of
        equal hashes.
        """
        ordered = sorted(points, key=lambda p: p.hash)
        unique = []
        for p in ordered:
            if unique and unique[-1].hash == p.hash:
                continue
            unique.append(p)
        return cls(unique)

    def __len__(self):
        return len(self.points)

    def _check_not_empty(self):
        if not self.points:
            raise EmptyRingError()

    def search(self, hv: int) -> int:
        """Index of the first point whose hash is >= hv, or len(ring)."""
        self._check_not_empty()
        return bisect_left(self.hashes, hv)

    def owner(self, index: int) -> str:
        """Server owning the point at `index`, wrapping around the ring."""
        self._check_not_empty()
        return self.points[index % len(self.points)].owner

    def lookup(self, hv: int) -> str:
        """Returns the server clockwise to the given hash."""
        return self.owner(self.search(hv))
