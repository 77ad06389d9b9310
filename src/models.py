from dataclasses import dataclass


@dataclass(frozen=True)
class Upstream:
    """One backend target, `address` in host:port form."""

    address: str
    weight: int = 1


@dataclass(frozen=True)
class HashPoint:
    """A single position on the ring and the upstream address owning it."""

    hash: int
    owner: str


@dataclass
class UpstreamStatistic:
    """
    Hit counter of one server.

    Created on the server's first hit and only ever incremented; `hit_rate`
    stays at 0.0 until the aggregator finalizes the pass.
    """

    server: str
    hit_count: int = 0
    hit_rate: float = 0.0

    def increment(self, n: int = 1):
        self.hit_count += n
