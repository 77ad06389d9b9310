from crc32 import crc32_long
from builder import build_all_points
from config import SORT_KEYS
from errors import ConfigError, NoKeysProcessedError
from hash_ring import HashRing
from logger import QUIET
from models import UpstreamStatistic


def check_sort_key(sort_key):
    if sort_key not in SORT_KEYS:
        raise ConfigError(f"SortKey: {sort_key} not a valid SortKey, expected one of {SORT_KEYS}")


def sort_statistics(stats, sort_key="server"):
    """
    Orders statistics by server address or by ascending hit count.
    Equal hit counts fall back to the address so reports are reproducible.
    """
    check_sort_key(sort_key)
    if sort_key == "hitCount":
        return sorted(stats, key=lambda s: (s.hit_count, s.server))
    return sorted(stats, key=lambda s: s.server)


class StatisticAggregator:
    """
    Routes hash keys through a ring and tallies hits per server.

    - Only servers with at least one hit get a statistic.
    - Hit rates are computed once, after the last key, against the number of
      keys recorded.
    """

    def __init__(self, ring, log=QUIET):
        self.ring = ring
        self.log = log
        self.total = 0
        self._stats = {}

    def record(self, key) -> str:
        data = key if isinstance(key, bytes) else key.encode("utf-8", "surrogateescape")
        hv = crc32_long(data, len(data))
        server = self.ring.lookup(hv)
        shown = data.decode("utf-8", "backslashreplace")
        self.log.log_line(f"Match HashKey: {shown:<15s} Hash: {hv:<10d} Server: {server:<15s}")

        stat = self._stats.get(server)
        if stat is None:
            stat = UpstreamStatistic(server)
            self._stats[server] = stat
        stat.increment()
        self.total += 1
        return server

    def finalize(self):
        if self.total == 0:
            raise NoKeysProcessedError()
        for stat in self._stats.values():
            stat.hit_rate = stat.hit_count / self.total
        return list(self._stats.values())

    def run(self, keys, sort_key="server"):
        check_sort_key(sort_key)
        for key in keys:
            self.record(key)
        return sort_statistics(self.finalize(), sort_key)


def hit_statistics(upstreams, keys, sort_key="server", log=QUIET):
    """
    Builds the ring for `upstreams` and routes every key through it.

    Returns:
        The per-server statistics, ordered by `sort_key`.
    """
    log.log_lines(f"server: {up.address:<15s} weight: {up.weight:3d}" for up in upstreams)
    ring = HashRing.build(build_all_points(upstreams, log))
    return StatisticAggregator(ring, log).run(keys, sort_key)
