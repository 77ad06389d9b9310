from crc32 import crc32_final, crc32_init, crc32_update, final_to_bytes
from errors import MalformedAddressError
from logger import QUIET
from models import HashPoint

# Ring points generated per unit of upstream weight.
POINTS_PER_WEIGHT = 160
PREV_HASH_SIZE = 4


def split_host_port(address: str):
    """
    Splits `host:port` or `[ipv6-host]:port` into its host and port parts.

    Returns:
        A (host, port) tuple of strings; the port may be empty.
    """
    if address.startswith("["):
        end = address.find("]")
        if end < 0:
            raise MalformedAddressError(address, "missing ']' in address")
        if end + 1 == len(address):
            raise MalformedAddressError(address)
        if address[end + 1] != ":":
            raise MalformedAddressError(address, "unexpected text after ']'")
        host, port = address[1:end], address[end + 2 :]
        if "[" in host or "]" in host:
            raise MalformedAddressError(address, "unexpected bracket in host")
    else:
        sep = address.rfind(":")
        if sep < 0:
            raise MalformedAddressError(address)
        host, port = address[:sep], address[sep + 1 :]
        if ":" in host:
            raise MalformedAddressError(address, "too many colons in address")
        if "[" in host or "]" in host:
            raise MalformedAddressError(address, "unexpected bracket in host")
    if "[" in port or "]" in port:
        raise MalformedAddressError(address, "unexpected bracket in port")
    return host, port


def base_hash(host: str, port: str) -> int:
    """Running (unfinalized) CRC32 of host, a NUL terminator and port."""
    crc = crc32_init()
    host_bytes = host.encode("utf-8")
    crc = crc32_update(crc, host_bytes, len(host_bytes))
    crc = crc32_update(crc, b"", 1)
    port_bytes = port.encode("utf-8")
    return crc32_update(crc, port_bytes, len(port_bytes))


def build_points(upstream, log=QUIET):
    """
    Generates the ring points of one upstream.

    Every point hashes the base hash together with the previous point's
    bytes, the first point with an empty previous hash.

    Returns:
        POINTS_PER_WEIGHT * weight points, in generation order.
    """
    host, port = split_host_port(upstream.address)
    seed = base_hash(host, port)

    count = POINTS_PER_WEIGHT * upstream.weight
    points = []
    prev = b""
    for _ in range(count):
        h = crc32_final(crc32_update(seed, prev, PREV_HASH_SIZE))
        points.append(HashPoint(h, upstream.address))
        log.log_line(f"hash: {h:<10d} server: {upstream.address:<15s}")
        prev = final_to_bytes(h, PREV_HASH_SIZE)
    return points


def build_all_points(upstreams, log=QUIET):
    """Concatenates the points of every upstream, in input order."""
    points = []
    for up in upstreams:
        points.extend(build_points(up, log))
    return points
