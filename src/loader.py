from builder import split_host_port
from errors import InputFileError, MalformedAddressError
from logger import Logger
from models import Upstream


def _content_lines(text: str):
    """Yields non-blank lines that do not start with '#'."""
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if not line or line.startswith("#"):
            continue
        yield line


def _parse_weight(raw: str, address: str) -> int:
    log = Logger.get_logger("loader")
    try:
        weight = int(raw.strip())
    except ValueError:
        log.warning("server %s: unparsable weight %r, using 1", address, raw)
        return 1
    if weight < 1:
        log.warning("server %s: non-positive weight %d, using 1", address, weight)
        return 1
    return weight


def parse_upstreams(text: str):
    """
    Parses an upstream list, one `address` or `address,weight` per line.

    Returns:
        The upstreams in file order.
    """
    upstreams = []
    for line in _content_lines(text):
        fields = line.split(",")
        if len(fields) > 2:
            raise MalformedAddressError(line, "expected 'address' or 'address,weight'")
        address = fields[0]
        split_host_port(address)
        weight = _parse_weight(fields[1], address) if len(fields) == 2 else 1
        upstreams.append(Upstream(address, weight))
    return upstreams


def parse_hash_keys(text: str):
    return list(_content_lines(text))


def _read_text(path, errors="strict"):
    """
    Reads `path` as raw bytes and decodes it as UTF-8.

    No newline translation happens, so only "\\n" separates lines. With
    errors="surrogateescape" undecodable bytes survive and re-encode to the
    exact bytes of the file.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
        return data.decode("utf-8", errors)
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(path, e) from e


def read_upstreams(path):
    return parse_upstreams(_read_text(path))


def read_hash_keys(path):
    """Keys are hashed byte for byte, whatever their encoding."""
    return parse_hash_keys(_read_text(path, errors="surrogateescape"))
