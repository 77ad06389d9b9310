from dataclasses import dataclass
import os
from typing import Optional

from errors import ConfigError

VERSION = "1.0"
SORT_KEYS = ("server", "hitCount")


@dataclass(frozen=True)
class ChashConfig:
    """
    Run configuration, built once at startup and passed into the pipeline.

    Attributes:
        upstreams_file: Upstream list, one `address[,weight]` per line.
        hashkeys_file: Hash key list, one raw key per line.
        verbose: Log every upstream, ring point and key match.
        sort_key: Output order of the statistics, "server" or "hitCount".
        log_file: Optional file receiving a plain copy of the log output.
    Derived attributes:
        input_files: Both input paths, in the order they are checked.
    """

    upstreams_file: str = "upstreams.list"
    hashkeys_file: str = "hashkeys.list"
    verbose: bool = False
    sort_key: str = "server"
    log_file: Optional[str] = None

    @property
    def input_files(self):
        return (self.upstreams_file, self.hashkeys_file)

    def validate(self):
        for path in self.input_files:
            if not os.path.exists(path):
                raise ConfigError(f"stat {path}: no such file or directory")
            if not os.path.isfile(path):
                raise ConfigError(f"{path}: not a regular file")
        if self.sort_key not in SORT_KEYS:
            raise ConfigError(f"SortKey: {self.sort_key} not a valid SortKey")
        return self
