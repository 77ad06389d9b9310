class ChashStatisticError(Exception):
    """Base class for every fatal error raised while computing statistics."""


class MalformedAddressError(ChashStatisticError):
    """An upstream entry is not in a parseable host:port form."""

    def __init__(self, address, reason="missing port in address"):
        super().__init__(f"address {address}: {reason}")
        self.address = address
        self.reason = reason


class EmptyRingError(ChashStatisticError):
    """A lookup was attempted on a ring without hash points."""

    def __init__(self, msg="hash ring has no points"):
        super().__init__(msg)


class NoKeysProcessedError(ChashStatisticError):
    """Hit rates were requested before any hash key was processed."""

    def __init__(self, msg="no hash keys processed, hit rate is undefined"):
        super().__init__(msg)


class ConfigError(ChashStatisticError):
    pass


class InputFileError(ConfigError):
    def __init__(self, path, cause):
        super().__init__(f"cannot read {path}: {cause}")
        self.path = path
        self.cause = cause
