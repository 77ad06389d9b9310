import os
import sys
import logging
from colorama import Fore, Style, init

from crc32 import crc32_long

init(autoreset=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ConsoleHandler(logging.StreamHandler):
    """Writes to whatever sys.stdout / sys.stderr is current at emit time."""

    def __init__(self, stream_name="stderr"):
        self.stream_name = stream_name
        super().__init__()

    @property
    def stream(self):
        return getattr(sys, self.stream_name)

    @stream.setter
    def stream(self, value):
        pass


class Logger:
    _loggers = {}
    _colors = [
        Fore.BLUE,
        Fore.GREEN,
        Fore.CYAN,
        Fore.MAGENTA,
        Fore.YELLOW,
        Fore.RED,
        Fore.WHITE,
    ]

    @staticmethod
    def _color_for_name(name: str) -> str:
        # builtin hash() is salted per process, crc32 keeps colors stable
        idx = crc32_long(name) % len(Logger._colors)
        return Logger._colors[idx]

    @staticmethod
    def _attach_file(logger, log_file):
        path = os.path.abspath(log_file)
        for h in logger.handlers:
            if isinstance(h, logging.FileHandler) and h.baseFilename == path:
                return
        log_dir = os.path.dirname(path)
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(path)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(file_handler)

    @staticmethod
    def get_logger(log_name: str, log_file=None, level=logging.INFO, plain=False):
        """
        Returns the cached logger for `log_name`, creating it on first use.
        A `log_file` given on a later call is attached to the cached logger.

        Plain loggers print bare messages on stdout, next to the banners and
        the report; the others print colored, timestamped records on stderr.
        """
        if log_name in Logger._loggers:
            logger = Logger._loggers[log_name]
            if log_file:
                Logger._attach_file(logger, log_file)
            return logger

        logger = logging.getLogger(log_name)
        logger.setLevel(level)
        logger.propagate = False

        if log_file:
            Logger._attach_file(logger, log_file)

        if plain:
            console_handler = ConsoleHandler("stdout")
            console_formatter = logging.Formatter("%(message)s")
        else:
            color = Logger._color_for_name(log_name)
            console_handler = ConsoleHandler("stderr")
            console_formatter = logging.Formatter(f"{color}{LOG_FORMAT}{Style.RESET_ALL}")
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

        Logger._loggers[log_name] = logger
        return logger


class VerboseLog:
    """
    Line logger for verbose output.

    Whether anything is emitted is fixed by `enabled` when the instance is
    built, so callers never have to check the verbose flag themselves.
    """

    def __init__(self, logger, enabled: bool):
        self.logger = logger
        self.enabled = enabled

    def log_line(self, line: str):
        if self.enabled:
            self.logger.info(line)

    def log_lines(self, lines):
        if not self.enabled:
            return
        for line in lines:
            self.logger.info(line)


QUIET = VerboseLog(logging.getLogger("chash.quiet"), enabled=False)
