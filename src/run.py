import argparse
import sys

from config import SORT_KEYS, VERSION, ChashConfig
from errors import ChashStatisticError, ConfigError
from hit_stats import hit_statistics
from loader import read_hash_keys, read_upstreams
from logger import Logger, VerboseLog
from report import VERBOSE_BEGIN, VERBOSE_END, format_report


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="nginx-chash-statistic",
        description="Predict how nginx consistent hashing spreads keys over upstreams.",
    )
    p.add_argument("--upstreams-file", default="upstreams.list",
                   help='File format: per line per upstream, Line Format: "server_name,weight"')
    p.add_argument("--hashkeys-file", default="hashkeys.list", help="File format: per hashKey per line")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    p.add_argument("--version", action="version", version=f"Version: {VERSION}",
                   help="Show version then exit")
    p.add_argument("--output-sort-key", default="server",
                   help=f"Output Sort Key: {list(SORT_KEYS)}")
    p.add_argument("--log-file", default=None, help="Also write log output to this file")
    return p, p.parse_args(argv)


def main(argv=None) -> int:
    parser, args = parse_args(argv)
    cfg = ChashConfig(
        upstreams_file=args.upstreams_file,
        hashkeys_file=args.hashkeys_file,
        verbose=args.verbose,
        sort_key=args.output_sort_key,
        log_file=args.log_file,
    )
    try:
        cfg.validate()
    except ConfigError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1

    logger = Logger.get_logger("chash-statistic", log_file=cfg.log_file)
    verbose = VerboseLog(
        Logger.get_logger("chash-verbose", log_file=cfg.log_file, plain=True), cfg.verbose
    )

    try:
        verbose.log_line(VERBOSE_BEGIN)
        upstreams = read_upstreams(cfg.upstreams_file)
        keys = read_hash_keys(cfg.hashkeys_file)
        stats = hit_statistics(upstreams, keys, cfg.sort_key, verbose)
        verbose.log_line(VERBOSE_END)
    except ChashStatisticError as e:
        logger.error(f"[SYSTEM] Statistic run failed: {e}")
        return 1

    for line in format_report(stats):
        print(line)
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
