"""fix-log-metrics — order latency and throughput from a FIX message log."""

import logging
import sys
from argparse import ArgumentParser

from fixmetrics.config import LOG_LEVELS, load_config, load_yaml_config
from fixmetrics.errors import FixMetricsError
from fixmetrics.runner import execute

logger = logging.getLogger(__name__)


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="fix-log-metrics",
        description="Compute order round-trip latency and per-minute throughput from a FIX log.",
    )
    parser.add_argument(
        "log_file",
        nargs="?",
        help="FIX message log to process (default: from config)",
    )
    parser.add_argument(
        "--config",
        help="Optional YAML config file",
    )
    parser.add_argument(
        "--raw-output",
        dest="raw_output_file",
        help="Where to write the raw-record JSON",
    )
    parser.add_argument(
        "--metrics-output",
        dest="metrics_output_file",
        help="Where to write the text metrics report",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Diagnostic log level (default: INFO)",
    )
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level or "INFO",
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )

    yaml_data = load_yaml_config(args.config)
    try:
        config = load_config(yaml_data, overrides=vars(args))
    except ValueError as e:
        parser.error(str(e))

    # The level may come from the YAML file or the environment.
    logging.getLogger().setLevel(config.log_level)

    try:
        execute(config)
    except FixMetricsError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
