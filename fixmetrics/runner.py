"""Invocation contract — one call reads the log and writes both artifacts."""

import logging
import os
from typing import Iterator

from fixmetrics.aggregator import MetricsReport, aggregate
from fixmetrics.config import Config
from fixmetrics.correlator import CorrelationEngine
from fixmetrics.errors import EnvironmentSetupError
from fixmetrics.parser import RawRecord
from fixmetrics.selection import select_raw_records
from fixmetrics.sink import write_metrics_report, write_raw_records

logger = logging.getLogger(__name__)


def resolve_path(path: str) -> str:
    """Resolve a relative path against the current working directory."""
    if os.path.isabs(path):
        return path
    try:
        cwd = os.getcwd()
    except OSError as e:
        raise EnvironmentSetupError(f"Error getting working directory: {e}") from e
    return os.path.join(cwd, path)


def read_lines(filepath: str) -> Iterator[str]:
    """Yield each line of filepath without its line terminator.

    Only "\\n" ends a line; a bare "\\r" inside a message stays in the line.
    """
    try:
        with open(filepath, "r", encoding="utf-8", errors="replace", newline="\n") as f:
            for line in f:
                yield line.rstrip("\r\n")
    except OSError as e:
        raise EnvironmentSetupError(f"Error reading log file {filepath}: {e}") from e


def collect_raw_records(log_path: str) -> list[RawRecord]:
    return select_raw_records(read_lines(log_path))


def compute_metrics(log_path: str) -> MetricsReport:
    engine = CorrelationEngine()
    result = engine.run(read_lines(log_path))
    logger.info(
        "Correlated %d lines: %d latency samples, %d minute buckets, "
        "%d parse errors, %d unmatched submissions",
        engine.lines_seen,
        len(result.samples),
        len(result.throughput),
        result.parse_errors,
        result.unmatched_submissions,
    )
    return aggregate(result)


def execute(config: Config) -> MetricsReport:
    """Select raw records, correlate, aggregate, and write both artifacts.

    Raises EnvironmentSetupError or SinkError on fatal failures. Per-line
    parse errors are logged and skipped.
    """
    log_path = resolve_path(config.log_file)
    raw_path = resolve_path(config.raw_output_file)
    metrics_path = resolve_path(config.metrics_output_file)
    logger.info("Processing FIX log: %s", log_path)

    records = collect_raw_records(log_path)
    write_raw_records(records, raw_path)

    report = compute_metrics(log_path)
    write_metrics_report(report, metrics_path)
    return report
