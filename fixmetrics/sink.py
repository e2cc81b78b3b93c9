"""Output artifacts — raw-record JSON and the plain-text metrics report.

Both are written to a temp file in the target directory and moved into
place with os.replace, so a failed write never clobbers a previous run.
"""

import json
import logging
import os
import tempfile

from fixmetrics.aggregator import MetricsReport, format_report_text
from fixmetrics.errors import SinkError
from fixmetrics.parser import RawRecord

logger = logging.getLogger(__name__)


def _atomic_write(target: str, content: str):
    directory = os.path.dirname(target) or "."
    try:
        os.makedirs(directory, exist_ok=True)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    except OSError as e:
        raise SinkError(f"Error creating output file {target}: {e}") from e

    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, target)
    except OSError as e:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise SinkError(f"Error writing to output file {target}: {e}") from e


def records_to_json(records: list[RawRecord]) -> str:
    try:
        return json.dumps([r.to_dict() for r in records], indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SinkError(f"Error converting to JSON: {e}") from e


def write_raw_records(records: list[RawRecord], path: str):
    """Serialize records as a JSON array to path, replacing any prior file."""
    _atomic_write(path, records_to_json(records))
    logger.info("Raw data saved to %s (%d records)", path, len(records))


def write_metrics_report(report: MetricsReport, path: str):
    """Write the text report to path, replacing any prior report."""
    _atomic_write(path, format_report_text(report))
    logger.info("Metrics report saved to %s", path)
