"""Raw-record selection — coarse substring match feeding the JSON sink.

Independent of the correlation engine's tag-aware classification: a line
whose tag value merely contains "35=D" or "35=8" qualifies here, and the
two paths may disagree on which lines are messages.
"""

from typing import Iterable

from fixmetrics.parser import RawRecord, parse_raw_record
from fixmetrics.tokenizer import COMPLETION_MARKER, SUBMISSION_MARKER


def is_qualifying_line(line: str) -> bool:
    """True if the line contains a submission or completion marker anywhere."""
    return SUBMISSION_MARKER in line or COMPLETION_MARKER in line


def select_raw_records(lines: Iterable[str]) -> list[RawRecord]:
    """Return a RawRecord for every qualifying line, in input order."""
    return [parse_raw_record(line) for line in lines if is_qualifying_line(line)]
