"""Correlation engine — pairs order submissions with completions in one pass.

The engine owns all pass state: the pending table (ClOrdID -> open
submission), the latency samples and the per-minute throughput buckets.
A fresh engine is created per run.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable

from fixmetrics.errors import ParseError
from fixmetrics.parser import MessageType, TimedEvent, parse_timed_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LatencySample:
    correlation_id: str
    duration_millis: int


class MatchStatus(Enum):
    SUBMITTED = "submitted"
    MATCHED = "matched"
    NO_PRIOR_SUBMISSION = "no_prior_submission"
    ALREADY_CONSUMED = "already_consumed"
    IGNORED = "ignored"


@dataclass(frozen=True)
class MatchResult:
    status: MatchStatus
    sample: LatencySample | None = None


@dataclass
class CorrelationResult:
    """Read-only hand-off from a finished pass to the aggregator."""

    samples: list[LatencySample] = field(default_factory=list)
    throughput: dict[datetime, int] = field(default_factory=dict)
    parse_errors: int = 0
    unmatched_submissions: int = 0


def truncate_to_minute(ts: datetime) -> datetime:
    return ts.replace(second=0, microsecond=0)


def duration_millis(start: datetime, end: datetime) -> int:
    """Whole milliseconds from start to end, truncated toward zero."""
    delta = end - start
    micros = (delta.days * 86_400 + delta.seconds) * 1_000_000 + delta.microseconds
    if micros >= 0:
        return micros // 1000
    return -(-micros // 1000)


class CorrelationEngine:
    """Single forward pass over FIX log lines.

    Submissions (35=D) open or overwrite a pending entry keyed by ClOrdID
    (tag 11) and count toward their minute's throughput. A completion
    (35=8) with a non-empty ClOrdID consumes the pending entry at most once
    and yields a latency sample. Everything else is ignored.

    Matched ClOrdIDs are remembered for the whole pass so a repeated
    completion reports ALREADY_CONSUMED rather than NO_PRIOR_SUBMISSION.
    """

    def __init__(self):
        self._pending: dict[str, datetime] = {}
        self._consumed: set[str] = set()
        self._samples: list[LatencySample] = []
        self._throughput: dict[datetime, int] = {}
        self.parse_errors = 0
        self.lines_seen = 0

    @property
    def pending(self) -> dict[str, datetime]:
        return dict(self._pending)

    @property
    def samples(self) -> list[LatencySample]:
        return list(self._samples)

    @property
    def throughput(self) -> dict[datetime, int]:
        return dict(self._throughput)

    def process_line(self, line: str) -> MatchResult | None:
        """Feed one raw line. Returns None when the line fails to parse."""
        self.lines_seen += 1
        try:
            event = parse_timed_event(line)
        except ParseError as e:
            self.parse_errors += 1
            logger.warning("Error parsing line %d: %s", self.lines_seen, e)
            return None
        return self.ingest(event)

    def ingest(self, event: TimedEvent) -> MatchResult:
        if event.message_type is MessageType.SUBMISSION:
            return self._submit(event)
        if event.message_type is MessageType.COMPLETION and event.correlation_id:
            return self._complete(event)
        return MatchResult(MatchStatus.IGNORED)

    def _submit(self, event: TimedEvent) -> MatchResult:
        # Last writer wins; an empty ClOrdID shares the "" slot.
        self._pending[event.correlation_id] = event.timestamp
        self._consumed.discard(event.correlation_id)

        minute = truncate_to_minute(event.timestamp)
        self._throughput[minute] = self._throughput.get(minute, 0) + 1
        return MatchResult(MatchStatus.SUBMITTED)

    def _complete(self, event: TimedEvent) -> MatchResult:
        cl_ord_id = event.correlation_id
        submitted_at = self._pending.pop(cl_ord_id, None)
        if submitted_at is None:
            if cl_ord_id in self._consumed:
                logger.debug("Repeated completion for %s dropped", cl_ord_id)
                return MatchResult(MatchStatus.ALREADY_CONSUMED)
            logger.debug("Completion for %s has no open submission", cl_ord_id)
            return MatchResult(MatchStatus.NO_PRIOR_SUBMISSION)

        self._consumed.add(cl_ord_id)
        sample = LatencySample(
            correlation_id=cl_ord_id,
            duration_millis=duration_millis(submitted_at, event.timestamp),
        )
        self._samples.append(sample)
        return MatchResult(MatchStatus.MATCHED, sample)

    def run(self, lines: Iterable[str]) -> CorrelationResult:
        """Consume every line and return the finished pass state."""
        for line in lines:
            self.process_line(line)
        return self.result()

    def result(self) -> CorrelationResult:
        # Orphaned submissions are dropped, only their count is kept for logging.
        return CorrelationResult(
            samples=self.samples,
            throughput=self.throughput,
            parse_errors=self.parse_errors,
            unmatched_submissions=len(self._pending),
        )


def correlate(lines: Iterable[str]) -> CorrelationResult:
    """Run a fresh CorrelationEngine over lines."""
    return CorrelationEngine().run(lines)
