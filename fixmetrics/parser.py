"""Field extraction — raw records for the JSON sink, timed events for correlation."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Iterable

from fixmetrics.errors import ParseError
from fixmetrics.tokenizer import SOH, split_on_soh, split_on_space, split_tag_value

TIMESTAMP_WIDTH = 26
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S.%f"

# strptime alone would accept single-digit months and short fractions.
TIMESTAMP_PATTERN = re.compile(r"^\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}\.\d{6}$", re.ASCII)

MSG_TYPE_TAG = "35"
CL_ORD_ID_TAG = "11"


class MessageType(Enum):
    SUBMISSION = "D"
    COMPLETION = "8"
    OTHER = ""

    @classmethod
    def from_tag(cls, value: str) -> "MessageType":
        if value == cls.SUBMISSION.value:
            return cls.SUBMISSION
        if value == cls.COMPLETION.value:
            return cls.COMPLETION
        return cls.OTHER


@dataclass(frozen=True)
class RawRecord:
    message_type: str
    timestamp: str
    fields: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "message_type": self.message_type,
            "timestamp": self.timestamp,
            "fields": dict(self.fields),
        }


@dataclass(frozen=True)
class TimedEvent:
    timestamp: datetime
    message_type: MessageType
    correlation_id: str = ""


def extract_fields(tokens: Iterable[str]) -> dict[str, str]:
    """Map tag -> value for every token containing '='. Later tags win."""
    fields = {}
    for token in tokens:
        pair = split_tag_value(token)
        if pair is not None:
            tag, value = pair
            fields[tag] = value
    return fields


def parse_raw_record(line: str) -> RawRecord:
    """Build a RawRecord from the space-delimited view of a line.

    The timestamp is the second token verbatim and the message type is the
    third token up to the first SOH. Lines with fewer than three tokens
    produce an empty record.
    """
    parts = split_on_space(line.rstrip("\r\n"))
    if len(parts) <= 2:
        return RawRecord(message_type="", timestamp="")

    return RawRecord(
        message_type=parts[2].split(SOH)[0],
        timestamp=parts[1],
        fields=extract_fields(parts),
    )


def parse_timestamp(line: str) -> datetime:
    """Parse the fixed-width 'YYYY/MM/DD HH:MM:SS.ffffff' prefix of a line."""
    if len(line) < TIMESTAMP_WIDTH:
        raise ParseError(
            f"Line too short for timestamp: need {TIMESTAMP_WIDTH} chars, got {len(line)}"
        )
    prefix = line[:TIMESTAMP_WIDTH]
    if not TIMESTAMP_PATTERN.match(prefix):
        raise ParseError(f"Malformed timestamp prefix: {prefix!r}")
    try:
        return datetime.strptime(prefix, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise ParseError(f"Invalid timestamp {prefix!r}: {exc}") from exc


def parse_timed_event(line: str) -> TimedEvent:
    """Extract a TimedEvent from the SOH-delimited view of a line.

    Raises ParseError when the timestamp prefix is missing or malformed.
    """
    stripped = line.rstrip("\r\n")
    timestamp = parse_timestamp(stripped)
    fields = extract_fields(split_on_soh(stripped))
    return TimedEvent(
        timestamp=timestamp,
        message_type=MessageType.from_tag(fields.get(MSG_TYPE_TAG, "")),
        correlation_id=fields.get(CL_ORD_ID_TAG, ""),
    )
