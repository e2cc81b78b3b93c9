"""Metrics aggregation — latency list, average and per-minute throughput."""

from dataclasses import dataclass, field
from datetime import datetime

from fixmetrics.correlator import CorrelationResult

# Year is padded by hand: strftime("%Y") does not zero-pad years below 1000 on Linux.
MINUTE_FORMAT = "%m-%d %H:%M"


@dataclass
class MetricsReport:
    latencies: list[int] = field(default_factory=list)
    average_latency: float = 0.0
    throughput: dict[datetime, int] = field(default_factory=dict)


def average(values: list[int]) -> float:
    """Arithmetic mean, 0.0 for an empty list."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def aggregate(result: CorrelationResult) -> MetricsReport:
    """Reduce a finished correlation pass into a MetricsReport."""
    latencies = [s.duration_millis for s in result.samples]
    return MetricsReport(
        latencies=latencies,
        average_latency=average(latencies),
        throughput=dict(result.throughput),
    )


def format_minute(minute: datetime) -> str:
    """Render a bucket key as YYYY-MM-DD HH:MM."""
    return f"{minute.year:04d}-{minute.strftime(MINUTE_FORMAT)}"


def format_report_lines(report: MetricsReport) -> list[str]:
    """Render the report, one entry per line, without trailing newlines."""
    lines = [f"Latency: {latency} ms" for latency in report.latencies]
    lines.append(f"Average Latency: {report.average_latency:.2f} ms")
    for minute, count in report.throughput.items():
        lines.append(
            f"Minute: {format_minute(minute)}, Throughput: {count} orders/min"
        )
    return lines


def format_report_text(report: MetricsReport) -> str:
    return "".join(f"{line}\n" for line in format_report_lines(report))
