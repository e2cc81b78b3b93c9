"""Exception hierarchy for the FIX log metrics tool."""


class FixMetricsError(Exception):
    """Base class for every failure raised by fixmetrics."""


class ParseError(FixMetricsError, ValueError):
    """Raised when a line's timestamp prefix cannot be parsed.

    Per-line and non-fatal: the correlation engine skips the line.
    """


class EnvironmentSetupError(FixMetricsError):
    """Raised when the working directory or the input log is unusable."""


class SinkError(FixMetricsError):
    """Raised when an output artifact cannot be serialized or written."""
