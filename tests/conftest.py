"""Shared pytest fixtures for the fix-log-metrics test suite."""

import pytest

SOH = "\x01"


def build_fix_line(ts: str, msg_type: str, cl_ord_id: str | None = None) -> str:
    """Log line as written by the session logger: timestamp, space, SOH-delimited message."""
    tags = ["8=FIX.4.4", "9=120", f"35={msg_type}", "49=CUST2", "56=ANCHORAGE"]
    if cl_ord_id is not None:
        tags.append(f"11={cl_ord_id}")
    tags.append("10=000")
    return f"{ts} " + SOH.join(tags) + SOH


@pytest.fixture()
def fix_line():
    """Factory fixture: fix_line("2024/01/01 09:30:00.000000", "D", "ORD1")."""
    return build_fix_line


@pytest.fixture()
def sample_log(tmp_path, fix_line):
    """A small FIX log with two matched orders, one orphan, and noise."""
    lines = [
        fix_line("2024/01/01 09:30:00.000000", "D", "ORD1"),
        fix_line("2024/01/01 09:30:00.100000", "0"),
        fix_line("2024/01/01 09:30:00.250000", "8", "ORD1"),
        "garbage",
        fix_line("2024/01/01 09:31:10.000000", "D", "ORD2"),
        fix_line("2024/01/01 09:31:10.040000", "8", "ORD2"),
        fix_line("2024/01/01 09:31:20.000000", "D", "ORD3"),
        fix_line("2024/01/01 09:31:30.000000", "8", "UNKNOWN"),
    ]
    path = tmp_path / "FIX.4.4-test.messages.current.log"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
