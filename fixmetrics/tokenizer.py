"""Line tokenizer — space-delimited and SOH-delimited splitting."""

SOH = "\x01"
SPACE = " "

# Literal substrings that select a line into the raw-record list.
SUBMISSION_MARKER = "35=D"
COMPLETION_MARKER = "35=8"


def split_on_space(line: str) -> list[str]:
    """Split a line on single spaces. Empty tokens are kept."""
    return line.split(SPACE)


def split_on_soh(line: str) -> list[str]:
    """Split a line on the FIX field separator into tag=value tokens."""
    return line.split(SOH)


def split_tag_value(token: str) -> tuple[str, str] | None:
    """Split 'tag=value' on the first '='. Returns None if there is no '='."""
    if "=" not in token:
        return None
    tag, value = token.split("=", 1)
    return tag, value
