"""Time formatting helpers."""

LABEL_PREFIX = "marked at"


def format_time(milliseconds: int) -> str:
    """Format a millisecond offset as HH:MM:SS.

    Hours wrap at 24, so 25 hours renders as 01:00:00.

    Args:
        milliseconds: Non-negative offset from video start

    Returns:
        Zero-padded time string
    """
    seconds = (milliseconds // 1000) % 60
    minutes = (milliseconds // (1000 * 60)) % 60
    hours = (milliseconds // (1000 * 60 * 60)) % 24
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def default_label(milliseconds: int) -> str:
    """Label given to markers created without explicit text."""
    return f"{LABEL_PREFIX} {format_time(milliseconds)}"
