from __future__ import annotations


def format_time(ms: int) -> str:
    """Formats milliseconds as ``MM:SS:CC``; minutes wrap at 60, no hour field."""
    ms = max(0, int(ms))
    minutes = (ms // 60_000) % 60
    seconds = (ms // 1000) % 60
    centiseconds = (ms % 1000) // 10
    return f"{minutes:02d}:{seconds:02d}:{centiseconds:02d}"
