from __future__ import annotations


def format_elapsed(seconds: float) -> str:
    """Format a duration as ``MMm SSs mmmms`` (minutes are not capped at 59)."""
    total_ms = max(0, int(seconds * 1000))
    total_s, ms = divmod(total_ms, 1000)
    minutes, secs = divmod(total_s, 60)
    return f"{minutes:02d}m {secs:02d}s {ms:03d}ms"
