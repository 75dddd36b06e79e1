"""Display helpers computed at render time."""

import os
from datetime import datetime, timezone
from typing import Optional, Union


def format_file_size(size: Optional[int]) -> str:
    if not size:
        return "0 B"
    if size < 1024:
        return f"{size} B"
    if size < 1048576:
        return f"{size / 1024:.1f} KB"
    return f"{size / 1048576:.1f} MB"


def _as_utc(value: Union[str, datetime]) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    # Store timestamps are naive UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_relative_time(value: Union[str, datetime], now: Optional[datetime] = None) -> str:
    """'Just now', '5m ago', '3h ago', else a short date like 'Mar 4'."""
    ts = _as_utc(value)
    now = _as_utc(now) if now else datetime.now(timezone.utc)
    seconds = (now - ts).total_seconds()

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{int(seconds // 60)}m ago"
    if seconds < 86400:
        return f"{int(seconds // 3600)}h ago"
    return f"{ts:%b} {ts.day}"


def word_count(text: str) -> int:
    return len((text or "").split())


def export_filename(original_filename: Optional[str]) -> str:
    stem = os.path.splitext(os.path.basename(original_filename or ""))[0]
    return f"{stem or 'summary'}-summary.md"
