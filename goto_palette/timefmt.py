"""Compact relative time labels ("5m", "3d", "2mo")."""

from datetime import datetime
from typing import Optional


def format_relative_time(timestamp_ms: int, now: Optional[datetime] = None) -> str:
    """Format the distance from an epoch-millis timestamp to now, rounded down."""
    now = now or datetime.now()
    seconds = int(now.timestamp() - timestamp_ms / 1000)
    if seconds < 60:
        return f"{max(0, seconds)}s"

    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"

    days = hours // 24
    if days < 30:
        return f"{days}d"

    # Months top out at 11 so 360-364 days never read "12mo"
    if days < 365:
        return f"{min(days // 30, 11)}mo"

    return f"{days // 365}y"
