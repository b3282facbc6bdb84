"""Text formatting helpers for the history list."""

from __future__ import annotations

import html
from datetime import datetime, timezone
from typing import Optional


def escape_html(text: str) -> str:
    """Escape markup-significant characters."""
    if not isinstance(text, str):
        return ""
    return html.escape(text, quote=True)


def truncate_text(text: str, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters, add '...' and escape it."""
    if len(text) <= max_length:
        return escape_html(text)
    return escape_html(text[:max_length]) + "..."


def format_relative_time(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Describe ``value`` relative to ``now`` ("5 minutes ago", "Yesterday", ...)."""
    if value is None:
        return "Just now"
    now = now or datetime.now(timezone.utc)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    minutes = int((now - value).total_seconds() // 60)
    hours = minutes // 60
    days = hours // 24

    if minutes < 1:
        return "Just now"
    if minutes == 1:
        return "1 minute ago"
    if minutes < 60:
        return f"{minutes} minutes ago"
    if hours == 1:
        return "1 hour ago"
    if hours < 24:
        return f"{hours} hours ago"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    local = value.astimezone()
    return f"{local:%b} {local.day}, {local:%Y, %I:%M %p}"
