"""Minute counts <-> ``HH:MM`` display strings."""
from __future__ import annotations


def format_minutes(minutes: int) -> str:
    """Render a non-negative minute count as zero-padded ``HH:MM``.

    Hours are padded to two digits but never truncated (6000 -> ``"100:00"``).
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise ValueError(f"Minutes must be an integer, got {minutes!r}")
    if minutes < 0:
        raise ValueError(f"Minutes must be non-negative, got {minutes}")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def parse_hhmm(value: str) -> int:
    parts = (value or "").strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid HH:MM value: {value!r}")
    hours, minutes = int(parts[0]), int(parts[1])
    if minutes >= 60:
        raise ValueError(f"Invalid HH:MM value: {value!r}")
    return hours * 60 + minutes
