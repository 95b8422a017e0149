from __future__ import annotations

from .config import LineCountConfig
from .models import LineCountResult


def _scaled(value: int, unit: int, suffix: str) -> str:
    scaled = value / unit
    if scaled < 10:
        text = f"{scaled:.1f}".rstrip("0").rstrip(".")
    else:
        text = str(int(scaled))
    return f"{text}{suffix}"


def format_count(total: int, display_format: str = "abbreviated") -> str:
    """
    Render a line total for a badge.

    exact:       1234 -> "1234"
    abbreviated: 999 -> "999", 1234 -> "1.2K", 12345 -> "12K", 1500000 -> "1.5M"
    """
    if display_format == "exact" or total < 1000:
        return str(total)
    if total < 1_000_000:
        return _scaled(total, 1000, "K")
    return _scaled(total, 1_000_000, "M")


def badge_text(result: LineCountResult, config: LineCountConfig) -> str:
    text = format_count(result.total, config.display_format)
    return f"~{text}" if result.estimated else text


def badge_severity(total: int, config: LineCountConfig) -> str:
    if total >= config.error_threshold:
        return "error"
    if total >= config.warning_threshold:
        return "warning"
    return "normal"


def tooltip(name: str, result: LineCountResult) -> str:
    if result.estimated:
        return f"{name}: ~{result.total:,} lines (estimated)"
    lines = [f"{name}: {result.total:,} lines"]
    if result.has_breakdown:
        lines.append(f"code: {result.code:,}")
        lines.append(f"comments: {result.comment:,}")
        lines.append(f"blank: {result.blank:,}")
    return "\n".join(lines)
