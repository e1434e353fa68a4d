"""Utility functions for formatting and display."""

from typing import Iterable

from gemlink.models import GemRequirements


def format_stat(value: float) -> str:
    """Format a stat value with at most two decimals and no trailing zeros."""
    if isinstance(value, bool):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_requirements(req: GemRequirements) -> str:
    """Format requirements like "Lv 8 · 14 Str", skipping zero attributes."""
    parts = [f"Lv {req.level}"]
    for value, label in ((req.strength, "Str"), (req.dexterity, "Dex"), (req.intelligence, "Int")):
        if value:
            parts.append(f"{value} {label}")
    return " · ".join(parts)


def format_tags(tags: Iterable[str]) -> str:
    return ", ".join(tags) or "-"
