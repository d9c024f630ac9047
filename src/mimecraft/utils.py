"""Formatting helpers shared by the limits and builder modules."""

from __future__ import annotations

import re

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*$")

_SIZE_UNITS: dict[str, int] = {
    "": 1,
    "b": 1,
    "k": 1024,
    "kb": 1024,
    "kib": 1024,
    "m": 1024**2,
    "mb": 1024**2,
    "mib": 1024**2,
    "g": 1024**3,
    "gb": 1024**3,
    "gib": 1024**3,
}


def parse_size_string(value: int | float | str) -> int:
    """Parse a human-readable size into bytes.

    Numbers are taken as a byte count. Strings accept an optional binary
    unit suffix (``K``, ``KB``, ``KiB``, ``M``, ``MB``, ``MiB``, ``G``...),
    case-insensitive.

    Args:
        value: Size as number or string.

    Returns:
        Size in bytes.

    Raises:
        ValueError: If the string cannot be parsed or the unit is unknown.

    Examples:
        >>> parse_size_string("25M")
        26214400
        >>> parse_size_string(512)
        512
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid size format: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)

    match = _SIZE_PATTERN.match(value)
    if match is None:
        raise ValueError(f"Invalid size format: {value!r}")

    number, unit = match.groups()
    multiplier = _SIZE_UNITS.get(unit.lower())
    if multiplier is None:
        raise ValueError(f"Unknown size unit: {unit!r}")
    return int(float(number) * multiplier)


def format_bytes(size: int) -> str:
    """Return a human-readable binary size such as ``25.0 MiB``."""
    value = float(size)
    for unit in ("B", "KiB", "MiB"):
        if abs(value) < 1024:
            return f"{int(value)} B" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GiB"


__all__ = ["format_bytes", "parse_size_string"]
