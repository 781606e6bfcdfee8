"""Human-readable byte sizes.

Sizes are rendered with two decimals and binary (1024-based) units,
e.g. 1024 -> "1.00KiB", 16 -> "16.00B".
"""

from __future__ import annotations

BINARY_ABBRS = ["B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB"]
BINARY_BASE = 1024.0


def bytes_size(size: float) -> str:
    """Format a byte count as a human-readable size string.

    Args:
        size: Number of bytes.

    Returns:
        Size with two decimals and the largest unit not exceeding it.
    """
    value = float(size)
    unit = 0
    while value >= BINARY_BASE and unit < len(BINARY_ABBRS) - 1:
        value /= BINARY_BASE
        unit += 1
    return f"{value:.2f}{BINARY_ABBRS[unit]}"
