"""
Sparkline rendering.

Encodes a numeric series as one line of block characters, one per value,
scaled between the smallest and largest value of the series.
"""

from typing import Sequence

TICKS = "▁▂▃▄▅▆▇█"


def render(values: Sequence[float], ticks: str = TICKS) -> str:
    """
    Render a series as a sparkline.

    Args:
        values: Non-negative numbers, rendered in order
        ticks: Glyphs from lowest to highest level

    Returns:
        String with one glyph per value. A flat series (including all
        zeros) renders the lowest glyph everywhere.

    Example:
        >>> render([0, 1, 2, 3, 4, 5, 6, 7])
        '▁▂▃▄▅▆▇█'
    """
    if not ticks:
        raise ValueError("Sparkline needs at least one tick glyph")
    if not values:
        return ""
    if any(v < 0 for v in values):
        raise ValueError("Sparkline values must be non-negative")

    low = min(values)
    high = max(values)
    if high == low:
        return ticks[0] * len(values)

    top = len(ticks) - 1
    scale = high - low
    return "".join(ticks[int(round((v - low) / scale * top))] for v in values)
