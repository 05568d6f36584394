# app/utils/colors.py
"""NDVI color ramp shared by the stress map fill and the legend."""
import math

import pandas as pd

RED = (255, 0, 0, 1)
GREEN = (0, 255, 0, 1)


def _round_half_up(x: float) -> int:
    # 127.5 -> 128, matching the browser's Math.round rather than banker's rounding
    return int(math.floor(x + 0.5))


def color_for(value):
    """
    Map an NDVI value to an RGBA tuple.

    Absent values count as 0. The ramp is clamped to [0, 1]: red at 0,
    olive-yellow at 0.5, green at 1, with no banding in between.

    Args:
        value: NDVI value, or None/NaN

    Returns:
        Tuple (r, g, b, a) with r, g, b in 0..255 and a in 0..1
    """
    try:
        v = 0.0 if value is None or pd.isna(value) else float(value)
    except (TypeError, ValueError):
        v = 0.0

    if v <= 0.0:
        return RED
    if v >= 1.0:
        return GREEN
    return (_round_half_up(255 * (1 - v)), _round_half_up(255 * v), 0, 1)


def to_hex(rgba) -> str:
    r, g, b = rgba[:3]
    return f"#{r:02x}{g:02x}{b:02x}"


def to_css(rgba) -> str:
    r, g, b, a = rgba
    return f"rgba({r}, {g}, {b}, {a})"


def gradient_stops(n: int = 3):
    """Sample the ramp at n evenly spaced points in [0, 1] as (value, rgba) pairs."""
    if n < 2:
        raise ValueError("A gradient needs at least two stops")
    values = [i / (n - 1) for i in range(n)]
    return [(v, color_for(v)) for v in values]
