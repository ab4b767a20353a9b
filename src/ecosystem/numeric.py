"""Numeric helpers shared by the generation passes."""

import math

BYTE_MAX = 255


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's built-in round() uses banker's rounding, which would make
    values like 2.5 and 3.5 round in different directions.
    """
    return math.floor(value + 0.5)


def clamp_byte(value: float) -> int:
    """Round and clamp a value into the [0, 255] attribute range."""
    return max(0, min(BYTE_MAX, round_half_up(value)))
