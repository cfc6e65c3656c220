"""Rounding and clamping shared by every 0-100 score."""

import math

from talentmatch.utils.constants import MAX_SCORE, MIN_SCORE


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's round() rounds halves to even, which would score 64.5 as 64.
    """
    return int(math.floor(value + 0.5))


def clamp_score(value: float) -> int:
    """Round a score and clamp it to [0, 100]."""
    return min(MAX_SCORE, max(MIN_SCORE, round_half_up(value)))
