"""Rounding helpers for prices shown to shoppers.

Prices are rounded half-up (2.5 -> 3), matching how the storefront has
always displayed them, rather than Python's round-half-to-even.
"""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


def round_to(value: float, places: int) -> float:
    """Round half-up to a fixed number of decimal places."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor
