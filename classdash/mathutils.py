"""Small numeric helpers and the fixed dimensions of the game window."""

import math

WINDOW_WIDTH = 1024
WINDOW_HEIGHT = 768
TILE_SIZE = 32


def is_between(num, low, high):
    """Return True if ``num`` lies in the closed range [low, high]."""
    return low <= num <= high


def clamp(num, low, high):
    """Limit ``num`` to the closed range [low, high]."""
    if num < low:
        return low
    if num > high:
        return high
    return num


def floor_interval(num, interval):
    """Round ``num`` down to the nearest multiple of ``interval``."""
    return float(math.floor(num / interval)) * interval