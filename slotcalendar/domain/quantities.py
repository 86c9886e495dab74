"""
Quantity helpers used alongside the calendar picker.
"""

from typing import Iterable


def total_qty(quantities: Iterable[int]) -> int:
    """Total quantity of loose or staggered items; 0 when there are none."""
    return sum(quantities, 0)
