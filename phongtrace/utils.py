"""
Floating point helpers shared by the geometry modules.
"""

from __future__ import annotations

# Tolerance for every float comparison in the renderer. Also used as the
# surface offset for over_point.
EPSILON = 1e-5


def fuzzy_eq(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Return True if a and b differ by less than epsilon."""
    return abs(a - b) < epsilon


def fuzzy_ne(a: float, b: float, epsilon: float = EPSILON) -> bool:
    return not fuzzy_eq(a, b, epsilon)
