"""
Core bonding-curve algorithms
"""

from .bonding_curve import (
    CurveParameters,
    CurveToken,
    LedgerState,
    floor_sqrt,
    scaled_mul_div,
)

__all__ = [
    "CurveParameters",
    "CurveToken",
    "LedgerState",
    "floor_sqrt",
    "scaled_mul_div",
]
