"""taxes - Tax calculation over flat rate lists.

Scope:
- Forward calculation: subtotal -> total, tax sum, per-rate taxes
- Inverse calculation: total -> subtotal, tax sum, per-rate taxes
- Cent rounding (round half away from zero)
- Schemas for rate tables and named result breakdowns

Constraints:
- Pure calculation - no config or file access (that's in sdk/config.py)
- Rates apply independently to the same base, never compounded

Usage:
    from taxcalc.sdk.taxes import TaxCalculator, forward, inverse

    forward(100, [0.05, 0.07])   # [112.0, 12.0, 5.0, 7.0]
    calc = TaxCalculator([0.05, 0.07])
    calc.inverse(112)            # [100.0, 12.0, 5.0, 7.0]
"""

from .calculator import (
    TaxCalculator,
    TaxTypeError,
    forward,
    inverse,
    round2,
)

from .schemas import RateTable, RatesFile, TaxBreakdown, TaxLine

__all__ = [
    # Calculator
    "TaxCalculator",
    "TaxTypeError",
    "forward",
    "inverse",
    "round2",
    # Schemas
    "RateTable",
    "RatesFile",
    "TaxBreakdown",
    "TaxLine",
]
