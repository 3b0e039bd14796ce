"""Forward and inverse tax calculations over a flat list of rates.

Every rate applies independently to the same base (no compounding).
Results are plain lists with a fixed positional layout:

    forward -> [total, tax_sum, tax_1, ..., tax_n]
    inverse -> [subtotal, tax_sum, tax_1, ..., tax_n]

When rounding is enabled each value is rounded to cents as it is produced,
so aggregates are not re-derived from the rounded parts.
"""

import logging
import math
import numbers
from collections.abc import Sequence
from typing import Optional

logger = logging.getLogger(__name__)


class TaxTypeError(TypeError):
    """Raised when a calculation receives an argument of the wrong type."""
    pass


def round2(value: float) -> float:
    """Round to 2 decimal places, half away from zero.

    Works on the binary float value of ``value * 100``, so 1.005 rounds to
    1.0 (it is stored as 1.00499...). Non-finite values and amounts too
    large to carry a fractional cent pass through.

    Example: 0.125 -> 0.13, -0.125 -> -0.13
    """
    if not math.isfinite(value):
        return value
    scaled = value * 100
    magnitude = abs(scaled)
    # At 2**52 and above every float is a whole number of cents.
    if magnitude >= 2 ** 52:
        return value
    cents = math.floor(magnitude)
    if magnitude - cents >= 0.5:
        cents += 1
    return math.copysign(cents, scaled) / 100


def _require_amount(value, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TaxTypeError(f"{name} must be a number, got {type(value).__name__}")


def _require_rates(rates) -> None:
    if isinstance(rates, (str, bytes, bytearray)) or not isinstance(rates, Sequence):
        raise TaxTypeError(f"rates must be a sequence of numbers, got {type(rates).__name__}")


def _require_flag(rounding) -> None:
    if not isinstance(rounding, bool):
        raise TaxTypeError(f"rounding must be a bool, got {type(rounding).__name__}")


def _divide(total: float, rate_sum: float) -> float:
    # Float division by zero raises in Python; surface the IEEE result instead.
    if rate_sum == 0:
        if total == 0 or math.isnan(total):
            return math.nan
        return math.copysign(math.inf, total) * math.copysign(1.0, rate_sum)
    return total / rate_sum


def _forward(subtotal: float, rates: Sequence, rounding: bool) -> list:
    if rounding:
        subtotal = round2(subtotal)

    taxes = []
    tax_sum = 0
    for rate in rates:
        tax = rate * subtotal
        if rounding:
            tax = round2(tax)
        taxes.append(tax)
        tax_sum += tax

    if rounding:
        tax_sum = round2(tax_sum)

    total = subtotal + tax_sum
    if rounding:
        total = round2(total)

    logger.debug(f"forward: subtotal={subtotal} rates={list(rates)} -> total={total} tax_sum={tax_sum}")
    return [total, tax_sum, *taxes]


def _inverse(total: float, rates: Sequence, rounding: bool) -> list:
    if rounding:
        total = round2(total)

    rate_sum = sum(rates) + 1

    subtotal = _divide(total, rate_sum)
    if rounding:
        subtotal = round2(subtotal)
    if not math.isfinite(subtotal):
        logger.warning(f"inverse: rates {list(rates)} sum to {rate_sum - 1}, subtotal is {subtotal}")

    tax_sum = total - subtotal
    if rounding:
        tax_sum = round2(tax_sum)

    taxes = []
    for rate in rates:
        tax = rate * subtotal
        if rounding:
            tax = round2(tax)
        taxes.append(tax)

    logger.debug(f"inverse: total={total} rates={list(rates)} -> subtotal={subtotal} tax_sum={tax_sum}")
    return [subtotal, tax_sum, *taxes]


def forward(subtotal: float, rates: Sequence, rounding: bool = True) -> list:
    """Calculate the total and per-rate taxes from a pre-tax subtotal.

    Args:
        subtotal: Amount before taxes
        rates: Tax rates as fractions, e.g. [0.05, 0.07]
        rounding: Round every value to cents (default: True)

    Returns:
        [total, tax_sum, tax_1, ..., tax_n] with taxes in rate order

    Raises:
        TaxTypeError: If subtotal is not a number, rates is not a sequence,
            or rounding is not a bool

    Example:
        forward(100, [0.05, 0.07])  # -> [112.0, 12.0, 5.0, 7.0]
    """
    _require_amount(subtotal, "subtotal")
    _require_rates(rates)
    _require_flag(rounding)
    return _forward(subtotal, rates, rounding)


def inverse(total: float, rates: Sequence, rounding: bool = True) -> list:
    """Extract the subtotal and per-rate taxes from a tax-inclusive total.

    Solves total = subtotal * (1 + sum(rates)). Per-rate taxes are computed
    from the (possibly rounded) subtotal, and tax_sum is total - subtotal.

    Rates summing to -1 are not rejected: the subtotal comes back as
    inf, -inf or nan and callers must check for it.

    Args:
        total: Amount after taxes
        rates: Tax rates as fractions, e.g. [0.05, 0.07]
        rounding: Round every value to cents (default: True)

    Returns:
        [subtotal, tax_sum, tax_1, ..., tax_n] with taxes in rate order

    Raises:
        TaxTypeError: If total is not a number, rates is not a sequence,
            or rounding is not a bool

    Example:
        inverse(112, [0.05, 0.07])  # -> [100.0, 12.0, 5.0, 7.0]
    """
    _require_amount(total, "total")
    _require_rates(rates)
    _require_flag(rounding)
    return _inverse(total, rates, rounding)


class TaxCalculator:
    """A fixed rate list and default rounding preference.

    Both are set at construction and cannot be changed afterwards.

    Usage:
        calc = TaxCalculator([0.05, 0.07])
        calc.forward(100)                  # [112.0, 12.0, 5.0, 7.0]
        calc.inverse(112)                  # [100.0, 12.0, 5.0, 7.0]
        calc.forward(99.999, rounding=False)
    """

    def __init__(self, rates: Sequence, rounding: bool = True):
        _require_rates(rates)
        _require_flag(rounding)
        self._rates = tuple(rates)
        self._rounding = rounding

    @property
    def rates(self) -> tuple:
        return self._rates

    @property
    def rounding(self) -> bool:
        return self._rounding

    def _resolve_rounding(self, rounding: Optional[bool]) -> bool:
        if rounding is None:
            return self._rounding
        _require_flag(rounding)
        return rounding

    def forward(self, subtotal: float, rounding: Optional[bool] = None) -> list:
        """Calculate taxes on a subtotal using the stored rates.

        Args:
            subtotal: Amount before taxes
            rounding: Override the stored rounding preference

        Returns:
            See forward() for the result layout
        """
        _require_amount(subtotal, "subtotal")
        return _forward(subtotal, self._rates, self._resolve_rounding(rounding))

    def inverse(self, total: float, rounding: Optional[bool] = None) -> list:
        """Extract taxes from a total using the stored rates.

        Args:
            total: Amount after taxes
            rounding: Override the stored rounding preference

        Returns:
            See inverse() for the result layout
        """
        _require_amount(total, "total")
        return _inverse(total, self._rates, self._resolve_rounding(rounding))

    def __repr__(self) -> str:
        return f"TaxCalculator(rates={list(self._rates)!r}, rounding={self._rounding!r})"
