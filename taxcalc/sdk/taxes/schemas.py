"""Pydantic schemas for rate tables and calculation output.

RatesFile validates the rates.yaml config file. TaxBreakdown gives the
positional calculator result named fields for JSON output.
"""

from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .calculator import round2


class RateTable(BaseModel):
    """A named list of tax rates applied together."""
    model_config = ConfigDict(extra="forbid")

    description: Optional[str] = Field(default=None, description="Human-readable label")
    rates: list[Annotated[float, Field(ge=0)]] = Field(
        default_factory=list, description="Tax rates as decimals"
    )


class RatesFile(BaseModel):
    """Contents of rates.yaml."""
    model_config = ConfigDict(extra="ignore")  # Allow unknown fields for forward compat

    tables: dict[str, RateTable] = Field(default_factory=dict)


class TaxLine(BaseModel):
    """Tax for a single rate."""
    model_config = ConfigDict(extra="forbid")

    position: int = Field(..., ge=1, description="1-based position in the rate list")
    rate: float
    amount: float


class TaxBreakdown(BaseModel):
    """Named view of a forward or inverse calculation result."""
    model_config = ConfigDict(extra="forbid")

    direction: Literal["forward", "inverse"]
    amount_in: float = Field(..., description="Amount passed to the calculation, unrounded")
    subtotal: float
    tax_sum: float
    total: float
    taxes: list[TaxLine]
    rounded: bool

    @classmethod
    def from_result(
        cls,
        direction: str,
        amount: float,
        rates,
        result: list,
        rounded: bool,
    ) -> "TaxBreakdown":
        """Build a breakdown from a calculator result list.

        For forward the subtotal is the input amount (rounded if rounding was
        on); for inverse the total is.
        """
        given = round2(amount) if rounded else amount
        if direction == "forward":
            total, subtotal = result[0], given
        else:
            subtotal, total = result[0], given

        return cls(
            direction=direction,
            amount_in=amount,
            subtotal=subtotal,
            tax_sum=result[1],
            total=total,
            taxes=[
                TaxLine(position=i, rate=rate, amount=tax)
                for i, (rate, tax) in enumerate(zip(rates, result[2:]), start=1)
            ],
            rounded=rounded,
        )
