"""Rich renderer for tax breakdowns.

Transforms TaxBreakdown output into a formatted Rich table.
"""

import math

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from taxcalc.sdk import TaxBreakdown


def render_breakdown(console: Console, breakdown: TaxBreakdown) -> None:
    """Render a forward or inverse breakdown as a Rich table.

    Args:
        console: Rich Console instance
        breakdown: Breakdown built from a calculator result
    """
    if not all(math.isfinite(v) for v in (breakdown.subtotal, breakdown.tax_sum, breakdown.total)):
        console.print(Panel(
            "[yellow]Result is not finite. Check that the rates do not sum to -100%.[/yellow]",
            title="Note",
            border_style="yellow"
        ))

    title = "Taxes on subtotal" if breakdown.direction == "forward" else "Taxes extracted from total"
    table = Table(title=title, box=box.SIMPLE_HEAD, show_footer=False)
    table.add_column("Line")
    table.add_column("Rate", justify="right")
    table.add_column("Amount", justify="right")

    fmt = _format_amount if breakdown.rounded else _format_exact

    table.add_row("Subtotal", "", fmt(breakdown.subtotal), style=_input_style(breakdown, "forward"))
    for line in breakdown.taxes:
        table.add_row(f"Tax {line.position}", _format_rate(line.rate), fmt(line.amount))
    table.add_row("Tax total", "", fmt(breakdown.tax_sum), end_section=True)
    table.add_row("Total", "", fmt(breakdown.total), style=_input_style(breakdown, "inverse"))

    console.print(table)

    if not breakdown.rounded:
        console.print("[dim]Rounding off: amounts shown unrounded.[/dim]")


def _input_style(breakdown: TaxBreakdown, direction: str) -> str:
    """Dim the row that echoes the input amount."""
    return "dim" if breakdown.direction == direction else "bold"


def _format_amount(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    return f"{value:,.2f}"


def _format_exact(value: float) -> str:
    return repr(value)


def _format_rate(rate: float) -> str:
    return f"{rate * 100:g}%"
