"""Display surface for GST Calc.

Reflects a calculation result and the recent history:
- Rich console output (result table, history list)
- Static HTML page rendered from a packaged jinja2 template
"""

from decimal import Decimal
from typing import Dict, Optional, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .calculator import CalculationResult, Direction, SplitMode, round_to_two
from .history import HistoryList

EMPTY_HISTORY_MESSAGE = "No transactions saved yet."

DIRECTION_LABELS = {
    Direction.FORWARD_FROM_NET: "Added GST",
    Direction.REVERSE_FROM_GROSS: "Removed GST",
}

SPLIT_MODE_LABELS = {
    SplitMode.SPLIT: "CGST+SGST",
    SplitMode.UNIFIED: "IGST",
}


def format_amount(value) -> str:
    """Format a monetary value with two fixed decimal places."""
    return str(round_to_two(value))


def format_rate(rate: Decimal) -> str:
    """Format a rate without trailing zeros (18, 12.5)."""
    text = format(rate, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def direction_label(direction: Direction) -> str:
    """Return the history label for a direction."""
    return DIRECTION_LABELS[direction]


def split_mode_label(split_mode: SplitMode) -> str:
    """Return the tax breakdown label for a split mode."""
    return SPLIT_MODE_LABELS[split_mode]


def result_values(result: CalculationResult) -> Dict[str, str]:
    """Return the six output values as labelled, formatted strings."""
    return {
        "Base Price": format_amount(result.base_price),
        "GST Amount": format_amount(result.tax_amount),
        "Gross Price": format_amount(result.gross_price),
        "CGST": format_amount(result.component_a),
        "SGST": format_amount(result.component_b),
        "IGST": format_amount(result.component_c),
    }


def format_history_entry(result: CalculationResult) -> Tuple[str, str]:
    """Format one history entry as (headline, amounts) lines."""
    headline = (
        f"{result.timestamp} - {direction_label(result.direction)}: "
        f"{format_rate(result.rate_percent)}% ({split_mode_label(result.split_mode)})"
    )
    amounts = (
        f"Net: {format_amount(result.base_price)} | "
        f"GST: {format_amount(result.tax_amount)} | "
        f"Gross: {format_amount(result.gross_price)}"
    )
    return headline, amounts


class Renderer:
    """Renders results and history to a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_result(self, result: CalculationResult):
        """Display the six computed values."""
        table = Table(
            title=f"{direction_label(result.direction)} @ "
            f"{format_rate(result.rate_percent)}%"
        )
        table.add_column("Item", style="cyan")
        table.add_column("Amount", justify="right")

        for label, value in result_values(result).items():
            table.add_row(label, value)

        self.console.print(table)

    def show_history(self, history: HistoryList):
        """Display the recent calculations, newest first."""
        self.console.print()
        self.console.print(
            Panel.fit("[bold blue]Recent Calculations[/bold blue]", border_style="blue")
        )

        if not history:
            self.console.print(f"[dim]{EMPTY_HISTORY_MESSAGE}[/dim]")
            return

        for entry in history:
            headline, amounts = format_history_entry(entry)
            self.console.print(f"[bold]{escape(headline)}[/bold]", highlight=False)
            self.console.print(f"  {escape(amounts)}", highlight=False)


def _jinja_env() -> Environment:
    return Environment(
        loader=PackageLoader("gst_calc", "templates"),
        autoescape=select_autoescape(["html", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_html(
    result: Optional[CalculationResult], history: HistoryList
) -> str:
    """Render the calculator page for a result and the history list."""
    template = _jinja_env().get_template("page.html.j2")
    return template.render(
        values=result_values(result) if result else None,
        entries=[format_history_entry(entry) for entry in history],
        empty_message=EMPTY_HISTORY_MESSAGE,
    )
