"""CLI interface for GST Calc.

Commands:
- add: Add GST to a net price
- remove: Remove GST from a gross price
- interactive: Fill in the calculator form with prompts
- history: Show recent calculations
- page: Render the calculator page as HTML
- config: Show or change settings
"""

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .calculator import CalculationResult, InvalidInput, compute
from .config import (
    CONFIG_FILE,
    config_dir,
    load_config,
    save_config,
    update_config,
)
from .form import (
    TRANSACTION_TYPES,
    CalculationRequest,
    build_request,
    prompt_calculation,
)
from .history import HistoryList, record
from .renderer import Renderer, render_html
from .store import HistoryStore, KeyValueStore


console = Console()


def _fail(message: str):
    console.print(f"[red]Error: {escape(message)}[/red]")
    sys.exit(1)


def _history_store(project_path: str) -> HistoryStore:
    config = load_config(project_path)
    storage_file = config_dir(project_path) / config.storage_file
    return HistoryStore(KeyValueStore(storage_file))


def _load_history(store: HistoryStore) -> HistoryList:
    """Load history, warning about anything that had to be discarded."""
    decoded = store.load()
    if decoded.malformed:
        console.print(
            "[yellow]Warning: Stored history is malformed. Starting with an empty history.[/yellow]"
        )
    elif decoded.skipped:
        console.print(
            f"[yellow]Warning: Skipped {decoded.skipped} unreadable history entries.[/yellow]"
        )
    return decoded.entries


def _save_and_show(project_path: str, result: CalculationResult):
    """Record a result, persist the history and render both."""
    store = _history_store(project_path)
    history = record(result, _load_history(store))

    try:
        store.save(history)
    except OSError as e:
        _fail(f"Could not save history: {e}")

    renderer = Renderer(console)
    renderer.show_result(result)
    renderer.show_history(history)


def _compute_request(request: CalculationRequest) -> CalculationResult:
    return compute(
        request.amount,
        request.rate_percent,
        request.direction,
        request.split_mode,
    )


def _run_calculation(
    ctx,
    operation: str,
    amount: str,
    rate: Optional[str],
    transaction_type: Optional[str],
):
    project_path = ctx.obj["project_path"]
    config = load_config(project_path)

    try:
        request = build_request(
            amount,
            rate if rate is not None else config.default_rate,
            transaction_type or config.default_transaction_type,
            operation,
        )
        result = _compute_request(request)
    except InvalidInput as e:
        _fail(str(e))

    _save_and_show(project_path, result)


@click.group()
@click.version_option(version=__version__, prog_name="gst-calc")
@click.option(
    "--path",
    "-p",
    default=".",
    help="Project path holding .gst-calc/ (default: current directory)",
)
@click.pass_context
def main(ctx, path: str):
    """GST Calc - Goods and Services Tax calculator.

    Work out net price, gross price and the CGST/SGST or IGST
    breakdown, and keep the last five calculations.
    """
    ctx.ensure_object(dict)
    ctx.obj["project_path"] = str(Path(path).resolve())


# --- Calculation Commands ---


@main.command()
@click.argument("amount")
@click.option("--rate", "-r", help="GST rate in percent (default from config)")
@click.option(
    "--type",
    "-t",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES),
    help="intra (CGST+SGST) or inter (IGST)",
)
@click.pass_context
def add(ctx, amount: str, rate: Optional[str], transaction_type: Optional[str]):
    """Add GST to a net AMOUNT."""
    _run_calculation(ctx, "add", amount, rate, transaction_type)


@main.command()
@click.argument("amount")
@click.option("--rate", "-r", help="GST rate in percent (default from config)")
@click.option(
    "--type",
    "-t",
    "transaction_type",
    type=click.Choice(TRANSACTION_TYPES),
    help="intra (CGST+SGST) or inter (IGST)",
)
@click.pass_context
def remove(ctx, amount: str, rate: Optional[str], transaction_type: Optional[str]):
    """Remove GST from a gross AMOUNT."""
    _run_calculation(ctx, "remove", amount, rate, transaction_type)


@main.command()
@click.pass_context
def interactive(ctx):
    """Fill in the calculator form with prompts."""
    project_path = ctx.obj["project_path"]
    config = load_config(project_path)

    try:
        request = prompt_calculation(
            default_rate=config.default_rate,
            default_transaction_type=config.default_transaction_type,
        )
        if request is None:
            console.print("[yellow]Cancelled.[/yellow]")
            return
        result = _compute_request(request)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        sys.exit(1)
    except InvalidInput as e:
        _fail(str(e))

    _save_and_show(project_path, result)


# --- History Commands ---


@main.command()
@click.pass_context
def history(ctx):
    """Show the most recent calculations."""
    store = _history_store(ctx.obj["project_path"])
    Renderer(console).show_history(_load_history(store))


@main.command()
@click.option(
    "--output",
    "-o",
    default="gst_calculator.html",
    help="HTML file to write (default: gst_calculator.html)",
)
@click.pass_context
def page(ctx, output: str):
    """Render the calculator page with the latest result and history."""
    store = _history_store(ctx.obj["project_path"])
    entries = _load_history(store)
    latest = entries[0] if entries else None

    output_path = Path(output)
    try:
        output_path.write_text(render_html(latest, entries))
    except OSError as e:
        _fail(f"Could not write {output_path}: {e}")

    console.print(f"[green]Page written to {output_path}[/green]")


# --- Config Commands ---


@main.group()
@click.pass_context
def config(ctx):
    """Show or change settings."""
    pass


@config.command("show")
@click.pass_context
def config_show(ctx):
    """Show the current settings."""
    project_path = ctx.obj["project_path"]
    settings = load_config(project_path)

    table = Table(title="GST Calc Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    for key, value in settings.to_dict().items():
        table.add_row(key, str(value))

    console.print(table)
    console.print(f"[dim]{config_dir(project_path) / CONFIG_FILE}[/dim]")


@config.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def config_set(ctx, key: str, value: str):
    """Change a setting (default_rate, default_transaction_type, storage_file)."""
    project_path = ctx.obj["project_path"]

    try:
        settings = update_config(load_config(project_path), key, value)
    except InvalidInput as e:
        _fail(str(e))

    save_config(project_path, settings)
    console.print(f"[green]{key} set to: {getattr(settings, key)}[/green]")


if __name__ == "__main__":
    main()
