"""Prop-firm dashboard commands for propdash CLI.

Handles the KPI cards, monthly payouts/fees, cumulative PnL, account
size distribution, payouts by firm, the raw events table and CSV import.
"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from propdash.analytics.filters import firm_options
from propdash.analytics.prop import PropReport, build_prop_report
from propdash.cli.formatting import format_currency, format_date_dmy, format_value, signed_color

console = Console()


def _get_config(ctx: click.Context) -> dict:
    """Lazily load configuration."""
    from propdash.config import load_config

    return load_config((ctx.obj or {}).get("config_path"))


def _get_prop_store(config: dict):
    """Get the prop store; imported events persist in the configured database."""
    from propdash.config import get_db_path
    from propdash.db.backends import SQLiteStorage
    from propdash.db.store import PropStore

    backend = SQLiteStorage(get_db_path(config))
    return PropStore(backend, key=config["storage"]["events_key"])


def _report(ctx: click.Context, firm: Optional[str]) -> PropReport:
    store = _get_prop_store(_get_config(ctx))
    return build_prop_report(store.events, store.accounts, firm)


def kpi_cards(report: PropReport) -> list[tuple[str, float, str]]:
    """Dashboard KPI cards as (label, value, format)."""
    return [
        ("Current funded amount", report.accounts.funded_amount, "currency"),
        ("All-time payouts", report.pnl.total_payouts, "currency"),
        ("Challenge fees paid", -report.pnl.total_fees, "currency"),
        ("Current PnL", report.pnl.current_pnl, "currency"),
        ("Total evaluations", report.accounts.total_evaluations, "int"),
        ("Active evaluations", report.accounts.active_evaluations, "int"),
        ("Active funded accounts", report.accounts.active_funded, "int"),
        ("Failed challenges", report.accounts.failed_challenges, "int"),
        ("Phase 1 pass rate", report.funnel.phase1_pass_rate, "percent"),
        ("Phase 2 pass rate", report.funnel.phase2_pass_rate, "percent"),
        ("Reached funded %", report.funnel.funded_rate, "percent"),
        ("Reached payout %", report.funnel.payout_rate, "percent"),
    ]


firm_option = click.option(
    "--firm",
    default="All",
    show_default=True,
    help="Restrict to one prop firm.",
)


@click.group()
def prop() -> None:
    """Prop-firm performance dashboard.

    \b
    Examples:
      propdash prop kpis                 # KPI cards
      propdash prop kpis --firm FTMO     # One firm only
      propdash prop monthly              # Payouts vs fees per month
      propdash prop import events.csv    # Replace events from CSV
    """
    pass


@prop.command("kpis")
@firm_option
@click.pass_context
def kpis(ctx: click.Context, firm: str) -> None:
    """Show the dashboard KPI cards."""
    report = _report(ctx, firm)

    table = Table(
        title=f"Prop-Firm KPIs ({report.firm})",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    for label, value, fmt in kpi_cards(report):
        text = format_value(value, fmt)
        if fmt == "currency":
            color = signed_color(value)
            text = f"[{color}]{text}[/{color}]"
        table.add_row(label, text)

    console.print(table)


@prop.command("monthly")
@firm_option
@click.pass_context
def monthly(ctx: click.Context, firm: str) -> None:
    """Show payouts and fees per month."""
    report = _report(ctx, firm)

    if not report.monthly:
        console.print("[dim]No events found[/dim]")
        return

    table = Table(title="Monthly Performance", show_header=True, header_style="bold cyan")
    table.add_column("Month", style="bold")
    table.add_column("Payouts", justify="right")
    table.add_column("Fees", justify="right")
    table.add_column("Net", justify="right")

    for bar in report.monthly:
        net = bar.payouts + bar.fees
        color = signed_color(net)
        table.add_row(
            bar.label,
            f"[green]{format_currency(bar.payouts)}[/green]",
            f"[red]{format_currency(bar.fees)}[/red]",
            f"[{color}]{format_currency(net)}[/{color}]",
        )

    console.print(table)


@prop.command("history")
@firm_option
@click.pass_context
def history(ctx: click.Context, firm: str) -> None:
    """Show cumulative PnL over time."""
    report = _report(ctx, firm)

    if not report.history:
        console.print("[dim]No events found[/dim]")
        return

    table = Table(title="PnL History", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Cumulative PnL", justify="right")

    for point in report.history:
        color = signed_color(point.pnl)
        table.add_row(format_date_dmy(point.date), f"[{color}]{format_currency(point.pnl)}[/{color}]")

    console.print(table)


@prop.command("sizes")
@firm_option
@click.pass_context
def sizes(ctx: click.Context, firm: str) -> None:
    """Show evaluation accounts by size."""
    report = _report(ctx, firm)

    if not report.sizes:
        console.print("[dim]No evaluation accounts[/dim]")
        return

    table = Table(title="Account Sizes", show_header=True, header_style="bold cyan")
    table.add_column("Size", style="bold")
    table.add_column("Accounts", justify="right")
    table.add_column("Share", justify="right")

    for size in report.sizes:
        table.add_row(size.name, str(size.count), f"{size.percentage:.1f}%")

    console.print(table)


@prop.command("firms")
@click.pass_context
def firms(ctx: click.Context) -> None:
    """List prop firms and their payouts."""
    store = _get_prop_store(_get_config(ctx))
    report = build_prop_report(store.events, store.accounts)
    payouts = {row.firm: row.payouts for row in report.by_firm}

    table = Table(title="Prop Firms", show_header=True, header_style="bold cyan")
    table.add_column("Firm", style="bold")
    table.add_column("Payouts", justify="right")

    for name in firm_options(store.events, store.accounts):
        table.add_row(name, format_currency(payouts.get(name, 0.0)))

    console.print(table)


@prop.command("events")
@firm_option
@click.pass_context
def events(ctx: click.Context, firm: str) -> None:
    """Show the raw events feeding the KPIs."""
    report = _report(ctx, firm)

    if not report.events:
        console.print(Panel(
            "[dim]No events found[/dim]",
            title="[bold]Events[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Events (Payouts & Fees)", show_header=True, header_style="bold cyan")
    table.add_column("Date", style="bold")
    table.add_column("Prop Firm")
    table.add_column("Type", justify="center")
    table.add_column("Amount (USD)", justify="right")

    type_colors = {"payout": "green", "fee": "red"}
    for event in report.events:
        color = type_colors.get(event.type, "white")
        table.add_row(
            format_date_dmy(event.date),
            event.prop_firm,
            f"[{color}]{event.type.upper()}[/{color}]",
            format_currency(event.amount),
        )

    console.print(table)


@prop.command("import")
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def import_events(ctx: click.Context, csv_path: Path) -> None:
    """Replace events with the rows of a CSV file.

    The file needs a header of date,propFirm,type,amount. Rows that are
    not valid payouts or fees are skipped.
    """
    store = _get_prop_store(_get_config(ctx))
    report = store.import_events_file(csv_path)

    if report.error:
        console.print(Panel(
            f"[red]Failed to read CSV:[/red]\n\n{report.error}",
            title="[bold red]Error[/bold red]",
            border_style="red",
        ))
        raise SystemExit(1)

    if report.rejected:
        table = Table(title="Skipped Rows", show_header=True, header_style="bold yellow")
        table.add_column("Line", justify="right")
        table.add_column("Reason")
        for row in report.rejected:
            table.add_row(str(row.line), row.reason)
        console.print(table)

    if not report.accepted:
        console.print("[yellow]No valid rows found; existing events kept.[/yellow]")
        return

    console.print(f"[green]✓ Imported {len(report.accepted)} events[/green]")


@prop.command("reset")
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation.")
@click.pass_context
def reset(ctx: click.Context, yes: bool) -> None:
    """Discard imported events and go back to the seed data."""
    if not yes and not click.confirm("Discard imported events?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store = _get_prop_store(_get_config(ctx))
    store.reset_events()
    console.print("[green]✓ Events reset to seed data[/green]")
