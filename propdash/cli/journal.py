"""Trade journal commands for propdash CLI.

Handles logging, editing and deleting trades, the filtered trade table
and the journal KPIs.
"""

from datetime import date
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from propdash.analytics.filters import JournalFilter, instrument_options
from propdash.analytics.journal import JournalReport, build_journal_report
from propdash.cli.formatting import format_r, signed_color
from propdash.models import Trade

console = Console()


def _get_config(ctx: click.Context) -> dict:
    """Lazily load configuration."""
    from propdash.config import load_config

    return load_config((ctx.obj or {}).get("config_path"))


def _get_journal_store(config: dict):
    """Get the journal store backed by the configured database."""
    from propdash.config import get_db_path
    from propdash.db.backends import SQLiteStorage
    from propdash.db.store import JournalStore

    backend = SQLiteStorage(get_db_path(config))
    return JournalStore(backend, key=config["storage"]["journal_key"])


def _error(message: str) -> None:
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def _validation_message(e: ValidationError) -> str:
    return "\n".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
    )


def resolve_trade_id(trades: list[Trade], prefix: str) -> Optional[str]:
    """Find a trade id from its full value or a unique prefix."""
    for trade in trades:
        if trade.id == prefix:
            return trade.id
    matches = [t.id for t in trades if t.id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def filter_options(func):
    """Attach the journal filter options to a command."""
    options = [
        click.option("--range", "date_range", type=click.Choice(["ALL", "7D", "30D", "90D"]),
                     default="ALL", show_default=True, help="Rolling date window."),
        click.option("--instrument", default="ALL", show_default=True, help="Instrument filter."),
        click.option("--result", type=click.Choice(["ALL", "WINS", "LOSSES"]),
                     default="ALL", show_default=True, help="Wins or losses only."),
        click.option("--alignment", type=click.Choice(["ALL", "With", "Against", "Neutral"]),
                     default="ALL", show_default=True, help="Macro alignment filter."),
        click.option("--plan", type=click.Choice(["ALL", "YES", "NO"]),
                     default="ALL", show_default=True, help="Plan followed filter."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def build_filter(date_range: str, instrument: str, result: str, alignment: str, plan: str) -> JournalFilter:
    instrument = instrument.upper()
    return JournalFilter(
        date_range=date_range,
        instrument="ALL" if instrument == "ALL" else instrument,
        result=result,
        alignment=alignment,
        plan=plan,
    )


@click.group()
def journal() -> None:
    """Log trades and review journal statistics.

    \b
    Examples:
      propdash journal add --instrument XAUUSD --result 2
      propdash journal list --range 30D --result WINS
      propdash journal stats --alignment With
      propdash journal delete 3f2a
    """
    pass


@journal.command("add")
@click.option("--date", "trade_date", default=None, help="Trade date (YYYY-MM-DD). Defaults to today.")
@click.option("--instrument", default=None, help="Instrument (default: first configured).")
@click.option("--direction", type=click.Choice(["LONG", "SHORT"], case_sensitive=False), default="LONG")
@click.option("--session", default=None, help="Session (default: London).")
@click.option("--setup", default="", help="Setup description.")
@click.option("--macro", type=click.Choice(["With", "Against", "Neutral"]), default="With",
              help="Macro alignment.")
@click.option("--risk", type=float, default=None, help="Risk percent of account.")
@click.option("--rr", type=float, default=None, help="Planned reward:risk.")
@click.option("--result", "result_r", type=float, required=True, help="Result in R (e.g., 2 or -1).")
@click.option("--followed/--broke-plan", "followed_plan", default=True, help="Whether the plan was followed.")
@click.option("--note", default="", help="Emotion note.")
@click.pass_context
def add_trade(
    ctx: click.Context,
    trade_date: Optional[str],
    instrument: Optional[str],
    direction: str,
    session: Optional[str],
    setup: str,
    macro: str,
    risk: Optional[float],
    rr: Optional[float],
    result_r: float,
    followed_plan: bool,
    note: str,
) -> None:
    """Log a new trade."""
    config = _get_config(ctx)
    journal_config = config["journal"]
    store = _get_journal_store(config)

    try:
        trade = store.add(
            date=trade_date or date.today().isoformat(),
            instrument=(instrument or journal_config["instruments"][0]).upper(),
            direction=direction.upper(),
            session=session or "London",
            setup=setup,
            macro_alignment=macro,
            risk_percent=risk if risk is not None else journal_config["default_risk_percent"],
            planned_rr=rr if rr is not None else journal_config["default_planned_rr"],
            result_r=result_r,
            followed_plan=followed_plan,
            emotion_note=note,
        )
    except ValidationError as e:
        _error(f"Invalid trade:\n\n{_validation_message(e)}")

    console.print(
        f"[green]✓ Logged {trade.instrument} {trade.direction} "
        f"{format_r(trade.result_r)}[/green] [dim]({trade.id[:8]})[/dim]"
    )


@journal.command("edit")
@click.argument("trade_id")
@click.option("--date", "trade_date", default=None)
@click.option("--instrument", default=None)
@click.option("--direction", type=click.Choice(["LONG", "SHORT"], case_sensitive=False), default=None)
@click.option("--session", default=None)
@click.option("--setup", default=None)
@click.option("--macro", type=click.Choice(["With", "Against", "Neutral"]), default=None)
@click.option("--risk", type=float, default=None)
@click.option("--rr", type=float, default=None)
@click.option("--result", "result_r", type=float, default=None)
@click.option("--followed/--broke-plan", "followed_plan", default=None)
@click.option("--note", default=None)
@click.pass_context
def edit_trade(ctx: click.Context, trade_id: str, **options) -> None:
    """Edit an existing trade.

    TRADE_ID is the trade id or a unique prefix of it. Only the given
    options are changed.
    """
    store = _get_journal_store(_get_config(ctx))

    resolved = resolve_trade_id(store.trades, trade_id)
    if resolved is None:
        _error(f"No trade matches '{trade_id}'")

    names = {
        "trade_date": "date",
        "macro": "macro_alignment",
        "risk": "risk_percent",
        "rr": "planned_rr",
        "note": "emotion_note",
    }
    changes = {names.get(k, k): v for k, v in options.items() if v is not None}
    for key in ("instrument", "direction"):
        if key in changes:
            changes[key] = changes[key].upper()

    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    try:
        trade = store.update(resolved, **changes)
    except ValidationError as e:
        _error(f"Invalid trade:\n\n{_validation_message(e)}")

    console.print(f"[green]✓ Updated trade {trade.id[:8]}[/green]")


@journal.command("delete")
@click.argument("trade_id")
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip confirmation.")
@click.pass_context
def delete_trade(ctx: click.Context, trade_id: str, yes: bool) -> None:
    """Delete a trade after confirmation."""
    store = _get_journal_store(_get_config(ctx))

    resolved = resolve_trade_id(store.trades, trade_id)
    if resolved is None:
        _error(f"No trade matches '{trade_id}'")

    if not yes and not click.confirm("Delete this trade?", default=False):
        console.print("[dim]Cancelled[/dim]")
        return

    store.delete(resolved)
    console.print(f"[green]✓ Deleted trade {resolved[:8]}[/green]")


def _trades_table(report: JournalReport) -> Table:
    table = Table(
        title="Trade Journal",
        show_header=True,
        header_style="bold cyan",
    )

    table.add_column("Date", style="bold")
    table.add_column("Instrument")
    table.add_column("Dir", justify="center")
    table.add_column("Session")
    table.add_column("Setup", max_width=24)
    table.add_column("Macro")
    table.add_column("Risk %", justify="right")
    table.add_column("RR", justify="right")
    table.add_column("Result", justify="right")
    table.add_column("Plan", justify="center")
    table.add_column("Id", style="dim")

    for trade in report.trades:
        dir_color = "green" if trade.direction == "LONG" else "red"
        color = signed_color(trade.result_r)
        table.add_row(
            trade.date,
            trade.instrument,
            f"[{dir_color}]{trade.direction}[/{dir_color}]",
            trade.session,
            trade.setup or "-",
            trade.macro_alignment,
            f"{trade.risk_percent:.2f}",
            f"{trade.planned_rr:.1f}",
            f"[{color}]{format_r(trade.result_r)}[/{color}]",
            "✓" if trade.followed_plan else "✗",
            trade.id[:8],
        )
    return table


@journal.command("list")
@filter_options
@click.pass_context
def list_trades(ctx: click.Context, date_range, instrument, result, alignment, plan) -> None:
    """Show filtered trades, newest first."""
    store = _get_journal_store(_get_config(ctx))
    criteria = build_filter(date_range, instrument, result, alignment, plan)
    report = build_journal_report(store.trades, criteria)

    if not report.trades:
        known = instrument_options(store.trades)
        hint = f"\n[dim]Instruments logged: {', '.join(known)}[/dim]" if known else ""
        console.print(Panel(
            f"[dim]No trades found[/dim]{hint}",
            title="[bold]Trade Journal[/bold]",
            border_style="dim",
        ))
        return

    console.print(_trades_table(report))
    console.print(f"\n[bold]Trades:[/bold] {report.summary.total}")


@journal.command("stats")
@filter_options
@click.option("--curve/--no-curve", default=True, help="Show the equity curve.")
@click.pass_context
def stats(ctx: click.Context, date_range, instrument, result, alignment, plan, curve: bool) -> None:
    """Show journal KPIs for the filtered trades."""
    store = _get_journal_store(_get_config(ctx))
    criteria = build_filter(date_range, instrument, result, alignment, plan)
    report = build_journal_report(store.trades, criteria)

    summary = report.summary
    total_color = signed_color(summary.total_r)
    console.print(Panel(
        f"Trades:    [bold]{summary.total}[/bold]\n"
        f"Win rate:  [bold]{summary.win_rate:.1f}%[/bold]\n"
        f"Avg R:     [{signed_color(summary.avg_r)}]{format_r(summary.avg_r)}[/{signed_color(summary.avg_r)}]\n"
        f"Total R:   [{total_color}]{format_r(summary.total_r)}[/{total_color}]\n"
        f"{'─' * 30}\n"
        f"Avg risk:  {report.risk.avg_risk:.2f}%\n"
        f"Max risk:  {report.risk.max_risk:.2f}%",
        title="[bold cyan]Journal Summary[/bold cyan]",
        border_style="cyan",
    ))

    splits = Table(title="Discipline", show_header=True, header_style="bold cyan")
    splits.add_column("Group", style="bold")
    splits.add_column("Trades", justify="right")
    splits.add_column("Avg R", justify="right")
    splits.add_row("With macro", str(report.alignment.with_macro.count),
                   format_r(report.alignment.with_macro.avg_r))
    splits.add_row("Against macro", str(report.alignment.against_macro.count),
                   format_r(report.alignment.against_macro.avg_r))
    splits.add_row("Followed plan", str(report.plan.count_yes), format_r(report.plan.avg_yes))
    splits.add_row("Broke plan", str(report.plan.count_no), format_r(report.plan.avg_no))
    console.print(splits)

    if curve and report.equity:
        equity = Table(title="Equity Curve", show_header=True, header_style="bold cyan")
        equity.add_column("Date", style="bold")
        equity.add_column("Cumulative R", justify="right")
        for point in report.equity:
            color = signed_color(point.value)
            equity.add_row(point.date, f"[{color}]{format_r(point.value)}[/{color}]")
        console.print(equity)
