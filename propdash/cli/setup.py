"""Setup commands for propdash CLI."""

import click
from rich.console import Console
from rich.panel import Panel

from propdash.config import get_config_path, write_template_config

console = Console()


@click.command()
@click.option("--force", is_flag=True, default=False, help="Overwrite an existing config.")
@click.pass_context
def init(ctx: click.Context, force: bool) -> None:
    """Write a template config file.

    \b
    Examples:
      propdash init
      propdash init --force
    """
    from pathlib import Path

    config_path = Path((ctx.obj or {}).get("config_path") or get_config_path())

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists at {config_path}[/yellow]")
        console.print("[dim]Use --force to overwrite.[/dim]")
        return

    written = write_template_config(config_path)
    console.print(Panel(
        f"[green]✓ Config written to[/green] {written}\n\n"
        "[dim]Edit it to change instruments, sessions or the database path.[/dim]",
        title="[bold cyan]propdash[/bold cyan]",
        border_style="cyan",
    ))
