"""`hxlint keys`: inspect keybinding tables."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape as escape_markup
from rich.table import Table

from hxlint.errors import ChordSyntaxError
from hxlint.keymaps import MODES
from hxlint.validation import Validator

from .common import console, err_console, load_options, load_or_exit

app = typer.Typer()


@app.command("list")
def list_bindings(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories"),
    mode: Optional[str] = typer.Option(None, "--mode", "-m", help="Only this mode"),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir"),
):
    """List every binding with what it runs."""
    if mode is not None and mode not in MODES:
        err_console.print(f"[bold red]❌ Error:[/] unknown mode '{mode}'")
        raise typer.Exit(2)
    model = Validator(load_options()).build(load_or_exit(paths, config_dir))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Mode", style="cyan")
    table.add_column("Keys", style="bold")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Commands", overflow="fold")
    count = 0
    for binding in model.keymaps.iter_bindings(mode):
        action = binding.action
        kind = action.kind
        if action.shell_invocations():
            kind += " [magenta](shell)[/]"
        table.add_row(
            binding.mode,
            escape_markup(binding.key_signature),
            kind,
            escape_markup(", ".join(action.commands)),
        )
        count += 1
    console.print(table)
    console.print(f"[dim]{count} binding(s)[/]")


@app.command("resolve")
def resolve(
    mode: str = typer.Argument(..., help="normal, insert or select"),
    keys: str = typer.Argument(..., help="Space separated chords, e.g. 'space f'"),
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories"),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir"),
):
    """Show what a chord sequence is bound to."""
    model = Validator(load_options()).build(load_or_exit(paths, config_dir))
    try:
        result = model.resolver().resolve(mode, keys.split())
    except ChordSyntaxError as e:
        err_console.print(f"[bold red]❌ Error:[/] {escape_markup(str(e))}")
        raise typer.Exit(2)

    if result.status == "match" and result.binding is not None:
        console.print(escape_markup(result.binding.describe()))
    elif result.status == "pending":
        console.print(
            f"[yellow]pending[/]: '{escape_markup(keys)}' opens a group; next keys: "
            + (escape_markup(", ".join(result.next_expected)) or "none (empty group)")
        )
    else:
        console.print(f"[red]miss[/]: '{escape_markup(keys)}' is not bound in {mode} mode")
        raise typer.Exit(1)
