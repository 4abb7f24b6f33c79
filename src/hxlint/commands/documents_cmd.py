"""Document level commands: languages, merge, roundtrip."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape as escape_markup
from rich.table import Table

from hxlint.documents import (
    dump_document,
    load_document,
    merge_tables,
    round_trip,
    semantically_equal,
    write_document,
)
from hxlint.errors import HxlintError
from hxlint.validation import Validator

from .common import console, err_console, load_options, load_or_exit


def languages(
    paths: Optional[List[Path]] = typer.Argument(None, help="Files or directories"),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir"),
):
    """List languages with their formatter and language servers."""
    model = Validator(load_options()).build(load_or_exit(paths, config_dir))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Language", style="cyan")
    table.add_column("Formatter")
    table.add_column("Language servers", overflow="fold")
    for entry in model.languages.languages():
        formatter = " ".join(entry.formatter.argv) if entry.formatter else "-"
        servers = []
        for ref in entry.language_servers:
            label = ref.name
            if ref.except_features:
                label += f" (except {', '.join(ref.except_features)})"
            elif ref.only_features:
                label += f" (only {', '.join(ref.only_features)})"
            servers.append(label)
        table.add_row(
            entry.name, escape_markup(formatter), escape_markup(", ".join(servers) or "-")
        )
    console.print(table)


def merge(
    base: Path = typer.Argument(..., help="Lower priority document"),
    override: Path = typer.Argument(..., help="Higher priority document"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write here instead of stdout"
    ),
):
    """Layer OVERRIDE over BASE the way the editor does."""
    try:
        merged = merge_tables(load_document(base).data, load_document(override).data)
        if output is None:
            typer.echo(dump_document(merged), nl=False)
            return
        write_document(merged, output)
    except HxlintError as e:
        err_console.print(f"[bold red]❌ Error:[/] {escape_markup(str(e))}")
        raise typer.Exit(2)
    console.print(f"[bold green]✔[/] Merged document written to [underline]{output}[/]")


def roundtrip(path: Path = typer.Argument(..., help="Document to check")):
    """Check that a document survives a write/parse cycle unchanged."""
    try:
        document = load_document(path)
        again = round_trip(document.data)
    except HxlintError as e:
        err_console.print(f"[bold red]❌ Error:[/] {escape_markup(str(e))}")
        raise typer.Exit(2)
    if semantically_equal(document.data, again):
        console.print(f"[bold green]✔[/] {path} round-trips without semantic change")
        return
    console.print(f"[bold red]❌[/] {path} changes meaning when re-serialised")
    raise typer.Exit(1)
