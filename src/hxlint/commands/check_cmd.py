"""`hxlint check`: validate configuration documents."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape as escape_markup
from rich.table import Table

from hxlint.diagnostics import Report, Severity
from hxlint.validation import Validator

from .common import console, load_options, load_or_exit

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "dim",
}


def render_report(report: Report) -> None:
    if not len(report):
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Severity", no_wrap=True)
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Location", overflow="fold")
    table.add_column("Message", overflow="fold")
    for diagnostic in report:
        style = SEVERITY_STYLES[diagnostic.severity]
        table.add_row(
            f"[{style}]{diagnostic.severity.value}[/]",
            diagnostic.code,
            escape_markup(diagnostic.location),
            escape_markup(diagnostic.message),
        )
    console.print(table)


def check(
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Files or directories to check (default: the editor config dir)"
    ),
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir", help="Editor config directory to search"
    ),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
    layered: bool = typer.Option(
        False, "--layered", help="Merge the documents in order before checking"
    ),
):
    """Validate keybindings, editor options and language wiring."""
    documents = load_or_exit(paths, config_dir)
    options = load_options(strict=strict, layered=layered)
    report = Validator(options).validate(documents)

    render_report(report)
    errors, warnings = len(report.errors), len(report.warnings)
    if report.ok(strict=options.strict):
        console.print(
            f"[bold green]✔[/] {len(documents)} document(s) valid"
            + (f" ([yellow]{warnings} warning(s)[/])" if warnings else "")
        )
    else:
        console.print(
            f"[bold red]❌ {errors} error(s)[/], [yellow]{warnings} warning(s)[/]"
        )
    raise typer.Exit(report.exit_code(strict=options.strict))
