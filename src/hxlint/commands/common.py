"""Helpers shared by the CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape as escape_markup

from hxlint.documents import DocumentSet, load_document
from hxlint.errors import HxlintError
from hxlint.runtime.options import LintOptions, default_config_dir

console = Console()
err_console = Console(stderr=True)


def collect_documents(
    paths: Optional[Sequence[Path]], config_dir: Optional[Path]
) -> DocumentSet:
    """Files are loaded as given; directories are searched for the editor files."""

    if not paths:
        return DocumentSet.discover(config_dir or default_config_dir())
    documents = DocumentSet()
    for path in paths:
        if path.is_dir():
            for document in DocumentSet.discover(path):
                documents.add(document)
        else:
            documents.add(load_document(path))
    return documents


def load_or_exit(
    paths: Optional[Sequence[Path]], config_dir: Optional[Path]
) -> DocumentSet:
    try:
        documents = collect_documents(paths, config_dir)
    except HxlintError as e:
        err_console.print(f"[bold red]❌ Error:[/] {escape_markup(str(e))}")
        raise typer.Exit(2)
    if not len(documents):
        err_console.print("[bold red]❌ Error:[/] no configuration documents found")
        raise typer.Exit(2)
    return documents


def load_options(strict: bool = False, layered: bool = False) -> LintOptions:
    options = LintOptions.load(Path.cwd())
    if strict or layered:
        options = options.merged(
            {"strict": strict or options.strict, "layered": layered or options.layered}
        )
    return options
