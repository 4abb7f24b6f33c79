#!/usr/bin/env python3
"""
hxlint - checker for Helix-style editor configuration
Main CLI entry point
"""

from __future__ import annotations

import typer

from hxlint.commands import check_cmd, documents_cmd, keys_cmd
from hxlint.runtime import telemetry

app = typer.Typer(
    name="hxlint",
    help="Validate and merge editor keybindings, options and language wiring",
    no_args_is_help=True,
    add_completion=False,
)

app.command(name="check")(check_cmd.check)
app.command(name="languages")(documents_cmd.languages)
app.command(name="merge")(documents_cmd.merge)
app.command(name="roundtrip")(documents_cmd.roundtrip)

app.add_typer(keys_cmd.app, name="keys", help="Inspect keybinding tables")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Errors only"),
) -> None:
    """
    hxlint - checker for config.toml and languages.toml

      check      - report duplicate keys, bad options, unresolved servers
      keys       - list bindings or resolve a chord sequence
      languages  - show language wiring
      merge      - layer one document over another
      roundtrip  - verify a document re-serialises without semantic change
    """
    if verbose:
        telemetry.configure(preset="development")
    elif quiet:
        telemetry.configure(preset="quiet")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
