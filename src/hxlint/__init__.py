"""Checker for Helix-style editor configuration documents."""

__all__ = [
    "commands",
    "diagnostics",
    "documents",
    "errors",
    "keymaps",
    "languages",
    "runtime",
    "settings",
    "validation",
]

__version__ = "0.1.0"
