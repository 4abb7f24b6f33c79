"""Option schema for the ``editor`` section of config.toml."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Mapping

OptionKind = Literal[
    "bool",
    "int",
    "str",
    "char",
    "list[str]",
    "list[int]",
    "mapping",
    "bool|mapping",
    "any",
]


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Type and allowed values of one dotted option path."""

    path: str
    kind: OptionKind
    choices: tuple[str, ...] = ()
    elements: tuple[str, ...] = ()
    description: str = ""

    @property
    def is_leaf_table(self) -> bool:
        return self.kind in ("mapping", "bool|mapping", "any")


CURSOR_SHAPES = ("block", "bar", "underline", "hidden")
SEVERITIES = ("disable", "hint", "info", "warning", "error")
WHITESPACE_RENDER = ("all", "none")

STATUSLINE_ELEMENTS: tuple[str, ...] = (
    "mode",
    "spinner",
    "file-name",
    "file-absolute-path",
    "file-base-name",
    "file-modification-indicator",
    "file-encoding",
    "file-line-ending",
    "file-indent-style",
    "read-only-indicator",
    "file-type",
    "diagnostics",
    "workspace-diagnostics",
    "selections",
    "primary-selection-length",
    "position",
    "position-percentage",
    "total-line-numbers",
    "separator",
    "spacer",
    "version-control",
    "register",
    "current-working-directory",
)

GUTTER_ELEMENTS: tuple[str, ...] = ("diagnostics", "spacer", "line-numbers", "diff")


def _specs(*specs: OptionSpec) -> dict[str, OptionSpec]:
    return {spec.path: spec for spec in specs}


SCHEMA: Mapping[str, OptionSpec] = _specs(
    OptionSpec("editor.scrolloff", "int", description="Lines of padding around the cursor"),
    OptionSpec("editor.mouse", "bool"),
    OptionSpec("editor.middle-click-paste", "bool"),
    OptionSpec("editor.scroll-lines", "int"),
    OptionSpec("editor.shell", "list[str]"),
    OptionSpec("editor.line-number", "str", choices=("absolute", "relative")),
    OptionSpec("editor.cursorline", "bool"),
    OptionSpec("editor.cursorcolumn", "bool"),
    OptionSpec("editor.continue-comments", "bool"),
    OptionSpec("editor.gutters", "list[str]", elements=GUTTER_ELEMENTS),
    OptionSpec("editor.gutters.layout", "list[str]", elements=GUTTER_ELEMENTS),
    OptionSpec("editor.gutters.line-numbers.min-width", "int"),
    OptionSpec("editor.auto-completion", "bool"),
    OptionSpec("editor.path-completion", "bool"),
    OptionSpec("editor.auto-format", "bool"),
    OptionSpec("editor.idle-timeout", "int", description="Milliseconds before idle work runs"),
    OptionSpec("editor.completion-timeout", "int"),
    OptionSpec("editor.preview-completion-insert", "bool"),
    OptionSpec("editor.completion-trigger-len", "int"),
    OptionSpec("editor.completion-replace", "bool"),
    OptionSpec("editor.auto-info", "bool"),
    OptionSpec("editor.true-color", "bool"),
    OptionSpec("editor.undercurl", "bool"),
    OptionSpec("editor.rulers", "list[int]"),
    OptionSpec("editor.bufferline", "str", choices=("never", "always", "multiple")),
    OptionSpec("editor.color-modes", "bool"),
    OptionSpec("editor.text-width", "int"),
    OptionSpec("editor.workspace-lsp-roots", "list[str]"),
    OptionSpec(
        "editor.default-line-ending",
        "str",
        choices=("native", "lf", "crlf", "ff", "cr", "nel"),
    ),
    OptionSpec("editor.insert-final-newline", "bool"),
    OptionSpec("editor.trim-final-newlines", "bool"),
    OptionSpec("editor.trim-trailing-whitespace", "bool"),
    OptionSpec("editor.popup-border", "str", choices=("none", "popup", "menu", "all")),
    OptionSpec(
        "editor.indent-heuristic", "str", choices=("simple", "tree-sitter", "hybrid")
    ),
    OptionSpec("editor.jump-label-alphabet", "str"),
    OptionSpec("editor.end-of-line-diagnostics", "str", choices=SEVERITIES),
    OptionSpec("editor.clipboard-provider", "any"),
    OptionSpec("editor.editor-config", "bool"),
    OptionSpec("editor.default-yank-register", "char"),
    # lsp
    OptionSpec("editor.lsp.enable", "bool"),
    OptionSpec("editor.lsp.display-messages", "bool"),
    OptionSpec("editor.lsp.display-progress-messages", "bool"),
    OptionSpec("editor.lsp.auto-signature-help", "bool"),
    OptionSpec("editor.lsp.display-inlay-hints", "bool"),
    OptionSpec("editor.lsp.display-color-swatches", "bool"),
    OptionSpec("editor.lsp.display-signature-help-docs", "bool"),
    OptionSpec("editor.lsp.snippets", "bool"),
    OptionSpec("editor.lsp.goto-reference-include-declaration", "bool"),
    # cursor shape
    OptionSpec("editor.cursor-shape.normal", "str", choices=CURSOR_SHAPES),
    OptionSpec("editor.cursor-shape.insert", "str", choices=CURSOR_SHAPES),
    OptionSpec("editor.cursor-shape.select", "str", choices=CURSOR_SHAPES),
    # statusline
    OptionSpec("editor.statusline.left", "list[str]", elements=STATUSLINE_ELEMENTS),
    OptionSpec("editor.statusline.center", "list[str]", elements=STATUSLINE_ELEMENTS),
    OptionSpec("editor.statusline.right", "list[str]", elements=STATUSLINE_ELEMENTS),
    OptionSpec("editor.statusline.separator", "str"),
    OptionSpec("editor.statusline.mode.normal", "str"),
    OptionSpec("editor.statusline.mode.insert", "str"),
    OptionSpec("editor.statusline.mode.select", "str"),
    OptionSpec("editor.statusline.diagnostics", "list[str]", elements=SEVERITIES[1:]),
    OptionSpec(
        "editor.statusline.workspace-diagnostics", "list[str]", elements=SEVERITIES[1:]
    ),
    # auto pairs: `false` or a table of opening -> closing characters
    OptionSpec("editor.auto-pairs", "bool|mapping"),
    # auto save
    OptionSpec("editor.auto-save.focus-lost", "bool"),
    OptionSpec("editor.auto-save.after-delay.enable", "bool"),
    OptionSpec("editor.auto-save.after-delay.timeout", "int"),
    # search
    OptionSpec("editor.search.smart-case", "bool"),
    OptionSpec("editor.search.wrap-around", "bool"),
    # whitespace
    OptionSpec("editor.whitespace.render", "str", choices=WHITESPACE_RENDER),
    *(
        OptionSpec(f"editor.whitespace.render.{name}", "str", choices=WHITESPACE_RENDER)
        for name in ("space", "nbsp", "nnbsp", "tab", "newline", "tabpad")
    ),
    *(
        OptionSpec(f"editor.whitespace.characters.{name}", "char")
        for name in ("space", "nbsp", "nnbsp", "tab", "newline", "tabpad")
    ),
    # indent guides
    OptionSpec("editor.indent-guides.render", "bool"),
    OptionSpec("editor.indent-guides.character", "char"),
    OptionSpec("editor.indent-guides.skip-levels", "int"),
    # soft wrap
    OptionSpec("editor.soft-wrap.enable", "bool"),
    OptionSpec("editor.soft-wrap.max-wrap", "int"),
    OptionSpec("editor.soft-wrap.max-indent-retain", "int"),
    OptionSpec("editor.soft-wrap.wrap-indicator", "str"),
    OptionSpec("editor.soft-wrap.wrap-at-text-width", "bool"),
    # file picker
    *(
        OptionSpec(f"editor.file-picker.{name}", "bool")
        for name in (
            "hidden",
            "follow-symlinks",
            "deduplicate-links",
            "parents",
            "ignore",
            "git-ignore",
            "git-global",
            "git-exclude",
        )
    ),
    OptionSpec("editor.file-picker.max-depth", "int"),
    # inline diagnostics
    OptionSpec("editor.inline-diagnostics.cursor-line", "str", choices=SEVERITIES),
    OptionSpec("editor.inline-diagnostics.other-lines", "str", choices=SEVERITIES),
    OptionSpec("editor.inline-diagnostics.prefix-len", "int"),
    OptionSpec("editor.inline-diagnostics.max-wrap", "int"),
    OptionSpec("editor.inline-diagnostics.max-diagnostics", "int"),
    # smart tab
    OptionSpec("editor.smart-tab.enable", "bool"),
    OptionSpec("editor.smart-tab.supersede-menu", "bool"),
)


def lookup(path: str) -> OptionSpec | None:
    return SCHEMA.get(path)


def is_known_group(path: str) -> bool:
    """True when ``path`` is a table that contains known options."""

    prefix = f"{path}."
    return any(candidate.startswith(prefix) for candidate in SCHEMA)


__all__ = [
    "OptionSpec",
    "SCHEMA",
    "STATUSLINE_ELEMENTS",
    "CURSOR_SHAPES",
    "lookup",
    "is_known_group",
]
