from __future__ import annotations

from pathlib import Path

from conftest import make_set

from hxlint.diagnostics import Severity
from hxlint.documents import DocumentSet
from hxlint.runtime.options import LintOptions
from hxlint.validation import Validator, validate


def test_fixture_configuration_is_valid(helix_dir: Path) -> None:
    report = validate(DocumentSet.discover(helix_dir))

    assert report.errors == []
    assert report.warnings == []
    assert set(report.codes()) == {"server-unused"}


def test_ret_sequence_is_single_binding() -> None:
    documents = make_set(
        """
        [keys.normal]
        "ret" = ["move_line_down", "goto_first_nonwhitespace"]
        """
    )

    model = Validator().build(documents)
    result = model.resolver().resolve("normal", ["ret"])

    assert model.keymaps.stats().binding_count == 1
    assert result.status == "match"
    assert result.binding is not None
    assert result.binding.action.describe() == (
        "sequence of 2 commands: move_line_down, goto_first_nonwhitespace"
    )


def test_duplicate_key_sequence_reported() -> None:
    report = validate(
        make_set(
            """
            [keys.normal]
            S-A-up = "expand_selection"
            A-S-up = "shrink_selection"
            """
        )
    )

    assert report.codes() == ["keys-duplicate"]
    assert "A-S-up" in report.errors[0].message
    assert report.errors[0].path == "keys.normal.A-S-up"


def test_duplicates_across_documents() -> None:
    first = '[keys.insert]\n"A-i" = "insert_at_line_end"\n'
    second = '[keys.insert]\n"A-i" = "signature_help"\n'

    report = validate(make_set(first, second))
    layered = validate(make_set(first, second), LintOptions(layered=True))

    assert report.codes() == ["keys-duplicate"]
    assert "first bound in doc0.toml" in report.errors[0].message
    assert report.errors[0].location == "doc1.toml:keys.insert.A-i"
    assert layered.codes() == []


def test_binding_over_group_is_shadowed() -> None:
    report = validate(
        make_set(
            '[keys.normal]\nspace = "file_picker"\n',
            '[keys.normal.space]\nq = ":quit"\n',
        )
    )

    assert report.codes() == ["keys-shadowed-prefix"]
    assert report.diagnostics[0].severity is Severity.WARNING
    assert report.exit_code() == 0
    assert report.exit_code(strict=True) == 1


def test_bad_keys_and_settings_collected() -> None:
    report = validate(
        make_set(
            """
            theme = 7

            [editor]
            scrolloff = "lots"
            bufferline = "sometimes"
            brightness = 3

            [keys.normal]
            "C--" = "goto_line_end"

            [keys.visual]
            x = "delete_selection"
            """
        )
    )

    assert sorted(report.codes()) == [
        "keys-chord",
        "keys-mode",
        "setting-choice",
        "setting-type",
        "setting-unknown",
        "theme-type",
    ]
    assert len(report.errors) == 5


def test_language_checks() -> None:
    report = validate(
        make_set(
            """
            [language-server.copilot]
            command = "copilot"
            args = ["--stdio"]

            [language-server.efm]
            command = "efm-langserver"

            [[language]]
            name = "typescript"
            language-servers = [
              { name = "typescript-language-server", except-features = ["formatting"] },
              "copilot",
              "mystery-lsp",
            ]

            [[language]]
            name = "typescript"
            """
        )
    )

    assert sorted(report.codes()) == [
        "language-duplicate",
        "server-feature",
        "server-unresolved",
        "server-unused",
    ]


def test_language_name_repeated_across_documents() -> None:
    first = '[[language]]\nname = "rust"\nauto-format = true\n'
    second = '[[language]]\nname = "rust"\nauto-format = false\n'

    assert validate(make_set(first, second)).codes() == ["language-duplicate"]
    assert validate(
        make_set(first, second), LintOptions(layered=True)
    ).codes() == []


def test_layered_language_without_string_name() -> None:
    report = validate(
        make_set(
            '[[language]]\nname = "rust"\n',
            '[[language]]\nname = ["rust"]\n',
        ),
        LintOptions(layered=True),
    )

    assert report.codes() == ["language-shape"]


def test_default_editor_servers_resolve() -> None:
    report = validate(
        make_set(
            """
            [[language]]
            name = "web"
            language-servers = ["deno-lsp", "tailwindcss-ls", "elm-language-server"]
            """
        )
    )

    assert report.codes() == []


def test_extra_servers_and_disabled_checks() -> None:
    text = '[[language]]\nname = "zig"\nlanguage-servers = ["zig-copilot"]\n'

    assert validate(make_set(text)).codes() == ["server-unresolved"]
    assert validate(make_set(text), LintOptions(extra_servers=("zig-copilot",))).ok()
    assert validate(
        make_set(text), LintOptions(disabled_checks=("server-unresolved",))
    ).codes() == []


def test_settings_table_from_model(helix_dir: Path) -> None:
    model = Validator().build(DocumentSet.discover(helix_dir))

    assert model.settings.theme == "alexandria"
    assert model.settings.get("editor.cursor-shape.insert") == "bar"
    assert model.settings.get("editor.auto-save.after-delay.timeout") == 300
