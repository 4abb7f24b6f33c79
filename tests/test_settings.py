from __future__ import annotations

import tomllib

from hxlint.settings import (
    SettingEntry,
    SettingsTable,
    check_setting,
    check_theme,
    flatten_settings,
)


def codes(entry: SettingEntry) -> list[str]:
    return [d.code for d in check_setting(entry)]


def test_flatten_produces_dotted_paths() -> None:
    data = tomllib.loads(
        """
        theme = "alexandria"

        [editor]
        scrolloff = 15

        [editor.cursor-shape]
        insert = "bar"

        [editor.auto-save]
        after-delay.enable = true

        [keys.normal]
        G = "goto_file_end"
        """
    )

    paths = [entry.path for entry in flatten_settings(data)]

    assert paths == [
        "editor.scrolloff",
        "editor.cursor-shape.insert",
        "editor.auto-save.after-delay.enable",
    ]


def test_auto_pairs_stays_one_entry() -> None:
    data = {"editor": {"auto-pairs": {"(": ")", "<": ">"}}}

    entries = flatten_settings(data)

    assert [e.path for e in entries] == ["editor.auto-pairs"]
    assert check_setting(entries[0]) == []


def test_valid_values_pass() -> None:
    assert codes(SettingEntry("editor.scrolloff", 15)) == []
    assert codes(SettingEntry("editor.bufferline", "multiple")) == []
    assert codes(SettingEntry("editor.whitespace.characters.newline", "⏎")) == []
    assert codes(SettingEntry("editor.statusline.right", ["diagnostics", "position"])) == []


def test_wrong_type_is_error() -> None:
    assert codes(SettingEntry("editor.scrolloff", "15")) == ["setting-type"]
    assert codes(SettingEntry("editor.scrolloff", True)) == ["setting-type"]
    assert codes(SettingEntry("editor.true-color", 1)) == ["setting-type"]


def test_choice_and_character_checks() -> None:
    assert codes(SettingEntry("editor.cursor-shape.insert", "beam")) == ["setting-choice"]
    assert codes(SettingEntry("editor.indent-guides.character", "||")) == ["setting-type"]
    assert codes(SettingEntry("editor.statusline.left", ["mode", "clock"])) == [
        "setting-choice"
    ]


def test_auto_pairs_must_be_single_characters() -> None:
    entry = SettingEntry("editor.auto-pairs", {"((": ")"})

    assert codes(entry) == ["setting-type"]


def test_unknown_option_is_warning() -> None:
    (diagnostic,) = check_setting(SettingEntry("editor.cursor-shape.visual", "bar"))

    assert diagnostic.code == "setting-unknown"
    assert diagnostic.severity.value == "warning"
    assert "known group 'editor.cursor-shape'" in diagnostic.message
    assert check_setting(SettingEntry("editor.nope", 1), allow_unknown=True) == []


def test_theme_checks() -> None:
    assert check_theme("alexandria") == []
    assert check_theme({"light": "day", "dark": "night"}) == []
    assert [d.code for d in check_theme(3)] == ["theme-type"]
    assert [d.code for d in check_theme({"dusk": "x"})] == ["theme-type"]


def test_settings_table_lookup() -> None:
    table = SettingsTable.from_document(
        {"theme": "alexandria", "editor": {"idle-timeout": 0, "lsp": {"enable": False}}}
    )

    assert table.theme == "alexandria"
    assert table.get("editor.idle-timeout") == 0
    assert table.get("editor.lsp.enable") is False
    assert table.get("editor.missing", "fallback") == "fallback"
    assert "editor.lsp.enable" in table
    assert len(table) == 2
