from __future__ import annotations

import pytest

from hxlint.errors import ChordSyntaxError
from hxlint.keymaps import Action, Binding, KeyChord, KeySequence, is_shell_invocation


def test_chord_parses_modifiers_and_key() -> None:
    chord = KeyChord.parse("C-n")

    assert chord.key == "n"
    assert chord.modifiers == ("C",)
    assert chord.token == "C-n"


def test_chord_modifier_order_is_normalized() -> None:
    assert KeyChord.parse("S-A-up") == KeyChord.parse("A-S-up")
    assert KeyChord.parse("S-C-down").token == "C-S-down"


def test_chord_aliases() -> None:
    assert KeyChord.parse(" ").token == "space"
    assert KeyChord.parse("Cmd-s") == KeyChord.parse("Meta-s")


@pytest.mark.parametrize(
    "token",
    ["§", '"', "A-'", "A-=", "minus", "F12", "A-minus", "A-lt", "gt", "capslock", "C-menu"],
)
def test_chord_accepts_editor_tokens(token: str) -> None:
    assert KeyChord.parse(token).key


@pytest.mark.parametrize("token", ["", "-", "C--", "X-a", "enter", "ab"])
def test_chord_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(ChordSyntaxError):
        KeyChord.parse(token)


def test_sequence_parse_and_signature() -> None:
    sequence = KeySequence.parse("space space s")

    assert sequence.tokens == ("space", "space", "s")
    assert sequence.signature == "space space s"
    assert sequence.startswith(KeySequence.parse("space"))
    assert not KeySequence.parse("space").startswith(sequence)


def test_sequence_requires_chords() -> None:
    with pytest.raises(ValueError):
        KeySequence(())


def test_action_from_list_is_one_sequence() -> None:
    action = Action.from_value(["move_line_down", "goto_first_nonwhitespace"])

    assert action.kind == "sequence"
    assert action.commands == ("move_line_down", "goto_first_nonwhitespace")
    assert action.describe().startswith("sequence of 2 commands")


def test_action_from_string_is_single_command() -> None:
    action = Action.from_value(":buffer-close")

    assert action.kind == "command"
    assert action.describe() == "command :buffer-close"


def test_action_rejects_non_strings() -> None:
    with pytest.raises(TypeError):
        Action.from_value(["ok", 3])
    with pytest.raises(TypeError):
        Action.from_value(42)
    with pytest.raises(ValueError):
        Action.from_value([])


def test_shell_invocations_are_kept_verbatim() -> None:
    blame = ":echo %sh{git blame -p %{buffer_name} | head -1}"
    action = Action.from_value([":write-all", ":insert-output lazygit", blame])

    assert action.shell_invocations() == (":insert-output lazygit", blame)
    assert is_shell_invocation(":pipe-to helix-ext search --current")
    assert not is_shell_invocation(":config-reload")


def test_binding_describe() -> None:
    binding = Binding(
        mode="normal",
        sequence=KeySequence.from_strings("ret"),
        action=Action.from_value(["move_line_down", "goto_first_nonwhitespace"]),
    )

    assert binding.id == "normal:ret"
    assert binding.describe() == (
        "[normal] ret -> sequence of 2 commands: "
        "move_line_down, goto_first_nonwhitespace"
    )
