"""Tests for linter options."""

from pathlib import Path

from hxlint.runtime.options import LintOptions, default_config_dir


class TestLintOptions:
    """Tests for LintOptions loading."""

    def test_default_values(self):
        """Defaults are permissive."""
        options = LintOptions()

        assert options.strict is False
        assert options.layered is False
        assert options.extra_servers == ()
        assert options.disabled_checks == ()

    def test_project_file_overrides(self, tmp_path: Path, monkeypatch):
        """A project .hxlint.toml is applied."""
        monkeypatch.delenv("HXLINT_STRICT", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        (tmp_path / ".hxlint.toml").write_text(
            'strict = true\nextra-servers = ["copilot"]\ndisable = ["server-unused"]\n'
        )

        options = LintOptions.load(tmp_path)

        assert options.strict is True
        assert options.extra_servers == ("copilot",)
        assert options.disabled_checks == ("server-unused",)

    def test_invalid_file_is_skipped(self, tmp_path: Path, monkeypatch):
        """Malformed TOML leaves defaults in place."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        (tmp_path / ".hxlint.toml").write_text("strict = \n")

        assert LintOptions.load(tmp_path).strict is False

    def test_environment_wins(self, tmp_path: Path, monkeypatch):
        """HXLINT_* variables override files."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        monkeypatch.setenv("HXLINT_STRICT", "1")
        monkeypatch.setenv("HXLINT_EXTRA_SERVERS", "zls-next, copilot")

        options = LintOptions.load()

        assert options.strict is True
        assert options.extra_servers == ("zls-next", "copilot")

    def test_default_config_dir_uses_xdg(self, tmp_path: Path, monkeypatch):
        """The editor directory follows XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert default_config_dir() == tmp_path / "helix"

    def test_user_file_follows_xdg(self, tmp_path: Path, monkeypatch):
        """The user file is looked up when options are loaded."""
        monkeypatch.delenv("HXLINT_STRICT", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        (tmp_path / "hxlint").mkdir()
        (tmp_path / "hxlint" / "config.toml").write_text("strict = true\n")

        assert LintOptions.user_file() == tmp_path / "hxlint" / "config.toml"
        assert LintOptions.load().strict is True

    def test_wrongly_typed_values_are_skipped(self):
        """Values of the wrong type leave the current option alone."""
        options = LintOptions(extra_servers=("zls-next",)).merged(
            {"strict": "false", "extra-servers": "copilot", "disable": ["server-unused"]}
        )

        assert options.strict is False
        assert options.extra_servers == ("zls-next",)
        assert options.disabled_checks == ("server-unused",)
