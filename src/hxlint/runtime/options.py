"""Options controlling the linter itself (not the editor)."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping, Optional

from . import telemetry

logger = telemetry.get_logger("hxlint.options")


def _config_home() -> Path:
    return Path(os.environ.get("XDG_CONFIG_HOME") or (Path.home() / ".config"))


def default_config_dir() -> Path:
    """Directory the editor reads config.toml and languages.toml from."""

    return _config_home() / "helix"


def _split(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


_BOOL_KEYS = {
    "strict": "strict",
    "layered": "layered",
    "allow-unknown-settings": "allow_unknown_settings",
}
_LIST_KEYS = {"extra-servers": "extra_servers", "disable": "disabled_checks"}


@dataclass(frozen=True)
class LintOptions:
    """Linter settings.

    Priority (highest to lowest):
    1. ``HXLINT_*`` environment variables
    2. Project file (``.hxlint.toml`` in the project root)
    3. User file (``~/.config/hxlint/config.toml``)
    4. Defaults
    """

    extra_servers: tuple[str, ...] = ()
    strict: bool = False
    layered: bool = False
    disabled_checks: tuple[str, ...] = ()
    allow_unknown_settings: bool = False

    PROJECT_FILE = ".hxlint.toml"

    @classmethod
    def user_file(cls) -> Path:
        return _config_home() / "hxlint" / "config.toml"

    @classmethod
    def load(cls, project_path: Optional[Path] = None) -> "LintOptions":
        options = cls()
        options = options._merged_from_file(cls.user_file())
        if project_path:
            options = options._merged_from_file(project_path / cls.PROJECT_FILE)
        return options.with_environment()

    def _merged_from_file(self, path: Path) -> "LintOptions":
        """Layer a TOML file over these options.

        A missing file is ignored; an unreadable or invalid one is logged and
        skipped, leaving the current values in place.
        """

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except FileNotFoundError:
            return self
        except tomllib.TOMLDecodeError as e:
            logger.warning(f"Invalid TOML in {path}: {e}")
            return self
        except OSError as e:
            logger.warning(f"Cannot read options file {path}: {e}")
            return self
        return self.merged(data)

    def merged(self, data: Mapping[str, Any]) -> "LintOptions":
        """Apply file keys over these options; keys of the wrong type are skipped."""

        changes: dict[str, Any] = {}
        for key, field_name in _BOOL_KEYS.items():
            if key not in data:
                continue
            if isinstance(data[key], bool):
                changes[field_name] = data[key]
            else:
                logger.warning(f"Ignoring option '{key}': expected true or false")
        for key, field_name in _LIST_KEYS.items():
            if key not in data:
                continue
            value = data[key]
            if isinstance(value, list) and all(isinstance(item, str) for item in value):
                changes[field_name] = tuple(value)
            else:
                logger.warning(f"Ignoring option '{key}': expected a list of strings")
        return replace(self, **changes)

    def with_environment(self) -> "LintOptions":
        changes: dict[str, Any] = {}
        if os.getenv("HXLINT_STRICT") is not None:
            changes["strict"] = telemetry.env_flag("STRICT")
        if os.getenv("HXLINT_LAYERED") is not None:
            changes["layered"] = telemetry.env_flag("LAYERED")
        extra = os.getenv("HXLINT_EXTRA_SERVERS")
        if extra:
            changes["extra_servers"] = self.extra_servers + _split(extra)
        disabled = os.getenv("HXLINT_DISABLE")
        if disabled:
            changes["disabled_checks"] = self.disabled_checks + _split(disabled)
        return replace(self, **changes)


__all__ = ["LintOptions", "default_config_dir"]
