"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``POMOCTL_*`` prefix
  3. TOML file    — ``pomoctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the ``find_config`` walk-up discovery from
:mod:`pomoctl.config.discovery`.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from pomoctl.config.discovery import find_config
from pomoctl.config.models import SoundConfig, TimerConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``pomoctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PomoSettings(BaseSettings):
    """Unified settings for the pomoctl CLI.

    Merges CLI flags, environment variables, TOML config sections,
    and code-baked defaults into a single frozen object.  Stored on the
    :class:`~pomoctl.commands._context.AppContext` at the CLI root level.

    Attributes:
        config_path: The TOML file that was loaded, or None.
        log_file: Route log records to this file instead of stderr.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "POMOCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    verbose: bool = False
    log_json: bool = False
    log_file: Path | None = None

    # --- TOML sections ---
    timer: TimerConfig = Field(default_factory=TimerConfig)
    sound: SoundConfig = Field(default_factory=SoundConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start_dir: Path | None = None,
        **cli_flags: Any,
    ) -> PomoSettings:
        """Construct settings from CLI invocation.

        Discovers ``pomoctl.toml`` via walk-up from *start_dir* (or uses the
        explicit *config_path*) and merges CLI flags as highest-priority
        overrides.  Flags passed as None are treated as "not given".
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start_dir)

        flags = {k: v for k, v in cli_flags.items() if v is not None}

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **flags)
        finally:
            _tls.toml_path = None

    def with_timer(self, **overrides: Any) -> PomoSettings:
        """Return a copy with ``[timer]`` fields replaced (None values ignored)."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return self.model_copy(update={"timer": self.timer.model_copy(update=updates)})

    def with_sound(self, **overrides: Any) -> PomoSettings:
        """Return a copy with ``[sound]`` fields replaced (None values ignored)."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        if not updates:
            return self
        return self.model_copy(update={"sound": self.sound.model_copy(update=updates)})
