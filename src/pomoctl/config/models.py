"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pomoctl.toml only contains overrides.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

# --- pomoctl.toml sections ---


class TimerConfig(BaseModel):
    """[timer] section."""

    model_config = {"frozen": True}

    work_minutes: int = Field(default=25, ge=0)
    break_minutes: int = Field(default=5, ge=0)
    auto_cycle: bool = False
    sets: int | None = Field(default=None, ge=1)


class SoundConfig(BaseModel):
    """[sound] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    bell: bool = True
    sounds_dir: Path | None = None
    player: str | None = None
