"""Built-in cue plugins registered from ``[sound]`` settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pomoctl.plugins.builtins.bell import BellPlugin
from pomoctl.plugins.builtins.sound_file import SoundFilePlugin

if TYPE_CHECKING:
    from pomoctl.config.models import SoundConfig
    from pomoctl.plugins.manager import PluginManager

__all__ = ["BellPlugin", "SoundFilePlugin", "register_builtins"]


def register_builtins(pm: PluginManager, config: SoundConfig) -> None:
    """Register the built-in cue plugins that *config* enables."""
    if not config.enabled:
        return
    if config.bell:
        pm.register_plugin(BellPlugin(), name="bell")
    if config.sounds_dir is not None:
        pm.register_plugin(SoundFilePlugin(config), name="sound-file")
