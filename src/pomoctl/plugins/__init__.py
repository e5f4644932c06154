"""Extension layer — audio cues via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from pomoctl.plugins.cues import CuePlayer
from pomoctl.plugins.manager import PluginManager

__all__ = ["CuePlayer", "PluginManager"]
