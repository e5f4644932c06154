"""Fire-and-forget cue dispatch via pluggy + ThreadPoolExecutor.

``play()`` returns immediately; the hook call runs on a single background
worker so a slow or blocking player never stalls the timer.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pomoctl.domain.phases import Cue
    from pomoctl.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class CuePlayer:
    """Dispatches ``play_cue`` hooks without blocking the caller.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
        sync: Call hooks inline (useful for testing).
    """

    def __init__(self, plugin_manager: PluginManager, *, sync: bool = False) -> None:
        self._pm = plugin_manager
        self._closed = False
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=1, thread_name_prefix="cue")
        )

    def play(self, cue: Cue | str) -> None:
        """Queue *cue* for playback. Never raises."""
        name = str(cue)
        if self._closed:
            logger.debug("Cue %s dropped after shutdown", name)
            return
        executor = self._executor
        if executor is None:
            self._execute(name)
            return
        try:
            executor.submit(self._execute, name)
        except RuntimeError:
            logger.debug("Cue %s dropped: executor shut down", name)

    def shutdown(self) -> None:
        """Stop accepting cues and abort playback in progress. Never waits."""
        if self._closed:
            return
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None
        # Executor workers are joined at interpreter exit, so playback must end here.
        try:
            self._pm.hook.stop_cues()
        except Exception:
            logger.warning("Stopping cues failed", exc_info=True)

    def _execute(self, cue: str) -> None:
        try:
            self._pm.hook.play_cue(cue=cue)
        except Exception:
            logger.warning("Cue %s failed", cue, exc_info=True)
