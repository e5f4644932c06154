"""Built-in sound file plugin.

Plays ``<cue>.wav`` from the configured sounds directory through an
external player command: ``[sound] player`` if set, otherwise the first of
``afplay``, ``paplay``, ``aplay`` found on PATH.

All subprocess calls are wrapped in try/except so a missing player or
missing file never interrupts the timer.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import threading
from pathlib import Path

import pluggy

from pomoctl.config.models import SoundConfig

hookimpl = pluggy.HookimplMarker("pomoctl")

logger = logging.getLogger(__name__)

DEFAULT_PLAYERS = ("afplay", "paplay", "aplay")
PLAY_TIMEOUT = 30


def find_player(preferred: str | None = None) -> list[str] | None:
    """Resolve the player command line, or None if nothing is installed."""
    if preferred:
        argv = shlex.split(preferred)
        if argv and shutil.which(argv[0]):
            return argv
        return None
    for name in DEFAULT_PLAYERS:
        if shutil.which(name):
            return [name]
    return None


class SoundFilePlugin:
    """Plays WAV files named after cues.

    At most one player process runs at a time (cues are dispatched on a
    single worker); ``stop_cues`` kills it.
    """

    def __init__(self, config: SoundConfig | None = None) -> None:
        self._config = config or SoundConfig()
        self._lock = threading.Lock()
        self._proc: subprocess.Popen[str] | None = None
        self._stopped = False

    def sound_path(self, cue: str) -> Path | None:
        if self._config.sounds_dir is None:
            return None
        return self._config.sounds_dir / f"{cue}.wav"

    @hookimpl
    def play_cue(self, cue: str) -> None:
        path = self.sound_path(cue)
        if path is None:
            return
        if not path.is_file():
            logger.warning("Sound file not found for cue %s: %s", cue, path)
            return
        player = find_player(self._config.player)
        if player is None:
            logger.warning("No audio player available for cue %s", cue)
            return
        self._run([*player, str(path)])

    @hookimpl
    def stop_cues(self) -> None:
        with self._lock:
            self._stopped = True
            proc = self._proc
        if proc is not None and proc.poll() is None:
            logger.debug("Killing audio player %s", proc.args)
            proc.kill()

    def _run(self, argv: list[str]) -> None:
        with self._lock:
            if self._stopped:
                return
            try:
                proc = subprocess.Popen(
                    argv,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.PIPE,
                    text=True,
                )
            except OSError as exc:
                logger.warning("Audio player failed: %s", exc)
                return
            self._proc = proc
        try:
            _, stderr = proc.communicate(timeout=PLAY_TIMEOUT)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.communicate()
            logger.warning("Audio player timed out after %ds", PLAY_TIMEOUT)
            return
        finally:
            with self._lock:
                self._proc = None
        if proc.returncode != 0 and not self._stopped:
            logger.warning(
                "Audio player exited with %d: %s",
                proc.returncode,
                (stderr or "").strip(),
            )
