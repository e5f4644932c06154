"""CommandReader — blocking line reader on its own daemon thread.

The reader never holds the session lock while waiting for input, so tick
delivery is never stalled by an idle keyboard.  Its thread is a daemon and
is never joined: a ``readline()`` blocked on a terminal cannot be
interrupted portably, so process exit simply abandons it.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import IO

logger = logging.getLogger(__name__)

EOF_COMMAND = "end"


class CommandReader:
    """Reads lines from *stream* and forwards each non-blank one to *handler*.

    Parameters:
        stream: Line-oriented input (stdin in production).
        handler: Receives the trimmed line. Takes its own locks.
        stop_event: Once set, no further reads are attempted.
    """

    def __init__(
        self,
        stream: IO[str],
        handler: Callable[[str], None],
        stop_event: threading.Event,
    ) -> None:
        self._stream = stream
        self._handler = handler
        self._stop = stop_event
        self._thread: threading.Thread | None = None

    @property
    def thread(self) -> threading.Thread | None:
        return self._thread

    def start(self) -> threading.Thread:
        if self._thread is None:
            self._thread = threading.Thread(target=self.run, name="command-reader", daemon=True)
            self._thread.start()
        return self._thread

    def run(self) -> None:
        self._tolerate_bad_bytes()
        while not self._stop.is_set():
            try:
                line = self._stream.readline()
            except UnicodeDecodeError:
                logger.warning("Skipping undecodable input", exc_info=True)
                continue
            except (OSError, ValueError):
                logger.warning("Input stream failed; treating as end of input", exc_info=True)
                line = ""
            if self._stop.is_set():
                return
            if line == "":
                # EOF: nobody can type `end` any more.
                logger.debug("Input closed; requesting exit")
                self._forward(EOF_COMMAND)
                return
            text = line.strip()
            if text:
                self._forward(text)

    def _forward(self, text: str) -> None:
        try:
            self._handler(text)
        except Exception:
            logger.warning("Command handler failed for %r", text, exc_info=True)

    def _tolerate_bad_bytes(self) -> None:
        """Decode invalid bytes as U+FFFD so they read as an unknown command."""
        reconfigure = getattr(self._stream, "reconfigure", None)
        if reconfigure is None:
            return
        try:
            reconfigure(errors="replace")
        except (OSError, ValueError):
            logger.debug("Input stream cannot be reconfigured", exc_info=True)
