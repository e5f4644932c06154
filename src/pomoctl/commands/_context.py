"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to subcommands via
``@click.pass_obj``.  Configures logging and assembles the timer session
from settings: terminal, screen, cue plugins, and the optional cycle driver.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from pomoctl.config.settings import PomoSettings
    from pomoctl.plugins.cues import CuePlayer
    from pomoctl.services.session import TimerSession


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: PomoSettings) -> None:
        self.settings = settings

        # Configure structured logging
        from pomoctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            log_file=settings.log_file,
        )

    def build_cue_player(self) -> CuePlayer | None:
        """Load cue plugins; None when sound is disabled."""
        if not self.settings.sound.enabled:
            return None

        from pomoctl.plugins.builtins import register_builtins
        from pomoctl.plugins.cues import CuePlayer
        from pomoctl.plugins.manager import PluginManager

        pm = PluginManager()
        register_builtins(pm, self.settings.sound)
        pm.discover_and_load()
        return CuePlayer(pm)

    def build_session(self, output: IO[str] | None = None) -> TimerSession:
        """Assemble a :class:`TimerSession` writing to *output* (default stdout)."""
        from pomoctl.output.screen import Screen
        from pomoctl.output.terminal import create_terminal
        from pomoctl.services.cycle import CycleDriver
        from pomoctl.services.session import TimerSession

        timer = self.settings.timer
        screen = Screen(
            create_terminal(output),
            work_minutes=timer.work_minutes,
            break_minutes=timer.break_minutes,
        )
        cycle = CycleDriver(timer.sets) if timer.auto_cycle else None
        return TimerSession(
            screen,
            timer=timer,
            cues=self.build_cue_player(),
            cycle=cycle,
        )
