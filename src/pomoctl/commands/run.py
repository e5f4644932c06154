"""run — start the interactive timer (the default command)."""

from __future__ import annotations

import click

from pomoctl.commands._base import PomoCommand
from pomoctl.commands._context import AppContext


@click.command(
    cls=PomoCommand,
    examples="""\
  # Classic 25/5 timer; type start, stop, reset or end at the prompt
  pomoctl run

  # Shorter phases
  pomoctl run --work 50 --break 10

  # Alternate work and break automatically for four sets
  pomoctl run --cycle --sets 4

  # Silent, with logs kept off the screen
  pomoctl --log-file pomo.log -v run --no-sound""",
)
@click.option("--work", "work_minutes", type=click.IntRange(min=0), help="Work phase minutes.")
@click.option("--break", "break_minutes", type=click.IntRange(min=0), help="Break phase minutes.")
@click.option(
    "--cycle",
    "auto_cycle",
    is_flag=True,
    help="Start the next phase automatically when one finishes.",
)
@click.option("--sets", type=click.IntRange(min=1), help="Work+break sets before stopping.")
@click.option("--no-sound", is_flag=True, help="Disable audio cues.")
@click.pass_obj
def run(
    app: AppContext,
    work_minutes: int | None,
    break_minutes: int | None,
    auto_cycle: bool,
    sets: int | None,
    no_sound: bool,
) -> None:
    """Run the interactive Pomodoro timer."""
    app.settings = app.settings.with_timer(
        work_minutes=work_minutes,
        break_minutes=break_minutes,
        auto_cycle=True if auto_cycle else None,
        sets=sets,
    )
    if no_sound:
        app.settings = app.settings.with_sound(enabled=False)

    session = app.build_session()
    session.run()
