"""Root CLI group for pomoctl with global flags and command registration."""

from __future__ import annotations

import click

from pomoctl import __version__
from pomoctl.commands import register_commands
from pomoctl.commands._base import PomoGroup
from pomoctl.commands._context import AppContext
from pomoctl.config.settings import PomoSettings


@click.group(cls=PomoGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="pomoctl")
@click.option("-v", "--verbose", is_flag=True, help="Debug-level logging.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output.")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write logs to a file instead of stderr.",
)
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_json: bool,
    log_file: str | None,
    config_path: str | None,
) -> None:
    """pomoctl — Pomodoro timer for the terminal.

    Without a subcommand, starts the interactive timer.
    """
    settings = PomoSettings.from_cli(
        config_path=config_path,
        verbose=verbose,
        log_json=log_json,
        log_file=log_file,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        from pomoctl.commands.run import run

        ctx.invoke(run)


register_commands(cli)
