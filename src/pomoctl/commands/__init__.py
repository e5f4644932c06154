"""Subcommand modules for pomoctl.

Provides register_commands() which uses deferred imports to keep
``pomoctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from pomoctl.commands.run import run

    cli.add_command(run)
