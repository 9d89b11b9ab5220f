"""Subcommand modules for ddnsctl.

Provides register_commands() which uses deferred imports to keep
``ddnsctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from ddnsctl.commands.address import address
    from ddnsctl.commands.domains import domains
    from ddnsctl.commands.match import match

    cli.add_command(domains)
    cli.add_command(match)
    cli.add_command(address)
