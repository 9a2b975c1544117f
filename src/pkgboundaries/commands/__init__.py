"""Subcommand modules for pkgboundaries.

Provides register_commands() which uses deferred imports to keep
``pkgboundaries --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``policy`` group and the standalone commands on the root group."""
    from pkgboundaries.commands.check import check
    from pkgboundaries.commands.decide import classify, decide
    from pkgboundaries.commands.policy import policy

    cli.add_command(check)
    cli.add_command(decide)
    cli.add_command(classify)
    cli.add_command(policy)
