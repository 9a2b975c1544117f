"""Command group: inspect the policy document."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pkgboundaries.commands._base import BoundaryGroup

if TYPE_CHECKING:
    from pkgboundaries.commands._context import AppContext


@click.group(
    cls=BoundaryGroup,
    examples="""\
  pkgboundaries policy validate
  pkgboundaries -c layers.json policy show""",
)
def policy() -> None:
    """Validate or display the policy file."""


@policy.command(
    examples="""\
  pkgboundaries policy validate
  pkgboundaries --json policy validate""",
)
@click.pass_obj
def validate(app: AppContext) -> None:
    """Compile all layer patterns and report configuration smells."""
    from pkgboundaries.services.policy import PolicyService

    loaded = app.load_policy("validate")
    app.emit(PolicyService(loaded).validate())


@policy.command(
    examples="""\
  pkgboundaries policy show
  pkgboundaries policy show -o pkgboundaries.json
  pkgboundaries --json policy show""",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the normalized document to this file.",
)
@click.pass_obj
def show(app: AppContext, output: Path | None) -> None:
    """Print the normalized policy document."""
    from pkgboundaries.services.policy import PolicyService

    loaded = app.load_policy("show")
    app.emit(PolicyService(loaded).show(output))
