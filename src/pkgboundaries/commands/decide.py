"""Commands: single-identifier policy queries (decide, classify)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pkgboundaries.commands._base import BoundaryCommand

if TYPE_CHECKING:
    from pkgboundaries.commands._context import AppContext


@click.command(
    cls=BoundaryCommand,
    examples="""\
  pkgboundaries decide App json
  pkgboundaries decide Domain myapp.infra.db
  pkgboundaries -q decide App logging""",
)
@click.argument("layer")
@click.argument("identifier")
@click.pass_obj
def decide(app: AppContext, layer: str, identifier: str) -> None:
    """Decide whether LAYER may depend on IDENTIFIER."""
    from pkgboundaries.services.policy import PolicyService

    policy = app.load_policy("decide")
    app.emit(PolicyService(policy).decide(layer, identifier))


@click.command(
    cls=BoundaryCommand,
    examples="""\
  pkgboundaries classify myapp.domain.models
  pkgboundaries --json classify json""",
)
@click.argument("identifier")
@click.pass_obj
def classify(app: AppContext, identifier: str) -> None:
    """Show which layers IDENTIFIER belongs to."""
    from pkgboundaries.services.policy import PolicyService

    policy = app.load_policy("classify")
    app.emit(PolicyService(policy).classify(identifier))
