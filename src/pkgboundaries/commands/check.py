"""Command: check Python sources against the layer policy."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from pkgboundaries.commands._base import BoundaryCommand

if TYPE_CHECKING:
    from pkgboundaries.commands._context import AppContext


@click.command(
    cls=BoundaryCommand,
    examples="""\
  pkgboundaries check
  pkgboundaries check src
  pkgboundaries --skip-tests check src tests
  pkgboundaries -c layers.json check src/myapp
  pkgboundaries --json check src""",
)
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@click.pass_obj
def check(app: AppContext, paths: tuple[Path, ...]) -> None:
    """Report imports that cross a layer boundary.

    Exits with status 1 when any violation is found.
    """
    from pkgboundaries.services.check import CheckService

    policy = app.load_policy("check")
    svc = CheckService(policy, plugins=app.plugins)
    result = svc.check(
        list(paths) or [Path.cwd()],
        exclude=app.settings.exclude,
        project_root=app.settings.project_root,
    )
    app.emit(result)
    if result.data.get("count"):
        raise SystemExit(1)
