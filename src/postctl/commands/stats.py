"""Command: collection statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl stats
  postctl --json stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Count posts by year, tag, and code block language."""
    from postctl.services.query import QueryService

    app.emit(QueryService(app.blog).stats())
