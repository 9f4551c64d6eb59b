"""Command: show one post."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl show 2015-03-01-hibernate-n-plus-one.markdown
  postctl show 2015-03-01-hibernate-n-plus-one
  postctl show hibernate-n-plus-one
  postctl --json show hibernate-n-plus-one""",
)
@click.argument("identifier")
@click.pass_obj
def show(app: AppContext, identifier: str) -> None:
    """Show a post by file name, file stem, or slug."""
    from postctl.services.query import QueryService

    app.emit(QueryService(app.blog).get_post(identifier))
