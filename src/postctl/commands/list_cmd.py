"""Command: list posts."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    "list",
    cls=PostCommand,
    examples="""\
  postctl list
  postctl list --limit 5
  postctl list --year 2015 --asc
  postctl list --tag hibernate
  postctl list --sort title --drafts
  postctl -q list             # ids only""",
)
@click.option(
    "--sort",
    type=click.Choice(["date", "title", "path"]),
    default="date",
    help="Sort key.",
)
@click.option("--asc", "ascending", is_flag=True, help="Ascending order (default: descending).")
@click.option("--limit", type=click.IntRange(min=1), default=None, help="Maximum posts to show.")
@click.option("--year", type=int, default=None, help="Only posts published in this year.")
@click.option("--tag", default=None, help="Only posts with this tag.")
@click.option("--category", default=None, help="Only posts in this category.")
@click.option("--layout", default=None, help="Only posts using this layout.")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include _drafts/.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    sort: str,
    ascending: bool,
    limit: int | None,
    year: int | None,
    tag: str | None,
    category: str | None,
    layout: str | None,
    include_drafts: bool,
) -> None:
    """List posts, newest first."""
    from postctl.services.query import QueryService

    app.emit(
        QueryService(app.blog).list_posts(
            sort=sort,
            descending=not ascending,
            limit=limit,
            year=year,
            tag=tag,
            category=category,
            layout=layout,
            include_drafts=include_drafts,
        )
    )
