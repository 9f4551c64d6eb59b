"""Command: scaffold a new post."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


def _parse_date(_ctx: click.Context, _param: click.Parameter, value: str | None) -> date | None:
    if value is None:
        return None
    from postctl.services._helpers import parse_day

    try:
        return parse_day(value)
    except ValueError as exc:
        raise click.BadParameter(f"expected YYYY-MM-DD, got {value!r}") from exc


@click.command(
    cls=PostCommand,
    examples="""\
  postctl new "Fixing the N+1 problem"
  postctl new "Fixing the N+1 problem" --date 2015-03-01
  postctl new "Native queries" --tag java --tag hibernate --category programming
  postctl new "Half-baked idea" --draft""",
)
@click.argument("title")
@click.option("--date", "day", callback=_parse_date, default=None, help="Publish date (YYYY-MM-DD).")
@click.option("--layout", default=None, help="Layout (default from [posts] default_layout).")
@click.option("--tag", "tags", multiple=True, help="Tag (repeatable).")
@click.option("--category", "categories", multiple=True, help="Category (repeatable).")
@click.option("--draft", is_flag=True, help="Create an undated draft in _drafts/.")
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_obj
def new(
    app: AppContext,
    title: str,
    day: date | None,
    layout: str | None,
    tags: tuple[str, ...],
    categories: tuple[str, ...],
    draft: bool,
    force: bool,
) -> None:
    """Create a post file with front matter ready to publish."""
    from postctl.services.create import CreateService

    app.emit(
        CreateService(app.blog).create_post(
            title,
            day=day,
            layout=layout,
            tags=list(tags),
            categories=list(categories),
            draft=draft,
            overwrite=force,
        )
    )
