"""Command: lint post names, front matter, and code fences."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl check
  postctl check --errors-only
  postctl check --drafts
  postctl check --fail-on warning
  postctl -q check            # one issue per line, path:line: severity: message
  postctl check --fix""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option(
    "--drafts",
    "include_drafts",
    is_flag=True,
    help="Also check _drafts/ (always on when [check] check_drafts is set).",
)
@click.option(
    "--fail-on",
    type=click.Choice(["error", "warning", "never"]),
    default="error",
    help="Exit with status 1 when issues at this severity remain.",
)
@click.option("--fix", is_flag=True, help="Repair missing layouts and unclosed trailing fences.")
@click.pass_obj
def check(
    app: AppContext,
    min_severity: str,
    errors_only: bool,
    include_drafts: bool,
    fail_on: str,
    fix: bool,
) -> None:
    """Check every post for well-formed front matter, titles, and code fences."""
    from postctl.services.check import CheckService

    svc = CheckService(app.blog)

    if fix:
        app.emit(svc.fix(include_drafts=include_drafts))
        return

    threshold = "error" if errors_only else min_severity
    result = svc.check(min_severity=threshold, include_drafts=include_drafts)
    app.emit(result)

    errors = result.data.get("error_count", 0)
    # --fail-on counts warnings even when --errors-only hides them
    warnings = result.data.get("warning_count", 0) + result.data.get("hidden_warning_count", 0)
    if (fail_on == "error" and errors) or (fail_on == "warning" and (errors or warnings)):
        raise SystemExit(1)
