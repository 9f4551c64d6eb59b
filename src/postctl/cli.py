"""Root CLI group for postctl with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from postctl import __version__
from postctl.commands import register_commands
from postctl.commands._base import PostGroup
from postctl.commands._context import AppContext
from postctl.config.settings import PostctlSettings


@click.group(
    cls=PostGroup,
    invoke_without_command=True,
    examples="""\
  postctl check
  postctl --root ~/blog list --limit 10
  postctl -c site/postctl.toml check --errors-only
  postctl --json show hibernate-n-plus-one""",
)
@click.version_option(version=__version__, prog_name="postctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    "site_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Site directory (default: config file's directory, else CWD).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    site_root: Path | None,
) -> None:
    """postctl — check, list, and scaffold Markdown blog posts."""
    settings = PostctlSettings.from_cli(
        config_path=config_path,
        site_root=site_root,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
