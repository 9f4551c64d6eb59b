"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Owns the lazily built Blog and the single exit
path for results (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from postctl.config.settings import PostctlSettings
    from postctl.infrastructure.blog import Blog
    from postctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The blog is built on first use so ``--help`` and ``--examples``
    never touch the filesystem.
    """

    def __init__(self, settings: PostctlSettings) -> None:
        self.settings = settings
        self._blog: Blog | None = None

        from postctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from postctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def blog(self) -> Blog:
        """The post collection (created lazily on first access)."""
        if self._blog is None:
            from postctl.infrastructure.blog import Blog

            self._blog = Blog(self.settings)
        return self._blog

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout, returns normally. Warnings go to stderr so they
          don't pollute piped output (JSON mode carries them inline).
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
