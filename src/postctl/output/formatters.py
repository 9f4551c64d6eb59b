"""Output mode dispatch for ServiceResult.

Three modes, chosen by global CLI flags:
- ``--json``: the full result as indented JSON
- ``--quiet``: ids for list results, a status line otherwise
- default: Rich rendering per operation
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from postctl.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from postctl.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Output flags lifted from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)
