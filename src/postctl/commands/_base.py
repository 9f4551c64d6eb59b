"""Click base classes that add an ``--examples`` flag.

``--help`` stays short; ``postctl <command> --examples`` prints a block
of ready-to-paste invocations and exits.
"""

from __future__ import annotations

from typing import Any

import click


class _ExamplesMixin:
    """Registers an eager ``--examples`` option when ``examples`` is given."""

    examples: str | None

    def _init_examples(self, examples: str | None) -> None:
        self.examples = examples
        if not examples:
            return

        def _show(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
            if not value or ctx.resilient_parsing:
                return
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(examples)
            ctx.exit(0)

        self.params.append(  # type: ignore[attr-defined]
            click.Option(
                ["--examples"],
                is_flag=True,
                expose_value=False,
                is_eager=True,
                callback=_show,
                help="Show usage examples.",
            )
        )


class PostCommand(_ExamplesMixin, click.Command):
    """Command accepting ``examples="..."``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)


class PostGroup(_ExamplesMixin, click.Group):
    """Group whose subcommands default to :class:`PostCommand`."""

    command_class = PostCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)
