"""Click command class for ddnsctl subcommands.

Each subcommand ships sample invocations (``examples=``) that
``--examples`` prints, so ``--help`` can stay short.
"""

from __future__ import annotations

from typing import Any

import click


class DdnsCommand(click.Command):
    """A ``click.Command`` with an optional eager ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Print sample invocations and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
        ctx.exit(0)
