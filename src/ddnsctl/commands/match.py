"""Command: evaluate a boolean domain expression."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ddnsctl.commands._base import DdnsCommand

if TYPE_CHECKING:
    from ddnsctl.commands._context import AppContext


@click.command(
    cls=DdnsCommand,
    examples="""\
  ddnsctl match 'sub(example.org)' www.example.org example.com
  ddnsctl match 'is(*.example.org) || is(example.org)' '*.example.org'
  ddnsctl match '!is(a.example.org, b.example.org)' a.example.org c.example.org""",
)
@click.argument("expression")
@click.argument("domain", nargs=-1, required=True)
@click.pass_obj
def match(app: AppContext, expression: str, domain: tuple[str, ...]) -> None:
    """Evaluate EXPRESSION against each DOMAIN."""
    from ddnsctl.services.match import ExpressionService

    app.emit(ExpressionService(app.settings).evaluate(expression, domain))
