"""Command: show the consolidated domain configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ddnsctl.commands._base import DdnsCommand

if TYPE_CHECKING:
    from ddnsctl.commands._context import AppContext


@click.command(
    cls=DdnsCommand,
    examples="""\
  DOMAINS="example.org, *.example.org" ddnsctl domains
  IP6_DOMAINS="nas.example.org[aa:bb:cc:dd:ee:ff]" ddnsctl domains
  PROXIED="sub(example.org) && !is(nas.example.org)" ddnsctl domains --proxied
  ddnsctl --json domains""",
)
@click.option("--proxied", is_flag=True, help="Also evaluate PROXIED for every domain.")
@click.pass_obj
def domains(app: AppContext, proxied: bool) -> None:
    """Parse DOMAINS, IP4_DOMAINS and IP6_DOMAINS and show the result."""
    from ddnsctl.services.domains import DomainConfigService

    app.emit(DomainConfigService(app.settings).read_domain_map(include_proxied=proxied))
