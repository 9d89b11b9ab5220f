"""Command: combine a host ID with an IPv6 prefix."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from ddnsctl.commands._base import DdnsCommand

if TYPE_CHECKING:
    from ddnsctl.commands._context import AppContext


@click.command(
    cls=DdnsCommand,
    examples="""\
  ddnsctl address aa:bb:cc:dd:ee:ff 2001:db8:1:2::/64
  ddnsctl address ::1:2 2001:db8:1::/48""",
)
@click.argument("host_id")
@click.argument("prefix")
@click.pass_obj
def address(app: AppContext, host_id: str, prefix: str) -> None:
    """Show the IPv6 address HOST_ID gets inside PREFIX."""
    from ddnsctl.services.address import AddressService

    app.emit(AddressService(app.settings).synthesize(host_id, prefix))
