"""Address families that domain lists are configured for."""

from __future__ import annotations

from enum import StrEnum


class IPFamily(StrEnum):
    """IP address family of the records a domain list feeds."""

    IP4 = "ipv4"
    IP6 = "ipv6"
