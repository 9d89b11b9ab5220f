"""Host identifiers: the interface part of an IPv6 address.

Two variants from the IP6_DOMAINS syntax ``domain[hostid]``:

- :class:`IP6Suffix`: an IPv6 literal whose bits above ``prefix_len``
  belong to the network and are cleared.
- :class:`EUI48`: a MAC address expanded to a modified EUI-64 interface
  identifier (RFC 4291 Appendix A), the same derivation SLAAC uses.

Both combine with a detected network prefix via ``with_prefix``; a
length mismatch returns None instead of building a partial address.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import ClassVar

import netaddr

from ddnsctl.domain.errors import (
    HostIDHasZoneError,
    InvalidPrefixLengthError,
    NotHostIDError,
    SubnetTooSmallError,
)

IP6_BYTES = 16
MAX_PREFIX_LEN = 128

# Six octets only: aa:bb:cc:dd:ee:ff, aa-bb-cc-dd-ee-ff or aabb.ccdd.eeff.
_MAC_PATTERN = re.compile(
    r"[0-9a-fA-F]{2}([:-])[0-9a-fA-F]{2}(?:\1[0-9a-fA-F]{2}){4}"
    r"|[0-9a-fA-F]{4}(?:\.[0-9a-fA-F]{4}){2}"
)


def _boundary_mask(bits: int) -> int:
    """0xff with the top *bits* cleared: 0 -> 0b11111111, 3 -> 0b00011111."""
    return 0xFF >> bits


@dataclass(frozen=True)
class IP6Suffix:
    """Low-order bits of an IPv6 address, tied to the prefix length it was parsed for."""

    data: bytes
    prefix_len: int

    def __post_init__(self) -> None:
        if len(self.data) != IP6_BYTES:
            msg = f"IPv6 suffix must be {IP6_BYTES} bytes, got {len(self.data)}"
            raise ValueError(msg)
        if not 0 <= self.prefix_len <= MAX_PREFIX_LEN:
            raise InvalidPrefixLengthError(self.prefix_len)

    def describe(self) -> str:
        return str(ipaddress.IPv6Address(self.data))

    def mask(self) -> IP6Suffix:
        """Clear every bit the network prefix owns."""
        full, partial = divmod(self.prefix_len, 8)
        data = bytearray(self.data)
        data[:full] = bytes(full)
        if full < IP6_BYTES:
            data[full] &= _boundary_mask(partial)
        return IP6Suffix(bytes(data), self.prefix_len)

    def with_prefix(self, prefix: ipaddress.IPv6Network) -> ipaddress.IPv6Address | None:
        if prefix.prefixlen != self.prefix_len:
            return None
        network = prefix.network_address.packed
        suffix = self.mask().data
        return ipaddress.IPv6Address(bytes(n | s for n, s in zip(network, suffix, strict=True)))


@dataclass(frozen=True)
class EUI48:
    """A MAC (EUI-48) address used as an interface identifier."""

    data: bytes

    max_prefix_len: ClassVar[int] = 64

    def __post_init__(self) -> None:
        if len(self.data) != 6:
            msg = f"EUI-48 must be 6 bytes, got {len(self.data)}"
            raise ValueError(msg)

    def describe(self) -> str:
        eui = netaddr.EUI(
            int.from_bytes(self.data, "big"), version=48, dialect=netaddr.mac_unix_expanded
        )
        return str(eui)

    def mask(self) -> EUI48:
        # The identifier always sits in the low 64 bits; nothing to clear.
        return self

    def interface_id(self) -> bytes:
        """The modified EUI-64 interface identifier (universal/local bit flipped)."""
        e = self.data
        return bytes([e[0] ^ 0x02, e[1], e[2], 0xFF, 0xFE, e[3], e[4], e[5]])

    def with_prefix(self, prefix: ipaddress.IPv6Network) -> ipaddress.IPv6Address | None:
        if prefix.prefixlen > self.max_prefix_len:
            return None
        network = prefix.network_address.packed
        return ipaddress.IPv6Address(network[:8] + self.interface_id())


type HostID = IP6Suffix | EUI48


def parse_host_id(s: str, prefix_len: int) -> HostID | None:
    """Parse a host identifier for addresses inside a ``/prefix_len`` network.

    An empty string means no host identifier was given and returns None.
    IPv6 literals become a masked :class:`IP6Suffix`; otherwise *s* is
    tried as a MAC address. Only the two-digit ``aa:bb:cc:dd:ee:ff`` and
    ``aa-bb-cc-dd-ee-ff`` forms and the dotted ``aabb.ccdd.eeff`` form are
    accepted; shortened octets, bare hex and mixed separators are not.

    Raises:
        InvalidPrefixLengthError: *prefix_len* is outside ``[0, 128]``.
        NotHostIDError: *s* is an IPv4 address, or neither IPv6 nor MAC.
        HostIDHasZoneError: the IPv6 literal carries a ``%zone``.
        SubnetTooSmallError: a MAC address with *prefix_len* above 64.
    """
    if s == "":
        return None

    if not 0 <= prefix_len <= MAX_PREFIX_LEN:
        raise InvalidPrefixLengthError(prefix_len)

    try:
        ip = ipaddress.ip_address(s)
    except ValueError as exc:
        ip_error: ValueError = exc
    else:
        if ip.version != 6:
            raise NotHostIDError(s)
        if ip.scope_id:
            raise HostIDHasZoneError(s)
        return IP6Suffix(ip.packed, prefix_len).mask()

    if not _MAC_PATTERN.fullmatch(s):
        mac_error = netaddr.AddrFormatError(
            f"{s!r} is not in aa:bb:cc:dd:ee:ff, aa-bb-cc-dd-ee-ff or aabb.ccdd.eeff form"
        )
        raise NotHostIDError(s, ip_error, mac_error)

    try:
        mac = netaddr.EUI(s, version=48)
    except netaddr.AddrFormatError as exc:
        raise NotHostIDError(s, ip_error, exc) from exc

    if prefix_len > EUI48.max_prefix_len:
        raise SubnetTooSmallError(prefix_len)
    return EUI48(int(mac).to_bytes(6, "big"))


def mask(host_id: HostID) -> HostID:
    """Module-level form of ``host_id.mask()``."""
    return host_id.mask()


def with_prefix(host_id: HostID, prefix: ipaddress.IPv6Network) -> ipaddress.IPv6Address | None:
    """Module-level form of ``host_id.with_prefix(prefix)``."""
    return host_id.with_prefix(prefix)
