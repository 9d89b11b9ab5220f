"""AddressService: combine a host ID with an IPv6 prefix."""

from __future__ import annotations

import ipaddress
import logging

from ddnsctl.domain.errors import HostIDError
from ddnsctl.domain.hostid import parse_host_id
from ddnsctl.services.base import BaseService
from ddnsctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class AddressService(BaseService):
    """Synthesize the IPv6 address a host ID gets inside a prefix."""

    def synthesize(self, host_id: str, prefix: str) -> ServiceResult:
        """Parse *host_id* against *prefix*'s length and combine the two.

        *prefix* is a network such as ``2001:db8:1::/48``; host bits in it
        are ignored.
        """
        op = "synthesize_address"
        try:
            network = ipaddress.IPv6Network(prefix, strict=False)
        except ValueError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_PREFIX",
                    message=f"{prefix!r} is not an IPv6 prefix: {exc}",
                    detail={"prefix": prefix},
                ),
            )

        try:
            parsed = parse_host_id(host_id, network.prefixlen)
        except HostIDError as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_HOST_ID",
                    message=str(exc),
                    detail={"host_id": host_id, "prefix": str(network)},
                ),
            )
        if parsed is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="MISSING_HOST_ID", message="No host ID given"),
            )

        address = parsed.with_prefix(network)
        if address is None:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="PREFIX_MISMATCH",
                    message=f"Host ID {parsed.describe()} cannot be combined with {network}",
                    detail={"host_id": parsed.describe(), "prefix": str(network)},
                ),
            )

        logger.debug("Combined %s with %s", parsed.describe(), network)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "address": str(address),
                "host_id": parsed.describe(),
                "prefix": str(network),
            },
        )
