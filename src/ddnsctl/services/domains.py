"""DomainConfigService — read DOMAINS, IP4_DOMAINS, IP6_DOMAINS and PROXIED.

This is the bridge between raw settings and the outer update loop: it
produces the consolidated :class:`DomainMap` and, on request, the
proxied flag of every configured domain.
"""

from __future__ import annotations

import logging
from typing import Any

from ddnsctl.domain.consolidate import DomainMap, consolidate
from ddnsctl.domain.diagnostics import Reporter
from ddnsctl.domain.errors import ConfigValueError
from ddnsctl.domain.expressions import Predicate, parse_expression
from ddnsctl.domain.lists import parse_domain_host_id_list, parse_domain_list
from ddnsctl.domain.types import IPFamily
from ddnsctl.services.base import BaseService, CollectingReporter
from ddnsctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class DomainConfigService(BaseService):
    """Parse and consolidate the domain-related configuration values."""

    def load_domain_map(self, reporter: Reporter) -> DomainMap:
        """Parse the three domain lists and consolidate them.

        Raises:
            ConfigValueError: any list is invalid or host IDs conflict.
        """
        s = self._settings
        domains = parse_domain_list("DOMAINS", s.domains, reporter=reporter)
        ip4_domains = parse_domain_list("IP4_DOMAINS", s.ip4_domains, reporter=reporter)
        ip6_domains = parse_domain_host_id_list(
            "IP6_DOMAINS", s.ip6_domains, s.ip6_prefix_len, reporter=reporter
        )
        return consolidate(
            domains,
            {IPFamily.IP4: ip4_domains},
            {IPFamily.IP6: ip6_domains},
        )

    def load_proxied(self, reporter: Reporter) -> Predicate:
        return parse_expression("PROXIED", self._settings.proxied, reporter=reporter)

    def read_domain_map(self, *, include_proxied: bool = False) -> ServiceResult:
        """Report the consolidated domains per family and their host IDs.

        With *include_proxied*, PROXIED is compiled and evaluated for
        every configured domain as well.
        """
        op = "read_domain_map"
        reporter = CollectingReporter()
        try:
            domain_map = self.load_domain_map(reporter)
            proxied = self.load_proxied(reporter) if include_proxied else None
        except ConfigValueError as exc:
            return self._config_failure(op, exc, reporter)

        data: dict[str, Any] = {
            family.value: [d.dns_name_ascii() for d in domain_map.for_family(family)]
            for family in IPFamily
        }
        data["host_ids"] = {
            d.dns_name_ascii(): h.describe()
            for d, h in sorted(domain_map.host_ids.items(), key=lambda item: item[0])
        }
        if proxied is not None:
            every = sorted({d for family in IPFamily for d in domain_map.for_family(family)})
            data["proxied"] = {d.dns_name_ascii(): proxied(d) for d in every}

        logger.debug(
            "Consolidated %d IPv4 and %d IPv6 domains",
            len(data[IPFamily.IP4.value]),
            len(data[IPFamily.IP6.value]),
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=reporter.warnings)
