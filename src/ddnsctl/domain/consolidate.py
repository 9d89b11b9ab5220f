"""Merge DOMAINS, IP4_DOMAINS and IP6_DOMAINS into per-family domain sets.

The family-agnostic list joins every family's list; each family's result
is sorted and free of duplicates.  Host IDs are collected into one map
keyed by domain.

INVARIANT: all-or-nothing.  A conflict raises before anything is returned.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from ddnsctl.domain.errors import ConflictingHostIDError
from ddnsctl.domain.hostid import HostID
from ddnsctl.domain.lists import DomainHostID
from ddnsctl.domain.names import Domain, dedupe_domains
from ddnsctl.domain.types import IPFamily

FAMILY_KEYS: dict[IPFamily, str] = {
    IPFamily.IP4: "IP4_DOMAINS",
    IPFamily.IP6: "IP6_DOMAINS",
}


@dataclass(frozen=True)
class DomainMap:
    """Consolidated domains per family plus the host ID of each domain that has one."""

    domains: dict[IPFamily, list[Domain]] = field(default_factory=dict)
    host_ids: dict[Domain, HostID] = field(default_factory=dict)

    def for_family(self, family: IPFamily) -> list[Domain]:
        return self.domains.get(family, [])


def consolidate(
    domains: Sequence[Domain],
    family_domains: Mapping[IPFamily, Sequence[Domain]],
    family_host_ids: Mapping[IPFamily, Sequence[DomainHostID]],
    *,
    keys: Mapping[IPFamily, str] = FAMILY_KEYS,
) -> DomainMap:
    """Build a :class:`DomainMap` for every :class:`IPFamily`.

    Args:
        domains: The family-agnostic list (DOMAINS).
        family_domains: Plain lists per family (IP4_DOMAINS).
        family_host_ids: Lists with optional host IDs per family (IP6_DOMAINS).
        keys: Variable name per family, used in conflict messages.

    Raises:
        ConflictingHostIDError: one domain was given two different host IDs.
    """
    host_ids: dict[Domain, HostID] = {}
    merged: dict[IPFamily, list[Domain]] = {}

    for family in IPFamily:
        collected: list[Domain] = [*domains, *family_domains.get(family, ())]
        for entry in family_host_ids.get(family, ()):
            collected.append(entry.domain)
            if entry.host_id is None:
                continue
            known = host_ids.get(entry.domain)
            if known is not None and known != entry.host_id:
                raise ConflictingHostIDError(
                    keys.get(family, family.value), entry.domain, known, entry.host_id
                )
            host_ids[entry.domain] = entry.host_id
        merged[family] = dedupe_domains(collected)

    return DomainMap(domains=merged, host_ids=host_ids)
