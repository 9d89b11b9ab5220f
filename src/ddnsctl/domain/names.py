"""Domain values: normalization, ordering, and the two match relations.

A domain is either an :class:`FQDN` or a :class:`Wildcard` (``*.suffix``).
Both hold the ASCII-compatible, lower-cased form: UTS #46 mapping
(nontransitional, without STD3 rules) followed by Punycode for each
non-ASCII label.  This is the lenient lookup profile, so labels such as
``_acme-challenge`` or ``xn--53h`` (U+2615) are accepted.  Two domains
are equal iff their normalized names are equal.

INVARIANT: ``normalize(d.dns_name_ascii()) == d`` for every domain ``d``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering

import idna

from ddnsctl.domain.errors import DomainNameError, NotFQDNError

WILDCARD_PREFIX = "*."
ACE_PREFIX = "xn--"
MAX_LABEL_LEN = 63


@total_ordering
class Domain(ABC):
    """Common base of :class:`FQDN` and :class:`Wildcard`.

    Domains order by their ASCII DNS name.  ``*`` sorts before every
    letter and digit, so ``*.a.org`` lands right before ``a.org``'s
    subdomains and the order stays total across both variants.
    """

    @abstractmethod
    def dns_name_ascii(self) -> str:
        """The DNS name in ASCII-compatible form (``*.`` kept for wildcards)."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Human-readable name, decoded to Unicode where possible."""
        ...

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.dns_name_ascii() < other.dns_name_ascii()


@dataclass(frozen=True)
class FQDN(Domain):
    """A fully qualified domain name."""

    name: str

    def dns_name_ascii(self) -> str:
        return self.name

    def describe(self) -> str:
        return _to_unicode(self.name)


@dataclass(frozen=True)
class Wildcard(Domain):
    """The wildcard ``*.suffix``; ``suffix`` never carries the ``*.`` itself."""

    suffix: str

    def dns_name_ascii(self) -> str:
        return WILDCARD_PREFIX + self.suffix

    def describe(self) -> str:
        return WILDCARD_PREFIX + _to_unicode(self.suffix)


def _decode_alabel(label: str) -> str:
    """Decode the Punycode part of an ``xn--`` label."""
    return label[len(ACE_PREFIX) :].encode("ascii").decode("punycode")


def _label_to_ascii(label: str, raw: str) -> str:
    if not label:
        raise DomainNameError(raw, "empty label")
    if "*" in label or any(ch.isspace() for ch in label):
        raise DomainNameError(raw, f"label {label!r} contains '*' or whitespace")

    if label.isascii():
        if label.startswith(ACE_PREFIX):
            try:
                _decode_alabel(label)
            except UnicodeError as exc:
                raise DomainNameError(raw, f"label {label!r} is not valid Punycode") from exc
        encoded = label
    else:
        encoded = ACE_PREFIX + label.encode("punycode").decode("ascii")

    if len(encoded) > MAX_LABEL_LEN:
        raise DomainNameError(raw, f"label {encoded!r} is longer than {MAX_LABEL_LEN} octets")
    return encoded


def _to_ascii(name: str, raw: str) -> str:
    # Lookup profile: no STD3 rules, so '_acme-challenge' and symbols like U+2615 pass.
    try:
        mapped = idna.uts46_remap(name, std3_rules=False, transitional=False)
    except idna.IDNAError as exc:
        raise DomainNameError(raw, str(exc)) from exc
    return ".".join(_label_to_ascii(label, raw) for label in mapped.split("."))


def _to_unicode(name: str) -> str:
    labels: list[str] = []
    for label in name.split("."):
        decoded = label
        if label.startswith(ACE_PREFIX):
            try:
                decoded = _decode_alabel(label)
            except UnicodeError:
                decoded = label
        labels.append(decoded)
    return ".".join(labels)


def normalize(raw: str) -> Domain:
    """Parse *raw* into a normalized :class:`FQDN` or :class:`Wildcard`.

    Raises:
        NotFQDNError: *raw* is a lone ``*``.
        DomainNameError: the name (or the wildcard's suffix) is not a
            valid sequence of IDNA labels.

    Examples:
        >>> normalize("Bücher.org")
        FQDN(name='xn--bcher-kva.org')
        >>> normalize("*.Example.COM")
        Wildcard(suffix='example.com')
    """
    name = raw.strip()
    if name == "*":
        raise NotFQDNError(raw)
    if name.startswith(WILDCARD_PREFIX):
        return Wildcard(_to_ascii(name[len(WILDCARD_PREFIX) :], raw))
    return FQDN(_to_ascii(name, raw))


def sort_domains(domains: Iterable[Domain]) -> list[Domain]:
    """Return *domains* sorted by ASCII DNS name (duplicates kept)."""
    return sorted(domains)


def dedupe_domains(domains: Iterable[Domain]) -> list[Domain]:
    """Return the distinct *domains* in sorted order."""
    return sorted(set(domains))


def matches_is(target: Domain, candidate: Domain) -> bool:
    """Exact match: a wildcard only ever equals the same wildcard."""
    return target.dns_name_ascii() == candidate.dns_name_ascii()


def matches_sub(target: Domain, candidate: Domain) -> bool:
    """Whether *candidate* is *target* or lies under it at a label boundary.

    ``sub.example.com`` and ``*.example.com`` are under ``example.com``;
    ``subexample.com`` is not.
    """
    anchor = target.dns_name_ascii()
    name = candidate.dns_name_ascii()
    return name == anchor or name.endswith("." + anchor)
