"""Comma-separated domain lists, optionally with ``[hostid]`` suffixes.

Grammar (whitespace-insensitive)::

    list  := (item | ",")*
    item  := DOMAIN ("[" HOSTID? "]")?      # brackets only in host ID lists

Empty segments are skipped, so ``",a.org,,b.org,"`` is fine.  Two items
with no comma between them are still accepted; the gap is reported as
an advisory through the :class:`Reporter`.
"""

from __future__ import annotations

from dataclasses import dataclass

from ddnsctl.domain.diagnostics import Reporter, default_reporter
from ddnsctl.domain.errors import (
    DomainNameError,
    HostIDError,
    IllFormedDomainError,
    IllFormedHostIDError,
    NotFQDNError,
    NotFullyQualifiedError,
)
from ddnsctl.domain.hostid import HostID, parse_host_id
from ddnsctl.domain.lexer import TokenStream, is_word
from ddnsctl.domain.names import Domain, normalize


@dataclass(frozen=True)
class DomainHostID:
    """A domain with the host ID it was given (None when absent)."""

    domain: Domain
    host_id: HostID | None = None


@dataclass(frozen=True)
class _Item:
    domain: str
    host_id: str | None = None


def scan_items(
    stream: TokenStream,
    reporter: Reporter,
    *,
    with_host_ids: bool = False,
) -> list[_Item]:
    """Consume list items up to the end or an unconsumed ``)``.

    The ``)`` is left for the caller: expressions close ``is(...)`` with
    it, while top-level lists reject it as an unexpected token.
    """
    items: list[_Item] = []
    ready_for_next = True
    while (token := stream.peek()) is not None:
        if token == ",":
            stream.advance()
            ready_for_next = True
            continue
        if token == ")":
            break
        if not is_word(token):
            stream.unexpected()

        if not ready_for_next:
            reporter.warning(
                f"{stream.key} ({stream.value!r}) is missing a comma ',' before {token!r}",
                key=stream.key,
                token=token,
            )
        stream.advance()

        host_id: str | None = None
        if with_host_ids and stream.peek() == "[":
            stream.advance()
            host_id = ""
            inner = stream.peek()
            if inner is not None and is_word(inner):
                host_id = stream.advance()
            stream.expect("]")

        items.append(_Item(token, host_id))
        ready_for_next = False
    return items


def to_domain(stream: TokenStream, token: str) -> Domain:
    """Normalize one list token, re-raising failures with key context."""
    try:
        return normalize(token)
    except NotFQDNError as exc:
        raise NotFullyQualifiedError(stream.key, stream.value, token) from exc
    except DomainNameError as exc:
        raise IllFormedDomainError(stream.key, stream.value, token, exc.reason) from exc


def parse_domain_list(
    key: str,
    raw: str | bytes,
    *,
    reporter: Reporter | None = None,
) -> list[Domain]:
    """Parse a list such as ``"a.org, *.b.org"`` in input order.

    An empty or blank value yields an empty list.

    Raises:
        ConfigValueError: on lexical errors, stray punctuation, or an
            ill-formed domain.  See :mod:`ddnsctl.domain.errors`.
    """
    stream = TokenStream.from_raw(key, raw)
    items = scan_items(stream, reporter or default_reporter())
    stream.expect_end()
    return [to_domain(stream, item.domain) for item in items]


def parse_domain_host_id_list(
    key: str,
    raw: str | bytes,
    prefix_len: int,
    *,
    reporter: Reporter | None = None,
) -> list[DomainHostID]:
    """Parse a list such as ``"a.org[::1], b.org[aa:bb:cc:dd:ee:ff], c.org"``.

    Host IDs are interpreted for a ``/prefix_len`` IPv6 network.
    """
    stream = TokenStream.from_raw(key, raw)
    items = scan_items(stream, reporter or default_reporter(), with_host_ids=True)
    stream.expect_end()

    result: list[DomainHostID] = []
    for item in items:
        domain = to_domain(stream, item.domain)
        try:
            host_id = parse_host_id(item.host_id or "", prefix_len)
        except HostIDError as exc:
            raise IllFormedHostIDError(stream.key, stream.value, item.host_id or "", exc) from exc
        result.append(DomainHostID(domain, host_id))
    return result
