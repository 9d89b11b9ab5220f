"""Exception hierarchy for configuration values and host identifiers.

Every failure of a raw configuration value is a :class:`ConfigValueError`
carrying the variable name (``key``), the full raw ``value`` and a stable
``code``.  The service layer turns these into ``ServiceError`` payloads.

Host identifiers are parsed without key context, so they raise the
smaller :class:`HostIDError` family; list parsing wraps those in
:class:`IllFormedHostIDError`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ddnsctl.domain.hostid import HostID
    from ddnsctl.domain.names import Domain


class ConfigValueError(ValueError):
    """A raw configuration value that cannot be used.

    *value* is None when the failure spans several entries rather than one
    raw string, as with conflicting host IDs.
    """

    code = "INVALID_VALUE"

    def __init__(self, key: str, value: str | None, message: str) -> None:
        subject = key if value is None else f"{key} ({value!r})"
        super().__init__(f"{subject} {message}")
        self.key = key
        self.value = value

    def detail(self) -> dict[str, Any]:
        """Structured fields for ``ServiceError.detail``."""
        return {"key": self.key, "value": self.value}


# --- Domains ---


class DomainNameError(ValueError):
    """A single domain name that cannot be normalized."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"{name!r} is not a valid domain name: {reason}")
        self.name = name
        self.reason = reason


class NotFQDNError(DomainNameError):
    """A bare ``*`` with no suffix to anchor the wildcard."""

    def __init__(self, name: str) -> None:
        super().__init__(name, "a wildcard needs a suffix such as '*.example.org'")


class IllFormedDomainError(ConfigValueError):
    code = "ILL_FORMED_DOMAIN"

    def __init__(self, key: str, value: str, token: str, reason: str) -> None:
        super().__init__(key, value, f"contains an ill-formed domain {token!r}: {reason}")
        self.token = token
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "token": self.token, "reason": self.reason}


class NotFullyQualifiedError(ConfigValueError):
    code = "NOT_FQDN"

    def __init__(self, key: str, value: str, token: str) -> None:
        super().__init__(
            key,
            value,
            f"contains a domain {token!r} that is probably not fully qualified; "
            "a fully qualified domain name (FQDN) would look like "
            "'*.example.org' or 'sub.example.org'",
        )
        self.token = token

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "token": self.token}


# --- Syntax ---


class UnexpectedTokenError(ConfigValueError):
    code = "UNEXPECTED_TOKEN"

    def __init__(self, key: str, value: str, token: str, expected: str | None = None) -> None:
        if expected is None:
            message = f"has unexpected token {token!r}"
        else:
            message = f"has unexpected token {token!r} when {expected!r} is expected"
        super().__init__(key, value, message)
        self.token = token
        self.expected = expected

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "token": self.token, "expected": self.expected}


class MissingTokenError(ConfigValueError):
    code = "MISSING_TOKEN"

    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(key, value, f"is missing {expected!r} at the end")
        self.expected = expected

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "expected": self.expected}


class SingleAndError(ConfigValueError):
    code = "SINGLE_AND"

    def __init__(self, key: str, value: str) -> None:
        super().__init__(key, value, "is ill-formed: use '&&' instead of '&'")


class SingleOrError(ConfigValueError):
    code = "SINGLE_OR"

    def __init__(self, key: str, value: str) -> None:
        super().__init__(key, value, "is ill-formed: use '||' instead of '|'")


class InvalidUTF8Error(ConfigValueError):
    code = "INVALID_UTF8"

    def __init__(self, key: str, value: str) -> None:
        super().__init__(key, value, "is ill-formed: not a valid UTF-8 string")


class NotBooleanExpressionError(ConfigValueError):
    code = "NOT_BOOLEAN_EXPRESSION"

    def __init__(self, key: str, value: str) -> None:
        super().__init__(key, value, "is not a boolean expression")


# --- Host identifiers ---


class HostIDError(ValueError):
    """A string that cannot be used as the host part of an IPv6 address."""


class InvalidPrefixLengthError(HostIDError):
    def __init__(self, prefix_len: int) -> None:
        super().__init__(f"invalid prefix length {prefix_len}; must be between 0 and 128")
        self.prefix_len = prefix_len


class NotHostIDError(HostIDError):
    def __init__(
        self,
        host_id: str,
        ip_error: Exception | None = None,
        mac_error: Exception | None = None,
    ) -> None:
        message = f"{host_id!r} is not an IPv6 or MAC (EUI-48) address"
        if ip_error is not None:
            message += f"; error when parsed as an IP address: {ip_error}"
        if mac_error is not None:
            message += f"; error when parsed as a MAC address: {mac_error}"
        super().__init__(message)
        self.host_id = host_id
        self.ip_error = ip_error
        self.mac_error = mac_error


class HostIDHasZoneError(HostIDError):
    def __init__(self, host_id: str) -> None:
        super().__init__(f"IPv6 address {host_id!r} as a host ID should not have an IPv6 zone")
        self.host_id = host_id


class SubnetTooSmallError(HostIDError):
    def __init__(self, prefix_len: int) -> None:
        super().__init__(
            f"IPv6 subnet /{prefix_len} is too small for a MAC (EUI-48) host ID; "
            "decrease the value of IP6_PREFIX_LEN to 64 or less"
        )
        self.prefix_len = prefix_len


class IllFormedHostIDError(ConfigValueError):
    code = "ILL_FORMED_HOST_ID"

    def __init__(self, key: str, value: str, token: str, reason: HostIDError) -> None:
        super().__init__(key, value, f"contains an ill-formed host ID {token!r}: {reason}")
        self.token = token
        self.reason = reason

    def detail(self) -> dict[str, Any]:
        return {**super().detail(), "token": self.token, "reason": str(self.reason)}


# --- Consolidation ---


class ConflictingHostIDError(ConfigValueError):
    code = "CONFLICTING_HOST_ID"

    def __init__(self, key: str, domain: Domain, first: HostID, second: HostID) -> None:
        super().__init__(
            key,
            None,
            f"associates domain {domain.describe()!r} with inconsistent host IDs "
            f"{first.describe()} and {second.describe()}",
        )
        self.domain = domain
        self.first = first
        self.second = second

    def detail(self) -> dict[str, Any]:
        return {
            **super().detail(),
            "domain": self.domain.dns_name_ascii(),
            "host_ids": [self.first.describe(), self.second.describe()],
        }
