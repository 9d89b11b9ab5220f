"""ddnsctl: domain expressions and IPv6 host identifiers for dynamic DNS."""

__version__ = "0.3.0"
