"""Domain layer: domain names, host identifiers, list and expression parsing.

This layer depends only on stdlib, idna, netaddr and structlog.
It must never import from services, commands, output, or config.
"""
