"""Reporter protocol: where advisory diagnostics go.

Parsers never raise for advisories (a missing comma between two domains
is accepted); they report them instead.  A structlog logger already
satisfies the protocol, so that is the default sink.
"""

from __future__ import annotations

from typing import Any, Protocol

import structlog


class Reporter(Protocol):
    """Anything with a structlog-style ``warning(event, **fields)`` method."""

    def warning(self, event: str, *args: Any, **kw: Any) -> Any: ...


def default_reporter() -> Reporter:
    """The structlog logger used when a caller passes no reporter."""
    return structlog.get_logger("ddnsctl.domain")
