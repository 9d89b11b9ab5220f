"""Log routing for the ``ddnsctl`` logger tree.

Library code logs through ``logging.getLogger(__name__)`` or
``structlog.get_logger("ddnsctl.<area>")``; both end up on one stderr
handler owned by the ``ddnsctl`` logger, so an embedding application's
root logger is left alone. ``--log-json`` switches the renderer to one
JSON object per line.
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "ddnsctl"


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to structlog and plain stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        # Keep internationalized domain names readable in the JSON output.
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route ``ddnsctl.*`` records to stderr.

    Args:
        verbose: Log DEBUG and above; otherwise only warnings and errors.
        log_json: Render JSON lines instead of the console format.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    ddns_logger = logging.getLogger(LOGGER_NAME)
    ddns_logger.handlers = [handler]
    ddns_logger.propagate = False
    ddns_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
