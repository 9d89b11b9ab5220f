"""BaseService — shared foundation for ddnsctl services.

Every service receives the frozen :class:`DdnsSettings` at construction.
Parsers report advisories to a :class:`CollectingReporter`, which keeps
them for ``ServiceResult.warnings``; the CLI decides how to show them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ddnsctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from ddnsctl.config.settings import DdnsSettings
    from ddnsctl.domain.errors import ConfigValueError

logger = logging.getLogger(__name__)


class CollectingReporter:
    """Reporter that records advisory messages without logging them."""

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def warning(self, event: str, *args: Any, **kw: Any) -> None:
        self.warnings.append(event)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DomainConfigService(BaseService):
            def read_domain_map(self) -> ServiceResult:
                reporter = CollectingReporter()
                try:
                    ...
                except ConfigValueError as exc:
                    return self._config_failure("read_domain_map", exc, reporter)
    """

    def __init__(self, settings: DdnsSettings) -> None:
        self._settings = settings

    @staticmethod
    def _config_failure(
        op: str,
        exc: ConfigValueError,
        reporter: CollectingReporter | None = None,
    ) -> ServiceResult:
        """Turn a rejected configuration value into a failed result."""
        logger.debug("%s rejected %s: %s", op, exc.key, exc)
        return ServiceResult(
            ok=False,
            op=op,
            warnings=reporter.warnings if reporter else [],
            error=ServiceError(code=exc.code, message=str(exc), detail=exc.detail()),
        )
