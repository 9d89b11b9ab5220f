"""ExpressionService: evaluate a boolean domain expression ad hoc."""

from __future__ import annotations

from collections.abc import Sequence

from ddnsctl.domain.errors import ConfigValueError
from ddnsctl.domain.expressions import parse_expression
from ddnsctl.domain.lists import parse_domain_list
from ddnsctl.domain.names import Domain
from ddnsctl.services.base import BaseService, CollectingReporter
from ddnsctl.services.result import ServiceResult


class ExpressionService(BaseService):
    """Compile one expression and apply it to a list of domains."""

    def evaluate(
        self,
        expression: str,
        domains: Sequence[str],
        *,
        key: str = "EXPRESSION",
    ) -> ServiceResult:
        """Evaluate *expression* for each entry of *domains*.

        Each entry is parsed like a DOMAINS value, so ``"a.org,b.org"``
        counts as two domains.  The expression is compiled once.
        """
        op = "evaluate_expression"
        reporter = CollectingReporter()
        try:
            pred = parse_expression(key, expression, reporter=reporter)
            targets: list[Domain] = []
            for raw in domains:
                targets.extend(parse_domain_list("DOMAIN", raw, reporter=reporter))
        except ConfigValueError as exc:
            return self._config_failure(op, exc, reporter)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "expression": expression,
                "matches": {d.dns_name_ascii(): pred(d) for d in targets},
            },
            warnings=reporter.warnings,
        )
