"""Boolean expressions over domains, compiled to reusable predicates.

Grammar, lowest precedence first::

    expr  := term ("||" term)*
    term  := factor ("&&" factor)*
    factor:= "!"* atom
    atom  := BOOL | "is" "(" list ")" | "sub" "(" list ")" | "(" expr ")"

``BOOL`` is one of ``true t 1 yes`` / ``false f 0 no`` in any case.
``is(...)`` and ``sub(...)`` take a domain list with the same syntax as
DOMAINS and match when any listed domain matches.

Parsing is done once; the returned predicate holds no state and can be
applied to any number of domains, from any thread.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ddnsctl.domain.diagnostics import Reporter, default_reporter
from ddnsctl.domain.errors import NotBooleanExpressionError
from ddnsctl.domain.lexer import TokenStream
from ddnsctl.domain.lists import scan_items, to_domain
from ddnsctl.domain.names import Domain, matches_is, matches_sub

type Predicate = Callable[[Domain], bool]

TRUE_LITERALS = frozenset({"true", "t", "1", "yes"})
FALSE_LITERALS = frozenset({"false", "f", "0", "no"})

_MATCHERS: dict[str, Callable[[Domain, Domain], bool]] = {
    "is": matches_is,
    "sub": matches_sub,
}


def _constant(result: bool) -> Predicate:
    return lambda _domain: result


def _negate(pred: Predicate) -> Predicate:
    return lambda domain: not pred(domain)


def _any_of(preds: Sequence[Predicate]) -> Predicate:
    if len(preds) == 1:
        return preds[0]
    return lambda domain: any(p(domain) for p in preds)


def _all_of(preds: Sequence[Predicate]) -> Predicate:
    if len(preds) == 1:
        return preds[0]
    return lambda domain: all(p(domain) for p in preds)


def _match_any(
    matcher: Callable[[Domain, Domain], bool],
    targets: Sequence[Domain],
) -> Predicate:
    return lambda domain: any(matcher(target, domain) for target in targets)


class _Parser:
    """Recursive-descent parser; one instance per call."""

    def __init__(self, stream: TokenStream, reporter: Reporter) -> None:
        self._stream = stream
        self._reporter = reporter

    def _fail(self) -> NotBooleanExpressionError:
        return NotBooleanExpressionError(self._stream.key, self._stream.value)

    def expression(self) -> Predicate:
        terms = [self.term()]
        while self._stream.peek() == "||":
            self._stream.advance()
            terms.append(self.term())
        return _any_of(terms)

    def term(self) -> Predicate:
        factors = [self.factor()]
        while self._stream.peek() == "&&":
            self._stream.advance()
            factors.append(self.factor())
        return _all_of(factors)

    def factor(self) -> Predicate:
        negations = 0
        while self._stream.peek() == "!":
            self._stream.advance()
            negations += 1
        pred = self.atom()
        return _negate(pred) if negations % 2 else pred

    def atom(self) -> Predicate:
        token = self._stream.peek()
        if token is None:
            raise self._fail()

        lowered = token.lower()
        if lowered in TRUE_LITERALS:
            self._stream.advance()
            return _constant(True)
        if lowered in FALSE_LITERALS:
            self._stream.advance()
            return _constant(False)

        if token == "(":
            self._stream.advance()
            pred = self.expression()
            self._stream.expect(")")
            return pred

        matcher = _MATCHERS.get(token)
        if matcher is not None:
            self._stream.advance()
            self._stream.expect("(")
            items = scan_items(self._stream, self._reporter)
            self._stream.expect(")")
            targets = [to_domain(self._stream, item.domain) for item in items]
            return _match_any(matcher, targets)

        raise self._fail()


def parse_expression(
    key: str,
    raw: str | bytes,
    *,
    reporter: Reporter | None = None,
) -> Predicate:
    """Compile *raw* into a :data:`Predicate`.

    Raises:
        InvalidUTF8Error: *raw* is not valid UTF-8.
        SingleAndError, SingleOrError: a lone ``&`` or ``|``.
        NotBooleanExpressionError: no expression could be read at all,
            e.g. empty input, a dangling operator, or unbalanced ``(``.
        MissingTokenError, UnexpectedTokenError: a specific token was
            missing or out of place.
        IllFormedDomainError, NotFullyQualifiedError: a domain inside
            ``is(...)`` or ``sub(...)``.

    Examples:
        >>> from ddnsctl.domain.names import FQDN
        >>> pred = parse_expression("PROXIED", "sub(example.org) && !is(www.example.org)")
        >>> pred(FQDN("api.example.org")), pred(FQDN("www.example.org"))
        (True, False)
    """
    stream = TokenStream.from_raw(key, raw)
    pred = _Parser(stream, reporter or default_reporter()).expression()
    stream.expect_end()
    return pred
