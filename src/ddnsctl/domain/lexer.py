"""Tokenizer shared by domain lists and boolean expressions.

Tokens are plain strings: the punctuation ``( ) , [ ] !``, the operators
``&&`` and ``||``, and words (maximal runs of anything else that is not
whitespace).  Words never contain punctuation, so a token's text alone
tells punctuation and words apart.
"""

from __future__ import annotations

from typing import NoReturn

from ddnsctl.domain.errors import (
    InvalidUTF8Error,
    MissingTokenError,
    SingleAndError,
    SingleOrError,
    UnexpectedTokenError,
)

PUNCTUATION = frozenset("(),[]!")
OPERATORS = frozenset({"&&", "||"})
SPECIAL_TOKENS = PUNCTUATION | OPERATORS

_WORD_BREAKS = PUNCTUATION | frozenset("&|")


def decode_value(key: str, raw: str | bytes) -> str:
    """Return *raw* as text, rejecting anything that is not valid UTF-8.

    ``os.environ`` smuggles undecodable bytes through as lone surrogates,
    so a ``str`` is checked by re-encoding it.
    """
    if isinstance(raw, bytes):
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUTF8Error(key, raw.decode("utf-8", "backslashreplace")) from exc
    try:
        raw.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidUTF8Error(key, raw) from exc
    return raw


def is_word(token: str) -> bool:
    return token not in SPECIAL_TOKENS


def tokenize(key: str, value: str) -> list[str]:
    """Split *value* into tokens.

    Raises:
        SingleAndError: a lone ``&`` (likely a typo for ``&&``).
        SingleOrError: a lone ``|`` (likely a typo for ``||``).
    """
    tokens: list[str] = []
    i, end = 0, len(value)
    while i < end:
        ch = value[i]
        if ch.isspace():
            i += 1
        elif ch in PUNCTUATION:
            tokens.append(ch)
            i += 1
        elif ch in "&|":
            if not value.startswith(ch * 2, i):
                raise SingleAndError(key, value) if ch == "&" else SingleOrError(key, value)
            tokens.append(ch * 2)
            i += 2
        else:
            start = i
            while i < end and not value[i].isspace() and value[i] not in _WORD_BREAKS:
                i += 1
            tokens.append(value[start:i])
    return tokens


class TokenStream:
    """Cursor over a token list, with error helpers bound to one config value."""

    def __init__(self, key: str, value: str, tokens: list[str]) -> None:
        self.key = key
        self.value = value
        self._tokens = tokens
        self._pos = 0

    @classmethod
    def from_raw(cls, key: str, raw: str | bytes) -> TokenStream:
        value = decode_value(key, raw)
        return cls(key, value, tokenize(key, value))

    def peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def advance(self) -> str:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def expect(self, expected: str) -> None:
        """Consume *expected* or raise a missing/unexpected token error."""
        token = self.peek()
        if token is None:
            raise MissingTokenError(self.key, self.value, expected)
        if token != expected:
            raise UnexpectedTokenError(self.key, self.value, token, expected)
        self._pos += 1

    def unexpected(self) -> NoReturn:
        """Reject the current token."""
        token = self.peek()
        if token is None:
            msg = "no token left to reject"
            raise RuntimeError(msg)
        raise UnexpectedTokenError(self.key, self.value, token)

    def expect_end(self) -> None:
        if not self.at_end():
            self.unexpected()
