"""Tests for the shared tokenizer."""

from __future__ import annotations

import pytest

from ddnsctl.domain.errors import (
    InvalidUTF8Error,
    MissingTokenError,
    SingleAndError,
    SingleOrError,
    UnexpectedTokenError,
)
from ddnsctl.domain.lexer import TokenStream, decode_value, is_word, tokenize


class TestTokenize:
    @pytest.mark.parametrize(
        ("value", "tokens"),
        [
            ("", []),
            ("   \t ", []),
            ("a.org,b.org", ["a.org", ",", "b.org"]),
            (" a.org  b.org ", ["a.org", "b.org"]),
            ("a.org[::1]", ["a.org", "[", "::1", "]"]),
            ("!is(a.org)&&sub(b)", ["!", "is", "(", "a.org", ")", "&&", "sub", "(", "b", ")"]),
            ("true||false", ["true", "||", "false"]),
        ],
    )
    def test_tokens(self, value: str, tokens: list[str]) -> None:
        assert tokenize("KEY", value) == tokens

    @pytest.mark.parametrize("value", ["&", "a && b &", "a & b", "a &&& b"])
    def test_single_and(self, value: str) -> None:
        with pytest.raises(SingleAndError) as exc_info:
            tokenize("PROXIED", value)
        assert exc_info.value.key == "PROXIED"
        assert exc_info.value.value == value

    @pytest.mark.parametrize("value", ["|", "a || b |", "a | b"])
    def test_single_or(self, value: str) -> None:
        with pytest.raises(SingleOrError):
            tokenize("PROXIED", value)

    def test_single_and_message(self) -> None:
        with pytest.raises(SingleAndError, match=r"PROXIED \('&'\) is ill-formed: use '&&'"):
            tokenize("PROXIED", "&")


class TestDecodeValue:
    def test_str_passthrough(self) -> None:
        assert decode_value("K", "書.org") == "書.org"

    def test_bytes_decoded(self) -> None:
        assert decode_value("K", "書.org".encode()) == "書.org"

    def test_invalid_bytes(self) -> None:
        with pytest.raises(InvalidUTF8Error):
            decode_value("K", b"\xff\xfe")

    def test_surrogate_escaped_str(self) -> None:
        # os.environ turns undecodable bytes into lone surrogates
        with pytest.raises(InvalidUTF8Error) as exc_info:
            decode_value("DOMAINS", "a.org,\udcff")
        assert exc_info.value.code == "INVALID_UTF8"


class TestTokenStream:
    def test_is_word(self) -> None:
        assert is_word("a.org")
        assert not is_word("(")
        assert not is_word("&&")

    def test_peek_and_advance(self) -> None:
        stream = TokenStream.from_raw("K", "a , b")
        assert stream.peek() == "a"
        assert stream.advance() == "a"
        assert stream.advance() == ","
        assert stream.advance() == "b"
        assert stream.peek() is None
        assert stream.at_end()

    def test_expect_missing(self) -> None:
        stream = TokenStream.from_raw("K", "(a")
        stream.expect("(")
        stream.advance()
        with pytest.raises(MissingTokenError) as exc_info:
            stream.expect(")")
        assert exc_info.value.expected == ")"
        assert "is missing ')' at the end" in str(exc_info.value)

    def test_expect_wrong_token(self) -> None:
        stream = TokenStream.from_raw("K", "a")
        with pytest.raises(UnexpectedTokenError) as exc_info:
            stream.expect("(")
        assert exc_info.value.token == "a"
        assert exc_info.value.expected == "("

    def test_expect_end(self) -> None:
        stream = TokenStream.from_raw("K", ")")
        with pytest.raises(UnexpectedTokenError, match="has unexpected token '\\)'"):
            stream.expect_end()
