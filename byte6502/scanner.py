"""Tokenizer for 6502 assembly source, plus a command that dumps tokens."""

from __future__ import annotations

import string
import sys
from typing import Iterator, Optional, Sequence

from byte6502.opcodes import Mnemonic
from byte6502.tokens import (
    Directive,
    Location,
    NumberExpectedError,
    ScannerError,
    Token,
    TokenKind,
    TokenValue,
    UnknownCharacterError,
    UnknownDirectiveError,
    UnterminatedStringError,
)

_PUNCTUATION = {
    ")": TokenKind.CLOSE_PAREN,
    ",": TokenKind.COMMA,
    ":": TokenKind.COLON,
    "#": TokenKind.HASH,
    "-": TokenKind.MINUS,
    "(": TokenKind.OPEN_PAREN,
    "+": TokenKind.PLUS,
    "/": TokenKind.SLASH,
    "*": TokenKind.STAR,
}
_WHITESPACE = frozenset(" \r\t")
_IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DIGITS = {
    2: frozenset("01"),
    10: frozenset(string.digits),
    16: frozenset(string.hexdigits),
}
_PREFIX_RADIX = {"%": 2, "$": 16}
_ESCAPES = {"n": "\n", "r": "\r", "t": "\t"}
_U64_MAX = (1 << 64) - 1


class Scanner:
    """Turns assembly source into tokens, one call at a time."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._start = 0
        self._current = 0
        self._line = 1
        self._column = 0

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including EOF; scanning errors propagate."""
        while True:
            token = self.scan_token()
            yield token
            if token.eof():
                return

    def scan_token(self) -> Token:
        """Scan the next token, raising a ScannerError on bad input."""
        self._skip_whitespace()
        self._start = self._current

        c = self._advance()
        if c is None:
            return self._make(TokenKind.EOF)
        if c in _PUNCTUATION:
            return self._make(_PUNCTUATION[c])
        if c == "\n":
            token = self._make(TokenKind.NEW_LINE)
            self._line += 1
            self._column = 0
            return token
        if c in _PREFIX_RADIX:
            return self._make(TokenKind.NUMBER, self._scan_number(_PREFIX_RADIX[c], 1))
        if c in _DIGITS[10]:
            return self._make(TokenKind.NUMBER, self._scan_number(10, 0))
        if c == ";":
            self._scan_comment()
            return self._make(TokenKind.COMMENT)
        if c in "'\"":
            return self._make(TokenKind.STRING, self._scan_string(c))
        if c == ".":
            identifier = self._scan_identifier().lower()
            directive = Directive.__members__.get(identifier[1:].upper())
            if directive is None:
                raise UnknownDirectiveError(self._line, self._column, identifier)
            return self._make(TokenKind.DIRECTIVE, directive)
        if c.isalpha():
            identifier = self._scan_identifier().upper()
            mnemonic = Mnemonic.__members__.get(identifier)
            if mnemonic is None:
                return self._make(TokenKind.IDENTIFIER)
            return self._make(TokenKind.INSTRUCTION, mnemonic)
        raise UnknownCharacterError(self._line, self._column, c)

    def _peek(self) -> Optional[str]:
        if self._current < len(self._source):
            return self._source[self._current]
        return None

    def _advance(self) -> Optional[str]:
        c = self._peek()
        if c is not None:
            self._column += 1
            self._current += 1
        return c

    def _make(self, kind: TokenKind, value: Optional[TokenValue] = None) -> Token:
        location = Location(
            column=self._column,
            length=self._current - self._start,
            line=self._line,
            start=self._start,
        )
        return Token(kind, value, location)

    def _skip_whitespace(self) -> None:
        while self._peek() in _WHITESPACE:
            self._advance()

    def _scan_comment(self) -> None:
        while (c := self._peek()) is not None and c != "\n":
            self._advance()

    def _scan_identifier(self) -> str:
        while (c := self._peek()) is not None and c in _IDENTIFIER_CHARS:
            self._advance()
        return self._source[self._start : self._current]

    def _scan_string(self, quote: str) -> str:
        chars: list[str] = []
        while (c := self._peek()) is not None and c not in (quote, "\n"):
            self._advance()
            if c != "\\":
                chars.append(c)
                continue
            escaped = self._peek()
            if escaped is None:
                continue
            chars.append(_ESCAPES.get(escaped, escaped))
            self._advance()

        if self._peek() in (None, "\n"):
            raise UnterminatedStringError(self._line, self._column, quote)
        self._advance()
        return "".join(chars)

    def _scan_number(self, radix: int, start_offset: int) -> int:
        digits = _DIGITS[radix]
        while (c := self._peek()) is not None and c in digits:
            self._advance()

        if self._current - self._start == 1 and radix != 10:
            symbol = "$" if radix == 16 else "%"
            raise NumberExpectedError(self._line, self._column, symbol)

        value = int(self._source[self._start + start_offset : self._current], radix)
        if value > _U64_MAX:
            raise ScannerError("number too large to fit in target type")
        return value


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print every token (or error) scanned from a source file."""
    args = list(sys.argv[1:] if argv is None else argv)
    path = args[0] if args else "test.s"
    try:
        with open(path, encoding="utf-8") as handle:
            data = handle.read()
    except OSError as err:
        print(f"failed to read the provided file: {err}", file=sys.stderr)
        return 1

    scanner = Scanner(data)
    while True:
        try:
            token = scanner.scan_token()
        except ScannerError as err:
            print(repr(err))
            continue
        print(token)
        if token.eof():
            return 0


if __name__ == "__main__":
    sys.exit(main())