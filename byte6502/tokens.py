"""Tokens, token kinds and scanner errors for the assembler front end."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from byte6502.opcodes import Mnemonic


@dataclass(frozen=True)
class Location:
    """Where a token sits in the source text."""

    column: int
    length: int
    line: int
    start: int


class Directive(Enum):
    """Assembler directives, written in source with a leading dot."""

    DB = "DB"
    DW = "DW"
    EQU = "EQU"
    INCLUDE = "INCLUDE"
    ORG = "ORG"


class TokenKind(Enum):
    """The lexical categories the scanner produces."""

    CLOSE_PAREN = "CloseParen"
    COLON = "Colon"
    COMMA = "Comma"
    COMMENT = "Comment"
    DIRECTIVE = "Directive"
    EOF = "EOF"
    HASH = "Hash"
    IDENTIFIER = "Identifier"
    INSTRUCTION = "Instruction"
    MINUS = "Minus"
    NEW_LINE = "NewLine"
    NUMBER = "Number"
    OPEN_PAREN = "OpenParen"
    PLUS = "Plus"
    SEMICOLON = "Semicolon"
    SLASH = "Slash"
    STAR = "Star"
    STRING = "String"


TokenValue = Union[str, int, Directive, Mnemonic]


@dataclass(frozen=True)
class Token:
    """A scanned token with its optional decoded value."""

    kind: TokenKind
    value: Optional[TokenValue]
    location: Location

    def eof(self) -> bool:
        """Whether this token marks the end of input."""
        return self.kind is TokenKind.EOF

    def text(self, source: str) -> str:
        """The slice of ``source`` this token was scanned from."""
        start = self.location.start
        return source[start : start + self.location.length]


class ScannerError(Exception):
    """Raised when the scanner cannot make a token from the input."""


class UnknownDirectiveError(ScannerError):
    """A dot was followed by a name that is not a directive."""

    def __init__(self, line: int, column: int, directive: str) -> None:
        super().__init__(f"[{line}:{column}] unknown assembler directive: {directive}")
        self.line = line
        self.column = column
        self.directive = directive


class UnknownCharacterError(ScannerError):
    """A character that starts no token."""

    def __init__(self, line: int, column: int, character: str) -> None:
        super().__init__(f"[{line}:{column}] unknown character: {character}")
        self.line = line
        self.column = column
        self.character = character


class NumberExpectedError(ScannerError):
    """A number prefix was not followed by any digit."""

    def __init__(self, line: int, column: int, symbol: str) -> None:
        super().__init__(
            f"[{line}:{column}] no number is specified after number symbol: {symbol}"
        )
        self.line = line
        self.column = column
        self.symbol = symbol


class UnterminatedStringError(ScannerError):
    """A string literal ran into a newline or the end of input."""

    def __init__(self, line: int, column: int, quote: str) -> None:
        super().__init__(f"[{line}:{column}] unterminated string quote")
        self.line = line
        self.column = column
        self.quote = quote