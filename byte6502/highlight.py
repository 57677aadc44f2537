"""Syntax highlighting of assembly source into coloured text segments."""

from __future__ import annotations

from enum import Enum, auto

from byte6502.scanner import Scanner
from byte6502.tokens import ScannerError, Token, TokenKind

Color = tuple[int, int, int]


class HighlighterType(Enum):
    """The roles a piece of source text can be coloured as."""

    BACKGROUND = auto()
    COMMENT = auto()
    FOREGROUND = auto()
    INSTRUCTION = auto()
    KEYWORD = auto()
    LABEL = auto()
    NUMBER = auto()
    STRING = auto()
    VARIABLE = auto()


class Theme(Enum):
    """Colour schemes for the code editor."""

    DEFAULT = "Default"
    EMBERS_LIGHT = "EmbersLight"

    def __str__(self) -> str:
        return self.value

    def colorize(self, kind: HighlighterType) -> Color:
        """The (red, green, blue) colour this theme gives ``kind``."""
        rgb = _PALETTES[self][kind]
        return (rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF


_H = HighlighterType
_PALETTES: dict[Theme, dict[HighlighterType, int]] = {
    Theme.DEFAULT: {
        _H.BACKGROUND: 0x0A0A0A,
        _H.COMMENT: 0x6A6A69,
        _H.FOREGROUND: 0xFFFFFF,
        _H.INSTRUCTION: 0xFFC591,
        _H.KEYWORD: 0x63AACF,
        _H.LABEL: 0x72975F,
        _H.NUMBER: 0xD898A4,
        _H.STRING: 0x7BAF95,
        _H.VARIABLE: 0x96CED8,
    },
    Theme.EMBERS_LIGHT: {
        _H.BACKGROUND: 0xDBD6D1,
        _H.COMMENT: 0xB19B90,
        _H.FOREGROUND: 0x433B32,
        _H.INSTRUCTION: 0x648A77,
        _H.KEYWORD: 0x6D638C,
        _H.LABEL: 0x6D8257,
        _H.NUMBER: 0x8B7586,
        _H.STRING: 0x68858A,
        _H.VARIABLE: 0x8E8A70,
    },
}

_KIND_ROLES = {
    TokenKind.NUMBER: HighlighterType.NUMBER,
    TokenKind.STRING: HighlighterType.STRING,
    TokenKind.COMMENT: HighlighterType.COMMENT,
    TokenKind.INSTRUCTION: HighlighterType.INSTRUCTION,
    TokenKind.DIRECTIVE: HighlighterType.KEYWORD,
}


def scan_tokens(source: str) -> list[Token]:
    """All tokens of ``source`` before EOF; text that fails to scan is skipped."""
    scanner = Scanner(source)
    tokens: list[Token] = []
    while True:
        try:
            token = scanner.scan_token()
        except ScannerError:
            continue
        if token.eof():
            return tokens
        tokens.append(token)


def classify_tokens(
    source: str, tokens: list[Token]
) -> list[tuple[HighlighterType, Token]]:
    """Pair each token with its highlight role.

    An identifier followed by a colon anywhere in the source is a label;
    any other identifier is a variable.
    """
    labels: set[str] = set()
    variables: set[str] = set()
    followers = [*tokens[1:], None]
    for token, following in zip(tokens, followers):
        if token.kind is not TokenKind.IDENTIFIER:
            continue
        if following is not None and following.kind is TokenKind.COLON:
            labels.add(token.text(source))
        else:
            variables.add(token.text(source))

    result: list[tuple[HighlighterType, Token]] = []
    for token in tokens:
        if token.kind is TokenKind.IDENTIFIER:
            text = token.text(source)
            if text in labels:
                role = HighlighterType.LABEL
            elif text in variables:
                role = HighlighterType.VARIABLE
            else:
                role = HighlighterType.FOREGROUND
        else:
            role = _KIND_ROLES.get(token.kind, HighlighterType.FOREGROUND)
        result.append((role, token))
    return result


def highlight(source: str, theme: Theme) -> list[tuple[str, Color]]:
    """Split ``source`` into (text, colour) segments up to the end of its last token."""
    foreground = theme.colorize(HighlighterType.FOREGROUND)
    segments: list[tuple[str, Color]] = []
    previous_end = 0
    for role, token in classify_tokens(source, scan_tokens(source)):
        start = token.location.start
        if start > previous_end:
            segments.append((source[previous_end:start], foreground))
        segments.append((token.text(source), theme.colorize(role)))
        previous_end = start + token.location.length
    return segments