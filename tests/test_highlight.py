import pytest

from byte6502.highlight import (
    HighlighterType,
    Theme,
    classify_tokens,
    highlight,
    scan_tokens,
)
from byte6502.tokens import TokenKind


def test_default_theme_background_color():
    assert Theme.DEFAULT.colorize(HighlighterType.BACKGROUND) == (0x0A, 0x0A, 0x0A)


def test_embers_light_foreground_color():
    assert Theme.EMBERS_LIGHT.colorize(HighlighterType.FOREGROUND) == (0x43, 0x3B, 0x32)


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (HighlighterType.BACKGROUND, (0x0A, 0x0A, 0x0A)),
        (HighlighterType.COMMENT, (0x6A, 0x6A, 0x69)),
        (HighlighterType.FOREGROUND, (0xFF, 0xFF, 0xFF)),
        (HighlighterType.INSTRUCTION, (0xFF, 0xC5, 0x91)),
        (HighlighterType.KEYWORD, (0x63, 0xAA, 0xCF)),
        (HighlighterType.LABEL, (0x72, 0x97, 0x5F)),
        (HighlighterType.NUMBER, (0xD8, 0x98, 0xA4)),
        (HighlighterType.STRING, (0x7B, 0xAF, 0x95)),
        (HighlighterType.VARIABLE, (0x96, 0xCE, 0xD8)),
    ],
)
def test_default_theme_colors(kind, expected):
    assert Theme.DEFAULT.colorize(kind) == expected


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        (HighlighterType.BACKGROUND, (0xDB, 0xD6, 0xD1)),
        (HighlighterType.COMMENT, (0xB1, 0x9B, 0x90)),
        (HighlighterType.FOREGROUND, (0x43, 0x3B, 0x32)),
        (HighlighterType.INSTRUCTION, (0x64, 0x8A, 0x77)),
        (HighlighterType.KEYWORD, (0x6D, 0x63, 0x8C)),
        (HighlighterType.LABEL, (0x6D, 0x82, 0x57)),
        (HighlighterType.NUMBER, (0x8B, 0x75, 0x86)),
        (HighlighterType.STRING, (0x68, 0x85, 0x8A)),
        (HighlighterType.VARIABLE, (0x8E, 0x8A, 0x70)),
    ],
)
def test_embers_light_theme_colors(kind, expected):
    assert Theme.EMBERS_LIGHT.colorize(kind) == expected


def test_scan_tokens_excludes_eof_and_skips_errors():
    tokens = scan_tokens("lda @ #1")
    assert [t.kind for t in tokens] == [
        TokenKind.INSTRUCTION,
        TokenKind.HASH,
        TokenKind.NUMBER,
    ]


def test_scan_tokens_of_empty_source():
    assert scan_tokens("") == []


def test_classify_labels_and_variables():
    source = "loop: jmp loop\nlda value\n"
    roles = [
        (role, token.text(source))
        for role, token in classify_tokens(source, scan_tokens(source))
    ]
    assert (HighlighterType.LABEL, "loop") in roles
    assert (HighlighterType.VARIABLE, "value") in roles
    assert roles.count((HighlighterType.LABEL, "loop")) == 2
    assert (HighlighterType.INSTRUCTION, "jmp") in roles


def test_classify_other_kinds():
    source = '.db "hi" ; note\n'
    roles = [role for role, _ in classify_tokens(source, scan_tokens(source))]
    assert roles == [
        HighlighterType.KEYWORD,
        HighlighterType.STRING,
        HighlighterType.COMMENT,
        HighlighterType.FOREGROUND,
    ]


def test_highlight_covers_source_text():
    source = "start:\n  lda #$10 ; load\n  sta $0200\n"
    segments = highlight(source, Theme.DEFAULT)
    assert "".join(text for text, _ in segments) == source


def test_highlight_fills_gaps_left_by_errors():
    source = "lda @ #1"
    segments = highlight(source, Theme.DEFAULT)
    assert "".join(text for text, _ in segments) == source
    assert ("lda", Theme.DEFAULT.colorize(HighlighterType.INSTRUCTION)) in segments


def test_highlight_uses_theme_colors():
    source = "lda #1"
    segments = dict(highlight(source, Theme.EMBERS_LIGHT))
    assert segments["lda"] == Theme.EMBERS_LIGHT.colorize(HighlighterType.INSTRUCTION)
    assert segments["1"] == Theme.EMBERS_LIGHT.colorize(HighlighterType.NUMBER)
    assert segments["#"] == Theme.EMBERS_LIGHT.colorize(HighlighterType.FOREGROUND)


def test_highlight_empty_source():
    assert highlight("", Theme.DEFAULT) == []