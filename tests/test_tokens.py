import pytest

from byte6502.opcodes import Mnemonic
from byte6502.tokens import (
    Directive,
    Location,
    NumberExpectedError,
    ScannerError,
    Token,
    TokenKind,
    UnknownCharacterError,
    UnknownDirectiveError,
    UnterminatedStringError,
)


def test_text_returns_slice_of_source():
    source = "lda #$10"
    token = Token(TokenKind.NUMBER, 16, Location(column=8, length=3, line=1, start=5))
    assert token.text(source) == "$10"


def test_text_of_instruction():
    source = "nop"
    token = Token(TokenKind.INSTRUCTION, Mnemonic.NOP, Location(3, 3, 1, 0))
    assert token.text(source) == source


def test_eof_true_only_for_eof_kind():
    loc = Location(0, 0, 1, 0)
    assert Token(TokenKind.EOF, None, loc).eof()
    assert not Token(TokenKind.COMMA, None, loc).eof()


def test_tokens_compare_by_value():
    loc = Location(1, 1, 1, 0)
    first = Token(TokenKind.HASH, None, loc)
    second = Token(TokenKind.HASH, None, Location(1, 1, 1, 0))
    assert first == second
    assert first.text("#") == second.text("#") == "#"
    assert first != Token(TokenKind.COMMA, None, loc)


def test_directive_lookup_by_name():
    assert Directive["ORG"] is Directive.ORG
    assert Directive.__members__.get("FOO") is None


def test_unknown_directive_message():
    err = UnknownDirectiveError(2, 5, ".foo")
    assert str(err) == "[2:5] unknown assembler directive: .foo"
    assert err.directive == ".foo"
    assert isinstance(err, ScannerError)


def test_unknown_character_message():
    err = UnknownCharacterError(1, 1, "@")
    assert str(err) == "[1:1] unknown character: @"
    assert (err.line, err.column, err.character) == (1, 1, "@")


def test_number_expected_message():
    err = NumberExpectedError(3, 4, "$")
    assert str(err) == "[3:4] no number is specified after number symbol: $"


def test_unterminated_string_message():
    err = UnterminatedStringError(1, 4, '"')
    assert str(err) == "[1:4] unterminated string quote"
    assert err.quote == '"'


@pytest.mark.parametrize(
    "err, message, position",
    [
        (UnknownDirectiveError(4, 2, ".bar"), "[4:2] unknown assembler directive: .bar", (4, 2)),
        (UnknownCharacterError(1, 1, "?"), "[1:1] unknown character: ?", (1, 1)),
        (NumberExpectedError(7, 3, "%"), "[7:3] no number is specified after number symbol: %", (7, 3)),
        (UnterminatedStringError(2, 9, "'"), "[2:9] unterminated string quote", (2, 9)),
    ],
)
def test_errors_share_scanner_error_base(err, message, position):
    assert isinstance(err, ScannerError)
    assert str(err) == message
    assert (err.line, err.column) == position