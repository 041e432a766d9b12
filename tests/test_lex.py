import random

import pytest

from yuri.errors import YuriLexError, YuriLexErrorType
from yuri.lex import Keyword, TokenKind, YuriToken, lex_input, take_whitespace


@pytest.mark.parametrize(
    "text",
    [
        "",
        " ",
        "#",
        "# ",
        " #",
        " # ",
        "#a",
        " #a ",
        "# ##",
        " ## a# ## ",
        " ## a## ",
        " ## a# # ## ",
        " # ",
        "\n",
        "#\n",
        "# \n\n",
        " # \n",
        "#a\n",
        "\n# ##\n",
        " ## \na#\n \n ## ",
        " ## \na## ",
        " #\n ",
    ],
)
def test_take_whitespace_consumes_everything(text):
    assert take_whitespace(text, 0) == len(text)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a", 0),
        (" a", 1),
        ("a# ", 0),
        (" #a\na ", 4),
        ("## asdas#d## asd#", 13),
        ("## asdasd## asd#", 12),
    ],
)
def test_take_whitespace_stops_at_content(text, expected):
    assert take_whitespace(text, 0) == expected


@pytest.mark.parametrize(
    "text",
    ["##", "## asdasd# asd#", "## \n#", "## #", " ##", "\n#\n ##\n"],
)
def test_take_whitespace_unterminated_block(text):
    with pytest.raises(YuriLexError) as info:
        take_whitespace(text, 0)
    assert info.value.error_type is YuriLexErrorType.UNEXPECTED_END_OF_FILE


def test_unterminated_block_marks_comment_start():
    with pytest.raises(YuriLexError) as info:
        take_whitespace(" ##", 0)
    assert info.value.markers == (range(2, 4),)


def test_lex_input_raises_on_unterminated_block():
    with pytest.raises(YuriLexError):
        lex_input("let a ## never closed")


def test_lex_numbers_round_trip():
    rng = random.Random(1234)
    for _ in range(2000):
        whole = rng.randint(-1_000_000, 1_000_000)
        quarters = rng.randint(0, 3)
        if quarters:
            value = whole + (quarters / 4 if whole >= 0 else -quarters / 4)
            text = repr(value)
        else:
            value = whole
            text = str(whole)
        tokens = lex_input(text)
        assert len(tokens) == 1
        token = tokens[0]
        assert token.kind in (
            TokenKind.DECIMAL_NUMBER,
            TokenKind.SIGNED_NUMBER,
            TokenKind.UNSIGNED_NUMBER,
        )
        assert token.value == value
        assert token.location == range(0, len(text))


def test_float_rounds_to_single_precision():
    (token,) = lex_input("0.1")
    assert token.kind is TokenKind.DECIMAL_NUMBER
    assert token.value == 0.10000000149011612


def test_negative_float():
    (token,) = lex_input("-2.5")
    assert token == YuriToken(TokenKind.DECIMAL_NUMBER, range(0, 4), -2.5)


@pytest.mark.parametrize(
    "text, kind, value",
    [
        ("0", TokenKind.UNSIGNED_NUMBER, 0),
        ("007", TokenKind.UNSIGNED_NUMBER, 7),
        ("1_000", TokenKind.UNSIGNED_NUMBER, 1000),
        ("4294967295", TokenKind.UNSIGNED_NUMBER, 4294967295),
        ("-2147483648", TokenKind.SIGNED_NUMBER, -2147483648),
        ("0xFF", TokenKind.HEX_NUMBER, 255),
        ("0x00_1f", TokenKind.HEX_NUMBER, 31),
        ("0xFFFFFFFF", TokenKind.HEX_NUMBER, 4294967295),
        ("0b101", TokenKind.BINARY_NUMBER, 5),
        ("0b0000_0001", TokenKind.BINARY_NUMBER, 1),
        ("0b" + "1" * 32, TokenKind.BINARY_NUMBER, 4294967295),
    ],
)
def test_integer_literals(text, kind, value):
    (token,) = lex_input(text)
    assert token.kind is kind
    assert token.value == value


@pytest.mark.parametrize(
    "text, error_type",
    [
        ("4294967296", YuriLexErrorType.NUMBER_OUT_OF_BOUNDS),
        ("-2147483649", YuriLexErrorType.NUMBER_OUT_OF_BOUNDS),
        ("0x100000000", YuriLexErrorType.NUMBER_OUT_OF_BOUNDS),
        ("0b1" + "0" * 32, YuriLexErrorType.NUMBER_OUT_OF_BOUNDS),
        ("0x", YuriLexErrorType.INVALID_NUMERIC_LITERAL),
        ("0x0", YuriLexErrorType.INVALID_NUMERIC_LITERAL),
        ("0b", YuriLexErrorType.INVALID_NUMERIC_LITERAL),
        ("1_0.5", YuriLexErrorType.NUMBER_OUT_OF_BOUNDS),
    ],
)
def test_bad_numeric_literals(text, error_type):
    tokens = lex_input(text)
    assert tokens[0].kind is TokenKind.UNKNOWN
    assert tokens[0].error.error_type is error_type


def test_empty_hex_location_and_markers():
    (token,) = lex_input("0x")
    assert token.location == range(0, 3)
    assert token.value.markers == (range(0, 2),)


def test_two_decimal_points():
    tokens = lex_input("1.2.3")
    first = tokens[0]
    assert first.kind is TokenKind.UNKNOWN
    assert first.error.error_type is YuriLexErrorType.INVALID_NUMERIC_LITERAL
    assert first.error.markers == (range(3, 4), range(0, 1))
    assert tokens[-1] == YuriToken(TokenKind.UNSIGNED_NUMBER, range(4, 5), 3)


@pytest.mark.parametrize(
    "text, kind, value",
    [
        ("|", TokenKind.OPERATOR, "|"),
        ("||", TokenKind.OPERATOR, "||"),
        ("|>", TokenKind.CLOSE_TRI, None),
        ("<|", TokenKind.OPEN_TRI, None),
        ("<<", TokenKind.OPERATOR, "<<"),
        ("<", TokenKind.OPERATOR, "<"),
        ("==", TokenKind.OPERATOR, "=="),
        ("=", TokenKind.ASSIGNMENT, None),
        ("&&", TokenKind.OPERATOR, "&&"),
        ("&", TokenKind.OPERATOR, "&"),
        ("**", TokenKind.OPERATOR, "**"),
        ("*", TokenKind.OPERATOR, "*"),
        ("-", TokenKind.OPERATOR, "-"),
        ("+", TokenKind.OPERATOR, "+"),
        ("%", TokenKind.OPERATOR, "%"),
        ("?", TokenKind.OPTIONAL, None),
        (";", TokenKind.TERMINATOR, None),
        (",", TokenKind.SEPARATOR, None),
        (":", TokenKind.TYPE_HINT, None),
    ],
)
def test_symbols(text, kind, value):
    (token,) = lex_input(text)
    assert token == YuriToken(kind, range(0, len(text)), value)


def test_brackets():
    kinds = [t.kind for t in lex_input("( ) { } [ ]")]
    assert kinds == [
        TokenKind.OPEN_PAREN,
        TokenKind.CLOSE_PAREN,
        TokenKind.OPEN_BRACE,
        TokenKind.CLOSE_BRACE,
        TokenKind.OPEN_SQUARE,
        TokenKind.CLOSE_SQUARE,
    ]


def test_minus_before_identifier_is_operator():
    tokens = lex_input("-x")
    assert tokens[0] == YuriToken(TokenKind.OPERATOR, range(0, 1), "-")
    assert tokens[1] == YuriToken(TokenKind.IDENTIFIER, range(1, 2), "x")


def test_keywords_and_identifiers():
    tokens = lex_input("fn main(pos: f2) # comment\n")
    assert tokens == [
        YuriToken(TokenKind.KEYWORD, range(0, 2), Keyword.FN),
        YuriToken(TokenKind.IDENTIFIER, range(3, 7), "main"),
        YuriToken(TokenKind.OPEN_PAREN, range(7, 8)),
        YuriToken(TokenKind.IDENTIFIER, range(8, 11), "pos"),
        YuriToken(TokenKind.TYPE_HINT, range(11, 12)),
        YuriToken(TokenKind.KEYWORD, range(13, 15), Keyword.TYPE_F2),
        YuriToken(TokenKind.CLOSE_PAREN, range(15, 16)),
    ]


def test_identifier_may_contain_dots():
    (token,) = lex_input("core.math_2")
    assert token == YuriToken(TokenKind.IDENTIFIER, range(0, 11), "core.math_2")


@pytest.mark.parametrize("word", ["if", "else", "fold", "switch"])
def test_unlisted_keywords_lex_as_identifiers(word):
    assert Keyword.from_string(word) is None
    (token,) = lex_input(word)
    assert token.kind is TokenKind.IDENTIFIER
    assert token.value == word


@pytest.mark.parametrize(
    "word, keyword",
    [("let", Keyword.LET), ("sampler4", Keyword.TYPE_SAMPLER4), ("core", Keyword.CORE)],
)
def test_keyword_from_string(word, keyword):
    assert Keyword.from_string(word) is keyword
    assert str(keyword) == word


def test_keyword_from_string_unknown():
    assert Keyword.from_string("banana") is None


def test_annotation():
    (token,) = lex_input("@vertex")
    assert token == YuriToken(TokenKind.ANNOTATION, range(0, 7), "vertex")


def test_incomplete_annotation():
    tokens = lex_input("@ x")
    first = tokens[0]
    assert first.kind is TokenKind.UNKNOWN
    assert first.error.error_type is YuriLexErrorType.INCOMPLETE_ANNOTATION
    assert first.location == range(0, 2)
    assert tokens[1] == YuriToken(TokenKind.IDENTIFIER, range(2, 3), "x")


def test_unknown_character():
    tokens = lex_input("$a")
    first = tokens[0]
    assert first.kind is TokenKind.UNKNOWN
    assert first.error.error_type is YuriLexErrorType.UNKNOWN_TOKEN
    assert first.location == range(0, 1)
    assert first.error.markers == (range(1, 2),)
    assert "'$'" in first.error.description
    assert tokens[1] == YuriToken(TokenKind.IDENTIFIER, range(1, 2), "a")


def test_error_property_is_none_for_valid_tokens():
    (token,) = lex_input("x")
    assert token.error is None
    assert token.value == "x"


def test_block_comment_is_skipped():
    tokens = lex_input("## hidden ## let")
    assert tokens == [YuriToken(TokenKind.KEYWORD, range(13, 16), Keyword.LET)]