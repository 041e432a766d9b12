"""Hand-written lexer for the Yuri shader language."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass
from typing import Any, Optional

from yuri.errors import YuriLexError, YuriLexErrorType

_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_U32_MAX = 0xFFFF_FFFF
_I32_MIN = -(2**31)

_BLOCK_COMMENT_ERROR = (
    "Missing closing block for block comment (started %). "
    "Add `##` to the end of the comment/file to fix this."
)


class Keyword(enum.Enum):
    """Reserved words of the language."""

    FN = "fn"
    LET = "let"
    PROP = "prop"
    LOOP = "loop"
    FOLD = "fold"
    MAP = "map"
    FILTER = "filter"
    SWITCH = "switch"
    IF = "if"
    ELSE = "else"
    RETURN = "return"
    IMPORT = "import"
    EXPORT = "export"
    MODULE = "module"
    CORE = "core"
    AND = "and"
    XOR = "xor"
    OR = "or"
    NOR = "nor"
    TYPE_BOOL = "bool"
    TYPE_F = "f"
    TYPE_U = "u"
    TYPE_I = "i"
    TYPE_F2 = "f2"
    TYPE_U2 = "u2"
    TYPE_I2 = "i2"
    TYPE_F3 = "f3"
    TYPE_U3 = "u3"
    TYPE_I3 = "i3"
    TYPE_F4 = "f4"
    TYPE_U4 = "u4"
    TYPE_I4 = "i4"
    TYPE_M2 = "m2"
    TYPE_M3 = "m3"
    TYPE_M4 = "m4"
    TYPE_SAMPLER1 = "sampler1"
    TYPE_SAMPLER2 = "sampler2"
    TYPE_SAMPLER3 = "sampler3"
    TYPE_SAMPLER4 = "sampler4"

    @classmethod
    def from_string(cls, text: str) -> Optional["Keyword"]:
        """Return the keyword the lexer recognises for ``text``, or None."""
        keyword = _KEYWORDS_BY_TEXT.get(text)
        return keyword if keyword in _RECOGNISED_KEYWORDS else None

    def __str__(self) -> str:
        return self.value


_KEYWORDS_BY_TEXT = {kw.value: kw for kw in Keyword}

# Reserved but not yet produced by the lexer: these still lex as identifiers.
_RECOGNISED_KEYWORDS = frozenset(Keyword) - {
    Keyword.FOLD,
    Keyword.SWITCH,
    Keyword.IF,
    Keyword.ELSE,
}


class TokenKind(enum.Enum):
    """The kinds of token the lexer produces."""

    UNKNOWN = enum.auto()
    OPEN_PAREN = enum.auto()
    CLOSE_PAREN = enum.auto()
    OPEN_BRACE = enum.auto()
    CLOSE_BRACE = enum.auto()
    OPEN_SQUARE = enum.auto()
    CLOSE_SQUARE = enum.auto()
    OPEN_TRI = enum.auto()
    CLOSE_TRI = enum.auto()
    TERMINATOR = enum.auto()
    SEPARATOR = enum.auto()
    ASSIGNMENT = enum.auto()
    TYPE_HINT = enum.auto()
    OPTIONAL = enum.auto()
    HEX_NUMBER = enum.auto()
    BINARY_NUMBER = enum.auto()
    UNSIGNED_NUMBER = enum.auto()
    SIGNED_NUMBER = enum.auto()
    DECIMAL_NUMBER = enum.auto()
    KEYWORD = enum.auto()
    ANNOTATION = enum.auto()
    IDENTIFIER = enum.auto()
    OPERATOR = enum.auto()


@dataclass(frozen=True)
class YuriToken:
    """A token, the span of input it covers, and its payload if it has one.

    For UNKNOWN tokens the payload is the YuriLexError describing the problem.
    """

    kind: TokenKind
    location: range
    value: Any = None

    @property
    def error(self) -> Optional[YuriLexError]:
        return self.value if self.kind is TokenKind.UNKNOWN else None


_SIMPLE_TOKENS = {
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "[": TokenKind.OPEN_SQUARE,
    "]": TokenKind.CLOSE_SQUARE,
    ":": TokenKind.TYPE_HINT,
    ";": TokenKind.TERMINATOR,
    ",": TokenKind.SEPARATOR,
    "?": TokenKind.OPTIONAL,
}

_SINGLE_OPERATORS = frozenset("+/^!%")

# first char -> (kind, value) on its own, and (kind, value) per following char
_PAIRED_TOKENS = {
    "|": (
        (TokenKind.OPERATOR, "|"),
        {"|": (TokenKind.OPERATOR, "||"), ">": (TokenKind.CLOSE_TRI, None)},
    ),
    "<": (
        (TokenKind.OPERATOR, "<"),
        {"|": (TokenKind.OPEN_TRI, None), "<": (TokenKind.OPERATOR, "<<")},
    ),
    "=": ((TokenKind.ASSIGNMENT, None), {"=": (TokenKind.OPERATOR, "==")}),
    "&": ((TokenKind.OPERATOR, "&"), {"&": (TokenKind.OPERATOR, "&&")}),
    "*": ((TokenKind.OPERATOR, "*"), {"*": (TokenKind.OPERATOR, "**")}),
}


def _char_at(text: str, index: int) -> Optional[str]:
    return text[index] if index < len(text) else None


def _error_token(
    error_type: YuriLexErrorType,
    description: str,
    markers: list[range],
    location: range,
) -> YuriToken:
    return YuriToken(
        TokenKind.UNKNOWN, location, YuriLexError(error_type, description, markers)
    )


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _take_hex(text: str, start: int) -> tuple[YuriToken, int]:
    seek = start + 2
    digits = []
    while seek < len(text):
        c = text[seek]
        if c == "_":
            seek += 1
        elif c in _HEX_DIGITS:
            if digits or c != "0":
                digits.append(c)
            seek += 1
        else:
            break

    if not digits:
        return _error_token(
            YuriLexErrorType.INVALID_NUMERIC_LITERAL,
            "0 or more digits must follow a hexadecimal literal prefix (written %)",
            [range(start, seek)],
            range(start, seek + 1),
        ), seek

    value = int("".join(digits), 16)
    if value > _U32_MAX:
        return _error_token(
            YuriLexErrorType.NUMBER_OUT_OF_BOUNDS,
            "The hexadecimal number % can't be stored in a 32-bit unsigned integer value.",
            [range(start, seek)],
            range(start, seek + 1),
        ), seek
    return YuriToken(TokenKind.HEX_NUMBER, range(start, seek), value), seek


def _take_binary(text: str, start: int) -> tuple[YuriToken, int]:
    seek = start + 2
    bits = []
    while seek < len(text):
        c = text[seek]
        if c == "0":
            if bits:
                bits.append(c)
        elif c == "1":
            bits.append(c)
        elif c != "_":
            break
        seek += 1

    if not bits:
        return _error_token(
            YuriLexErrorType.INVALID_NUMERIC_LITERAL,
            "0 or more digits must follow a binary literal prefix (written %)",
            [range(start, seek)],
            range(start, seek + 1),
        ), seek
    if len(bits) > 32:
        return _error_token(
            YuriLexErrorType.NUMBER_OUT_OF_BOUNDS,
            "The binary number % can't be stored in a 32-bit unsigned integer value.",
            [range(start, seek)],
            range(start, seek + 1),
        ), seek
    value = int("".join(bits), 2)
    return YuriToken(TokenKind.BINARY_NUMBER, range(start, seek), value), seek


def _take_decimal(text: str, start: int) -> tuple[YuriToken, int]:
    negative = text[start] == "-"
    seek = start + 1 if negative else start
    number_start = seek
    digits: list[str] = []
    decimal_point: Optional[int] = None

    while seek < len(text):
        c = text[seek]
        if c == "_":
            seek += 1
        elif c == ".":
            if decimal_point is not None:
                return _error_token(
                    YuriLexErrorType.INVALID_NUMERIC_LITERAL,
                    "More than one decimal point found in numeric literal "
                    "(first is %, next is %)",
                    [range(seek, seek + 1), range(number_start, number_start + 1)],
                    range(start, seek + 1),
                ), seek
            decimal_point = len(digits)
            seek += 1
        elif c in _DIGITS:
            if digits or c != "0" or _char_at(text, seek + 1) == ".":
                digits.append(c)
            seek += 1
        else:
            break

    location = range(start, seek)
    if decimal_point is not None:
        literal = text[number_start:seek]
        if "_" in literal:
            return _error_token(
                YuriLexErrorType.NUMBER_OUT_OF_BOUNDS,
                "The number % can't be stored in a 32-bit floating-point value.",
                [range(number_start, seek)],
                range(start, seek + 1),
            ), seek
        value = _to_f32(float(literal))
        return YuriToken(
            TokenKind.DECIMAL_NUMBER, location, -value if negative else value
        ), seek

    magnitude = int("".join(digits)) if digits else 0
    if negative:
        value = -magnitude
        if value < _I32_MIN:
            return _error_token(
                YuriLexErrorType.NUMBER_OUT_OF_BOUNDS,
                "The number % can't be stored in a 32-bit signed integer value.",
                [range(number_start, seek)],
                range(start, seek + 1),
            ), seek
        return YuriToken(TokenKind.SIGNED_NUMBER, location, value), seek

    if magnitude > _U32_MAX:
        return _error_token(
            YuriLexErrorType.NUMBER_OUT_OF_BOUNDS,
            "The number % can't be stored in a 32-bit unsigned integer value.",
            [range(number_start, seek)],
            range(start, seek + 1),
        ), seek
    return YuriToken(TokenKind.UNSIGNED_NUMBER, location, magnitude), seek


def _take_number(text: str, start: int) -> tuple[YuriToken, int]:
    ch = text[start]
    following = _char_at(text, start + 1)
    if ch == "-" and (following is None or following not in _DIGITS):
        return YuriToken(TokenKind.OPERATOR, range(start, start + 1), "-"), start + 1
    if ch == "0":
        if following == "x":
            return _take_hex(text, start)
        if following == "b":
            return _take_binary(text, start)
        if following is None:
            return YuriToken(TokenKind.UNSIGNED_NUMBER, range(start, start + 1), 0), start + 1
    return _take_decimal(text, start)


def _take_ident(text: str, seek: int) -> tuple[Optional[str], int]:
    first = _char_at(text, seek)
    if first is None or not (first.isalpha() or first == "_"):
        return None, seek
    end = seek
    while end < len(text) and (text[end].isalnum() or text[end] in "_."):
        end += 1
    return text[seek:end], end


def _take_token(text: str, start: int) -> tuple[YuriToken, int]:
    ch = text[start]

    if ch in _SIMPLE_TOKENS:
        return YuriToken(_SIMPLE_TOKENS[ch], range(start, start + 1)), start + 1
    if ch in _SINGLE_OPERATORS:
        return YuriToken(TokenKind.OPERATOR, range(start, start + 1), ch), start + 1
    if ch in _PAIRED_TOKENS:
        (kind, value), pairs = _PAIRED_TOKENS[ch]
        following = _char_at(text, start + 1)
        if following in pairs:
            kind, value = pairs[following]
            return YuriToken(kind, range(start, start + 2), value), start + 2
        return YuriToken(kind, range(start, start + 1), value), start + 1
    if ch == "-" or ch in _DIGITS:
        return _take_number(text, start)

    if ch == "@":
        seek = start + 1
        name, end = _take_ident(text, seek)
        if name is None:
            return _error_token(
                YuriLexErrorType.INCOMPLETE_ANNOTATION,
                "The annotation % is missing a proper identifier",
                [range(seek, seek + 1)],
                range(seek - 1, seek + 1),
            ), seek
        return YuriToken(TokenKind.ANNOTATION, range(start, end), name), end

    ident, end = _take_ident(text, start)
    if ident is not None:
        keyword = Keyword.from_string(ident)
        if keyword is not None:
            return YuriToken(TokenKind.KEYWORD, range(start, end), keyword), end
        return YuriToken(TokenKind.IDENTIFIER, range(start, end), ident), end

    seek = start + 1
    return _error_token(
        YuriLexErrorType.UNKNOWN_TOKEN,
        f"Unexpected/unknown character '{ch}' %",
        [range(seek, seek + 1)],
        range(start, seek),
    ), seek


def take_whitespace(text: str, seek: int) -> int:
    """Return the index of the next non-whitespace, non-comment character.

    ``#`` starts a line comment; ``##`` opens a block comment closed by ``##``.
    Raises YuriLexError if a block comment is not closed before the end.
    """
    length = len(text)
    while seek < length:
        ch = text[seek]
        if ch.isspace():
            seek += 1
            continue
        if ch != "#":
            return seek

        seek += 1
        if seek >= length:
            return length

        if text[seek] == "#":
            block_start = seek
            seek += 1
            while True:
                found = text.find("#", seek)
                if found < 0:
                    raise _unterminated_block(block_start)
                seek = found + 1
                if seek >= length:
                    raise _unterminated_block(block_start)
                if text[seek] == "#":
                    seek += 1
                    break
        else:
            newline = text.find("\n", seek)
            if newline < 0:
                return length
            seek = newline + 1
    return seek


def _unterminated_block(block_start: int) -> YuriLexError:
    return YuriLexError(
        YuriLexErrorType.UNEXPECTED_END_OF_FILE,
        _BLOCK_COMMENT_ERROR,
        [range(block_start, block_start + 2)],
    )


def lex_input(text: str) -> list[YuriToken]:
    """Split shader source into tokens.

    Malformed tokens appear as UNKNOWN tokens carrying their error; an
    unterminated block comment raises YuriLexError.
    """
    tokens = []
    seek = take_whitespace(text, 0)
    while seek < len(text):
        token, seek = _take_token(text, seek)
        tokens.append(token)
        seek = take_whitespace(text, seek)
    return tokens