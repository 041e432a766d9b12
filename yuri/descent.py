"""A small recursive-descent parser for arithmetic expressions in ``x``.

Grammar::

    S -> S+M | S-M | M
    M -> M*E | M/E | E
    E -> P^E | log P | cos P | sin P | P
    P -> (S) | L | V
    L -> <float>
    V -> x
"""

from __future__ import annotations

import enum
import logging
import math
import re
from dataclasses import dataclass
from typing import Callable, Optional

_log = logging.getLogger(__name__)

_NUMBER_OR_VARIABLE = re.compile(r"(?P<var>x)|(?P<num>[0-9]+(?:\.[0-9]+)?)")


class BinaryExprType(enum.Enum):
    EXP = "^"
    MUL = "*"
    DIV = "/"
    ADD = "+"
    SUB = "-"


class UnaryExprType(enum.Enum):
    GROUP = ""
    LOG = "log"
    COS = "cos"
    SIN = "sin"


def _format_number(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return repr(value)


def _ln(value: float) -> float:
    if value > 0:
        return math.log(value)
    if value == 0:
        return -math.inf
    return math.nan


def _trig(func: Callable[[float], float], value: float) -> float:
    try:
        return func(value)
    except ValueError:
        return math.nan


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except OverflowError:
        return math.inf
    except ValueError:
        if base == 0 and exponent < 0:
            return math.inf
        return math.nan


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator


class Expression:
    """A node of a parsed expression."""

    def evaluate(self, x: float) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class Literal(Expression):
    value: float

    def evaluate(self, x: float) -> float:
        return self.value

    def __str__(self) -> str:
        return _format_number(self.value)


@dataclass(frozen=True)
class Variable(Expression):
    def evaluate(self, x: float) -> float:
        return x

    def __str__(self) -> str:
        return "x"


@dataclass(frozen=True)
class Unary(Expression):
    kind: UnaryExprType
    operand: Expression

    def evaluate(self, x: float) -> float:
        value = self.operand.evaluate(x)
        if self.kind is UnaryExprType.LOG:
            return _ln(value)
        if self.kind is UnaryExprType.COS:
            return _trig(math.cos, value)
        if self.kind is UnaryExprType.SIN:
            return _trig(math.sin, value)
        return value

    def __str__(self) -> str:
        return f"{self.kind.value}({self.operand})"


@dataclass(frozen=True)
class Binary(Expression):
    kind: BinaryExprType
    left: Expression
    right: Expression

    def evaluate(self, x: float) -> float:
        a = self.left.evaluate(x)
        b = self.right.evaluate(x)
        if self.kind is BinaryExprType.EXP:
            return _pow(a, b)
        if self.kind is BinaryExprType.MUL:
            return a * b
        if self.kind is BinaryExprType.DIV:
            return _div(a, b)
        if self.kind is BinaryExprType.ADD:
            return a + b
        return a - b

    def __str__(self) -> str:
        return f"({self.left} {self.kind.value} {self.right})"


_Rule = Callable[[str, int], Optional[Expression]]


def _split_binary(
    text: str,
    delim: str,
    kind: BinaryExprType,
    indent: int,
    left_rule: _Rule,
    right_rule: _Rule,
) -> Optional[Expression]:
    chunks = text.split(delim)
    if len(chunks) < 2:
        return None
    for split in range(len(chunks) - 1, 0, -1):
        prefix = delim.join(chunks[:split])
        suffix = delim.join(chunks[split:])
        _log.debug("prefix %s", prefix)
        _log.debug("suffix %s", suffix)
        left = left_rule(prefix, indent)
        right = right_rule(suffix, indent)
        if left is not None and right is not None:
            return Binary(kind, left, right)
    return None


def _trace(rule: str, text: str, indent: int) -> None:
    _log.debug('%s%s -> "%s"', "    " * indent, rule, text)


def parse_s(text: str, indent: int = 0) -> Optional[Expression]:
    """Parse a sum or difference; None if ``text`` does not match."""
    _trace("S", text, indent)
    for delim, kind in (("+", BinaryExprType.ADD), ("-", BinaryExprType.SUB)):
        result = _split_binary(text, delim, kind, indent + 1, parse_s, parse_s)
        if result is not None:
            return result
    return parse_m(text, indent)


def parse_m(text: str, indent: int = 0) -> Optional[Expression]:
    """Parse a product or quotient; None if ``text`` does not match."""
    _trace("M", text, indent)
    for delim, kind in (("*", BinaryExprType.MUL), ("/", BinaryExprType.DIV)):
        result = _split_binary(text, delim, kind, indent + 1, parse_m, parse_m)
        if result is not None:
            return result
    return parse_e(text, indent)


def parse_e(text: str, indent: int = 0) -> Optional[Expression]:
    """Parse a power or a function application; None if ``text`` does not match."""
    _trace("E", text, indent)
    result = _split_binary(text, "^", BinaryExprType.EXP, indent + 1, parse_e, parse_e)
    if result is not None:
        return result
    for kind in (UnaryExprType.LOG, UnaryExprType.COS, UnaryExprType.SIN):
        if text.startswith(kind.value):
            operand = parse_plv(text[len(kind.value):], indent)
            if operand is not None:
                return Unary(kind, operand)
    return parse_plv(text, indent)


def parse_plv(text: str, indent: int = 0) -> Optional[Expression]:
    """Parse a parenthesised sum, a number or ``x``.

    Raises ValueError when ``text`` holds neither a number nor ``x``.
    """
    _trace("PLV", text, indent)
    if text.startswith("("):
        depth = 1
        close = None
        for index, ch in enumerate(text[1:], start=1):
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
            if depth == 0:
                close = index
                break
        if close is None:
            return None
        return parse_s(text[1:close], indent)

    match = _NUMBER_OR_VARIABLE.search(text)
    if match is not None:
        if match.group("var") is not None:
            if len(match.group("var")) < len(text):
                return None
            _log.debug("%sx: %s", "    " * (indent + 1), match.group("var"))
            return Variable()
        number = match.group("num")
        if number is not None:
            if len(number) < len(text):
                return None
            _log.debug("%sn: %s", "    " * (indent + 1), number)
            return Literal(float(number))
    raise ValueError(f"No pattern matches for symbol P|L|V (input {text})")