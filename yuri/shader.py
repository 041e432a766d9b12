"""Entry points chaining the stages of shader processing."""

from __future__ import annotations

from typing import Sequence

from yuri.lex import YuriToken, lex_input
from yuri.parse import YuriModule, parse_input


def lex(text: str) -> list[YuriToken]:
    """Split shader source into tokens; raises YuriLexError on fatal errors."""
    return lex_input(text)


def parse(tokens: Sequence[YuriToken]) -> YuriModule:
    """Build the module tree from a token sequence."""
    return parse_input(tokens)