"""Type descriptions and the declaration parser for Yuri shaders."""

from __future__ import annotations

import enum
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from yuri.lex import Keyword, TokenKind, YuriToken

_log = logging.getLogger(__name__)


class CompositeSize(enum.Enum):
    """Number of components in a vector or of rows/columns in a matrix."""

    TWO = 2
    THREE = 3
    FOUR = 4


class NumberType(enum.Enum):
    """The scalar number kinds of the language."""

    FLOAT = "f"
    SIGNED = "i"
    UNSIGNED = "u"


@dataclass(frozen=True)
class YuriType:
    """A type in a Yuri program: unit, scalar, vector, array or complex."""

    class Kind(enum.Enum):
        UNIT = enum.auto()
        SCALAR = enum.auto()
        VECTOR = enum.auto()
        ARRAY = enum.auto()
        COMPLEX = enum.auto()

    kind: "YuriType.Kind"
    number: Optional[NumberType] = None
    size: Optional[CompositeSize] = None
    element: Optional["YuriType"] = None
    length: Optional[int] = None
    fields: tuple[tuple[str, "YuriType"], ...] = ()

    @classmethod
    def unit(cls) -> "YuriType":
        return cls(cls.Kind.UNIT)

    @classmethod
    def scalar(cls, number: NumberType) -> "YuriType":
        return cls(cls.Kind.SCALAR, number=number)

    @classmethod
    def vector(cls, number: NumberType, size: CompositeSize) -> "YuriType":
        return cls(cls.Kind.VECTOR, number=number, size=size)

    @classmethod
    def array(cls, element: "YuriType", length: int) -> "YuriType":
        if length < 0:
            raise ValueError(f"array length must not be negative, got {length}")
        return cls(cls.Kind.ARRAY, element=element, length=length)

    @classmethod
    def complex(cls, fields: Iterable[tuple[str, "YuriType"]]) -> "YuriType":
        return cls(cls.Kind.COMPLEX, fields=tuple(fields))


@dataclass
class YuriModule:
    """The declarations found in one module, with its named submodules."""

    imports: list = field(default_factory=list)
    properties: list = field(default_factory=list)
    globals: list = field(default_factory=list)
    functions: list = field(default_factory=list)
    submodules: list[tuple[str, "YuriModule"]] = field(default_factory=list)


def parse_input(tokens: Sequence[YuriToken]) -> YuriModule:
    """Build the module tree described by ``tokens``.

    A ``module <name>`` declaration opens a submodule that takes the tokens
    after it. A module keyword without a name closes the current level.
    """
    queue = deque(tokens)
    root = YuriModule()
    stack = [root]
    while stack and queue:
        current = stack[-1]
        token = queue.popleft()
        if token.kind is TokenKind.ANNOTATION:
            continue
        if token.kind is not TokenKind.KEYWORD or token.value is not Keyword.MODULE:
            continue
        if not queue:
            stack.pop()
            continue
        name_token = queue.popleft()
        if name_token.kind is not TokenKind.IDENTIFIER:
            _log.warning("unexpected token (expected module name) %r", name_token)
            stack.pop()
            continue
        submodule = YuriModule()
        current.submodules.append((name_token.value, submodule))
        stack.append(submodule)
    return root