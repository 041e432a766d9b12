"""Error types raised while lexing, parsing and compiling Yuri shaders."""

from __future__ import annotations

import enum
from typing import Iterable, Union


class YuriLexErrorType(enum.Enum):
    """The kinds of problem the lexer can report."""

    UNKNOWN_TOKEN = enum.auto()
    INVALID_VARIABLE_DECLARATION = enum.auto()
    UNEXPECTED_END_OF_FILE = enum.auto()
    NUMBER_OUT_OF_BOUNDS = enum.auto()
    INVALID_NUMERIC_LITERAL = enum.auto()
    INCOMPLETE_ANNOTATION = enum.auto()


class YuriSemanticErrorType(enum.Enum):
    """The kinds of problem found while processing a syntax tree."""

    UNEXPECTED_TOKEN = enum.auto()


class _YuriError(Exception):
    """Shared behaviour of errors that point at spans of the input."""

    def __init__(
        self,
        error_type: enum.Enum,
        description: str | None = None,
        markers: Iterable[range] = (),
    ) -> None:
        self.error_type = error_type
        self.description = description
        self.markers = tuple(markers)
        super().__init__(error_type, description, self.markers)

    def _key(self) -> tuple:
        return (
            self.error_type,
            self.description,
            tuple((m.start, m.stop, m.step) for m in self.markers),
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._key()))

    def __str__(self) -> str:
        if self.description is not None:
            return self.description
        return self.error_type.name.lower().replace("_", " ")

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error_type={self.error_type!r}, "
            f"description={self.description!r}, markers={list(self.markers)!r})"
        )


class YuriLexError(_YuriError):
    """An error found while turning shader text into tokens."""

    error_type: YuriLexErrorType


class YuriSemanticError(_YuriError):
    """An error found while processing the logical structure of a shader."""

    error_type: YuriSemanticErrorType


class YuriCompileError(Exception):
    """Any error that stopped a shader from compiling; wraps the specific error."""

    def __init__(self, error: Union[YuriLexError, YuriSemanticError]) -> None:
        if not isinstance(error, (YuriLexError, YuriSemanticError)):
            raise TypeError(
                f"expected a lex or semantic error, got {type(error).__name__}"
            )
        super().__init__(error)
        self.error = error
        self.__cause__ = error

    @property
    def is_parse_error(self) -> bool:
        """True when the wrapped error came from the lexer."""
        return isinstance(self.error, YuriLexError)

    @property
    def is_semantic_error(self) -> bool:
        """True when the wrapped error came from semantic processing."""
        return isinstance(self.error, YuriSemanticError)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, YuriCompileError):
            return NotImplemented
        return self.error == other.error

    def __hash__(self) -> int:
        return hash(("compile", self.error))

    def __str__(self) -> str:
        return str(self.error)

    def __repr__(self) -> str:
        return repr(self.error)