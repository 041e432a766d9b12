"""Lexer, module parser and expression parser for the Yuri shading language."""

__version__ = "0.1.0"