"""Command that lexes and parses a shader file and prints the results."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

from yuri.errors import YuriLexError
from yuri.lex import TokenKind
from yuri.shader import lex, parse


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the tokens, lex errors and module tree of the given file."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Must provide a file as an argument", file=sys.stderr)
        return 1

    try:
        text = Path(args[0]).read_text(encoding="utf-8")
    except OSError as exc:
        print(f"failed to read file: {exc}", file=sys.stderr)
        return 1

    try:
        tokens = lex(text)
    except YuriLexError as exc:
        print(f"lex error: {exc}", file=sys.stderr)
        return 1

    good = [repr(t) for t in tokens if t.kind is not TokenKind.UNKNOWN]
    bad = [repr(t) for t in tokens if t.kind is TokenKind.UNKNOWN]
    print("AST:\n" + "\n".join(good))
    print("errors:\n" + "\n".join(bad))

    module = parse(tokens)
    print(f"module:\n{module!r}")
    return 0


if __name__ == "__main__":
    sys.exit(main())