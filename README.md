# yuri

The front end of Yuri, a small shading language. The package turns Yuri
source text into tokens. It then reads the `module` declarations in those
tokens and builds a tree of nested modules. It also holds a small
recursive-descent parser and evaluator for arithmetic expressions in `x`.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
yuri shader.yuri
```

The command reads the file as UTF-8 and lexes it. It prints every token
under `AST:` and every unrecognised or malformed token under `errors:`. It
then parses the tokens and prints the resulting `YuriModule`. The exit
status is 1 in three cases: no file is given, the file cannot be read, or a
block comment is not closed. Otherwise the exit status is 0.

## Lexing

```python
from yuri.shader import lex, parse

tokens = lex("module demo let x: f = 1.5;")
module = parse(tokens)
```

`yuri.shader.lex` (the same as `yuri.lex.lex_input`) returns a list of
`yuri.lex.YuriToken`. Each token has three fields:

- `kind`: a `yuri.lex.TokenKind`.
- `location`: a `range` of character indices into the input.
- `value`: the payload. This is the operator text, the identifier or
  annotation name, a `yuri.lex.Keyword`, or the numeric value.

The lexer does not raise on a character it does not recognise, a malformed
number or an annotation with no name. It emits a token of kind
`TokenKind.UNKNOWN` instead. The token's `error` property holds a
`yuri.errors.YuriLexError` that has an `error_type`
(`yuri.errors.YuriLexErrorType`), a `description` and `markers` (ranges into
the input). A block comment that is not closed is the only case that raises
`YuriLexError`, with type `UNEXPECTED_END_OF_FILE`.

The lexer follows these rules:

- Whitespace is skipped. `#` starts a comment that runs to the end of the
  line. `##` opens a block comment that the next `##` closes.
  `yuri.lex.take_whitespace(text, seek)` returns the index of the next
  significant character.
- Numbers can be decimal, hexadecimal (`0x`) or binary (`0b`). Any of them
  may contain `_` separators.
  - A number with a decimal point is a `DECIMAL_NUMBER`. Its value is rounded
    to 32-bit float precision.
  - A `-` directly before a digit gives a `SIGNED_NUMBER`, or a negative
    decimal number.
  - Integer values must fit in 32 bits. A value that does not fit gives an
    unknown token of type `NUMBER_OUT_OF_BOUNDS`.
- An identifier starts with a letter or `_`. After that it may contain
  letters, digits, `_` and `.`.
- Identifiers that match a keyword become `KEYWORD` tokens, for example `fn`,
  `let`, `prop`, `module` and the type names such as `f4` and `m3`. Use
  `Keyword.from_string(text)` to look up a keyword. The reserved words
  `if`, `else`, `fold` and `switch` are still lexed as identifiers.
- `@name` is an `ANNOTATION`.
- The brackets `<|` and `|>` are `OPEN_TRI` and `CLOSE_TRI`.

## Parsing

`yuri.shader.parse` (the same as `yuri.parse.parse_input`) returns a
`yuri.parse.YuriModule`:

- Each `module <name>` keyword pair opens a submodule. Tokens after it
  belong to that submodule. The submodules are in `module.submodules` as
  `(name, YuriModule)` pairs.
- If a `module` keyword is followed by something other than an identifier,
  the current level is closed. The same happens when the input ends after
  `module`.
- All other tokens are skipped.

`yuri.parse` also defines `YuriType` (unit, scalar, vector, array and
complex types, built with its class methods), `NumberType` and
`CompositeSize`.

## What the package does not do

- It does not compile shaders. The package produces no SPIR-V or any other
  output code.
- The parser records only module nesting. It does not collect imports,
  properties, globals or functions, so those lists in `YuriModule` stay
  empty.
- It never raises `yuri.errors.YuriSemanticError` or
  `yuri.errors.YuriCompileError`. These exist as error types only.

## Expression parser

`yuri.descent` parses arithmetic expressions in `x` that contain no spaces.
It supports:

- the operators `+ - * / ^`
- `log`, `cos` and `sin`
- parentheses
- non-negative numbers

```python
from yuri.descent import parse_s

expr = parse_s("10*x^3+2*(15+x)+log(69)", 0)
print(expr)
print(expr.evaluate(2.0))
```

Parse results:

- `parse_s`, `parse_m`, `parse_e` and `parse_plv` return an `Expression`
  (`Literal`, `Variable`, `Unary` or `Binary`), or `None` when the text does
  not match.
- `parse_plv` raises `ValueError` when the text contains neither a number
  nor `x`.

Printing and evaluation:

- `str(expr)` gives a fully parenthesised form.
- `expr.evaluate(x)` computes the value. It returns `nan` or `inf` instead of
  raising on a domain error or a division by zero.

The parsers write a trace of their steps through the `yuri.descent` logger
at DEBUG level.