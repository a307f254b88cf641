"""Lexical analysis for pcalc. Splits a line of text into tokens lazily: a token is only produced once the parser asks
for it, so a lexical error surfaces at the point where the parser reaches it.

Tokens can be loosely defined as follows:

```
<number>  ::= <digit> (<digit> | ".")*   ; at most one ".", so "1.2.3" is an invalid number
<op>      ::= "+" | "-" | "*" | "/" | "^" | "!"
<paren>   ::= "(" | ")"
```

Whitespace separates tokens but is otherwise ignored. The token stream always ends with a single EOF token.
"""

import math
from dataclasses import dataclass, field
from enum import Enum

from pcalc.lang.error import InvalidNumber, UnexpectedCharacter


class TokenKind(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    LPAREN = "("
    RPAREN = ")"
    BANG = "!"
    EOF = "end of input"


SYMBOLS = {kind.value: kind for kind in TokenKind if kind not in (TokenKind.NUMBER, TokenKind.EOF)}


@dataclass(frozen=True)
class Token:
    """Single token of an expression. value is the parsed float for numbers and the source text otherwise."""
    kind: TokenKind
    value: object
    position: int = field(default=0, compare=False)
    text: str = field(default="", compare=False)

    @property
    def end(self):
        """Offset one past the last character of this token."""
        return self.position + len(self.text)

    @property
    def is_eof(self):
        return self.kind is TokenKind.EOF

    def __str__(self):
        return self.text if not self.is_eof else self.kind.value


class Lexer:
    """Iterable over the tokens of text. Every iteration restarts from the beginning of text, but a single iteration
    cannot be resumed after it raised.
    """

    def __init__(self, text):
        self.text = text

    def __iter__(self):
        text = self.text
        pos = 0

        while pos < len(text):
            char = text[pos]

            if char.isspace():
                pos += 1

            elif char in SYMBOLS:
                yield Token(SYMBOLS[char], char, pos, char)
                pos += 1

            elif Lexer.is_digit(char):
                end = Lexer.scan_number(text, pos)
                literal = text[pos:end]
                value = float(literal) if literal.count(".") <= 1 else None
                if value is None or not math.isfinite(value):
                    raise InvalidNumber(literal, pos)
                yield Token(TokenKind.NUMBER, value, pos, literal)
                pos = end

            else:
                raise UnexpectedCharacter(char, pos)

        yield Token(TokenKind.EOF, "", len(text), "")

    @staticmethod
    def is_digit(char):
        """Only ASCII digits: str.isdigit also accepts superscripts, which float() rejects."""
        return "0" <= char <= "9"

    @staticmethod
    def scan_number(text, start):
        """Returns the offset one past the maximal run of digits and decimal points beginning at start."""
        end = start
        while end < len(text) and (Lexer.is_digit(text[end]) or text[end] == "."):
            end += 1
        return end


def tokenize(text):
    """Returns a lazy iterator over the tokens of text, terminated by an EOF token."""
    return iter(Lexer(text))
