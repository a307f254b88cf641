"""Pratt (top-down operator precedence) parser for pcalc. Builds a syntax tree from a token stream by giving every
operator a binding power on each side instead of writing one grammar rule per precedence level.

Grammar:

```
<expr>    ::= <unary> (<binop> <unary>)*
<unary>   ::= ("-" | "+")* <primary> <postfix>*
<primary> ::= <number> | "(" <expr> ")"
<postfix> ::= "!"
<binop>   ::= "+" | "-" | "*" | "/" | "^"
```

Binding powers follow Python's conventions: unary minus binds looser than "^" but tighter than "*" and "/", so
"-2 ^ 2" == -(2 ^ 2) == -4 and "2 ^ -1" == 0.5. "^" is right-associative; everything else is left-associative.

Source: https://matklad.github.io/2020/04/13/simple-but-powerful-pratt-parsing.html
"""

from pcalc.lang.error import EmptyInput, NestingTooDeep, TrailingInput, UnclosedParen, UnexpectedToken
from pcalc.lang.lexical import Token, TokenKind
from pcalc.lang.syntax import Binary, BinaryOp, Group, Literal, Postfix, PostfixOp, Unary, UnaryOp


# kind: (left binding power, right binding power)
INFIX = {
    TokenKind.PLUS: (1, 2),
    TokenKind.MINUS: (1, 2),
    TokenKind.STAR: (3, 4),
    TokenKind.SLASH: (3, 4),
    TokenKind.CARET: (7, 6),
}
PREFIX = {
    TokenKind.MINUS: 5,
    TokenKind.PLUS: 5,
}
POSTFIX = {
    TokenKind.BANG: 9,
}

BINARY_OPS = {
    TokenKind.PLUS: BinaryOp.ADD,
    TokenKind.MINUS: BinaryOp.SUB,
    TokenKind.STAR: BinaryOp.MUL,
    TokenKind.SLASH: BinaryOp.DIV,
    TokenKind.CARET: BinaryOp.POW,
}
UNARY_OPS = {
    TokenKind.MINUS: UnaryOp.NEG,
    TokenKind.PLUS: UnaryOp.POS,
}
POSTFIX_OPS = {
    TokenKind.BANG: PostfixOp.FACTORIAL,
}


def left_binding_power(kind):
    """Left binding power of kind in infix/postfix position, or None if kind can never extend an expression (EOF,
    parentheses, numbers).
    """
    if kind in POSTFIX:
        return POSTFIX[kind]
    if kind in INFIX:
        return INFIX[kind][0]
    return None


class TokenStream:
    """One-token lookahead over an iterable of tokens. Once the underlying tokens run out, the stream behaves as if
    they ended with EOF.
    """

    def __init__(self, tokens):
        self._tokens = iter(tokens)
        self._peeked = None
        self._last = None

    def peek(self):
        if self._peeked is None:
            self._peeked = next(self._tokens, None)
            if self._peeked is None:
                position = self._last.end if self._last is not None else 0
                self._peeked = Token(TokenKind.EOF, "", position, "")
        return self._peeked

    def pop(self):
        token = self.peek()
        self._peeked = None
        self._last = token
        return token


class Parser:
    """Parses a single expression from tokens. A Parser is used once: create a new one for every token sequence."""

    def __init__(self, tokens):
        self.stream = TokenStream(tokens)

    def parse(self):
        """Parses a full expression and requires that nothing but EOF follows it."""
        if self.stream.peek().is_eof:
            raise EmptyInput()

        try:
            tree = self.parse_expression(0)
        except RecursionError:
            raise NestingTooDeep() from None

        trailing = self.stream.peek()
        if not trailing.is_eof:
            raise TrailingInput(trailing)
        return tree

    def parse_expression(self, min_bp):
        """Parses the longest expression whose operators all bind tighter than min_bp."""
        lhs = self.parse_prefix()

        while True:
            token = self.stream.peek()
            l_bp = left_binding_power(token.kind)
            if l_bp is None or l_bp <= min_bp:
                break

            self.stream.pop()
            start = lhs.span[0]

            if token.kind in POSTFIX:
                lhs = Postfix(POSTFIX_OPS[token.kind], lhs, span=(start, token.end))
            else:
                __, r_bp = INFIX[token.kind]
                rhs = self.parse_expression(r_bp)
                lhs = Binary(BINARY_OPS[token.kind], lhs, rhs, span=(start, rhs.span[1]))

        return lhs

    def parse_prefix(self):
        """Parses the token in prefix position: a number, a prefix operator and its operand, or a parenthesized
        expression.
        """
        token = self.stream.pop()

        if token.kind is TokenKind.NUMBER:
            return Literal(token.value, span=(token.position, token.end))

        if token.kind in PREFIX:
            operand = self.parse_expression(PREFIX[token.kind])
            return Unary(UNARY_OPS[token.kind], operand, span=(token.position, operand.span[1]))

        if token.kind is TokenKind.LPAREN:
            inner = self.parse_expression(0)
            closing = self.stream.peek()
            if closing.kind is not TokenKind.RPAREN:
                raise UnclosedParen(token, closing)
            self.stream.pop()
            return Group(inner, span=(token.position, closing.end))

        raise UnexpectedToken(token)


def parse(tokens):
    """Returns the syntax tree of the expression made up of tokens (any iterable of tokens ending with EOF)."""
    return Parser(tokens).parse()
