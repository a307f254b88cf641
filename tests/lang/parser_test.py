import unittest

from pcalc.lang.error import (EmptyInput, InvalidNumber, NestingTooDeep, ParseError, TrailingInput, UnclosedParen,
                              UnexpectedToken)
from pcalc.lang.lexical import Token, TokenKind, tokenize
from pcalc.lang.parser import INFIX, PREFIX, POSTFIX, left_binding_power, parse
from pcalc.lang.syntax import Binary, BinaryOp, Group, Literal, Postfix, PostfixOp, Unary, UnaryOp


def sexpr(text):
    return str(parse(tokenize(text)))


class BindingPowerTestCase(unittest.TestCase):

    def test_associativity(self):
        for kind in (TokenKind.PLUS, TokenKind.MINUS, TokenKind.STAR, TokenKind.SLASH):
            l_bp, r_bp = INFIX[kind]
            self.assertEqual(l_bp + 1, r_bp, kind)

        l_bp, r_bp = INFIX[TokenKind.CARET]
        self.assertLess(r_bp, l_bp)

    def test_precedence(self):
        self.assertLess(INFIX[TokenKind.PLUS][0], INFIX[TokenKind.STAR][0])
        self.assertLess(INFIX[TokenKind.STAR][1], PREFIX[TokenKind.MINUS])
        self.assertLess(PREFIX[TokenKind.MINUS], INFIX[TokenKind.CARET][0])
        self.assertLess(INFIX[TokenKind.CARET][0], POSTFIX[TokenKind.BANG])

    def test_left_binding_power(self):
        should_fail = [TokenKind.EOF, TokenKind.RPAREN, TokenKind.LPAREN, TokenKind.NUMBER]
        for case in should_fail:
            self.assertIsNone(left_binding_power(case), case)


class ParserTestCase(unittest.TestCase):

    def test_atom(self):
        self.assertEqual(Literal(3.14), parse(tokenize("3.14")))

    def test_tree(self):
        cases = {
            "3 + 4": Binary(BinaryOp.ADD, Literal(3.0), Literal(4.0)),
            "-2": Unary(UnaryOp.NEG, Literal(2.0)),
            "+2": Unary(UnaryOp.POS, Literal(2.0)),
            "4!": Postfix(PostfixOp.FACTORIAL, Literal(4.0)),
            "(1)": Group(Literal(1.0)),
            "(1 - 2) / 3": Binary(BinaryOp.DIV, Group(Binary(BinaryOp.SUB, Literal(1.0), Literal(2.0))), Literal(3.0)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(tokenize(case)), case)

    def test_precedence(self):
        cases = {
            "3+5*6": "(+ 3 (* 5 6))",
            "3*5+6": "(+ (* 3 5) 6)",
            "2 + 3 * 4 ^ 2": "(+ 2 (* 3 (^ 4 2)))",
            "(2 + 3) * 4": "(* (+ 2 3) 4)",
            "1 / 2 * 3": "(* (/ 1 2) 3)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, sexpr(case), case)

    def test_associativity(self):
        cases = {
            "8 - 4 - 2": "(- (- 8 4) 2)",
            "8 / 4 / 2": "(/ (/ 8 4) 2)",
            "2 ^ 3 ^ 2": "(^ 2 (^ 3 2))",
            "1 + 2 - 3 + 4": "(+ (- (+ 1 2) 3) 4)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, sexpr(case), case)

    def test_prefix_and_postfix(self):
        cases = {
            "-2 ^ 2": "(- (^ 2 2))",
            "2 ^ -1": "(^ 2 (- 1))",
            "2 ^ -3 ^ 2": "(^ 2 (- (^ 3 2)))",
            "-2 * 3": "(* (- 2) 3)",
            "2 * -3": "(* 2 (- 3))",
            "--2": "(- (- 2))",
            "-+2": "(- (+ 2))",
            "-3!": "(- (! 3))",
            "2 ^ 3!": "(^ 2 (! 3))",
            "3!!": "(! (! 3))",
            "(1 + 2)!": "(! (+ 1 2))",
            "1 - -1": "(- 1 (- 1))",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, sexpr(case), case)

    def test_errors(self):
        should_raise = {
            "": EmptyInput,
            "   ": EmptyInput,
            "1 +": UnexpectedToken,
            "1 + ": UnexpectedToken,
            "*2": UnexpectedToken,
            ")": UnexpectedToken,
            "()": UnexpectedToken,
            "1 + * 2": UnexpectedToken,
            "!": UnexpectedToken,
            "(1 + 2": UnclosedParen,
            "((1)": UnclosedParen,
            "(1 2)": UnclosedParen,
            "1 2": TrailingInput,
            "(1))": TrailingInput,
            "2 (3)": TrailingInput,
            "1.2.3 + 4": InvalidNumber,
        }
        for case, error in should_raise.items():
            self.assertRaises(error, parse, tokenize(case))

        for case in ["", "1 +", "(1", "1 2"]:
            self.assertRaises(ParseError, parse, tokenize(case))

    def test_error_positions(self):
        with self.assertRaises(UnclosedParen) as context:
            parse(tokenize("2 * (1 + 2"))
        self.assertEqual((4, 5), (context.exception.start, context.exception.end))
        self.assertTrue(context.exception.found.is_eof)

        with self.assertRaises(TrailingInput) as context:
            parse(tokenize("1 + 2 42"))
        self.assertEqual((6, 8), (context.exception.start, context.exception.end))

        with self.assertRaises(UnexpectedToken) as context:
            parse(tokenize("1 + "))
        self.assertTrue(context.exception.token.is_eof)

    def test_spans(self):
        tree = parse(tokenize(" 1 + (2 * 3)!"))
        self.assertEqual((1, 13), tree.span)
        self.assertEqual((5, 13), tree.right.span)
        self.assertEqual((5, 12), tree.right.operand.span)
        self.assertEqual((6, 11), tree.right.operand.inner.span)

    def test_token_lists(self):
        tokens = [Token(TokenKind.NUMBER, 1.0), Token(TokenKind.PLUS, "+"), Token(TokenKind.NUMBER, 2.0),
                  Token(TokenKind.EOF, "")]
        self.assertEqual(Binary(BinaryOp.ADD, Literal(1.0), Literal(2.0)), parse(tokens))

        # a missing EOF is implied
        self.assertEqual(Literal(1.0), parse(tokens[:1]))
        self.assertRaises(EmptyInput, parse, [])

    def test_idempotent(self):
        should_pass = ["2 + 3 * 4", "-(1 - 2) ^ 3! / 4", "((((5))))"]
        for case in should_pass:
            tokens = list(tokenize(case))
            self.assertEqual(parse(tokens), parse(tokens), case)
            self.assertEqual(parse(tokens), parse(tokenize(case)), case)

    def test_nesting_too_deep(self):
        self.assertRaises(NestingTooDeep, parse, tokenize("(" * 10000 + "1" + ")" * 10000))
        self.assertRaises(NestingTooDeep, parse, tokenize("-" * 10000 + "1"))


if __name__ == '__main__':
    unittest.main()
