"""Arithmetic expression interpreter.

Basic program flow:
    1. Lexer: lazily splits the line into tokens (see pcalc/lang/lexical.py)
    2. Parser: produces a syntax tree from the tokens with a Pratt parser (see pcalc/lang/parser.py)
        - For the tree itself, see pcalc/lang/syntax.py
    3. Evaluation: walks the tree and computes a float (see pcalc/lang/numerical.py)
        - Not a compiler, so nothing is generated: the tree is evaluated directly and thrown away

Every stage raises a GenericException subclass (see pcalc/lang/error.py) on failure, so the first stage that fails
stops the pipeline.
"""

from pcalc.lang.lexical import tokenize
from pcalc.lang.numerical import evaluate
from pcalc.lang.parser import parse


def calculate(text):
    """Returns the value of the arithmetic expression text as a float."""
    return evaluate(parse(tokenize(text)))
