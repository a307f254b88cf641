"""Tree-walk evaluation of pcalc syntax trees to floats. Evaluation is pure: the same tree always produces the same
value or raises the same error.
"""

import math
import operator

from pcalc.lang.error import DivisionByZero, DomainError, EvaluationTooDeep
from pcalc.lang.syntax import Binary, BinaryOp, Group, Literal, Postfix, PostfixOp, Unary, UnaryOp


MAX_FACTORIAL = 170  # 171! does not fit in a float
MAX_EXACT_INT = 2 ** 53

ARITHMETIC = {
    BinaryOp.ADD: operator.add,
    BinaryOp.SUB: operator.sub,
    BinaryOp.MUL: operator.mul,
}


def evaluate(node):
    """Returns the value of node. Operands are evaluated left before right, so the leftmost error wins."""
    try:
        return _evaluate(node)
    except RecursionError:
        raise EvaluationTooDeep(node) from None


def _evaluate(node):
    if isinstance(node, Literal):
        return float(node.value)

    if isinstance(node, Group):
        return _evaluate(node.inner)

    if isinstance(node, Unary):
        value = _evaluate(node.operand)
        return -value if node.op is UnaryOp.NEG else value

    if isinstance(node, Binary):
        left = _evaluate(node.left)
        right = _evaluate(node.right)
        return checked(binary(node, left, right), node)

    if isinstance(node, Postfix):
        value = _evaluate(node.operand)
        if node.op is PostfixOp.FACTORIAL:
            return factorial(node, value)

    raise TypeError(f"cannot evaluate {node!r}")


def binary(node, left, right):
    """Applies node's operator to already evaluated operands."""
    if node.op in ARITHMETIC:
        return ARITHMETIC[node.op](left, right)

    if node.op is BinaryOp.DIV:
        if right == 0:
            raise DivisionByZero(node.right)
        return left / right

    if node.op is BinaryOp.POW:
        return power(node, left, right)

    raise TypeError(f"unknown binary operator {node.op!r}")


def power(node, base, exponent):
    if base == 0 and exponent < 0:
        raise DivisionByZero(node.left)
    if base < 0 and not exponent.is_integer():
        raise DomainError("negative base raised to a non-integer power", node)

    try:
        return math.pow(base, exponent)
    except OverflowError:
        raise DomainError("result out of range", node) from None


def factorial(node, value):
    if value < 0 or not value.is_integer():
        raise DomainError("factorial is only defined for non-negative integers", node)
    if value > MAX_FACTORIAL:
        raise DomainError("result out of range", node)

    return float(math.factorial(int(value)))


def checked(value, node):
    """Returns value if it is a finite float."""
    if not math.isfinite(value):
        raise DomainError("result out of range", node)
    return value


def is_exact(value):
    """Whether value is small enough for every integer near it to be representable."""
    return abs(value) <= MAX_EXACT_INT
