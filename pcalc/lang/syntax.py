"""Abstract syntax tree for pcalc expressions.

Formally, the tree can be defined as

```
<node> ::= Literal(<float>)
         | Unary(<unary_op>, <node>)             ; "-x", "+x"
         | Binary(<binary_op>, <node>, <node>)   ; "x + y", "x - y", "x * y", "x / y", "x ^ y"
         | Postfix(<postfix_op>, <node>)         ; "x!"
         | Group(<node>)                         ; "(x)"
```

Nodes are immutable and compare structurally. Each node also remembers the span of source text it was parsed from,
which is only used for error messages and is ignored by ==.
"""

from dataclasses import dataclass, field
from enum import Enum


class UnaryOp(Enum):
    NEG = "-"
    POS = "+"


class BinaryOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


class PostfixOp(Enum):
    FACTORIAL = "!"


class Node:
    """Superclass for every node of the syntax tree."""
    span: tuple

    @property
    def nodes(self):
        """Direct children of this node."""
        return []

    def display(self, indents=0):
        """Recursively displays tree with readable format.

        Format:
        <Node>(<label>, nodes=[
            <Node>(<label>, nodes=[
                ...
                <Node>(<label>)  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}({self.label()}"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def label(self):
        return ""


@dataclass(frozen=True)
class Literal(Node):
    value: float
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    def label(self):
        return format_number(float(self.value))

    def __str__(self):
        return format_number(float(self.value))


@dataclass(frozen=True)
class Unary(Node):
    op: UnaryOp
    operand: Node
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    @property
    def nodes(self):
        return [self.operand]

    def label(self):
        return f"'{self.op.value}'"

    def __str__(self):
        return f"({self.op.value} {self.operand})"


@dataclass(frozen=True)
class Binary(Node):
    op: BinaryOp
    left: Node
    right: Node
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    @property
    def nodes(self):
        return [self.left, self.right]

    def label(self):
        return f"'{self.op.value}'"

    def __str__(self):
        return f"({self.op.value} {self.left} {self.right})"


@dataclass(frozen=True)
class Postfix(Node):
    op: PostfixOp
    operand: Node
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    @property
    def nodes(self):
        return [self.operand]

    def label(self):
        return f"'{self.op.value}'"

    def __str__(self):
        return f"({self.op.value} {self.operand})"


@dataclass(frozen=True)
class Group(Node):
    """Parenthesized subexpression. Only affects parse order, so it is transparent in S-expression form."""
    inner: Node
    span: tuple = field(default=(0, 0), compare=False, repr=False)

    @property
    def nodes(self):
        return [self.inner]

    def __str__(self):
        return str(self.inner)


def format_number(value):
    """Formats value for display: integral values without a fractional part, others with the shortest repr that
    round-trips.
    """
    if value == 0:
        return "0"  # also covers -0.0
    if value.is_integer() and abs(value) < 10 ** 16:
        return str(int(value))
    return repr(value)
