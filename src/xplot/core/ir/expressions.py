"""
Expression tree types for xplot.

A parsed expression is a tree of frozen pydantic models drawn from a closed
set of node types (see ``Expr`` at the bottom of this module). Nodes render
themselves as source text. Their ``eval`` and ``is_valid_at`` methods delegate
to ``xplot.core.expression_lang.evaluator``, which holds the domain rules and
dispatches over the closed set.

Supports:
- Numbers and the variable x
- Named constants: e, pi
- Negation: -x
- Arithmetic: +, -, *, /, **
- Explicit grouping: (x + 1)
- Factorial of an integer literal: 5!
- One-argument functions: sin(x), arccot(x), ln(x), sqrt(x), ...
- Two-argument functions: log(base, x)
"""

from __future__ import annotations

from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators and names
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"


class UnaryOp(StrEnum):
    """Unary operators for expressions."""

    NEG = "-"


class ConstantName(StrEnum):
    """Named constants."""

    E = "e"
    PI = "pi"


class FuncName(StrEnum):
    """One-argument functions."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    COT = "cot"
    SEC = "sec"
    CSC = "csc"
    ARCSIN = "arcsin"
    ARCCOS = "arccos"
    ARCTAN = "arctan"
    ARCCOT = "arccot"
    LN = "ln"
    SQRT = "sqrt"


class Func2Name(StrEnum):
    """Two-argument functions."""

    LOG = "log"


FUNCTION_NAMES: frozenset[str] = frozenset(f.value for f in FuncName)
FUNCTION2_NAMES: frozenset[str] = frozenset(f.value for f in Func2Name)
CONSTANT_NAMES: frozenset[str] = frozenset(c.value for c in ConstantName)


# ---------------------------------------------------------------------------
# Shared node behaviour
# ---------------------------------------------------------------------------


class _Node(BaseModel):
    """Common surface of every expression node."""

    model_config = ConfigDict(frozen=True)

    def eval(self, x: float) -> float | None:
        """Evaluate at x, or None when x is outside the domain."""
        from xplot.core.expression_lang.evaluator import evaluate

        return evaluate(self, x)  # type: ignore[arg-type]

    def is_valid_at(self, x: float) -> bool:
        """True when eval(x) would produce a value."""
        from xplot.core.expression_lang.evaluator import is_valid_at

        return is_valid_at(self, x)  # type: ignore[arg-type]

    def to_text(self) -> str:
        """Render back to expression syntax."""
        return str(self)


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Number(_Node):
    """A numeric literal."""

    value: float = Field(allow_inf_nan=False, description="The literal value")

    def __str__(self) -> str:
        return format_number(self.value)


class Variable(_Node):
    """The input variable x."""

    def __str__(self) -> str:
        return "x"


class Constant(_Node):
    """A named constant: e or pi."""

    name: ConstantName

    def __str__(self) -> str:
        return self.name.value


class UnaryExpr(_Node):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


class BinaryExpr(_Node):
    """
    Binary operation: left op right.

    Rendering adds no grouping of its own; grouping from the source text is
    kept as Parenthesis nodes.
    """

    op: BinaryOp
    left: Expr
    right: Expr

    def __str__(self) -> str:
        return f"{self.left} {self.op.value} {self.right}"


class Parenthesis(_Node):
    """Explicit grouping from the source text. Evaluates to its inner value."""

    inner: Expr

    def __str__(self) -> str:
        return f"({self.inner})"


class Factorial(_Node):
    """Factorial of an integer literal: 5!"""

    n: int = Field(ge=0, description="Operand, a non-negative integer literal")

    def __str__(self) -> str:
        return f"{self.n}!"


class FuncCall(_Node):
    """
    One-argument function call: name(arg).

    Angles are in radians.
    """

    name: FuncName
    arg: Expr

    def __str__(self) -> str:
        return f"{self.name.value}({self.arg})"


class Func2Call(_Node):
    """
    Two-argument function call: name(left, right).

    For log, left is the base and right the argument.
    """

    name: Func2Name
    left: Expr
    right: Expr

    def __str__(self) -> str:
        return f"{self.name.value}({self.left}, {self.right})"


def format_number(value: float) -> str:
    """Shortest positional decimal for value; integral values drop '.0'.

    Never uses exponent notation, which the tokenizer cannot read back.
    """
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = (
    Number
    | Variable
    | Constant
    | UnaryExpr
    | BinaryExpr
    | Parenthesis
    | Factorial
    | FuncCall
    | Func2Call
)

# Rebuild models for recursive forward references
UnaryExpr.model_rebuild()
BinaryExpr.model_rebuild()
Parenthesis.model_rebuild()
FuncCall.model_rebuild()
Func2Call.model_rebuild()
