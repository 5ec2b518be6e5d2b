"""
Domain-aware evaluator for xplot expressions.

Evaluates expression trees at a single input value x. A point outside the
real domain of the expression (division by zero, log of a non-positive
number, arcsin(2), ...) is not an error: evaluation returns None and the
caller skips that point.

Pure evaluation: no I/O, no side effects, no shared state. Does NOT use
Python's eval().
"""

from __future__ import annotations

import math

from xplot.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Constant,
    ConstantName,
    Expr,
    Factorial,
    Func2Call,
    Func2Name,
    FuncCall,
    FuncName,
    Number,
    Parenthesis,
    UnaryExpr,
    UnaryOp,
    Variable,
)

# Absolute tolerance for domain tests against 0 and 1.
EPSILON = 1e-9

# Largest n whose factorial is a finite float.
MAX_FINITE_FACTORIAL = 170


class ExpressionEvalError(Exception):
    """Raised for objects outside the closed set of expression nodes."""


def is_equal(a: float, b: float) -> bool:
    return abs(a - b) < EPSILON


def is_zero(a: float) -> bool:
    return is_equal(a, 0.0)


def evaluate(expr: Expr, x: float) -> float | None:
    """Evaluate an expression at x.

    Args:
        expr: Parsed expression tree.
        x: Input value.

    Returns:
        The value, or None when x is outside the expression's domain.

    Raises:
        ExpressionEvalError: If expr is not an expression node.
    """
    return _interpret(expr, x)


def is_valid_at(expr: Expr, x: float) -> bool:
    """True when x lies inside the domain of expr."""
    return _interpret(expr, x) is not None


def _interpret(expr: Expr, x: float) -> float | None:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Number):
        return expr.value

    if isinstance(expr, Variable):
        return x

    if isinstance(expr, Constant):
        return math.e if expr.name == ConstantName.E else math.pi

    if isinstance(expr, UnaryExpr):
        return _interpret_unary(expr, x)

    if isinstance(expr, BinaryExpr):
        return _interpret_binary(expr, x)

    if isinstance(expr, Parenthesis):
        return _interpret(expr.inner, x)

    if isinstance(expr, Factorial):
        return _factorial(expr.n)

    if isinstance(expr, FuncCall):
        return _interpret_func_call(expr, x)

    if isinstance(expr, Func2Call):
        return _interpret_func2_call(expr, x)

    raise ExpressionEvalError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_unary(expr: UnaryExpr, x: float) -> float | None:
    """Evaluate a unary expression."""
    val = _interpret(expr.operand, x)
    if val is None:
        return None
    if expr.op == UnaryOp.NEG:
        return -val
    raise ExpressionEvalError(f"Unknown unary op: {expr.op}")


def _interpret_binary(expr: BinaryExpr, x: float) -> float | None:
    """Evaluate a binary expression."""
    left = _interpret(expr.left, x)
    if left is None:
        return None
    right = _interpret(expr.right, x)
    if right is None:
        return None

    if expr.op == BinaryOp.ADD:
        return left + right
    if expr.op == BinaryOp.SUB:
        return left - right
    if expr.op == BinaryOp.MUL:
        return left * right
    if expr.op == BinaryOp.DIV:
        if is_zero(right):
            return None
        return left / right
    if expr.op == BinaryOp.POW:
        return _pow(left, right)

    raise ExpressionEvalError(f"Unknown binary op: {expr.op}")


def _pow(base: float, exponent: float) -> float | None:
    """Real power, or None where it leaves the reals or overflows."""
    if is_zero(base) and exponent < 0:
        return None
    try:
        result = math.pow(base, exponent)
    except (ValueError, OverflowError):
        # ValueError: negative base with non-integer exponent
        return None
    if math.isnan(result):
        return None
    return result


def _factorial(n: int) -> float:
    if n > MAX_FINITE_FACTORIAL:
        return math.inf
    return float(math.factorial(n))


def _interpret_func_call(expr: FuncCall, x: float) -> float | None:
    """Evaluate a one-argument function (closed set)."""
    val = _interpret(expr.arg, x)
    if val is None or not math.isfinite(val):
        return None

    name = expr.name

    if name == FuncName.SIN:
        return math.sin(val)
    if name == FuncName.COS:
        return math.cos(val)

    if name == FuncName.TAN:
        result = math.tan(val)
        return result if math.isfinite(result) else None

    if name == FuncName.COT:
        tan = math.tan(val)
        if is_zero(tan):
            return None
        result = 1.0 / tan
        return result if math.isfinite(result) else None

    if name == FuncName.SEC:
        cos = math.cos(val)
        return None if is_zero(cos) else 1.0 / cos

    if name == FuncName.CSC:
        sin = math.sin(val)
        return None if is_zero(sin) else 1.0 / sin

    if name == FuncName.ARCSIN:
        return math.asin(val) if -1.0 <= val <= 1.0 else None
    if name == FuncName.ARCCOS:
        return math.acos(val) if -1.0 <= val <= 1.0 else None

    if name == FuncName.ARCTAN:
        return math.atan(val)
    if name == FuncName.ARCCOT:
        return math.pi / 2 - math.atan(val)

    if name == FuncName.LN:
        return math.log(val) if val > 0 else None
    if name == FuncName.SQRT:
        return math.sqrt(val) if val >= 0 else None

    raise ExpressionEvalError(f"Unknown function: {name}()")


def _interpret_func2_call(expr: Func2Call, x: float) -> float | None:
    """Evaluate a two-argument function (closed set)."""
    left = _interpret(expr.left, x)
    if left is None:
        return None
    right = _interpret(expr.right, x)
    if right is None:
        return None

    if expr.name == Func2Name.LOG:
        base, arg = left, right
        if base <= 0 or is_equal(base, 1.0) or arg <= 0:
            return None
        return math.log(arg, base)

    raise ExpressionEvalError(f"Unknown function: {expr.name}()")
