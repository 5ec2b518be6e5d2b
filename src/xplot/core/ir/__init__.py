"""
xplot expression tree types.
"""

from .expressions import (
    CONSTANT_NAMES,
    FUNCTION2_NAMES,
    FUNCTION_NAMES,
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

__all__ = [
    "CONSTANT_NAMES",
    "FUNCTION2_NAMES",
    "FUNCTION_NAMES",
    "BinaryExpr",
    "BinaryOp",
    "Constant",
    "ConstantName",
    "Expr",
    "Factorial",
    "Func2Call",
    "Func2Name",
    "FuncCall",
    "FuncName",
    "Number",
    "Parenthesis",
    "UnaryExpr",
    "UnaryOp",
    "Variable",
]
