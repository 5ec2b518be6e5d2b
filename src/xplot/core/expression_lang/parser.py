"""
Parser for xplot expressions.

Recursive descent for primaries, precedence climbing for binary operators.

Grammar:
    expression ::= sub_expr EOF
    sub_expr   ::= primary (b_op primary)*
    primary    ::= number | factorial | variable | constant | unary | parens | function
    factorial  ::= integer "!"
    unary      ::= "-" primary
    parens     ::= "(" sub_expr ")"
    function   ::= f_name "(" sub_expr ")"
                 | f2_name "(" sub_expr "," sub_expr ")"
    variable   ::= "x"
    constant   ::= "e" | "pi"
    b_op       ::= "+" | "-" | "*" | "/" | "**"

Operators of equal precedence associate to the left, "**" included:
``2 ** 3 ** 2`` is ``(2 ** 3) ** 2``.
"""

from __future__ import annotations

import logging
import math

from xplot.core.errors import ParseError
from xplot.core.expression_lang.tokenizer import Lexer, Token, TokenKind
from xplot.core.ir.expressions import (
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

logger = logging.getLogger(__name__)

# Deepest expression tree accepted. Parsing, evaluation and rendering
# recurse once per level.
MAX_DEPTH = 100


class Parser:
    """One-token-lookahead parser over a Lexer. Never backtracks."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.lexer = Lexer(source)
        self.current: Token = self.lexer.next_token()
        self.nesting = 0
        self._skip_whitespace()

    def advance(self) -> Token:
        """Consume the current token and move to the next non-whitespace one."""
        tok = self.current
        self.current = self.lexer.next_token()
        self._skip_whitespace()
        return tok

    def _skip_whitespace(self) -> None:
        while self.current.is_whitespace():
            self.current = self.lexer.next_token()

    def error(self, message: str, tok: Token | None = None) -> ParseError:
        tok = tok or self.current
        return ParseError(message, tok.pos, self.source)

    def expect(self, kind: TokenKind, what: str) -> Token:
        if self.current.kind != kind:
            raise self.error(f"Expected {what}, got {self.current.describe()}")
        return self.advance()

    # -- Grammar rules --

    def parse(self) -> Expr:
        """expression ::= sub_expr EOF"""
        expr = self.parse_sub()
        if not self.current.is_eof():
            raise self.error(
                f"Unexpected {self.current.describe()} after complete expression"
            )
        if tree_depth(expr) > MAX_DEPTH:
            raise ParseError("Expression is nested too deeply", 0, self.source)
        return expr

    def parse_sub(self) -> Expr:
        """sub_expr ::= primary (b_op primary)*"""
        lhs = self.parse_primary()
        return self.parse_op_rhs(lhs, 0)

    def parse_op_rhs(self, lhs: Expr, min_precedence: int) -> Expr:
        """Absorb operators binding at least as tightly as min_precedence."""
        while True:
            precedence = self.current.precedence
            if precedence is None or precedence < min_precedence:
                return lhs

            op = BinaryOp(self.advance().value)
            rhs = self.parse_primary()

            # Operators binding tighter than op belong to rhs
            following = self.current.precedence
            if following is not None and following > precedence:
                rhs = self.parse_op_rhs(rhs, precedence + 1)

            lhs = BinaryExpr(op=op, left=lhs, right=rhs)

    def parse_primary(self) -> Expr:
        """number | factorial | variable | constant | unary | parens | function"""
        self.nesting += 1
        try:
            if self.nesting > MAX_DEPTH:
                raise self.error("Expression is nested too deeply")
            return self._parse_primary()
        finally:
            self.nesting -= 1

    def _parse_primary(self) -> Expr:
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            return self._parse_number()

        if tok.kind == TokenKind.IDENT:
            name = str(tok.value)
            if name == "x":
                self.advance()
                return Variable()
            if name in CONSTANT_NAMES:
                self.advance()
                return Constant(name=ConstantName(name))
            if name in FUNCTION_NAMES or name in FUNCTION2_NAMES:
                return self._parse_function()
            raise self.error(f"Unknown identifier {name!r}")

        if tok.kind == TokenKind.OPERATOR:
            return self._parse_unary()

        if tok.kind == TokenKind.LPAREN:
            return self._parse_parenthesis()

        if tok.kind == TokenKind.OTHER and tok.value != ",":
            raise self.error(f"Invalid token {tok.value!r}")

        raise self.error(f"Unexpected {tok.describe()}")

    def _parse_number(self) -> Expr:
        """number ::= digit+ ("." digit+)?   factorial ::= integer "!" """
        tok = self.advance()
        value = float(tok.value)
        if not math.isfinite(value):
            raise self.error("Numeric literal out of range", tok)

        if self.current.kind == TokenKind.OTHER and self.current.value == "!":
            if not value.is_integer():
                raise self.error("Factorial requires a non-negative integer literal")
            self.advance()
            return Factorial(n=int(value))

        return Number(value=value)

    def _parse_unary(self) -> Expr:
        """unary ::= "-" primary"""
        if not self.current.is_operator("-"):
            raise self.error(f"Operator {self.current.value!r} cannot be used as a prefix")
        self.advance()
        return UnaryExpr(op=UnaryOp.NEG, operand=self.parse_primary())

    def _parse_parenthesis(self) -> Expr:
        """parens ::= "(" sub_expr ")" """
        self.expect(TokenKind.LPAREN, "'('")
        inner = self.parse_sub()
        self.expect(TokenKind.RPAREN, "')'")
        return Parenthesis(inner=inner)

    def _parse_function(self) -> Expr:
        """f_name "(" sub_expr ")" | f2_name "(" sub_expr "," sub_expr ")" """
        name = str(self.advance().value)
        self.expect(TokenKind.LPAREN, f"'(' after function name {name!r}")

        first = self.parse_sub()

        if name in FUNCTION2_NAMES:
            if not self.current.is_comma():
                raise self.error(
                    f"Expected ',' in {name}(...), got {self.current.describe()}"
                )
            self.advance()
            second = self.parse_sub()
            self.expect(TokenKind.RPAREN, f"')' to close {name}(...)")
            return Func2Call(name=Func2Name(name), left=first, right=second)

        self.expect(TokenKind.RPAREN, f"')' to close {name}(...)")
        return FuncCall(name=FuncName(name), arg=first)


def parse(source: str) -> Expr:
    """Parse an expression string into an expression tree.

    Args:
        source: Expression string (e.g., "-x + 1 * 2")

    Returns:
        Parsed expression tree.

    Raises:
        ParseError: If the expression is invalid. No partial tree is produced.
    """
    return Parser(source).parse()


def try_parse(source: str) -> Expr | None:
    """Parse an expression string, returning None if it is invalid."""
    try:
        return parse(source)
    except ParseError as e:
        logger.debug("Rejected expression %r: %s", source, e.message)
        return None


def tree_depth(expr: Expr) -> int:
    """Number of levels in expr, counted without recursion."""
    deepest = 0
    stack: list[tuple[Expr, int]] = [(expr, 1)]
    while stack:
        node, depth = stack.pop()
        deepest = max(deepest, depth)
        if isinstance(node, UnaryExpr):
            stack.append((node.operand, depth + 1))
        elif isinstance(node, Parenthesis):
            stack.append((node.inner, depth + 1))
        elif isinstance(node, FuncCall):
            stack.append((node.arg, depth + 1))
        elif isinstance(node, (BinaryExpr, Func2Call)):
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
    return deepest
