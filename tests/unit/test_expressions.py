"""Tests for xplot expression tree types: rendering, round-trips, immutability."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from xplot.core.expression_lang import parse
from xplot.core.ir import (
    BinaryExpr,
    BinaryOp,
    Constant,
    ConstantName,
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
from xplot.core.ir.expressions import format_number

SAMPLE_XS = (-3.0, -1.0, -0.5, 0.0, 0.25, 1.0, 2.0, 10.0)


class TestRendering:
    """to_text renders expression syntax."""

    @pytest.mark.parametrize(
        "source",
        [
            "x",
            "e",
            "pi",
            "-x",
            "--x",
            "x + x",
            "x - x",
            "x * x",
            "x / x",
            "x ** x",
            "-x + 1 * 2",
            "(x + 1) * 2",
            "sin(x)",
            "arccot(x)",
            "ln(x)",
            "sqrt(x)",
            "log(10, x)",
            "5!",
            "sin(x) ** 2",
            "x ** -2",
        ],
    )
    def test_canonical_source_unchanged(self, source: str) -> None:
        assert parse(source).to_text() == source

    def test_whitespace_normalized(self) -> None:
        assert parse("  x+1*(  2 )").to_text() == "x + 1 * (2)"
        assert parse("log(10,x)").to_text() == "log(10, x)"

    def test_str_matches_to_text(self) -> None:
        expr = parse("cos(x) / 2")
        assert str(expr) == expr.to_text()

    def test_number_formatting(self) -> None:
        assert parse("1.0").to_text() == "1"
        assert parse("0.3").to_text() == "0.3"
        assert parse("0.00001").to_text() == "0.00001"

    def test_built_tree(self) -> None:
        expr = BinaryExpr(
            op=BinaryOp.MUL,
            left=Parenthesis(
                inner=BinaryExpr(op=BinaryOp.ADD, left=Variable(), right=Number(value=1))
            ),
            right=FuncCall(name=FuncName.SIN, arg=Constant(name=ConstantName.PI)),
        )
        assert expr.to_text() == "(x + 1) * sin(pi)"


class TestFormatNumber:
    """format_number never produces exponent notation."""

    def test_integers(self) -> None:
        assert format_number(3.0) == "3"
        assert format_number(-2.0) == "-2"

    def test_small(self) -> None:
        assert format_number(1e-7) == "0.0000001"

    def test_large(self) -> None:
        text = format_number(1e20)
        assert "e" not in text
        assert float(text) == 1e20


class TestRoundTrip:
    """parse(e.to_text()) reproduces e."""

    @pytest.mark.parametrize(
        "source",
        [
            "-x + 1 * 2",
            "x - (1 - x)",
            "2 ** 3 ** 2",
            "2 ** (3 ** 2)",
            "x / 2 / (x + 1)",
            "sin(x) ** 2 + cos(x) ** 2",
            "log(2, x * x) - ln(sqrt(x))",
            "tan(x) * cot(x) + sec(x) - csc(x)",
            "arcsin(x / 10) + arccos(x / 10) + arctan(x) + arccot(x)",
            "-(x + e) * pi",
            "3! / x",
            "0.125 * x ** -2",
            "123456789012345678901234567890 * x",
        ],
    )
    def test_round_trip(self, source: str) -> None:
        expr = parse(source)
        again = parse(expr.to_text())
        assert again == expr
        for x in SAMPLE_XS:
            assert again.eval(x) == expr.eval(x)


class TestImmutability:
    """Nodes are frozen and validated."""

    def test_frozen(self) -> None:
        expr = Number(value=1.0)
        with pytest.raises(ValidationError):
            expr.value = 2.0  # type: ignore[misc]

    def test_non_finite_number_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Number(value=float("inf"))
        with pytest.raises(ValidationError):
            Number(value=float("nan"))

    def test_negative_factorial_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Factorial(n=-1)

    def test_copy_is_equal(self) -> None:
        expr = parse("log(2, x) + 1")
        clone = expr.model_copy()
        assert clone == expr
        assert clone.eval(4.0) == expr.eval(4.0)

    def test_unknown_function_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            FuncCall(name="sinh", arg=Variable())  # type: ignore[arg-type]

    def test_nodes_compare_by_value(self) -> None:
        a = UnaryExpr(op=UnaryOp.NEG, operand=Variable())
        b = UnaryExpr(op=UnaryOp.NEG, operand=Variable())
        assert a == b
        assert Func2Call(name=Func2Name.LOG, left=Number(value=2), right=Variable()) != (
            Func2Call(name=Func2Name.LOG, left=Number(value=3), right=Variable())
        )
