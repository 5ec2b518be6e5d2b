"""
xplot expression language.

Tokenizer, parser, evaluator and sampler for single-variable expressions.

Usage:
    from xplot.core.expression_lang import parse

    expr = parse("sin(x) ** 2")
    expr.eval(0.5)        # 0.229848...
    parse("1 / x").eval(0.0)  # None: outside the domain
"""

from xplot.core.expression_lang.evaluator import evaluate, is_valid_at
from xplot.core.expression_lang.parser import parse, try_parse
from xplot.core.expression_lang.sampling import Segment, sample, sample_points

__all__ = [
    "Segment",
    "evaluate",
    "is_valid_at",
    "parse",
    "sample",
    "sample_points",
    "try_parse",
]
