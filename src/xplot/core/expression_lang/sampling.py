"""
Sampling of expressions across an x-range.

A plot is drawn as a set of polylines. Each polyline is a Segment: a run of
consecutive sample points where the expression is defined. A domain failure
ends the current segment, so asymptotes and holes show up as gaps rather
than spurious connecting lines.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from xplot.core.expression_lang.evaluator import evaluate
from xplot.core.ir.expressions import Expr

logger = logging.getLogger(__name__)

# Upper bound on the number of x values in one sampled range.
MAX_SAMPLES = 1_000_000


@dataclass
class Segment:
    """Contiguous run of defined (x, y) points."""

    points: list[tuple[float, float]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def x_start(self) -> float:
        return self.points[0][0]

    @property
    def x_end(self) -> float:
        return self.points[-1][0]


def sample_points(expr: Expr, xs: Iterable[float]) -> list[float | None]:
    """Evaluate expr at every x, None where x is outside the domain."""
    return [evaluate(expr, x) for x in xs]


def sample_range(x_min: float, x_max: float, step: float) -> list[float]:
    """Evenly spaced x values from x_min up to and including x_max."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    if x_min > x_max:
        raise ValueError(f"x_min ({x_min}) is greater than x_max ({x_max})")

    intervals = (x_max - x_min) / step
    if not math.isfinite(intervals) or intervals >= MAX_SAMPLES:
        raise ValueError(
            f"range [{x_min}, {x_max}] with step {step} needs more than "
            f"{MAX_SAMPLES} samples"
        )

    # Index-based to avoid accumulating rounding error
    count = int(intervals + 1e-9) + 1
    return [x_min + i * step for i in range(count)]


def sample(expr: Expr, x_min: float, x_max: float, step: float) -> list[Segment]:
    """Sample expr over [x_min, x_max] and split the curve at domain failures.

    Args:
        expr: Parsed expression tree.
        x_min: First x value.
        x_max: Last x value (included when it falls on the grid).
        step: Distance between consecutive x values.

    Returns:
        Segments in increasing x order. Never contains an empty segment.

    Raises:
        ValueError: If step is not positive, x_min > x_max, or the range
            needs more than MAX_SAMPLES points.
    """
    segments: list[Segment] = []
    current = Segment()

    for x in sample_range(x_min, x_max, step):
        y = evaluate(expr, x)
        if y is None:
            if current.points:
                segments.append(current)
                current = Segment()
            continue
        current.points.append((x, y))

    if current.points:
        segments.append(current)

    logger.debug(
        "Sampled %s over [%s, %s] step %s: %d segment(s)",
        expr,
        x_min,
        x_max,
        step,
        len(segments),
    )
    return segments
