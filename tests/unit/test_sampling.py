"""Tests for sampling expressions across a range."""

from __future__ import annotations

import math

import pytest

from xplot.core.expression_lang import parse, sample, sample_points
from xplot.core.expression_lang.sampling import MAX_SAMPLES, Segment, sample_range


class TestSampleRange:
    def test_includes_both_ends(self) -> None:
        assert sample_range(-1.0, 1.0, 0.5) == [-1.0, -0.5, 0.0, 0.5, 1.0]

    def test_no_accumulated_drift(self) -> None:
        xs = sample_range(0.0, 1.0, 0.1)
        assert len(xs) == 11
        assert xs[-1] == pytest.approx(1.0)

    def test_single_point(self) -> None:
        assert sample_range(2.0, 2.0, 0.1) == [2.0]

    def test_invalid_step(self) -> None:
        with pytest.raises(ValueError, match="step must be positive"):
            sample_range(0.0, 1.0, 0.0)

    def test_inverted_range(self) -> None:
        with pytest.raises(ValueError, match="greater than x_max"):
            sample_range(1.0, 0.0, 0.1)

    def test_too_many_samples(self) -> None:
        with pytest.raises(ValueError, match="needs more than"):
            sample_range(-10.0, 10.0, 1e-12)

    def test_infinite_range(self) -> None:
        with pytest.raises(ValueError, match="needs more than"):
            sample_range(0.0, math.inf, 1.0)

    def test_sample_limit_boundary(self) -> None:
        assert len(sample_range(0.0, MAX_SAMPLES - 1.0, 1.0)) == MAX_SAMPLES
        with pytest.raises(ValueError):
            sample_range(0.0, float(MAX_SAMPLES), 1.0)


class TestSample:
    """Curves are split into segments at domain failures."""

    def test_continuous(self) -> None:
        segments = sample(parse("x ** 2"), 0.0, 1.0, 0.25)
        assert len(segments) == 1
        assert segments[0].points == [
            (0.0, 0.0),
            (0.25, 0.0625),
            (0.5, 0.25),
            (0.75, 0.5625),
            (1.0, 1.0),
        ]

    def test_split_at_pole(self) -> None:
        segments = sample(parse("1 / x"), -1.0, 1.0, 0.5)
        assert [s.points for s in segments] == [
            [(-1.0, -1.0), (-0.5, -2.0)],
            [(0.5, 2.0), (1.0, 1.0)],
        ]

    def test_partial_domain(self) -> None:
        segments = sample(parse("sqrt(x)"), -1.0, 1.0, 0.5)
        assert len(segments) == 1
        assert segments[0].x_start == 0.0
        assert segments[0].x_end == 1.0
        assert len(segments[0]) == 3

    def test_nowhere_defined(self) -> None:
        assert sample(parse("log(1, x)"), -1.0, 1.0, 0.5) == []

    def test_no_empty_segments(self) -> None:
        segments = sample(parse("csc(x)"), -10.0, 10.0, 0.01)
        assert segments
        assert all(len(s) > 0 for s in segments)

    def test_invalid_arguments(self) -> None:
        with pytest.raises(ValueError):
            sample(parse("x"), 0.0, 1.0, -0.1)


class TestSamplePoints:
    def test_values_and_failures(self) -> None:
        assert sample_points(parse("1 / x"), [0.0, 2.0, 4.0]) == [None, 0.5, 0.25]

    def test_empty(self) -> None:
        assert sample_points(parse("x"), []) == []


class TestSegment:
    def test_bounds(self) -> None:
        segment = Segment(points=[(1.0, 2.0), (3.0, 4.0)])
        assert segment.x_start == 1.0
        assert segment.x_end == 3.0
        assert len(segment) == 2
