"""
Tests for StreamingMoments.

Validates closed-form results, degenerate-sample rules, order
independence, and agreement with scipy.stats.linregress.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose
from scipy import stats as sp_stats

from pyregress.regression import StreamingMoments, VariableStats


# ═══════════════════════════════════════════════════════════════════════
# Counting and closed form
# ═══════════════════════════════════════════════════════════════════════


class TestCount:

    def test_empty(self):
        assert StreamingMoments().count() == 0.0

    def test_count_equals_number_of_adds(self, rng):
        moments = StreamingMoments()
        for i, (x, y) in enumerate(rng.standard_normal((37, 2)), start=1):
            moments.add(x, y)
            assert moments.count() == float(i)

    def test_count_is_float(self, make_moments):
        assert isinstance(make_moments([(1.0, 1.0)]).count(), float)


class TestClosedForm:

    def test_exact_line(self, make_moments):
        moments = make_moments([(1, 2), (2, 4), (3, 6)])
        assert moments.slope() == 2.0
        assert moments.intercept() == 0.0
        assert moments.rsq() == 1.0

    def test_exact_line_has_zero_stderr(self, make_moments):
        moments = make_moments([(1, 2), (2, 4), (3, 6)])
        assert moments.slope_stderr() == 0.0
        assert moments.intercept_stderr() == 0.0

    def test_line_with_intercept(self, make_moments):
        moments = make_moments([(0, 1), (1, 3), (2, 5), (3, 7)])
        assert_allclose(moments.slope(), 2.0)
        assert_allclose(moments.intercept(), 1.0)
        assert_allclose(moments.rsq(), 1.0)

    def test_means(self, make_moments):
        moments = make_moments([(1, 10), (3, 20)])
        assert moments.mean_x() == 2.0
        assert moments.mean_y() == 15.0
        assert StreamingMoments().mean_x() == 0.0


# ═══════════════════════════════════════════════════════════════════════
# Degenerate sample counts
# ═══════════════════════════════════════════════════════════════════════


class TestDegenerate:

    def test_no_samples(self):
        moments = StreamingMoments()
        assert moments.slope() == 0.0
        assert moments.intercept() == 0.0
        assert moments.rsq() == 0.0
        assert moments.slope_stderr() == 0.0
        assert moments.intercept_stderr() == 0.0

    def test_single_sample_slope_through_origin(self, make_moments):
        moments = make_moments([(4.0, 10.0)])
        assert moments.slope() == 2.5
        assert moments.intercept() == 0.0
        assert moments.rsq() == 0.0

    def test_single_sample_at_zero_x_does_not_raise(self, make_moments):
        assert math.isinf(make_moments([(0.0, 3.0)]).slope())
        assert math.isnan(make_moments([(0.0, 0.0)]).slope())

    @pytest.mark.parametrize("n", [1, 2])
    def test_stderr_zero_for_two_or_fewer(self, make_moments, n):
        moments = make_moments([(1.0, 3.0), (2.0, 7.0)][:n])
        assert moments.slope_stderr() == 0.0
        assert moments.intercept_stderr() == 0.0

    def test_tstat_non_finite_without_stderr(self, make_moments):
        moments = make_moments([(1.0, 3.0), (2.0, 7.0)])
        assert not math.isfinite(moments.slope_tstat())
        assert math.isnan(moments.slope_pvalue())
        assert math.isnan(moments.intercept_pvalue())

    def test_constant_x_uses_slope_through_origin(self, make_moments):
        moments = make_moments([(2.0, 4.0)] * 5)
        assert moments.slope() == 2.0
        assert moments.intercept() == 0.0

    def test_constant_zero_x_does_not_raise(self, make_moments):
        moments = make_moments([(0.0, 1.0), (0.0, 1.0)])
        assert math.isinf(moments.slope())
        assert math.isnan(moments.rsq())

    def test_nan_propagates(self, make_moments):
        moments = make_moments([(1.0, 1.0), (float("nan"), 2.0), (3.0, 3.0)])
        assert moments.count() == 3.0
        assert math.isnan(moments.slope())


# ═══════════════════════════════════════════════════════════════════════
# Agreement with batch computation
# ═══════════════════════════════════════════════════════════════════════


class TestAgainstLinregress:

    def test_matches_scipy(self, make_moments, linear_samples):
        x, y = linear_samples
        moments = make_moments(zip(x, y))
        ref = sp_stats.linregress(x, y)

        assert_allclose(moments.slope(), ref.slope, rtol=1e-9)
        assert_allclose(moments.intercept(), ref.intercept, rtol=1e-9)
        assert_allclose(moments.rsq(), ref.rvalue ** 2, rtol=1e-9)
        assert_allclose(moments.slope_stderr(), ref.stderr, rtol=1e-7)
        assert_allclose(moments.intercept_stderr(), ref.intercept_stderr, rtol=1e-7)

    def test_pvalue_matches_scipy(self, make_moments, rng):
        x = rng.uniform(0.0, 10.0, 40)
        y = 0.05 * x + rng.standard_normal(40)
        moments = make_moments(zip(x, y))
        ref = sp_stats.linregress(x, y)
        assert_allclose(moments.slope_pvalue(), ref.pvalue, rtol=1e-6)
        assert 0.0 <= moments.intercept_pvalue() <= 1.0

    def test_recovers_true_line(self, make_moments, linear_samples):
        x, y = linear_samples
        moments = make_moments(zip(x, y))
        assert_allclose(moments.slope(), 2.0, atol=0.1)
        assert_allclose(moments.intercept(), 1.5, atol=0.3)
        assert moments.rsq() > 0.95
        assert moments.slope_tstat() > 10

    def test_order_independent(self, make_moments, linear_samples, rng):
        x, y = linear_samples
        forward = make_moments(zip(x, y))
        order = rng.permutation(len(x))
        shuffled = make_moments(zip(x[order], y[order]))

        assert shuffled.count() == forward.count()
        assert_allclose(shuffled.slope(), forward.slope(), rtol=1e-10)
        assert_allclose(shuffled.intercept(), forward.intercept(), rtol=1e-10)
        assert_allclose(shuffled.rsq(), forward.rsq(), rtol=1e-10)

    def test_intercept_tstat_is_absolute(self, make_moments, rng):
        x = rng.uniform(0.0, 5.0, 50)
        y = -4.0 + 1.0 * x + rng.standard_normal(50) * 0.1
        moments = make_moments(zip(x, y))
        assert moments.intercept() < 0
        assert moments.intercept_tstat() > 0
        assert_allclose(
            moments.intercept_tstat(),
            abs(moments.intercept() / moments.intercept_stderr()),
        )


class TestSummary:

    def test_summary_snapshot(self, make_moments, linear_samples):
        x, y = linear_samples
        moments = make_moments(zip(x, y))
        stats = moments.summary("cpu")
        assert isinstance(stats, VariableStats)
        assert stats.name == "cpu"
        assert stats.count == 200.0
        assert stats.slope == moments.slope()
        assert stats.intercept == moments.intercept()
        assert stats.r_squared == moments.rsq()
        assert stats.slope_tstat == moments.slope_tstat()

    def test_repr(self, make_moments):
        text = repr(make_moments([(1, 2), (2, 4), (3, 6)]))
        assert text.startswith("StreamingMoments(n=3")
