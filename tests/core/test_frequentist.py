"""Unit tests for frequentist tests module."""

import math

import pytest
from scipy import stats

from delta_lift.core import frequentist
from delta_lift.core.errors import (
    DegenerateVarianceError,
    DomainError,
    InvalidSampleSizeError,
    NegativeVarianceError,
)


class TestWelchSatterthwaiteDof:
    """Tests for Welch-Satterthwaite degrees of freedom."""

    def test_equal_groups_give_pooled_dof(self):
        """Test that equal variances and sizes reduce to n1 + n2 - 2."""
        dof = frequentist.welch_satterthwaite_dof(var1=4.0, n1=100, var2=4.0, n2=100)

        assert dof == pytest.approx(198.0)

    @pytest.mark.parametrize("var1,n1,var2,n2", [
        (1.0, 10, 1.0, 10),
        (1.0, 10, 25.0, 200),
        (0.001996, 700_000, 0.0021354, 710_000),
        (0.33**2, 46_000, 0.34**2, 46_700),
        (5.0, 2, 0.1, 3),
        (0.0, 50, 3.0, 40),
    ])
    def test_dof_bounded_by_pooled(self, var1, n1, var2, n2):
        """Test that Welch dof is positive and never exceeds n1 + n2 - 2."""
        dof = frequentist.welch_satterthwaite_dof(var1, n1, var2, n2)

        assert dof > 0
        assert dof <= n1 + n2 - 2 + 1e-9

    def test_unequal_variance_shrinks_dof(self):
        """Test that a dominant noisy group pulls dof towards its own n - 1."""
        dof = frequentist.welch_satterthwaite_dof(var1=100.0, n1=20, var2=0.01, n2=1000)

        assert dof == pytest.approx(19.0, rel=0.01)

    def test_single_zero_variance(self):
        """Test that one zero variance leaves dof equal to the other group's n - 1."""
        dof = frequentist.welch_satterthwaite_dof(var1=0.0, n1=50, var2=3.0, n2=40)

        assert dof == pytest.approx(39.0)

    def test_invalid_sample_size(self):
        """Test error handling for groups of size 1 or less."""
        with pytest.raises(InvalidSampleSizeError, match="greater than 1"):
            frequentist.welch_satterthwaite_dof(1.0, 1, 1.0, 10)

        with pytest.raises(InvalidSampleSizeError, match="greater than 1"):
            frequentist.welch_satterthwaite_dof(1.0, 10, 1.0, 0)

    def test_both_variances_zero(self):
        """Test that dof is undefined when there is no variance at all."""
        with pytest.raises(DegenerateVarianceError, match="both group variances are zero"):
            frequentist.welch_satterthwaite_dof(0.0, 10, 0.0, 10)


class TestTTest:
    """Tests for the single-estimate t-test."""

    def test_zero_metric_gives_p_value_one(self):
        """Test that a zero statistic has p-value exactly 1."""
        result = frequentist.t_test(metric=0.0, variance=0.01, dof=30)

        assert result.t_statistic == 0.0
        assert result.p_value == 1.0
        assert not result.significant

    def test_matches_scipy_t_distribution(self):
        """Test p-value and CI against scipy's t distribution directly."""
        metric, variance, dof = 1.5, 0.49, 12.5
        result = frequentist.t_test(metric, variance, dof, alpha=0.10)

        t_stat = metric / 0.7
        assert result.t_statistic == pytest.approx(t_stat)
        assert result.p_value == pytest.approx(2 * (1 - stats.t.cdf(t_stat, dof)))

        width = stats.t.ppf(0.95, dof) * 0.7
        assert result.ci_lower == pytest.approx(metric - width)
        assert result.ci_upper == pytest.approx(metric + width)

    def test_negative_metric_symmetry(self):
        """Test that flipping the sign of the metric keeps the p-value."""
        pos = frequentist.t_test(metric=0.3, variance=0.02, dof=40)
        neg = frequentist.t_test(metric=-0.3, variance=0.02, dof=40)

        assert pos.p_value == pytest.approx(neg.p_value)
        assert neg.t_statistic < 0
        assert neg.ci_upper == pytest.approx(-pos.ci_lower)

    def test_large_dof_approaches_normal(self):
        """Test that with huge dof the t-test behaves like a z-test."""
        result = frequentist.t_test(metric=1.96, variance=1.0, dof=1e7)

        assert result.p_value == pytest.approx(0.05, abs=1e-4)
        assert result.ci_lower == pytest.approx(0.0, abs=1e-3)

    @pytest.mark.parametrize("metric,variance", [
        (0.0, 1.0),
        (0.5, 0.01),
        (-2.0, 3.0),
        (1e-4, 1e-9),
    ])
    def test_ci_contains_metric(self, metric, variance):
        """Test that the point estimate lies strictly inside the CI."""
        result = frequentist.t_test(metric, variance, dof=25)

        assert result.ci_lower < result.metric < result.ci_upper
        assert 0.0 <= result.p_value <= 1.0

    def test_zero_variance_collapses_ci(self):
        """Test that zero variance collapses the CI onto the metric."""
        result = frequentist.t_test(metric=0.2, variance=0.0, dof=10)

        assert result.ci_lower == result.ci_upper == 0.2
        assert math.isinf(result.t_statistic)
        assert result.p_value == 0.0

        zero = frequentist.t_test(metric=0.0, variance=0.0, dof=10)
        assert zero.ci_lower == zero.ci_upper == 0.0
        assert zero.p_value == 1.0

    def test_tiny_p_value_not_rounded_to_zero(self):
        """Test precision in the far tail."""
        result = frequentist.t_test(metric=10.0, variance=1.0, dof=1e6)

        assert 0.0 < result.p_value < 1e-20

    def test_wider_ci_for_smaller_alpha(self):
        """Test that a 99% CI is wider than a 95% CI."""
        r95 = frequentist.t_test(0.5, 0.04, dof=20, alpha=0.05)
        r99 = frequentist.t_test(0.5, 0.04, dof=20, alpha=0.01)

        assert r99.ci_width > r95.ci_width
        assert r99.p_value == pytest.approx(r95.p_value)

    def test_to_dict(self):
        """Test dictionary export includes significance flag."""
        result = frequentist.t_test(metric=1.0, variance=0.01, dof=50)
        d = result.to_dict()

        assert d['p_value'] == result.p_value
        assert d['significant'] is True
        assert set(d) >= {'metric', 'variance', 't_statistic', 'ci_lower', 'ci_upper', 'dof', 'alpha'}

    def test_invalid_inputs(self):
        """Test error handling for invalid inputs."""
        with pytest.raises(NegativeVarianceError, match="must be non-negative"):
            frequentist.t_test(metric=0.1, variance=-0.01, dof=10)

        with pytest.raises(DomainError, match="must be positive"):
            frequentist.t_test(metric=0.1, variance=0.01, dof=0)

        with pytest.raises(DomainError, match="must be positive"):
            frequentist.t_test(metric=0.1, variance=0.01, dof=float('nan'))

        with pytest.raises(ValueError, match="alpha must be between 0 and 1"):
            frequentist.t_test(metric=0.1, variance=0.01, dof=10, alpha=1.5)

    def test_domain_errors_are_value_errors(self):
        """Test that callers catching ValueError still see domain errors."""
        with pytest.raises(ValueError):
            frequentist.t_test(metric=0.1, variance=-1.0, dof=10)
