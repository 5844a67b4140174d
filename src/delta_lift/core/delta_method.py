"""
Relative Lift and the Delta Method
==================================

Testing a relative lift (treatment / control - 1) is not the same as testing
the absolute difference scaled by the baseline. The control mean in the
denominator is itself a random variable, so its noise has to be carried into
the variance of the ratio.

The Delta Method gives the first-order approximation:

    Var(Ȳ/X̄) ≈ (μ_Y²/μ_X²) [Var(Ȳ)/μ_Y² - 2 Cov(X̄,Ȳ)/(μ_X μ_Y) + Var(X̄)/μ_X²]

For an A/B test the groups are independent (Cov = 0), Y is the treatment
mean and X the control mean, which simplifies to:

    Var(Ȳ/X̄ - 1) ≈ s2²/(μ1² n2) + s1² μ2²/(μ1⁴ n1)

Reference:
----------
- Deng et al. (2018): "Applying the Delta Method in Metric Analytics"
- Kohavi et al. (2020): "Trustworthy Online Controlled Experiments"

Example Usage:
--------------
>>> from delta_lift.core import delta_method
>>> from delta_lift.core.scenario import ExperimentScenario
>>>
>>> scenario = ExperimentScenario(n1=46_000, n2=46_700, mu1=0.33, lift=0.013,
...                               var1=0.33**2, var2=0.34**2)
>>> result = delta_method.compare_scenario(scenario, alpha=0.05)
>>> print(f"Absolute p-value: {result.absolute.p_value:.4f}")
>>> print(f"Relative p-value: {result.relative.p_value:.4f}")
"""

from dataclasses import dataclass
from typing import Dict

import numpy as np

from delta_lift.core.errors import InvalidSampleSizeError, ZeroBaselineError
from delta_lift.core.frequentist import TestResult, t_test, welch_satterthwaite_dof
from delta_lift.core.scenario import ExperimentScenario


@dataclass(frozen=True)
class ComparisonResult:
    """Absolute and relative tests for one scenario, sharing one dof."""
    absolute: TestResult
    relative: TestResult
    dof: float
    mu1: float
    mu2: float
    unadjusted_var: float
    adjusted_var: float

    def to_dict(self) -> Dict[str, float]:
        result = {
            'dof': self.dof,
            'mu1': self.mu1,
            'mu2': self.mu2,
            'unadjusted_var': self.unadjusted_var,
            'adjusted_var': self.adjusted_var,
        }
        for prefix, test in (('absolute', self.absolute), ('relative', self.relative)):
            for key, value in test.to_dict().items():
                if key not in ('dof', 'alpha'):
                    result[f'{prefix}_{key}'] = value
        return result


def ratio_variance(
    mu_x: float,
    mu_y: float,
    var_x: float,
    var_y: float,
    cov_xy: float = 0.0,
) -> float:
    """
    Delta Method variance of the ratio of two sample means, Ȳ / X̄.

    Parameters
    ----------
    mu_x : float
        Mean of the denominator
    mu_y : float
        Mean of the numerator
    var_x : float
        Variance of the denominator mean (already divided by n)
    var_y : float
        Variance of the numerator mean (already divided by n)
    cov_xy : float, default=0.0
        Covariance of the two means; zero for independent groups

    Returns
    -------
    float
        Approximate variance of Ȳ / X̄

    Notes
    -----
    Written without dividing by μ_Y so that a zero numerator mean is allowed:
    Var ≈ Var(Y)/μ_X² - 2 μ_Y Cov(X,Y)/μ_X³ + μ_Y² Var(X)/μ_X⁴
    """
    if mu_x == 0:
        raise ZeroBaselineError("Denominator mean must be non-zero")

    return (
        var_y / mu_x**2
        - 2 * mu_y * cov_xy / mu_x**3
        + mu_y**2 * var_x / mu_x**4
    )


def relative_difference_variance(
    mu1: float,
    mu2: float,
    var1: float,
    n1: int,
    var2: float,
    n2: int,
) -> float:
    """
    Delta-Method variance of the relative difference ``mu2 / mu1 - 1``.

    Parameters
    ----------
    mu1, mu2 : float
        Control and treatment means
    var1, var2 : float
        Control and treatment sample variances (per observation)
    n1, n2 : int
        Control and treatment sample sizes

    Returns
    -------
    float
        s2²/(μ1² n2) + s1² μ2²/(μ1⁴ n1)
    """
    if n1 <= 1 or n2 <= 1:
        raise InvalidSampleSizeError(
            f"Sample sizes must be greater than 1, got n1={n1}, n2={n2}"
        )
    # Subtracting the constant 1 leaves the variance unchanged
    return ratio_variance(mu_x=mu1, mu_y=mu2, var_x=var1 / n1, var_y=var2 / n2)


def naive_relative_variance(
    mu1: float,
    var1: float,
    n1: int,
    var2: float,
    n2: int,
) -> float:
    """
    Variance of the relative difference when the baseline is treated as fixed.

    This is the absolute-difference variance divided by μ1². It ignores the
    sampling noise of the control mean in the denominator and therefore
    understates the variance for positive lifts.
    """
    if mu1 == 0:
        raise ZeroBaselineError("Control mean mu1 must be non-zero")
    return (var1 / n1 + var2 / n2) / mu1**2


def delta_method_variance(
    numerator: np.ndarray,
    denominator: np.ndarray,
) -> float:
    """
    Delta Method variance of a ratio-of-means metric from unit-level data.

    Use this when numerator and denominator are measured on the same units
    (e.g. clicks and impressions per user), so their covariance matters.

    Parameters
    ----------
    numerator : np.ndarray
        Numerator values per unit (e.g. clicks)
    denominator : np.ndarray
        Denominator values per unit (e.g. impressions)

    Returns
    -------
    float
        Variance of sum(numerator) / sum(denominator)

    Example
    -------
    >>> clicks = np.random.binomial(100, 0.05, 1000)
    >>> impressions = np.full(1000, 100)
    >>> var_ctr = delta_method_variance(clicks, impressions)
    """
    numerator = np.asarray(numerator, dtype=float)
    denominator = np.asarray(denominator, dtype=float)
    if len(numerator) != len(denominator):
        raise ValueError("Numerator and denominator must have same length")
    n = len(numerator)
    if n < 2:
        raise InvalidSampleSizeError("Need at least 2 observations")

    cov = np.cov(numerator, denominator, ddof=1)

    return float(ratio_variance(
        mu_x=denominator.mean(),
        mu_y=numerator.mean(),
        var_x=cov[1, 1] / n,
        var_y=cov[0, 0] / n,
        cov_xy=cov[0, 1] / n,
    ))


def compare_scenario(
    scenario: ExperimentScenario,
    alpha: float = 0.05,
) -> ComparisonResult:
    """
    Test a scenario's absolute difference and its relative lift.

    Parameters
    ----------
    scenario : ExperimentScenario
        Sample sizes, baseline, lift and (optional) variances
    alpha : float, default=0.05
        Significance level shared by both tests

    Returns
    -------
    ComparisonResult
        - absolute: t-test of mu2 - mu1 with unadjusted variance
        - relative: t-test of mu2 / mu1 - 1 with Delta-Method variance
        Both use the Welch-Satterthwaite dof of the scenario.

    Notes
    -----
    For a positive lift the relative test is always at least as conservative
    as the absolute one, since the control mean's noise grows with mu2².

    Example
    -------
    >>> scenario = ExperimentScenario(n1=700_000, n2=710_000, mu1=0.002, lift=0.07)
    >>> result = compare_scenario(scenario)
    >>> print(f"Relative lift CI: ({result.relative.ci_lower:.3f}, {result.relative.ci_upper:.3f})")
    """
    n1, n2 = scenario.n1, scenario.n2
    mu1 = scenario.mu1
    mu2 = scenario.mu2
    var1, var2 = scenario.resolved_variances()

    dof = welch_satterthwaite_dof(var1, n1, var2, n2)

    unadjusted_var = var1 / n1 + var2 / n2
    adjusted_var = relative_difference_variance(mu1, mu2, var1, n1, var2, n2)

    absolute = t_test(mu2 - mu1, unadjusted_var, dof, alpha=alpha)
    relative = t_test(mu2 / mu1 - 1, adjusted_var, dof, alpha=alpha)

    return ComparisonResult(
        absolute=absolute,
        relative=relative,
        dof=dof,
        mu1=mu1,
        mu2=mu2,
        unadjusted_var=unadjusted_var,
        adjusted_var=adjusted_var,
    )
