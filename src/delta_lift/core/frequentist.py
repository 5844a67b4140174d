"""
Frequentist T-Tests on Summary Statistics
=========================================

Student's t test for a single point estimate with a known variance estimate,
and the Welch-Satterthwaite approximation of its degrees of freedom.

The point estimate can be anything with an approximately normal sampling
distribution: an absolute difference of means, or a relative difference whose
variance comes from the Delta Method (see ``delta_lift.core.delta_method``).

Example Usage:
--------------
>>> from delta_lift.core import frequentist
>>>
>>> # Welch dof for two groups
>>> dof = frequentist.welch_satterthwaite_dof(
...     var1=0.001996, n1=700_000,
...     var2=0.002135, n2=710_000,
... )
>>>
>>> # Test an absolute difference of 0.00014
>>> result = frequentist.t_test(metric=0.00014, variance=5.86e-9, dof=dof)
>>> print(f"P-value: {result.p_value:.4f}")
>>> print(f"95% CI: ({result.ci_lower:.6f}, {result.ci_upper:.6f})")
"""

import math
from dataclasses import asdict, dataclass
from typing import Dict

from scipy import stats

from delta_lift.core.errors import (
    DegenerateVarianceError,
    InvalidSampleSizeError,
    NegativeVarianceError,
)


@dataclass(frozen=True)
class TestResult:
    """Container for a single t-test on a point estimate."""
    __test__ = False  # not a pytest test class

    metric: float
    variance: float
    t_statistic: float
    p_value: float
    ci_lower: float
    ci_upper: float
    dof: float
    alpha: float

    @property
    def significant(self) -> bool:
        return self.p_value < self.alpha

    @property
    def ci_width(self) -> float:
        """Half-width of the confidence interval."""
        return (self.ci_upper - self.ci_lower) / 2

    def to_dict(self) -> Dict[str, float]:
        result = asdict(self)
        result['significant'] = self.significant
        return result


def welch_satterthwaite_dof(
    var1: float,
    n1: int,
    var2: float,
    n2: int,
) -> float:
    """
    Welch-Satterthwaite degrees of freedom for two independent samples.

    Parameters
    ----------
    var1 : float
        Sample variance of group 1 (control)
    n1 : int
        Sample size of group 1
    var2 : float
        Sample variance of group 2 (treatment)
    n2 : int
        Sample size of group 2

    Returns
    -------
    float
        Effective degrees of freedom, never larger than ``n1 + n2 - 2``

    Notes
    -----
    Formula:
    dof = (s2²/n2 + s1²/n1)² / [(s2²/n2)²/(n2-1) + (s1²/n1)²/(n1-1)]

    With equal variances and equal sample sizes this reduces to the pooled
    ``n1 + n2 - 2``; unequal variances shrink it towards the smaller group.

    Example
    -------
    >>> dof = welch_satterthwaite_dof(var1=1.0, n1=50, var2=1.0, n2=50)
    >>> round(dof, 6)
    98.0
    """
    if n1 <= 1 or n2 <= 1:
        raise InvalidSampleSizeError(
            f"Sample sizes must be greater than 1, got n1={n1}, n2={n2}"
        )

    se1 = var1 / n1
    se2 = var2 / n2
    denominator = se2**2 / (n2 - 1) + se1**2 / (n1 - 1)
    if denominator == 0:
        raise DegenerateVarianceError(
            "Degrees of freedom undefined when both group variances are zero"
        )

    return (se2 + se1)**2 / denominator


def t_test(
    metric: float,
    variance: float,
    dof: float,
    alpha: float = 0.05,
) -> TestResult:
    """
    Two-sided t-test of H0: metric = 0 given the variance of the estimate.

    Parameters
    ----------
    metric : float
        Point estimate (e.g. treatment minus control)
    variance : float
        Variance of the point estimate (squared standard error)
    dof : float
        Degrees of freedom; non-integer values are allowed
    alpha : float, default=0.05
        Significance level; the CI covers 1 - alpha

    Returns
    -------
    TestResult
        t statistic, two-sided p-value and confidence interval

    Notes
    -----
    - p-value = 2 * (1 - F_t(|t|, dof)), computed through the survival
      function so very small p-values do not round to zero
    - A zero variance collapses the CI onto the metric; the p-value is then
      1 for a zero metric and 0 otherwise

    Example
    -------
    >>> result = t_test(metric=0.07, variance=0.0016, dof=1.4e6)
    >>> print(f"t={result.t_statistic:.2f}, p={result.p_value:.4f}")
    """
    if variance < 0:
        raise NegativeVarianceError(f"Variance must be non-negative, got {variance}")
    if not (dof > 0 and math.isfinite(dof)):
        raise DegenerateVarianceError(f"Degrees of freedom must be positive, got {dof}")
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be between 0 and 1, got {alpha}")

    se = math.sqrt(variance)

    if se == 0:
        t_stat = 0.0 if metric == 0 else math.copysign(math.inf, metric)
    else:
        t_stat = metric / se

    p_value = float(2 * stats.t.sf(abs(t_stat), dof))
    p_value = min(p_value, 1.0)

    t_critical = float(stats.t.ppf(1 - alpha / 2, dof))
    width = t_critical * se

    return TestResult(
        metric=float(metric),
        variance=float(variance),
        t_statistic=float(t_stat),
        p_value=p_value,
        ci_lower=float(metric - width),
        ci_upper=float(metric + width),
        dof=float(dof),
        alpha=float(alpha),
    )
