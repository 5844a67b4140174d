"""
Experiment Scenarios
====================

Summary statistics describing one hypothetical A/B experiment.

A scenario is parameterised by the control mean and a relative lift, so the
treatment mean is always derived as ``mu2 = mu1 * (1 + lift)``. Variances can
be given explicitly; when they are omitted they follow the binomial
assumption ``var = mu * (1 - mu)``, which only makes sense for proportions.

Example Usage:
--------------
>>> from delta_lift.core.scenario import ExperimentScenario
>>>
>>> # Conversion rate of 0.2% with a hypothetical 7% lift
>>> scenario = ExperimentScenario(n1=700_000, n2=710_000, mu1=0.002, lift=0.07)
>>> print(f"{scenario.mu2:.5f}")
0.00214
>>> var1, var2 = scenario.resolved_variances()
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

import numpy as np

from delta_lift.core.errors import (
    InvalidProportionError,
    InvalidSampleSizeError,
    ZeroBaselineError,
)


def binomial_variance(mu: float) -> float:
    """
    Variance of a single Bernoulli observation with success rate ``mu``.

    Raises
    ------
    InvalidProportionError
        If ``mu`` is not a proportion.
    """
    if not 0 <= mu <= 1:
        raise InvalidProportionError(
            f"Binomial variance requires a mean in [0, 1], got {mu}"
        )
    return mu * (1 - mu)


@dataclass(frozen=True)
class ExperimentScenario:
    """
    Sample sizes, baseline mean and lift for a two-group experiment.

    Parameters
    ----------
    n1 : int
        Control group sample size (must be > 1)
    n2 : int
        Treatment group sample size (must be > 1)
    mu1 : float
        Control group mean (must be non-zero)
    lift : float, default=0.0
        Relative change of the treatment mean, e.g. 0.07 for +7%
    var1 : float, optional
        Control group variance. Binomial default when omitted.
    var2 : float, optional
        Treatment group variance. Binomial default when omitted.

    Notes
    -----
    Explicit variances are not checked for sign here; a negative value is
    reported by the t-test that would take its square root.
    """
    n1: int
    n2: int
    mu1: float
    lift: float = 0.0
    var1: Optional[float] = None
    var2: Optional[float] = None

    def __post_init__(self):
        if self.n1 <= 1 or self.n2 <= 1:
            raise InvalidSampleSizeError(
                f"Sample sizes must be greater than 1, got n1={self.n1}, n2={self.n2}"
            )
        if self.mu1 == 0:
            raise ZeroBaselineError("Control mean mu1 must be non-zero")
        # Derived binomial variances need proportions
        self.resolved_variances()

    @property
    def mu2(self) -> float:
        """Treatment mean implied by the baseline and the lift."""
        return self.mu1 * (1 + self.lift)

    def resolved_variances(self) -> Tuple[float, float]:
        """
        Return ``(var1, var2)``, deriving missing values from the binomial model.

        Returns
        -------
        tuple of float
            Control and treatment variances
        """
        var1 = self.var1 if self.var1 is not None else binomial_variance(self.mu1)
        var2 = self.var2 if self.var2 is not None else binomial_variance(self.mu2)
        return var1, var2

    def with_lift(self, lift: float) -> "ExperimentScenario":
        """Copy of this scenario with a different lift."""
        return replace(self, lift=lift)

    @classmethod
    def from_samples(
        cls,
        control: np.ndarray,
        treatment: np.ndarray,
    ) -> "ExperimentScenario":
        """
        Summarise raw observations into a scenario.

        Means and unbiased (ddof=1) variances are taken from the arrays and
        the lift is the observed relative difference of the means.

        Parameters
        ----------
        control : np.ndarray
            Observations from control group
        treatment : np.ndarray
            Observations from treatment group

        Returns
        -------
        ExperimentScenario
            Scenario with explicit variances

        Example
        -------
        >>> rng = np.random.default_rng(0)
        >>> control = rng.binomial(1, 0.10, 5000)
        >>> treatment = rng.binomial(1, 0.11, 5000)
        >>> scenario = ExperimentScenario.from_samples(control, treatment)
        """
        control = np.asarray(control, dtype=float)
        treatment = np.asarray(treatment, dtype=float)
        if len(control) < 2 or len(treatment) < 2:
            raise InvalidSampleSizeError("Each group must have at least 2 observations")

        mean_c = control.mean()
        mean_t = treatment.mean()
        if mean_c == 0:
            raise ZeroBaselineError("Control mean mu1 must be non-zero")

        return cls(
            n1=len(control),
            n2=len(treatment),
            mu1=float(mean_c),
            lift=float(mean_t / mean_c - 1),
            var1=float(control.var(ddof=1)),
            var2=float(treatment.var(ddof=1)),
        )
