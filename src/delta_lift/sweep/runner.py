"""
Lift Sweeps
===========

Run the absolute and relative tests across a grid of hypothetical lifts for a
fixed scenario template, collecting p-values as two parallel series indexed
by lift.

Each lift is evaluated independently. A lift that makes the scenario invalid
(e.g. a binomial mean pushed above 1) is recorded as a failure and the sweep
carries on with the remaining values.

Example Usage:
--------------
>>> from delta_lift.sweep import runner, scenarios
>>>
>>> result = runner.sweep_lifts(
...     lifts=[0.01, 0.03, 0.05, 0.07],
...     template=scenarios.LOW_BASELINE,
...     alpha=0.05,
... )
>>> print(result.p_values[['absolute', 'relative']])
>>> for x, y, label in result.series():
...     print(label, list(y))
"""

import warnings
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import pandas as pd

from delta_lift.core.delta_method import compare_scenario
from delta_lift.core.errors import DomainError
from delta_lift.core.scenario import ExperimentScenario


SERIES_LABELS = {
    'absolute': 'Absolute difference (unadjusted variance)',
    'relative': 'Relative difference (Delta Method variance)',
}

_COLUMNS = [
    'absolute', 'relative',
    'absolute_metric', 'relative_metric',
    'absolute_ci_lower', 'absolute_ci_upper',
    'relative_ci_lower', 'relative_ci_upper',
    'dof',
]


@dataclass(frozen=True)
class SweepFailure:
    """A lift value whose scenario could not be evaluated."""
    index: int
    lift: float
    error: DomainError

    @property
    def reason(self) -> str:
        return f"{type(self.error).__name__}: {self.error}"


@dataclass
class SweepResult:
    """P-values per lift plus the lifts that failed."""
    p_values: pd.DataFrame
    alpha: float
    failures: List[SweepFailure] = field(default_factory=list)

    @property
    def absolute(self) -> pd.Series:
        return self.p_values['absolute']

    @property
    def relative(self) -> pd.Series:
        return self.p_values['relative']

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def series(self) -> List[Tuple[List[float], List[float], str]]:
        """``(x, y, label)`` tuples for the plotting helpers."""
        lifts = [float(x) for x in self.p_values.index]
        return [
            (lifts, [float(y) for y in self.p_values[column]], label)
            for column, label in SERIES_LABELS.items()
        ]


def sweep_lifts(
    lifts: Sequence[float],
    template: ExperimentScenario,
    alpha: float = 0.05,
    verbose: bool = False,
) -> SweepResult:
    """
    Compare absolute and relative tests for each lift in ``lifts``.

    Parameters
    ----------
    lifts : sequence of float
        Hypothetical relative lifts, evaluated in order
    template : ExperimentScenario
        Fixed sample sizes, baseline and variances; its own lift is ignored
    alpha : float, default=0.05
        Significance level for both tests
    verbose : bool, default=False
        Print one line per lift

    Returns
    -------
    SweepResult
        - p_values: DataFrame indexed by lift with 'absolute' and 'relative'
          p-value columns, the metrics, CI bounds and dof
        - failures: lifts whose scenario raised a DomainError

    Notes
    -----
    Errors other than DomainError (bad alpha, wrong types) are programming
    mistakes and propagate immediately.
    """
    rows = []
    index = []
    failures = []

    for i, lift in enumerate(lifts):
        try:
            comparison = compare_scenario(template.with_lift(lift), alpha=alpha)
        except DomainError as e:
            failure = SweepFailure(index=i, lift=lift, error=e)
            failures.append(failure)
            if verbose:
                print(f"✗ lift={lift:+.4f} (#{i}) failed: {failure.reason}")
            continue

        rows.append({
            'absolute': comparison.absolute.p_value,
            'relative': comparison.relative.p_value,
            'absolute_metric': comparison.absolute.metric,
            'relative_metric': comparison.relative.metric,
            'absolute_ci_lower': comparison.absolute.ci_lower,
            'absolute_ci_upper': comparison.absolute.ci_upper,
            'relative_ci_lower': comparison.relative.ci_lower,
            'relative_ci_upper': comparison.relative.ci_upper,
            'dof': comparison.dof,
        })
        index.append(lift)

        if verbose:
            print(
                f"✓ lift={lift:+.4f}  "
                f"p_abs={comparison.absolute.p_value:.4f}  "
                f"p_rel={comparison.relative.p_value:.4f}"
            )

    p_values = pd.DataFrame(rows, index=pd.Index(index, name='lift', dtype=float),
                            columns=_COLUMNS)

    if failures:
        warnings.warn(
            f"{len(failures)} of {len(lifts)} lift values could not be evaluated: "
            + ", ".join(f"lift={f.lift} ({f.reason})" for f in failures),
            RuntimeWarning,
            stacklevel=2,
        )

    return SweepResult(p_values=p_values, alpha=alpha, failures=failures)


def print_sweep_summary(result: SweepResult, name: str = "") -> None:
    """Print the p-value table with significance markers."""
    title = f"LIFT SWEEP: {name.upper()}" if name else "LIFT SWEEP"
    print("=" * 70)
    print(title)
    print("=" * 70)
    print(f"{'Lift':>10} {'p (absolute)':>15} {'p (relative)':>15}")
    print("-" * 70)

    for lift, row in result.p_values.iterrows():
        abs_mark = '✅' if row['absolute'] < result.alpha else '  '
        rel_mark = '✅' if row['relative'] < result.alpha else '  '
        print(f"{lift:>10.2%} {row['absolute']:>13.4f} {abs_mark} {row['relative']:>13.4f} {rel_mark}")

    if result.failures:
        print("-" * 70)
        for failure in result.failures:
            print(f"✗ #{failure.index} lift={failure.lift}: {failure.reason}")

    print(f"\nα = {result.alpha}  (✅ = significant)")
