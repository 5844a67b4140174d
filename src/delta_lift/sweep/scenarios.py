"""
Named scenario templates used in the walkthrough.

Each template fixes sample sizes, baseline and (optionally) variances; the
lift is filled in by the sweep.
"""

from typing import Dict, List

import numpy as np

from delta_lift.core.scenario import ExperimentScenario


# Low conversion rate with binomial variances, large traffic
LOW_BASELINE = ExperimentScenario(n1=700_000, n2=710_000, mu1=0.002)

# Continuous-ish metric with explicit (unequal) variances
EXPLICIT_VARIANCE = ExperimentScenario(
    n1=46_000,
    n2=46_700,
    mu1=0.33,
    var1=0.33**2,
    var2=0.34**2,
)

SCENARIOS: Dict[str, ExperimentScenario] = {
    'low_baseline': LOW_BASELINE,
    'explicit_variance': EXPLICIT_VARIANCE,
}

LIFT_GRIDS: Dict[str, List[float]] = {
    'low_baseline': [float(round(x, 3)) for x in np.arange(0.01, 0.151, 0.01)],
    'explicit_variance': [float(round(x, 4)) for x in np.arange(0.002, 0.0301, 0.002)],
}


def get_scenario(name: str) -> ExperimentScenario:
    """Look up a named template."""
    try:
        return SCENARIOS[name]
    except KeyError:
        raise KeyError(
            f"Unknown scenario '{name}'. Available: {sorted(SCENARIOS)}"
        ) from None


def get_lift_grid(name: str) -> List[float]:
    """Default lift values to sweep for a named template."""
    try:
        return list(LIFT_GRIDS[name])
    except KeyError:
        raise KeyError(
            f"Unknown scenario '{name}'. Available: {sorted(LIFT_GRIDS)}"
        ) from None
