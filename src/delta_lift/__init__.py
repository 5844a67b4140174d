"""
delta_lift - Relative Lift Testing with the Delta Method
========================================================

Compares two ways of testing an A/B experiment on summary statistics:

- the absolute difference of means, with the usual unadjusted variance
- the relative difference (lift), with a Delta-Method-adjusted variance

Both use Welch's t-test with Welch-Satterthwaite degrees of freedom, and can
be swept over hypothetical lifts to see where each becomes significant.

Modules:
--------
- core: Scenarios, t-tests and Delta Method variances
- sweep: Lift sweeps over named scenario templates
- reporting: p-value vs lift charts (matplotlib, imported on first use)

Example Usage:
--------------
>>> from delta_lift.core.scenario import ExperimentScenario
>>> from delta_lift.core.delta_method import compare_scenario
>>>
>>> scenario = ExperimentScenario(n1=700_000, n2=710_000, mu1=0.002, lift=0.07)
>>> result = compare_scenario(scenario, alpha=0.05)
>>> print(f"Absolute p={result.absolute.p_value:.4f}")
>>> print(f"Relative p={result.relative.p_value:.4f}")

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
__license__ = "MIT"

from delta_lift.core import delta_method, errors, frequentist, scenario
from delta_lift.sweep import runner, scenarios

__all__ = [
    "delta_method",
    "errors",
    "frequentist",
    "scenario",
    "runner",
    "scenarios",
    "reporting",
]


def __getattr__(name: str):
    """
    Import the reporting subpackage on first access.

    Keeps matplotlib out of the import path for callers that only need
    the statistics.
    """
    if name == 'reporting':
        import importlib
        return importlib.import_module('delta_lift.reporting')
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
