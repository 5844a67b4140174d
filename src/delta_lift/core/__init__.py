"""Core statistical methods: scenarios, t-tests and the Delta Method."""

from delta_lift.core import errors, scenario, frequentist, delta_method

__all__ = ["errors", "scenario", "frequentist", "delta_method"]
