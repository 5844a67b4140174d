"""Lift sweeps over named scenario templates."""

from delta_lift.sweep import runner, scenarios

__all__ = ["runner", "scenarios"]
