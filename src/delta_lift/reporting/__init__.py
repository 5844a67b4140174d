"""Charts for lift sweeps."""

from delta_lift.reporting import plots

__all__ = ["plots"]
