"""
P-value vs lift charts.

Rendering is kept separate from the statistics: these helpers only take
already computed ``(x, y, label)`` series and a significance threshold.
"""

from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.ticker import PercentFormatter

from delta_lift.sweep.runner import SweepResult


Series = Tuple[Sequence[float], Sequence[float], str]


def plot_p_values(
    series: Iterable[Series],
    alpha: float = 0.05,
    ax: Optional[Axes] = None,
    title: Optional[str] = None,
) -> Figure:
    """
    Plot p-value curves against lift with a horizontal line at ``alpha``.

    Parameters
    ----------
    series : iterable of (x, y, label)
        Lift values, p-values and legend label for each test type
    alpha : float, default=0.05
        Significance threshold drawn as a reference line
    ax : matplotlib Axes, optional
        Axes to draw on; a new figure is created when omitted
    title : str, optional
        Axes title

    Returns
    -------
    Figure
        The figure containing the axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 6))
    else:
        fig = ax.figure

    for x, y, label in series:
        if len(x) != len(y):
            raise ValueError(f"Series '{label}' has {len(x)} x values but {len(y)} y values")
        ax.plot(x, y, marker='o', linewidth=2, label=label)

    ax.axhline(y=alpha, color='red', linestyle='--', alpha=0.7, label=f'α={alpha}')

    ax.xaxis.set_major_formatter(PercentFormatter(xmax=1.0))
    ax.set_xlabel('Lift')
    ax.set_ylabel('p-value')
    ax.set_ylim(bottom=0)
    if title:
        ax.set_title(title, fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)
    ax.legend()

    return fig


def plot_sweep(
    result: SweepResult,
    ax: Optional[Axes] = None,
    title: Optional[str] = None,
    save_path: Optional[Union[str, Path]] = None,
) -> Figure:
    """Plot both p-value series of a sweep, optionally saving to ``save_path``."""
    fig = plot_p_values(result.series(), alpha=result.alpha, ax=ax, title=title)

    if save_path is not None:
        fig.tight_layout()
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig
