"""
Run Lift Sweeps

Sweeps each named scenario over its lift grid, prints the absolute and
relative p-values side by side and saves a p-value vs lift chart per scenario.

Usage:
    # Run all scenarios
    uv run python run_sweeps.py

    # Run one scenario
    uv run python run_sweeps.py --scenario low_baseline

    # Different significance level and output folder
    uv run python run_sweeps.py --alpha 0.10 --output-dir charts

    # Run quietly
    uv run python run_sweeps.py --quiet
"""

import argparse
import sys
from pathlib import Path
from typing import Dict

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend, charts are written to files
import matplotlib.pyplot as plt

from delta_lift.reporting.plots import plot_sweep
from delta_lift.sweep import scenarios
from delta_lift.sweep.runner import SweepResult, print_sweep_summary, sweep_lifts


def run_scenario(
    name: str,
    alpha: float = 0.05,
    output_dir: Path = Path('.'),
    verbose: bool = True,
) -> SweepResult:
    """Sweep one named scenario and save its chart."""
    template = scenarios.get_scenario(name)
    lifts = scenarios.get_lift_grid(name)

    result = sweep_lifts(lifts, template, alpha=alpha)

    output_dir.mkdir(parents=True, exist_ok=True)
    save_path = output_dir / f'p_values_{name}.png'
    fig = plot_sweep(
        result,
        title=f'{name.replace("_", " ").title()}: p-value vs lift',
        save_path=save_path,
    )
    plt.close(fig)

    if verbose:
        print_sweep_summary(result, name=name)
        print(f"✓ Chart saved as '{save_path}'\n")

    return result


def run_all_scenarios(
    alpha: float = 0.05,
    output_dir: Path = Path('.'),
    verbose: bool = True,
) -> Dict[str, SweepResult]:
    """Run every named scenario, continuing past failures."""
    results = {}

    for i, name in enumerate(scenarios.SCENARIOS, start=1):
        try:
            if verbose:
                print("\n" + "█"*70)
                print(f"SCENARIO {i}/{len(scenarios.SCENARIOS)}: {name.upper()}")
                print("█"*70 + "\n")

            results[name] = run_scenario(name, alpha=alpha, output_dir=output_dir, verbose=verbose)
        except Exception as e:
            print(f"\n✗ Scenario '{name}' failed: {e}\n")
            if not verbose:
                raise

    return results


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Compare absolute and Delta Method relative tests across lifts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_sweeps.py
  python run_sweeps.py --scenario explicit_variance
  python run_sweeps.py --alpha 0.10 --output-dir charts
        """
    )

    parser.add_argument(
        '--scenario',
        choices=['all'] + list(scenarios.SCENARIOS),
        default='all',
        help='Which scenario to sweep (default: all)'
    )

    parser.add_argument(
        '--alpha',
        type=float,
        default=0.05,
        help='Significance level (default: 0.05)'
    )

    parser.add_argument(
        '--output-dir',
        type=Path,
        default=Path('.'),
        help='Folder for the PNG charts (default: current directory)'
    )

    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress verbose output'
    )

    args = parser.parse_args()

    verbose = not args.quiet

    try:
        if args.scenario == 'all':
            run_all_scenarios(alpha=args.alpha, output_dir=args.output_dir, verbose=verbose)
        else:
            run_scenario(args.scenario, alpha=args.alpha, output_dir=args.output_dir, verbose=verbose)
        return 0

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        if verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
