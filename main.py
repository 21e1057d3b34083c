#!/usr/bin/env python3
"""
Hybrid Constrained Monte Carlo Sweep - Main Entry Point

This is the CLI for the constraint-angle / temperature sweep.
It provides options for:
- Printing the sweep plan
- Running the sweep against an engine
- Visualization of recorded results
- Showing the default configuration

Usage:
    python main.py --plan --config-file run.yaml
    python main.py --run --config-file run.yaml --engine mypackage.engine:build_engine
    python main.py --visualize --csv results.csv --observable mean_magnetisation
"""

import argparse
import os
import sys

# Ensure project root is in path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import DEFAULT_ENGINE, OUTPUT_DIR, PLOTS_DIR, RESULTS_CSV


def load_configuration(args):
    """Run configuration from --config-file, or the defaults."""
    from core.config_loader import load_run_configuration
    from simulation.context import RunConfiguration

    if args.config_file:
        return load_run_configuration(args.config_file)
    return RunConfiguration()


def show_plan(args):
    """Print the points a sweep will visit."""
    from simulation.parameter_sweep import ParameterSweep

    config = load_configuration(args)
    summary = ParameterSweep(config).describe()

    print("=" * 60)
    print("SWEEP PLAN")
    print("=" * 60)

    print(f"\nMaterials: {summary['num_materials']}")
    for mat in range(summary['num_materials']):
        thetas = summary['thetas'][mat]
        phis = summary['phis'][mat]
        print(f"  Material {mat}:")
        print(f"    Theta ({len(thetas)}): {', '.join(f'{t:g}' for t in thetas)}")
        print(f"    Phi ({len(phis)}): {', '.join(f'{p:g}' for p in phis)}")

    temps = summary['temperatures']
    print(f"\nTemperatures ({len(temps)}): {', '.join(f'{t:g}' for t in temps)}")

    print(f"\nCost:")
    print(f"  Constraint reinitializations: {summary['reinitializations']}")
    print(f"  Output points: {summary['total_points']}")
    print(f"  Statistics updates per point: {summary['sampling_calls_per_point']}")
    print(f"  Steps per point: {summary['steps_per_point']}")
    print(f"  Total integration steps: {summary['total_integration_steps']}")

    return summary


def run_sweep(args):
    """Run the sweep against the selected engine."""
    from simulation.runner import SweepRunner, load_engine
    from simulation.context import IntegratorKind
    from core.utils.logger import LogLevel

    config = load_configuration(args)
    engine = load_engine(args.engine, config)

    runner = SweepRunner(
        config,
        engine=engine,
        output_file=args.output or RESULTS_CSV,
        show_progress=not args.no_progress,
        log_level=LogLevel.INFO if args.verbose else LogLevel.WARNING
    )

    print("=" * 60)
    print("HYBRID CMC SWEEP")
    print("=" * 60)
    print(f"\nConfiguration:")
    print(f"  Engine: {args.engine}")
    print(f"  Integrator: {IntegratorKind(config.integrator_kind).label}")
    print(f"  Materials: {config.num_materials}")
    print(f"  Temperature: {config.Tmin:g}..{config.Tmax:g} K step {config.delta_temperature:g}")
    print(f"  Times: equilibration={config.equilibration_time} "
          f"loop={config.loop_time} partial={config.partial_time}")
    print(f"  Points: {runner.sweep.total_points}")

    print("\nRunning sweep...")
    results = runner.run()

    print("\n" + "=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(f"  Points emitted: {results['points']}")
    print(f"  Final simulated time: {results['final_time']}")
    print(f"  Real time: {results['real_time']:.2f} s")
    if results['output_file']:
        print(f"  Results saved to: {results['output_file']}")

    return results


def generate_visualizations(args):
    """Generate heatmap from recorded results."""
    from visualization.heatmap import ObservableHeatmap

    print("=" * 60)
    print("GENERATING VISUALIZATIONS")
    print("=" * 60)

    csv_file = args.csv or RESULTS_CSV

    if not os.path.exists(csv_file):
        print(f"Error: Results file not found: {csv_file}")
        print("Run a sweep first: python main.py --run")
        return None

    heatmap = ObservableHeatmap(csv_file=csv_file)
    print(f"Loaded {len(heatmap.data)} points from {csv_file}")

    observable = args.observable
    if observable is None:
        if not heatmap.observables:
            print("Error: No observables recorded in results")
            return None
        observable = heatmap.observables[0]

    os.makedirs(PLOTS_DIR, exist_ok=True)
    output = heatmap.plot(
        observable,
        material=args.material,
        output_file=os.path.join(PLOTS_DIR, f'{observable}_material{args.material}_heatmap.png')
    )
    print(f"Heatmap saved to: {output}")
    return output


def show_config(args):
    """Display default configuration."""
    import config as cfg

    print("=" * 60)
    print("DEFAULT CONFIGURATION")
    print("=" * 60)

    print(f"\nTemperature:")
    print(f"  Tmin: {cfg.TEMPERATURE_MIN} K")
    print(f"  Tmax: {cfg.TEMPERATURE_MAX} K")
    print(f"  Delta: {cfg.DELTA_TEMPERATURE} K")

    print(f"\nTimes (steps):")
    print(f"  Equilibration: {cfg.EQUILIBRATION_TIME}")
    print(f"  Loop: {cfg.LOOP_TIME}")
    print(f"  Partial: {cfg.PARTIAL_TIME}")
    print(f"  Steps per temperature: {cfg.calculate_steps_per_point()}")

    print(f"\nDefault constraint (deg):")
    print(f"  Theta: {cfg.CONSTRAINT_THETA_MIN}..{cfg.CONSTRAINT_THETA_MAX} step {cfg.CONSTRAINT_THETA_DELTA}")
    print(f"  Phi: {cfg.CONSTRAINT_PHI_MIN}..{cfg.CONSTRAINT_PHI_MAX} step {cfg.CONSTRAINT_PHI_DELTA}")

    print(f"\nOutput:")
    print(f"  Directory: {OUTPUT_DIR}")
    print(f"  Results: {RESULTS_CSV}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Hybrid Constrained Monte Carlo constraint/temperature sweep",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Show the sweep plan:
    python main.py --plan --config-file run.yaml

  Dry run (no physics, checks points and timing):
    python main.py --run --config-file run.yaml

  Run with an engine:
    python main.py --run --config-file run.yaml --engine mypackage.engine:build_engine

  Generate visualizations:
    python main.py --visualize --observable mean_magnetisation

  Show configuration:
    python main.py --config
        """
    )

    # Mode selection
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument('--plan', action='store_true',
                      help='Print the sweep plan')
    mode.add_argument('--run', action='store_true',
                      help='Run the sweep')
    mode.add_argument('--visualize', action='store_true',
                      help='Generate visualizations')
    mode.add_argument('--config', action='store_true',
                      help='Show default configuration')

    # Run options
    parser.add_argument('--config-file', '-c', type=str,
                        help='YAML run configuration')
    parser.add_argument('--engine', '-e', type=str, default=DEFAULT_ENGINE,
                        help=f'Engine factory as module:function (default: {DEFAULT_ENGINE})')
    parser.add_argument('--no-progress', action='store_true',
                        help='Hide the progress bar')

    # Output options
    parser.add_argument('--output', '-o', type=str,
                        help='Output CSV path')
    parser.add_argument('--csv', type=str,
                        help='CSV file for visualization')
    parser.add_argument('--observable', type=str, default=None,
                        help='Observable to plot (default: first recorded)')
    parser.add_argument('--material', '-m', type=int, default=0,
                        help='Material to plot (default: 0)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Verbose output')

    args = parser.parse_args(argv)

    if args.plan:
        show_plan(args)
    elif args.run:
        run_sweep(args)
    elif args.visualize:
        generate_visualizations(args)
    elif args.config:
        show_config(args)


if __name__ == "__main__":
    main()
