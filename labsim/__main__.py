"""
Command line runner for the pendulum and flywheel labs.

    python -m labsim pendulum --environment moon --lengths 0.5 0.8 1.1 1.4
    python -m labsim pendulum --manual --lengths 0.5 1.0 --times 28.4 40.1
    python -m labsim flywheel --model A --mass 50 --radius 1.0 --windings 5 --trials 5
"""

import argparse
import sys

import numpy as np

from labsim import constants
from labsim.errors import LabError
from labsim.logging_config import level_for_verbosity, setup_logging
from labsim.session import FlywheelSession, Mode, PendulumSession


def build_parser():
    parser = argparse.ArgumentParser(prog='labsim', description=__doc__.strip().splitlines()[0])
    parser.add_argument('--seed', type=int, default=None, help='seed for the simulated apparatus')
    parser.add_argument('--plot', default=None, help='save a figure to this path')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='-v for info, -vv for debug')
    parser.add_argument('--log-file', default=None, help='also write the log to this file')
    sub = parser.add_subparsers(dest='experiment', required=True)

    sp = sub.add_parser('pendulum', help='estimate g from L vs T²')
    sp.add_argument('--environment', default=constants.UNKNOWN,
                    choices=sorted(constants.ENVIRONMENTS) + [constants.UNKNOWN])
    sp.add_argument('--oscillations', type=int, default=constants.DEFAULT_OSCILLATIONS)
    sp.add_argument('--noise', type=float, default=constants.PENDULUM_NOISE)
    sp.add_argument('--lengths', type=float, nargs='+', required=True, help='lengths in m')
    sp.add_argument('--manual', action='store_true', help='use measured --times')
    sp.add_argument('--times', type=float, nargs='+', help='total times in s for N oscillations')

    fw = sub.add_parser('flywheel', help='estimate the moment of inertia')
    fw.add_argument('--model', default=constants.UNKNOWN,
                    choices=sorted(constants.FLYWHEEL_MODELS) + [constants.UNKNOWN])
    fw.add_argument('--noise', type=float, default=constants.FLYWHEEL_NOISE)
    fw.add_argument('--mass', type=float, nargs='+', required=True, help='mass in g')
    fw.add_argument('--radius', type=float, default=1.0, help='axle radius in cm')
    fw.add_argument('--windings', type=int, default=5)
    fw.add_argument('--trials', type=int, default=1, help='simulated trials per mass')
    fw.add_argument('--manual', action='store_true', help='use measured --times/--rotations')
    fw.add_argument('--times', type=float, nargs='+', help='fall times in s')
    fw.add_argument('--rotations', type=float, nargs='+', help='rotations after the fall')
    return parser


def notify(message):
    print(f"  ! {message}")


def run_pendulum(args, rng):
    mode = Mode.MANUAL if args.manual else Mode.SIMULATION
    session = PendulumSession(args.environment, args.oscillations, args.noise, rng, mode)

    if mode is Mode.MANUAL:
        if not args.times or len(args.times) != len(args.lengths):
            notify("--times must give one total time per length")
            return 1
        entries = zip(args.lengths, args.times)
    else:
        entries = ((length, None) for length in args.lengths)

    print("=" * 60)
    print(f"SIMPLE PENDULUM - {args.environment.upper()} ({mode.value})")
    print("=" * 60)

    for length, measured_time in entries:
        try:
            session.add_reading(length, measured_time)
        except LabError as exc:
            notify(exc)

    print(f"\n{'S.No':<6} {'L (m)':<10} {'t (s)':<10} {'T (s)':<10} {'T² (s²)':<10}")
    print("-" * 50)
    for r in session.readings:
        print(f"{r.sno:<6} {r.length:<10.2f} {r.measured_time:<10.2f} "
              f"{r.period:<10.3f} {r.period_squared:<10.3f}")

    fit = session.result()
    if fit is None:
        print("\nAdd at least two readings.")
        return 1

    print(f"\nGraph slope      : {fit['slope']:.4f}")
    if 'true_gravity' in fit:
        print(f"True g           : {fit['true_gravity']:.2f} m/s²")
    print(f"Calculated g     : {fit['gravity']:.2f} ± {fit['gravity_stderr']:.2f} m/s²")
    print(f"Correlation (R²) : {fit['r2']:.4f}")

    if args.plot:
        from labsim.reports.figures import plot_pendulum_fit
        print(f"\nPlot saved to {plot_pendulum_fit(session.readings, fit, args.plot)}")
    return 0


def run_flywheel(args, rng):
    mode = Mode.MANUAL if args.manual else Mode.SIMULATION
    session = FlywheelSession(args.model, args.noise, rng=rng, mode=mode)

    if mode is Mode.MANUAL:
        n = len(args.mass)
        if not args.times or not args.rotations or len(args.times) != n or len(args.rotations) != n:
            notify("--times and --rotations must give one value per mass")
            return 1
        trials = zip(args.mass, args.times, args.rotations)
    else:
        trials = ((m, None, None) for m in args.mass for _ in range(args.trials))

    print("=" * 60)
    print(f"FLYWHEEL - MODEL {args.model.upper()} ({mode.value})")
    print("=" * 60)

    for mass_g, fall_time, rotations in trials:
        try:
            session.add_reading(mass_g, args.radius, args.windings, fall_time, rotations)
        except LabError as exc:
            notify(exc)

    print(f"\n{'m (kg)':<10} {'h (m)':<10} {'t (s)':<10} {'n2':<8} {'I (kg·m²)':<12}")
    print("-" * 52)
    for r in session.readings:
        print(f"{r.mass:<10.3f} {r.fall_height:<10.3f} {r.fall_time:<10.2f} "
              f"{r.rotations_after_fall:<8.1f} {r.inertia:<12.3e}")

    summary = session.result()
    if summary is None:
        print("\nAdd readings to calculate I.")
        return 1

    print()
    if 'true_inertia' in summary:
        print(f"True I           : {summary['true_inertia']:.3e} kg·m²")
    print(f"Average calc. I  : {summary['average_inertia']:.3e} kg·m²")
    print(f"Readings         : {summary['count']}")

    if args.plot:
        from labsim.reports.figures import plot_flywheel_readings
        path = plot_flywheel_readings(session.readings, args.plot, summary.get('true_inertia'))
        print(f"\nPlot saved to {path}")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(level_for_verbosity(args.verbose), args.log_file)
    rng = np.random.default_rng(args.seed)

    if args.experiment == 'pendulum':
        return run_pendulum(args, rng)
    return run_flywheel(args, rng)


if __name__ == "__main__":
    sys.exit(main())
