"""
Simple Pendulum: Forward Model and Gravity Estimation
=====================================================

Small-angle period of a simple pendulum:

    T = 2π·sqrt(L/g)

Squaring and rearranging gives a line through the origin:

    L = (g/4π²)·T²

so fitting L against T² over several lengths yields

    g = 4π²·slope

A reading records the total time for N oscillations; the period is the
total time divided by N.
"""

from collections import namedtuple

import numpy as np

from labsim.errors import InvalidMeasurement, NonPhysicalDynamics
from labsim.methods.least_squares import linear_regression, slope_standard_error

FOUR_PI_SQUARED = 4 * np.pi ** 2

PendulumReading = namedtuple(
    'PendulumReading',
    ['sno', 'length', 'measured_time', 'oscillations', 'period', 'period_squared'],
)


def theoretical_period(length, gravity):
    """Period of a simple pendulum of the given length (m) under gravity (m/s²)."""
    if gravity <= 0 or length <= 0:
        raise NonPhysicalDynamics(
            f"pendulum needs positive length and gravity (L={length}, g={gravity})"
        )
    return float(2 * np.pi * np.sqrt(length / gravity))


def simulate_measured_time(length, gravity, oscillations, noise_fraction=0.0):
    """
    Total stopwatch time for `oscillations` swings.

    noise_fraction is the relative timing error of this reading, drawn by the
    caller (e.g. uniform in [-0.02, 0.02)).
    """
    return oscillations * theoretical_period(length, gravity) * (1 + noise_fraction)


def make_pendulum_reading(length, measured_time, oscillations, sno=0):
    """Build a reading from a length and the total time of N oscillations."""
    if length <= 0 or measured_time <= 0 or oscillations <= 0:
        raise InvalidMeasurement("length, time and oscillation count must be positive")
    if oscillations != int(oscillations):
        raise InvalidMeasurement(f"oscillation count must be a whole number, got {oscillations}")

    period = measured_time / oscillations
    return PendulumReading(
        sno=sno,
        length=float(length),
        measured_time=float(measured_time),
        oscillations=int(oscillations),
        period=period,
        period_squared=period * period,
    )


def estimate_gravity(readings):
    """
    Estimate g from the L vs T² line through the readings.

    Returns the regression dict extended with 'gravity' and 'gravity_stderr'.
    Fewer than two distinct periods fall back to the neutral fit (g = 0).
    """
    xs = [r.period_squared for r in readings]
    ys = [r.length for r in readings]

    fit = linear_regression(xs, ys)
    fit['gravity'] = fit['slope'] * FOUR_PI_SQUARED
    fit['gravity_stderr'] = slope_standard_error(xs, ys) * FOUR_PI_SQUARED
    return fit
