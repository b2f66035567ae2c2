"""
Flywheel: Falling-Mass Dynamics and Moment of Inertia
=====================================================

A mass m hangs from a string wound n₁ times around an axle of radius r.
Released, it falls a height h = 2π·r·n₁ while turning the wheel against a
constant friction torque T_f. Once the string slips off, the wheel keeps
spinning for n₂ more rotations until friction stops it.

Forward (Newton, constant acceleration):

    a = (m·g - T_f/r) / (m + I/r²)
    t = sqrt(2h/a),   ω = a·t/r
    n₂ = I·ω² / (2·T_f·2π)

Inverse (energy conservation over the fall and the spin-down):

    m·g·h = ½·m·v² + ½·I·ω² + T_f·2π·n₁,    ½·I·ω² = T_f·2π·n₂

    I = m·r²·(g·t² - 2h)·n₂ / [2h·(n₁ + n₂)]
"""

from collections import namedtuple

import numpy as np

from labsim.constants import G_ACCELERATION
from labsim.errors import InvalidMeasurement, NonPhysicalDynamics

FlywheelReading = namedtuple(
    'FlywheelReading',
    ['mass', 'fall_height', 'fall_time', 'rotations_after_fall', 'inertia'],
)


def fall_height(axle_radius, windings):
    """Drop height (m) of a string wound `windings` times on the axle."""
    return 2 * np.pi * axle_radius * windings


def simulate_fall(mass, axle_radius, windings, inertia, friction_torque,
                  gravity=G_ACCELERATION):
    """
    Noise-free fall of the driving mass and spin-down of the wheel.

    Returns a dict with 'fall_height', 'acceleration', 'fall_time',
    'angular_velocity' (at release) and 'rotations_after_fall'.
    """
    if axle_radius <= 0:
        raise InvalidMeasurement("axle radius must be positive")
    if windings <= 0:
        raise InvalidMeasurement("winding count must be positive")
    if friction_torque <= 0:
        raise NonPhysicalDynamics("without friction the wheel never stops")

    h = fall_height(axle_radius, windings)
    a = (mass * gravity - friction_torque / axle_radius) / (mass + inertia / axle_radius ** 2)
    if a <= 0:
        raise NonPhysicalDynamics("mass is too light to overcome friction")

    t = np.sqrt(2 * h / a)
    omega = a * t / axle_radius

    # Kinetic energy at release is dissipated by friction: ½Iω² = T_f·θ
    theta_after = inertia * omega ** 2 / (2 * friction_torque)

    return {
        'fall_height': float(h),
        'acceleration': float(a),
        'fall_time': float(t),
        'angular_velocity': float(omega),
        'rotations_after_fall': float(theta_after / (2 * np.pi)),
    }


def estimate_inertia(mass, axle_radius, windings, fall_time, rotations_after_fall,
                     gravity=G_ACCELERATION):
    """Moment of inertia (kg·m²) from one timed fall and the rotations after it."""
    h = fall_height(axle_radius, windings)
    n2 = rotations_after_fall

    denominator = 2 * h * (windings + n2)
    if denominator == 0:
        raise InvalidMeasurement("invalid parameters")
    if windings <= 0:
        raise InvalidMeasurement("winding count must be positive")

    numerator = mass * axle_radius ** 2 * (gravity * fall_time ** 2 - 2 * h) * n2
    inertia = numerator / denominator
    # NaN from inconsistent inputs must fail too
    if not inertia > 0:
        raise InvalidMeasurement("non-physical result, check inputs")

    return float(inertia)


def make_flywheel_reading(mass, axle_radius, windings, fall_time, rotations_after_fall,
                          gravity=G_ACCELERATION):
    """Evaluate one trial; raises instead of returning a reading when it is unusable."""
    inertia = estimate_inertia(mass, axle_radius, windings, fall_time,
                               rotations_after_fall, gravity)
    return FlywheelReading(
        mass=float(mass),
        fall_height=float(fall_height(axle_radius, windings)),
        fall_time=float(fall_time),
        rotations_after_fall=float(rotations_after_fall),
        inertia=inertia,
    )


def average_inertia(readings):
    """Mean inertia over the trials, 0.0 when there are none."""
    if len(readings) == 0:
        return 0.0
    return sum(r.inertia for r in readings) / len(readings)
