"""
Experiment sessions for the pendulum and flywheel labs.

A session owns the readings of one run, the entry mode and the hidden
"true" parameters of the simulated apparatus. The estimators it calls are
pure; all randomness goes through the injected numpy Generator.
"""

import enum
import logging

import numpy as np

from labsim import constants
from labsim.errors import DuplicateReading, InvalidMeasurement
from labsim.simulation.flywheel import average_inertia, make_flywheel_reading, simulate_fall
from labsim.simulation.pendulum import estimate_gravity, make_pendulum_reading, simulate_measured_time

logger = logging.getLogger(__name__)


class Mode(enum.Enum):
    SIMULATION = 'simulation'
    MANUAL = 'manual'


def draw_noise(rng, half_width):
    """Relative measurement error, uniform in [-half_width, half_width)."""
    return (rng.random() - 0.5) * 2 * half_width


class PendulumSession:
    """Readings of L vs total time for N oscillations, kept sorted by length."""

    def __init__(self, environment=constants.UNKNOWN, oscillations=constants.DEFAULT_OSCILLATIONS,
                 noise=constants.PENDULUM_NOISE, rng=None, mode=Mode.SIMULATION):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.oscillations = oscillations
        self.noise = noise
        self.mode = Mode(mode)
        self.readings = []
        self.set_environment(environment)

    def set_mode(self, mode):
        self.mode = Mode(mode)

    def set_environment(self, environment):
        """Select a named environment or 'unknown'; clears the readings."""
        if environment == constants.UNKNOWN:
            low, high = constants.GRAVITY_RANGE
            gravity = low + self.rng.random() * (high - low)
        elif environment in constants.ENVIRONMENTS:
            gravity = constants.ENVIRONMENTS[environment]
        else:
            raise KeyError(f"unknown environment '{environment}'")

        self.environment = environment
        self.gravity = gravity
        self.readings = []
        logger.info("Pendulum environment set to %s", environment)

    def add_reading(self, length, measured_time=None):
        """
        Record a reading at `length`.

        In simulation mode the total time is synthesised from the hidden
        gravity with drawn noise; in manual mode `measured_time` is required.
        """
        if self.mode is Mode.SIMULATION:
            noise = draw_noise(self.rng, self.noise)
            measured_time = simulate_measured_time(length, self.gravity, self.oscillations, noise)
        elif measured_time is None:
            raise InvalidMeasurement("manual readings need a measured time")

        reading = make_pendulum_reading(length, measured_time, self.oscillations)
        return self.insert_reading(reading)

    def insert_reading(self, reading):
        """Insert keeping lengths unique and ascending, then renumber 1..N."""
        if any(r.length == reading.length for r in self.readings):
            logger.warning("Rejected reading: length %.2f m already recorded", reading.length)
            raise DuplicateReading(f"a reading for length {reading.length} already exists")

        readings = sorted(self.readings + [reading], key=lambda r: r.length)
        self.readings = [r._replace(sno=i + 1) for i, r in enumerate(readings)]
        logger.debug("Added pendulum reading L=%.3f m, t=%.3f s", reading.length,
                     reading.measured_time)
        return next(r for r in self.readings if r.length == reading.length)

    def result(self):
        """Fit over the current readings, or None with fewer than two."""
        if len(self.readings) < 2:
            return None

        fit = estimate_gravity(self.readings)
        if self.mode is Mode.SIMULATION and self.environment != constants.UNKNOWN:
            fit['true_gravity'] = self.gravity
        return fit

    def reset(self):
        """Start over in simulation mode with a freshly drawn unknown environment."""
        self.mode = Mode.SIMULATION
        self.set_environment(constants.UNKNOWN)


class FlywheelSession:
    """Repeated falling-mass trials whose inertia estimates are averaged."""

    def __init__(self, model=constants.UNKNOWN, noise=constants.FLYWHEEL_NOISE,
                 gravity=constants.G_ACCELERATION, rng=None, mode=Mode.SIMULATION):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.noise = noise
        self.gravity = gravity
        self.mode = Mode(mode)
        self.readings = []
        self.set_model(model)

    def set_mode(self, mode):
        self.mode = Mode(mode)

    def set_model(self, model):
        """Select flywheel 'A', 'B' or a randomly drawn 'unknown'; clears the readings."""
        if model == constants.UNKNOWN:
            i_low, i_high = constants.INERTIA_RANGE
            tf_low, tf_high = constants.FRICTION_TORQUE_RANGE
            params = {
                'inertia': i_low + self.rng.random() * (i_high - i_low),
                'friction_torque': tf_low + self.rng.random() * (tf_high - tf_low),
            }
        elif model in constants.FLYWHEEL_MODELS:
            params = dict(constants.FLYWHEEL_MODELS[model])
        else:
            raise KeyError(f"unknown flywheel model '{model}'")

        self.model = model
        self.params = params
        self.readings = []
        logger.info("Flywheel model set to %s", model)

    def add_reading(self, mass_g, radius_cm, windings, fall_time=None, rotations_after_fall=None):
        """
        Record one trial. Mass is in grams and axle radius in centimetres.

        Simulation mode runs the hidden model and perturbs t and n₂
        independently; manual mode uses the supplied measurements.
        """
        mass = mass_g / constants.GRAMS_PER_KG
        axle_radius = radius_cm / constants.CM_PER_M

        if self.mode is Mode.SIMULATION:
            fall = simulate_fall(mass, axle_radius, windings, self.params['inertia'],
                                 self.params['friction_torque'], self.gravity)
            fall_time = fall['fall_time'] * (1 + draw_noise(self.rng, self.noise))
            rotations_after_fall = fall['rotations_after_fall'] * (1 + draw_noise(self.rng, self.noise))
        elif fall_time is None or rotations_after_fall is None:
            raise InvalidMeasurement("manual readings need a fall time and post-fall rotations")
        elif mass <= 0 or fall_time <= 0 or rotations_after_fall <= 0:
            raise InvalidMeasurement("mass, time and rotations must be positive")

        try:
            reading = make_flywheel_reading(mass, axle_radius, windings, fall_time,
                                            rotations_after_fall, self.gravity)
        except InvalidMeasurement as exc:
            logger.warning("Rejected flywheel trial: %s", exc)
            raise

        self.readings.append(reading)
        logger.debug("Added flywheel reading I=%.3e kg·m²", reading.inertia)
        return reading

    def result(self):
        """Average over the trials, or None before the first one."""
        if not self.readings:
            return None

        summary = {
            'average_inertia': average_inertia(self.readings),
            'count': len(self.readings),
        }
        if self.mode is Mode.SIMULATION and self.model != constants.UNKNOWN:
            summary['true_inertia'] = self.params['inertia']
        return summary

    def reset(self):
        """Start over in simulation mode; the selected model is kept ('unknown' is redrawn)."""
        self.mode = Mode.SIMULATION
        self.set_model(self.model)
