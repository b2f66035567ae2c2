"""
labsim - estimation engine for the simple pendulum and flywheel lab exercises.
"""

from labsim.errors import LabError, NonPhysicalDynamics, InvalidMeasurement, DuplicateReading
from labsim.methods.least_squares import linear_regression
from labsim.simulation.pendulum import estimate_gravity, simulate_measured_time, theoretical_period
from labsim.simulation.flywheel import average_inertia, estimate_inertia, simulate_fall

__version__ = "0.1.0"

__all__ = [
    "LabError",
    "NonPhysicalDynamics",
    "InvalidMeasurement",
    "DuplicateReading",
    "linear_regression",
    "theoretical_period",
    "simulate_measured_time",
    "estimate_gravity",
    "simulate_fall",
    "estimate_inertia",
    "average_inertia",
]
