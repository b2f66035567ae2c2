"""
Failure conditions raised by the estimation engine.

A degenerate regression is not an error: linear_regression returns a
neutral fit instead.
"""


class LabError(Exception):
    """Base class for expected, recoverable lab failures."""


class NonPhysicalDynamics(LabError):
    """The forward model has no physical motion for the given parameters."""


class InvalidMeasurement(LabError, ValueError):
    """A measurement is inconsistent or yields a non-physical quantity."""


class DuplicateReading(LabError, ValueError):
    """A pendulum reading for this length is already recorded."""
