"""
Physical constants and lab presets shared by the models and the sessions.
"""

G_ACCELERATION = 9.81  # m/s², standard gravity for Earth

# Named pendulum environments (m/s²). 'unknown' draws from GRAVITY_RANGE.
ENVIRONMENTS = {
    'earth': 9.81,
    'moon': 1.62,
    'mars': 3.71,
    'jupiter': 24.79,
}
UNKNOWN = 'unknown'
GRAVITY_RANGE = (5.0, 20.0)

DEFAULT_OSCILLATIONS = 20

# Flywheel presets: moment of inertia (kg·m²) and friction torque (N·m)
FLYWHEEL_MODELS = {
    'A': {'inertia': 0.005, 'friction_torque': 0.002},
    'B': {'inertia': 0.015, 'friction_torque': 0.004},
}
INERTIA_RANGE = (0.003, 0.018)
FRICTION_TORQUE_RANGE = (0.001, 0.006)

# Half-width of the multiplicative measurement noise on simulated readings
PENDULUM_NOISE = 0.02    # ±2% on total time
FLYWHEEL_NOISE = 0.015   # ±1.5% on fall time and post-fall rotations

# Form units: flywheel mass is entered in grams, axle radius in centimetres
GRAMS_PER_KG = 1000.0
CM_PER_M = 100.0
