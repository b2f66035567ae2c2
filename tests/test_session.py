import numpy as np
import pytest

from labsim import constants
from labsim.errors import DuplicateReading, InvalidMeasurement, NonPhysicalDynamics
from labsim.session import FlywheelSession, Mode, PendulumSession, draw_noise
from labsim.simulation.flywheel import simulate_fall


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def test_draw_noise_bounds(rng):
    draws = [draw_noise(rng, 0.02) for _ in range(500)]
    assert min(draws) >= -0.02
    assert max(draws) < 0.02


class TestPendulumSession:
    def test_unknown_environment_draws_gravity(self, rng):
        session = PendulumSession(rng=rng)
        low, high = constants.GRAVITY_RANGE
        assert low <= session.gravity < high

    def test_named_environment(self, rng):
        session = PendulumSession('moon', rng=rng)
        assert session.gravity == constants.ENVIRONMENTS['moon']

    def test_unknown_environment_name_raises(self, rng):
        with pytest.raises(KeyError):
            PendulumSession('venus', rng=rng)

    def test_readings_sorted_and_numbered(self, rng):
        session = PendulumSession('earth', rng=rng)
        for length in (1.2, 0.5, 0.9, 1.5):
            session.add_reading(length)

        assert [r.length for r in session.readings] == [0.5, 0.9, 1.2, 1.5]
        assert [r.sno for r in session.readings] == [1, 2, 3, 4]

    def test_duplicate_length_rejected(self, rng):
        session = PendulumSession('earth', rng=rng)
        session.add_reading(0.5)
        session.add_reading(1.0)
        before = list(session.readings)

        with pytest.raises(DuplicateReading):
            session.add_reading(1.0)

        assert session.readings == before

    def test_duplicate_rejected_in_manual_mode(self, rng):
        session = PendulumSession('earth', rng=rng, mode=Mode.MANUAL)
        session.add_reading(1.0, 40.1)
        with pytest.raises(DuplicateReading):
            session.add_reading(1.0, 39.0)
        assert len(session.readings) == 1
        assert session.readings[0].measured_time == 40.1

    def test_insert_returns_renumbered_reading(self, rng):
        session = PendulumSession('earth', rng=rng)
        session.add_reading(1.0)
        added = session.add_reading(0.4)
        assert added.sno == 1
        assert added.length == 0.4

    def test_result_needs_two_readings(self, rng):
        session = PendulumSession('earth', rng=rng)
        assert session.result() is None
        session.add_reading(1.0)
        assert session.result() is None

    def test_noiseless_simulation_recovers_gravity(self, rng):
        session = PendulumSession('mars', noise=0.0, rng=rng)
        for length in (0.5, 1.0, 1.5):
            session.add_reading(length)

        fit = session.result()
        assert fit['gravity'] == pytest.approx(3.71)
        assert fit['true_gravity'] == 3.71
        assert fit['r2'] == pytest.approx(1.0)

    def test_noisy_simulation_close_to_gravity(self, rng):
        session = PendulumSession('earth', rng=rng)
        for length in np.linspace(0.5, 2.0, 8):
            session.add_reading(float(length))
        assert session.result()['gravity'] == pytest.approx(9.81, rel=0.1)

    def test_unknown_environment_hides_true_gravity(self, rng):
        session = PendulumSession(rng=rng)
        session.add_reading(0.5)
        session.add_reading(1.0)
        assert 'true_gravity' not in session.result()

    def test_manual_mode_uses_measured_time(self, rng):
        session = PendulumSession('earth', oscillations=10, rng=rng)
        session.set_mode('manual')
        assert session.mode is Mode.MANUAL

        session.add_reading(1.0, 20.0)
        session.add_reading(0.25, 10.0)

        fit = session.result()
        assert fit['gravity'] == pytest.approx(np.pi ** 2)
        assert 'true_gravity' not in fit

    def test_manual_mode_requires_time(self, rng):
        session = PendulumSession('earth', rng=rng, mode=Mode.MANUAL)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(1.0)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(-1.0, 20.0)
        assert session.readings == []

    def test_changing_environment_clears_readings(self, rng):
        session = PendulumSession('earth', rng=rng)
        session.add_reading(1.0)
        session.set_environment('jupiter')
        assert session.readings == []
        assert session.gravity == constants.ENVIRONMENTS['jupiter']

    def test_reset(self, rng):
        session = PendulumSession('earth', rng=rng)
        session.add_reading(1.0)
        session.reset()
        assert session.readings == []
        assert session.environment == constants.UNKNOWN


class TestFlywheelSession:
    def test_unknown_model_draws_parameters(self, rng):
        session = FlywheelSession(rng=rng)
        assert constants.INERTIA_RANGE[0] <= session.params['inertia'] < constants.INERTIA_RANGE[1]
        low, high = constants.FRICTION_TORQUE_RANGE
        assert low <= session.params['friction_torque'] < high

    def test_preset_is_copied(self, rng):
        session = FlywheelSession('A', rng=rng)
        session.params['inertia'] = 1.0
        assert constants.FLYWHEEL_MODELS['A']['inertia'] == 0.005

    def test_noiseless_simulation_recovers_inertia(self, rng):
        session = FlywheelSession('A', noise=0.0, rng=rng)
        reading = session.add_reading(50, 5.0, 5)

        assert reading.mass == pytest.approx(0.05)
        assert reading.inertia == pytest.approx(0.005)
        summary = session.result()
        assert summary['average_inertia'] == pytest.approx(0.005)
        assert summary['true_inertia'] == 0.005
        assert summary['count'] == 1

    def test_noisy_trials_are_averaged(self, rng):
        session = FlywheelSession('B', rng=rng)
        for _ in range(6):
            session.add_reading(200, 2.0, 6)

        summary = session.result()
        assert summary['count'] == 6
        assert summary['average_inertia'] == pytest.approx(0.015, rel=0.15)

    def test_mass_too_light_records_nothing(self, rng):
        session = FlywheelSession('A', rng=rng)
        with pytest.raises(NonPhysicalDynamics):
            session.add_reading(1, 1.0, 5)
        assert session.readings == []
        assert session.result() is None

    def test_manual_reading(self, rng):
        fall = simulate_fall(0.1, 0.02, 4, 0.008, 0.003)
        session = FlywheelSession('A', rng=rng, mode=Mode.MANUAL)
        reading = session.add_reading(100, 2.0, 4, fall['fall_time'], fall['rotations_after_fall'])

        assert reading.inertia == pytest.approx(0.008)
        assert 'true_inertia' not in session.result()

    def test_manual_non_physical_records_nothing(self, rng):
        session = FlywheelSession('A', rng=rng, mode=Mode.MANUAL)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(50, 1.0, 5, 0.001, 10.0)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(50, 1.0, 5)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(-50, 1.0, 5, 3.0, 10.0)
        assert session.readings == []

    def test_changing_model_clears_readings(self, rng):
        session = FlywheelSession('A', rng=rng)
        session.add_reading(50, 5.0, 5)
        session.set_model('B')
        assert session.readings == []
        assert session.params == constants.FLYWHEEL_MODELS['B']

    def test_unknown_model_name_raises(self, rng):
        with pytest.raises(KeyError):
            FlywheelSession('C', rng=rng)


class TestResetAndMode:
    def test_pendulum_reset_returns_to_unknown_simulation(self, rng):
        session = PendulumSession('earth', rng=rng, mode=Mode.MANUAL)
        session.add_reading(1.0, 40.0)
        session.reset()

        assert session.readings == []
        assert session.environment == constants.UNKNOWN
        assert session.mode is Mode.SIMULATION
        low, high = constants.GRAVITY_RANGE
        assert low <= session.gravity < high

    def test_flywheel_reset_keeps_model(self, rng):
        session = FlywheelSession('B', rng=rng, mode=Mode.MANUAL)
        session.add_reading(200, 2.0, 6, 30.0, 5.0)
        session.reset()

        assert session.readings == []
        assert session.model == 'B'
        assert session.params == constants.FLYWHEEL_MODELS['B']
        assert session.mode is Mode.SIMULATION

    def test_flywheel_set_mode(self, rng):
        session = FlywheelSession('A', rng=rng)
        session.set_mode('manual')
        assert session.mode is Mode.MANUAL
        session.set_mode(Mode.SIMULATION)
        assert session.mode is Mode.SIMULATION

    def test_set_mode_rejects_unknown_value(self, rng):
        with pytest.raises(ValueError):
            PendulumSession('earth', rng=rng).set_mode('automatic')


class TestWindings:
    def test_negative_windings_in_simulation_records_nothing(self, rng):
        session = FlywheelSession('A', noise=0.0, rng=rng)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(50, 5.0, -5)
        assert session.readings == []

    def test_negative_windings_in_manual_records_nothing(self, rng):
        session = FlywheelSession('A', rng=rng, mode=Mode.MANUAL)
        with pytest.raises(InvalidMeasurement):
            session.add_reading(50, 5.0, -10, 3.0, 1.0)
        assert session.readings == []
        assert session.result() is None
