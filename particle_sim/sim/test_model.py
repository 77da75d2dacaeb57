"""
Tests for the particle Model and State.

Run with pytest, or directly:
    python -m particle_sim.sim.test_model
"""

import math

import numpy as np
import pytest

from particle_sim.errors import ConfigurationError
from particle_sim.sim import Model, Particle, SimConstants


def test_from_random_ranges():
    """Positions in [0, 1), velocities in [-0.05, 0.05), identities 0..N-1."""
    model = Model.from_random(1000, seed=3, device='cpu')
    state = model.state()

    assert model.particle_count == 1000
    assert state.particle_q.dtype == np.float32
    assert state.particle_qd.dtype == np.float32
    assert np.all(state.particle_q >= 0.0) and np.all(state.particle_q < 1.0)
    assert np.all(state.particle_qd >= -0.05) and np.all(state.particle_qd < 0.05)
    assert np.array_equal(state.particle_id, np.arange(1000))


def test_from_random_is_reproducible():
    a = Model.from_random(50, seed=7, device='cpu').state()
    b = Model.from_random(50, seed=7, device='cpu').state()
    c = Model.from_random(50, seed=8, device='cpu').state()

    assert np.array_equal(a.particle_q, b.particle_q)
    assert np.array_equal(a.particle_qd, b.particle_qd)
    assert not np.array_equal(a.particle_q, c.particle_q)


def test_zero_particles_is_legal():
    model = Model.from_random(0, seed=0, device='cpu')
    state = model.state()
    assert state.particle_count == 0
    assert state.particles() == []
    assert state.positions().shape == (0, 2)


def test_negative_count_rejected():
    with pytest.raises(ConfigurationError):
        Model.from_random(-1)


def test_from_arrays_shape_mismatch():
    with pytest.raises(ConfigurationError):
        Model.from_arrays([[0.1, 0.2], [0.3, 0.4]], [[0.0, 0.0]], device='cpu')


def test_state_is_independent_copy():
    """Each state() starts from the initial configuration."""
    model = Model.from_arrays([[0.2, 0.3]], [[0.01, 0.0]], device='cpu')
    s1 = model.state()
    s1.particle_q[0, 0] = 0.9

    s2 = model.state()
    assert s2.particle_q[0, 0] == np.float32(0.2)
    assert model.particle_q[0, 0] == np.float32(0.2)


def test_particles_records():
    model = Model.from_arrays([[0.25, 0.5], [0.75, 0.125]], [[0.0, 0.01], [-0.02, 0.0]], device='cpu')
    particles = model.state().particles()

    assert particles[1] == Particle(id=1, x=0.75, y=0.125, vx=pytest.approx(-0.02), vy=0.0)
    assert particles[0].id == 0


def test_positions_is_read_only_copy():
    model = Model.from_random(10, seed=1, device='cpu')
    state = model.state()
    pos = state.positions()
    first_x = float(pos[0, 0])

    assert not pos.flags.writeable
    state.particle_q[0, 0] = first_x + 0.25
    assert pos[0, 0] == np.float32(first_x)


@pytest.mark.parametrize("dt, g", [
    (0.0, 5e-9),
    (-0.01, 5e-9),
    (0.01, 0.0),
    (0.01, -1.0),
    (math.nan, 5e-9),
    (0.01, math.inf),
    (True, 5e-9),
    ("0.01", 5e-9),
])
def test_set_constants_rejects_invalid(dt, g):
    model = Model.from_random(2, seed=0, device='cpu')
    with pytest.raises(ConfigurationError):
        model.set_constants(dt, g)
    assert model.constants is None


def test_set_constants():
    model = Model.from_random(2, seed=0, device='cpu')
    model.set_constants(0.01, 5e-9)
    assert model.constants == SimConstants(dt=0.01, gravitational_constant=5e-9)


def test_set_constants_accepts_numpy_scalars():
    model = Model.from_random(2, seed=0, device='cpu')
    model.set_constants(np.int64(1), np.float32(5e-9))
    assert model.constants.dt == 1


def main():
    """Run all tests"""
    print("=" * 60)
    print("Running Model Tests")
    print("=" * 60)
    return pytest.main([__file__, "-q"])


if __name__ == "__main__":
    exit(main())
