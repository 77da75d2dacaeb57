"""
Tests for the Simulation step driver and configuration.

Run with pytest, or directly:
    python -m particle_sim.test_simulation
"""

import threading

import numpy as np
import pytest

from particle_sim import (
    ConfigurationError,
    Model,
    Simulation,
    SimulationConfig,
    SolverSequential,
)


def make_sim(count=20, seed=0, **kwargs):
    model = Model.from_random(count, seed=seed, device='cpu')
    model.set_constants(0.01, 5e-9)
    return Simulation(model, SolverSequential(model), **kwargs)


def test_config_defaults():
    config = SimulationConfig()
    assert config.num_particles == 500
    assert (config.width, config.height) == (800, 800)
    assert config.dt == 0.01
    assert config.gravitational_constant == 5e-9
    assert config.backend == "parallel"
    assert SimulationConfig(use_gpu=False).backend == "sequential"


def test_run_fixed_steps():
    sim = make_sim()
    assert sim.run(steps=7) == 7
    assert sim.step_count == 7


def test_run_matches_manual_steps():
    sim = make_sim(seed=4)
    model = sim.model
    state = model.state()
    solver = SolverSequential(model)
    for _ in range(5):
        solver.step(state)

    sim.run(steps=5)
    np.testing.assert_array_equal(sim.positions(), state.particle_q)


def test_run_requires_limit():
    with pytest.raises(ConfigurationError):
        make_sim().run()


def test_cancel_before_start():
    cancel = threading.Event()
    cancel.set()
    sim = make_sim()
    assert sim.run(cancel=cancel) == 0
    assert sim.step_count == 0


def test_on_step_can_cancel():
    cancel = threading.Event()
    seen = []

    def on_step(s):
        seen.append(s.step_count)
        if s.step_count == 3:
            cancel.set()

    sim = make_sim()
    assert sim.run(cancel=cancel, on_step=on_step) == 3
    assert seen == [1, 2, 3]


def test_positions_are_read_only_snapshot():
    sim = make_sim()
    before = sim.positions()
    assert not before.flags.writeable

    snapshot = before.copy()
    sim.run(steps=3)
    np.testing.assert_array_equal(before, snapshot)


def test_positions_from_another_thread():
    """A reader thread always sees finite, complete position arrays."""
    sim = make_sim(count=30)
    cancel = threading.Event()
    reads = []

    def reader():
        while not cancel.is_set():
            pos = sim.positions()
            reads.append(pos.shape == (30, 2) and bool(np.all(np.isfinite(pos))))

    thread = threading.Thread(target=reader)
    thread.start()
    try:
        sim.run(steps=20)
    finally:
        cancel.set()
        thread.join()

    assert reads and all(reads)


def test_statistics_interval(capsys):
    sim = make_sim(print_statistics=True, statistics_interval=4)
    sim.run(steps=9)

    lines = [line for line in capsys.readouterr().out.splitlines()
             if line.startswith("Average time per scene calculation:")]
    assert len(lines) == 2
    assert lines[0].endswith("ms")
    assert sim.last_average_ms >= 0.0


def test_statistics_interval_must_be_positive():
    with pytest.raises(ConfigurationError):
        make_sim(statistics_interval=0)


def test_from_config_sequential():
    config = SimulationConfig(num_particles=12, seed=2, use_gpu=False, device='cpu', print_statistics=False)
    sim = Simulation.from_config(config, verbose=False)

    assert isinstance(sim.solver, SolverSequential)
    assert sim.model.particle_count == 12
    assert sim.run(steps=2) == 2
    sim.close()


def test_from_config_rejects_bad_constants():
    with pytest.raises(ConfigurationError):
        Simulation.from_config(SimulationConfig(num_particles=2, dt=0.0, use_gpu=False), verbose=False)


def main():
    """Run all tests"""
    print("=" * 60)
    print("Running Simulation Tests")
    print("=" * 60)
    return pytest.main([__file__, "-q"])


if __name__ == "__main__":
    exit(main())
