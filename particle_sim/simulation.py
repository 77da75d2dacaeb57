# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
"""
Step driver for 2D particle simulations.

Owns one Model, its State and the solver selected at startup, and advances
them one complete step at a time. Positions are read only between steps.

Usage:
    from particle_sim import Simulation, SimulationConfig

    sim = Simulation.from_config(SimulationConfig(num_particles=200, use_gpu=False))
    sim.run(steps=100)
    positions = sim.positions()
"""

import threading
import time
from typing import Callable, Optional

from .config import SimulationConfig
from .errors import ConfigurationError
from .sim import Model
from .solvers import create_solver


class Simulation:
    """
    Runs a solver over a State, one complete step at a time.

    A single lock covers each full step and each positions read, so a
    renderer on another thread never sees a partially updated State.

    Example:
        >>> model = Model.from_random(100, seed=0, device='cpu')
        >>> model.set_constants(dt=0.01, gravitational_constant=5e-9)
        >>> sim = Simulation(model, SolverSequential(model))
        >>> sim.run(steps=10)
        10
    """

    def __init__(
        self,
        model: Model,
        solver,
        state=None,
        print_statistics: bool = False,
        statistics_interval: int = 100,
    ):
        """
        Initialize the simulation.

        Args:
            model: Model with constants already set
            solver: Solver used for every step of this run
            state: Initial state (defaults to model.state())
            print_statistics: Print the average step time periodically
            statistics_interval: Number of steps per statistics line
        """
        if statistics_interval <= 0:
            raise ConfigurationError(f"statistics_interval must be positive, got {statistics_interval}")

        self.model = model
        self.solver = solver
        self.state = state if state is not None else model.state()
        self.print_statistics = print_statistics
        self.statistics_interval = statistics_interval

        self.lock = threading.Lock()
        self.step_count = 0

        # Performance tracking
        self._interval_time = 0.0
        self._interval_steps = 0
        self.last_average_ms = 0.0

    @classmethod
    def from_config(cls, config: SimulationConfig, verbose: bool = True) -> "Simulation":
        """Build model, constants and solver from a SimulationConfig."""
        model = Model.from_random(config.num_particles, seed=config.seed, device=config.device, verbose=verbose)
        model.set_constants(config.dt, config.gravitational_constant)

        solver = create_solver(
            model,
            backend=config.backend,
            fallback=config.fallback,
            dispatch_timeout=config.dispatch_timeout,
            verbose=verbose,
        )
        return cls(
            model,
            solver,
            print_statistics=config.print_statistics,
            statistics_interval=config.statistics_interval,
        )

    def step(self):
        """Advance one complete step (including read-back for parallel solvers)."""
        with self.lock:
            step_start = time.perf_counter()
            self.solver.step(self.state)
            self._record(time.perf_counter() - step_start)
            self.step_count += 1
        return self.state

    def run(
        self,
        steps: Optional[int] = None,
        cancel: Optional[threading.Event] = None,
        on_step: Optional[Callable[["Simulation"], None]] = None,
    ) -> int:
        """
        Advance a fixed number of steps, or until cancelled.

        Args:
            steps: Number of steps; None runs until ``cancel`` is set
            cancel: Event checked before every step
            on_step: Called after each step with this simulation (e.g. to render)

        Returns:
            Number of steps performed
        """
        if steps is None and cancel is None:
            raise ConfigurationError("run() needs a step count or a cancel event")

        done = 0
        while steps is None or done < steps:
            if cancel is not None and cancel.is_set():
                break
            self.step()
            done += 1
            if on_step is not None:
                on_step(self)
        return done

    def positions(self):
        """Read-only copy of the positions, taken between steps."""
        with self.lock:
            return self.state.positions()

    def _record(self, elapsed: float):
        self._interval_time += elapsed
        self._interval_steps += 1
        if self._interval_steps >= self.statistics_interval:
            self.last_average_ms = self._interval_time / self._interval_steps * 1000.0
            if self.print_statistics:
                print(f"Average time per scene calculation: {self.last_average_ms:.2f}ms")
            self._interval_time = 0.0
            self._interval_steps = 0

    def close(self):
        """Release the solver's backend resources."""
        self.solver.close()
