# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 2D Model class for attractive particle simulations

import math
import numbers
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..constants import INITIAL_SPEED
from ..errors import ConfigurationError
from .state import State


@dataclass(frozen=True)
class SimConstants:
    """
    Simulation constants shared by every particle update.

    Attributes:
        dt: Time step, must be positive
        gravitational_constant: Force constant G, must be positive
            (masses are implicitly 1)
    """
    dt: float
    gravitational_constant: float

    def __post_init__(self):
        for name in ("dt", "gravitational_constant"):
            value = getattr(self, name)
            if (not isinstance(value, numbers.Real) or isinstance(value, (bool, np.bool_))
                    or not math.isfinite(value) or value <= 0.0):
                raise ConfigurationError(f"{name} must be a positive finite number, got {value!r}")


class Model:
    """
    Represents the static definition of a 2D particle system.

    Stores the initial particle configuration, the simulation constants and
    the compute device name used by the parallel solver.

    Key Features:
        - Particle count and initial positions/velocities
        - Simulation constants (time step, force constant)
        - Device selection for Warp dispatch ('cuda' or 'cpu')
    """

    def __init__(self, device='cuda'):
        """
        Initialize a 2D Model object.

        Args:
            device (str): Warp device used by the parallel solver ('cuda' or 'cpu')
        """
        self.device = device

        # Particle properties
        self.particle_q = None              # Initial positions, shape [particle_count, 2], float32
        self.particle_qd = None             # Initial velocities, shape [particle_count, 2], float32
        self.particle_count = 0             # Total number of particles

        # Physical parameters
        self.constants: Optional[SimConstants] = None

    def state(self) -> State:
        """
        Create and return a new State object for this model.

        The returned state is initialized with the initial configuration
        from the model description.

        Returns:
            State: The state object
        """
        s = State()
        s.particle_id = np.arange(self.particle_count, dtype=np.int32)
        s.particle_q = np.array(self.particle_q, dtype=np.float32, copy=True)
        s.particle_qd = np.array(self.particle_qd, dtype=np.float32, copy=True)
        return s

    def set_constants(self, dt: float, gravitational_constant: float):
        """
        Set the time step and force constant. Called once before stepping.

        Args:
            dt: Time step (positive)
            gravitational_constant: Force constant G (positive)

        Raises:
            ConfigurationError: If either value is non-positive or not finite
        """
        self.constants = SimConstants(dt=dt, gravitational_constant=gravitational_constant)

    @classmethod
    def from_arrays(cls, positions, velocities, device='cuda'):
        """
        Create a model from explicit initial positions and velocities.

        Args:
            positions: Array-like of shape [N, 2]
            velocities: Array-like of shape [N, 2]
            device: Warp device ('cuda' or 'cpu')

        Returns:
            Model: The initialized model
        """
        pos_np = np.asarray(positions, dtype=np.float32).reshape(-1, 2)
        vel_np = np.asarray(velocities, dtype=np.float32).reshape(-1, 2)
        if pos_np.shape != vel_np.shape:
            raise ConfigurationError(
                f"positions and velocities must have the same shape, got {pos_np.shape} and {vel_np.shape}"
            )

        model = cls(device=device)
        model.particle_count = len(pos_np)
        model.particle_q = pos_np
        model.particle_qd = vel_np
        return model

    @classmethod
    def from_random(cls, count: int, seed: Optional[int] = None, device='cuda', verbose: bool = False):
        """
        Create a model with uniformly random particles.

        Positions are drawn from [0, 1) x [0, 1) and velocity components from
        [-0.05, 0.05). A fixed seed gives a reproducible configuration.

        Args:
            count: Number of particles (0 is allowed)
            seed: Optional seed for numpy's random generator
            device: Warp device ('cuda' or 'cpu')
            verbose: Print a summary line

        Returns:
            Model: The initialized model

        Examples:
            >>> model = Model.from_random(500, seed=42)
            >>> model.set_constants(dt=0.01, gravitational_constant=5e-9)
            >>> state = model.state()
        """
        if count < 0:
            raise ConfigurationError(f"Particle count must be non-negative, got {count}")

        rng = np.random.default_rng(seed)
        positions = rng.random((count, 2), dtype=np.float32)
        velocities = (rng.random((count, 2), dtype=np.float32) - 0.5) * np.float32(2.0 * INITIAL_SPEED)

        model = cls.from_arrays(positions, velocities, device=device)

        if verbose:
            print(f"✓ Created {count} random particles (seed={seed})")

        return model
