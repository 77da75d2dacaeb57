# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 2D attractive particle simulation with sequential and Warp data-parallel solvers

from .config import SimulationConfig
from .errors import BackendError, ConfigurationError
from .sim import Model, Particle, SimConstants, State
from .simulation import Simulation
from .solvers import (
    EmulatedExecutor,
    SolverBase,
    SolverParallel,
    SolverSequential,
    WarpExecutor,
    create_solver,
)

__all__ = [
    "SimulationConfig",
    "BackendError",
    "ConfigurationError",
    "Model",
    "Particle",
    "SimConstants",
    "State",
    "Simulation",
    "SolverBase",
    "SolverSequential",
    "SolverParallel",
    "EmulatedExecutor",
    "WarpExecutor",
    "create_solver",
]
