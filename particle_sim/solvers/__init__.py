# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Solvers module for 2D attractive particle simulations

from .solver import SolverBase
from .sequential import SolverSequential
from .parallel import EmulatedExecutor, ParallelExecutor, SolverParallel, WarpExecutor
from .factory import BACKENDS, create_solver

__all__ = [
    "SolverBase",
    "SolverSequential",
    "SolverParallel",
    "ParallelExecutor",
    "EmulatedExecutor",
    "WarpExecutor",
    "BACKENDS",
    "create_solver",
]
