# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Data-parallel solver, its executors and the interchange buffer layout

from .solver_parallel import SolverParallel
from .executors import EmulatedExecutor, ParallelExecutor, WarpExecutor
from .buffer import (
    FLOATS_PER_PARTICLE,
    PARTICLE_DTYPE,
    RECORD_SIZE,
    as_float_array,
    buffer_size,
    marshal,
    unmarshal,
)
from .kernels_particle import update_particles_2d

__all__ = [
    "SolverParallel",
    "ParallelExecutor",
    "EmulatedExecutor",
    "WarpExecutor",
    "FLOATS_PER_PARTICLE",
    "PARTICLE_DTYPE",
    "RECORD_SIZE",
    "as_float_array",
    "buffer_size",
    "marshal",
    "unmarshal",
    "update_particles_2d",
]
