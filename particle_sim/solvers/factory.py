# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Solver selection at startup

from typing import Optional

from ..errors import BackendError, ConfigurationError
from .parallel import EmulatedExecutor, SolverParallel, WarpExecutor
from .sequential import SolverSequential

BACKENDS = ("sequential", "parallel", "emulated")


def create_solver(model, backend: str = "sequential", device: Optional[str] = None,
                  fallback: bool = True, dispatch_timeout: Optional[float] = None,
                  verbose: bool = True):
    """
    Build the solver for one run.

    Args:
        model: The 2D Model to be simulated
        backend: "sequential" (host), "parallel" (Warp device) or
            "emulated" (parallel solver with the numpy executor)
        device: Warp device, defaults to model.device
        fallback: If the Warp backend cannot be initialized, return a
            SolverSequential instead of raising
        dispatch_timeout: Per-dispatch timeout in seconds for parallel solvers
        verbose: Print which solver was selected

    Returns:
        A SolverBase subclass instance

    Raises:
        ConfigurationError: Unknown backend name
        BackendError: Warp initialization failed and fallback is False
    """
    if backend == "sequential":
        solver = SolverSequential(model)
    elif backend == "emulated":
        solver = SolverParallel(model, executor=EmulatedExecutor(), dispatch_timeout=dispatch_timeout)
    elif backend == "parallel":
        try:
            executor = WarpExecutor(device or model.device, verbose=verbose)
        except BackendError as e:
            if not fallback:
                raise
            print(f"⚠ Parallel backend unavailable ({e}), falling back to sequential solver")
            return SolverSequential(model)
        solver = SolverParallel(model, executor=executor, dispatch_timeout=dispatch_timeout)
    else:
        raise ConfigurationError(f"Unknown backend: {backend!r} (expected one of {', '.join(BACKENDS)})")

    if verbose:
        print(f"✓ Using {solver.name} solver for {model.particle_count} particles")
    return solver
