# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Data-parallel solver for 2D attractive particle systems

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Optional

from ...errors import BackendError, ConfigurationError
from ...sim import SimConstants
from ..solver import SolverBase
from .buffer import marshal, unmarshal
from .executors import EmulatedExecutor, ParallelExecutor


class SolverParallel(SolverBase):
    """
    Data-parallel integrator: marshal, dispatch one pass, read back.

    Each step packs the State into the interchange buffer, hands it to a
    ParallelExecutor together with (N, dt, G), and replaces every particle's
    position and velocity with the returned buffer. If the executor fails
    the State is left untouched and a BackendError propagates; there is no
    retry.

    Example:
        >>> model = Model.from_random(500, seed=1, device='cpu')
        >>> model.set_constants(dt=0.01, gravitational_constant=5e-9)
        >>> solver = SolverParallel(model, executor=WarpExecutor('cpu'))
        >>> state = model.state()
        >>>
        >>> for i in range(100):
        >>>     solver.step(state)
    """

    name = "parallel"

    def __init__(self, model, executor: Optional[ParallelExecutor] = None,
                 dispatch_timeout: Optional[float] = None):
        """
        Initialize the parallel solver.

        Args:
            model: The 2D Model to be simulated
            executor: Backend running the pass (default: EmulatedExecutor)
            dispatch_timeout: Seconds to wait for one dispatch before raising
                BackendError("dispatch"). None waits indefinitely. After a
                timeout every later step fails at once.
        """
        super().__init__(model)

        if dispatch_timeout is not None and dispatch_timeout <= 0:
            raise ConfigurationError(f"dispatch_timeout must be positive, got {dispatch_timeout}")

        self.executor = executor or EmulatedExecutor()
        self.dispatch_timeout = dispatch_timeout

        # Single worker: never more than one dispatch in flight
        self._pool = ThreadPoolExecutor(max_workers=1) if dispatch_timeout is not None else None
        # Set once a dispatch overruns; the worker may still be running it
        self._stalled = None

    def step(self, state, constants: Optional[SimConstants] = None):
        """
        Advance the simulation by one timestep.

        Args:
            state: The State to advance in place
            constants: Time step and force constant (defaults to the model's)

        Returns:
            The updated state
        """
        constants = self.resolve_constants(constants)
        n = state.particle_count

        buffer = marshal(state)
        result = self._dispatch(buffer, n, constants)

        if len(result) != len(buffer):
            raise BackendError("readback", f"Backend returned {len(result)} bytes, expected {len(buffer)}")

        return unmarshal(result, state)

    def _dispatch(self, buffer, n: int, constants: SimConstants):
        args = (buffer, n, constants.dt, constants.gravitational_constant)
        if self._pool is None:
            return self.executor.dispatch(*args)

        if self._stalled is not None:
            raise BackendError(
                "dispatch", f"{self.executor.name} backend failed: an earlier dispatch timed out"
            )

        future = self._pool.submit(self.executor.dispatch, *args)
        try:
            return future.result(timeout=self.dispatch_timeout)
        except FutureTimeoutError as e:
            self._stalled = future
            raise BackendError(
                "dispatch", f"{self.executor.name} dispatch did not complete within {self.dispatch_timeout}s"
            ) from e

    def close(self):
        """Release the dispatch worker thread, if any."""
        if self._pool is not None:
            self._pool.shutdown(wait=False)
            self._pool = None
