# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Sequential (host) solver for 2D attractive particle systems

from typing import Optional

from ...sim import SimConstants
from ..kernels_host import eval_accelerations, integrate_particles
from ..solver import SolverBase


class SolverSequential(SolverBase):
    """
    Brute-force O(N²) host integrator operating directly on a State.

    Every particle's acceleration is computed from the positions at the start
    of the step and staged in a separate array; only then are velocities and
    positions advanced. The update order therefore never changes the result.

    Example:
        >>> model = Model.from_random(500, seed=1, device='cpu')
        >>> model.set_constants(dt=0.01, gravitational_constant=5e-9)
        >>> solver = SolverSequential(model)
        >>> state = model.state()
        >>>
        >>> for i in range(100):
        >>>     solver.step(state)
    """

    name = "sequential"

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

        # Accelerations at time n, from a frozen position snapshot
        acc = eval_accelerations(state.particle_q, state.particle_id, constants.gravitational_constant)

        # Kick, drift and clamp
        integrate_particles(state.particle_q, state.particle_qd, acc, constants.dt)

        return state
