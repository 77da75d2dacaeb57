# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Base solver class for 2D particle simulations

from typing import Optional

from ..errors import ConfigurationError
from ..sim import SimConstants


class SolverBase:
    """
    Generic base class for 2D particle solvers.

    Defines the interface that concrete solvers must implement. A solver
    advances a State by exactly one time step in place; all accelerations of
    a step are computed from the positions at the start of that step.
    """

    name = "base"

    def __init__(self, model):
        """
        Initialize the solver with a model.

        Args:
            model: The 2D Model object containing system description
        """
        self.model = model

    @property
    def device(self):
        """
        Get the device used by the solver.

        Returns:
            The device used by the solver
        """
        return self.model.device

    def resolve_constants(self, constants: Optional[SimConstants] = None) -> SimConstants:
        """Return the explicit constants, or the model's, failing if neither is set."""
        if constants is None:
            constants = self.model.constants
        if constants is None:
            raise ConfigurationError("Simulation constants not set; call model.set_constants(dt, G) first")
        return constants

    def step(self, state, constants: Optional[SimConstants] = None):
        """
        Advance the state by one time step in place.

        Must be implemented by concrete solver subclasses.

        Args:
            state: The State to advance
            constants: Time step and force constant (defaults to the model's)

        Returns:
            The updated state
        """
        raise NotImplementedError("Concrete solvers must implement step()")

    def close(self):
        """Release backend resources held by the solver."""
