# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0

from .state import Particle, State
from .model import Model, SimConstants

__all__ = [
    "Model",
    "Particle",
    "SimConstants",
    "State",
]
