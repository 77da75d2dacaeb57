# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Run configuration

from dataclasses import dataclass
from typing import Optional


@dataclass
class SimulationConfig:
    """Configuration for one simulation run."""
    # Particles
    num_particles: int = 500
    seed: Optional[int] = None

    # Physics
    dt: float = 0.01
    gravitational_constant: float = 5e-9

    # Backend
    use_gpu: bool = True
    device: str = 'cuda'
    fallback: bool = True
    dispatch_timeout: Optional[float] = None

    # Display
    width: int = 800
    height: int = 800
    frame_delay: float = 0.005

    # Statistics
    print_statistics: bool = True
    statistics_interval: int = 100

    @property
    def backend(self) -> str:
        return "parallel" if self.use_gpu else "sequential"
