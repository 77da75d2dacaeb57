# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# State class for 2D particle simulations

from typing import List, NamedTuple

import numpy as np


class Particle(NamedTuple):
    """Snapshot of a single particle."""
    id: int
    x: float
    y: float
    vx: float
    vy: float


class State:
    """
    Represents the time-varying state of a 2D simulation.

    Contains particle identities, positions and velocities, all indexed
    in the same order as the model's particle collection.

    Attributes:
        particle_id: Identity per particle, shape [particle_count], int32
        particle_q: Positions, shape [particle_count, 2], float32
        particle_qd: Velocities, shape [particle_count, 2], float32
    """

    def __init__(self):
        self.particle_id = None   # Identity (int32)
        self.particle_q = None    # Positions (x, y)
        self.particle_qd = None   # Velocities (vx, vy)

    @property
    def particle_count(self) -> int:
        if self.particle_q is None:
            return 0
        return len(self.particle_q)

    def positions(self) -> np.ndarray:
        """
        Read-only copy of the particle positions, shape [particle_count, 2].

        This is the only view handed to renderers.
        """
        pos = np.array(self.particle_q, dtype=np.float32, copy=True)
        pos.setflags(write=False)
        return pos

    def particles(self) -> List[Particle]:
        """Return every particle as a Particle record, in collection order."""
        return [
            Particle(int(pid), float(q[0]), float(q[1]), float(qd[0]), float(qd[1]))
            for pid, q, qd in zip(self.particle_id, self.particle_q, self.particle_qd)
        ]
