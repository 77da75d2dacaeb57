# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# 2D pairwise attraction kernel for the parallel solver
#
# Each record is a vec4 (x, y, vx, vy) in the interchange buffer layout.

import warp as wp

from ...constants import BOUNDARY_HIGH, BOUNDARY_LOW, MAX_ACCELERATION, MIN_DISTANCE

MIN_DISTANCE_WP = wp.constant(MIN_DISTANCE)
MAX_ACCELERATION_WP = wp.constant(MAX_ACCELERATION)
BOUNDARY_LOW_WP = wp.constant(BOUNDARY_LOW)
BOUNDARY_HIGH_WP = wp.constant(BOUNDARY_HIGH)


@wp.kernel
def update_particles_2d(
    particles_in: wp.array(dtype=wp.vec4),
    num_particles: int,
    dt: float,
    gravitational_constant: float,
    particles_out: wp.array(dtype=wp.vec4),
):
    """
    Advance one particle by one time step.

    Each thread processes one particle. It reads every record of
    particles_in (never written during the pass) and writes only its own
    record of particles_out.
    """
    tid = wp.tid()

    p = particles_in[tid]
    px = p[0]
    py = p[1]
    vx = p[2]
    vy = p[3]

    ax = float(0.0)
    ay = float(0.0)

    for q in range(num_particles):
        if q == tid:
            continue

        other = particles_in[q]
        dx = wp.abs(other[0] - px)
        dy = wp.abs(other[1] - py)
        distance = wp.sqrt(dx * dx + dy * dy)

        x_dir = float(-1.0)
        if other[0] - px > 0.0:
            x_dir = 1.0
        y_dir = float(-1.0)
        if other[1] - py > 0.0:
            y_dir = 1.0

        if distance > MIN_DISTANCE_WP:
            magnitude = wp.min(gravitational_constant / (distance * distance), MAX_ACCELERATION_WP)
            # Rounding can push dx / distance above 1, outside the domain of acos
            ratio = wp.min(dx / distance, 1.0)
            angle = wp.acos(ratio)
            ax = ax + x_dir * wp.cos(angle) * magnitude
            ay = ay + y_dir * wp.sin(angle) * magnitude

    # Kick and drift
    vx = vx + ax * dt
    vy = vy + ay * dt
    px = px + vx * dt
    py = py + vy * dt

    # Boundary clamp
    if px < BOUNDARY_LOW_WP:
        px = BOUNDARY_LOW_WP
        vx = 0.0
    if px > BOUNDARY_HIGH_WP:
        px = BOUNDARY_HIGH_WP
        vx = 0.0
    if py < BOUNDARY_LOW_WP:
        py = BOUNDARY_LOW_WP
        vy = 0.0
    if py > BOUNDARY_HIGH_WP:
        py = BOUNDARY_HIGH_WP
        vy = 0.0

    particles_out[tid] = wp.vec4(px, py, vx, vy)
