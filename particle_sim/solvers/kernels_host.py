# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Host (numpy) versions of the pairwise force and integration kernels.
# Same formula as kernels_particle.update_particles_2d, in float32.

import numpy as np

from ..constants import BOUNDARY_HIGH, BOUNDARY_LOW, MAX_ACCELERATION, MIN_DISTANCE


def eval_particle_acceleration(xs, ys, ids, i, gravitational_constant):
    """
    Net acceleration on particle ``i`` from every other particle.

    For each other particle q:

        dx, dy    = |q.x - i.x|, |q.y - i.y|
        distance  = sqrt(dx² + dy²)             (skipped when <= MIN_DISTANCE)
        magnitude = min(G / distance², 1)
        angle     = acos(min(dx / distance, 1))
        a        += (dir_x * cos(angle), dir_y * sin(angle)) * magnitude

    dir_x is +1 when q.x > i.x and -1 otherwise (ties give -1), same for y.

    Args:
        xs, ys: Pre-step x and y positions, shape [N], float32
        ids: Particle identities, shape [N]
        i: Index of the particle to evaluate
        gravitational_constant: Force constant G

    Returns:
        (ax, ay) as float32
    """
    offset_x = xs - xs[i]
    offset_y = ys - ys[i]
    dx = np.abs(offset_x)
    dy = np.abs(offset_y)
    distance = np.sqrt(dx * dx + dy * dy)

    active = (ids != ids[i]) & (distance > np.float32(MIN_DISTANCE))
    if not np.any(active):
        return np.float32(0.0), np.float32(0.0)

    dx = dx[active]
    distance = distance[active]
    x_dir = np.where(offset_x[active] > 0.0, np.float32(1.0), np.float32(-1.0))
    y_dir = np.where(offset_y[active] > 0.0, np.float32(1.0), np.float32(-1.0))

    magnitude = np.minimum(np.float32(gravitational_constant) / (distance * distance), np.float32(MAX_ACCELERATION))
    # dx / distance can exceed 1 by rounding, which acos rejects
    ratio = np.minimum(dx / distance, np.float32(1.0))
    angle = np.arccos(ratio)

    ax = np.sum(x_dir * np.cos(angle) * magnitude, dtype=np.float32)
    ay = np.sum(y_dir * np.sin(angle) * magnitude, dtype=np.float32)
    return ax, ay


def eval_accelerations(q, ids, gravitational_constant):
    """
    Stage the accelerations of every particle from one position snapshot.

    Args:
        q: Positions, shape [N, 2], float32 (not modified)
        ids: Particle identities, shape [N]
        gravitational_constant: Force constant G

    Returns:
        Accelerations, shape [N, 2], float32
    """
    n = len(q)
    acc = np.zeros((n, 2), dtype=np.float32)
    if n == 0:
        return acc

    xs = np.ascontiguousarray(q[:, 0], dtype=np.float32)
    ys = np.ascontiguousarray(q[:, 1], dtype=np.float32)
    for i in range(n):
        acc[i, 0], acc[i, 1] = eval_particle_acceleration(xs, ys, ids, i, gravitational_constant)
    return acc


def integrate_particles(q, qd, acc, dt):
    """
    Explicit Euler update followed by the boundary clamp, in place.

        v += a * dt
        x += v * dt

    Any axis whose position leaves [BOUNDARY_LOW, BOUNDARY_HIGH] is set to
    the bound and its velocity on that axis to exactly zero.

    Args:
        q: Positions, shape [N, 2], float32 (updated)
        qd: Velocities, shape [N, 2], float32 (updated)
        acc: Accelerations, shape [N, 2], float32
        dt: Time step
    """
    dt = np.float32(dt)
    qd += acc * dt
    q += qd * dt

    low = q < np.float32(BOUNDARY_LOW)
    q[low] = np.float32(BOUNDARY_LOW)
    qd[low] = 0.0

    high = q > np.float32(BOUNDARY_HIGH)
    q[high] = np.float32(BOUNDARY_HIGH)
    qd[high] = 0.0
