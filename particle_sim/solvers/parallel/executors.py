# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Parallel step executors: one data-parallel pass over an interchange buffer

import numpy as np
import warp as wp

from ...errors import BackendError
from ..kernels_host import eval_particle_acceleration, integrate_particles
from . import kernels_particle
from .buffer import as_float_array, buffer_size


class ParallelExecutor:
    """
    Capability that runs one simulation step over a packed buffer.

    Contract: given a buffer of num_particles * 4 float32 values and the
    scalar parameters (num_particles, dt, G), return a new buffer of the
    same shape holding the state one step later. The input buffer is read
    only; no work item observes another's output.
    """

    name = "abstract"

    def dispatch(self, buffer, num_particles: int, dt: float, gravitational_constant: float) -> bytearray:
        raise NotImplementedError("Concrete executors must implement dispatch()")


class EmulatedExecutor(ParallelExecutor):
    """
    Software emulation of the device kernel using numpy on the host.

    Runs the same per-work-item formula as update_particles_2d without any
    external backend, so the parallel solver can be exercised anywhere.
    """

    name = "emulated"

    def dispatch(self, buffer, num_particles, dt, gravitational_constant):
        if len(buffer) != buffer_size(num_particles):
            raise BackendError("transfer", f"Buffer holds {len(buffer)} bytes, expected {buffer_size(num_particles)}")
        if num_particles == 0:
            return bytearray()

        particles_in = as_float_array(buffer)
        xs = np.ascontiguousarray(particles_in[:, 0])
        ys = np.ascontiguousarray(particles_in[:, 1])
        ids = np.arange(num_particles, dtype=np.int32)

        # One "work item" per particle, all reading the untouched input
        acc = np.zeros((num_particles, 2), dtype=np.float32)
        for tid in range(num_particles):
            acc[tid, 0], acc[tid, 1] = eval_particle_acceleration(xs, ys, ids, tid, gravitational_constant)

        particles_out = np.array(particles_in, dtype=np.float32, copy=True)
        q = np.ascontiguousarray(particles_out[:, 0:2])
        qd = np.ascontiguousarray(particles_out[:, 2:4])
        integrate_particles(q, qd, acc, dt)
        particles_out[:, 0:2] = q
        particles_out[:, 2:4] = qd

        return bytearray(particles_out.tobytes())


class WarpExecutor(ParallelExecutor):
    """
    Device-backed executor launching update_particles_2d through NVIDIA Warp.

    The kernel module is compiled for the target device on construction, so
    a missing device or a build failure surfaces at startup.

    Example:
        >>> executor = WarpExecutor(device='cpu')
        >>> out = executor.dispatch(buffer, n, dt=0.01, gravitational_constant=5e-9)
    """

    name = "warp"

    def __init__(self, device='cuda', verbose: bool = True):
        """
        Initialize Warp, select the device and build the kernel module.

        Args:
            device: Warp device ('cuda', 'cuda:0' or 'cpu')
            verbose: Print device information

        Raises:
            BackendError: stage "init" if Warp or the device is unavailable,
                stage "build" if the kernel module fails to compile
        """
        try:
            wp.init()
            self.device = wp.get_device(device)
        except Exception as e:
            raise BackendError("init", f"Warp device '{device}' unavailable: {e}") from e

        try:
            wp.load_module(kernels_particle, device=self.device)
        except Exception as e:
            raise BackendError("build", f"Failed to build particle kernel for {self.device}: {e}") from e

        if verbose:
            print(f"✓ Warp device: {self.device.name} ({self.device.alias})")

    def dispatch(self, buffer, num_particles, dt, gravitational_constant):
        if len(buffer) != buffer_size(num_particles):
            raise BackendError("transfer", f"Buffer holds {len(buffer)} bytes, expected {buffer_size(num_particles)}")
        if num_particles == 0:
            return bytearray()

        try:
            host = as_float_array(buffer)
            particles_in = wp.array(host, dtype=wp.vec4, device=self.device)
            particles_out = wp.empty(num_particles, dtype=wp.vec4, device=self.device)
        except Exception as e:
            raise BackendError("transfer", f"Failed to copy particles to {self.device}: {e}") from e

        try:
            wp.launch(
                kernel=kernels_particle.update_particles_2d,
                dim=num_particles,
                inputs=[
                    particles_in,
                    int(num_particles),
                    float(dt),
                    float(gravitational_constant),
                ],
                outputs=[particles_out],
                device=self.device,
            )
        except Exception as e:
            raise BackendError("dispatch", f"Kernel launch failed on {self.device}: {e}") from e

        try:
            # Blocking read-back
            result = particles_out.numpy()
        except Exception as e:
            raise BackendError("readback", f"Failed to read particles from {self.device}: {e}") from e

        return bytearray(np.ascontiguousarray(result, dtype=np.float32).tobytes())
