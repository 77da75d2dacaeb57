# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Packed interchange buffer between host State and compute backends
#
# Layout: N records of 16 bytes, each four native-order float32 values
#   [x, y, vx, vy]  for particle i at bytes [i*16, i*16 + 16)

import numpy as np

from ...errors import ConfigurationError

PARTICLE_DTYPE = np.dtype([("x", "=f4"), ("y", "=f4"), ("vx", "=f4"), ("vy", "=f4")])
FLOATS_PER_PARTICLE = 4
RECORD_SIZE = PARTICLE_DTYPE.itemsize  # 16 bytes


def buffer_size(num_particles: int) -> int:
    """Size in bytes of the buffer for ``num_particles`` particles."""
    return num_particles * RECORD_SIZE


def marshal(state) -> bytearray:
    """
    Pack the positions and velocities of a State into a new buffer.

    Args:
        state: State with particle_q and particle_qd of shape [N, 2]

    Returns:
        bytearray of N * 16 bytes
    """
    records = np.empty(state.particle_count, dtype=PARTICLE_DTYPE)
    if state.particle_count > 0:
        records["x"] = state.particle_q[:, 0]
        records["y"] = state.particle_q[:, 1]
        records["vx"] = state.particle_qd[:, 0]
        records["vy"] = state.particle_qd[:, 1]
    return bytearray(records.tobytes())


def as_float_array(buffer) -> np.ndarray:
    """
    View a buffer as a float32 array of shape [N, 4] without copying.

    Raises:
        ConfigurationError: If the length is not a whole number of records
    """
    if len(buffer) % RECORD_SIZE != 0:
        raise ConfigurationError(
            f"Buffer length {len(buffer)} is not a multiple of the {RECORD_SIZE}-byte particle record"
        )
    return np.frombuffer(buffer, dtype=np.float32).reshape(-1, FLOATS_PER_PARTICLE)


def unmarshal(buffer, state):
    """
    Replace every position and velocity of a State with the buffer contents.

    Args:
        buffer: Bytes-like object of N * 16 bytes
        state: State with N particles (updated in place)

    Returns:
        The updated state

    Raises:
        ConfigurationError: If the buffer does not hold exactly N records
    """
    expected = buffer_size(state.particle_count)
    if len(buffer) != expected:
        raise ConfigurationError(
            f"Buffer holds {len(buffer)} bytes, expected {expected} for {state.particle_count} particles"
        )

    if state.particle_count == 0:
        return state

    data = as_float_array(buffer)
    state.particle_q[:, :] = data[:, 0:2]
    state.particle_qd[:, :] = data[:, 2:4]
    return state
