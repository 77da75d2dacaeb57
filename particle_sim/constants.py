# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Fixed numerical constants shared by the host and device kernels

# Pairs closer than this contribute no force
MIN_DISTANCE = 0.001

# Cap on the acceleration contributed by a single pair
MAX_ACCELERATION = 1.0

# Boundary clamp on both axes
BOUNDARY_LOW = 0.05
BOUNDARY_HIGH = 0.95

# Initial velocity components are drawn from [-INITIAL_SPEED, INITIAL_SPEED)
INITIAL_SPEED = 0.05
