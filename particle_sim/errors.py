# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
#
# Exceptions raised by the particle simulation


class ConfigurationError(ValueError):
    """Invalid simulation setup (constants, particle count, array shapes)."""


class BackendError(RuntimeError):
    """
    Failure of the external compute backend used by the parallel solver.

    Attributes:
        stage: Which stage failed: "init", "build", "transfer", "dispatch"
            or "readback".
    """

    STAGES = ("init", "build", "transfer", "dispatch", "readback")

    def __init__(self, stage: str, message: str):
        if stage not in self.STAGES:
            raise ValueError(f"Unknown backend stage {stage!r}, expected one of {', '.join(self.STAGES)}")
        super().__init__(f"[{stage}] {message}")
        self.stage = stage
