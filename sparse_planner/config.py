"""
Central configuration for sparse planner tunables and shared constants.
"""

import logging
import os

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")
# Add Logger.trace if missing
if not hasattr(logging.Logger, "trace"):

    def _trace(self, msg, *args, **kwargs):
        if self.isEnabledFor(TRACE):
            self._log(TRACE, msg, args, **kwargs)

    logging.Logger.trace = _trace  # type: ignore[attr-defined]
    logging.TRACE = TRACE  # type: ignore[attr-defined]

TRACE_ENABLED = str(os.getenv("SPARSE_PLANNER_TRACE", "0")).lower() in ("1", "true", "yes", "on")

logger = logging.getLogger(__name__)

# Target sparse density used when seeding the graph (number of samples, not a stride)
DEFAULT_SAMPLING: float = float(os.getenv("SPARSE_PLANNER_SAMPLING", "20"))

# Upper bound on solve/validate cycles for one planning request
MAX_REPLANNING_ATTEMPTS: int = int(os.getenv("SPARSE_PLANNER_MAX_ATTEMPTS", "100"))

# Largest per-joint difference (rad or m) between an interpolated guess and the
# solved pose before the dense point is considered infeasible
MAX_JOINT_DEVIATION: float = float(os.getenv("SPARSE_PLANNER_MAX_JOINT_DEVIATION", "0.1"))

# Number of IK seeds used when enumerating joint solutions for a graph rung
IK_SEEDS: int = int(os.getenv("SPARSE_PLANNER_IK_SEEDS", "16"))

# Two solutions closer than this (rad) are considered duplicates
IK_DUPLICATE_TOL: float = 1e-3

# Discretisation of the free rotation of axially symmetric points (rad)
AXIAL_ORIENTATION_STEP: float = float(os.getenv("SPARSE_PLANNER_AXIAL_STEP", str(3.141592653589793 / 12)))

# Random seed for IK seed generation; keeps planning reproducible
IK_RANDOM_SEED: int = int(os.getenv("SPARSE_PLANNER_IK_RANDOM_SEED", "0"))

LOG_LEVEL_DEFAULT: str = "INFO"
