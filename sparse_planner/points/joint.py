"""
Joint-space points: solved configurations and fixed joint waypoints.
"""

from dataclasses import dataclass
from uuid import UUID

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .base import TrajectoryPoint


@dataclass(eq=False)
class JointPoint:
    """A solved joint configuration."""

    joints: NDArray[np.float64]

    def __post_init__(self):
        self.joints = np.asarray(self.joints, dtype=np.float64).copy()

    def nominal_pose(self, seed: ArrayLike, model) -> NDArray[np.float64]:
        return model.nominal_pose(self.joints, seed)

    def __eq__(self, other) -> bool:
        if not isinstance(other, JointPoint):
            return NotImplemented
        return self.joints.shape == other.joints.shape and bool(np.allclose(self.joints, other.joints))

    def __len__(self) -> int:
        return len(self.joints)


class JointTrajectoryPoint(TrajectoryPoint):
    """Waypoint pinned to a single joint configuration."""

    def __init__(self, joints: ArrayLike, point_id: UUID | None = None, tolerance: float = 0.0):
        super().__init__(point_id)
        self.joints = np.asarray(joints, dtype=np.float64).copy()
        self.tolerance = tolerance

    def nearest_joint_pose(self, candidate: ArrayLike, model) -> NDArray[np.float64] | None:
        candidate = np.asarray(candidate, dtype=np.float64)
        if candidate.shape != self.joints.shape:
            return None
        if self.tolerance > 0:
            return np.clip(candidate, self.joints - self.tolerance, self.joints + self.tolerance)
        return self.joints.copy()

    def nominal_joint_pose(self, seed: ArrayLike, model) -> NDArray[np.float64] | None:
        return self.joints.copy()

    def joint_poses(self, model) -> list[NDArray[np.float64]]:
        return [self.joints.copy()]
