"""
Cartesian waypoints.

A CartesianPoint pins the full tool pose. An AxialSymmetricPoint leaves the
rotation about the tool Z axis free and samples it at a fixed step.
"""

from uuid import UUID
import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
from spatialmath import SE3

from sparse_planner.config import AXIAL_ORIENTATION_STEP, MAX_JOINT_DEVIATION

from .base import TrajectoryPoint

logger = logging.getLogger(__name__)


class CartesianPoint(TrajectoryPoint):
    """
    Fully constrained tool pose.

    Args:
        pose: Target tool pose in the robot base frame
        point_id: Identifier to keep (a new one is generated when omitted)
        max_joint_deviation: Largest per-joint distance between a candidate
            configuration and the solved one for the candidate to be accepted
    """

    def __init__(
        self,
        pose: SE3,
        point_id: UUID | None = None,
        max_joint_deviation: float = MAX_JOINT_DEVIATION,
    ):
        super().__init__(point_id)
        self.pose = SE3(pose)
        self.max_joint_deviation = max_joint_deviation

    @classmethod
    def from_xyzrpy(cls, xyzrpy, point_id: UUID | None = None, **kwargs) -> "CartesianPoint":
        """Build from [x, y, z, roll, pitch, yaw] (metres, degrees)."""
        pose = SE3(xyzrpy[0], xyzrpy[1], xyzrpy[2]) * SE3.RPY(xyzrpy[3:6], unit="deg", order="xyz")
        return cls(pose, point_id=point_id, **kwargs)

    def candidate_poses(self) -> list[SE3]:
        return [self.pose]

    def _accept(self, q: NDArray[np.float64] | None, candidate: NDArray[np.float64]) -> bool:
        if q is None or q.shape != candidate.shape:
            return False
        return bool(np.max(np.abs(q - candidate)) <= self.max_joint_deviation)

    def nearest_joint_pose(self, candidate: ArrayLike, model) -> NDArray[np.float64] | None:
        candidate = np.asarray(candidate, dtype=np.float64)
        best = None
        best_dist = np.inf
        for target in self.candidate_poses():
            q = model.nearest_feasible_pose(target, candidate)
            if not self._accept(q, candidate):
                continue
            dist = float(np.linalg.norm(q - candidate))
            if dist < best_dist:
                best, best_dist = q, dist
        return best

    def nominal_joint_pose(self, seed: ArrayLike, model) -> NDArray[np.float64] | None:
        return model.nearest_feasible_pose(self.pose, seed)

    def joint_poses(self, model) -> list[NDArray[np.float64]]:
        poses: list[NDArray[np.float64]] = []
        for target in self.candidate_poses():
            poses.extend(model.joint_solutions(target))
        if not poses:
            logger.debug(f"No joint solutions for point {self.id}")
        return poses


class AxialSymmetricPoint(CartesianPoint):
    """Tool pose whose rotation about its own Z axis is unconstrained."""

    def __init__(
        self,
        pose: SE3,
        point_id: UUID | None = None,
        orientation_step: float = AXIAL_ORIENTATION_STEP,
        max_joint_deviation: float = MAX_JOINT_DEVIATION,
    ):
        super().__init__(pose, point_id=point_id, max_joint_deviation=max_joint_deviation)
        if orientation_step <= 0:
            raise ValueError("orientation_step must be positive")
        self.orientation_step = orientation_step

    def candidate_poses(self) -> list[SE3]:
        angles = np.arange(-np.pi, np.pi, self.orientation_step)
        return [self.pose * SE3.Rz(a) for a in angles]
