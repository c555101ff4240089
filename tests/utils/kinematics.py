"""
Lightweight kinematics and point fixtures for planner tests.

GantryModel is an XYZ prismatic robot: joint values equal the tool position,
so interpolation behaviour can be reasoned about exactly.
"""

from uuid import UUID

import numpy as np
from spatialmath import SE3

from sparse_planner.planning import PlanningGraph
from sparse_planner.points import CartesianPoint, TrajectoryPoint
from sparse_planner.robot import KinematicsModel
from sparse_planner.utils.errors import GraphMutationFailure


class GantryModel(KinematicsModel):
    """Three prismatic joints along X, Y, Z with a box workspace."""

    def __init__(self, lower=(-10.0, -10.0, -10.0), upper=(10.0, 10.0, 10.0)):
        self.lower = np.asarray(lower, dtype=float)
        self.upper = np.asarray(upper, dtype=float)
        self.ik_calls = 0

    def degrees_of_freedom(self) -> int:
        return 3

    def forward(self, joints) -> SE3:
        q = np.asarray(joints, dtype=float)
        return SE3(q[0], q[1], q[2])

    def reachable(self, target: SE3) -> bool:
        t = np.asarray(target.t, dtype=float)
        return bool(np.all(t >= self.lower) and np.all(t <= self.upper))

    def nearest_feasible_pose(self, target: SE3, seed):
        self.ik_calls += 1
        if not self.reachable(target):
            return None
        return np.asarray(target.t, dtype=float).copy()

    def joint_solutions(self, target: SE3):
        if not self.reachable(target):
            return []
        return [np.asarray(target.t, dtype=float).copy()]


class MultiSolutionPoint(TrajectoryPoint):
    """Point with an explicit list of joint solutions."""

    def __init__(self, solutions, point_id: UUID | None = None, tolerance: float = 0.1):
        super().__init__(point_id)
        self.solutions = [np.asarray(s, dtype=float) for s in solutions]
        self.tolerance = tolerance

    def nearest_joint_pose(self, candidate, model):
        candidate = np.asarray(candidate, dtype=float)
        best = min(self.solutions, key=lambda s: float(np.linalg.norm(s - candidate)), default=None)
        if best is None or np.max(np.abs(best - candidate)) > self.tolerance:
            return None
        return best.copy()

    def nominal_joint_pose(self, seed, model):
        return self.solutions[0].copy() if self.solutions else None

    def joint_poses(self, model):
        return [s.copy() for s in self.solutions]


class RejectingGraph(PlanningGraph):
    """Planning graph that refuses selected mutations."""

    def __init__(self, model, reject_remove: bool = False, reject_add: bool = False):
        super().__init__(model)
        self.reject_remove = reject_remove
        self.reject_add = reject_add

    def remove(self, point):
        if self.reject_remove:
            raise GraphMutationFailure(f"point {point.id} cannot be removed")
        super().remove(point)

    def add(self, point, prev_id, next_id):
        if self.reject_add:
            raise GraphMutationFailure(f"point {point.id} cannot be added")
        super().add(point, prev_id, next_id)


def line_points(n: int = 10, offsets: dict[int, float] | None = None, spacing: float = 0.1) -> list[CartesianPoint]:
    """
    ``n`` points along X; ``offsets`` maps a point index to a Y displacement.
    """
    offsets = offsets or {}
    return [CartesianPoint(SE3(i * spacing, offsets.get(i, 0.0), 0.0)) for i in range(n)]
