"""
Sparse Planner Python Package

Plans dense Cartesian trajectories by running the expensive joint-space graph
search over a sparse subset of waypoints and validating the rest by
interpolation.

Key components:
- SparsePlanner: Dense trajectory editing and planning entry point
- PlanningGraph: Ladder graph over the sparse waypoints
- RoboticsToolboxModel: Kinematics model backed by roboticstoolbox
- CartesianPoint / AxialSymmetricPoint / JointTrajectoryPoint: Waypoint types
"""

from ._version import __version__
from .planning import PlanningGraph, PlanSummary, SparsePlanner
from .points import NIL_ID, AxialSymmetricPoint, CartesianPoint, JointPoint, JointTrajectoryPoint, TrajectoryPoint
from .robot import KinematicsModel, RoboticsToolboxModel

__all__ = [
    "__version__",
    "SparsePlanner",
    "PlanningGraph",
    "PlanSummary",
    "NIL_ID",
    "TrajectoryPoint",
    "CartesianPoint",
    "AxialSymmetricPoint",
    "JointPoint",
    "JointTrajectoryPoint",
    "KinematicsModel",
    "RoboticsToolboxModel",
]
