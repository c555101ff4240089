from .dense import DenseTrajectory
from .graph import PlanningGraph
from .interpolation import Replan, Success, interpolate_joint_pose, validate_solution
from .refinement import PlanSummary, RefinementController, RefinementState, next_state
from .sampling import sample_trajectory
from .solution import SparseSolutionEntry, find_nearest_sparse_index, rebuild_solution
from .sparse_planner import SparsePlanner

__all__ = [
    "DenseTrajectory",
    "PlanningGraph",
    "Replan",
    "Success",
    "interpolate_joint_pose",
    "validate_solution",
    "PlanSummary",
    "RefinementController",
    "RefinementState",
    "next_state",
    "sample_trajectory",
    "SparseSolutionEntry",
    "find_nearest_sparse_index",
    "rebuild_solution",
    "SparsePlanner",
]
