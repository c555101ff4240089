"""
Test utilities package.

Provides kinematics models, point types and graph doubles for testing the
sparse planner without a real robot model.
"""

from .kinematics import GantryModel, MultiSolutionPoint, RejectingGraph, line_points

__all__ = [
    "GantryModel",
    "MultiSolutionPoint",
    "RejectingGraph",
    "line_points",
]
