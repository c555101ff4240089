"""
Interpolation and validation of the dense points between sparse solutions.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID
import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray

from sparse_planner.points import JointPoint
from sparse_planner.robot import KinematicsModel
from sparse_planner.utils.errors import InterpolationPrecondition

from .dense import DenseTrajectory
from .solution import SparseSolutionEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    """Every dense point validated."""


@dataclass(frozen=True)
class Replan:
    """
    A dense point failed validation and must be promoted.

    entry_index is the table index of the sparse entry following the point
    (``len(table)`` when the point lies after the last entry).
    """

    entry_index: int
    dense_position: int


ValidationResult = Success | Replan


def interpolate_joint_pose(start: ArrayLike, end: ArrayLike, t: float) -> NDArray[np.float64]:
    """
    Linear joint interpolation, ``end - (end - start) * (1 - t)``.

    Raises:
        InterpolationPrecondition: mismatched dimensions or t outside [0, 1]
    """
    start_arr = np.asarray(start, dtype=np.float64)
    end_arr = np.asarray(end, dtype=np.float64)
    if start_arr.shape != end_arr.shape:
        raise InterpolationPrecondition(f"start has shape {start_arr.shape}, end has shape {end_arr.shape}")
    if not 0.0 <= t <= 1.0:
        raise InterpolationPrecondition(f"fraction {t} outside [0, 1]")
    return end_arr - (end_arr - start_arr) * (1.0 - t)


def validate_solution(
    table: Sequence[SparseSolutionEntry],
    dense: DenseTrajectory,
    model: KinematicsModel,
    joint_points: dict[UUID, JointPoint],
) -> ValidationResult:
    """
    Interpolate between consecutive sparse entries and check every dense point.

    ``joint_points`` is cleared and filled with the sparse solutions and every
    interpolated point that validated. Scanning stops at the first failure,
    which is always the lowest failing dense position.
    """
    joint_points.clear()
    if not table:
        return Success()

    for entry in table:
        joint_points[entry.waypoint.id] = entry.joint_point

    # Dense points before the first sparse entry are not covered by any pair
    if table[0].dense_position > 0:
        logger.debug("Dense position 0 precedes the sparse solution")
        return Replan(0, 0)

    seed = np.zeros(model.degrees_of_freedom())
    for k in range(1, len(table)):
        prev, nxt = table[k - 1], table[k]
        start = prev.joint_point.nominal_pose(seed, model)
        end = nxt.joint_point.nominal_pose(seed, model)

        step = nxt.dense_position - prev.dense_position
        for j in range(1, step):
            pos = prev.dense_position + j
            if pos >= len(dense):
                break
            guess = interpolate_joint_pose(start, end, j / step)
            point = dense[pos]
            q = point.nearest_joint_pose(guess, model)
            if q is None:
                logger.debug(f"Interpolated pose for dense position {pos} is infeasible")
                return Replan(k, pos)
            joint_points[point.id] = JointPoint(q)
            logger.trace(f"Dense position {pos} validated at t={j / step:.3f}")  # type: ignore[attr-defined]

    last = len(dense) - 1
    if table[-1].dense_position < last:
        logger.debug(f"Dense position {last} follows the sparse solution")
        return Replan(len(table), last)
    return Success()
