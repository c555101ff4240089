"""
roboticstoolbox IK helpers for the kinematics models.
"""

import numpy as np
import logging
from collections import namedtuple
from typing import Union

from roboticstoolbox import DHRobot, Robot
from spatialmath import SE3

from sparse_planner.config import IK_DUPLICATE_TOL

logger = logging.getLogger(__name__)

RobotLike = Union[DHRobot, Robot]


def unwrap_angles(q_solution, q_current):
    """
    Shift each joint of ``q_solution`` by 2*pi where that brings it closer to ``q_current``.
    """
    qs = np.asarray(q_solution, dtype=float)
    qc = np.asarray(q_current, dtype=float)
    diff = qs - qc
    q_unwrapped = qs.copy()
    q_unwrapped[diff > np.pi] -= 2 * np.pi
    q_unwrapped[diff < -np.pi] += 2 * np.pi
    return q_unwrapped


def within_limits(robot: RobotLike, q) -> bool:
    """True when every joint of ``q`` lies inside the robot's joint limits."""
    qlim = robot.qlim
    if qlim is None:
        return True
    q = np.asarray(q, dtype=float)
    return bool(np.all(q >= qlim[0, :] - 1e-9) and np.all(q <= qlim[1, :] + 1e-9))


IKResult = namedtuple('IKResult', 'success q iterations residual')


def solve_ik(robot: RobotLike, target_pose: SE3, seed, searches: int = 1) -> IKResult:
    """
    Levenberg-Marquardt IK for ``target_pose`` started from ``seed``.

    The returned configuration respects the joint limits. When a 2*pi shifted
    copy of it stays inside the limits and is closer to ``seed``, the copy is
    returned instead.

    Args:
        robot: DH or ETS robot model
        target_pose: Pose to reach
        seed: Starting joint configuration in radians
        searches: Random restarts allowed after the seeded search fails

    Returns:
        IKResult; ``q`` is None when no solution was found
    """
    seed = np.asarray(seed, dtype=float)
    result = robot.ets().ik_LM(
        target_pose,
        q0=seed,
        slimit=searches,
        tol=1e-10,
        joint_limits=True,
        k=0.0,
        method="sugihara",
    )
    # Older releases return a 5-tuple, newer ones an IKSolution with a trailing reason
    q, found, iterations, _searches, residual = tuple(result)[:5]
    if not found:
        logger.trace(f"IK failed after {iterations} iterations (residual {residual})")  # type: ignore[attr-defined]
        return IKResult(False, None, iterations, residual)

    q_near = unwrap_angles(q, seed)
    if within_limits(robot, q_near):
        q = q_near
    return IKResult(True, np.asarray(q, dtype=float), iterations, residual)


def enumerate_ik_solutions(robot: RobotLike, target_pose: SE3, seeds) -> list[np.ndarray]:
    """
    Collect distinct IK solutions for ``target_pose`` by solving from every seed.

    Solutions closer than IK_DUPLICATE_TOL to one already collected are dropped.
    """
    solutions: list[np.ndarray] = []
    for seed in seeds:
        res = solve_ik(robot, target_pose, seed)
        if not res.success:
            continue
        q = np.asarray(res.q, dtype=float)
        if any(np.max(np.abs(q - s)) < IK_DUPLICATE_TOL for s in solutions):
            continue
        solutions.append(q)
    return solutions
