# Kinematics model boundary used by the planner and the planning graph
from abc import ABC, abstractmethod
from collections.abc import Sequence
import logging

import numpy as np
from numpy.typing import ArrayLike, NDArray
import roboticstoolbox as rtb
from spatialmath import SE3

from sparse_planner.config import IK_RANDOM_SEED, IK_SEEDS
from sparse_planner.utils.ik import RobotLike, enumerate_ik_solutions, solve_ik

logger = logging.getLogger(__name__)

JointVector = NDArray[np.float64]


class KinematicsModel(ABC):
    """
    Forward/inverse kinematics as seen by the sparse planner.

    Implementations answer two questions: which joint configurations reach a
    Cartesian pose, and which single configuration reaching it lies closest to
    a seed.
    """

    @abstractmethod
    def degrees_of_freedom(self) -> int:
        ...

    @abstractmethod
    def forward(self, joints: ArrayLike) -> SE3:
        ...

    @abstractmethod
    def nearest_feasible_pose(self, target: SE3, seed: ArrayLike) -> JointVector | None:
        """Joint pose reaching ``target`` closest to ``seed``, or None if unreachable."""

    @abstractmethod
    def joint_solutions(self, target: SE3) -> list[JointVector]:
        """All distinct joint poses found for ``target`` (possibly empty)."""

    def nominal_pose(self, joints: ArrayLike, seed: ArrayLike) -> JointVector:
        """Canonical configuration vector for ``joints``; the seed is a hint only."""
        return np.array(joints, dtype=np.float64)


class RoboticsToolboxModel(KinematicsModel):
    """KinematicsModel backed by a roboticstoolbox robot (DH or ETS based)."""

    def __init__(self, robot: RobotLike, ik_seeds: int = IK_SEEDS, random_seed: int = IK_RANDOM_SEED):
        self.robot = robot
        self.ik_seeds = max(1, int(ik_seeds))
        self.random_seed = random_seed

    @classmethod
    def from_name(cls, name: str, **kwargs) -> "RoboticsToolboxModel":
        """Build from a roboticstoolbox DH model name, e.g. ``"Puma560"``."""
        try:
            factory = getattr(rtb.models.DH, name)
        except AttributeError:
            raise ValueError(f"Unknown roboticstoolbox DH model: {name}") from None
        return cls(factory(), **kwargs)

    def degrees_of_freedom(self) -> int:
        return int(self.robot.n)

    def forward(self, joints: ArrayLike) -> SE3:
        return self.robot.fkine(np.asarray(joints, dtype=np.float64))

    def nearest_feasible_pose(self, target: SE3, seed: ArrayLike) -> JointVector | None:
        res = solve_ik(self.robot, target, np.asarray(seed, dtype=np.float64))
        if not res.success:
            return None
        return np.asarray(res.q, dtype=np.float64)

    def joint_solutions(self, target: SE3) -> list[JointVector]:
        solutions = enumerate_ik_solutions(self.robot, target, self._seeds())
        logger.debug(f"Found {len(solutions)} IK solutions from {self.ik_seeds} seeds")
        return solutions

    def _seeds(self) -> Sequence[JointVector]:
        n = self.degrees_of_freedom()
        qlim = self.robot.qlim
        if qlim is None:
            lo, hi = np.full(n, -np.pi), np.full(n, np.pi)
        else:
            lo, hi = np.asarray(qlim[0, :], dtype=float), np.asarray(qlim[1, :], dtype=float)
        # Same seed set for every target keeps rung contents reproducible
        seeds = [np.clip(np.zeros(n), lo, hi)]
        rng = np.random.default_rng(self.random_seed)
        seeds.extend(rng.uniform(lo, hi) for _ in range(self.ik_seeds - 1))
        return seeds
