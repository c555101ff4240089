"""
Base trajectory point.

Provides point identity and the capability set the planner relies on.
"""

from abc import ABC, abstractmethod
from uuid import UUID, uuid4

import numpy as np
from numpy.typing import ArrayLike, NDArray

# Reserved identifier meaning "no previous/next point"
NIL_ID: UUID = UUID(int=0)


def new_id() -> UUID:
    return uuid4()


class TrajectoryPoint(ABC):
    """
    A waypoint of the dense trajectory.

    Subclasses describe one kind of constraint (fixed pose, free orientation,
    fixed joints); the planner only ever talks to them through the methods
    below, always passing the kinematics model explicitly.
    """

    def __init__(self, point_id: UUID | None = None):
        self._id = point_id if point_id is not None else new_id()

    @property
    def id(self) -> UUID:
        return self._id

    @id.setter
    def id(self, value: UUID) -> None:
        if value == NIL_ID:
            raise ValueError("the nil identifier cannot be assigned to a point")
        self._id = value

    @abstractmethod
    def nearest_joint_pose(self, candidate: ArrayLike, model) -> NDArray[np.float64] | None:
        """Feasible joint pose for this point closest to ``candidate``, or None."""

    @abstractmethod
    def nominal_joint_pose(self, seed: ArrayLike, model) -> NDArray[np.float64] | None:
        """Representative joint pose for this point given ``seed``."""

    @abstractmethod
    def joint_poses(self, model) -> list[NDArray[np.float64]]:
        """Every joint pose satisfying this point; used to build graph rungs."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id})"
