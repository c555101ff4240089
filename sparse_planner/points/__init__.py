from .base import NIL_ID, TrajectoryPoint, new_id
from .cartesian import AxialSymmetricPoint, CartesianPoint
from .joint import JointPoint, JointTrajectoryPoint

__all__ = [
    "NIL_ID",
    "new_id",
    "TrajectoryPoint",
    "CartesianPoint",
    "AxialSymmetricPoint",
    "JointPoint",
    "JointTrajectoryPoint",
]
