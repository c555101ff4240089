"""
Sparse sampling of a dense trajectory.
"""

from collections.abc import Sequence
import math

from sparse_planner.points import TrajectoryPoint
from sparse_planner.utils.errors import InvalidSamplingParameter


def sampling_stride(dense_length: int, sampling: float) -> int:
    """Stride between sampled points; raises when it would be zero."""
    if dense_length <= 0:
        raise InvalidSamplingParameter("cannot sample an empty trajectory")
    if sampling <= 0 or sampling >= dense_length:
        raise InvalidSamplingParameter(
            f"sampling {sampling} must lie in (0, {dense_length}) for {dense_length} points"
        )
    stride = math.floor(dense_length / sampling)
    if stride <= 0:
        raise InvalidSamplingParameter(f"sampling {sampling} yields a zero stride")
    return stride


def sample_trajectory(dense: Sequence[TrajectoryPoint], sampling: float) -> list[TrajectoryPoint]:
    """
    Every stride-th point starting at the first, plus the last point.

    Args:
        dense: Dense waypoint sequence
        sampling: Target sparse density (0 < sampling < len(dense))

    Returns:
        Sparse subsequence, in dense order
    """
    stride = sampling_stride(len(dense), sampling)
    sparse = [dense[i] for i in range(0, len(dense), stride)]
    if sparse[-1].id != dense[-1].id:
        sparse.append(dense[-1])
    return sparse
