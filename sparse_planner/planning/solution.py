"""
Sparse solution table and index helpers.

The table pairs each solved joint point with its Cartesian source and the
source's current dense position, ordered like the graph's node chain.
"""

from collections.abc import Sequence
from typing import NamedTuple
from uuid import UUID
import logging

from sparse_planner.points import JointPoint, TrajectoryPoint
from sparse_planner.utils.errors import MalformedOrdering, SizeMismatch, WaypointNotInDenseTrajectory

from .dense import DenseTrajectory
from .graph import PlanningGraph
from .ordering import OrderingMap, walk_ordering

logger = logging.getLogger(__name__)


class SparseSolutionEntry(NamedTuple):
    dense_position: int
    waypoint: TrajectoryPoint
    joint_point: JointPoint


SolutionTable = list[SparseSolutionEntry]


def ordered_sparse_points(ordering: OrderingMap) -> list[TrajectoryPoint]:
    """Sparse source points in chain order."""
    return [ordering[pid].source for pid in walk_ordering(ordering)]


def sparse_positions(ordering: OrderingMap, dense: DenseTrajectory) -> list[int]:
    """Dense positions of the graph's nodes in chain order."""
    positions = []
    for point in ordered_sparse_points(ordering):
        index = dense.find(point.id)
        if index is None:
            raise WaypointNotInDenseTrajectory(point.id)
        positions.append(index)
    return positions


def rebuild_solution(graph: PlanningGraph, dense: DenseTrajectory) -> tuple[float, SolutionTable]:
    """
    Solve the graph and pair its joint path with dense positions.

    Returns:
        (path cost, table ordered by strictly increasing dense position)

    Raises:
        MalformedOrdering, SizeMismatch, WaypointNotInDenseTrajectory, SolveFailure
    """
    cost, joint_points = graph.shortest_path()
    cart_points = ordered_sparse_points(graph.ordering_map)
    if len(joint_points) != len(cart_points):
        raise SizeMismatch(f"{len(joint_points)} joint points for {len(cart_points)} sparse points")

    table: SolutionTable = []
    for cart_point, joint_point in zip(cart_points, joint_points):
        index = dense.find(cart_point.id)
        if index is None:
            raise WaypointNotInDenseTrajectory(cart_point.id)
        if table and index <= table[-1].dense_position:
            raise MalformedOrdering(
                f"sparse point {cart_point.id} at dense position {index} "
                f"follows position {table[-1].dense_position}"
            )
        table.append(SparseSolutionEntry(index, cart_point, joint_point))
    return cost, table


def find_nearest_sparse_index(positions: Sequence[int], dense_index: int, inclusive: bool = False) -> int:
    """
    Index of the first sparse position after ``dense_index``.

    With ``inclusive`` a sparse point sitting exactly at ``dense_index`` counts
    as "after" (>=); otherwise only strictly greater positions do. Returns
    ``len(positions)`` when no such point exists.
    """
    for i, position in enumerate(positions):
        if position > dense_index or (inclusive and position == dense_index):
            return i
    return len(positions)


def sparse_index_of(table: Sequence[SparseSolutionEntry], point_id: UUID) -> int | None:
    for i, entry in enumerate(table):
        if entry.waypoint.id == point_id:
            return i
    return None
