"""
Sparse planner: dense trajectory editing on top of the refinement loop.
"""

from collections.abc import Iterable
from uuid import UUID
import logging

from sparse_planner.config import DEFAULT_SAMPLING, MAX_REPLANNING_ATTEMPTS
from sparse_planner.points import NIL_ID, JointPoint, TrajectoryPoint
from sparse_planner.robot import KinematicsModel
from sparse_planner.utils.errors import SparsePlanningError

from .dense import DenseTrajectory
from .graph import PlanningGraph
from .refinement import PlanSummary, RefinementController
from .sampling import sample_trajectory
from .solution import SolutionTable, find_nearest_sparse_index, ordered_sparse_points, sparse_positions

logger = logging.getLogger(__name__)


class SparsePlanner:
    """
    Plans a dense Cartesian trajectory by solving only a sparse subset of it.

    Every public edit locates its reference point first, then mutates the
    graph, then the dense trajectory, then re-runs refinement. An edit that
    fails before refinement leaves both stores untouched.

    Args:
        model: Kinematics model shared by the graph and the validator
        sampling: Target sparse density used by set_trajectory
        graph: Graph adapter; a PlanningGraph over ``model`` by default
        max_attempts: Cap on solve/validate cycles per request
    """

    def __init__(
        self,
        model: KinematicsModel,
        sampling: float = DEFAULT_SAMPLING,
        graph: PlanningGraph | None = None,
        max_attempts: int = MAX_REPLANNING_ATTEMPTS,
    ):
        self.model = model
        self.sampling = sampling
        self.graph = graph if graph is not None else PlanningGraph(model)
        self._dense = DenseTrajectory()
        self._controller = RefinementController(self.graph, self._dense, model, max_attempts=max_attempts)
        self._summary: PlanSummary | None = None

    # ----- Read-only views -----

    @property
    def dense_trajectory(self) -> list[TrajectoryPoint]:
        return list(self._dense)

    @property
    def sparse_solution(self) -> SolutionTable:
        return list(self._controller.table)

    @property
    def solution_valid(self) -> bool:
        return self._controller.accepted

    @property
    def summary(self) -> PlanSummary | None:
        return self._summary

    @property
    def planned_count(self) -> int:
        return len(self._controller.table)

    @property
    def interpolated_count(self) -> int:
        return len(self._dense) - len(self._controller.table)

    @property
    def cost(self) -> float:
        return self._controller.cost

    def set_sampling(self, sampling: float) -> None:
        self.sampling = sampling

    def is_in_sparse_trajectory(self, point_id: UUID) -> bool:
        return point_id in self.graph

    def solution_joint_point(self, point_id: UUID) -> JointPoint | None:
        """Joint point solved or interpolated for ``point_id`` by the last run."""
        return self._controller.joint_points.get(point_id)

    def sparse_ids(self) -> list[UUID]:
        return [p.id for p in ordered_sparse_points(self.graph.ordering_map)]

    # ----- Planning -----

    def set_trajectory(self, points: Iterable[TrajectoryPoint]) -> PlanSummary:
        """
        Load a new dense trajectory, sample it and plan.

        The graph is rebuilt from the sampled points before the dense store is
        replaced; if either check or the rebuild fails, the previous trajectory
        stays loaded.
        """
        points = list(points)
        DenseTrajectory.check_unique(points)
        sparse = sample_trajectory(points, self.sampling)
        self.graph.insert_graph(sparse)
        self._dense.assign(points)
        logger.info(
            f"Sampled trajectory contains {len(sparse)} points from "
            f"{len(points)} points in the dense trajectory"
        )
        return self._plan()

    def _plan(self) -> PlanSummary:
        self._summary = None
        self._summary = self._controller.run()
        return self._summary

    def _bracketing_ids(self, dense_index: int, inclusive: bool) -> tuple[UUID, UUID]:
        """Sparse neighbours around a dense position, NIL_ID at either end."""
        ids = self.sparse_ids()
        positions = sparse_positions(self.graph.ordering_map, self._dense)
        k = find_nearest_sparse_index(positions, dense_index, inclusive=inclusive)
        prev_id = ids[k - 1] if k > 0 else NIL_ID
        next_id = ids[k] if k < len(ids) else NIL_ID
        return prev_id, next_id

    def _check_new_point(self, point: TrajectoryPoint) -> None:
        if point.id in self._dense:
            raise ValueError(f"point {point.id} is already in the dense trajectory")

    # ----- Edit API -----

    def insert_after(self, ref_id: UUID, point: TrajectoryPoint) -> PlanSummary:
        index = self._dense.index_of(ref_id)
        self._check_new_point(point)
        prev_id, next_id = self._bracketing_ids(index, inclusive=False)

        self.graph.add(point, prev_id, next_id)
        self._dense.insert(index + 1, point)
        return self._plan()

    def insert_before(self, ref_id: UUID, point: TrajectoryPoint) -> PlanSummary:
        index = self._dense.index_of(ref_id)
        self._check_new_point(point)
        prev_id, next_id = self._bracketing_ids(index, inclusive=True)

        self.graph.add(point, prev_id, next_id)
        self._dense.insert(index, point)
        return self._plan()

    def remove(self, ref_id: UUID) -> PlanSummary:
        index = self._dense.index_of(ref_id)
        if self.is_in_sparse_trajectory(ref_id):
            self.graph.remove(self._dense[index])
        self._dense.erase(index)
        return self._plan()

    def modify(self, ref_id: UUID, point: TrajectoryPoint) -> PlanSummary:
        """
        Replace the point ``ref_id``; the new content keeps the identifier.

        ``point`` takes the identifier ``ref_id``. If the graph rejects it, its
        previous identifier is restored.
        """
        index = self._dense.index_of(ref_id)
        old_id = point.id
        point.id = ref_id
        try:
            if self.is_in_sparse_trajectory(ref_id):
                self.graph.modify(point)
            else:
                prev_id, next_id = self._bracketing_ids(index, inclusive=False)
                self.graph.add(point, prev_id, next_id)
        except SparsePlanningError:
            point.id = old_id
            raise
        self._dense.replace(index, point)
        return self._plan()

    def __repr__(self) -> str:
        return (
            f"SparsePlanner(dense={len(self._dense)}, sparse={len(self.graph)}, "
            f"sampling={self.sampling}, valid={self.solution_valid})"
        )
