"""
Refinement controller.

Drives sample -> solve -> validate -> promote until every dense point is
covered by a validated joint pose, or the attempt cap is reached.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID
import logging

from sparse_planner.config import MAX_REPLANNING_ATTEMPTS
from sparse_planner.points import NIL_ID, JointPoint, TrajectoryPoint
from sparse_planner.robot import KinematicsModel
from sparse_planner.utils.errors import RetryExhausted, SparsePlanningError

from .dense import DenseTrajectory
from .graph import PlanningGraph
from .interpolation import Replan, Success, ValidationResult, validate_solution
from .solution import SolutionTable, rebuild_solution

logger = logging.getLogger(__name__)


class RefinementState(Enum):
    """States of one planning request."""
    SAMPLING = "SAMPLING"
    SOLVING = "SOLVING"
    VALIDATING = "VALIDATING"
    PROMOTING = "PROMOTING"
    ACCEPTED = "ACCEPTED"
    EXHAUSTED = "EXHAUSTED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (RefinementState.ACCEPTED, RefinementState.EXHAUSTED, RefinementState.FAILED)


Outcome = ValidationResult | SparsePlanningError | None


def next_state(
    state: RefinementState,
    outcome: Outcome,
    attempts: int,
    max_attempts: int = MAX_REPLANNING_ATTEMPTS,
) -> RefinementState:
    """
    Transition taken after running ``state`` with the given outcome.

    ``outcome`` is the error raised by the step, the validation result when
    leaving VALIDATING, or None. ``attempts`` counts completed solve/validate
    cycles.
    """
    if state.is_terminal:
        raise ValueError(f"no transition out of terminal state {state.value}")
    if isinstance(outcome, SparsePlanningError):
        return RefinementState.FAILED

    if state is RefinementState.SAMPLING:
        return RefinementState.SOLVING
    if state is RefinementState.SOLVING:
        return RefinementState.VALIDATING
    if state is RefinementState.VALIDATING:
        if isinstance(outcome, Success):
            return RefinementState.ACCEPTED
        if isinstance(outcome, Replan):
            return RefinementState.PROMOTING
        raise ValueError(f"VALIDATING requires a validation result, got {outcome!r}")
    # PROMOTING
    if attempts >= max_attempts:
        return RefinementState.EXHAUSTED
    return RefinementState.SOLVING


@dataclass
class PlanSummary:
    """Result of an accepted planning request."""
    planned_count: int
    interpolated_count: int
    attempts: int
    cost: float
    promoted: list[UUID] = field(default_factory=list)


class RefinementController:
    """
    Runs the refinement state machine over a planner's graph and dense store.

    The table and joint-point map are left as they were at the last step when
    a run fails; ``accepted`` tells whether they hold a valid result.
    """

    def __init__(
        self,
        graph: PlanningGraph,
        dense: DenseTrajectory,
        model: KinematicsModel,
        max_attempts: int = MAX_REPLANNING_ATTEMPTS,
    ):
        self.graph = graph
        self.dense = dense
        self.model = model
        self.max_attempts = max_attempts
        self.state = RefinementState.SAMPLING
        self.table: SolutionTable = []
        self.joint_points: dict[UUID, JointPoint] = {}
        self.cost = 0.0
        self.attempts = 0
        self.promoted: list[UUID] = []
        self._result: ValidationResult | None = None

    @property
    def accepted(self) -> bool:
        return self.state is RefinementState.ACCEPTED

    def run(self, seed: Sequence[TrajectoryPoint] | None = None) -> PlanSummary:
        """
        Plan until accepted.

        Args:
            seed: Sparse points to load into the graph first; None reuses the
                graph's current node set.

        Raises:
            RetryExhausted: no convergence within ``max_attempts`` cycles
            SparsePlanningError: any solve, validation or promotion failure
        """
        self.state = RefinementState.SAMPLING
        self.attempts = 0
        self.promoted = []
        self._result = None
        error: SparsePlanningError | None = None

        while not self.state.is_terminal:
            outcome: Outcome = None
            try:
                outcome = self._step(seed)
            except SparsePlanningError as e:
                logger.error(f"Refinement failed while {self.state.value}: {e}")
                error = e
                outcome = e
            self.state = next_state(self.state, outcome, self.attempts, self.max_attempts)
            logger.trace(f"Refinement -> {self.state.value}")  # type: ignore[attr-defined]

        if self.state is RefinementState.FAILED:
            assert error is not None
            raise error
        if self.state is RefinementState.EXHAUSTED:
            raise RetryExhausted(f"no valid trajectory after {self.attempts} attempts")

        summary = PlanSummary(
            planned_count=len(self.table),
            interpolated_count=len(self.dense) - len(self.table),
            attempts=self.attempts,
            cost=self.cost,
            promoted=list(self.promoted),
        )
        logger.info(
            f"Sparse plan succeeded with {summary.planned_count} planned points "
            f"and {summary.interpolated_count} interpolated points"
        )
        return summary

    def _step(self, seed: Sequence[TrajectoryPoint] | None) -> Outcome:
        state = self.state
        if state is RefinementState.SAMPLING:
            if seed is not None:
                self.graph.insert_graph(list(seed))
            return None
        if state is RefinementState.SOLVING:
            self.cost, self.table = rebuild_solution(self.graph, self.dense)
            return None
        if state is RefinementState.VALIDATING:
            self._result = validate_solution(self.table, self.dense, self.model, self.joint_points)
            self.attempts += 1
            return self._result
        if state is RefinementState.PROMOTING:
            assert isinstance(self._result, Replan)
            self._promote(self._result)
            return None
        raise ValueError(f"cannot step from {state.value}")

    def _promote(self, replan: Replan) -> None:
        k = replan.entry_index
        prev_id = self.table[k - 1].waypoint.id if k > 0 else NIL_ID
        next_id = self.table[k].waypoint.id if k < len(self.table) else NIL_ID
        point = self.dense[replan.dense_position]

        self.graph.add(point, prev_id, next_id)
        self.table = []
        self.promoted.append(point.id)
        logger.info(
            f"Added new point to sparse trajectory from dense trajectory at position "
            f"{replan.dense_position}, re-planning entire trajectory"
        )
