"""
Custom exception types for the sparse planning pipeline.
Keep this focused and non-redundant; prefer built-ins where appropriate.
"""

from uuid import UUID


class SparsePlanningError(RuntimeError):
    """Base class for all sparse planning failures."""

    prefix = "Sparse Planning Error"

    def __init__(self, message: str):
        self.original_message = message
        super().__init__(f"{self.prefix}: {message}")

    def __str__(self):
        return f"{self.prefix}: {self.original_message}"


class NotFound(SparsePlanningError):
    """A point identifier is absent from the dense or sparse store."""

    prefix = "Not Found"

    def __init__(self, point_id: UUID, message: str | None = None):
        self.point_id = point_id
        super().__init__(message or f"point {point_id} could not be found")


class WaypointNotInDenseTrajectory(NotFound):
    """A solved sparse point has no counterpart in the dense trajectory."""

    def __init__(self, point_id: UUID):
        super().__init__(point_id, f"sparse point {point_id} is not part of the dense trajectory")


class InvalidSamplingParameter(SparsePlanningError):
    """Sampling density would produce a zero stride."""

    prefix = "Invalid Sampling Parameter"


class MalformedOrdering(SparsePlanningError):
    """The graph's ordering links do not describe a single chain over all nodes."""

    prefix = "Malformed Ordering"


class SizeMismatch(SparsePlanningError):
    """Solved joint point count differs from the sparse Cartesian point count."""

    prefix = "Size Mismatch"


class InterpolationPrecondition(SparsePlanningError):
    """Interpolation was asked for mismatched dimensions or a fraction outside [0, 1]."""

    prefix = "Interpolation Precondition"


class GraphMutationFailure(SparsePlanningError):
    """The planning graph rejected an add/remove/modify request."""

    prefix = "Graph Mutation Failure"


class SolveFailure(SparsePlanningError):
    """The planning graph could not produce a shortest path."""

    prefix = "Solve Failure"


class RetryExhausted(SparsePlanningError):
    """Refinement did not converge within the attempt cap."""

    prefix = "Retry Exhausted"
