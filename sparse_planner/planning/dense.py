"""
Dense trajectory store.

Ordered list of waypoints with an id -> index map rebuilt on every mutation,
so other components only ever hold identifiers.
"""

from collections.abc import Iterable, Iterator
from uuid import UUID

from sparse_planner.points import TrajectoryPoint
from sparse_planner.utils.errors import NotFound


class DenseTrajectory:
    """Owns the user-edited sequence of waypoints."""

    def __init__(self, points: Iterable[TrajectoryPoint] = ()):
        self._points: list[TrajectoryPoint] = []
        self._index: dict[UUID, int] = {}
        self.assign(points)

    def _reindex(self) -> None:
        self._index = {p.id: i for i, p in enumerate(self._points)}

    @staticmethod
    def check_unique(points: list[TrajectoryPoint]) -> None:
        ids = [p.id for p in points]
        if len(set(ids)) != len(ids):
            raise ValueError("trajectory point identifiers must be unique")

    def assign(self, points: Iterable[TrajectoryPoint]) -> None:
        points = list(points)
        self.check_unique(points)
        self._points = points
        self._reindex()

    def index_of(self, point_id: UUID) -> int:
        """Dense position of ``point_id``; raises NotFound when absent."""
        try:
            return self._index[point_id]
        except KeyError:
            raise NotFound(point_id, f"point {point_id} could not be found in the dense trajectory") from None

    def find(self, point_id: UUID) -> int | None:
        return self._index.get(point_id)

    def insert(self, position: int, point: TrajectoryPoint) -> None:
        if point.id in self._index:
            raise ValueError(f"point {point.id} is already in the dense trajectory")
        if not 0 <= position <= len(self._points):
            raise IndexError(f"dense position {position} out of range")
        self._points.insert(position, point)
        self._reindex()

    def erase(self, position: int) -> TrajectoryPoint:
        point = self._points.pop(position)
        self._reindex()
        return point

    def replace(self, position: int, point: TrajectoryPoint) -> None:
        current = self._points[position]
        if point.id != current.id and point.id in self._index:
            raise ValueError(f"point {point.id} is already in the dense trajectory")
        self._points[position] = point
        self._reindex()

    def __contains__(self, point_id: UUID) -> bool:
        return point_id in self._index

    def __getitem__(self, position: int) -> TrajectoryPoint:
        return self._points[position]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TrajectoryPoint]:
        return iter(self._points)

    def ids(self) -> list[UUID]:
        return [p.id for p in self._points]
