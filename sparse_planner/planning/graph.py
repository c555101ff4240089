"""
Ladder planning graph over the sparse node set.

Every sparse point contributes one rung holding all of its joint solutions.
Consecutive rungs are fully connected with edges weighted by joint-space
distance; the cheapest path through the ladder is the sparse joint solution.
"""

from types import MappingProxyType
from uuid import UUID
import logging

import numpy as np
from numpy.typing import NDArray
from scipy.sparse import coo_matrix
from scipy.sparse.csgraph import dijkstra

from sparse_planner.points import NIL_ID, JointPoint, TrajectoryPoint
from sparse_planner.robot import KinematicsModel
from sparse_planner.utils.errors import GraphMutationFailure, SolveFailure

from .ordering import OrderingMap, PointInfo, PointLinks, walk_ordering

logger = logging.getLogger(__name__)

# csgraph drops zero-weight entries, so every edge carries this offset
_EDGE_OFFSET = 1e-9


class PlanningGraph:
    """
    Graph adapter holding the sparse points and their IK rungs.

    Args:
        model: Kinematics model used to enumerate rung solutions
        min_nodes: Removals that would shrink the graph below this are rejected
    """

    def __init__(self, model: KinematicsModel, min_nodes: int = 2):
        self.model = model
        self.min_nodes = min_nodes
        self._points: dict[UUID, PointInfo] = {}
        self._rungs: dict[UUID, list[NDArray[np.float64]]] = {}

    @property
    def ordering_map(self) -> OrderingMap:
        return MappingProxyType(self._points)

    def __contains__(self, point_id: UUID) -> bool:
        return point_id in self._points

    def __len__(self) -> int:
        return len(self._points)

    def _rung_for(self, point: TrajectoryPoint) -> list[NDArray[np.float64]]:
        rung = [np.asarray(q, dtype=np.float64) for q in point.joint_poses(self.model)]
        if not rung:
            raise GraphMutationFailure(f"point {point.id} has no joint solutions")
        return rung

    def insert_graph(self, points: list[TrajectoryPoint]) -> None:
        """Replace the node set with ``points`` linked in the given order."""
        if not points:
            raise GraphMutationFailure("cannot build a graph from an empty point list")
        ids = [p.id for p in points]
        if len(set(ids)) != len(ids):
            raise GraphMutationFailure("duplicate point identifiers in graph input")

        rungs = {p.id: self._rung_for(p) for p in points}
        nodes: dict[UUID, PointInfo] = {}
        for i, point in enumerate(points):
            prev_id = ids[i - 1] if i > 0 else NIL_ID
            next_id = ids[i + 1] if i + 1 < len(ids) else NIL_ID
            nodes[point.id] = PointInfo(PointLinks(prev_id, next_id), point)

        self._points = nodes
        self._rungs = rungs
        logger.debug(f"Graph built with {len(nodes)} points")

    def add(self, point: TrajectoryPoint, prev_id: UUID, next_id: UUID) -> None:
        """Insert ``point`` between the adjacent nodes ``prev_id`` and ``next_id``."""
        if point.id in self._points:
            raise GraphMutationFailure(f"point {point.id} is already in the graph")
        for ref in (prev_id, next_id):
            if ref != NIL_ID and ref not in self._points:
                raise GraphMutationFailure(f"neighbour {ref} is not in the graph")
        if prev_id == NIL_ID and next_id == NIL_ID and self._points:
            raise GraphMutationFailure(f"point {point.id} has no neighbours in a non-empty graph")
        if prev_id != NIL_ID and self._points[prev_id].links.id_next != next_id:
            raise GraphMutationFailure(f"points {prev_id} and {next_id} are not adjacent")
        if next_id != NIL_ID and self._points[next_id].links.id_previous != prev_id:
            raise GraphMutationFailure(f"points {prev_id} and {next_id} are not adjacent")

        rung = self._rung_for(point)
        self._points[point.id] = PointInfo(PointLinks(prev_id, next_id), point)
        self._rungs[point.id] = rung
        if prev_id != NIL_ID:
            self._points[prev_id].links.id_next = point.id
        if next_id != NIL_ID:
            self._points[next_id].links.id_previous = point.id
        logger.debug(f"Added point {point.id} between {prev_id} and {next_id}")

    def remove(self, point: TrajectoryPoint) -> None:
        info = self._points.get(point.id)
        if info is None:
            raise GraphMutationFailure(f"point {point.id} is not in the graph")
        if len(self._points) - 1 < self.min_nodes:
            raise GraphMutationFailure(
                f"removing point {point.id} would leave fewer than {self.min_nodes} points"
            )

        prev_id, next_id = info.links.id_previous, info.links.id_next
        if prev_id != NIL_ID:
            self._points[prev_id].links.id_next = next_id
        if next_id != NIL_ID:
            self._points[next_id].links.id_previous = prev_id
        del self._points[point.id]
        del self._rungs[point.id]
        logger.debug(f"Removed point {point.id}")

    def modify(self, point: TrajectoryPoint) -> None:
        """Replace the content of an existing node, keeping its links."""
        info = self._points.get(point.id)
        if info is None:
            raise GraphMutationFailure(f"point {point.id} is not in the graph")
        rung = self._rung_for(point)
        info.source = point
        self._rungs[point.id] = rung
        logger.debug(f"Modified point {point.id}")

    def shortest_path(self) -> tuple[float, list[JointPoint]]:
        """
        Cheapest joint path through the ladder.

        Returns:
            (cost, joint points ordered like the node chain)
        """
        order = walk_ordering(self._points)
        rungs = [self._rungs[pid] for pid in order]

        # Node 0 is a virtual source, the last node a virtual sink
        offsets = np.cumsum([1] + [len(r) for r in rungs])
        sink = int(offsets[-1])
        rows: list[int] = []
        cols: list[int] = []
        weights: list[float] = []

        for j in range(len(rungs[0])):
            rows.append(0)
            cols.append(int(offsets[0]) + j)
            weights.append(_EDGE_OFFSET)
        for r in range(len(rungs) - 1):
            a = np.asarray(rungs[r])
            b = np.asarray(rungs[r + 1])
            dist = np.linalg.norm(a[:, None, :] - b[None, :, :], axis=2)
            for i in range(len(a)):
                for j in range(len(b)):
                    rows.append(int(offsets[r]) + i)
                    cols.append(int(offsets[r + 1]) + j)
                    weights.append(float(dist[i, j]) + _EDGE_OFFSET)
        for i in range(len(rungs[-1])):
            rows.append(int(offsets[len(rungs) - 1]) + i)
            cols.append(sink)
            weights.append(_EDGE_OFFSET)

        graph = coo_matrix((weights, (rows, cols)), shape=(sink + 1, sink + 1)).tocsr()
        dist, predecessors = dijkstra(graph, directed=True, indices=0, return_predecessors=True)
        if not np.isfinite(dist[sink]):
            raise SolveFailure("no path through the planning graph")

        nodes: list[int] = []
        node = int(predecessors[sink])
        while node > 0:
            nodes.append(node)
            node = int(predecessors[node])
        nodes.reverse()
        if len(nodes) != len(rungs):
            raise SolveFailure(f"path visits {len(nodes)} of {len(rungs)} rungs")

        joints: list[NDArray[np.float64]] = []
        for r, node in enumerate(nodes):
            joints.append(rungs[r][node - int(offsets[r])])
        cost = float(sum(np.linalg.norm(b - a) for a, b in zip(joints, joints[1:])))
        logger.debug(f"Shortest path over {len(joints)} points, cost {cost:.4f}")
        return cost, [JointPoint(q) for q in joints]
