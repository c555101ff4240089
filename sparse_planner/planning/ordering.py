"""
Linked ordering of the sparse node set.

Each graph node records the ids of its neighbours in solved order; walking the
links from the single head recovers the ordered sparse sequence.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from uuid import UUID

from sparse_planner.points import NIL_ID, TrajectoryPoint
from sparse_planner.utils.errors import MalformedOrdering


@dataclass
class PointLinks:
    id_previous: UUID = NIL_ID
    id_next: UUID = NIL_ID


@dataclass
class PointInfo:
    links: PointLinks
    source: TrajectoryPoint


OrderingMap = Mapping[UUID, PointInfo]


def walk_ordering(ordering: OrderingMap) -> list[UUID]:
    """
    Return node ids in chain order.

    Raises:
        MalformedOrdering: no unique head, a revisited node, a dangling link,
            or a chain that does not cover every node exactly once.
    """
    if not ordering:
        raise MalformedOrdering("ordering map is empty")

    heads = [pid for pid, info in ordering.items() if info.links.id_previous == NIL_ID]
    if len(heads) != 1:
        raise MalformedOrdering(f"expected exactly one chain head, found {len(heads)}")

    ordered: list[UUID] = []
    seen: set[UUID] = set()
    current = heads[0]
    while current != NIL_ID:
        if current in seen:
            raise MalformedOrdering(f"point {current} is visited twice")
        info = ordering.get(current)
        if info is None:
            raise MalformedOrdering(f"link to unknown point {current}")
        seen.add(current)
        ordered.append(current)
        current = info.links.id_next

    if len(ordered) != len(ordering):
        raise MalformedOrdering(f"chain covers {len(ordered)} of {len(ordering)} points")
    return ordered
