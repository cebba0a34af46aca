from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from dynroute.algorithms.base import INF, Cost, DistanceMap, NodeID
from dynroute.errors import NoReachableDestination


def select_best(
    costs: DistanceMap,
    candidates: Iterable[NodeID],
    src_node: Optional[NodeID] = None,
) -> Tuple[NodeID, Cost]:
    """
    Pick the nearest candidate destination.

    Candidates are scanned in the given order and the first one reaching the
    minimum distance wins, so ties resolve deterministically. Candidates that
    are missing from the map or at ``INF`` are skipped.

    Args:
        costs: Distance map produced by ``spf``.
        candidates: Destination nodes, in priority order.
        src_node: Start node of the query; only used in the error message.

    Returns:
        A ``(best_node, best_distance)`` tuple.

    Raises:
        NoReachableDestination: If no candidate is reachable, including when
            the candidate list is empty.
    """
    scanned: List[NodeID] = []
    best_node: Optional[NodeID] = None
    best_cost: Cost = INF

    for node in candidates:
        scanned.append(node)
        cost = costs.get(node, INF)
        if cost < best_cost:
            best_node = node
            best_cost = cost

    if best_cost == INF:
        raise NoReachableDestination(scanned, start=src_node)
    return best_node, best_cost
