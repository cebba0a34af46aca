"""Shortest-path-first (SPF) computation.

Implements Dijkstra with lazy deletion over a graph snapshot. A node may have
several entries in the frontier; an entry whose distance is larger than the
node's recorded best is stale and is skipped when popped, which replaces a
decrease-key operation.

Notes:
    Correctness relies on non-negative weights. They are validated when edges
    are added or updated (see ``RoadGraph``) and are not re-checked here.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Optional, Tuple, Union

from dynroute.algorithms.base import (
    INF,
    Cost,
    DistanceMap,
    NodeID,
    PredecessorMap,
    TieBreak,
)
from dynroute.algorithms.frontier import Frontier
from dynroute.errors import SearchAborted
from dynroute.graph.road_graph import GraphSnapshot, RoadGraph
from dynroute.logging import get_logger

logger = get_logger(__name__)


def spf(
    graph: Union[RoadGraph, GraphSnapshot],
    src_node: NodeID,
    tie_break: TieBreak = TieBreak.INSERTION_ORDER,
    key_func: Optional[Callable[[NodeID], Any]] = None,
    deadline: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Tuple[DistanceMap, PredecessorMap]:
    """Compute shortest distances and predecessors from a source node.

    Args:
        graph: A RoadGraph (a snapshot is taken first) or a GraphSnapshot.
        src_node: The node distances are measured from. It does not have to
            exist in the graph; an unknown source simply reaches nothing.
        tie_break: Order of frontier entries with equal distance. Affects
            which of several equal-cost predecessors is recorded.
        key_func: Key function for TieBreak.USER_DEFINED.
        deadline: Absolute ``time.monotonic()`` value after which the search
            is abandoned.
        cancel_event: Event that abandons the search once set.

    Returns:
        tuple[dict[NodeID, Cost], dict[NodeID, Optional[NodeID]]]:
          - costs: Every node of the graph (plus the source) mapped to its
            minimal distance, or ``INF`` when unreachable.
          - pred: The source mapped to None, every other reached node mapped
            to its predecessor on a shortest path. Unreached nodes are absent.

    Raises:
        SearchAborted: If the deadline passes or cancel_event is set. Both
            are checked once per frontier pop.
    """
    snapshot = graph.snapshot()

    costs: DistanceMap = {node: INF for node in snapshot.nodes()}
    costs[src_node] = 0
    pred: PredecessorMap = {src_node: None}

    frontier = Frontier(tie_break, key_func)
    frontier.push(src_node, 0)

    settled = 0
    stale = 0

    while frontier:
        if cancel_event is not None and cancel_event.is_set():
            raise SearchAborted(src_node, "cancelled", settled)
        if deadline is not None and time.monotonic() > deadline:
            raise SearchAborted(src_node, "deadline exceeded", settled)

        node_id, current_cost = frontier.pop_min()
        if current_cost > costs[node_id]:
            stale += 1
            continue
        settled += 1

        for _, neighbor_id, weight in snapshot.neighbors(node_id):
            new_cost: Cost = current_cost + weight
            if new_cost < costs[neighbor_id]:
                costs[neighbor_id] = new_cost
                pred[neighbor_id] = node_id
                frontier.push(neighbor_id, new_cost)

    logger.debug(
        "SPF from %r (graph version %d): settled=%d, pushes=%d, stale=%d",
        src_node,
        snapshot.version,
        settled,
        frontier.pushes,
        stale,
    )
    return costs, pred
