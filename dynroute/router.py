"""Best-destination routing over a mutable road graph.

`Router` is the call interface for callers that build a graph once, feed it
weight updates (e.g. traffic reports) and ask for the nearest of several
destinations. Each query takes a fresh snapshot of the graph and recomputes
shortest paths from scratch, so results always match the weights at query
time and concurrent updates never produce torn reads.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from dynroute.algorithms.base import INF, Cost, NodeID, json_cost
from dynroute.algorithms.paths import Route, reconstruct
from dynroute.algorithms.select import select_best
from dynroute.algorithms.spf import spf
from dynroute.config import ROUTER_CONFIG, RouterConfig
from dynroute.graph.road_graph import RoadGraph
from dynroute.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class BestRoute:
    """Result of a best-destination query.

    Attributes:
        start: Start node of the query.
        best_node: Nearest reachable candidate.
        total_distance: Distance from start to best_node.
        route: Nodes from start to best_node, both included.
        distances: Distance to every candidate in input order (``INF`` when
            unreachable).
        graph_version: Graph version the query was computed against.
    """

    start: NodeID
    best_node: NodeID
    total_distance: Cost
    route: Tuple[NodeID, ...]
    distances: Tuple[Tuple[NodeID, Cost], ...] = field(default=())
    graph_version: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dictionary; unreachable distances become None."""
        return {
            "start": self.start,
            "best_node": self.best_node,
            "total_distance": self.total_distance,
            "route": list(self.route),
            "distances": [
                {"node": node, "distance": json_cost(cost)}
                for node, cost in self.distances
            ],
            "graph_version": self.graph_version,
        }


class Router:
    """Owns a RoadGraph and answers route queries against it.

    Args:
        graph: Graph to route over. A new empty graph is used when omitted.
        config: Defaults for tie-breaking and query timeouts. Falls back to
            the global ``ROUTER_CONFIG``.
        key_func: Key function used when the tie-break policy is
            TieBreak.USER_DEFINED.
    """

    def __init__(
        self,
        graph: Optional[RoadGraph] = None,
        config: Optional[RouterConfig] = None,
        key_func: Optional[Callable[[NodeID], Any]] = None,
    ) -> None:
        self.graph = graph if graph is not None else RoadGraph()
        self.config = config if config is not None else ROUTER_CONFIG
        self.key_func = key_func

    @classmethod
    def build_graph(
        cls,
        edges: Iterable[Tuple[NodeID, NodeID, Cost]],
        bidirectional: Optional[bool] = None,
        config: Optional[RouterConfig] = None,
    ) -> Router:
        """Create a router over a graph built from ``(source, target, weight)`` triples.

        Args:
            edges: Edge triples.
            bidirectional: Add the reverse of every edge too. Defaults to
                ``config.bidirectional``.
            config: Router configuration.

        Raises:
            InvalidEdge: If any weight is negative or not a number.
        """
        cfg = config if config is not None else ROUTER_CONFIG
        if bidirectional is None:
            bidirectional = cfg.bidirectional
        graph = RoadGraph.from_edges(edges, bidirectional=bidirectional)
        logger.debug(
            f"Built graph with {len(graph)} nodes and {graph.edge_count()} edges"
        )
        return cls(graph, cfg)

    def update_edge_weight(
        self, source: NodeID, target: NodeID, new_weight: Cost
    ) -> Cost:
        """Apply a weight update to an existing edge and return the old weight.

        Raises:
            EdgeNotFound: If the edge does not exist. The graph is unchanged.
            InvalidEdge: If new_weight is negative or not a number.
        """
        return self.graph.update_weight(source, target, new_weight)

    def query_best_route(
        self,
        start: NodeID,
        candidates: Sequence[NodeID],
        timeout_s: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> BestRoute:
        """Find the nearest candidate from ``start`` and the route to it.

        Args:
            start: Start node.
            candidates: Destinations in priority order; on equal distance the
                earlier candidate wins.
            timeout_s: Time budget for the search; overrides
                ``config.default_timeout_s``.
            cancel_event: Event that abandons the search once set.

        Returns:
            BestRoute for the nearest reachable candidate.

        Raises:
            NoReachableDestination: If no candidate is reachable from start.
            SearchAborted: If the time budget runs out or the query is cancelled.
        """
        snapshot = self.graph.snapshot()
        costs, pred = spf(
            snapshot,
            start,
            tie_break=self.config.tie_break,
            key_func=self.key_func,
            deadline=self.config.deadline_from_now(timeout_s),
            cancel_event=cancel_event,
        )
        candidates = list(candidates)
        best_node, best_cost = select_best(costs, candidates, src_node=start)
        route = reconstruct(pred, best_node, costs)

        result = BestRoute(
            start=start,
            best_node=best_node,
            total_distance=best_cost,
            route=route.nodes,
            distances=tuple((c, costs.get(c, INF)) for c in candidates),
            graph_version=snapshot.version,
        )
        logger.debug(
            f"Best route from {start}: {best_node} at {best_cost} via {list(route.nodes)}"
        )
        return result

    def route_to(
        self,
        start: NodeID,
        target: NodeID,
        timeout_s: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> Route:
        """Return the shortest route to a single target, or UNREACHABLE."""
        costs, pred = spf(
            self.graph,
            start,
            tie_break=self.config.tie_break,
            key_func=self.key_func,
            deadline=self.config.deadline_from_now(timeout_s),
            cancel_event=cancel_event,
        )
        return reconstruct(pred, target, costs)

    def distances_from(self, start: NodeID) -> Dict[NodeID, Cost]:
        """Return the full distance map from ``start`` at current weights."""
        costs, _ = spf(
            self.graph, start, tie_break=self.config.tie_break, key_func=self.key_func
        )
        return costs


def build_graph(
    edges: Iterable[Tuple[NodeID, NodeID, Cost]], bidirectional: bool = False
) -> RoadGraph:
    """Build a RoadGraph from ``(source, target, weight)`` triples."""
    return RoadGraph.from_edges(edges, bidirectional=bidirectional)
