"""DynRoute: dynamic shortest-path routing to the nearest of several destinations.

DynRoute keeps a directed road graph whose edge weights change over time
(e.g. congestion reports) and answers "which destination is closest, and how
do I get there" queries against the weights in force at query time.

Primary API:
    Router - Owns a graph; build_graph(), update_edge_weight(), query_best_route()
    RoadGraph - Directed graph store with validated, mutable weights
    spf() - Single-source shortest distances and predecessors
    reconstruct() - Route from a predecessor map
    select_best() - Nearest candidate from a distance map

Example:
    from dynroute import Router

    router = Router.build_graph([(1, 2, 5), (2, 3, 4), (1, 3, 12)])
    best = router.query_best_route(1, [3])
    # best.best_node == 3, best.total_distance == 9, best.route == (1, 2, 3)

    router.update_edge_weight(2, 3, 10)
    best = router.query_best_route(1, [3])
    # best.route == (1, 3)
"""

from __future__ import annotations

from dynroute import cli, logging
from dynroute._version import __version__
from dynroute.algorithms.base import INF, TieBreak
from dynroute.algorithms.frontier import Frontier
from dynroute.algorithms.paths import UNREACHABLE, Route, reconstruct
from dynroute.algorithms.select import select_best
from dynroute.algorithms.spf import spf
from dynroute.config import ROUTER_CONFIG, RouterConfig
from dynroute.errors import (
    DynRouteError,
    EdgeNotFound,
    FrontierEmpty,
    InvalidEdge,
    NoReachableDestination,
    SearchAborted,
)
from dynroute.graph.road_graph import Edge, GraphSnapshot, RoadGraph
from dynroute.router import BestRoute, Router, build_graph
from dynroute.scenario import Scenario

__all__ = [
    # Version
    "__version__",
    # Graph
    "RoadGraph",
    "GraphSnapshot",
    "Edge",
    # Algorithms
    "spf",
    "reconstruct",
    "select_best",
    "Frontier",
    "TieBreak",
    "Route",
    "UNREACHABLE",
    "INF",
    # Routing (primary API)
    "Router",
    "BestRoute",
    "build_graph",
    "Scenario",
    # Configuration
    "RouterConfig",
    "ROUTER_CONFIG",
    # Errors
    "DynRouteError",
    "InvalidEdge",
    "EdgeNotFound",
    "FrontierEmpty",
    "NoReachableDestination",
    "SearchAborted",
    # Utilities
    "cli",
    "logging",
]
