"""Directed road graph with validated, mutable edge weights.

`RoadGraph` owns a `networkx.DiGraph` and is the only holder of writable edge
weights. It enforces non-negative weights at insertion and update time, keeps a
single edge per ordered node pair (re-adding an edge overwrites its weight),
and hands out immutable `GraphSnapshot` copies for shortest-path queries so a
query never observes a half-applied update.

Staleness contract: distance and predecessor maps computed from a snapshot are
valid only for the weights of that snapshot. The graph does not track or
invalidate results held by callers; compare ``GraphSnapshot.version`` with
``RoadGraph.version`` to detect that a result is out of date.
"""

from __future__ import annotations

import math
import threading
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Tuple,
)

import networkx as nx

from dynroute.algorithms.base import Cost, NodeID, json_cost
from dynroute.errors import EdgeNotFound, InvalidEdge
from dynroute.logging import get_logger

logger = get_logger(__name__)

WEIGHT_ATTR = "weight"


class Edge(NamedTuple):
    """A directed, weighted edge."""

    source: NodeID
    target: NodeID
    weight: Cost


def validate_weight(source: NodeID, target: NodeID, weight: Any) -> Cost:
    """Return ``weight`` if it is a usable edge weight.

    Infinite weights are accepted and make the edge unusable for routing.

    Raises:
        InvalidEdge: If weight is not a real number, is NaN, or is negative.
    """
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidEdge(source, target, weight)
    if math.isnan(weight) or weight < 0:
        raise InvalidEdge(source, target, weight)
    return weight


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable copy of a graph's adjacency taken at one instant.

    Attributes:
        adjacency: Node -> tuple of outgoing edges, in insertion order.
        version: The graph's mutation counter when the copy was taken.
    """

    adjacency: Mapping[NodeID, Tuple[Edge, ...]]
    version: int = 0

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency

    def __len__(self) -> int:
        return len(self.adjacency)

    def nodes(self) -> Iterator[NodeID]:
        return iter(self.adjacency)

    def neighbors(self, node: NodeID) -> Tuple[Edge, ...]:
        return self.adjacency.get(node, ())

    def snapshot(self) -> GraphSnapshot:
        return self

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self.adjacency.values())


class OutEdgeView:
    """Lazy, restartable view of a node's outgoing edges.

    Each iteration reads the current weights; an unknown node yields nothing.
    """

    __slots__ = ("_graph", "_node")

    def __init__(self, graph: RoadGraph, node: NodeID) -> None:
        self._graph = graph
        self._node = node

    def __iter__(self) -> Iterator[Edge]:
        with self._graph._lock:
            if self._node not in self._graph._g:
                return iter(())
            edges = [
                Edge(self._node, target, attr[WEIGHT_ATTR])
                for target, attr in self._graph._g.succ[self._node].items()
            ]
        return iter(edges)

    def __len__(self) -> int:
        with self._graph._lock:
            if self._node not in self._graph._g:
                return 0
            return len(self._graph._g.succ[self._node])

    def __repr__(self) -> str:
        return f"OutEdgeView({self._node!r}, {list(self)!r})"


class RoadGraph:
    """Directed graph of nodes joined by non-negatively weighted edges.

    This class enforces:
      - Weights are real numbers >= 0 (``InvalidEdge`` otherwise).
      - At most one edge per ordered node pair; ``add_edge`` on an existing
        pair overwrites the weight.
      - ``update_weight`` only touches existing edges (``EdgeNotFound``
        otherwise) and leaves the graph untouched on failure.
      - Mutations and snapshots are serialized by an internal lock.

    Attributes:
        _g: Backing ``networkx.DiGraph``; never exposed directly.
        _version: Counter advanced by every successful mutation.
    """

    def __init__(self) -> None:
        self._g = nx.DiGraph()
        self._lock = threading.RLock()
        self._version = 0

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[NodeID, NodeID, Cost]],
        bidirectional: bool = False,
    ) -> RoadGraph:
        """Build a graph from ``(source, target, weight)`` triples.

        Args:
            edges: Edge triples, applied in order; later duplicates win.
            bidirectional: If True, also add ``target -> source`` with the
                same weight for every triple.

        Raises:
            InvalidEdge: On the first triple with an invalid weight.
            ValueError: If an item is not a 3-item sequence.
        """
        graph = cls()
        for item in edges:
            try:
                source, target, weight = item
            except (TypeError, ValueError) as exc:
                raise ValueError(
                    f"Edge entries must be (source, target, weight) triples, got {item!r}"
                ) from exc
            graph.add_edge(source, target, weight)
            if bidirectional:
                graph.add_edge(target, source, weight)
        return graph

    def __contains__(self, node: object) -> bool:
        return node in self._g

    def __len__(self) -> int:
        return self._g.number_of_nodes()

    def __repr__(self) -> str:
        return (
            f"RoadGraph(nodes={len(self)}, edges={self.edge_count()}, "
            f"version={self._version})"
        )

    @property
    def version(self) -> int:
        """Mutation counter; results from older snapshots are stale."""
        return self._version

    #
    # Node management
    #
    def add_node(self, node: NodeID) -> None:
        """Add a node if absent. Existing nodes and their edges are kept."""
        with self._lock:
            if node in self._g:
                return
            self._g.add_node(node)
            self._version += 1

    def nodes(self) -> List[NodeID]:
        """Return all nodes in insertion order."""
        with self._lock:
            return list(self._g.nodes)

    #
    # Edge management
    #
    def add_edge(self, source: NodeID, target: NodeID, weight: Cost) -> None:
        """Add ``source -> target`` or overwrite its weight.

        Missing endpoints are created.

        Raises:
            InvalidEdge: If weight is negative or not a real number.
        """
        validate_weight(source, target, weight)
        with self._lock:
            self._g.add_edge(source, target, **{WEIGHT_ATTR: weight})
            self._version += 1
        logger.debug(f"Edge {source} -> {target} set to weight {weight}")

    def update_weight(self, source: NodeID, target: NodeID, new_weight: Cost) -> Cost:
        """Change the weight of an existing directed edge.

        Any distance or predecessor map computed before this call is stale
        afterwards. The graph does not notify holders of such maps; callers
        must recompute instead of reusing them.

        Returns:
            The previous weight.

        Raises:
            EdgeNotFound: If there is no ``source -> target`` edge.
            InvalidEdge: If new_weight is negative or not a real number.
        """
        with self._lock:
            if not self._g.has_edge(source, target):
                raise EdgeNotFound(source, target)
            validate_weight(source, target, new_weight)
            attr = self._g.edges[source, target]
            old_weight = attr[WEIGHT_ATTR]
            attr[WEIGHT_ATTR] = new_weight
            self._version += 1
        logger.info(
            f"Weight of {source} -> {target} updated: {old_weight} -> {new_weight}"
        )
        return old_weight

    def has_edge(self, source: NodeID, target: NodeID) -> bool:
        with self._lock:
            return self._g.has_edge(source, target)

    def weight(self, source: NodeID, target: NodeID) -> Cost:
        """Return the weight of ``source -> target``.

        Raises:
            EdgeNotFound: If the edge does not exist.
        """
        with self._lock:
            if not self._g.has_edge(source, target):
                raise EdgeNotFound(source, target)
            return self._g.edges[source, target][WEIGHT_ATTR]

    def edge_count(self) -> int:
        with self._lock:
            return self._g.number_of_edges()

    def edges(self) -> List[Edge]:
        """Return all edges grouped by source, in insertion order."""
        with self._lock:
            return [
                Edge(u, v, attr[WEIGHT_ATTR]) for u, v, attr in self._g.edges(data=True)
            ]

    def neighbors(self, node: NodeID) -> OutEdgeView:
        """Outgoing edges of ``node``; empty for unknown or sink nodes."""
        return OutEdgeView(self, node)

    #
    # Copies and conversions
    #
    def snapshot(self) -> GraphSnapshot:
        """Return an immutable copy of the adjacency and weights."""
        with self._lock:
            adjacency: Dict[NodeID, Tuple[Edge, ...]] = {
                u: tuple(Edge(u, v, attr[WEIGHT_ATTR]) for v, attr in nbrs.items())
                for u, nbrs in self._g.succ.items()
            }
            version = self._version
        return GraphSnapshot(MappingProxyType(adjacency), version)

    def to_networkx(self) -> nx.DiGraph:
        """Return an independent ``networkx.DiGraph`` copy."""
        with self._lock:
            return self._g.copy()

    def to_dict(self) -> Dict[str, Any]:
        """Return a node-link dictionary suitable for JSON serialization.

        Closed roads (infinite weight) are exported with a null weight.
        """
        with self._lock:
            return {
                "directed": True,
                "version": self._version,
                "nodes": [{"id": n} for n in self._g.nodes],
                "links": [
                    {
                        "source": u,
                        "target": v,
                        WEIGHT_ATTR: json_cost(attr[WEIGHT_ATTR]),
                    }
                    for u, v, attr in self._g.edges(data=True)
                ],
            }

    @classmethod
    def from_networkx(
        cls, nx_graph: nx.DiGraph, weight: str = WEIGHT_ATTR, default: Optional[Cost] = 1
    ) -> RoadGraph:
        """Build a graph from a NetworkX directed graph.

        Args:
            nx_graph: Source graph. Undirected graphs are converted with
                ``to_directed()`` so each edge becomes two.
            weight: Edge attribute holding the weight.
            default: Weight for edges missing the attribute. None makes a
                missing attribute an error.

        Raises:
            InvalidEdge: If an edge weight is missing (with default=None),
                negative, or not a number.
        """
        if not nx_graph.is_directed():
            nx_graph = nx_graph.to_directed()
        graph = cls()
        for node in nx_graph.nodes:
            graph.add_node(node)
        for u, v, attr in nx_graph.edges(data=True):
            graph.add_edge(u, v, attr.get(weight, default))
        return graph
