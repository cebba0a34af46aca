"""Route representation and reconstruction from predecessor maps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from dynroute.algorithms.base import (
    INF,
    Cost,
    DistanceMap,
    NodeID,
    PredecessorMap,
    json_cost,
)


@dataclass(frozen=True)
class Route:
    """Ordered sequence of nodes from a start node to a target.

    An empty route is the unreachable marker; use :data:`UNREACHABLE` rather
    than constructing one.

    Attributes:
        nodes: Nodes from start to target, both included.
        cost: Total distance of the route, when known.
    """

    nodes: Tuple[NodeID, ...]
    cost: Optional[Cost] = None

    @property
    def is_reachable(self) -> bool:
        return bool(self.nodes)

    @property
    def src_node(self) -> NodeID:
        """Return the first node of the route."""
        if not self.nodes:
            raise ValueError("Unreachable route has no source node.")
        return self.nodes[0]

    @property
    def dst_node(self) -> NodeID:
        """Return the last node of the route."""
        if not self.nodes:
            raise ValueError("Unreachable route has no destination node.")
        return self.nodes[-1]

    def hops(self) -> List[Tuple[NodeID, NodeID]]:
        """Return consecutive ``(source, target)`` pairs along the route."""
        return list(zip(self.nodes[:-1], self.nodes[1:]))

    def __iter__(self) -> Iterator[NodeID]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __bool__(self) -> bool:
        return self.is_reachable

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "cost": json_cost(self.cost),
            "reachable": self.is_reachable,
        }


#: The explicit "no route" marker.
UNREACHABLE = Route((), INF)


def reconstruct(
    pred: PredecessorMap,
    target: NodeID,
    costs: Optional[DistanceMap] = None,
) -> Route:
    """Walk a predecessor map backward from ``target`` to the root.

    The root is the node mapped to None, i.e. the start node the map was
    built from. A partial chain is never returned.

    Args:
        pred: Predecessor map produced by ``spf``.
        target: Destination node.
        costs: Optional distance map from the same run; used to fill in the
            route cost.

    Returns:
        The route in start -> target order, or UNREACHABLE when ``target``
        has no entry or the chain does not end at the root.
    """
    if target not in pred:
        return UNREACHABLE

    reversed_nodes: List[NodeID] = [target]
    seen = {target}
    current = target
    while True:
        if current not in pred:
            return UNREACHABLE
        previous = pred[current]
        if previous is None:
            break
        if previous in seen:
            # cycle, the map is corrupt
            return UNREACHABLE
        seen.add(previous)
        reversed_nodes.append(previous)
        current = previous

    cost = costs.get(target) if costs is not None else None
    return Route(tuple(reversed(reversed_nodes)), cost)
