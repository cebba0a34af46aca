from __future__ import annotations

import math
from enum import IntEnum
from typing import Dict, Hashable, Optional, Union

#: Node identifier: any hashable value, typically an int or a str.
NodeID = Hashable

#: Numeric cost of an edge or a path (e.g. travel time in minutes).
Cost = Union[int, float]

#: Sentinel distance of a node that has not been reached.
INF: float = math.inf

#: Map of node -> minimal known distance from a fixed start node.
DistanceMap = Dict[NodeID, Cost]

#: Map of node -> preceding node on a shortest path; the start node maps to None.
PredecessorMap = Dict[NodeID, Optional[NodeID]]


def json_cost(value: Optional[Cost]) -> Optional[Cost]:
    """Return ``value`` with infinite costs mapped to None (JSON null)."""
    if isinstance(value, float) and math.isinf(value):
        return None
    return value


class TieBreak(IntEnum):
    """
    Ordering policy for frontier entries that share the same distance.
    """

    #: The entry pushed first is popped first.
    INSERTION_ORDER = 1
    #: The entry with the smaller node identifier is popped first.
    NODE_ID = 2
    #: Use a user-defined key function over the node identifier.
    USER_DEFINED = 99
