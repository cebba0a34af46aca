"""Graph primitives.

This package provides the road graph store `RoadGraph`, its immutable
`GraphSnapshot` copies, and the `Edge` tuple shared by both.
"""

from dynroute.graph.road_graph import Edge, GraphSnapshot, RoadGraph

__all__ = ["Edge", "GraphSnapshot", "RoadGraph"]
