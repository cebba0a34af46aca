"""Global pytest configuration and shared sample graphs."""

from __future__ import annotations

import pytest

from dynroute.graph.road_graph import RoadGraph

# Two-way city map: (a, b, minutes) means a -> b and b -> a.
CITY_ROADS = [
    (1, 2, 5),
    (1, 3, 9),
    (2, 4, 3),
    (3, 5, 4),
    (4, 5, 1),
    (4, 6, 7),
    (5, 7, 2),
    (6, 8, 3),
    (7, 8, 6),
]


@pytest.fixture
def city_roads():
    return list(CITY_ROADS)


@pytest.fixture
def city_graph():
    #        [5]      [3]
    #    1 ◄─────► 2 ◄─────► 4 ◄───[7]───► 6
    #    ▲                   ▲             ▲
    #   [9]                 [1]           [3]
    #    ▼                   ▼             ▼
    #    3 ◄─────[4]───────► 5             8
    #                        ▲             ▲
    #                       [2]           [6]
    #                        ▼             │
    #                        7 ◄───────────┘
    return RoadGraph.from_edges(CITY_ROADS, bidirectional=True)


@pytest.fixture
def square_graph():
    # Metric:
    #       [1]        [1]
    #   ┌────────►B─────────┐
    #   │                   ▼
    #   A                   C
    #   │   [2]        [2]  ▲
    #   └────────►D─────────┘
    g = RoadGraph()
    g.add_edge("A", "B", 1)
    g.add_edge("B", "C", 1)
    g.add_edge("A", "D", 2)
    g.add_edge("D", "C", 2)
    return g


@pytest.fixture
def tie_graph():
    # Two equal-cost routes A -> C: via B (added first) and via D.
    g = RoadGraph()
    g.add_edge("A", "B", 1)
    g.add_edge("A", "D", 1)
    g.add_edge("B", "C", 1)
    g.add_edge("D", "C", 1)
    return g


@pytest.fixture
def disconnected_graph():
    # A -> B -> C, island X <-> Y, and isolated node Z.
    g = RoadGraph()
    g.add_edge("A", "B", 2)
    g.add_edge("B", "C", 3)
    g.add_edge("X", "Y", 1)
    g.add_edge("Y", "X", 1)
    g.add_node("Z")
    return g
