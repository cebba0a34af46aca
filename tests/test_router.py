import threading

import pytest

from dynroute.algorithms.base import INF, TieBreak
from dynroute.algorithms.paths import UNREACHABLE
from dynroute.config import RouterConfig
from dynroute.errors import EdgeNotFound, InvalidEdge, NoReachableDestination, SearchAborted
from dynroute.router import BestRoute, Router, build_graph


@pytest.fixture
def city_router(city_roads):
    return Router.build_graph(city_roads, bidirectional=True)


class TestBestRoute:
    def test_normal_traffic(self, city_router):
        best = city_router.query_best_route(1, [7, 8])
        assert isinstance(best, BestRoute)
        assert best.best_node == 7
        assert best.total_distance == 11
        assert best.route == (1, 2, 4, 5, 7)
        assert best.distances == ((7, 11), (8, 17))

    def test_congestion_reroutes(self, city_router):
        before = city_router.query_best_route(1, [7, 8])
        assert city_router.update_edge_weight(5, 7, 20) == 2

        after = city_router.query_best_route(1, [7, 8])
        assert after.best_node == 8
        assert after.total_distance == 18
        assert after.route == (1, 2, 4, 6, 8)
        assert after.route != before.route
        assert after.graph_version > before.graph_version

    def test_only_one_direction_is_updated(self, city_router):
        city_router.update_edge_weight(5, 7, 20)
        assert city_router.query_best_route(7, [5]).total_distance == 2

    def test_unreachable_candidate_is_skipped(self, city_router):
        city_router.graph.add_node(99)
        best = city_router.query_best_route(1, [99, 8])
        assert best.best_node == 8
        assert best.distances == ((99, INF), (8, 17))

    def test_only_unreachable_candidate_raises(self, city_router):
        city_router.graph.add_node(99)
        with pytest.raises(NoReachableDestination) as exc_info:
            city_router.query_best_route(1, [99])
        assert exc_info.value.candidates == (99,)
        assert exc_info.value.start == 1

    def test_unknown_candidate_raises(self, city_router):
        with pytest.raises(NoReachableDestination):
            city_router.query_best_route(1, ["nowhere"])

    def test_update_missing_edge_leaves_graph_unchanged(self, city_router):
        before = city_router.graph.to_dict()
        with pytest.raises(EdgeNotFound) as exc_info:
            city_router.update_edge_weight(1, 8, 1)
        assert (exc_info.value.source, exc_info.value.target) == (1, 8)
        assert city_router.graph.to_dict() == before
        assert city_router.query_best_route(1, [7, 8]).best_node == 7

    def test_negative_update_rejected(self, city_router):
        with pytest.raises(InvalidEdge):
            city_router.update_edge_weight(1, 2, -5)
        assert city_router.graph.weight(1, 2) == 5

    def test_ties_resolved_by_candidate_order(self):
        router = Router.build_graph([("S", "A", 2), ("S", "B", 2)])
        assert router.query_best_route("S", ["B", "A"]).best_node == "B"
        assert router.query_best_route("S", ["A", "B"]).best_node == "A"

    def test_start_is_candidate(self, city_router):
        best = city_router.query_best_route(4, [7, 4])
        assert best.best_node == 4
        assert best.total_distance == 0
        assert best.route == (4,)

    def test_to_dict(self, city_router):
        city_router.graph.add_node(99)
        data = city_router.query_best_route(1, [99, 7]).to_dict()
        assert data["best_node"] == 7
        assert data["route"] == [1, 2, 4, 5, 7]
        assert data["distances"] == [
            {"node": 99, "distance": None},
            {"node": 7, "distance": 11},
        ]


class TestRouteTo:
    def test_route_to_reachable(self, city_router):
        route = city_router.route_to(1, 8)
        assert route.nodes == (1, 2, 4, 5, 7, 8)
        assert route.cost == 17

    def test_route_to_unreachable(self):
        router = Router(build_graph([("A", "B", 1)]))
        assert router.route_to("B", "A") is UNREACHABLE

    def test_distances_from(self, city_router):
        assert city_router.distances_from(8)[1] == 17


class TestConfig:
    def test_config_bidirectional_default(self, city_roads):
        router = Router.build_graph(city_roads, config=RouterConfig(bidirectional=True))
        assert router.graph.has_edge(7, 5)
        one_way = Router.build_graph(city_roads, config=RouterConfig())
        assert not one_way.graph.has_edge(7, 5)

    def test_config_tie_break(self):
        edges = [("S", "Y", 1), ("S", "X", 1), ("Y", "T", 1), ("X", "T", 1)]
        default = Router.build_graph(edges)
        by_id = Router.build_graph(edges, config=RouterConfig(tie_break=TieBreak.NODE_ID))
        assert default.query_best_route("S", ["T"]).route == ("S", "Y", "T")
        assert by_id.query_best_route("S", ["T"]).route == ("S", "X", "T")

    def test_user_defined_tie_break(self):
        edges = [("S", "Y", 1), ("S", "X", 1), ("Y", "T", 1), ("X", "T", 1)]
        router = Router(
            build_graph(edges),
            config=RouterConfig(tie_break=TieBreak.USER_DEFINED),
            key_func=lambda n: 0 if n == "X" else 1,
        )
        assert router.route_to("S", "T").nodes == ("S", "X", "T")

    def test_negative_timeout_rejected(self, city_router):
        with pytest.raises(ValueError, match="timeout"):
            city_router.query_best_route(1, [7], timeout_s=-1)

    def test_default_timeout_from_config(self, city_roads):
        router = Router.build_graph(
            city_roads, config=RouterConfig(default_timeout_s=60.0)
        )
        assert router.query_best_route(1, [7]).best_node == 7

    def test_cancelled_query(self, city_router):
        event = threading.Event()
        event.set()
        with pytest.raises(SearchAborted):
            city_router.query_best_route(1, [7, 8], cancel_event=event)


class TestConcurrency:
    def test_queries_see_consistent_weights(self, city_router):
        # Each update moves every edge to the same new weight; any query must
        # therefore observe distances that are a multiple of one weight.
        graph = city_router.graph
        edges = [(e.source, e.target) for e in graph.edges()]
        for u, v in edges:
            graph.update_weight(u, v, 1)
        errors = []
        stop = threading.Event()

        def writer():
            for w in range(1, 200):
                if stop.is_set():
                    break
                with graph._lock:
                    for u, v in edges:
                        graph.update_weight(u, v, w)

        def reader():
            for _ in range(50):
                best = city_router.query_best_route(1, [8])
                hops = len(best.route) - 1
                if best.total_distance % hops != 0:
                    errors.append(best)

        threads = [threading.Thread(target=writer)] + [
            threading.Thread(target=reader) for _ in range(3)
        ]
        for t in threads:
            t.start()
        for t in threads[1:]:
            t.join()
        stop.set()
        threads[0].join()
        assert errors == []
