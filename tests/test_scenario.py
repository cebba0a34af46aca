import json
from pathlib import Path

import pytest

from dynroute.errors import EdgeNotFound, InvalidEdge
from dynroute.scenario import Scenario

CITY_YAML = Path(__file__).parent / "integration" / "city_traffic.yaml"


def test_from_yaml_builds_router():
    scenario = Scenario.from_yaml(CITY_YAML.read_text())
    assert len(scenario.router.graph) == 8
    assert scenario.router.graph.edge_count() == 18
    assert [q.name for q in scenario.queries] == ["hospitals"]
    assert scenario.updates[0].label == "congestion_5_7"


def test_run_records_each_phase():
    scenario = Scenario.from_yaml(CITY_YAML.read_text())
    scenario.run()

    initial, congested = scenario.results
    assert initial["phase"] == "initial"
    assert initial["queries"]["hospitals"]["best_node"] == 7
    assert initial["queries"]["hospitals"]["route"] == [1, 2, 4, 5, 7]

    assert congested["phase"] == "congestion_5_7"
    assert congested["update"] == {
        "source": 5,
        "target": 7,
        "old_weight": 2,
        "new_weight": 20,
    }
    assert congested["queries"]["hospitals"]["best_node"] == 8
    assert congested["queries"]["hospitals"]["total_distance"] == 18


def test_unreachable_query_is_reported_not_raised():
    scenario = Scenario.from_yaml(
        """
network:
  nodes: [Z]
  edges: [[A, B, 1]]
queries:
  - {start: A, candidates: [Z]}
"""
    )
    scenario.run()
    answer = scenario.results[0]["queries"]["query_0"]
    assert "No reachable destination" in answer["error"]


def test_update_of_missing_edge_raises():
    scenario = Scenario.from_yaml(
        "network:\n  edges: [[A, B, 1]]\nupdates: [{source: B, target: A, weight: 2}]\n"
    )
    with pytest.raises(EdgeNotFound):
        scenario.run()


def test_negative_weight_in_file():
    with pytest.raises(InvalidEdge):
        Scenario.from_yaml("network:\n  edges: [[A, B, -1]]\n")


def test_to_dict_contains_graph_and_phases():
    scenario = Scenario.from_yaml(CITY_YAML.read_text())
    scenario.run()
    data = scenario.to_dict()
    assert set(data) == {"graph", "phases"}
    assert len(data["phases"]) == 2
    assert {"source": 5, "target": 7, "weight": 20} in data["graph"]["links"]


def test_duplicate_query_names_rejected():
    with pytest.raises(ValueError, match="Duplicate query name 'q'"):
        Scenario.from_yaml(
            """
network:
  edges: [[A, B, 1], [A, C, 2]]
queries:
  - {name: q, start: A, candidates: [B]}
  - {name: q, start: A, candidates: [C]}
"""
        )


def test_explicit_name_colliding_with_default_name_rejected():
    with pytest.raises(ValueError, match="query_1"):
        Scenario.from_yaml(
            """
network:
  edges: [[A, B, 1]]
queries:
  - {name: query_1, start: A, candidates: [B]}
  - {start: A, candidates: [B]}
"""
        )


def test_closed_road_exports_null_weights():
    scenario = Scenario.from_yaml(
        """
network:
  edges: [[A, B, 1], [A, C, 5]]
queries:
  - {name: nearest, start: A, candidates: [B, C]}
updates:
  - {name: close_a_b, source: A, target: B, weight: .inf}
"""
    )
    scenario.run()
    closed = scenario.results[1]
    assert closed["update"] == {
        "source": "A",
        "target": "B",
        "old_weight": 1,
        "new_weight": None,
    }
    assert closed["queries"]["nearest"]["best_node"] == "C"
    assert closed["queries"]["nearest"]["distances"][0] == {"node": "B", "distance": None}

    data = scenario.to_dict()
    assert {"source": "A", "target": "B", "weight": None} in data["graph"]["links"]
    # Strict encoding fails on any leftover inf/nan.
    json.dumps(data, allow_nan=False)
