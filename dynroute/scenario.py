"""Scenario class for replaying route queries and weight updates from YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from dynroute.algorithms.base import json_cost
from dynroute.config import RouterConfig
from dynroute.dsl.loader import load_scenario_yaml
from dynroute.errors import NoReachableDestination
from dynroute.logging import get_logger
from dynroute.router import Router


@dataclass
class RouteQuery:
    """A named best-destination query."""

    name: str
    start: Any
    candidates: List[Any]


@dataclass
class WeightUpdate:
    """A traffic event changing the weight of one directed edge."""

    source: Any
    target: Any
    weight: Any
    name: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name or f"{self.source}->{self.target}={self.weight}"


@dataclass
class Scenario:
    """A road network plus the queries and updates to replay against it.

    ``run()`` answers every query on the initial weights, then applies each
    update in order and answers every query again, recording one phase per
    step in ``results``.

    Typical usage example:

        scenario = Scenario.from_yaml(yaml_str)
        scenario.run()
        # Inspect scenario.results
    """

    router: Router
    queries: List[RouteQuery] = field(default_factory=list)
    updates: List[WeightUpdate] = field(default_factory=list)
    results: List[Dict[str, Any]] = field(default_factory=list)

    _logger = get_logger(__name__)

    @classmethod
    def from_yaml(
        cls, yaml_str: str, config: Optional[RouterConfig] = None
    ) -> Scenario:
        """Construct a Scenario from a YAML string.

        Top-level YAML keys:
          - network: ``edges`` as ``[source, target, weight]`` lists or
            mappings, optional ``nodes`` (isolated nodes) and
            ``bidirectional`` flag.
          - queries: list of ``{name, start, candidates}``.
          - updates: list of ``{source, target, weight}`` (optional ``name``).

        Raises:
            ValueError: If the YAML is malformed, has unknown top-level keys,
                or repeats a query name.
            InvalidEdge: If an edge weight is negative or not a number.
        """
        data = load_scenario_yaml(yaml_str)
        network = data["network"]

        router = Router.build_graph(
            network["edges"], bidirectional=network["bidirectional"], config=config
        )
        for node in network["nodes"]:
            router.graph.add_node(node)

        queries: List[RouteQuery] = []
        assigned_names: set = set()
        for idx, q in enumerate(data["queries"]):
            name = q.get("name") or f"query_{idx}"
            if name in assigned_names:
                raise ValueError(
                    f"Duplicate query name '{name}'. Each query must have a unique name."
                )
            assigned_names.add(name)
            queries.append(
                RouteQuery(name=name, start=q["start"], candidates=list(q["candidates"]))
            )
        updates = [
            WeightUpdate(u["source"], u["target"], u["weight"], u.get("name"))
            for u in data["updates"]
        ]
        cls._logger.debug(
            "Loaded scenario: nodes=%d, edges=%d, queries=%d, updates=%d",
            len(router.graph),
            router.graph.edge_count(),
            len(queries),
            len(updates),
        )
        return cls(router=router, queries=queries, updates=updates)

    def _answer_queries(self) -> Dict[str, Any]:
        answers: Dict[str, Any] = {}
        for query in self.queries:
            try:
                best = self.router.query_best_route(query.start, query.candidates)
            except NoReachableDestination as exc:
                self._logger.warning(f"Query '{query.name}': {exc}")
                answers[query.name] = {"error": str(exc)}
                continue
            answers[query.name] = best.to_dict()
        return answers

    def run(self) -> None:
        """Answer all queries, then re-answer them after each update.

        Raises:
            EdgeNotFound: If an update names a missing edge.
            InvalidEdge: If an update carries an invalid weight.
        """
        self.results = [{"phase": "initial", "queries": self._answer_queries()}]
        for update in self.updates:
            old_weight = self.router.update_edge_weight(
                update.source, update.target, update.weight
            )
            self.results.append(
                {
                    "phase": update.label,
                    "update": {
                        "source": update.source,
                        "target": update.target,
                        "old_weight": json_cost(old_weight),
                        "new_weight": json_cost(update.weight),
                    },
                    "queries": self._answer_queries(),
                }
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "graph": self.router.graph.to_dict(),
            "phases": self.results,
        }
