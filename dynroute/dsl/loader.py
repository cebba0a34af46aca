"""YAML loader + schema validation for scenario files.

Parses a YAML string, runs a few early shape checks that give clearer error
messages than the schema does, validates against the packaged JSON schema and
returns a canonical dictionary: every edge becomes a ``(source, target,
weight)`` triple and optional sections default to empty lists.
"""

from __future__ import annotations

import json
from importlib import resources
from typing import Any, Dict, List, Tuple

import jsonschema
import yaml

RECOGNIZED_KEYS = {"network", "queries", "updates"}


def _load_schema() -> Dict[str, Any]:
    try:
        with (
            resources.files("dynroute.schemas")
            .joinpath("scenario.json")
            .open("r", encoding="utf-8")
        ) as f:
            return json.load(f)
    except OSError as exc:  # pragma: no cover
        raise RuntimeError(
            "Failed to locate packaged scenario schema 'dynroute/schemas/scenario.json'."
        ) from exc


def _edge_triple(entry: Any) -> Tuple[Any, Any, Any]:
    if isinstance(entry, dict):
        return entry["source"], entry["target"], entry["weight"]
    source, target, weight = entry
    return source, target, weight


def load_scenario_yaml(yaml_str: str) -> Dict[str, Any]:
    """Load, validate and normalize a scenario YAML string.

    Returns:
        Dict with keys ``network`` (``bidirectional``, ``nodes``, ``edges`` as
        triples), ``queries`` and ``updates``.

    Raises:
        ValueError: If the YAML is not a mapping, has unknown top-level keys,
            or is missing the network edges.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")

    extra = set(data.keys()) - RECOGNIZED_KEYS
    if extra:
        raise ValueError(
            f"Unrecognized top-level key(s) in scenario: {', '.join(sorted(map(str, extra)))}. "
            f"Allowed keys are {sorted(RECOGNIZED_KEYS)}"
        )

    network_section = data.get("network")
    if not isinstance(network_section, dict):
        raise ValueError("Scenario must define a 'network' mapping with 'edges'.")
    if not isinstance(network_section.get("edges"), list):
        raise ValueError("'network.edges' must be a list")

    jsonschema.validate(data, _load_schema())

    edges: List[Tuple[Any, Any, Any]] = [
        _edge_triple(entry) for entry in network_section["edges"]
    ]
    return {
        "network": {
            "bidirectional": bool(network_section.get("bidirectional", False)),
            "nodes": list(network_section.get("nodes", [])),
            "edges": edges,
        },
        "queries": list(data.get("queries", [])),
        "updates": list(data.get("updates", [])),
    }
