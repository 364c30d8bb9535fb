# io/graph_io.py
import json
from collections.abc import Mapping
from pathlib import Path

from pydantic import ValidationError

from edgewalk.config.models import GraphModel, ScenarioModel
from edgewalk.domain.entities.graph import Graph
from edgewalk.domain.errors import InvalidInputError


def graph_from_mapping(doc: Mapping) -> Graph:
    """``{"nodes": [...], "routes": [...]}`` -> Graph (validated)."""
    try:
        model = GraphModel.model_validate(doc)
    except ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc
    return model.to_graph()


def _read_json(file: str):
    with open(file, encoding="utf-8") as f:
        return json.load(f)


def load_graph(path: str | Path) -> Graph:
    return graph_from_mapping(_read_json(str(path)))


def load_scenario(path: str | Path) -> ScenarioModel:
    """A scenario file is a graph document plus optional run/log/optimizer settings."""
    doc = _read_json(str(path))
    if "graph" not in doc:
        doc = {"graph": doc}
    try:
        return ScenarioModel.model_validate(doc)
    except ValidationError as exc:
        raise InvalidInputError(str(exc)) from exc


def walk_to_mapping(graph: Graph, walk) -> dict:
    return {
        "nodeOrder": list(walk.nodes),
        "labels": [graph.nodes_by_id[n].label or str(n) for n in walk.nodes],
        "totalDistance": walk.total_distance,
        "routeSegments": list(walk.route_ids),
    }
