from math import isfinite
from typing import Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from edgewalk.domain.entities.graph import Graph, Node, Route, euclid
from edgewalk.domain.entities.labels import node_label
from edgewalk.runtime.registries import known_order_strategies


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


# ----------------- OPTIMIZER ---------------------


class OptimizerModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    max_routes: int = Field(12, ge=1, le=12)
    exhaustive_limit: int = Field(8, ge=1, le=8)  # full permutations up to here
    heuristics: list[str] = Field(default_factory=lambda: ["ascending", "descending"])
    random_samples: int = 10
    seed: int = 0

    @field_validator("random_samples")
    @classmethod
    def _nonneg(cls, v: int) -> int:
        if v < 0:
            raise ValueError("random_samples must be >= 0")
        return v

    @field_validator("heuristics")
    @classmethod
    def _known(cls, v: list[str]) -> list[str]:
        known = known_order_strategies()
        bad = [h for h in v if h not in known]
        if bad:
            raise ValueError(f"unknown heuristics {bad}; expected any of {known}")
        return v

    @model_validator(mode="after")
    def _limits(self):
        if self.exhaustive_limit > self.max_routes:
            raise ValueError("exhaustive_limit must not exceed max_routes")
        if self.exhaustive_limit < self.max_routes and not (self.heuristics or self.random_samples):
            raise ValueError("graphs above exhaustive_limit need heuristics or random_samples")
        return self


# ----------------- GRAPH DOCUMENTS ---------------------


class NodeModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    x: float = 0.0
    y: float = 0.0
    label: str | None = None


class RouteModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    id: int
    a: int = Field(validation_alias=AliasChoices("a", "startNodeId"))
    b: int = Field(validation_alias=AliasChoices("b", "endNodeId"))
    distance: float | None = None  # None => straight line between the nodes
    points: list[tuple[float, float]] = Field(default_factory=list)

    @field_validator("distance")
    @classmethod
    def _finite_nonneg(cls, v: float | None) -> float | None:
        if v is not None and (not isfinite(v) or v < 0):
            raise ValueError("distance must be finite and >= 0")
        return v

    @field_validator("points", mode="before")
    @classmethod
    def _xy_dicts(cls, v):
        # canvas exports write points as {"x": .., "y": ..}
        if isinstance(v, list):
            return [(p["x"], p["y"]) if isinstance(p, dict) else p for p in v]
        return v


class GraphModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    nodes: list[NodeModel]
    routes: list[RouteModel] = Field(default_factory=list)

    def to_graph(self) -> Graph:
        nodes = [
            Node(n.id, n.x, n.y, n.label if n.label is not None else node_label(i))
            for i, n in enumerate(self.nodes)
        ]
        by_id = {n.id: n for n in nodes}
        routes = []
        for r in self.routes:
            dist = r.distance
            if dist is None and r.a in by_id and r.b in by_id:
                dist = euclid(by_id[r.a], by_id[r.b])
            # unknown endpoints are rejected by Graph itself
            routes.append(Route(r.id, r.a, r.b, dist if dist is not None else 0.0, tuple(r.points)))
        return Graph(nodes, routes)


class ScenarioModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "graph"
    run_id: str = "local"
    log: LogModel = LogModel()
    optimizer: OptimizerModel = Field(default_factory=OptimizerModel)
    graph: GraphModel
