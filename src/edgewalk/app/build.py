# edgewalk/app/build.py
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from pydantic import ValidationError

from edgewalk.config.models import ScenarioModel
from edgewalk.domain.entities.graph import Graph, Walk
from edgewalk.domain.errors import InvalidInputError
from edgewalk.domain.search.optimizer import optimize
from edgewalk.io.recorder import MemorySink, Recorder
from edgewalk.io.search_logging import SearchLogging
from edgewalk.sim.hooks import NoopHooks, SearchHooks
from edgewalk.sim.rng import RNGRegistry


@dataclass
class App:
    model: ScenarioModel
    graph: Graph
    rng: RNGRegistry
    hooks: SearchHooks
    summaries: MemorySink

    def solve(self) -> Walk:
        # rewound per call: re-solving the same App gives the same answer
        rng = self.rng.fresh("edge_orders")
        return optimize(self.graph, rng=rng, cfg=self.model.optimizer, hooks=self.hooks)


def build(
    cfg: ScenarioModel | Mapping,
    *,
    worker: int = 0,
    use_logging: bool = True,
    logger: logging.Logger | None = None,
) -> App:
    # 0) Validate config
    if isinstance(cfg, ScenarioModel):
        model = cfg
    else:
        try:
            model = ScenarioModel.model_validate(cfg)
        except ValidationError as exc:
            raise InvalidInputError(str(exc)) from exc

    # 1) Graph (structural checks happen here)
    graph = model.graph.to_graph()

    # 2) RNG
    rng_registry = RNGRegistry(model.optimizer.seed, scenario=model.name, worker=worker)

    # 3) Hooks
    summaries = MemorySink()
    hooks = (
        SearchLogging(
            run_id=model.run_id,
            level=model.log.level,
            debug=model.log.debug,
            logger=logger,
            recorder=Recorder(summaries),
        )
        if use_logging
        else NoopHooks()
    )
    return App(model, graph, rng_registry, hooks, summaries)
