# domain/search/optimizer.py
import math
import time

import numpy as np

from edgewalk.config.models import OptimizerModel
from edgewalk.domain.entities.graph import Graph, Walk
from edgewalk.domain.errors import InvalidInputError, NoSolutionError
from edgewalk.domain.search.edge_orders import count_orders, edge_orders
from edgewalk.domain.search.shortest_path import ShortestPaths
from edgewalk.domain.search.walk_builder import build_walk
from edgewalk.runtime.registries import make_order_strategies
from edgewalk.sim.hooks import NoopHooks, SearchHooks


def check_graph(graph: Graph, cfg: OptimizerModel) -> None:
    n = len(graph.routes)
    if n < 1:
        raise InvalidInputError("need at least 1 route to optimize")
    if n > cfg.max_routes:
        raise InvalidInputError(f"optimization is limited to {cfg.max_routes} routes, got {n}")


def optimize(
    graph: Graph,
    *,
    rng: np.random.Generator | None = None,
    cfg: OptimizerModel | None = None,
    hooks: SearchHooks | None = None,
) -> Walk:
    """
    Shortest closed walk covering every route found over all
    (start node x edge ordering) pairs.

    Raises InvalidInputError before searching if the route count is out of
    range, and NoSolutionError if no pair produced a closed walk. Keeps no
    state between calls; ``rng`` only matters above the exhaustive limit
    and defaults to a generator seeded from ``cfg.seed``.
    """
    cfg = cfg or OptimizerModel()
    hooks = hooks or NoopHooks()
    try:
        check_graph(graph, cfg)
    except InvalidInputError as exc:
        hooks.error(graph, reason="invalid_input", error=str(exc))
        raise
    rng = rng if rng is not None else np.random.default_rng(cfg.seed)
    heuristics = make_order_strategies(cfg.heuristics)

    t0 = time.perf_counter()
    hooks.search_start(
        graph,
        starts=len(graph.nodes),
        orders_per_start=count_orders(
            len(graph.routes),
            exhaustive_limit=cfg.exhaustive_limit,
            n_heuristics=len(heuristics),
            random_samples=cfg.random_samples,
        ),
    )

    sp = ShortestPaths(graph)
    best: Walk | None = None
    attempts = rejected = 0
    for node in graph.nodes:
        start_attempts = start_rejected = 0
        orders = edge_orders(
            graph.routes,
            rng=rng,
            exhaustive_limit=cfg.exhaustive_limit,
            heuristics=heuristics,
            random_samples=cfg.random_samples,
        )
        for order in orders:
            start_attempts += 1
            cutoff = best.total_distance if best else math.inf
            walk = build_walk(graph, node.id, order, paths=sp, cutoff=cutoff)
            if walk is None:
                start_rejected += 1
                continue
            best = walk
            hooks.improved(walk, start=node.id, attempt=attempts + start_attempts)
        attempts += start_attempts
        rejected += start_rejected
        hooks.start_done(
            node.id,
            best=best.total_distance if best else math.inf,
            attempts=start_attempts,
            rejected=start_rejected,
        )

    wall_ms = (time.perf_counter() - t0) * 1000
    hooks.search_end(best, attempts=attempts, rejected=rejected, wall_ms=wall_ms)
    if best is None:
        hooks.error(graph, reason="no_solution", attempts=attempts)
        raise NoSolutionError(
            f"no closed walk covers all {len(graph.routes)} routes", attempts=attempts
        )
    return best
