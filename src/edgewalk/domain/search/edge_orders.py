import math
from collections.abc import Callable, Iterator, Sequence
from itertools import permutations

import numpy as np

from edgewalk.domain.entities.graph import Route

EXHAUSTIVE_LIMIT = 8  # 8! = 40320 orderings per start node
RANDOM_SAMPLES = 10

Ordering = tuple[Route, ...]
OrderStrategy = Callable[[Sequence[Route], np.random.Generator], Ordering]


def by_distance_ascending(routes: Sequence[Route], rng=None) -> Ordering:
    return tuple(sorted(routes, key=lambda r: r.distance))


def by_distance_descending(routes: Sequence[Route], rng=None) -> Ordering:
    return tuple(sorted(routes, key=lambda r: r.distance, reverse=True))


def shuffled(routes: Sequence[Route], rng: np.random.Generator) -> Ordering:
    return tuple(routes[int(i)] for i in rng.permutation(len(routes)))


def edge_orders(
    routes: Sequence[Route],
    *,
    rng: np.random.Generator | None = None,
    exhaustive_limit: int = EXHAUSTIVE_LIMIT,
    heuristics: Sequence[OrderStrategy] = (by_distance_ascending, by_distance_descending),
    random_samples: int = RANDOM_SAMPLES,
) -> Iterator[Ordering]:
    """
    Lazily yield the edge orderings a walk search should try.

    * 0 or 1 routes: the single trivial ordering.
    * up to ``exhaustive_limit`` routes: every permutation, one at a time.
    * more: each heuristic ordering once, then ``random_samples`` shuffles
      drawn from ``rng``. Needs an explicit generator; there is no global RNG.

    The iterator is finite and single-use.
    """
    routes = tuple(routes)
    if len(routes) <= 1:
        yield routes
        return
    if len(routes) <= exhaustive_limit:
        yield from permutations(routes)
        return
    if random_samples and rng is None:
        raise ValueError("random edge orderings need an rng")
    for strategy in heuristics:
        yield strategy(routes, rng)
    for _ in range(random_samples):
        yield shuffled(routes, rng)


def count_orders(
    n_routes: int,
    *,
    exhaustive_limit: int = EXHAUSTIVE_LIMIT,
    n_heuristics: int = 2,
    random_samples: int = RANDOM_SAMPLES,
) -> int:
    """How many orderings ``edge_orders`` will yield for ``n_routes`` routes."""
    if n_routes <= 1:
        return 1
    if n_routes <= exhaustive_limit:
        return math.factorial(n_routes)
    return n_heuristics + random_samples
