# runtime/registries.py
from collections.abc import Sequence

from edgewalk.domain.search.edge_orders import (
    OrderStrategy,
    by_distance_ascending,
    by_distance_descending,
    shuffled,
)

_order_registry: dict[str, OrderStrategy] = {}


# ------------------- Edge ordering heuristics ---------------------------


def register_order_strategy(name: str):
    def deco(fn: OrderStrategy):
        _order_registry[name] = fn
        return fn

    return deco


def known_order_strategies() -> list[str]:
    return sorted(_order_registry)


def make_order_strategy(name: str) -> OrderStrategy:
    try:
        return _order_registry[name]
    except KeyError:
        raise ValueError(f"Unknown edge ordering {name!r}")


def make_order_strategies(names: Sequence[str]) -> list[OrderStrategy]:
    return [make_order_strategy(n) for n in names]


register_order_strategy("ascending")(by_distance_ascending)
register_order_strategy("descending")(by_distance_descending)
register_order_strategy("shuffled")(shuffled)
