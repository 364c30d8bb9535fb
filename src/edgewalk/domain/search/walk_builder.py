import math
from collections.abc import Iterable

from edgewalk.domain.entities.graph import Graph, Route, Walk
from edgewalk.domain.search.shortest_path import ShortestPath, ShortestPaths


def _nearest_end(sp: ShortestPaths, here: int, route: Route) -> ShortestPath | None:
    """Cheaper of the two connecting paths to ``route``; ``None`` if neither exists."""
    to_a = sp.path(here, route.a)
    to_b = sp.path(here, route.b)
    if to_a is None:
        return to_b
    if to_b is not None and to_b.distance < to_a.distance:
        return to_b
    return to_a


def build_walk(
    graph: Graph,
    start: int,
    order: Iterable[Route],
    *,
    paths: ShortestPaths | None = None,
    cutoff: float = math.inf,
) -> Walk | None:
    """
    Walk every route of ``order`` in turn, starting and ending at ``start``.

    When the current node is not on the next route, the shortest connecting
    path to its nearer endpoint is walked first. Returns ``None`` if some
    route (or the way back to ``start``) cannot be reached, or if the running
    distance reaches ``cutoff``.
    """
    sp = paths or ShortestPaths(graph)
    nodes = [start]
    rids: list[int] = []
    here, total = start, 0.0
    covered: set[int] = set()

    def walk(leg: ShortestPath) -> None:
        nonlocal here, total
        nodes.extend(leg.nodes[1:])
        rids.extend(leg.route_ids)
        total += leg.distance
        here = leg.nodes[-1]

    for route in order:
        if route.id in covered:
            continue
        if not route.touches(here):
            leg = _nearest_end(sp, here, route)
            if leg is None:
                return None
            walk(leg)
        total += route.distance
        covered.add(route.id)
        here = route.other(here)  # self-loop: other(a) == a
        nodes.append(here)
        rids.append(route.id)
        if total >= cutoff:
            return None

    back = sp.path(here, start)
    if back is None:
        return None
    walk(back)
    if total >= cutoff:
        return None
    return Walk(tuple(nodes), total, tuple(rids))
