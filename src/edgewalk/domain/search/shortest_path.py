import heapq
import math
from dataclasses import dataclass

from edgewalk.domain.entities.graph import Graph


@dataclass(frozen=True)
class ShortestPath:
    nodes: tuple[int, ...]  # source .. target inclusive
    distance: float
    route_ids: tuple[int, ...] = ()  # one per hop

    @property
    def hops(self) -> int:
        return len(self.nodes) - 1


@dataclass
class _Tree:
    dist: dict[int, float]
    prev: dict[int, tuple[int, int]]  # node -> (predecessor, route id)


class ShortestPaths:
    """
    Single-source Dijkstra over an undirected Graph, memoised per source.
    One instance belongs to one search call; the graph must not change under it.
    """

    def __init__(self, graph: Graph):
        self.G = graph
        self._trees: dict[int, _Tree] = {}

    def _dijkstra(self, source: int) -> _Tree:
        dist: dict[int, float] = {source: 0.0}
        prev: dict[int, tuple[int, int]] = {}
        done: set[int] = set()
        # (distance, node id) keeps pops deterministic on ties
        heap: list[tuple[float, int]] = [(0.0, source)]
        while heap:
            d, u = heapq.heappop(heap)
            if u in done:
                continue
            done.add(u)
            for v, route in self.G.neighbours(u):
                if v in done:
                    continue
                alt = d + route.distance
                if alt < dist.get(v, math.inf):
                    dist[v] = alt
                    prev[v] = (u, route.id)
                    heapq.heappush(heap, (alt, v))
        return _Tree(dist, prev)

    def tree(self, source: int) -> _Tree:
        t = self._trees.get(source)
        if t is None:
            t = self._trees[source] = self._dijkstra(source)
        return t

    def path(self, source: int, target: int) -> ShortestPath | None:
        if source == target:
            return ShortestPath((source,), 0.0)
        t = self.tree(source)
        if target not in t.dist:
            return None
        nodes, rids = [target], []
        cur = target
        while cur != source:
            cur, rid = t.prev[cur]
            nodes.append(cur)
            rids.append(rid)
        nodes.reverse()
        rids.reverse()
        return ShortestPath(tuple(nodes), t.dist[target], tuple(rids))


def shortest_path(graph: Graph, source: int, target: int) -> ShortestPath | None:
    """One-off lookup; ``None`` when ``target`` is unreachable from ``source``."""
    if source == target:
        return ShortestPath((source,), 0.0)
    return ShortestPaths(graph).path(source, target)
