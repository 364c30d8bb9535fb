import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from edgewalk.domain.entities.labels import node_label
from edgewalk.domain.errors import InvalidInputError


# Core graph types handed to the search
@dataclass(frozen=True)
class Node:
    id: int
    x: float  # canvas units; only used to derive route distances
    y: float
    label: str = ""


@dataclass(frozen=True)
class Route:
    """Undirected weighted edge between nodes ``a`` and ``b``."""

    id: int
    a: int
    b: int
    distance: float
    points: tuple[tuple[float, float], ...] = ()  # optional polyline for drawing

    def other(self, node_id: int) -> int:
        return self.b if node_id == self.a else self.a

    def touches(self, node_id: int) -> bool:
        return node_id == self.a or node_id == self.b


@dataclass(frozen=True)
class Walk:
    nodes: tuple[int, ...]
    total_distance: float
    route_ids: tuple[int, ...] = ()  # route used for each consecutive hop

    @property
    def start(self) -> int:
        return self.nodes[0]

    @property
    def is_closed(self) -> bool:
        return self.nodes[0] == self.nodes[-1]

    def hops(self) -> list[tuple[int, int]]:
        return list(zip(self.nodes, self.nodes[1:]))

    def covers(self, graph: "Graph") -> bool:
        """True if every route of ``graph`` is walked at least once."""
        return set(self.route_ids) >= graph.routes_by_id.keys()

    def describe(self, graph: "Graph", sep: str = " → ") -> str:
        out = []
        for nid in self.nodes:
            node = graph.nodes_by_id.get(nid)
            out.append(node.label if node and node.label else str(nid))
        return sep.join(out)


def euclid(a: Node, b: Node) -> float:
    return math.hypot(b.x - a.x, b.y - a.y)


class Graph:
    """
    Read-only node/route set for a single optimization call.
    Lookups (node by id, route by id, neighbours, lightest route between two
    nodes) are indexed once here so the search never scans the route list.
    """

    def __init__(self, nodes: Iterable[Node], routes: Iterable[Route]):
        self.nodes: tuple[Node, ...] = tuple(nodes)
        self.routes: tuple[Route, ...] = tuple(routes)

        self.nodes_by_id: dict[int, Node] = {}
        for n in self.nodes:
            if n.id in self.nodes_by_id:
                raise InvalidInputError(f"duplicate node id {n.id}")
            self.nodes_by_id[n.id] = n

        self.routes_by_id: dict[int, Route] = {}
        self._adj: dict[int, list[tuple[int, Route]]] = {n.id: [] for n in self.nodes}
        self._between: dict[frozenset[int], Route] = {}
        for r in self.routes:
            if r.id in self.routes_by_id:
                raise InvalidInputError(f"duplicate route id {r.id}")
            for end in (r.a, r.b):
                if end not in self.nodes_by_id:
                    raise InvalidInputError(f"route {r.id} references unknown node {end}")
            if not math.isfinite(r.distance) or r.distance < 0:
                raise InvalidInputError(
                    f"route {r.id} distance must be finite and >= 0, got {r.distance!r}"
                )
            self.routes_by_id[r.id] = r
            self._adj[r.a].append((r.b, r))
            if r.b != r.a:
                self._adj[r.b].append((r.a, r))
            key = frozenset((r.a, r.b))
            cur = self._between.get(key)
            # parallel routes: keep the lightest, first seen on ties
            if cur is None or r.distance < cur.distance:
                self._between[key] = r

    def __len__(self) -> int:
        return len(self.routes)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self.nodes)}, routes={len(self.routes)})"

    def neighbours(self, node_id: int) -> list[tuple[int, Route]]:
        return self._adj.get(node_id, [])

    def route_between(self, u: int, v: int) -> Route | None:
        return self._between.get(frozenset((u, v)))

    # ---------------- builders -----------------------------

    @classmethod
    def from_points(
        cls,
        points: Sequence[tuple[float, float]],
        connections: Iterable[tuple[int, int]],
    ) -> "Graph":
        """
        Nodes get ids 0..n-1 and alphabetical labels in placement order;
        every connection (index pair) becomes a straight route.
        """
        nodes = [Node(i, float(x), float(y), node_label(i)) for i, (x, y) in enumerate(points)]
        routes = []
        for rid, (i, j) in enumerate(connections):
            if not (0 <= i < len(nodes) and 0 <= j < len(nodes)):
                raise InvalidInputError(f"connection {rid} references unknown point ({i}, {j})")
            a, b = nodes[i], nodes[j]
            routes.append(Route(rid, a.id, b.id, euclid(a, b), ((a.x, a.y), (b.x, b.y))))
        return cls(nodes, routes)

    def split_route(self, route_id: int, node: Node) -> "Graph":
        """
        Insert ``node`` on route ``route_id``: the route is replaced by two
        straight routes meeting at ``node``. Returns a new Graph.
        """
        if route_id not in self.routes_by_id:
            raise InvalidInputError(f"unknown route {route_id}")
        if node.id in self.nodes_by_id:
            raise InvalidInputError(f"node id {node.id} already in graph")
        old = self.routes_by_id[route_id]
        a, b = self.nodes_by_id[old.a], self.nodes_by_id[old.b]
        next_id = max(self.routes_by_id) + 1
        first = Route(next_id, a.id, node.id, euclid(a, node), ((a.x, a.y), (node.x, node.y)))
        second = Route(
            next_id + 1, node.id, b.id, euclid(node, b), ((node.x, node.y), (b.x, b.y))
        )
        routes = [r for r in self.routes if r.id != route_id] + [first, second]
        return Graph([*self.nodes, node], routes)
