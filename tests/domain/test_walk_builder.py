import math

import pytest

from edgewalk.domain.entities.graph import Graph, Node, Route
from edgewalk.domain.search.walk_builder import build_walk


@pytest.fixture
def triangle() -> Graph:
    return Graph.from_points([(0, 0), (10, 0), (10, 10)], [(0, 1), (1, 2), (0, 2)])


def test_walks_edges_in_order_and_returns_home(triangle):
    r = triangle.routes_by_id
    w = build_walk(triangle, 0, [r[0], r[1], r[2]])
    assert w.nodes == (0, 1, 2, 0)
    assert w.total_distance == pytest.approx(20 + 10 * math.sqrt(2))
    assert w.route_ids == (0, 1, 2)
    assert w.covers(triangle)


def test_connects_to_nearer_endpoint():
    # path a-b-c-d, start at a, first edge to cover is c-d
    g = Graph.from_points([(0, 0), (1, 0), (2, 0), (3, 0)], [(0, 1), (1, 2), (2, 3)])
    r = g.routes_by_id
    w = build_walk(g, 0, [r[2], r[0], r[1]])
    # a->b->c to reach c-d, c->d, d->c->b to reach a-b, b->a, a->b, b->c, then c->b->a home
    assert w.nodes[:4] == (0, 1, 2, 3)
    assert w.is_closed
    assert w.covers(g)
    hops = sum(g.routes_by_id[i].distance for i in w.route_ids)
    assert hops == pytest.approx(w.total_distance)


def test_skips_routes_already_covered(triangle):
    r = triangle.routes_by_id
    once = build_walk(triangle, 0, [r[0], r[1], r[2]])
    twice = build_walk(triangle, 0, [r[0], r[0], r[1], r[2], r[1]])
    assert once == twice


def test_unreachable_route_fails_the_attempt():
    g = Graph.from_points([(0, 0), (1, 0), (5, 5), (6, 5)], [(0, 1), (2, 3)])
    r = g.routes_by_id
    assert build_walk(g, 0, [r[0], r[1]]) is None
    assert build_walk(g, 0, [r[1], r[0]]) is None


def test_cutoff_abandons_long_attempts(triangle):
    r = triangle.routes_by_id
    order = [r[0], r[1], r[2]]
    assert build_walk(triangle, 0, order, cutoff=15.0) is None
    # equal to the cutoff is not an improvement either
    full = build_walk(triangle, 0, order)
    assert build_walk(triangle, 0, order, cutoff=full.total_distance) is None
    assert build_walk(triangle, 0, order, cutoff=full.total_distance + 1) == full


def test_self_loop_adds_weight_in_place():
    g = Graph([Node(1, 0, 0), Node(2, 3, 0)], [Route(0, 1, 2, 3.0), Route(1, 2, 2, 2.0)])
    r = g.routes_by_id
    w = build_walk(g, 1, [r[0], r[1]])
    assert w.nodes == (1, 2, 2, 1)
    assert w.total_distance == pytest.approx(8.0)
    assert w.covers(g)

    # loop first: connect to it, loop, then come back over 1-2
    w = build_walk(g, 1, [r[1], r[0]])
    assert w.nodes == (1, 2, 2, 1)
    assert w.route_ids == (0, 1, 0)
