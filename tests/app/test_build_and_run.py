import io
import json
import logging
import math

import pytest

from edgewalk.app.build import build
from edgewalk.domain.errors import InvalidInputError, NoSolutionError
from edgewalk.io.graph_io import graph_from_mapping, load_graph, load_scenario, walk_to_mapping
from edgewalk.io.search_logging import JsonFormatter
from edgewalk.sim.hooks import NoopHooks

TRIANGLE = {
    "nodes": [
        {"id": 0, "x": 0, "y": 0, "label": "a"},
        {"id": 1, "x": 10, "y": 0, "label": "b"},
        {"id": 2, "x": 10, "y": 10, "label": "c"},
    ],
    "routes": [
        {"id": 0, "startNodeId": 0, "endNodeId": 1},
        {"id": 1, "startNodeId": 1, "endNodeId": 2},
        {"id": 2, "startNodeId": 0, "endNodeId": 2},
    ],
}


def _logger(name: str) -> tuple[logging.Logger, io.StringIO]:
    buf = io.StringIO()
    log = logging.getLogger(name)
    log.handlers.clear()
    h = logging.StreamHandler(buf)
    h.setFormatter(JsonFormatter())
    log.addHandler(h)
    log.setLevel(logging.DEBUG)
    log.propagate = False
    return log, buf


def test_build_and_solve_triangle():
    log, buf = _logger("edgewalk.test.build")
    app = build({"name": "tri", "run_id": "r1", "graph": TRIANGLE}, logger=log)
    w = app.solve()
    assert w.total_distance == pytest.approx(20 + 10 * math.sqrt(2))
    assert w.is_closed and w.covers(app.graph)

    (summary,) = app.summaries.records
    assert summary.solved and summary.run_id == "r1"
    assert summary.routes == 3 and summary.nodes == 3
    assert summary.attempts == 3 * 6
    assert summary.total_distance == w.total_distance

    lines = [json.loads(x) for x in buf.getvalue().splitlines()]
    assert [x["msg"] for x in lines] == ["search_start", "search_end"]
    assert lines[0]["orders_per_start"] == 6
    assert lines[1]["solved"] is True and lines[1]["run_id"] == "r1"


def test_debug_logging_reports_each_start():
    log, buf = _logger("edgewalk.test.debug")
    app = build({"log": {"level": "DEBUG", "debug": True}, "graph": TRIANGLE}, logger=log)
    app.solve()
    msgs = [json.loads(x)["msg"] for x in buf.getvalue().splitlines()]
    assert msgs.count("start_done") == 3
    assert msgs.count("improved") >= 1


def test_solve_is_repeatable_in_sampled_regime():
    pts = [(0, 0), (4, 0), (8, 0), (8, 4), (4, 4), (0, 4), (4, 8)]
    pairs = [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0), (1, 4), (4, 6), (6, 3), (6, 5)]
    doc = {
        "optimizer": {"seed": 11},
        "graph": {
            "nodes": [{"id": i, "x": x, "y": y} for i, (x, y) in enumerate(pts)],
            "routes": [{"id": k, "a": a, "b": b} for k, (a, b) in enumerate(pairs)],
        },
    }
    app = build(doc, use_logging=False)
    assert isinstance(app.hooks, NoopHooks)
    first, second = app.solve(), app.solve()
    assert first.total_distance == second.total_distance
    assert first.covers(app.graph)
    again = build(doc, use_logging=False).solve()
    assert again.total_distance == first.total_distance


def test_failures_surface_as_distinct_errors():
    log, buf = _logger("edgewalk.test.errors")
    disjoint = {
        "graph": {
            "nodes": [{"id": i, "x": i, "y": 0} for i in range(4)],
            "routes": [{"id": 0, "a": 0, "b": 1}, {"id": 1, "a": 2, "b": 3}],
        }
    }
    app = build(disjoint, logger=log)
    with pytest.raises(NoSolutionError):
        app.solve()
    assert not app.summaries.records[0].solved
    levels = {json.loads(x)["msg"]: json.loads(x)["level"] for x in buf.getvalue().splitlines()}
    assert levels["no_solution"] == "WARNING"

    empty = build({"graph": {"nodes": [{"id": 0}]}}, logger=log)
    with pytest.raises(InvalidInputError):
        empty.solve()

    with pytest.raises(InvalidInputError):
        build({"graph": {"nodes": [{"id": 0}], "routes": [{"id": 0, "a": 0, "b": 5}]}})


def test_graph_files_round_trip_through_loader(tmp_path):
    p = tmp_path / "tri.json"
    p.write_text(json.dumps(TRIANGLE))
    g = load_graph(p)
    assert len(g.routes) == 3
    scenario = load_scenario(p)
    assert scenario.graph.to_graph().routes_by_id[2].distance == pytest.approx(10 * math.sqrt(2))

    app = build(scenario, use_logging=False)
    out = walk_to_mapping(app.graph, app.solve())
    assert out["nodeOrder"][0] == out["nodeOrder"][-1]
    assert sorted(out["routeSegments"]) == [0, 1, 2]
    assert out["labels"][0] in {"a", "b", "c"}


def test_walk_description_uses_labels():
    g = graph_from_mapping(TRIANGLE)
    app = build({"graph": TRIANGLE}, use_logging=False)
    w = app.solve()
    text = w.describe(g)
    assert text.count("→") == len(w.nodes) - 1
    assert text.split(" → ")[0] == text.split(" → ")[-1]


def test_bad_documents_are_reported_as_invalid_input(tmp_path, capsys):
    from main import run

    doc = {
        "nodes": [{"id": 0, "x": 0, "y": 0}, {"id": 1, "x": 1, "y": 0}],
        "routes": [{"id": 0, "a": 0, "b": 1, "distance": -1}],
    }
    with pytest.raises(InvalidInputError):
        build({"graph": doc})
    with pytest.raises(InvalidInputError):
        graph_from_mapping(doc)

    p = tmp_path / "neg.json"
    p.write_text(json.dumps(doc))
    with pytest.raises(InvalidInputError):
        load_scenario(p)
    assert run(str(p)) == 1
    out = json.loads(capsys.readouterr().out)
    assert out["error"] == "InvalidInputError"


def test_loader_rereads_a_rewritten_file(tmp_path):
    p = tmp_path / "g.json"
    p.write_text(json.dumps(TRIANGLE))
    assert len(load_graph(p).routes) == 3

    two = {"nodes": TRIANGLE["nodes"], "routes": TRIANGLE["routes"][:2]}
    p.write_text(json.dumps(two))
    assert len(load_graph(p).routes) == 2
    assert len(load_scenario(p).graph.routes) == 2
