# main.py
import json
import sys

from edgewalk.app.build import build
from edgewalk.domain.errors import EngineError
from edgewalk.io.graph_io import load_scenario, walk_to_mapping


def run(path: str) -> int:
    try:
        app = build(load_scenario(path))
        walk = app.solve()
    except EngineError as exc:
        print(json.dumps({"error": type(exc).__name__, "detail": str(exc)}))
        return 1
    out = walk_to_mapping(app.graph, walk)
    out["path"] = walk.describe(app.graph)
    print(json.dumps(out))
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print("usage: python main.py scenario.json", file=sys.stderr)
        sys.exit(2)
    sys.exit(run(sys.argv[1]))
