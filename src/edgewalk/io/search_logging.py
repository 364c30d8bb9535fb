# io/search_logging.py
import json
import logging
import math
import sys

from edgewalk.domain.entities.graph import Graph, Walk
from edgewalk.io.recorder import Recorder, SearchSummary
from edgewalk.sim.hooks import NoopHooks


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload)


def default_json_logger(name="edgewalk", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _num(x: float) -> float | None:
    # json.dumps writes inf as a bare Infinity token
    return x if math.isfinite(x) else None


class SearchLogging(NoopHooks):
    """
    Structured logs for one optimizer run. Per-start and per-improvement
    lines are only written with ``debug=True``.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or default_json_logger(level=level)
        self._graph: Graph | None = None

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    # search lifecycle

    def search_start(self, graph: Graph, *, starts: int, orders_per_start: int):
        self._graph = graph
        self._emit(
            "INFO",
            "search_start",
            nodes=len(graph.nodes),
            routes=len(graph.routes),
            starts=starts,
            orders_per_start=orders_per_start,
        )

    def start_done(self, start: int, *, best: float, attempts: int, rejected: int):
        if self.debug:
            self._emit(
                "DEBUG",
                "start_done",
                start=start,
                best=_num(best),
                attempts=attempts,
                rejected=rejected,
            )

    def improved(self, walk: Walk, *, start: int, attempt: int):
        if self.debug:
            self._emit(
                "DEBUG", "improved", start=start, attempt=attempt, distance=walk.total_distance
            )

    def search_end(self, walk: Walk | None, *, attempts: int, rejected: int, wall_ms: float):
        self._emit(
            "INFO",
            "search_end",
            solved=walk is not None,
            distance=walk.total_distance if walk else None,
            hops=len(walk.nodes) - 1 if walk else None,
            attempts=attempts,
            rejected=rejected,
            wall_ms=round(wall_ms, 3),
        )
        if self.recorder:
            g = self._graph
            self.recorder.emit(
                SearchSummary(
                    run_id=self.run_id,
                    routes=len(g.routes) if g else 0,
                    nodes=len(g.nodes) if g else 0,
                    attempts=attempts,
                    rejected=rejected,
                    wall_ms=wall_ms,
                    solved=walk is not None,
                    total_distance=walk.total_distance if walk else None,
                    walk=walk.nodes if walk else (),
                )
            )

    def error(self, graph: Graph | None, *, reason: str, **kw):
        level = "WARNING" if reason == "no_solution" else "ERROR"
        self._emit(level, reason, **kw)
