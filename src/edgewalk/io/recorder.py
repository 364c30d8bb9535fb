# io/recorder.py
import json
import sys
from dataclasses import asdict, dataclass
from typing import Protocol


@dataclass(frozen=True)
class SearchSummary:
    run_id: str
    routes: int
    nodes: int
    attempts: int
    rejected: int
    wall_ms: float
    solved: bool
    total_distance: float | None = None
    walk: tuple[int, ...] = ()


class Sink(Protocol):
    def write(self, rec) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, rec) -> None:
        self.fp.write(json.dumps(asdict(rec)) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list = []

    def write(self, rec) -> None:
        self.records.append(rec)


class Recorder:
    def __init__(self, *sinks: Sink):
        self.sinks = sinks or (JsonlSink(),)

    def emit(self, rec) -> None:
        for s in self.sinks:
            s.write(rec)
