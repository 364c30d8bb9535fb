# sim/hooks.py
from typing import Protocol

from edgewalk.domain.entities.graph import Graph, Walk


class SearchHooks(Protocol):
    def search_start(self, graph: Graph, *, starts: int, orders_per_start: int): ...
    def start_done(self, start: int, *, best: float, attempts: int, rejected: int): ...
    def improved(self, walk: Walk, *, start: int, attempt: int): ...
    def search_end(self, walk: Walk | None, *, attempts: int, rejected: int, wall_ms: float): ...
    def error(self, graph: Graph | None, *, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, *_, **__):
        pass

    def start_done(self, *_, **__):
        pass

    def improved(self, *_, **__):
        pass

    def search_end(self, *_, **__):
        pass

    def error(self, *_, **__):
        pass
