# domain/errors.py


class EngineError(Exception):
    """Base class for everything the edge-coverage engine raises."""


class InvalidInputError(EngineError, ValueError):
    """Graph rejected before any search work was done."""


class NoSolutionError(EngineError, RuntimeError):
    """Every (start node, edge order) attempt failed to close a walk."""

    def __init__(self, msg: str, *, attempts: int = 0):
        super().__init__(msg)
        self.attempts = attempts
