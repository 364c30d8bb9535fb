# sim/rng.py
from __future__ import annotations

from dataclasses import dataclass
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _tag(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


@dataclass(frozen=True)
class StreamKey:
    """Stream name plus optional sub-keys (ints or strings), normalised to u32."""

    name: str
    parts: tuple[int, ...]

    @classmethod
    def of(cls, name: str, *parts: object) -> StreamKey:
        norm = [_tag(name)]
        for p in parts:
            if isinstance(p, (int, np.integer)):
                norm.append(_u32(int(p)))
            else:
                norm.append(_tag(p if isinstance(p, str) else repr(p)))
        return cls(name=name, parts=tuple(norm))


class RNGRegistry:
    """
    Named numpy Generators derived from one master seed.
    Entropy path: [master_seed, scenario tag, worker, *key.parts], so a named
    stream always starts from the same draw, whatever else was drawn before.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0, worker: int = 0):
        self.master_seed = _u32(master_seed)
        self.scenario_tag = _tag(str(scenario))
        self.worker = _u32(worker)

    def _make(self, key: StreamKey) -> np.random.Generator:
        ss = np.random.SeedSequence(
            entropy=[self.master_seed, self.scenario_tag, self.worker, *key.parts]
        )
        return np.random.Generator(np.random.PCG64(ss))

    def fresh(self, name: str, *parts: object) -> np.random.Generator:
        """New Generator for ``name`` (and sub-keys), positioned at its first draw."""
        return self._make(StreamKey.of(name, *parts))
