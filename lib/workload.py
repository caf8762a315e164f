from __future__ import annotations

from typing import Iterator, NamedTuple

import numpy as np

from lib.bench_config import WorkloadConfig
from lib.bench_utils import resolve_priority_dtype


class Operation(NamedTuple):
    kind: str
    key: int
    priority: float | int


class OperationStream:
    """Seeded stream of random heap operations drawn in fixed-size blocks."""

    def __init__(self, cfg: WorkloadConfig, seed: int, block_size: int = 4096) -> None:
        cfg.validate()
        self.cfg = cfg
        self.dtype = resolve_priority_dtype(cfg.priority_dtype)
        self.bounds = cfg.priority_bounds()
        weights = cfg.weights()
        self.kinds = list(weights)
        probs = np.array(list(weights.values()), dtype=np.float64)
        self.probs = probs / probs.sum()
        self.block_size = block_size
        self._rng = np.random.default_rng(seed)

    def _draw_priorities(self, n: int) -> np.ndarray:
        lo, hi = self.bounds
        if np.issubdtype(self.dtype, np.integer):
            return self._rng.integers(lo, hi, size=n, dtype=self.dtype, endpoint=True)
        draws = self._rng.uniform(self.cfg.priority_low, self.cfg.priority_high, size=n)
        # Rounding to a narrower float can land on priority_high itself
        return np.clip(draws.astype(self.dtype), lo, hi)

    def take(self, n: int) -> Iterator[Operation]:
        remaining = n
        while remaining > 0:
            block = min(remaining, self.block_size)
            kinds = self._rng.choice(len(self.kinds), size=block, p=self.probs)
            keys = self._rng.integers(0, self.cfg.key_space, size=block)
            priorities = self._draw_priorities(block)
            for kind, key, priority in zip(kinds, keys, priorities):
                yield Operation(self.kinds[kind], int(key), priority.item())
            remaining -= block
