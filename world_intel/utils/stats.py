"""Streaming statistics.

Welford's online algorithm yields the mean and population variance in a
single pass, without keeping the samples and without the cancellation
error of the naive sum-of-squares formula. See
https://en.wikipedia.org/wiki/Algorithms_for_calculating_variance
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable


@dataclass(slots=True)
class RunningStats:
    n: int = 0
    mean: float = 0.0
    m2: float = 0.0  # sum of squared deviations from the running mean

    def update(self, value: float) -> None:
        self.n += 1
        delta = value - self.mean
        self.mean += delta / self.n
        self.m2 += delta * (value - self.mean)

    @property
    def variance(self) -> float:
        """Population variance; zero for fewer than two samples."""
        if self.n < 2:
            return 0.0
        return self.m2 / self.n

    @property
    def stddev(self) -> float:
        return math.sqrt(self.variance)

    @classmethod
    def of(cls, values: Iterable[float]) -> "RunningStats":
        stats = cls()
        for value in values:
            stats.update(value)
        return stats

__all__ = ["RunningStats"]
