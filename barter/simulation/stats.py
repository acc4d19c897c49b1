"""
Streaming statistics over simulation outcomes.

StatsAccumulator keeps min, max, mean and variance in a single pass
using Welford's update, so no observations are retained. Two
accumulators can be merged, which lets parallel workers summarize their
own runs independently.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, asdict
from typing import Any, Iterable, Optional


@dataclass
class Stats:
    """Summary of an accumulator. All fields are None when it is empty."""
    count: int = 0
    min: Optional[float] = None
    max: Optional[float] = None
    mean: Optional[float] = None
    var: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StatsAccumulator:
    """
    Online min/max/mean/population-variance.

    An empty accumulator reports min=inf, max=-inf and NaN for mean and
    variance; summary() turns those into None.
    """

    def __init__(self):
        self.count = 0
        self._mean = 0.0
        self._m2 = 0.0
        self._min = math.inf
        self._max = -math.inf

    @classmethod
    def from_values(cls, values: Iterable[float]) -> StatsAccumulator:
        acc = cls()
        for value in values:
            acc.add(value)
        return acc

    def add(self, value: float) -> None:
        value = float(value)
        self.count += 1
        delta = value - self._mean
        self._mean += delta / self.count
        self._m2 += delta * (value - self._mean)
        if value < self._min:
            self._min = value
        if value > self._max:
            self._max = value

    def merge(self, other: StatsAccumulator) -> StatsAccumulator:
        """Fold another accumulator into this one (Chan et al.). Returns self."""
        if other.count == 0:
            return self
        if self.count == 0:
            self.count = other.count
            self._mean = other._mean
            self._m2 = other._m2
            self._min = other._min
            self._max = other._max
            return self

        total = self.count + other.count
        delta = other._mean - self._mean
        self._mean += delta * other.count / total
        self._m2 += other._m2 + delta * delta * self.count * other.count / total
        self.count = total
        self._min = min(self._min, other._min)
        self._max = max(self._max, other._max)
        return self

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def mean(self) -> float:
        return self._mean if self.count else math.nan

    @property
    def var(self) -> float:
        """Population variance."""
        return self._m2 / self.count if self.count else math.nan

    @property
    def sample_var(self) -> float:
        return self._m2 / (self.count - 1) if self.count > 1 else math.nan

    def summary(self) -> Stats:
        if not self.count:
            return Stats()
        return Stats(count=self.count, min=self.min, max=self.max, mean=self.mean, var=self.var)

    def __repr__(self) -> str:
        return (
            f"StatsAccumulator(count={self.count}, min={self.min}, max={self.max}, "
            f"mean={self.mean}, var={self.var})"
        )
