#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Sample-Size Scheduler

Decides how many reviews each grid cell gets and draws them.

Two modes:
- "uniform" (Experiment 1): sizes are bounded by the smallest bucket and each
  sample is drawn from the bucket regardless of label, so the class balance of
  a sample follows the bucket's own balance.
- "micro_balanced" (Experiment 2): sizes are bounded by twice the smallest
  per-bucket label count and each sample is half POS, half NEG.

Every draw is without replacement inside one sample; separate cells draw
independently, so the same review may appear in several samples.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from ..config import MICRO_BALANCED, MODES, UNIFORM
from ..core.errors import InsufficientData, InvalidConfig, SamplingExhausted
from ..core.records import Dataset, Label, Record
from .partition import QuantilePartitioner


@dataclass(frozen=True)
class SampleSpec:
    bucket_index: int
    size_step: int
    size: int
    k: int

    @property
    def size_fraction(self) -> float:
        return self.size_step / self.k


class SampleScheduler:
    def __init__(self, dataset: Dataset, partitioner: QuantilePartitioner, mode: str = UNIFORM):
        if mode not in MODES:
            raise InvalidConfig(f"unknown sampling mode: {mode!r} (choose from {MODES})")
        if partitioner.assignment_ is None:
            partitioner.fit(dataset)
        self.dataset = dataset
        self.partitioner = partitioner
        self.mode = mode
        self.k = partitioner.k

        buckets = partitioner.buckets_
        if mode == MICRO_BALANCED:
            for b in buckets:
                for label in Label:
                    if b.label_count(label) < 2:
                        raise InsufficientData(
                            f"bucket {b.index} has {b.label_count(label)} {label.name} "
                            f"records; micro-balancing needs at least 2 of each label"
                        )
            self.min_label_count = min(min(b.n_pos, b.n_neg) for b in buckets)
            self.min_count = 2 * self.min_label_count
        else:
            self.min_label_count = None
            self.min_count = min(b.n_total for b in buckets)

    def sample_sizes(self) -> List[int]:
        """K evenly spaced sizes, step * min_count / K for step = 1..K."""
        if self.mode == MICRO_BALANCED:
            return [2 * ((step * self.min_label_count) // self.k) for step in range(1, self.k + 1)]
        return [(step * self.min_count) // self.k for step in range(1, self.k + 1)]

    def specs(self) -> List[SampleSpec]:
        sizes = self.sample_sizes()
        return [
            SampleSpec(bucket_index=b, size_step=step, size=sizes[step - 1], k=self.k)
            for b in range(1, self.k + 1)
            for step in range(1, self.k + 1)
        ]

    def spec(self, bucket: int, step: int) -> SampleSpec:
        if not (1 <= bucket <= self.k and 1 <= step <= self.k):
            raise InvalidConfig(f"cell ({bucket}, {step}) is outside the {self.k}x{self.k} grid")
        return SampleSpec(
            bucket_index=bucket, size_step=step, size=self.sample_sizes()[step - 1], k=self.k
        )

    def _choose(self, pool: np.ndarray, n: int, rng: np.random.Generator, bucket: int, label=None) -> np.ndarray:
        if n > len(pool):
            raise SamplingExhausted(bucket, n, len(pool), label=label)
        return rng.choice(pool, size=n, replace=False)

    def draw_size(self, bucket: int, size: int, rng: np.random.Generator) -> List[Record]:
        """Draw `size` records from a bucket following the scheduler's mode."""
        if self.mode == MICRO_BALANCED:
            n_pos = size // 2
            n_neg = size - n_pos
            pos = self._choose(self.partitioner.label_members(bucket, Label.POS), n_pos, rng, bucket, "POS")
            neg = self._choose(self.partitioner.label_members(bucket, Label.NEG), n_neg, rng, bucket, "NEG")
            idx = np.concatenate([pos, neg])
        else:
            idx = self._choose(self.partitioner.members(bucket), size, rng, bucket)
        return self.dataset.take(idx)

    def draw(self, bucket: int, step: int, rng: np.random.Generator) -> List[Record]:
        return self.draw_size(bucket, self.spec(bucket, step).size, rng)
