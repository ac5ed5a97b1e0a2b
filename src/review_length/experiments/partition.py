#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Quantile Partitioner

Splits a dataset into K review-length buckets at the empirical quantiles of
the word count. Boundaries are computed once over the whole dataset; bucket i
covers [boundary[i-1], boundary[i]) and the last bucket is closed on the
right so the longest review always lands in bucket K.
"""

from dataclasses import dataclass
from typing import Dict, List

import numpy as np
import pandas as pd

from ..core.errors import InvalidConfig
from ..core.records import Dataset, Label


def quantile_boundaries(word_counts: np.ndarray, k: int) -> np.ndarray:
    """K+1 empirical quantiles of the word counts at 0, 1/K, ..., 1."""
    if k < 2:
        raise InvalidConfig(f"number of buckets must be >= 2, got {k}")
    word_counts = np.asarray(word_counts, dtype=float)
    if word_counts.size == 0:
        raise InvalidConfig("cannot compute quantiles of an empty dataset")
    return np.quantile(word_counts, np.linspace(0.0, 1.0, k + 1))


def assign_buckets(word_counts: np.ndarray, boundaries: np.ndarray) -> np.ndarray:
    """
    1-based bucket index per word count: boundary[i] <= wc < boundary[i+1].

    A word count equal to an interior boundary goes to the upper bucket (the one
    that boundary opens), not the lower-indexed one.
    """
    k = len(boundaries) - 1
    idx = np.searchsorted(boundaries, np.asarray(word_counts, dtype=float), side="right")
    # side="right" puts the maximum past the last boundary; it belongs to bucket K.
    return np.clip(idx, 1, k).astype(np.int64)


@dataclass(frozen=True)
class QuantileBucket:
    index: int
    lo: float
    hi: float
    closed_right: bool
    n_total: int
    n_pos: int
    n_neg: int

    def label_count(self, label: Label) -> int:
        return self.n_pos if label == Label.POS else self.n_neg


class QuantilePartitioner:
    """
    Assign every record of a dataset to one of K length buckets.

    Call fit() once per run; afterwards the bucket assignment, the member
    indices of each bucket (and of each bucket/label pool) are read-only.
    """

    def __init__(self, k: int = 5):
        self.k = k
        self.boundaries_ = None
        self.assignment_ = None
        self.buckets_: List[QuantileBucket] = []
        self._members: Dict[int, np.ndarray] = {}
        self._label_members: Dict[tuple, np.ndarray] = {}

    def fit(self, dataset: Dataset) -> "QuantilePartitioner":
        if self.k < 2:
            raise InvalidConfig(f"number of buckets must be >= 2, got {self.k}")
        if len(dataset) == 0:
            raise InvalidConfig("dataset is empty")

        boundaries = quantile_boundaries(dataset.word_counts, self.k)
        assignment = assign_buckets(dataset.word_counts, boundaries)
        labels = dataset.labels

        buckets = []
        for b in range(1, self.k + 1):
            members = np.flatnonzero(assignment == b)
            members.setflags(write=False)
            self._members[b] = members
            for label in Label:
                pool = members[labels[members] == int(label)]
                pool.setflags(write=False)
                self._label_members[(b, label)] = pool
            n_pos = len(self._label_members[(b, Label.POS)])
            buckets.append(
                QuantileBucket(
                    index=b,
                    lo=float(boundaries[b - 1]),
                    hi=float(boundaries[b]),
                    closed_right=(b == self.k),
                    n_total=len(members),
                    n_pos=n_pos,
                    n_neg=len(members) - n_pos,
                )
            )

        boundaries.setflags(write=False)
        assignment.setflags(write=False)
        self.boundaries_ = boundaries
        self.assignment_ = assignment
        self.buckets_ = buckets
        return self

    def _check_fitted(self):
        if self.assignment_ is None:
            raise RuntimeError("partitioner is not fitted; call fit(dataset) first")

    def members(self, bucket: int) -> np.ndarray:
        """Dataset indices of the records in a bucket (1-based)."""
        self._check_fitted()
        return self._members[bucket]

    def label_members(self, bucket: int, label: Label) -> np.ndarray:
        self._check_fitted()
        return self._label_members[(bucket, Label(label))]

    def summary(self) -> pd.DataFrame:
        """One row per bucket: bounds and population by label."""
        self._check_fitted()
        return pd.DataFrame(
            [
                {
                    "bucket_index": b.index,
                    "lo": b.lo,
                    "hi": b.hi,
                    "closed_right": b.closed_right,
                    "n_total": b.n_total,
                    "n_pos": b.n_pos,
                    "n_neg": b.n_neg,
                }
                for b in self.buckets_
            ]
        )
