#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Stratified Resampling Experiment

For every review-length bucket and every sample-size step this draws a sample,
fits the classifier and records the test accuracy together with the sample's
class balance. The result is a K x K grid of ResultRows.

Features:
- Quantile buckets computed once per run
- Per-cell seeds derived from (seed, bucket, step), so runs are reproducible
  and the cell order (or a thread pool) does not change the numbers
- Pre-sized result grid, each slot written exactly once
- Optional relaxation: failed cells recorded as NaN instead of aborting
"""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

import numpy as np

from ..config import ExperimentConfig
from ..core.errors import ExperimentError
from ..core.records import Dataset, label_balance
from ..core.seeding import SAMPLE_STREAM, SPLIT_STREAM, cell_rng, cell_seed
from .partition import QuantilePartitioner
from .sampling import SampleScheduler
from .trainer import CellTrainer

NOT_STARTED = "not_started"
RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"

RESULT_COLUMNS = ["bucket_index", "size_step", "accuracy", "label_balance"]


@dataclass(frozen=True)
class ResultRow:
    bucket_index: int
    size_step: int
    accuracy: float
    label_balance: float
    sample_size: int = 0
    n_train: int = 0
    n_test: int = 0
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict:
        return asdict(self)


class StratifiedResamplingExperiment:
    """
    K x K grid of (length bucket, sample size) accuracy measurements.

    Usage:
        exp = StratifiedResamplingExperiment(ExperimentConfig(k=5, mode="micro_balanced"))
        rows = exp.run(dataset)
    """

    def __init__(self, config: Optional[ExperimentConfig] = None, verbose: bool = False):
        self.config = (config or ExperimentConfig()).validate()
        self.verbose = verbose
        self.state = NOT_STARTED
        self.partitioner: Optional[QuantilePartitioner] = None
        self.scheduler: Optional[SampleScheduler] = None
        self.trainer = CellTrainer(
            model=self.config.model,
            test_size=self.config.test_size,
            stratify=self.config.stratify_split,
            model_params=self.config.trainer_params(),
        )
        self._grid: List[List[Optional[ResultRow]]] = []

    def _log(self, msg: str):
        if self.verbose:
            print(msg)

    def prepare(self, dataset: Dataset) -> SampleScheduler:
        """Fit the buckets and the sample-size schedule; no grid work yet."""
        cfg = self.config
        self.partitioner = QuantilePartitioner(k=cfg.k).fit(dataset)
        self.scheduler = SampleScheduler(dataset, self.partitioner, mode=cfg.mode)
        self._log(f"[info] buckets (k={cfg.k}): boundaries={np.round(self.partitioner.boundaries_, 2).tolist()}")
        self._log(f"[info] mode={cfg.mode} min_count={self.scheduler.min_count} sizes={self.scheduler.sample_sizes()}")
        return self.scheduler

    def run_cell(self, bucket: int, step: int) -> ResultRow:
        """Draw, fit and score one (bucket, step) cell."""
        if self.scheduler is None:
            raise RuntimeError("call prepare(dataset) before running cells")
        cfg = self.config
        sample = None
        try:
            sample = self.scheduler.draw(bucket, step, cell_rng(cfg.seed, bucket, step, SAMPLE_STREAM))
            balance = label_balance(sample)
            result = self.trainer.evaluate(sample, cell_seed(cfg.seed, bucket, step, SPLIT_STREAM))
        except ExperimentError as e:
            if cfg.on_cell_error == "raise":
                raise
            self._log(f"[warn] cell (bucket={bucket}, step={step}) failed: {e}")
            return ResultRow(
                bucket_index=bucket,
                size_step=step,
                accuracy=math.nan,
                label_balance=label_balance(sample) if sample is not None else math.nan,
                sample_size=len(sample) if sample is not None else 0,
                error=str(e),
            )
        self._log(
            f"[cell] bucket={bucket} step={step} n={len(sample)} "
            f"acc={result.accuracy:.4f} balance={balance:.3f}"
        )
        return ResultRow(
            bucket_index=bucket,
            size_step=step,
            accuracy=result.accuracy,
            label_balance=balance,
            sample_size=len(sample),
            n_train=result.n_train,
            n_test=result.n_test,
        )

    def _fill(self, bucket: int, step: int):
        self._grid[bucket - 1][step - 1] = self.run_cell(bucket, step)

    def run(self, dataset: Dataset) -> List[ResultRow]:
        """Run the full grid; returns K*K rows ordered by (bucket_index, size_step)."""
        cfg = self.config
        self._log("=" * 60)
        self._log(f"Stratified resampling: k={cfg.k}, mode={cfg.mode}, model={cfg.model}")
        self._log("=" * 60)

        self.state = RUNNING
        try:
            self.prepare(dataset)
            k = cfg.k
            self._grid = [[None] * k for _ in range(k)]
            cells = [(b, s) for b in range(1, k + 1) for s in range(1, k + 1)]
            if cfg.n_jobs > 1:
                with ThreadPoolExecutor(max_workers=cfg.n_jobs) as pool:
                    # list() re-raises the first cell failure
                    list(pool.map(lambda cell: self._fill(*cell), cells))
            else:
                for b, s in cells:
                    self._fill(b, s)
        except Exception:
            self.state = FAILED
            raise
        self.state = COMPLETED

        rows = [row for bucket_rows in self._grid for row in bucket_rows]
        n_failed = sum(r.failed for r in rows)
        self._log(f"[info] grid completed: {len(rows)} cells, {n_failed} failed")
        return rows

    @property
    def grid(self) -> List[List[Optional[ResultRow]]]:
        return self._grid


def run_stratified_experiment(dataset: Dataset, config: Optional[ExperimentConfig] = None, verbose: bool = False) -> List[ResultRow]:
    return StratifiedResamplingExperiment(config, verbose=verbose).run(dataset)
