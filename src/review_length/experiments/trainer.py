#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Classifier Trainer/Evaluator for a single grid cell.

Splits a drawn sample 75/25 into train/test, fits the configured model on the
training part and reports test accuracy. The split RNG is seeded per cell, so
it never depends on how many draws happened before it.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import numpy as np
from sklearn.model_selection import train_test_split

from ..core.errors import InsufficientData
from ..core.metrics import accuracy_score, confusion_matrix
from ..core.records import Record, label_codes
from ..models.models_registry import get_factory_and_params


@dataclass(frozen=True)
class CellEvaluation:
    accuracy: float
    n_train: int
    n_test: int
    confusion: np.ndarray


class CellTrainer:
    """
    Fit-and-score one sample.

    Args:
        model: registry name of the estimator ("logreg" is label ~ sentiment_score)
        test_size: fraction of the sample held out for testing
        stratify: stratify the split by label instead of splitting uniformly at random
        model_params: overrides for the model's default hyperparameters
    """

    def __init__(
        self,
        model: str = "logreg",
        test_size: float = 0.25,
        stratify: bool = False,
        model_params: Optional[Dict[str, Any]] = None,
    ):
        self.model = model
        self.test_size = test_size
        self.stratify = stratify
        self.factory, self.params = get_factory_and_params(model, **(model_params or {}))

    def split(self, sample: Sequence[Record], seed: int):
        y = label_codes(sample)
        counts = np.bincount(y, minlength=2)
        if counts.min() < 2:
            raise InsufficientData(
                f"sample of {len(sample)} records has {counts[1]} POS / {counts[0]} NEG; "
                "need at least 2 of each label"
            )
        try:
            train, test = train_test_split(
                list(sample),
                test_size=self.test_size,
                random_state=seed,
                stratify=y if self.stratify else None,
            )
        except ValueError as e:
            # sklearn refuses splits that leave a partition empty or too small to stratify
            raise InsufficientData(f"cannot split sample of {len(sample)} records: {e}") from e

        for name, part in (("train", train), ("test", test)):
            part_y = label_codes(part)
            if len(part_y) == 0 or len(np.unique(part_y)) < 2:
                raise InsufficientData(
                    f"{name} partition of a {len(sample)}-record sample is "
                    f"{'empty' if len(part_y) == 0 else 'single-class'}"
                )
        return train, test

    def evaluate(self, sample: Sequence[Record], seed: int) -> CellEvaluation:
        train, test = self.split(sample, seed)
        est = self.factory(self.params)
        est.fit(train)
        y_test = label_codes(test)
        pred = est.predict(test)
        return CellEvaluation(
            accuracy=accuracy_score(y_test, pred),
            n_train=len(train),
            n_test=len(test),
            confusion=confusion_matrix(y_test, pred),
        )
