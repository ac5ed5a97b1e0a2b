#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Classification metrics for the grid cells.

Implemented directly on numpy arrays of label codes (NEG=0, POS=1):
- Confusion matrix
- Accuracy
- Positive-prediction rate

The decision rule that turns probabilities into labels also lives here so the
0.5 threshold (ties go to NEG) is defined in exactly one place.
"""

import numpy as np
from typing import List, Optional


def confusion_matrix(
    y_true: np.ndarray, y_pred: np.ndarray, labels: Optional[List] = None
) -> np.ndarray:
    """
    Compute confusion matrix.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels
        labels: Labels indexing the rows/columns (default: [0, 1])

    Returns:
        Confusion matrix as 2D numpy array, rows = true, columns = predicted
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    if labels is None:
        labels = [0, 1]

    label_to_idx = {label: i for i, label in enumerate(labels)}
    cm = np.zeros((len(labels), len(labels)), dtype=int)

    for true_label, pred_label in zip(y_true, y_pred):
        cm[label_to_idx[int(true_label)], label_to_idx[int(pred_label)]] += 1

    return cm


def accuracy_score(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Compute accuracy score.

    Args:
        y_true: Ground truth labels
        y_pred: Predicted labels

    Returns:
        Accuracy score (0.0 to 1.0)
    """
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    if len(y_true) != len(y_pred):
        raise ValueError("y_true and y_pred must have the same length")

    if len(y_true) == 0:
        raise ValueError("accuracy is undefined for an empty test set")

    correct = np.sum(y_true == y_pred)
    return float(correct / len(y_true))


def decide(probabilities: np.ndarray, threshold: float = 0.5) -> np.ndarray:
    """POS (1) where probability > threshold, NEG (0) otherwise; ties go to NEG."""
    probabilities = np.asarray(probabilities, dtype=float)
    return (probabilities > threshold).astype(np.int64)
