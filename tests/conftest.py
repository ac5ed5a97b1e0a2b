"""Shared synthetic datasets for the review-length tests.

Factories are plain functions so tests can call them with custom arguments;
the fixtures below wrap the common cases.
"""

import numpy as np
import pytest

from review_length.core.records import Dataset, Label, Record


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def make_record(i, label, word_count, score=None, text=""):
    label = Label.parse(label)
    if score is None:
        score = 1.0 if label == Label.POS else -1.0
    return Record(id=i, text=text, label=label, word_count=word_count, sentiment_score=score)


def make_separable_dataset(n=1000):
    """n records, word counts 1..n, alternating POS/NEG, score +1 for POS and -1 for NEG."""
    return Dataset(
        make_record(i, Label.POS if i % 2 == 0 else Label.NEG, i + 1) for i in range(n)
    )


def make_noisy_dataset(n=600, seed=7, pos_share=0.5):
    """Overlapping score distributions, so accuracies land strictly between 0.5 and 1."""
    rng = np.random.default_rng(seed)
    labels = rng.random(n) < pos_share
    word_counts = rng.integers(1, 500, size=n)
    scores = np.where(labels, 0.5, -0.5) + rng.normal(0.0, 0.8, size=n)
    return Dataset(
        Record(
            id=i,
            text="",
            label=Label.POS if labels[i] else Label.NEG,
            word_count=int(word_counts[i]),
            sentiment_score=float(scores[i]),
        )
        for i in range(n)
    )


def make_one_sided_bucket_dataset(n=100):
    """n records, K=2: the short half has a single POS review, the long half alternates."""
    records = []
    for i in range(n):
        if i < n // 2:
            label = Label.POS if i == 0 else Label.NEG
        else:
            label = Label.POS if i % 2 == 0 else Label.NEG
        records.append(make_record(i, label, i + 1))
    return Dataset(records)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def separable_dataset():
    return make_separable_dataset()


@pytest.fixture
def noisy_dataset():
    return make_noisy_dataset()
