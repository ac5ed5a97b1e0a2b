# records.py
"""
Record and Dataset types for the review-length experiments.

A Record is one labelled review; a Dataset is an ordered, immutable
collection of records with cached numpy views of the columns the
experiments need (word counts, label codes, sentiment scores).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

import numpy as np
import pandas as pd

from .errors import InvalidConfig


class Label(enum.IntEnum):
    NEG = 0
    POS = 1

    @classmethod
    def parse(cls, value) -> "Label":
        """Accept a Label, its integer code or a name such as 'pos'/'positive'."""
        if isinstance(value, Label):
            return value
        if isinstance(value, (float, np.floating)) and float(value).is_integer():
            value = int(value)
        if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
            if int(value) in (0, 1):
                return cls(int(value))
            raise InvalidConfig(f"label code must be 0 or 1, got {value}")
        key = str(value).strip().lower()
        if key in {"pos", "positive", "1"}:
            return cls.POS
        if key in {"neg", "negative", "0"}:
            return cls.NEG
        raise InvalidConfig(f"unknown label: {value!r}")


@dataclass(frozen=True)
class Record:
    id: int
    text: str
    label: Label
    word_count: int
    sentiment_score: float

    def __post_init__(self):
        if not isinstance(self.label, Label):
            object.__setattr__(self, "label", Label.parse(self.label))
        if self.word_count < 0:
            raise InvalidConfig(
                f"record {self.id}: word_count must be >= 0, got {self.word_count}"
            )


class Dataset:
    """Ordered, read-only collection of records."""

    def __init__(self, records: Iterable[Record]):
        self._records = tuple(records)
        self._word_counts = np.array(
            [r.word_count for r in self._records], dtype=np.int64
        )
        self._labels = np.array([int(r.label) for r in self._records], dtype=np.int64)
        self._scores = np.array(
            [r.sentiment_score for r in self._records], dtype=float
        )
        for arr in (self._word_counts, self._labels, self._scores):
            arr.setflags(write=False)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records)

    def __getitem__(self, idx):
        return self._records[idx]

    def __repr__(self) -> str:
        n_pos = int(self._labels.sum())
        return f"Dataset(n={len(self)}, pos={n_pos}, neg={len(self) - n_pos})"

    @property
    def records(self) -> tuple:
        return self._records

    @property
    def word_counts(self) -> np.ndarray:
        return self._word_counts

    @property
    def labels(self) -> np.ndarray:
        return self._labels

    @property
    def scores(self) -> np.ndarray:
        return self._scores

    def take(self, indices: Sequence[int]) -> List[Record]:
        return [self._records[int(i)] for i in indices]

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "id": [r.id for r in self._records],
                "text": [r.text for r in self._records],
                "label": self._labels,
                "word_count": self._word_counts,
                "sentiment_score": self._scores,
            }
        )

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "Dataset":
        """Build a Dataset from columns label, word_count, sentiment_score (+ id, text)."""
        missing = {"label", "word_count", "sentiment_score"} - set(df.columns)
        if missing:
            raise InvalidConfig(f"dataset frame is missing columns: {sorted(missing)}")
        ids = df["id"].tolist() if "id" in df.columns else list(range(len(df)))
        texts = df["text"].astype(str).tolist() if "text" in df.columns else [""] * len(df)
        return cls(
            Record(
                id=int(i),
                text=t,
                label=Label.parse(lab),
                word_count=int(wc),
                sentiment_score=float(s),
            )
            for i, t, lab, wc, s in zip(
                ids, texts, df["label"], df["word_count"], df["sentiment_score"]
            )
        )


def label_codes(records: Sequence[Record]) -> np.ndarray:
    return np.array([int(r.label) for r in records], dtype=np.int64)


def label_balance(records: Sequence[Record]) -> float:
    """Fraction of POS records in a sample."""
    if len(records) == 0:
        return float("nan")
    return float(label_codes(records).sum() / len(records))
