#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Prepare a review dataset for the length experiments:
- Clean text (HTML entities/tags, URLs -> placeholder, NFKC, whitespace)
- Map star ratings to {NEG, POS}; 3-star (neutral) reviews are dropped
- Count words and score sentiment with the VADER lexicon
- Return a Dataset, optionally saving the prepared CSV

This module provides functions to prepare the dataset programmatically.
"""
from __future__ import annotations

import html
import json
import re
import unicodedata
from pathlib import Path

import numpy as np
import pandas as pd
import regex
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from .core.errors import InvalidConfig
from .core.records import Dataset, Label

TAG_RE = re.compile(r"<[^>]+>")
URL_RE = re.compile(r"(https?://\S+|www\.\S+)")
TOKEN_RE = regex.compile(r"\b\w[\w'-]*\b")

COLUMN_ALIASES = {
    "text": ("text", "review", "review_text", "body"),
    "stars": ("stars", "rating", "star_rating"),
    "label": ("label", "sentiment"),
}


def normalize_text(text: str) -> str:
    s = str(text)
    s = html.unescape(s).replace("<br />", " ")
    s = TAG_RE.sub(" ", s)
    s = unicodedata.normalize("NFKC", s)
    s = URL_RE.sub(" <URL> ", s)
    s = "".join(ch for ch in s if ch.isprintable())
    s = re.sub(r"\s+", " ", s).strip()
    return s


def count_words(text: str) -> int:
    return len(TOKEN_RE.findall(text or ""))


def stars_to_label(stars) -> Label | None:
    """>= 4 stars is POS, <= 2 is NEG; 3 stars and missing ratings have no label."""
    if stars is None or (isinstance(stars, float) and np.isnan(stars)):
        return None
    stars = float(stars)
    if stars >= 4:
        return Label.POS
    if stars <= 2:
        return Label.NEG
    return None


class SentimentScorer:
    """Dictionary-based polarity: VADER compound score in [-1, 1]."""

    def __init__(self):
        self.analyzer = SentimentIntensityAnalyzer()

    def score(self, text: str) -> float:
        return float(self.analyzer.polarity_scores(text or "")["compound"])

    def score_many(self, texts) -> np.ndarray:
        return np.array([self.score(t) for t in texts], dtype=float)


def _parse_label(value):
    try:
        return Label.parse(value)
    except InvalidConfig:
        return None


def prepare_frame(df: pd.DataFrame, scorer: SentimentScorer | None = None) -> tuple[pd.DataFrame, dict]:
    """
    Turn a raw review table into the columns a Dataset needs.

    Args:
        df: Raw reviews with a text column and either `label` or `stars`
        scorer: Sentiment scorer (VADER by default), used only when
            `sentiment_score` is not already present

    Returns:
        (prepared frame with id,text,label,word_count,sentiment_score, metadata)
    """
    # first matching column per target; an exact target name always wins
    rename_map = {}
    for target, names in COLUMN_ALIASES.items():
        if target in df.columns:
            continue
        for c in df.columns:
            if str(c).lower() in names:
                rename_map[c] = target
                break
    df = df.rename(columns=rename_map).copy()

    if "text" not in df.columns and "word_count" not in df.columns:
        raise InvalidConfig("review table needs a text column (or precomputed word_count)")
    if "label" not in df.columns and "stars" not in df.columns:
        raise InvalidConfig("review table needs a label or stars column")

    before = len(df)
    if "text" in df.columns:
        df["text"] = df["text"].fillna("").map(normalize_text)
    else:
        df["text"] = ""

    if "label" in df.columns:
        df["label"] = df["label"].map(_parse_label)
    else:
        df["label"] = df["stars"].map(stars_to_label)
    n_unlabelled = int(df["label"].isna().sum())
    df = df.dropna(subset=["label"]).copy()
    df["label"] = df["label"].map(int)

    if "word_count" not in df.columns:
        df["word_count"] = df["text"].map(count_words)
    df["word_count"] = df["word_count"].astype(int)

    if "sentiment_score" not in df.columns:
        scorer = scorer or SentimentScorer()
        df["sentiment_score"] = scorer.score_many(df["text"].tolist())
    df["sentiment_score"] = df["sentiment_score"].astype(float)

    if "id" not in df.columns:
        df["id"] = np.arange(len(df))

    out = df[["id", "text", "label", "word_count", "sentiment_score"]].reset_index(drop=True)
    meta = {
        "input_rows": before,
        "dropped_unlabelled": n_unlabelled,
        "final_rows": int(len(out)),
        "class_balance": {Label(k).name: int(v) for k, v in out["label"].value_counts().items()},
    }
    return out, meta


def load_dataset(
    csv_path: str | Path,
    save_prepared: str | Path | None = None,
    scorer: SentimentScorer | None = None,
    verbose: bool = False,
) -> Dataset:
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise FileNotFoundError(f"CSV not found: {csv_path}")

    prepared, meta = prepare_frame(pd.read_csv(csv_path), scorer=scorer)
    if verbose:
        print(f"[data] rows={meta['final_rows']}, dropped={meta['dropped_unlabelled']}, balance={meta['class_balance']}")

    if save_prepared is not None:
        save_prepared = Path(save_prepared)
        save_prepared.parent.mkdir(parents=True, exist_ok=True)
        prepared.to_csv(save_prepared, index=False, encoding="utf-8")

    return Dataset.from_frame(prepared)


def main():
    """CLI: prepare a raw review CSV and save the scored table."""
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--src", required=True, help="Raw review CSV (text + stars or label)")
    parser.add_argument("--out", default="data/reviews_prepared.csv", help="Output CSV path")

    args = parser.parse_args()

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    prepared, meta = prepare_frame(pd.read_csv(args.src))
    prepared.to_csv(out, index=False, encoding="utf-8")
    meta["out"] = str(out)

    print(json.dumps(meta, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
