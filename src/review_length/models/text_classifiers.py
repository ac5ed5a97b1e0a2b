# text_classifiers.py
"""
Bag-of-words classifiers on the review text.

These are the text models compared against the sentiment-score baseline:
multinomial naive Bayes on raw counts, LASSO (L1) logistic regression and a
linear SVM on TF-IDF features. Vectorisers are fitted on the training records
only.
"""

from typing import Any, Dict, Sequence

import numpy as np
from sklearn.feature_extraction.text import CountVectorizer, TfidfVectorizer
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import MultinomialNB
from sklearn.pipeline import make_pipeline
from sklearn.svm import LinearSVC

from ..core.errors import InsufficientData
from ..core.records import Record, label_codes


def _texts(records: Sequence[Record]):
    return [r.text for r in records]


class TextClassifierEstimator:
    """Vectoriser + linear classifier wrapped behind fit(records)/predict(records)."""

    kind = "text"

    def __init__(self, **params: Dict[str, Any]):
        self.p = params
        self.model = None

    def _build(self):
        raise NotImplementedError

    def fit(self, records: Sequence[Record], y=None):
        y = label_codes(records) if y is None else np.asarray(y)
        if len(np.unique(y)) < 2:
            raise InsufficientData(
                f"cannot fit {self.kind} on {len(y)} records of a single class"
            )
        self.model = self._build()
        self.model.fit(_texts(records), y)
        return self

    def predict(self, records: Sequence[Record]) -> np.ndarray:
        if self.model is None:
            raise RuntimeError("estimator is not fitted")
        return np.asarray(self.model.predict(_texts(records)), dtype=np.int64)


class NaiveBayesEstimator(TextClassifierEstimator):
    kind = "naive_bayes"

    def _build(self):
        return make_pipeline(
            CountVectorizer(
                ngram_range=self.p.get("ngram", (1, 1)),
                min_df=self.p.get("min_df", 1),
                lowercase=True,
            ),
            MultinomialNB(alpha=self.p.get("alpha", 1.0)),
        )


class LassoEstimator(TextClassifierEstimator):
    kind = "lasso"

    def _build(self):
        return make_pipeline(
            TfidfVectorizer(
                max_features=self.p.get("tfidf_max_features", 20000),
                ngram_range=self.p.get("ngram", (1, 1)),
                lowercase=True,
            ),
            LogisticRegression(
                l1_ratio=1.0,
                C=self.p.get("C", 1.0),
                solver="liblinear",
                max_iter=self.p.get("max_iter", 500),
            ),
        )


class LinearSVMEstimator(TextClassifierEstimator):
    kind = "svm"

    def _build(self):
        return make_pipeline(
            TfidfVectorizer(
                max_features=self.p.get("tfidf_max_features", 20000),
                ngram_range=self.p.get("ngram", (1, 2)),
                lowercase=True,
            ),
            LinearSVC(C=self.p.get("C", 1.0), max_iter=self.p.get("max_iter", 2000)),
        )


def create_nb_factory():
    def factory(params: Dict[str, Any]):
        return NaiveBayesEstimator(**params)

    return factory


def create_lasso_factory():
    def factory(params: Dict[str, Any]):
        return LassoEstimator(**params)

    return factory


def create_svm_factory():
    def factory(params: Dict[str, Any]):
        return LinearSVMEstimator(**params)

    return factory
