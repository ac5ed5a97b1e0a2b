# logistic_regression.py
import warnings
from typing import Any, Dict, Sequence

import numpy as np
from scipy.special import expit
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression

from ..core.errors import InsufficientData
from ..core.metrics import decide
from ..core.records import Record, label_codes


def _score_matrix(records: Sequence[Record]) -> np.ndarray:
    return np.array([[r.sentiment_score] for r in records], dtype=float)


class SentimentLogRegEstimator:
    """Binary logistic regression of the label on the sentiment score alone.

    params:
      - C:         inverse regularisation strength (default inf, i.e. unpenalised)
      - max_iter:  lbfgs iterations
      - threshold: probability above which a record is predicted POS
    """

    def __init__(self, **params: Dict[str, Any]):
        self.p = params
        self.model = None

    def fit(self, records: Sequence[Record], y=None):
        X = _score_matrix(records)
        y = label_codes(records) if y is None else np.asarray(y)
        if len(np.unique(y)) < 2:
            raise InsufficientData(
                f"cannot fit logistic regression on {len(y)} records of a single class"
            )
        cls = LogisticRegression(
            C=self.p.get("C", np.inf),
            solver="lbfgs",
            max_iter=self.p.get("max_iter", 1000),
        )
        # Separable samples never converge without a penalty; the fitted sign is what matters.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", ConvergenceWarning)
            cls.fit(X, y)
        self.model = cls
        return self

    def predict_proba(self, records: Sequence[Record]) -> np.ndarray:
        """P(POS) for each record."""
        if self.model is None:
            raise RuntimeError("estimator is not fitted")
        return expit(self.model.decision_function(_score_matrix(records)))

    def predict(self, records: Sequence[Record]) -> np.ndarray:
        return decide(self.predict_proba(records), self.p.get("threshold", 0.5))


def create_lr_factory():
    def factory(params: Dict[str, Any]):
        return SentimentLogRegEstimator(**params)

    return factory
