# Model implementations for the review-length experiments

from .logistic_regression import SentimentLogRegEstimator, create_lr_factory
from .text_classifiers import (
    NaiveBayesEstimator,
    LassoEstimator,
    LinearSVMEstimator,
    create_nb_factory,
    create_lasso_factory,
    create_svm_factory,
)
from .models_registry import MODEL_DEFAULTS, get_factory_and_params, resolve_model_name

__all__ = [
    "SentimentLogRegEstimator",
    "create_lr_factory",
    "NaiveBayesEstimator",
    "LassoEstimator",
    "LinearSVMEstimator",
    "create_nb_factory",
    "create_lasso_factory",
    "create_svm_factory",
    "MODEL_DEFAULTS",
    "get_factory_and_params",
    "resolve_model_name",
]
