# models_registry.py
from typing import Any, Callable, Dict, Tuple

from ..core.errors import InvalidConfig
from .logistic_regression import create_lr_factory
from .text_classifiers import create_lasso_factory, create_nb_factory, create_svm_factory

# Default hyperparameters per model; CLI / config overrides are merged on top.
MODEL_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "logreg": {"C": float("inf"), "max_iter": 1000, "threshold": 0.5},
    "naive_bayes": {"alpha": 1.0, "ngram": (1, 1), "min_df": 1},
    "lasso": {"C": 1.0, "max_iter": 500, "tfidf_max_features": 20000, "ngram": (1, 1)},
    "svm": {"C": 1.0, "max_iter": 2000, "tfidf_max_features": 20000, "ngram": (1, 2)},
}

_ALIASES = {
    "lr": "logreg",
    "logistic": "logreg",
    "nb": "naive_bayes",
    "bayes": "naive_bayes",
    "l1": "lasso",
    "linear_svm": "svm",
}

_FACTORIES = {
    "logreg": create_lr_factory,
    "naive_bayes": create_nb_factory,
    "lasso": create_lasso_factory,
    "svm": create_svm_factory,
}


def resolve_model_name(model: str) -> str:
    name = model.lower()
    name = _ALIASES.get(name, name)
    if name not in _FACTORIES:
        raise InvalidConfig(
            f"Unknown model: {model} (choose from {sorted(_FACTORIES)})"
        )
    return name


def get_factory_and_params(model: str, **overrides) -> Tuple[Callable, Dict[str, Any]]:
    """
    Return (factory, params). factory: params(dict) -> estimator with
    fit(records) / predict(records).
    """
    name = resolve_model_name(model)
    params = {**MODEL_DEFAULTS[name], **overrides}
    return _FACTORIES[name](), params
